import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='StoreAvailability',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('opening_time', models.CharField(default='09:00', max_length=5, validators=[django.core.validators.RegexValidator(message='Use HH:MM (24-hour) format', regex='^([01]?[0-9]|2[0-3]):[0-5][0-9]$')])),
                ('closing_time', models.CharField(default='22:00', max_length=5, validators=[django.core.validators.RegexValidator(message='Use HH:MM (24-hour) format', regex='^([01]?[0-9]|2[0-3]):[0-5][0-9]$')])),
                ('timezone', models.CharField(default='Asia/Kolkata', max_length=50)),
                ('manual_override', models.CharField(choices=[('none', 'Normal'), ('force_open', 'Force Open'), ('force_close', 'Force Close')], default='none', max_length=20)),
                ('override_reason', models.TextField(blank=True, null=True)),
                ('shop', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='availability', to='authentication.shop')),
            ],
            options={
                'verbose_name_plural': 'Store availability',
                'db_table': 'store_availability',
            },
        ),
        migrations.CreateModel(
            name='StoreHoliday',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('holiday_date', models.DateField()),
                ('name', models.CharField(max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('shop', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='holidays', to='authentication.shop')),
            ],
            options={
                'db_table': 'store_holidays',
                'ordering': ['holiday_date'],
                'indexes': [models.Index(fields=['holiday_date'], name='idx_store_holidays_date')],
                'unique_together': {('shop', 'holiday_date')},
            },
        ),
    ]
