from django.db import models
from django.core.validators import RegexValidator
import uuid

from authentication.models import Shop, TimeStampedModel

TIME_OF_DAY_REGEX = r'^([01]?[0-9]|2[0-3]):[0-5][0-9]$'

time_of_day_validator = RegexValidator(
    regex=TIME_OF_DAY_REGEX,
    message='Use HH:MM (24-hour) format',
)


class ManualOverride(models.TextChoices):
    NONE = 'none', 'Normal'
    FORCE_OPEN = 'force_open', 'Force Open'
    FORCE_CLOSE = 'force_close', 'Force Close'


class StoreAvailability(TimeStampedModel):
    """Opening hours, timezone and manual override for one shop"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.OneToOneField(Shop, on_delete=models.CASCADE, related_name='availability')

    # Wall-clock times in `timezone`
    opening_time = models.CharField(max_length=5, default='09:00', validators=[time_of_day_validator])
    closing_time = models.CharField(max_length=5, default='22:00', validators=[time_of_day_validator])
    timezone = models.CharField(max_length=50, default='Asia/Kolkata')

    manual_override = models.CharField(max_length=20, choices=ManualOverride.choices, default=ManualOverride.NONE)
    override_reason = models.TextField(null=True, blank=True)

    class Meta:
        db_table = 'store_availability'
        verbose_name_plural = 'Store availability'

    def __str__(self):
        return f"{self.shop.slug}: {self.opening_time}-{self.closing_time} {self.timezone} ({self.manual_override})"


class StoreHoliday(models.Model):
    """A calendar date on which the shop is closed"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name='holidays')
    holiday_date = models.DateField()
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'store_holidays'
        unique_together = ['shop', 'holiday_date']
        ordering = ['holiday_date']
        indexes = [
            models.Index(fields=['holiday_date'], name='idx_store_holidays_date'),
        ]

    def __str__(self):
        return f"{self.shop.slug}: {self.holiday_date} ({self.name})"
