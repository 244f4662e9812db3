from django.db import models
from django.utils import timezone
from decimal import Decimal, ROUND_HALF_UP

from authentication.models import Shop
from availability.resolver import shop_local_clock
from inventory.models import Menu


class Order(models.Model):
    token = models.IntegerField(default=0)

    ORDER_METHOD_CHOICES = (
        ("Dine In", "Dine In"),
        ("Takeaway", "Takeaway"),
        ("Delivery", "Delivery"),
    )
    order_method = models.CharField(max_length=20, choices=ORDER_METHOD_CHOICES, default="Delivery")
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name='orders')
    create_date = models.DateTimeField(auto_now_add=True)
    updated_date = models.DateTimeField(auto_now=True)

    STATUS_PENDING = "pending"
    STATUS_CONFIRMED = "confirmed"
    STATUS_PREPARING = "preparing"
    STATUS_READY = "ready"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"
    status_options = (
        (STATUS_PENDING, "Pending"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_PREPARING, "Preparing"),
        (STATUS_READY, "Ready"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    )
    status = models.CharField(max_length=20, choices=status_options, default=STATUS_PENDING)

    # Allowed next states for each state
    STATUS_TRANSITIONS = {
        STATUS_PENDING: (STATUS_CONFIRMED, STATUS_CANCELLED),
        STATUS_CONFIRMED: (STATUS_PREPARING, STATUS_CANCELLED),
        STATUS_PREPARING: (STATUS_READY, STATUS_CANCELLED),
        STATUS_READY: (STATUS_COMPLETED,),
        STATUS_COMPLETED: (),
        STATUS_CANCELLED: (),
    }

    # Customer details
    customer_name = models.CharField(max_length=100, null=True, blank=True)
    customer_phone = models.CharField(max_length=20, null=True, blank=True)
    delivery_address = models.TextField(null=True, blank=True)
    table_qr = models.CharField(max_length=50, null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    # Pricing fields
    subtotal = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    delivery_charge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    total_price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    def save(self, *args, **kwargs):
        if not self.pk:
            # Tokens restart at midnight in the shop's own timezone
            local = shop_local_clock(self.shop_id, now=timezone.now())
            with timezone.override(local.zone):
                last_token = Order.objects.filter(
                    create_date__date=local.date,
                    shop=self.shop
                ).aggregate(max_token=models.Max('token'))['max_token'] or 0
            self.token = last_token + 1

        super().save(*args, **kwargs)

    def can_transition_to(self, new_status):
        return new_status in self.STATUS_TRANSITIONS.get(self.status, ())

    def calculate_totals(self):
        """Recalculate order totals based on items"""
        subtotal = Decimal('0.00')
        for item in self.items.all():
            subtotal += item.price * item.quantity

        self.subtotal = subtotal
        self.total_price = subtotal + self.delivery_charge

    def __str__(self):
        return f"#{self.id} - Token: {self.token} - {self.shop.slug}"

    class Meta:
        ordering = ['-create_date']


class OrderItem(models.Model):
    order = models.ForeignKey(Order, related_name='items', on_delete=models.CASCADE)
    menu_item = models.ForeignKey(Menu, on_delete=models.SET_NULL, null=True, related_name='order_items')
    # Snapshot of the menu item at order time
    item_name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.IntegerField(default=1)
    special_instructions = models.CharField(max_length=500, null=True, blank=True)

    def save(self, *args, **kwargs):
        # Round price to 2 decimal places
        self.price = Decimal(str(self.price)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
        super().save(*args, **kwargs)

    def get_total_price(self):
        return self.price * self.quantity

    def __str__(self):
        return f"{self.quantity} x {self.item_name}"

    class Meta:
        ordering = ['id']
