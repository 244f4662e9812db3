# Signal to update order totals when items change
from .models import OrderItem
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver


@receiver([post_save, post_delete], sender=OrderItem)
def update_order_totals_on_item_change(sender, instance, **kwargs):
    """Update order totals when items are added/removed/modified"""
    if hasattr(instance, 'order'):
        instance.order.calculate_totals()
        instance.order.save(update_fields=['subtotal', 'total_price'])
