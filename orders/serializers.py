from rest_framework import serializers
from django.db import transaction

from .models import Order, OrderItem
from inventory.models import Menu


class OrderItemCreateSerializer(serializers.Serializer):
    menu_item_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, default=1)
    special_instructions = serializers.CharField(max_length=500, required=False, allow_blank=True)


class CustomerSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=20)


class OrderItemReadSerializer(serializers.ModelSerializer):
    item_total = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = ['id', 'menu_item', 'item_name', 'price', 'quantity', 'special_instructions', 'item_total']

    def get_item_total(self, obj):
        return float(obj.get_total_price())


class OrderCreateSerializer(serializers.Serializer):
    """Storefront order; the shop comes from the URL, never from the body"""
    order_method = serializers.ChoiceField(choices=Order.ORDER_METHOD_CHOICES, default="Delivery")
    items = OrderItemCreateSerializer(many=True, allow_empty=False)
    customer = CustomerSerializer(required=False)
    table_qr = serializers.CharField(max_length=50, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    delivery_address = serializers.CharField(required=False, allow_blank=True)

    def validate_items(self, value):
        shop = self.context['shop']
        ids = {item['menu_item_id'] for item in value}
        menu_items = Menu.objects.filter(id__in=ids, shop=shop, is_available=True).in_bulk()

        missing = sorted(ids - set(menu_items))
        if missing:
            raise serializers.ValidationError(f"Invalid item: {', '.join(str(i) for i in missing)}")

        for item in value:
            item['menu_item'] = menu_items[item['menu_item_id']]
        return value

    @transaction.atomic
    def create(self, validated_data):
        items_data = validated_data.pop('items')
        customer = validated_data.pop('customer', None) or {}

        order = Order.objects.create(
            shop=self.context['shop'],
            customer_name=customer.get('name'),
            customer_phone=customer.get('phone'),
            **validated_data
        )

        for item_data in items_data:
            menu_item = item_data['menu_item']
            OrderItem.objects.create(
                order=order,
                menu_item=menu_item,
                item_name=menu_item.name,
                price=menu_item.price,
                quantity=item_data['quantity'],
                special_instructions=item_data.get('special_instructions', ''),
            )

        order.refresh_from_db()
        return order


class OrderReadSerializer(serializers.ModelSerializer):
    items = OrderItemReadSerializer(many=True, read_only=True)
    shop_name = serializers.CharField(source='shop.name', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'token', 'order_method', 'shop_name', 'status',
            'customer_name', 'customer_phone', 'delivery_address', 'table_qr',
            'notes', 'subtotal', 'delivery_charge', 'total_price', 'items',
            'create_date', 'updated_date'
        ]


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.status_options)

    def validate_status(self, value):
        order = self.context['order']
        if not order.can_transition_to(value):
            raise serializers.ValidationError(
                f"Cannot move order from '{order.status}' to '{value}'"
            )
        return value
