from rest_framework import serializers
from .models import FoodCategory, Menu


class FoodCategorySerializer(serializers.ModelSerializer):
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = FoodCategory
        fields = ['id', 'name', 'position', 'active', 'item_count', 'date_added']
        read_only_fields = ['date_added']

    def get_item_count(self, obj):
        return obj.items.filter(is_available=True).count()


class MenuSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)

    class Meta:
        model = Menu
        fields = [
            'id', 'name', 'description', 'category', 'category_name',
            'diet', 'price', 'is_available', 'create_date'
        ]
        read_only_fields = ['create_date']

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value

    def validate_category(self, value):
        """Category must belong to the same shop"""
        request = self.context.get('request')
        shop = getattr(request, 'shop', None)
        if value is not None and shop is not None and value.shop_id != shop.id:
            raise serializers.ValidationError("Category not found in your shop.")
        return value
