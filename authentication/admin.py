from django.contrib import admin

from .models import CustomUser, Shop, ShopUser


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'business_type', 'is_active', 'created_at']
    list_filter = ['is_active', 'business_type']
    search_fields = ['name', 'slug']


@admin.register(ShopUser)
class ShopUserAdmin(admin.ModelAdmin):
    list_display = ['user', 'shop', 'role', 'is_active']
    list_filter = ['role', 'is_active']


@admin.register(CustomUser)
class CustomUserAdmin(admin.ModelAdmin):
    list_display = ['email', 'first_name', 'last_name', 'is_super_admin', 'is_active']
    search_fields = ['email']
    exclude = ['password']
