from django.contrib import admin

from .models import StoreAvailability, StoreHoliday


@admin.register(StoreAvailability)
class StoreAvailabilityAdmin(admin.ModelAdmin):
    list_display = ['shop', 'opening_time', 'closing_time', 'timezone', 'manual_override', 'updated_at']
    list_filter = ['manual_override', 'timezone']
    search_fields = ['shop__name', 'shop__slug']


@admin.register(StoreHoliday)
class StoreHolidayAdmin(admin.ModelAdmin):
    list_display = ['shop', 'holiday_date', 'name']
    list_filter = ['holiday_date']
    search_fields = ['shop__name', 'name']
