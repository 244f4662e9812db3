from django.urls import path

from . import views

app_name = 'availability'

urlpatterns = [
    # Public storefront
    path('shops/<slug:slug>/availability/', views.shop_availability, name='shop-availability'),

    # Shop admin
    path('admin/availability/', views.AdminAvailabilityView.as_view(), name='admin-availability'),
    path('admin/availability/status/', views.admin_store_status, name='admin-availability-status'),
    path('admin/availability/toggle/', views.admin_toggle_override, name='admin-availability-toggle'),
    path('admin/holidays/', views.AdminHolidayListCreateView.as_view(), name='admin-holiday-list'),
    path('admin/holidays/<uuid:pk>/', views.AdminHolidayDeleteView.as_view(), name='admin-holiday-delete'),

    # Super admin
    path('super-admin/shops/<uuid:shop_id>/availability/', views.SuperAdminShopAvailabilityView.as_view(), name='super-admin-shop-availability'),
    path('super-admin/shops/<uuid:shop_id>/availability/toggle/', views.super_admin_toggle_override, name='super-admin-shop-toggle'),
    path('super-admin/shops/<uuid:shop_id>/holidays/', views.super_admin_add_holiday, name='super-admin-add-holiday'),
    path('super-admin/shops/<uuid:shop_id>/holidays/bulk/', views.super_admin_bulk_add_holidays, name='super-admin-bulk-holidays'),
    path('super-admin/holidays/<uuid:holiday_id>/', views.super_admin_delete_holiday, name='super-admin-delete-holiday'),
    path('super-admin/holidays/bulk/all/', views.super_admin_bulk_add_holidays_all, name='super-admin-bulk-holidays-all'),
    path('super-admin/availability/all/', views.super_admin_all_availability, name='super-admin-all-availability'),
    path('super-admin/availability/bulk/', views.super_admin_bulk_availability, name='super-admin-bulk-availability'),
]
