from django.urls import path
from . import views

app_name = 'orders'

urlpatterns = [
    # Storefront
    path('shops/<slug:slug>/orders/', views.PublicOrderCreateView.as_view(), name='order-create'),

    # Shop admin
    path('admin/orders/', views.OrderListView.as_view(), name='order-list'),
    path('admin/orders/<int:order_id>/status/', views.update_order_status, name='order-status'),
]
