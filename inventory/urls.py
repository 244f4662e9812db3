from django.urls import path
from . import views


urlpatterns = [
    # Storefront
    path('shops/<slug:slug>/menu/', views.PublicMenuListView.as_view(), name='public-menu'),

    # Shop admin
    path('admin/categories/', views.FoodCategoryListCreateView.as_view(), name='category-list-create'),
    path('admin/menu/', views.MenuListCreateView.as_view(), name='menu-list-create'),
    path('admin/menu/<int:pk>/', views.MenuRetrieveUpdateDestroyView.as_view(), name='menu-detail'),
]
