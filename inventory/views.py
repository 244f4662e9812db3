from rest_framework import generics, filters, permissions
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend

from authentication.models import Shop
from authentication.permissions import IsShopAdmin, ShopContextMixin
from .models import FoodCategory, Menu
from .serializers import FoodCategorySerializer, MenuSerializer


class PublicMenuListView(generics.ListAPIView):
    """
    get: Available menu items of an active shop (storefront)
    """
    serializer_class = MenuSerializer
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['category', 'diet']
    search_fields = ['name', 'description']

    def get_queryset(self):
        shop = get_object_or_404(Shop, slug=self.kwargs['slug'], is_active=True)
        return Menu.objects.filter(shop=shop, is_available=True).select_related('category')


class FoodCategoryListCreateView(ShopContextMixin, generics.ListCreateAPIView):
    """
    get: List categories of the admin's shop
    post: Create a category
    """
    queryset = FoodCategory.objects.all()
    serializer_class = FoodCategorySerializer
    permission_classes = [IsShopAdmin]


class MenuListCreateView(ShopContextMixin, generics.ListCreateAPIView):
    """
    get: List menu items of the admin's shop
    post: Create a menu item
    """
    queryset = Menu.objects.select_related('category')
    serializer_class = MenuSerializer
    permission_classes = [IsShopAdmin]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['category', 'is_available', 'diet']
    search_fields = ['name']
    ordering_fields = ['name', 'price', 'create_date']


class MenuRetrieveUpdateDestroyView(ShopContextMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Menu.objects.select_related('category')
    serializer_class = MenuSerializer
    permission_classes = [IsShopAdmin]
