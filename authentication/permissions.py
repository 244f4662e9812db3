from rest_framework import permissions
from rest_framework.exceptions import PermissionDenied

from .models import ShopUser


class IsSuperAdmin(permissions.BasePermission):
    """
    Permission for the platform operator who manages every shop
    """
    message = 'Super admin access required'

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.is_super_admin
        )


class IsShopAdmin(permissions.BasePermission):
    """
    Permission for members of an active shop; stores the membership on the request
    """
    message = 'You are not associated with any active shop.'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        membership = request.user.get_active_membership()
        if membership is None:
            return False

        request.shop = membership.shop
        request.shop_user = membership
        return True


class ShopContextMixin:
    """Mixin to resolve the admin's shop and scope querysets to it"""

    def get_user_shop(self):
        if not hasattr(self.request, 'shop'):
            try:
                membership = ShopUser.objects.select_related('shop').get(
                    user=self.request.user,
                    is_active=True,
                    shop__is_active=True
                )
            except ShopUser.DoesNotExist:
                raise PermissionDenied("You are not associated with any active shop.")
            self.request.shop = membership.shop
            self.request.shop_user = membership
        return self.request.shop

    def get_queryset(self):
        return super().get_queryset().filter(shop=self.get_user_shop())

    def perform_create(self, serializer):
        serializer.save(shop=self.get_user_shop())
