import logging

from rest_framework import status, generics, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiParameter

from authentication.models import Shop
from authentication.permissions import IsShopAdmin, ShopContextMixin
from availability.services import ensure_store_open
from .models import Order
from .serializers import OrderCreateSerializer, OrderReadSerializer, OrderStatusUpdateSerializer

logger = logging.getLogger(__name__)


class PublicOrderCreateView(generics.CreateAPIView):
    """Place an order on a shop's storefront"""
    serializer_class = OrderCreateSerializer
    permission_classes = [permissions.AllowAny]

    def get_shop(self):
        if not hasattr(self, '_shop'):
            self._shop = get_object_or_404(Shop, slug=self.kwargs['slug'], is_active=True)
        return self._shop

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context['shop'] = self.get_shop()
        return context

    @extend_schema(
        description="Create a new order. Rejected with code 'store_closed' while the shop is not accepting orders.",
        request=OrderCreateSerializer,
        responses={
            201: OrderReadSerializer,
            400: {'description': 'Bad Request'},
            403: {'description': 'Store is currently closed'},
            404: {'description': 'Shop not found'},
        }
    )
    def post(self, request, *args, **kwargs):
        shop = self.get_shop()

        # Closed shops never take orders, whatever the client last saw
        ensure_store_open(shop.id)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = serializer.save()
        logger.info("Order %s (token %s) placed for shop %s", order.id, order.token, shop.slug)

        return Response(OrderReadSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderListView(ShopContextMixin, generics.ListAPIView):
    """List orders for the admin's shop"""
    queryset = Order.objects.prefetch_related('items').select_related('shop')
    serializer_class = OrderReadSerializer
    permission_classes = [IsShopAdmin]
    filterset_fields = ['status', 'order_method']

    def get_queryset(self):
        queryset = super().get_queryset()

        date_filter = self.request.query_params.get('date')
        if date_filter:
            queryset = queryset.filter(create_date__date=date_filter)

        return queryset.order_by('-create_date')

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str, description="Filter by order status"),
            OpenApiParameter('order_method', str, description="Filter by order method"),
            OpenApiParameter('date', str, description="Filter by date (YYYY-MM-DD)"),
        ]
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


@extend_schema(
    request=OrderStatusUpdateSerializer,
    responses={200: OrderReadSerializer, 400: {'description': 'Invalid transition'}, 404: {'description': 'Order not found'}},
)
@api_view(['PATCH'])
@permission_classes([IsShopAdmin])
def update_order_status(request, order_id):
    """Move an order to its next status"""
    order = get_object_or_404(Order, id=order_id, shop=request.shop)

    serializer = OrderStatusUpdateSerializer(data=request.data, context={'order': order})
    serializer.is_valid(raise_exception=True)

    previous = order.status
    order.status = serializer.validated_data['status']
    order.save(update_fields=['status', 'updated_date'])
    logger.info("Order %s status %s -> %s", order.id, previous, order.status)

    return Response(OrderReadSerializer(order).data)
