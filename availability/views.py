from rest_framework import generics, status, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, OpenApiExample

from authentication.models import Shop
from authentication.permissions import IsShopAdmin, IsSuperAdmin, ShopContextMixin
from .models import StoreAvailability, StoreHoliday
from .resolver import AvailabilityResolver, AvailabilityConfig, Holiday, get_store_status
from .serializers import (
    StoreStatusSerializer, StoreAvailabilitySerializer, BulkAvailabilitySerializer,
    OverrideToggleSerializer, HolidaySerializer, BulkHolidaySerializer,
)
from . import services


# =============== PUBLIC STOREFRONT ===============

@extend_schema(
    summary="Store Availability",
    description="Whether the shop is accepting orders right now, with the reason",
    responses={200: StoreStatusSerializer, 404: {'description': 'Shop not found'}},
)
@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def shop_availability(request, slug):
    shop = get_object_or_404(Shop, slug=slug, is_active=True)
    return Response(StoreStatusSerializer(get_store_status(shop.id)).data)


# =============== SHOP ADMIN ===============

@extend_schema(summary="Current Store Status", responses={200: StoreStatusSerializer})
@api_view(['GET'])
@permission_classes([IsShopAdmin])
def admin_store_status(request):
    return Response(StoreStatusSerializer(get_store_status(request.shop.id)).data)


class AdminAvailabilityView(generics.GenericAPIView):
    """
    get: Availability settings for the admin's shop (null until first saved)
    put: Update hours, timezone or override for the admin's shop
    """
    serializer_class = StoreAvailabilitySerializer
    permission_classes = [IsShopAdmin]

    def get(self, request, *args, **kwargs):
        availability = StoreAvailability.objects.filter(shop=request.shop).first()
        return Response({
            'availability': StoreAvailabilitySerializer(availability).data if availability else None,
            'status': StoreStatusSerializer(get_store_status(request.shop.id)).data,
        })

    def put(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        availability = services.save_store_availability(request.shop, **serializer.validated_data)
        return Response(StoreAvailabilitySerializer(availability).data)


@extend_schema(
    summary="Toggle Store Override",
    request=OverrideToggleSerializer,
    examples=[
        OpenApiExample('Close for the evening', value={"manualOverride": "force_close", "overrideReason": "Kitchen maintenance"}),
    ],
)
@api_view(['PUT'])
@permission_classes([IsShopAdmin])
def admin_toggle_override(request):
    serializer = OverrideToggleSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    manual_override = serializer.validated_data['manualOverride']
    availability = services.set_manual_override(
        request.shop,
        manual_override,
        serializer.validated_data.get('overrideReason'),
    )
    return Response({
        'success': True,
        'availability': StoreAvailabilitySerializer(availability).data,
        'message': services.override_confirmation(manual_override),
    })


class AdminHolidayListCreateView(ShopContextMixin, generics.ListCreateAPIView):
    """
    get: Holidays for the admin's shop, oldest first
    post: Add a holiday (rejected when the date already exists)
    """
    queryset = StoreHoliday.objects.all()
    serializer_class = HolidaySerializer
    permission_classes = [IsShopAdmin]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        holiday = services.add_holiday(self.get_user_shop(), **serializer.validated_data)
        return Response(HolidaySerializer(holiday).data, status=status.HTTP_201_CREATED)


class AdminHolidayDeleteView(ShopContextMixin, generics.DestroyAPIView):
    queryset = StoreHoliday.objects.all()
    serializer_class = HolidaySerializer
    permission_classes = [IsShopAdmin]

    def perform_destroy(self, instance):
        services.delete_holiday(instance)


# =============== SUPER ADMIN ===============

class SuperAdminShopAvailabilityView(generics.GenericAPIView):
    """
    get: Availability settings and holidays of one shop
    put: Create or update the shop's availability settings
    """
    serializer_class = StoreAvailabilitySerializer
    permission_classes = [IsSuperAdmin]

    def get(self, request, shop_id, *args, **kwargs):
        shop = get_object_or_404(Shop, pk=shop_id)
        availability = StoreAvailability.objects.filter(shop=shop).first()
        return Response({
            'availability': StoreAvailabilitySerializer(availability).data if availability else None,
            'holidays': HolidaySerializer(shop.holidays.all(), many=True).data,
        })

    def put(self, request, shop_id, *args, **kwargs):
        shop = get_object_or_404(Shop, pk=shop_id)
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        availability = services.save_store_availability(shop, **serializer.validated_data)
        return Response(StoreAvailabilitySerializer(availability).data)


@extend_schema(summary="Open / Close Shop", request=OverrideToggleSerializer)
@api_view(['PUT'])
@permission_classes([IsSuperAdmin])
def super_admin_toggle_override(request, shop_id):
    shop = get_object_or_404(Shop, pk=shop_id)
    serializer = OverrideToggleSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    manual_override = serializer.validated_data['manualOverride']
    services.set_manual_override(shop, manual_override, serializer.validated_data.get('overrideReason'))

    if manual_override == 'force_open':
        status_text = 'opened'
    elif manual_override == 'force_close':
        status_text = 'closed'
    else:
        status_text = 'reset to normal hours'

    return Response({
        'success': True,
        'message': f"Shop {status_text} successfully",
        'manualOverride': manual_override,
    })


@extend_schema(summary="Add Shop Holiday", request=HolidaySerializer, responses={201: HolidaySerializer})
@api_view(['POST'])
@permission_classes([IsSuperAdmin])
def super_admin_add_holiday(request, shop_id):
    shop = get_object_or_404(Shop, pk=shop_id)
    serializer = HolidaySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    holiday = services.add_holiday(shop, **serializer.validated_data)
    return Response(HolidaySerializer(holiday).data, status=status.HTTP_201_CREATED)


@extend_schema(summary="Bulk Add Shop Holidays", request=BulkHolidaySerializer)
@api_view(['POST'])
@permission_classes([IsSuperAdmin])
def super_admin_bulk_add_holidays(request, shop_id):
    shop = get_object_or_404(Shop, pk=shop_id)
    serializer = BulkHolidaySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    created, skipped = services.bulk_add_holidays(shop, serializer.validated_data['holidays'])
    if not created:
        return Response({
            'error': True,
            'message': 'All holidays already exist',
            'skipped': skipped,
            'status_code': 400,
        }, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'created': HolidaySerializer(created, many=True).data,
        'skipped': skipped,
        'message': f"Added {len(created)} holidays, skipped {skipped} duplicates",
    }, status=status.HTTP_201_CREATED)


@extend_schema(summary="Delete Holiday", responses={204: None})
@api_view(['DELETE'])
@permission_classes([IsSuperAdmin])
def super_admin_delete_holiday(request, holiday_id):
    holiday = get_object_or_404(StoreHoliday, pk=holiday_id)
    services.delete_holiday(holiday)
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(summary="All Shops Availability")
@api_view(['GET'])
@permission_classes([IsSuperAdmin])
def super_admin_all_availability(request):
    resolver = AvailabilityResolver()
    shops = Shop.objects.select_related('availability').prefetch_related('holidays')

    results = []
    for shop in shops:
        availability = getattr(shop, 'availability', None)
        holidays = list(shop.holidays.all())
        config = AvailabilityConfig.from_model(availability) if availability else None
        store_status = resolver.resolve_with(
            config,
            [Holiday.from_model(h) for h in holidays],
        )
        results.append({
            'shopId': str(shop.id),
            'shopName': shop.name,
            'slug': shop.slug,
            'isActive': shop.is_active,
            'availability': StoreAvailabilitySerializer(availability).data if availability else None,
            'holidays': HolidaySerializer(holidays, many=True).data,
            'status': StoreStatusSerializer(store_status).data,
        })
    return Response(results)


@extend_schema(summary="Apply Hours To All Shops", request=BulkAvailabilitySerializer)
@api_view(['PUT'])
@permission_classes([IsSuperAdmin])
def super_admin_bulk_availability(request):
    serializer = BulkAvailabilitySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    result = services.apply_availability_to_all_shops(
        opening_time=data.get('openingTime'),
        closing_time=data.get('closingTime'),
        timezone=data.get('timezone'),
        override_reason=data.get('overrideReason'),
    )
    message = f"Updated availability for {result.updated} shops"
    if result.failed > 0:
        message += f", {result.failed} failed"

    return Response({
        'success': True,
        'message': message,
        'updated': result.updated,
        'failed': result.failed,
    })


@extend_schema(summary="Add Holidays To All Shops", request=BulkHolidaySerializer)
@api_view(['POST'])
@permission_classes([IsSuperAdmin])
def super_admin_bulk_add_holidays_all(request):
    serializer = BulkHolidaySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = services.add_holidays_to_all_shops(serializer.validated_data['holidays'])
    return Response({
        'success': True,
        'message': f"Added {result.created} holidays across all shops ({result.skipped} duplicates skipped)",
        'created': result.created,
        'skipped': result.skipped,
        'failed': result.failed,
    })
