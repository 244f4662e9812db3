from rest_framework import status, permissions
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView
from django.db import connection, DatabaseError
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiExample

from .serializers import UserSerializer, ShopSerializer, LoginSerializer
from .permissions import IsShopAdmin


# =============== AUTHENTICATION VIEWS ===============

class CustomTokenObtainPairView(TokenObtainPairView):
    """
    JWT login that also returns the caller's shop context.

    Shop admins get their shop and role; super admins may have no shop.
    """
    serializer_class = LoginSerializer

    @extend_schema(
        summary="User Login with JWT Token",
        request=LoginSerializer,
        responses={
            200: {
                'type': 'object',
                'properties': {
                    'refresh': {'type': 'string', 'description': 'JWT refresh token'},
                    'access': {'type': 'string', 'description': 'JWT access token'},
                    'user': {'type': 'object', 'description': 'User information'},
                    'shop': {'type': 'object', 'description': 'Shop information', 'nullable': True},
                    'role': {'type': 'string', 'description': 'User role in the shop', 'nullable': True},
                }
            },
            400: {'description': 'Invalid credentials or validation errors'},
        },
        examples=[
            OpenApiExample(
                'Shop Admin Login',
                value={
                    "email": "owner@kitchen.com",
                    "password": "SecurePassword123!",
                }
            ),
        ]
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']
        shop_user = serializer.validated_data['shop_user']

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])

        refresh = RefreshToken.for_user(user)
        refresh['is_super_admin'] = user.is_super_admin
        if shop_user is not None:
            refresh['shop_id'] = str(shop_user.shop_id)
            refresh['role'] = shop_user.role

        return Response({
            'refresh': str(refresh),
            'access': str(refresh.access_token),
            'user': UserSerializer(user).data,
            'shop': ShopSerializer(shop_user.shop).data if shop_user else None,
            'role': shop_user.role if shop_user else None,
        }, status=status.HTTP_200_OK)


@extend_schema(
    summary="Get My Shop",
    responses={200: ShopSerializer},
)
@api_view(['GET'])
@permission_classes([IsShopAdmin])
def my_shop(request):
    data = ShopSerializer(request.shop).data
    data['role'] = request.shop_user.role
    return Response(data)


@extend_schema(
    summary="Health Check",
    description="Check API health status",
    responses={200: {'description': 'API is healthy'}},
)
@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health_check(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return Response({
            'status': 'healthy',
            'timestamp': timezone.now().isoformat(),
            'database': 'connected',
            'version': '1.0.0'
        })
    except DatabaseError as e:
        return Response({
            'status': 'unhealthy',
            'timestamp': timezone.now().isoformat(),
            'database': 'disconnected',
            'error': str(e)
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)
