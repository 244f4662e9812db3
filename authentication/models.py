from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.validators import RegexValidator
import uuid


class CustomUserManager(BaseUserManager):
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('The Email field must be set')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_super_admin', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


class TimeStampedModel(models.Model):
    """Base model with created_at and updated_at fields"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# =============== SHOP MODELS ===============

class Shop(TimeStampedModel):
    """A tenant: one storefront with its own menu, orders and opening hours"""
    BUSINESS_TYPES = [
        ('restaurant', 'Restaurant'),
        ('cloud_kitchen', 'Cloud Kitchen'),
        ('cafe', 'Cafe'),
        ('bakery', 'Bakery'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=100, unique=True)
    owner_name = models.CharField(max_length=255, blank=True)
    business_type = models.CharField(max_length=100, choices=BUSINESS_TYPES, default='restaurant')

    phone = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    currency = models.CharField(max_length=3, default='INR')

    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'shops'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.slug})"


# =============== USER MANAGEMENT ===============

class CustomUser(AbstractUser):
    """Extended User model"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone_regex = RegexValidator(regex=r'^\+?1?\d{9,15}$')
    phone = models.CharField(validators=[phone_regex], max_length=17, blank=True)
    email = models.EmailField(unique=True)
    is_super_admin = models.BooleanField(default=False)  # Can manage every shop

    username = None
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']
    objects = CustomUserManager()

    class Meta:
        db_table = 'users'

    def get_active_membership(self):
        return self.shop_memberships.select_related('shop').filter(
            is_active=True,
            shop__is_active=True,
        ).first()


class ShopUser(TimeStampedModel):
    """Shop-User relationship with roles"""
    SHOP_ROLES = [
        ('shop_owner', 'Shop Owner'),
        ('shop_manager', 'Shop Manager'),
        ('staff', 'Staff'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name='shop_users')
    user = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='shop_memberships')
    role = models.CharField(max_length=50, choices=SHOP_ROLES, default='shop_owner')
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'shop_users'
        unique_together = ['shop', 'user']

    def __str__(self):
        return f"{self.user.email} @ {self.shop.slug} ({self.role})"
