# tests/conftest.py
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from authentication.models import CustomUser, Shop, ShopUser
from inventory.models import Menu


@pytest.fixture
def shop(db):
    return Shop.objects.create(name="Spice Route", slug="spice-route")


@pytest.fixture
def other_shop(db):
    return Shop.objects.create(name="Noodle Bar", slug="noodle-bar")


@pytest.fixture
def shop_admin(shop):
    user = CustomUser.objects.create_user(
        email="owner@spiceroute.test", password="Secret123!", first_name="Asha", last_name="Rao"
    )
    ShopUser.objects.create(shop=shop, user=user, role="shop_owner")
    return user


@pytest.fixture
def super_admin(db):
    return CustomUser.objects.create_user(
        email="ops@platform.test", password="Secret123!", is_super_admin=True
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_client(shop_admin):
    client = APIClient()
    client.force_authenticate(user=shop_admin)
    return client


@pytest.fixture
def super_client(super_admin):
    client = APIClient()
    client.force_authenticate(user=super_admin)
    return client


@pytest.fixture
def menu_item(shop):
    return Menu.objects.create(shop=shop, name="Paneer Tikka", price=Decimal("240.00"))


@pytest.fixture
def freeze_clock(monkeypatch):
    """Pin the resolver's notion of "now" to a given UTC instant."""
    def _freeze(instant):
        monkeypatch.setattr("availability.resolver.current_time", lambda: instant)
        return instant
    return _freeze


@pytest.fixture(autouse=True)
def availability_defaults(settings):
    settings.STORE_AVAILABILITY_DEFAULTS = {
        "OPENING_TIME": "09:00",
        "CLOSING_TIME": "22:00",
        "TIMEZONE": "Asia/Kolkata",
        "MANUAL_OVERRIDE": "none",
    }
