import pytest

from authentication.models import ShopUser

pytestmark = pytest.mark.django_db


def test_health_check(api_client):
    response = api_client.get("/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_login_returns_shop_context(api_client, shop_admin, shop):
    response = api_client.post("/auth/login/", {
        "email": "owner@spiceroute.test", "password": "Secret123!",
    }, format="json")

    assert response.status_code == 200
    body = response.json()
    assert body["access"] and body["refresh"]
    assert body["shop"]["slug"] == shop.slug
    assert body["role"] == "shop_owner"


def test_super_admin_login_without_shop(api_client, super_admin):
    response = api_client.post("/auth/login/", {
        "email": "ops@platform.test", "password": "Secret123!",
    }, format="json")

    assert response.status_code == 200
    assert response.json()["shop"] is None
    assert response.json()["user"]["is_super_admin"] is True


def test_login_rejects_bad_password(api_client, shop_admin):
    response = api_client.post("/auth/login/", {
        "email": "owner@spiceroute.test", "password": "wrong",
    }, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_login_requires_active_membership(api_client, shop_admin):
    ShopUser.objects.filter(user=shop_admin).update(is_active=False)

    response = api_client.post("/auth/login/", {
        "email": "owner@spiceroute.test", "password": "Secret123!",
    }, format="json")

    assert response.status_code == 400


def test_access_token_authenticates(api_client, shop_admin, shop):
    tokens = api_client.post("/auth/login/", {
        "email": "owner@spiceroute.test", "password": "Secret123!",
    }, format="json").json()

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
    response = api_client.get("/admin/shop/")

    assert response.status_code == 200
    assert response.json()["slug"] == shop.slug
    assert response.json()["role"] == "shop_owner"
