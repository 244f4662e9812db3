from datetime import date

import pytest

from availability.models import StoreAvailability, StoreHoliday
from availability.services import add_holiday, set_manual_override
from tests.utils import ist

pytestmark = pytest.mark.django_db


class TestPublicAvailability:

    def test_defaults_when_unconfigured(self, api_client, shop, freeze_clock):
        freeze_clock(ist(12, 0))
        response = api_client.get(f"/shops/{shop.slug}/availability/")

        assert response.status_code == 200
        assert response.json() == {
            "isOpen": True,
            "status": "open",
            "message": "Open",
            "openingTime": "09:00",
            "closingTime": "22:00",
            "timezone": "Asia/Kolkata",
        }

    def test_opens_later_includes_next_open_time(self, api_client, shop, freeze_clock):
        freeze_clock(ist(7, 15))
        data = api_client.get(f"/shops/{shop.slug}/availability/").json()

        assert data["status"] == "opens_later"
        assert data["isOpen"] is False
        assert data["nextOpenTime"] == "09:00"
        assert data["message"] == "Opens at 09:00"
        assert "holidayName" not in data

    def test_holiday_includes_name(self, api_client, shop, freeze_clock):
        freeze_clock(ist(12, 0))
        add_holiday(shop, date(2026, 3, 10), "Holi")

        data = api_client.get(f"/shops/{shop.slug}/availability/").json()

        assert data["status"] == "holiday"
        assert data["holidayName"] == "Holi"
        assert data["message"] == "Closed (Holi)"
        assert "nextOpenTime" not in data

    def test_unknown_shop_is_404(self, api_client, db):
        response = api_client.get("/shops/no-such-shop/availability/")
        assert response.status_code == 404
        assert response.json()["message"] == "Resource not found"

    def test_inactive_shop_is_404(self, api_client, shop):
        shop.is_active = False
        shop.save()
        assert api_client.get(f"/shops/{shop.slug}/availability/").status_code == 404


class TestShopAdminAvailability:

    def test_requires_authentication(self, api_client, shop):
        response = api_client.get("/admin/availability/")
        assert response.status_code == 401

    def test_user_without_shop_is_forbidden(self, super_client):
        assert super_client.get("/admin/availability/").status_code == 403

    def test_get_before_first_save(self, admin_client, freeze_clock):
        freeze_clock(ist(23, 0))
        data = admin_client.get("/admin/availability/").json()

        assert data["availability"] is None
        assert data["status"]["status"] == "closed"

    def test_update_settings(self, admin_client, shop):
        response = admin_client.put("/admin/availability/", {
            "openingTime": "10:00",
            "closingTime": "23:30",
            "timezone": "Asia/Dubai",
        }, format="json")

        assert response.status_code == 200
        assert response.json()["openingTime"] == "10:00"
        availability = StoreAvailability.objects.get(shop=shop)
        assert (availability.opening_time, availability.closing_time, availability.timezone) == (
            "10:00", "23:30", "Asia/Dubai"
        )

    def test_partial_update_keeps_other_fields(self, admin_client, shop):
        admin_client.put("/admin/availability/", {"openingTime": "10:00"}, format="json")
        admin_client.put("/admin/availability/", {"closingTime": "20:00"}, format="json")

        availability = StoreAvailability.objects.get(shop=shop)
        assert (availability.opening_time, availability.closing_time) == ("10:00", "20:00")

    @pytest.mark.parametrize("payload, field", [
        ({"openingTime": "25:00"}, "openingTime"),
        ({"closingTime": "9pm"}, "closingTime"),
        ({"timezone": "Moon/Base"}, "timezone"),
        ({"manualOverride": "sometimes"}, "manualOverride"),
    ])
    def test_rejects_invalid_values(self, admin_client, shop, payload, field):
        response = admin_client.put("/admin/availability/", payload, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation error"
        assert field in body["details"]
        assert not StoreAvailability.objects.filter(shop=shop).exists()

    def test_time_error_message(self, admin_client):
        response = admin_client.put("/admin/availability/", {"openingTime": "9.00"}, format="json")
        assert response.json()["details"]["openingTime"] == ["Invalid opening time format. Use HH:MM"]

    @pytest.mark.parametrize("override, message, status", [
        ("force_close", "Store is now CLOSED (orders are blocked)", "force_close"),
        ("force_open", "Store is now OPEN (orders can be placed)", "force_open"),
        ("none", "Store timing is now normal", "open"),
    ])
    def test_toggle_override(self, admin_client, shop, freeze_clock, override, message, status):
        freeze_clock(ist(12, 0))
        response = admin_client.put("/admin/availability/toggle/", {
            "manualOverride": override,
        }, format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == message
        assert body["availability"]["manualOverride"] == override

        assert admin_client.get("/admin/availability/status/").json()["status"] == status

    def test_toggle_requires_valid_override(self, admin_client):
        response = admin_client.put("/admin/availability/toggle/", {"manualOverride": "maybe"}, format="json")
        assert response.status_code == 400
        assert "manualOverride" in response.json()["details"]

    def test_toggle_keeps_reason(self, admin_client, shop, freeze_clock):
        freeze_clock(ist(12, 0))
        admin_client.put("/admin/availability/toggle/", {
            "manualOverride": "force_close",
            "overrideReason": "Gas leak",
        }, format="json")

        status = admin_client.get("/admin/availability/status/").json()
        assert status["message"] == "Gas leak"
        assert status["isOpen"] is False


class TestShopAdminHolidays:

    def test_create_and_list(self, admin_client, shop, other_shop):
        add_holiday(other_shop, date(2026, 12, 25), "Christmas")

        response = admin_client.post("/admin/holidays/", {
            "holidayDate": "2026-11-08", "name": "Diwali",
        }, format="json")
        assert response.status_code == 201
        assert response.json()["holidayDate"] == "2026-11-08"
        assert response.json()["shopId"] == str(shop.id)

        listed = admin_client.get("/admin/holidays/").json()
        assert [h["name"] for h in listed] == ["Diwali"]

    def test_duplicate_date_rejected(self, admin_client, shop):
        add_holiday(shop, date(2026, 11, 8), "Diwali")

        response = admin_client.post("/admin/holidays/", {
            "holidayDate": "2026-11-08", "name": "Deepavali",
        }, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "duplicate_holiday"

    @pytest.mark.parametrize("value", ["08-11-2026", "2026/11/08", "2026-02-30"])
    def test_invalid_date_rejected(self, admin_client, value):
        response = admin_client.post("/admin/holidays/", {"holidayDate": value, "name": "Bad"}, format="json")
        assert response.status_code == 400
        assert "holidayDate" in response.json()["details"]

    def test_delete_own_holiday(self, admin_client, shop):
        holiday = add_holiday(shop, date(2026, 11, 8), "Diwali")
        assert admin_client.delete(f"/admin/holidays/{holiday.id}/").status_code == 204
        assert not StoreHoliday.objects.exists()

    def test_cannot_delete_other_shops_holiday(self, admin_client, other_shop):
        holiday = add_holiday(other_shop, date(2026, 11, 8), "Diwali")
        assert admin_client.delete(f"/admin/holidays/{holiday.id}/").status_code == 404
        assert StoreHoliday.objects.filter(pk=holiday.pk).exists()


class TestSuperAdmin:

    def test_shop_admin_is_forbidden(self, admin_client, shop):
        response = admin_client.get(f"/super-admin/shops/{shop.id}/availability/")
        assert response.status_code == 403
        assert response.json()["message"] == "Permission denied"

    def test_get_shop_availability(self, super_client, shop):
        add_holiday(shop, date(2026, 1, 26), "Republic Day")
        data = super_client.get(f"/super-admin/shops/{shop.id}/availability/").json()

        assert data["availability"] is None
        assert [h["holidayDate"] for h in data["holidays"]] == ["2026-01-26"]

    def test_upsert_shop_availability(self, super_client, shop):
        response = super_client.put(f"/super-admin/shops/{shop.id}/availability/", {
            "openingTime": "11:00", "closingTime": "15:00", "manualOverride": "force_open",
        }, format="json")

        assert response.status_code == 200
        availability = StoreAvailability.objects.get(shop=shop)
        assert availability.manual_override == "force_open"

    @pytest.mark.parametrize("override, message", [
        ("force_open", "Shop opened successfully"),
        ("force_close", "Shop closed successfully"),
        ("none", "Shop reset to normal hours successfully"),
    ])
    def test_toggle_override(self, super_client, shop, override, message):
        response = super_client.put(f"/super-admin/shops/{shop.id}/availability/toggle/", {
            "manualOverride": override,
        }, format="json")

        assert response.status_code == 200
        assert response.json()["message"] == message
        assert StoreAvailability.objects.get(shop=shop).manual_override == override

    def test_add_and_delete_holiday(self, super_client, shop):
        response = super_client.post(f"/super-admin/shops/{shop.id}/holidays/", {
            "holidayDate": "2026-08-15", "name": "Independence Day",
        }, format="json")
        assert response.status_code == 201

        holiday_id = response.json()["id"]
        assert super_client.delete(f"/super-admin/holidays/{holiday_id}/").status_code == 204
        assert not StoreHoliday.objects.exists()

    def test_bulk_add_holidays(self, super_client, shop):
        add_holiday(shop, date(2026, 1, 26), "Republic Day")

        response = super_client.post(f"/super-admin/shops/{shop.id}/holidays/bulk/", {
            "holidays": [
                {"holidayDate": "2026-01-26", "name": "Republic Day"},
                {"holidayDate": "2026-08-15", "name": "Independence Day"},
            ],
        }, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["skipped"] == 1
        assert [h["name"] for h in body["created"]] == ["Independence Day"]

    def test_bulk_add_all_existing(self, super_client, shop):
        add_holiday(shop, date(2026, 1, 26), "Republic Day")

        response = super_client.post(f"/super-admin/shops/{shop.id}/holidays/bulk/", {
            "holidays": [{"holidayDate": "2026-01-26", "name": "Republic Day"}],
        }, format="json")

        assert response.status_code == 400
        assert response.json()["message"] == "All holidays already exist"

    def test_bulk_add_rejects_empty_list(self, super_client, shop):
        response = super_client.post(f"/super-admin/shops/{shop.id}/holidays/bulk/", {"holidays": []}, format="json")
        assert response.status_code == 400

    def test_bulk_add_to_all_shops(self, super_client, shop, other_shop):
        add_holiday(other_shop, date(2026, 1, 26), "Republic Day")

        response = super_client.post("/super-admin/holidays/bulk/all/", {
            "holidays": [{"holidayDate": "2026-01-26", "name": "Republic Day"}],
        }, format="json")

        assert response.status_code == 200
        body = response.json()
        assert (body["created"], body["skipped"], body["failed"]) == (1, 1, 0)

    def test_all_availability(self, super_client, shop, other_shop, freeze_clock):
        freeze_clock(ist(12, 0))
        set_manual_override(other_shop, "force_close", "Renovation")

        data = super_client.get("/super-admin/availability/all/").json()
        by_slug = {row["slug"]: row for row in data}

        assert by_slug["spice-route"]["availability"] is None
        assert by_slug["spice-route"]["status"]["status"] == "open"
        assert by_slug["noodle-bar"]["status"]["status"] == "force_close"
        assert by_slug["noodle-bar"]["status"]["message"] == "Renovation"

    def test_bulk_availability(self, super_client, shop, other_shop):
        set_manual_override(shop, "force_close")

        response = super_client.put("/super-admin/availability/bulk/", {
            "openingTime": "08:00", "closingTime": "21:00",
        }, format="json")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Updated availability for 2 shops",
            "updated": 2,
            "failed": 0,
        }
        assert set(StoreAvailability.objects.values_list("manual_override", flat=True)) == {"none"}

    def test_bulk_availability_rejects_bad_time(self, super_client, shop):
        response = super_client.put("/super-admin/availability/bulk/", {"openingTime": "8"}, format="json")
        assert response.status_code == 400
