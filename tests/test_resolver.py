from datetime import date

import pytest

from availability.resolver import (
    STORE_STATUSES, AvailabilityConfig, AvailabilityDefaults, AvailabilityResolver,
    Holiday, InMemoryAvailabilityRepository, shop_local_clock,
)
from tests.utils import ist, utc

SHOP = "shop-1"
DEFAULTS = AvailabilityDefaults(opening_time="09:00", closing_time="22:00", timezone="Asia/Kolkata")
TODAY = date(2026, 3, 10)


def make_resolver(now, config=None, holidays=(), defaults=DEFAULTS):
    repository = InMemoryAvailabilityRepository(
        configs={SHOP: config} if config else {},
        holidays={SHOP: list(holidays)},
    )
    return AvailabilityResolver(repository=repository, defaults=defaults, clock=lambda: now)


def config(**overrides):
    values = dict(opening_time="09:00", closing_time="22:00", timezone="Asia/Kolkata", manual_override="none")
    values.update(overrides)
    return AvailabilityConfig(**values)


class TestOpeningHours:

    def test_before_opening_opens_later(self):
        result = make_resolver(ist(8, 59), config()).resolve(SHOP)
        assert result.status == "opens_later"
        assert result.is_open is False
        assert result.next_open_time == "09:00"
        assert result.message == "Opens at 09:00"

    def test_opening_minute_is_open(self):
        result = make_resolver(ist(9, 0), config()).resolve(SHOP)
        assert result.status == "open"
        assert result.is_open is True
        assert result.message == "Open"

    def test_last_minute_before_closing_is_open(self):
        result = make_resolver(ist(21, 59), config()).resolve(SHOP)
        assert result.status == "open"
        assert result.is_open is True

    def test_closing_minute_is_closed(self):
        result = make_resolver(ist(22, 0), config()).resolve(SHOP)
        assert result.status == "closed"
        assert result.is_open is False
        assert result.message == "Closed"
        assert result.next_open_time is None

    def test_echoes_configured_hours(self):
        result = make_resolver(ist(12, 0), config(opening_time="10:30", closing_time="18:00")).resolve(SHOP)
        assert (result.opening_time, result.closing_time, result.timezone) == ("10:30", "18:00", "Asia/Kolkata")

    def test_hours_are_read_in_shop_timezone(self):
        # 14:00 UTC is 10:00 in New York (EDT) but 19:30 in Kolkata
        instant = utc(2026, 7, 1, 14, 0)
        ny = make_resolver(instant, config(timezone="America/New_York", opening_time="11:00")).resolve(SHOP)
        kolkata = make_resolver(instant, config(opening_time="11:00")).resolve(SHOP)
        assert ny.status == "opens_later"
        assert kolkata.status == "open"

    def test_midnight_spanning_hours_always_closed(self):
        overnight = config(opening_time="22:00", closing_time="06:00")
        assert make_resolver(ist(23, 0), overnight).resolve(SHOP).status == "closed"
        assert make_resolver(ist(3, 0), overnight).resolve(SHOP).status == "opens_later"


class TestOverrides:

    def test_force_close_beats_holiday_and_hours(self):
        holidays = [Holiday(TODAY, "Holi")]
        result = make_resolver(ist(12, 0), config(manual_override="force_close"), holidays).resolve(SHOP)
        assert result.status == "force_close"
        assert result.is_open is False
        assert result.message == "Temporarily Closed"
        assert result.holiday_name is None

    def test_force_close_uses_reason(self):
        result = make_resolver(
            ist(12, 0), config(manual_override="force_close", override_reason="Kitchen maintenance")
        ).resolve(SHOP)
        assert result.message == "Kitchen maintenance"

    def test_force_open_beats_holiday(self):
        holidays = [Holiday(TODAY, "Holi")]
        result = make_resolver(ist(12, 0), config(manual_override="force_open"), holidays).resolve(SHOP)
        assert result.status == "force_open"
        assert result.is_open is True
        assert result.message == "Open (Manually Opened)"

    @pytest.mark.parametrize("hour, minute", [(3, 0), (23, 30)])
    def test_force_open_beats_outside_hours(self, hour, minute):
        result = make_resolver(
            ist(hour, minute), config(manual_override="force_open", override_reason="Late night special")
        ).resolve(SHOP)
        assert result.status == "force_open"
        assert result.is_open is True
        assert result.message == "Late night special"

    def test_blank_reason_uses_default_message(self):
        result = make_resolver(ist(12, 0), config(manual_override="force_close", override_reason="")).resolve(SHOP)
        assert result.message == "Temporarily Closed"


class TestHolidays:

    def test_holiday_today_closes_shop(self):
        holidays = [Holiday(date(2026, 3, 9), "Yesterday"), Holiday(TODAY, "Holi")]
        result = make_resolver(ist(12, 0), config(), holidays).resolve(SHOP)
        assert result.status == "holiday"
        assert result.is_open is False
        assert result.holiday_name == "Holi"
        assert result.message == "Closed (Holi)"

    def test_holiday_on_other_day_is_ignored(self):
        result = make_resolver(ist(12, 0), config(), [Holiday(date(2026, 3, 11), "Tomorrow")]).resolve(SHOP)
        assert result.status == "open"

    def test_holiday_date_uses_shop_timezone(self):
        # 19:00 UTC on the 25th is already 00:30 on the 26th in Kolkata
        instant = utc(2026, 1, 25, 19, 0)
        holidays = [Holiday(date(2026, 1, 26), "Republic Day")]

        kolkata = make_resolver(instant, config(opening_time="00:00", closing_time="23:59"), holidays).resolve(SHOP)
        new_york = make_resolver(instant, config(timezone="America/New_York"), holidays).resolve(SHOP)

        assert kolkata.status == "holiday"
        assert new_york.status == "open"


class TestDefaults:

    @pytest.mark.parametrize("hour, minute", [(8, 59), (9, 0), (21, 59), (22, 0)])
    def test_missing_config_matches_explicit_defaults(self, hour, minute):
        missing = make_resolver(ist(hour, minute)).resolve(SHOP)
        explicit = make_resolver(ist(hour, minute), config()).resolve(SHOP)
        assert missing == explicit

    def test_missing_config_echoes_defaults(self):
        result = make_resolver(ist(12, 0)).resolve(SHOP)
        assert (result.opening_time, result.closing_time, result.timezone) == ("09:00", "22:00", "Asia/Kolkata")

    def test_injected_defaults_are_used(self):
        defaults = AvailabilityDefaults(opening_time="07:00", closing_time="11:00", timezone="UTC")
        result = make_resolver(utc(2026, 3, 10, 11, 0), defaults=defaults).resolve(SHOP)
        assert result.status == "closed"
        assert result.timezone == "UTC"

    def test_defaults_come_from_settings(self, settings):
        settings.STORE_AVAILABILITY_DEFAULTS = {
            "OPENING_TIME": "06:00", "CLOSING_TIME": "12:00", "TIMEZONE": "Europe/London",
        }
        defaults = AvailabilityDefaults.from_settings()
        assert defaults == AvailabilityDefaults("06:00", "12:00", "Europe/London", "none")

    def test_malformed_stored_hours_fall_back_to_defaults(self):
        result = make_resolver(ist(8, 30), config(opening_time="25:99", closing_time="late")).resolve(SHOP)
        assert result.opening_time == "09:00"
        assert result.closing_time == "22:00"
        assert result.status == "opens_later"

    def test_empty_fields_take_defaults(self):
        result = make_resolver(ist(12, 0), config(opening_time="", timezone="", manual_override="")).resolve(SHOP)
        assert result.status == "open"
        assert result.timezone == "Asia/Kolkata"


class TestTimezoneFallback:

    def test_invalid_timezone_uses_server_time(self, settings):
        settings.TIME_ZONE = "UTC"
        resolver = make_resolver(utc(2026, 3, 10, 10, 0), config(timezone="Mars/Olympus"))
        result = resolver.resolve(SHOP)
        assert result.status == "open"
        assert result.timezone == "Mars/Olympus"

    def test_invalid_timezone_after_hours_is_closed(self, settings):
        settings.TIME_ZONE = "UTC"
        result = make_resolver(utc(2026, 3, 10, 23, 0), config(timezone="Not/AZone")).resolve(SHOP)
        assert result.status == "closed"
        assert result.is_open is False


@pytest.mark.parametrize("override", ["none", "force_open", "force_close"])
@pytest.mark.parametrize("hour", [0, 8, 9, 12, 21, 22, 23])
@pytest.mark.parametrize("is_holiday", [False, True])
def test_exactly_one_status(override, hour, is_holiday):
    holidays = [Holiday(TODAY, "Holiday")] if is_holiday else []
    result = make_resolver(ist(hour, 0), config(manual_override=override), holidays).resolve(SHOP)
    assert result.status in STORE_STATUSES
    assert result.is_open == (result.status in ("open", "force_open"))


def test_resolve_with_uses_given_data():
    resolver = AvailabilityResolver(defaults=DEFAULTS, repository=InMemoryAvailabilityRepository())
    result = resolver.resolve_with(config(), [Holiday(TODAY, "Holi")], now=ist(12, 0))
    assert result.status == "holiday"


def test_resolve_is_recomputed_each_call():
    now = {"value": ist(8, 0)}
    repository = InMemoryAvailabilityRepository(configs={SHOP: config()})
    resolver = AvailabilityResolver(repository=repository, defaults=DEFAULTS, clock=lambda: now["value"])

    assert resolver.resolve(SHOP).status == "opens_later"
    now["value"] = ist(10, 0)
    assert resolver.resolve(SHOP).status == "open"


def test_invalid_configured_defaults_fall_back(settings):
    settings.STORE_AVAILABILITY_DEFAULTS = {
        "OPENING_TIME": "9am",
        "CLOSING_TIME": "23:00",
        "TIMEZONE": "Nowhere/City",
        "MANUAL_OVERRIDE": "always",
    }
    defaults = AvailabilityDefaults.from_settings()
    assert defaults == AvailabilityDefaults("09:00", "23:00", "Asia/Kolkata", "none")

    repository = InMemoryAvailabilityRepository()
    result = AvailabilityResolver(repository=repository, clock=lambda: ist(12, 0)).resolve(SHOP)
    assert result.status == "open"
    assert result.opening_time == "09:00"


def test_unknown_stored_override_is_ignored():
    result = make_resolver(ist(12, 0), config(manual_override="sometimes")).resolve(SHOP)
    assert result.status == "open"
    assert result.is_open is True


def test_shop_local_clock_uses_configured_zone():
    repository = InMemoryAvailabilityRepository(configs={SHOP: config(timezone="America/New_York")})
    resolver = AvailabilityResolver(repository=repository, defaults=DEFAULTS)

    local = shop_local_clock(SHOP, now=utc(2026, 3, 10, 3, 0), resolver=resolver)

    assert local.zone == "America/New_York"
    assert local.date == date(2026, 3, 9)
    assert local.minutes == 23 * 60
