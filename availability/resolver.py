"""
Store availability resolution.

Decides whether a shop is accepting orders right now. The checks run in a
fixed order and the first match wins:

1. manual force-close
2. manual force-open
3. today (in the shop's zone) is a holiday
4. before opening time   -> ``opens_later``
5. at or after closing   -> ``closed``
6. otherwise             -> ``open``

Hours are a same-day minute range ``[opening, closing)``. A range that
crosses midnight (e.g. 22:00-06:00) therefore always evaluates as closed.
"""
import abc
import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Iterable, List, Optional

from django.conf import settings
from django.utils import timezone

from .timeutils import LocalClock, is_valid_time_of_day, is_valid_timezone, local_clock, parse_time_of_day

logger = logging.getLogger(__name__)


def current_time():
    return timezone.now()


OVERRIDE_NONE = 'none'
OVERRIDE_FORCE_OPEN = 'force_open'
OVERRIDE_FORCE_CLOSE = 'force_close'
MANUAL_OVERRIDES = (OVERRIDE_NONE, OVERRIDE_FORCE_OPEN, OVERRIDE_FORCE_CLOSE)

STATUS_FORCE_CLOSE = 'force_close'
STATUS_FORCE_OPEN = 'force_open'
STATUS_HOLIDAY = 'holiday'
STATUS_OPENS_LATER = 'opens_later'
STATUS_CLOSED = 'closed'
STATUS_OPEN = 'open'
STORE_STATUSES = (
    STATUS_FORCE_CLOSE, STATUS_FORCE_OPEN, STATUS_HOLIDAY,
    STATUS_OPENS_LATER, STATUS_CLOSED, STATUS_OPEN,
)


@dataclass(frozen=True)
class AvailabilityDefaults:
    opening_time: str = '09:00'
    closing_time: str = '22:00'
    timezone: str = 'Asia/Kolkata'
    manual_override: str = OVERRIDE_NONE

    @classmethod
    def from_settings(cls):
        """
        Read STORE_AVAILABILITY_DEFAULTS; an unusable value is replaced by
        the built-in default so resolving can never fail on configuration.
        """
        configured = getattr(settings, 'STORE_AVAILABILITY_DEFAULTS', {})
        base = cls()
        checks = (
            ('opening_time', 'OPENING_TIME', is_valid_time_of_day),
            ('closing_time', 'CLOSING_TIME', is_valid_time_of_day),
            ('timezone', 'TIMEZONE', is_valid_timezone),
            ('manual_override', 'MANUAL_OVERRIDE', lambda value: value in MANUAL_OVERRIDES),
        )

        values = {}
        for attr, key, is_valid in checks:
            value = configured.get(key, getattr(base, attr))
            if not is_valid(value):
                logger.warning(
                    "Invalid STORE_AVAILABILITY_DEFAULTS[%r]=%r, using %r",
                    key, value, getattr(base, attr),
                )
                value = getattr(base, attr)
            values[attr] = value
        return cls(**values)


@dataclass(frozen=True)
class AvailabilityConfig:
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None
    timezone: Optional[str] = None
    manual_override: Optional[str] = None
    override_reason: Optional[str] = None

    @classmethod
    def from_model(cls, availability):
        return cls(
            opening_time=availability.opening_time,
            closing_time=availability.closing_time,
            timezone=availability.timezone,
            manual_override=availability.manual_override,
            override_reason=availability.override_reason,
        )


@dataclass(frozen=True)
class Holiday:
    holiday_date: date
    name: str

    @classmethod
    def from_model(cls, holiday):
        return cls(holiday_date=holiday.holiday_date, name=holiday.name)


@dataclass(frozen=True)
class StoreStatus:
    is_open: bool
    status: str
    message: str
    opening_time: str
    closing_time: str
    timezone: str
    holiday_name: Optional[str] = None
    next_open_time: Optional[str] = None


class AvailabilityRepository(abc.ABC):
    """Read access the resolver needs; nothing else about storage leaks in."""

    @abc.abstractmethod
    def get_config(self, shop_id) -> Optional[AvailabilityConfig]:
        ...

    @abc.abstractmethod
    def get_holidays(self, shop_id) -> List[Holiday]:
        ...

    def find_holiday(self, shop_id, day: date) -> Optional[Holiday]:
        for holiday in self.get_holidays(shop_id):
            if holiday.holiday_date == day:
                return holiday
        return None


class DjangoAvailabilityRepository(AvailabilityRepository):
    def get_config(self, shop_id):
        from .models import StoreAvailability

        availability = StoreAvailability.objects.filter(shop_id=shop_id).first()
        if availability is None:
            return None
        return AvailabilityConfig.from_model(availability)

    def get_holidays(self, shop_id):
        from .models import StoreHoliday

        return [
            Holiday.from_model(h)
            for h in StoreHoliday.objects.filter(shop_id=shop_id).order_by('holiday_date')
        ]

    def find_holiday(self, shop_id, day):
        from .models import StoreHoliday

        holiday = StoreHoliday.objects.filter(shop_id=shop_id, holiday_date=day).first()
        if holiday is None:
            return None
        return Holiday.from_model(holiday)


class InMemoryAvailabilityRepository(AvailabilityRepository):
    """Dict-backed repository, handy for previews and tests."""

    def __init__(self, configs=None, holidays=None):
        self.configs = dict(configs or {})
        self.holidays = {k: list(v) for k, v in (holidays or {}).items()}

    def get_config(self, shop_id):
        return self.configs.get(shop_id)

    def get_holidays(self, shop_id):
        return list(self.holidays.get(shop_id, []))


class AvailabilityResolver:
    """
    Computes a fresh StoreStatus for a shop on every call.

    ``clock`` returns the current instant; ``defaults`` fill in a missing
    config row or unusable stored values.
    """

    def __init__(self, repository: Optional[AvailabilityRepository] = None,
                 defaults: Optional[AvailabilityDefaults] = None,
                 clock: Optional[Callable] = None):
        self.repository = repository or DjangoAvailabilityRepository()
        self.defaults = defaults or AvailabilityDefaults.from_settings()
        self.clock = clock or current_time

    def resolve(self, shop_id) -> StoreStatus:
        config = self.effective_config(self.repository.get_config(shop_id))
        local = local_clock(self.clock(), config.timezone)

        holiday = None
        if config.manual_override not in (OVERRIDE_FORCE_CLOSE, OVERRIDE_FORCE_OPEN):
            holiday = self.repository.find_holiday(shop_id, local.date)
        return self.evaluate(config, holiday, local)

    def resolve_with(self, config: Optional[AvailabilityConfig],
                     holidays: Iterable[Holiday], now=None) -> StoreStatus:
        """Resolve against data the caller already holds."""
        config = self.effective_config(config)
        local = local_clock(now or self.clock(), config.timezone)
        holiday = next((h for h in holidays if h.holiday_date == local.date), None)
        return self.evaluate(config, holiday, local)

    def effective_config(self, config: Optional[AvailabilityConfig]) -> AvailabilityConfig:
        defaults = self.defaults
        if config is None:
            return AvailabilityConfig(
                opening_time=defaults.opening_time,
                closing_time=defaults.closing_time,
                timezone=defaults.timezone,
                manual_override=defaults.manual_override,
            )

        opening_time = config.opening_time or defaults.opening_time
        closing_time = config.closing_time or defaults.closing_time
        if not is_valid_time_of_day(opening_time) or not is_valid_time_of_day(closing_time):
            logger.warning(
                "Malformed stored hours %r-%r, using defaults %s-%s",
                config.opening_time, config.closing_time,
                defaults.opening_time, defaults.closing_time,
            )
            if not is_valid_time_of_day(opening_time):
                opening_time = defaults.opening_time
            if not is_valid_time_of_day(closing_time):
                closing_time = defaults.closing_time

        manual_override = config.manual_override or defaults.manual_override
        if manual_override not in MANUAL_OVERRIDES:
            logger.warning("Unknown stored override %r, using %r", manual_override, defaults.manual_override)
            manual_override = defaults.manual_override

        return replace(
            config,
            opening_time=opening_time,
            closing_time=closing_time,
            timezone=config.timezone or defaults.timezone,
            manual_override=manual_override,
            override_reason=config.override_reason or None,
        )

    def evaluate(self, config: AvailabilityConfig, holiday: Optional[Holiday], local: LocalClock) -> StoreStatus:
        echo = {
            'opening_time': config.opening_time,
            'closing_time': config.closing_time,
            'timezone': config.timezone,
        }

        if config.manual_override == OVERRIDE_FORCE_CLOSE:
            return StoreStatus(
                is_open=False,
                status=STATUS_FORCE_CLOSE,
                message=config.override_reason or 'Temporarily Closed',
                **echo
            )

        if config.manual_override == OVERRIDE_FORCE_OPEN:
            return StoreStatus(
                is_open=True,
                status=STATUS_FORCE_OPEN,
                message=config.override_reason or 'Open (Manually Opened)',
                **echo
            )

        if holiday is not None:
            return StoreStatus(
                is_open=False,
                status=STATUS_HOLIDAY,
                message=f"Closed ({holiday.name})",
                holiday_name=holiday.name,
                **echo
            )

        current_minutes = local.minutes
        open_minutes = parse_time_of_day(config.opening_time)
        close_minutes = parse_time_of_day(config.closing_time)

        if current_minutes < open_minutes:
            return StoreStatus(
                is_open=False,
                status=STATUS_OPENS_LATER,
                message=f"Opens at {config.opening_time}",
                next_open_time=config.opening_time,
                **echo
            )

        if current_minutes >= close_minutes:
            return StoreStatus(is_open=False, status=STATUS_CLOSED, message='Closed', **echo)

        return StoreStatus(is_open=True, status=STATUS_OPEN, message='Open', **echo)


def get_store_status(shop_id, resolver: Optional[AvailabilityResolver] = None) -> StoreStatus:
    return (resolver or AvailabilityResolver()).resolve(shop_id)


def shop_local_clock(shop_id, now=None, resolver: Optional[AvailabilityResolver] = None) -> LocalClock:
    """Local date and time of ``now`` (default: the real current instant) in the shop's zone."""
    resolver = resolver or AvailabilityResolver()
    config = resolver.effective_config(resolver.repository.get_config(shop_id))
    return local_clock(now or timezone.now(), config.timezone)
