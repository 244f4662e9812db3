"""
Wall-clock helpers for store availability.

Shops keep their hours as ``HH:MM`` strings in their own IANA zone, so every
comparison happens on minutes since local midnight after converting "now"
into that zone.
"""
import logging
import re
from collections import namedtuple
from datetime import date, datetime

import pytz
from django.utils import timezone as dj_timezone

logger = logging.getLogger(__name__)

TIME_OF_DAY_RE = re.compile(r'^([01]?[0-9]|2[0-3]):[0-5][0-9]$')
DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# Local civil date and minutes since midnight, plus the zone name actually used.
LocalClock = namedtuple('LocalClock', ['date', 'minutes', 'zone', 'fallback'])


def is_valid_time_of_day(value):
    return isinstance(value, str) and bool(TIME_OF_DAY_RE.match(value))


def is_valid_date_string(value):
    return isinstance(value, str) and bool(DATE_RE.match(value))


def is_valid_timezone(name):
    if not isinstance(name, str) or not name.strip():
        return False
    try:
        pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        return False
    return True


def parse_time_of_day(value):
    """Convert ``"HH:MM"`` into minutes since midnight, or raise ValueError."""
    if not is_valid_time_of_day(value):
        raise ValueError(f"Invalid time of day: {value!r}")
    hours, minutes = value.split(':')
    return int(hours) * 60 + int(minutes)


def parse_date(value):
    """Convert ``"YYYY-MM-DD"`` into a date, or raise ValueError."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not is_valid_date_string(value):
        raise ValueError(f"Invalid date: {value!r}")
    return datetime.strptime(value, '%Y-%m-%d').date()


def _as_utc(now):
    if now.tzinfo is None:
        return pytz.UTC.localize(now)
    return now.astimezone(pytz.UTC)


def local_clock(now, tz_name):
    """
    Wall-clock date and minute of ``now`` in ``tz_name``.

    An unknown or empty zone name never raises: the server's local zone
    (settings.TIME_ZONE) is used instead and ``fallback`` is set.
    """
    now_utc = _as_utc(now)
    try:
        tz = pytz.timezone(tz_name)
        local = now_utc.astimezone(tz)
        zone = tz_name
        fallback = False
    except (pytz.UnknownTimeZoneError, AttributeError, TypeError, ValueError):
        logger.warning("Unknown timezone %r, falling back to server local time", tz_name)
        local = dj_timezone.localtime(now_utc)
        zone = dj_timezone.get_current_timezone_name()
        fallback = True

    return LocalClock(
        date=local.date(),
        minutes=local.hour * 60 + local.minute,
        zone=zone,
        fallback=fallback,
    )
