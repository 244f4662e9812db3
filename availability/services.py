"""
Write-side operations for availability settings and holidays, and the
order-acceptance gate.
"""
import logging
from collections import namedtuple

from django.db import IntegrityError, transaction

from authentication.models import Shop
from .exceptions import DuplicateHolidayError, StoreClosedError
from .models import StoreAvailability, StoreHoliday, ManualOverride
from .resolver import AvailabilityDefaults, AvailabilityResolver

logger = logging.getLogger(__name__)

BulkUpdateResult = namedtuple('BulkUpdateResult', ['updated', 'failed'])
BulkHolidayResult = namedtuple('BulkHolidayResult', ['created', 'skipped', 'failed'])

AVAILABILITY_FIELDS = ('opening_time', 'closing_time', 'timezone', 'manual_override', 'override_reason')


# =============== ORDER GATE ===============

def ensure_store_open(shop_id, resolver=None):
    """Return the live status, or raise StoreClosedError when orders are not accepted."""
    store_status = (resolver or AvailabilityResolver()).resolve(shop_id)
    if not store_status.is_open:
        logger.info("Rejected order for shop %s: %s (%s)", shop_id, store_status.status, store_status.message)
        raise StoreClosedError(store_status)
    return store_status


# =============== SETTINGS ===============

def save_store_availability(shop, **fields):
    """
    Create or update the shop's single availability row.

    Only the given fields change; a new row starts from the configured
    defaults for anything not supplied.
    """
    changes = {k: v for k, v in fields.items() if k in AVAILABILITY_FIELDS}
    if 'override_reason' in changes:
        changes['override_reason'] = changes['override_reason'] or None

    defaults = AvailabilityDefaults.from_settings()
    with transaction.atomic():
        availability, created = StoreAvailability.objects.select_for_update().get_or_create(
            shop=shop,
            defaults={
                'opening_time': defaults.opening_time,
                'closing_time': defaults.closing_time,
                'timezone': defaults.timezone,
                'manual_override': defaults.manual_override,
                **changes,
            },
        )
        if not created and changes:
            for attr, value in changes.items():
                setattr(availability, attr, value)
            availability.save()
    return availability


def set_manual_override(shop, manual_override, override_reason=None):
    availability = save_store_availability(
        shop,
        manual_override=manual_override,
        override_reason=override_reason,
    )
    logger.info("Manual override for shop %s set to %s", shop.pk, manual_override)
    return availability


def override_confirmation(manual_override):
    if manual_override == ManualOverride.FORCE_OPEN:
        return "Store is now OPEN (orders can be placed)"
    if manual_override == ManualOverride.FORCE_CLOSE:
        return "Store is now CLOSED (orders are blocked)"
    return "Store timing is now normal"


def apply_availability_to_all_shops(opening_time=None, closing_time=None, timezone=None, override_reason=None):
    """
    Apply the same hours to every shop and clear any manual override.

    Each shop is saved in its own transaction; a failing shop is counted
    and skipped.
    """
    fields = {
        'manual_override': ManualOverride.NONE,
        'override_reason': override_reason,
        'timezone': timezone or AvailabilityDefaults.from_settings().timezone,
    }
    if opening_time:
        fields['opening_time'] = opening_time
    if closing_time:
        fields['closing_time'] = closing_time

    updated = failed = 0
    for shop in Shop.objects.all():
        try:
            save_store_availability(shop, **fields)
            updated += 1
        except Exception:
            logger.exception("Failed to update availability for shop %s", shop.pk)
            failed += 1
    return BulkUpdateResult(updated=updated, failed=failed)


# =============== HOLIDAYS ===============

def add_holiday(shop, holiday_date, name):
    """Add a single holiday; an existing date for the shop is an error."""
    if StoreHoliday.objects.filter(shop=shop, holiday_date=holiday_date).exists():
        raise DuplicateHolidayError()
    try:
        with transaction.atomic():
            return StoreHoliday.objects.create(shop=shop, holiday_date=holiday_date, name=name)
    except IntegrityError:
        # Lost a race with a concurrent insert of the same date
        raise DuplicateHolidayError()


def bulk_add_holidays(shop, holidays):
    """
    Add many holidays to one shop, skipping dates it already has.

    ``holidays`` is an iterable of ``{'holiday_date': date, 'name': str}``.
    Returns ``(created, skipped)``; repeated dates within the input count
    as skipped too.
    """
    holidays = list(holidays)
    seen = set(
        StoreHoliday.objects.filter(shop=shop).values_list('holiday_date', flat=True)
    )
    new_rows = []
    for holiday in holidays:
        if holiday['holiday_date'] in seen:
            continue
        seen.add(holiday['holiday_date'])
        new_rows.append(StoreHoliday(shop=shop, holiday_date=holiday['holiday_date'], name=holiday['name']))

    with transaction.atomic():
        created = StoreHoliday.objects.bulk_create(new_rows)
    return created, len(holidays) - len(created)


def add_holidays_to_all_shops(holidays):
    """Bulk-add holidays to every shop; one shop's failure does not stop the rest."""
    holidays = list(holidays)
    total_created = total_skipped = failed = 0
    for shop in Shop.objects.all():
        try:
            created, skipped = bulk_add_holidays(shop, holidays)
        except Exception:
            logger.exception("Failed to add holidays for shop %s", shop.pk)
            failed += 1
            continue
        total_created += len(created)
        total_skipped += skipped
    return BulkHolidayResult(created=total_created, skipped=total_skipped, failed=failed)


def delete_holiday(holiday):
    logger.info("Deleting holiday %s (%s) for shop %s", holiday.holiday_date, holiday.name, holiday.shop_id)
    holiday.delete()
