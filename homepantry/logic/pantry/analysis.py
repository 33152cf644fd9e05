"""Pantry analysis helpers: filters, expiring snapshot and JSON export."""
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from homepantry.logic.pantry.expiry import ExpiryCategory, classify, describe_expiry, remaining_days
from homepantry.utilities.constants import LOCATIONS, EXPORT_SOURCE
from homepantry.utilities.dates import format_timestamp
from homepantry.utilities.errors import InvalidInputError

__all__ = ["filter_pantry_items", "compute_expiring_soon", "build_pantry_export", "EXPIRATION_FILTERS"]

EXPIRATION_FILTERS = ("all",) + tuple(c.value for c in ExpiryCategory)


def filter_pantry_items(items: Iterable[Any], now: datetime, *, search: str = "",
                        locations: Optional[Sequence[str]] = None, expiration: str = "all") -> List[Any]:
    """Narrow pantry items by free-text search, storage location and expiry status.

    Search looks at the name and the quantity text, case-insensitively.
    """
    unknown = [loc for loc in locations or [] if loc not in LOCATIONS]
    if unknown:
        raise InvalidInputError(f"Invalid locations: {', '.join(unknown)}")
    if expiration not in EXPIRATION_FILTERS:
        raise InvalidInputError(f"Invalid expiration filter: {expiration!r}")
    wanted_locations = list(locations) if locations else list(LOCATIONS)
    query = (search or "").strip().lower()

    result: List[Any] = []
    for item in items:
        if query and query not in (item.name or "").lower() and query not in (item.quantity or "").lower():
            continue
        if item.location not in wanted_locations:
            continue
        if expiration != "all" and classify(item, now).value != expiration:
            continue
        result.append(item)
    return result


def compute_expiring_soon(items: Iterable[Any], now: datetime) -> List[Dict[str, Any]]:
    """Return expired and expiring-soon items, soonest first (name breaks ties)."""
    result: List[Dict[str, Any]] = []
    for item in items:
        category = classify(item, now)
        if category not in (ExpiryCategory.EXPIRED, ExpiryCategory.EXPIRING_SOON):
            continue
        result.append({
            'id': item.id,
            'name': item.name,
            'location': item.location,
            'category': category.value,
            'days_left': remaining_days(item, now),
        })
    result.sort(key=lambda x: (x['days_left'], x['name'].lower()))
    return result


def build_pantry_export(items: Sequence[Any], now: datetime) -> Dict[str, Any]:
    """Export payload for the pantry: every item with its expiry annotation."""
    exported = []
    for item in items:
        doc = {
            'id': item.id,
            'name': item.name,
            'quantity': item.quantity or 'Not specified',
            'location': item.location,
            'createdAt': format_timestamp(item.created_at),
            'daysUntilExpiry': item.days_until_expiry,
            'createdBy': item.created_by,
            'confidence': item.confidence,
            'detectedBy': item.detected_by or 'manual',
        }
        doc['expiry'] = describe_expiry(item, now).to_dict()
        exported.append(doc)
    return {
        'exportedAt': format_timestamp(now),
        'totalItems': len(exported),
        'exportSource': EXPORT_SOURCE,
        'items': exported,
    }
