"""Publishers used by the domain and the routers.

Each helper builds the payload documented in ``Event_Bus`` and returns the
number of subscribers that handled it.
"""
from __future__ import annotations
from typing import Any, Iterable, Optional
from .Event_Bus import (
    publish,
    PANTRY_NEAR_EXPIRY, PANTRY_EXPIRING_SNAPSHOT, MEAL_COMPLETED, MEAL_REVERTED, SHOPPING_CLEARED,
)

__all__ = [
    'publish_near_expiry', 'publish_expiring_snapshot',
    'publish_meal_completed', 'publish_meal_reverted', 'publish_shopping_cleared',
]


def publish_near_expiry(item: Any, category: str, days_left: Optional[int]) -> int:
    return publish(PANTRY_NEAR_EXPIRY, {'item': item, 'category': category, 'days_left': days_left})


def publish_expiring_snapshot(items: Iterable[dict]) -> int:
    """``items`` are the rows produced by ``compute_expiring_soon``."""
    rows = list(items)
    return publish(PANTRY_EXPIRING_SNAPSHOT, {'count': len(rows), 'items': rows})


def publish_meal_completed(meal: Any, completion_type: str) -> int:
    return publish(MEAL_COMPLETED, {'meal': meal, 'completion_type': completion_type})


def publish_meal_reverted(meal: Any) -> int:
    return publish(MEAL_REVERTED, {'meal': meal})


def publish_shopping_cleared(items: Iterable[Any]) -> int:
    removed = list(items)
    return publish(SHOPPING_CLEARED, {'count': len(removed), 'items': removed})
