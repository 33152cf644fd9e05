"""Grouping engine for pantry items and shopping-list entries.

``group(items, strategy, now=...)`` partitions items into named buckets and
returns them with a fixed display order. Buckets that end up empty are left out
of both the mapping and the order.

Strategies (closed set, see ``GroupStrategy``):

    location     pantry, fridge, freezer
    expiration   expired, expiring-soon, fresh, unknown
    category     produce, dairy, meat, pantry, frozen, other
    date-added   today, yesterday, this-week, older
    status       unchecked, checked
    user         order of first appearance of ``added_by``
    none         all

Shopping-list strategies sort each bucket: unchecked first, then most recently
added, ties kept in input order. Pantry strategies and ``none`` keep input order.
"""
from __future__ import annotations
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from homepantry.logic.pantry.expiry import ExpiryCategory, classify
from homepantry.utilities.constants import (
    LOCATIONS, DEFAULT_LOCATION, SHOPPING_CATEGORIES, DEFAULT_CATEGORY, UNKNOWN_USER, RECENT_DAYS_WINDOW
)
from homepantry.utilities.errors import InvalidInputError

__all__ = ["GroupStrategy", "GroupedResult", "group"]


class GroupStrategy(str, Enum):
    LOCATION = "location"
    EXPIRATION = "expiration"
    CATEGORY = "category"
    DATE_ADDED = "date-added"
    STATUS = "status"
    USER = "user"
    NONE = "none"

    @classmethod
    def parse(cls, value: Any) -> "GroupStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidInputError(f"Unknown grouping strategy {value!r} (expected one of: {allowed})")


class GroupedResult:
    def __init__(self, buckets: Dict[str, List[Any]], order: List[str]):
        self.buckets = buckets
        self.order = order

    def items(self) -> List[Tuple[str, List[Any]]]:
        """(key, items) pairs in display order."""
        return [(key, self.buckets[key]) for key in self.order]

    def flatten(self) -> List[Any]:
        return [item for key in self.order for item in self.buckets[key]]

    def to_dict(self, serialize: Callable[[Any], Any] = lambda item: item.to_dict()):
        return {
            "order": list(self.order),
            "groups": {key: [serialize(item) for item in self.buckets[key]] for key in self.order},
        }

    def __len__(self) -> int:
        return len(self.order)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{k}={len(self.buckets[k])}" for k in self.order)
        return f"GroupedResult({sizes})"


# --- Bucket assignment -------------------------------------------------------

def _by_location(item, now):
    location = getattr(item, "location", None) or DEFAULT_LOCATION
    return location if location in LOCATIONS else DEFAULT_LOCATION


def _by_expiration(item, now):
    if now is None:
        raise InvalidInputError("Grouping by expiration needs the current time")
    return classify(item, now).value


def _by_category(item, now):
    category = getattr(item, "category", None) or DEFAULT_CATEGORY
    return category if category in SHOPPING_CATEGORIES else DEFAULT_CATEGORY


def _by_date_added(item, now):
    if now is None:
        raise InvalidInputError("Grouping by date added needs the current time")
    added_at = getattr(item, "added_at", None)
    if added_at is None:
        return "older"
    today_start = datetime.combine(now.date(), time.min)
    if added_at >= today_start:
        return "today"
    if added_at >= today_start - timedelta(days=1):
        return "yesterday"
    if added_at >= today_start - timedelta(days=RECENT_DAYS_WINDOW):
        return "this-week"
    return "older"


def _by_status(item, now):
    return "checked" if getattr(item, "checked", False) else "unchecked"


def _by_user(item, now):
    return getattr(item, "added_by", None) or UNKNOWN_USER


def _no_grouping(item, now):
    return "all"


# strategy -> (assign, fixed order or None for first-occurrence, shopping-list sort)
_STRATEGIES: Dict[GroupStrategy, Tuple[Callable[[Any, Optional[datetime]], str], Optional[Tuple[str, ...]], bool]] = {
    GroupStrategy.LOCATION: (_by_location, LOCATIONS, False),
    GroupStrategy.EXPIRATION: (_by_expiration, tuple(c.value for c in ExpiryCategory), False),
    GroupStrategy.CATEGORY: (_by_category, SHOPPING_CATEGORIES, True),
    GroupStrategy.DATE_ADDED: (_by_date_added, ("today", "yesterday", "this-week", "older"), True),
    GroupStrategy.STATUS: (_by_status, ("unchecked", "checked"), True),
    GroupStrategy.USER: (_by_user, None, True),
    GroupStrategy.NONE: (_no_grouping, ("all",), False),
}


def _age(value: Optional[datetime]) -> float:
    # items without a timestamp sort as the oldest
    if value is None:
        return float("inf")
    return -(value - datetime(1970, 1, 1)).total_seconds()


def _shopping_order(bucket: List[Any]) -> List[Any]:
    # sorted() is stable, so equal keys keep input order
    return sorted(bucket, key=lambda i: (bool(getattr(i, "checked", False)), _age(getattr(i, "added_at", None))))


def group(items: Iterable[Any], strategy: Any, now: Optional[datetime] = None) -> GroupedResult:
    """Partition ``items`` by ``strategy``.

    Args:
        items: PantryItem or ShoppingListItem objects.
        strategy: a GroupStrategy or its string value. Anything else raises InvalidInputError.
        now: current time (naive UTC); required for ``expiration`` and ``date-added``.

    Returns:
        GroupedResult with ``buckets`` (key -> items) and ``order`` (non-empty keys in display order).
        The input is not modified.
    """
    strategy = GroupStrategy.parse(strategy)
    assign, fixed_order, shopping_sort = _STRATEGIES[strategy]

    buckets: Dict[str, List[Any]] = {}
    for item in items:
        buckets.setdefault(assign(item, now), []).append(item)

    if shopping_sort:
        buckets = {key: _shopping_order(bucket) for key, bucket in buckets.items()}

    if fixed_order is None:
        order = list(buckets)
    else:
        order = [key for key in fixed_order if key in buckets]
    return GroupedResult({key: buckets[key] for key in order}, order)
