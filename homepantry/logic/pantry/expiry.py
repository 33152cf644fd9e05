"""Expiry classification for pantry items.

An item's expiry instant is ``created_at + days_until_expiry`` days. The number
of remaining days is rounded to the nearest whole day (halves round up) and
mapped to a freshness category:

    remaining <= 0            -> expired
    0 < remaining <= 7        -> expiring-soon
    remaining > 7             -> fresh
    missing created_at/days   -> unknown

The current time is always passed in; nothing here reads the clock.
"""
from __future__ import annotations
import math
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional

from homepantry.utilities.constants import EXPIRING_SOON_DAYS, URGENT_EXPIRY_DAYS

__all__ = ["ExpiryCategory", "ExpiryInfo", "classify", "remaining_days", "describe_expiry"]

_DAY_SECONDS = 24 * 60 * 60


class ExpiryCategory(str, Enum):
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring-soon"
    FRESH = "fresh"
    UNKNOWN = "unknown"


def remaining_days(item: Any, now: datetime) -> Optional[int]:
    """Whole days left before the item expires, or None when the item has no estimate."""
    created_at = getattr(item, "created_at", None)
    days = getattr(item, "days_until_expiry", None)
    if created_at is None or days is None:
        return None
    expiry = created_at + timedelta(days=days)
    return math.floor((expiry - now).total_seconds() / _DAY_SECONDS + 0.5)


def classify(item: Any, now: datetime) -> ExpiryCategory:
    left = remaining_days(item, now)
    if left is None:
        return ExpiryCategory.UNKNOWN
    if left <= 0:
        return ExpiryCategory.EXPIRED
    if left <= EXPIRING_SOON_DAYS:
        return ExpiryCategory.EXPIRING_SOON
    return ExpiryCategory.FRESH


class ExpiryInfo:
    """Display annotation for one item: label text plus the underlying figures."""

    def __init__(self, category: ExpiryCategory, remaining: Optional[int], label: str, urgent: bool = False):
        self.category = category
        self.remaining_days = remaining
        self.label = label
        self.urgent = urgent

    def to_dict(self):
        return {
            "category": self.category.value,
            "remainingDays": self.remaining_days,
            "label": self.label,
            "urgent": self.urgent,
        }

    def __repr__(self) -> str:
        return f"ExpiryInfo({self.category.value}, {self.remaining_days}, {self.label!r})"


def describe_expiry(item: Any, now: datetime) -> ExpiryInfo:
    left = remaining_days(item, now)
    category = classify(item, now)
    if left is None:
        return ExpiryInfo(category, None, "No expiry date")
    if left <= 0:
        return ExpiryInfo(category, left, "Expired!")
    label = f"{left} day left" if left == 1 else f"{left} days left"
    return ExpiryInfo(category, left, label, urgent=left <= URGENT_EXPIRY_DAYS)
