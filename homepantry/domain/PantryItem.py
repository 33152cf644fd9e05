"""PantryItem domain entity: name, storage location, optional quantity and shelf-life estimate."""
from datetime import datetime
from typing import Optional
from uuid import uuid4

from homepantry.utilities.constants import LOCATIONS, DEFAULT_LOCATION
from homepantry.utilities.dates import parse_timestamp, format_timestamp
from homepantry.utilities.errors import InvalidInputError


class PantryItem:
    def __init__(self, name: str = "", location: Optional[str] = None, quantity: Optional[str] = None,
                 created_at: Optional[datetime] = None, days_until_expiry: Optional[int] = None,
                 confidence: Optional[float] = None, detected_by: Optional[str] = None,
                 created_by: Optional[str] = None, id: Optional[str] = None):
        location = location or DEFAULT_LOCATION
        if location not in LOCATIONS:
            raise InvalidInputError(f"Invalid location: {location!r}")
        if days_until_expiry is not None:
            if isinstance(days_until_expiry, bool) or not isinstance(days_until_expiry, int) or days_until_expiry < 0:
                raise InvalidInputError(f"daysUntilExpiry must be a non-negative integer: {days_until_expiry!r}")
        self.id = id or uuid4().hex
        self.name = name
        self.location = location
        self.quantity = quantity
        self.created_at = created_at
        self.days_until_expiry = days_until_expiry
        self.confidence = confidence
        self.detected_by = detected_by
        self.created_by = created_by

    def __str__(self) -> str:
        parts = [f"{self.name} ({self.location})"]
        if self.quantity:
            parts.append(self.quantity)
        if self.days_until_expiry is not None:
            parts.append(f"keeps {self.days_until_expiry}d")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a PantryItem from a stored document. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        days = d.get("daysUntilExpiry")
        if isinstance(days, float) and days.is_integer():
            days = int(days)
        return PantryItem(
            id=d.get("id"),
            name=d.get("name", ""),
            location=d.get("location"),
            quantity=d.get("quantity"),
            created_at=parse_timestamp(d.get("createdAt")),
            days_until_expiry=days,
            confidence=d.get("confidence"),
            detected_by=d.get("detectedBy"),
            created_by=d.get("createdBy"),
        )

    def to_dict(self):
        '''Converts the PantryItem to a JSON document; optional fields are left out when unset.'''
        doc = {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "createdAt": format_timestamp(self.created_at),
        }
        optional = {
            "quantity": self.quantity,
            "daysUntilExpiry": self.days_until_expiry,
            "confidence": self.confidence,
            "detectedBy": self.detected_by,
            "createdBy": self.created_by,
        }
        doc.update({k: v for k, v in optional.items() if v is not None})
        return doc
