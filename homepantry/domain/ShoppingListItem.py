"""ShoppingListItem domain entity: an entry on the household's shared shopping list."""
from datetime import datetime
from typing import Optional
from uuid import uuid4

from homepantry.utilities.constants import SHOPPING_CATEGORIES, DEFAULT_CATEGORY
from homepantry.utilities.dates import parse_timestamp, format_timestamp
from homepantry.utilities.errors import InvalidInputError


class ShoppingListItem:
    def __init__(self, name: str = "", category: Optional[str] = None, checked: bool = False,
                 added_by: Optional[str] = None, added_at: Optional[datetime] = None,
                 quantity: Optional[str] = None, id: Optional[str] = None):
        category = category or DEFAULT_CATEGORY
        if category not in SHOPPING_CATEGORIES:
            raise InvalidInputError(f"Invalid category: {category!r}")
        self.id = id or uuid4().hex
        self.name = name
        self.category = category
        self.checked = bool(checked)
        self.added_by = added_by
        self.added_at = added_at
        self.quantity = quantity

    def __str__(self) -> str:
        mark = "x" if self.checked else " "
        return f"[{mark}] {self.name} ({self.category})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return ShoppingListItem(
            id=d.get("id"),
            name=d.get("name", ""),
            category=d.get("category"),
            checked=d.get("checked", False),
            added_by=d.get("addedBy"),
            added_at=parse_timestamp(d.get("addedAt")),
            quantity=d.get("quantity"),
        )

    def to_dict(self):
        doc = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "checked": self.checked,
            "addedBy": self.added_by,
            "addedAt": format_timestamp(self.added_at),
        }
        if self.quantity:
            doc["quantity"] = self.quantity
        return doc
