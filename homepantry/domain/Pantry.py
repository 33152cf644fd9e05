"""A household's stored items; flags the ones that are expired or close to it."""
from datetime import datetime
from typing import List, Optional

from homepantry.domain.PantryItem import PantryItem
from homepantry.events.Event_Bus import GLOBAL_EVENT_BUS, PANTRY_NEAR_EXPIRY
from homepantry.logic.pantry.expiry import ExpiryCategory, classify, remaining_days
from homepantry.utilities.errors import NotFoundError


class Pantry:
    def __init__(self, items: Optional[List[PantryItem]] = None):
        self.items: List[PantryItem] = list(items) if items else []
        self._event_bus = GLOBAL_EVENT_BUS

    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def _notify_near_expiry(self, item: PantryItem, category: ExpiryCategory, days_left: Optional[int]):
        self._event_bus.publish(PANTRY_NEAR_EXPIRY, {
            "item": item,
            "category": category.value,
            "days_left": days_left,
        })

    def add_item(self, item: PantryItem):
        self.items.append(item)
        return item

    def get_item(self, item_id: str) -> PantryItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Pantry item '{item_id}' not found.")

    def replace_item(self, item: PantryItem):
        """Swap in ``item`` for the stored entry sharing its id."""
        for index, existing in enumerate(self.items):
            if existing.id == item.id:
                self.items[index] = item
                return item
        raise NotFoundError(f"Pantry item '{item.id}' not found.")

    def remove_item(self, item_id: str) -> PantryItem:
        item = self.get_item(item_id)
        self.items.remove(item)
        return item

    def scan_and_notify(self, now: datetime):
        """Alert on expired and expiring-soon items; returns them."""
        flagged = []
        for item in self.items:
            category = classify(item, now)
            if category in (ExpiryCategory.EXPIRED, ExpiryCategory.EXPIRING_SOON):
                self._notify_near_expiry(item, category, remaining_days(item, now))
                flagged.append(item)
        return flagged

    def get_items(self):
        return self.items

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        return Pantry([PantryItem.from_dict(d) for d in data or []])

    def to_dict(self):
        return [item.to_dict() for item in self.items]
