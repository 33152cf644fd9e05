"""ShoppingList aggregate: items to purchase, checked off while shopping."""
from datetime import datetime
from typing import List, Optional

from homepantry.domain.ShoppingListItem import ShoppingListItem
from homepantry.utilities.errors import InvalidInputError, NotFoundError


class ShoppingList:
    def __init__(self, items: Optional[List[ShoppingListItem]] = None):
        self.items: List[ShoppingListItem] = list(items) if items else []

    def add_item(self, name: str, added_by: str, now: datetime, category: Optional[str] = None,
                 quantity: Optional[str] = None) -> ShoppingListItem:
        '''
        Adds a new unchecked item to the shopping list.
        '''
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Please enter an item")
        item = ShoppingListItem(name=name, category=category, added_by=added_by, added_at=now, quantity=quantity)
        self.items.append(item)
        return item

    def get_item(self, item_id: str) -> ShoppingListItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Shopping list item '{item_id}' not found.")

    def set_checked(self, item_id: str, checked: bool) -> ShoppingListItem:
        item = self.get_item(item_id)
        item.checked = bool(checked)
        return item

    def update_item(self, item_id: str, name: Optional[str] = None, category: Optional[str] = None,
                    quantity: Optional[str] = None) -> ShoppingListItem:
        '''
        Edits name, category or quantity in place; fields left as None are unchanged.
        '''
        item = self.get_item(item_id)
        if name is not None:
            if not name.strip():
                raise InvalidInputError("Item name cannot be empty")
            item.name = name.strip()
        if category is not None:
            # validate through the entity constructor
            item.category = ShoppingListItem(name=item.name, category=category).category
        if quantity is not None:
            item.quantity = quantity or None
        return item

    def remove_item(self, item_id: str) -> ShoppingListItem:
        item = self.get_item(item_id)
        self.items.remove(item)
        return item

    def clear_checked(self) -> List[ShoppingListItem]:
        '''
        Removes every checked item at once and returns the removed items.
        '''
        removed = [item for item in self.items if item.checked]
        if not removed:
            return []
        self.items = [item for item in self.items if not item.checked]
        return removed

    def get_items(self):
        return self.items

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Shopping List Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        return ShoppingList([ShoppingListItem.from_dict(d) for d in data or []])

    def to_dict(self):
        return [item.to_dict() for item in self.items]
