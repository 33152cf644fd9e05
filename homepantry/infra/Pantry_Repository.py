"""Pantry repository (file persistence)."""
import logging

from homepantry.domain.Pantry import Pantry
from homepantry.domain.PantryItem import PantryItem
from homepantry.infra.Document_Store import DocumentStore
from homepantry.infra.paths import PANTRY_COLLECTION

logger = logging.getLogger(__name__)


class PantryRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    def load(self, home_id: str) -> Pantry:
        return Pantry.from_dict(self.store.load(home_id, PANTRY_COLLECTION))

    def save(self, home_id: str, pantry: Pantry) -> None:
        self.store.save(home_id, PANTRY_COLLECTION, pantry.to_dict())

    def add(self, home_id: str, item: PantryItem) -> PantryItem:
        pantry = self.load(home_id)
        pantry.add_item(item)
        self.save(home_id, pantry)
        logger.info("Pantry item added home=%s id=%s name=%s", home_id, item.id, item.name)
        return item

    def update(self, home_id: str, item: PantryItem) -> PantryItem:
        pantry = self.load(home_id)
        pantry.replace_item(item)
        self.save(home_id, pantry)
        return item

    def delete(self, home_id: str, item_id: str) -> PantryItem:
        pantry = self.load(home_id)
        removed = pantry.remove_item(item_id)
        self.save(home_id, pantry)
        logger.info("Pantry item deleted home=%s id=%s", home_id, item_id)
        return removed
