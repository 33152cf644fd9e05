"""Shopping list repository (file persistence)."""
from homepantry.domain.ShoppingList import ShoppingList
from homepantry.infra.Document_Store import DocumentStore
from homepantry.infra.paths import SHOPPING_COLLECTION


class ShoppingListRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    def load(self, home_id: str) -> ShoppingList:
        return ShoppingList.from_dict(self.store.load(home_id, SHOPPING_COLLECTION))

    def save(self, home_id: str, shopping_list: ShoppingList) -> None:
        # the whole list is rewritten in one go, so clearing checked items is all-or-nothing
        self.store.save(home_id, SHOPPING_COLLECTION, shopping_list.to_dict())
