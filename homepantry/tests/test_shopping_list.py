from datetime import datetime
import unittest

from homepantry.domain.ShoppingList import ShoppingList
from homepantry.utilities.errors import InvalidInputError, NotFoundError

NOW = datetime(2025, 3, 12, 18, 0, 0)


class TestShoppingList(unittest.TestCase):

    def setUp(self):
        self.shopping_list = ShoppingList()

    def test_add_item_trims_and_defaults(self):
        item = self.shopping_list.add_item("  Milk ", "ana", NOW)
        self.assertEqual(item.name, "Milk")
        self.assertEqual(item.category, "other")
        self.assertFalse(item.checked)
        self.assertEqual(item.added_at, NOW)

    def test_blank_name_rejected(self):
        with self.assertRaises(InvalidInputError):
            self.shopping_list.add_item("   ", "ana", NOW)
        self.assertEqual(len(self.shopping_list), 0)

    def test_invalid_category_rejected(self):
        with self.assertRaises(InvalidInputError):
            self.shopping_list.add_item("Milk", "ana", NOW, category="toys")

    def test_update_item(self):
        item = self.shopping_list.add_item("Milk", "ana", NOW)
        self.shopping_list.update_item(item.id, name="Oat milk", category="dairy", quantity="2")
        self.assertEqual((item.name, item.category, item.quantity), ("Oat milk", "dairy", "2"))
        with self.assertRaises(InvalidInputError):
            self.shopping_list.update_item(item.id, category="toys")
        self.assertEqual(item.category, "dairy")
        with self.assertRaises(InvalidInputError):
            self.shopping_list.update_item(item.id, name=" ")

    def test_clear_checked_removes_only_checked(self):
        milk = self.shopping_list.add_item("Milk", "ana", NOW)
        bread = self.shopping_list.add_item("Bread", "ben", NOW)
        eggs = self.shopping_list.add_item("Eggs", "ben", NOW)
        self.shopping_list.set_checked(milk.id, True)
        self.shopping_list.set_checked(eggs.id, True)
        removed = self.shopping_list.clear_checked()
        self.assertEqual(removed, [milk, eggs])
        self.assertEqual(self.shopping_list.get_items(), [bread])
        self.assertEqual(self.shopping_list.clear_checked(), [])

    def test_missing_item(self):
        with self.assertRaises(NotFoundError):
            self.shopping_list.set_checked("nope", True)

    def test_documents(self):
        item = self.shopping_list.add_item("Milk", "ana", NOW, category="dairy", quantity="2 l")
        docs = self.shopping_list.to_dict()
        self.assertEqual(docs, [{"id": item.id, "name": "Milk", "category": "dairy", "checked": False,
                                 "addedBy": "ana", "addedAt": "2025-03-12T18:00:00Z", "quantity": "2 l"}])
        again = ShoppingList.from_dict(docs)
        self.assertEqual(again.get_item(item.id).added_at, NOW)


if __name__ == '__main__':
    unittest.main()
