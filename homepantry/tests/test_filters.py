from datetime import datetime, timedelta
import unittest

from homepantry.domain.PantryItem import PantryItem
from homepantry.domain.ShoppingListItem import ShoppingListItem
from homepantry.logic.grouping.filters import ShoppingListFilters, apply_shopping_filters
from homepantry.logic.pantry.analysis import build_pantry_export, compute_expiring_soon, filter_pantry_items
from homepantry.utilities.errors import InvalidInputError

NOW = datetime(2025, 3, 12, 10, 0, 0)


class TestShoppingListFilters(unittest.TestCase):

    def setUp(self):
        self.items = [
            ShoppingListItem("Whole milk", "dairy", added_by="ana", added_at=NOW),
            ShoppingListItem("Bananas", "produce", checked=True, added_by="ben", added_at=NOW - timedelta(days=2)),
            ShoppingListItem("Steak", "meat", added_by="ana", added_at=NOW - timedelta(days=30)),
        ]

    def test_defaults_keep_everything(self):
        filters = ShoppingListFilters()
        self.assertEqual(apply_shopping_filters(self.items, filters, NOW), self.items)
        self.assertEqual(filters.active_count, 0)

    def test_search_is_case_insensitive(self):
        result = apply_shopping_filters(self.items, ShoppingListFilters(search="MILK"))
        self.assertEqual([i.name for i in result], ["Whole milk"])

    def test_combined_filters(self):
        filters = ShoppingListFilters(categories=["dairy", "meat"], status="unchecked", users=["ana"])
        self.assertEqual(filters.active_count, 3)
        result = apply_shopping_filters(self.items, filters)
        self.assertEqual([i.name for i in result], ["Whole milk", "Steak"])

    def test_date_windows(self):
        today = apply_shopping_filters(self.items, ShoppingListFilters(date_added="today"), NOW)
        week = apply_shopping_filters(self.items, ShoppingListFilters(date_added="this-week"), NOW)
        older = apply_shopping_filters(self.items, ShoppingListFilters(date_added="older"), NOW)
        self.assertEqual([i.name for i in today], ["Whole milk"])
        self.assertEqual([i.name for i in week], ["Bananas"])
        self.assertEqual([i.name for i in older], ["Steak"])

    def test_date_filter_needs_clock(self):
        with self.assertRaises(InvalidInputError):
            apply_shopping_filters(self.items, ShoppingListFilters(date_added="today"))

    def test_invalid_values_rejected(self):
        with self.assertRaises(InvalidInputError):
            ShoppingListFilters(status="bought")
        with self.assertRaises(InvalidInputError):
            ShoppingListFilters(categories=["toys"])
        with self.assertRaises(InvalidInputError):
            ShoppingListFilters(date_added="last-year")


class TestPantryAnalysis(unittest.TestCase):

    def setUp(self):
        self.items = [
            PantryItem("Milk", "fridge", quantity="1 litre", created_at=NOW, days_until_expiry=2, id="milk"),
            PantryItem("Peas", "freezer", created_at=NOW, days_until_expiry=90, id="peas"),
            PantryItem("Bread", "pantry", created_at=NOW - timedelta(days=5), days_until_expiry=3, id="bread"),
            PantryItem("Salt", "pantry", id="salt"),
        ]

    def test_filter_by_search_location_and_status(self):
        self.assertEqual([i.id for i in filter_pantry_items(self.items, NOW, search="litre")], ["milk"])
        self.assertEqual([i.id for i in filter_pantry_items(self.items, NOW, locations=["pantry"])],
                         ["bread", "salt"])
        self.assertEqual([i.id for i in filter_pantry_items(self.items, NOW, expiration="expired")], ["bread"])
        self.assertEqual([i.id for i in filter_pantry_items(self.items, NOW, expiration="unknown")], ["salt"])

    def test_filter_rejects_unknown_values(self):
        with self.assertRaises(InvalidInputError):
            filter_pantry_items(self.items, NOW, locations=["garage"])
        with self.assertRaises(InvalidInputError):
            filter_pantry_items(self.items, NOW, expiration="stale")

    def test_expiring_soon_sorted_soonest_first(self):
        snapshot = compute_expiring_soon(self.items, NOW)
        self.assertEqual([s['id'] for s in snapshot], ["bread", "milk"])
        self.assertEqual(snapshot[0]['category'], "expired")
        self.assertEqual(snapshot[0]['days_left'], -2)

    def test_export_payload(self):
        export = build_pantry_export(self.items, NOW)
        self.assertEqual(export['totalItems'], 4)
        self.assertEqual(export['exportSource'], "homepantry")
        self.assertEqual(export['exportedAt'], "2025-03-12T10:00:00Z")
        salt = export['items'][3]
        self.assertEqual(salt['quantity'], "Not specified")
        self.assertEqual(salt['detectedBy'], "manual")
        self.assertEqual(salt['expiry']['label'], "No expiry date")


if __name__ == '__main__':
    unittest.main()
