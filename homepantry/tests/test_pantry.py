from datetime import datetime
import unittest

from homepantry.domain.Pantry import Pantry
from homepantry.domain.PantryItem import PantryItem
from homepantry.events.Event_Bus import EventBus, PANTRY_NEAR_EXPIRY
from homepantry.utilities.errors import InvalidInputError, NotFoundError

NOW = datetime(2025, 3, 12, 8, 0, 0)


class TestPantry(unittest.TestCase):

    def setUp(self):
        self.pantry = Pantry()

    def test_add_item(self):
        item = PantryItem("Sugar", "pantry", quantity="1 kg", created_at=NOW)
        self.pantry.add_item(item)
        self.assertIn(item, self.pantry.get_items())

    def test_remove_item(self):
        item = PantryItem("Sugar", "pantry", created_at=NOW)
        self.pantry.add_item(item)
        self.pantry.remove_item(item.id)
        self.assertNotIn(item, self.pantry.get_items())
        with self.assertRaises(NotFoundError):
            self.pantry.remove_item(item.id)

    def test_get_items(self):
        sugar = PantryItem("Sugar", "pantry", created_at=NOW)
        flour = PantryItem("Flour", "pantry", created_at=NOW)
        self.pantry.add_item(sugar)
        self.pantry.add_item(flour)
        self.assertEqual(self.pantry.get_items(), [sugar, flour])
        self.assertEqual(len(self.pantry), 2)

    def test_replace_item(self):
        item = PantryItem("Milk", "fridge", id="m")
        self.pantry.add_item(item)
        self.pantry.replace_item(PantryItem("Oat milk", "fridge", id="m"))
        self.assertEqual(self.pantry.get_item("m").name, "Oat milk")
        with self.assertRaises(NotFoundError):
            self.pantry.replace_item(PantryItem("Ghost", id="nope"))

    def test_scan_and_notify(self):
        bus = EventBus()
        received = []
        bus.subscribe(PANTRY_NEAR_EXPIRY, lambda name, payload: received.append(payload))
        self.pantry.set_event_bus(bus)
        self.pantry.add_item(PantryItem("Milk", "fridge", created_at=NOW, days_until_expiry=2))
        self.pantry.add_item(PantryItem("Rice", "pantry", created_at=NOW, days_until_expiry=300))
        self.pantry.add_item(PantryItem("Salt", "pantry"))
        flagged = self.pantry.scan_and_notify(NOW)
        self.assertEqual([i.name for i in flagged], ["Milk"])
        self.assertEqual(received[0]["category"], "expiring-soon")
        self.assertEqual(received[0]["days_left"], 2)

    def test_document_round_trip(self):
        docs = [{"id": "x", "name": "Eggs", "location": "fridge", "createdAt": "2025-03-12T08:00:00Z",
                 "daysUntilExpiry": 14, "detectedBy": "scan", "confidence": 0.9}]
        pantry = Pantry.from_dict(docs)
        self.assertEqual(pantry.get_item("x").created_at, NOW)
        self.assertEqual(pantry.to_dict(), docs)


class TestPantryItem(unittest.TestCase):

    def test_defaults_to_pantry_location(self):
        self.assertEqual(PantryItem("Beans").location, "pantry")

    def test_rejects_bad_values(self):
        with self.assertRaises(InvalidInputError):
            PantryItem("Beans", "garage")
        with self.assertRaises(InvalidInputError):
            PantryItem("Beans", days_until_expiry=-1)
        with self.assertRaises(InvalidInputError):
            PantryItem("Beans", days_until_expiry=2.5)

    def test_aware_timestamp_normalised_to_utc(self):
        item = PantryItem.from_dict({"name": "Kale", "createdAt": "2025-03-12T10:00:00+02:00"})
        self.assertEqual(item.created_at, NOW)


if __name__ == '__main__':
    unittest.main()
