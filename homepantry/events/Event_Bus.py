"""In-process publish/subscribe bus for household notifications.

Event names and their payloads:
  pantry.near_expiry       -> {"item": PantryItem, "category": str, "days_left": int | None}
  pantry.expiring_snapshot -> {"count": int, "items": [dict, ...]}
  meal.completed           -> {"meal": MealPlan, "completion_type": str}
  meal.reverted            -> {"meal": MealPlan}
  shopping.cleared         -> {"count": int, "items": [ShoppingListItem, ...]}

A subscriber is any callable taking (event_name, payload). Delivery is
synchronous, in subscription order.
"""
from __future__ import annotations
from collections import defaultdict
import logging
from threading import Lock
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

PANTRY_NEAR_EXPIRY = "pantry.near_expiry"
PANTRY_EXPIRING_SNAPSHOT = "pantry.expiring_snapshot"
MEAL_COMPLETED = "meal.completed"
MEAL_REVERTED = "meal.reverted"
SHOPPING_CLEARED = "shopping.cleared"

Subscriber = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._lock = Lock()
		self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Subscriber) -> Callable[[], None]:
		"""Register ``callback`` once per event name; returns a function that undoes it."""
		with self._lock:
			if callback not in self._subscribers[event_name]:
				self._subscribers[event_name].append(callback)
		return lambda: self.unsubscribe(event_name, callback)

	def unsubscribe(self, event_name: str, callback: Subscriber) -> None:
		with self._lock:
			if callback in self._subscribers.get(event_name, []):
				self._subscribers[event_name].remove(callback)

	def subscriber_count(self, event_name: str) -> int:
		with self._lock:
			return len(self._subscribers.get(event_name, []))

	def clear(self) -> None:
		with self._lock:
			self._subscribers.clear()

	def publish(self, event_name: str, payload: Any) -> int:
		"""Deliver to every subscriber; returns how many received it without raising."""
		with self._lock:
			targets = list(self._subscribers.get(event_name, []))
		delivered = 0
		for cb in targets:
			try:
				cb(event_name, payload)
				delivered += 1
			except Exception:
				logger.exception("Subscriber %r failed on %s", cb, event_name)
		return delivered


GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> int:
	"""Publish on the process-wide bus."""
	return GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish', 'Subscriber',
	'PANTRY_NEAR_EXPIRY', 'PANTRY_EXPIRING_SNAPSHOT', 'MEAL_COMPLETED', 'MEAL_REVERTED', 'SHOPPING_CLEARED'
]
