"""Web-facing observers for pantry, planner and shopping-list events.

Recent events are kept in a bounded in-memory log that the API serves at
``/api/events``. Each entry gets an increasing integer id, so a client polls
with ``since=<last id seen>`` and only receives what is new. The log is per
process; alerts are advisory and losing them on restart is acceptable.
"""
from __future__ import annotations
from collections import deque
import logging
from threading import Lock
from typing import Any, Deque, Dict, Optional

from homepantry.utilities.dates import utcnow, format_timestamp
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS, PANTRY_NEAR_EXPIRY, MEAL_COMPLETED, MEAL_REVERTED, SHOPPING_CLEARED
)

logger = logging.getLogger(__name__)

MAX_EVENTS = 300

_OBSERVED = (PANTRY_NEAR_EXPIRY, MEAL_COMPLETED, MEAL_REVERTED, SHOPPING_CLEARED)


def _summarize(payload: Any) -> Dict[str, Any]:
    """Flatten the payload fields the UI shows."""
    evt: Dict[str, Any] = {}
    if not isinstance(payload, dict):
        return evt
    item = payload.get('item')
    if item is not None:
        evt['name'] = getattr(item, 'name', '')
        evt['location'] = getattr(item, 'location', '')
    meal = payload.get('meal')
    if meal is not None:
        evt['mealId'] = getattr(meal, 'id', None)
        evt['mealType'] = getattr(meal, 'meal_type', None)
        evt['label'] = getattr(meal, 'display_name', None)
    for k in ('category', 'days_left', 'completion_type', 'count'):
        if k in payload:
            evt[k] = payload[k]
    return evt


class EventLog:
    def __init__(self, capacity: int = MAX_EVENTS):
        self._lock = Lock()
        self._entries: Deque[Dict[str, Any]] = deque(maxlen=capacity)
        self._last_id = 0
        self._attached = False

    def record(self, event_name: str, payload: Any) -> None:
        entry = _summarize(payload)
        with self._lock:
            self._last_id += 1
            entry.update({'id': self._last_id, 'type': event_name, 'ts': format_timestamp(utcnow())})
            self._entries.append(entry)

    def attach(self, bus: EventBus) -> None:
        """Subscribe to the observed events once; later calls do nothing."""
        if self._attached:
            return
        for name in _OBSERVED:
            bus.subscribe(name, self.record)
        self._attached = True
        logger.debug("event log subscribed to %s", ", ".join(_OBSERVED))

    def since(self, cursor: Optional[int] = None) -> Dict[str, Any]:
        """Entries newer than ``cursor`` (all buffered entries when None) plus the next cursor."""
        with self._lock:
            entries = [e for e in self._entries if cursor is None or e['id'] > cursor]
            next_cursor = self._last_id if self._entries else (cursor or 0)
        return {'events': entries, 'next_cursor': next_cursor}


WEB_EVENTS = EventLog()


def start():
    WEB_EVENTS.attach(GLOBAL_EVENT_BUS)


def get_events(since: Optional[int] = None) -> Dict[str, Any]:
    return WEB_EVENTS.since(since)


__all__ = ['EventLog', 'WEB_EVENTS', 'start', 'get_events', 'MAX_EVENTS']
