"""Shopping-list filters applied before grouping.

Filters narrow the list; they never reorder it. A filter left at its default
(``None`` / ``"all"``) lets everything through.
"""
from __future__ import annotations
from datetime import datetime, time, timedelta
from typing import Any, Iterable, List, Optional, Sequence

from homepantry.utilities.constants import SHOPPING_CATEGORIES, DEFAULT_CATEGORY, RECENT_DAYS_WINDOW
from homepantry.utilities.errors import InvalidInputError

__all__ = ["ShoppingListFilters", "apply_shopping_filters", "STATUS_FILTERS", "DATE_FILTERS"]

STATUS_FILTERS = ("all", "checked", "unchecked")
DATE_FILTERS = ("all", "today", "this-week", "older")


class ShoppingListFilters:
    def __init__(self, search: str = "", categories: Optional[Sequence[str]] = None, status: str = "all",
                 users: Optional[Sequence[str]] = None, date_added: str = "all"):
        if status not in STATUS_FILTERS:
            raise InvalidInputError(f"Invalid status filter: {status!r}")
        if date_added not in DATE_FILTERS:
            raise InvalidInputError(f"Invalid date filter: {date_added!r}")
        unknown = [c for c in categories or [] if c not in SHOPPING_CATEGORIES]
        if unknown:
            raise InvalidInputError(f"Invalid categories: {', '.join(unknown)}")
        self.search = (search or "").strip().lower()
        self.categories = list(categories) if categories else list(SHOPPING_CATEGORIES)
        self.status = status
        self.users = list(users) if users else []
        self.date_added = date_added

    @property
    def active_count(self) -> int:
        count = 0
        if len(self.categories) < len(SHOPPING_CATEGORIES):
            count += 1
        if self.status != "all":
            count += 1
        if self.users:
            count += 1
        if self.date_added != "all":
            count += 1
        return count


def _added_in_window(item: Any, window: str, now: datetime) -> bool:
    added_at = getattr(item, "added_at", None)
    if added_at is None:
        return window == "older"
    today_start = datetime.combine(now.date(), time.min)
    week_ago = today_start - timedelta(days=RECENT_DAYS_WINDOW)
    if window == "today":
        return added_at >= today_start
    if window == "this-week":
        return week_ago <= added_at < today_start
    return added_at < week_ago


def apply_shopping_filters(items: Iterable[Any], filters: ShoppingListFilters,
                           now: Optional[datetime] = None) -> List[Any]:
    result = list(items)
    if filters.search:
        result = [i for i in result if filters.search in (i.name or "").lower()]
    if len(filters.categories) < len(SHOPPING_CATEGORIES):
        result = [i for i in result if (i.category or DEFAULT_CATEGORY) in filters.categories]
    if filters.status != "all":
        wanted = filters.status == "checked"
        result = [i for i in result if bool(i.checked) == wanted]
    if filters.users:
        result = [i for i in result if i.added_by in filters.users]
    if filters.date_added != "all":
        if now is None:
            raise InvalidInputError("Filtering by date added needs the current time")
        result = [i for i in result if _added_in_window(i, filters.date_added, now)]
    return result
