import logging
from datetime import date
from typing import List, Optional

from homepantry.domain.MealPlan import MealPlan
from homepantry.infra.Document_Store import DocumentStore
from homepantry.infra.paths import MEAL_PLAN_COLLECTION
from homepantry.utilities.constants import MEAL_TYPES
from homepantry.utilities.errors import GuardViolationError, NotFoundError

logger = logging.getLogger(__name__)


def _slot_order(record: MealPlan):
    return (record.date, MEAL_TYPES.index(record.meal_type))


class PlanRepository:
    """Meal plan records of one household, one record per (date, meal type) slot."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def _load_all(self, home_id: str) -> List[MealPlan]:
        return [MealPlan.from_dict(d) for d in self.store.load(home_id, MEAL_PLAN_COLLECTION)]

    def _save_all(self, home_id: str, records: List[MealPlan]) -> None:
        records = sorted(records, key=_slot_order)
        self.store.save(home_id, MEAL_PLAN_COLLECTION, [r.to_dict() for r in records])

    def list(self, home_id: str, start: Optional[date] = None, end: Optional[date] = None) -> List[MealPlan]:
        """Records with start <= date <= end (either bound optional), by date then meal type."""
        records = [
            r for r in self._load_all(home_id)
            if (start is None or r.date >= start) and (end is None or r.date <= end)
        ]
        return sorted(records, key=_slot_order)

    def get(self, home_id: str, plan_id: str) -> MealPlan:
        for record in self._load_all(home_id):
            if record.id == plan_id:
                return record
        raise NotFoundError("Meal plan not found")

    def find_slot(self, home_id: str, day: date, meal_type: str) -> Optional[MealPlan]:
        for record in self._load_all(home_id):
            if record.date == day and record.meal_type == meal_type:
                return record
        return None

    def create(self, home_id: str, record: MealPlan) -> MealPlan:
        records = self._load_all(home_id)
        if any(r.date == record.date and r.meal_type == record.meal_type for r in records):
            raise GuardViolationError("Meal plan already exists for this date and meal type")
        records.append(record)
        self._save_all(home_id, records)
        logger.info("Meal plan created home=%s id=%s %s/%s state=%s",
                    home_id, record.id, record.date, record.meal_type, record.state.value)
        return record

    def save(self, home_id: str, record: MealPlan) -> MealPlan:
        """Replace the stored record with the same id (last write wins)."""
        records = self._load_all(home_id)
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                self._save_all(home_id, records)
                return record
        raise NotFoundError("Meal plan not found")

    def delete(self, home_id: str, plan_id: str) -> None:
        records = self._load_all(home_id)
        remaining = [r for r in records if r.id != plan_id]
        if len(remaining) == len(records):
            raise NotFoundError("Meal plan not found")
        self._save_all(home_id, remaining)
        logger.info("Meal plan deleted home=%s id=%s", home_id, plan_id)
