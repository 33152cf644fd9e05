"""Meal lifecycle: the transitions a single meal slot can go through.

    empty     --schedule-------------------> planned
    empty     --log-eaten------------------> completed   (no plan, completion type "modified")
    planned   --edit-plan------------------> planned
    planned   --switch-to-edit-------------> planned     (no change until the edit is saved)
    planned   --complete-as-planned--------> completed   ("as-planned")
    planned   --complete-with-substitution-> completed   ("modified", plan kept)
    completed --revert-to-planned----------> planned     (only when a plan exists)
    any       --delete---------------------> removed     (apply_transition returns None)

Every transition returns a new MealPlan and leaves its input untouched. An
action that is not legal in the record's current state raises
GuardViolationError; blank descriptions raise InvalidInputError. In both cases
nothing changes.
"""
from __future__ import annotations
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

from homepantry.domain.MealPlan import (
    MealPlan, MealState, PlanDetails, ActualMeal, Completion, Empty, Planned, Completed
)
from homepantry.utilities.constants import (
    COMPLETION_AS_PLANNED, COMPLETION_MODIFIED, PLAN_SOURCE_MANUAL
)
from homepantry.utilities.dates import today as _utc_today
from homepantry.utilities.errors import GuardViolationError, InvalidInputError

__all__ = ["MealAction", "apply_transition", "allowed_actions", "MealLifecycle"]


class MealAction(str, Enum):
    SCHEDULE = "schedule"
    EDIT_PLAN = "edit-plan"
    SWITCH_TO_EDIT = "switch-to-edit"
    COMPLETE_AS_PLANNED = "complete-as-planned"
    COMPLETE_WITH_SUBSTITUTION = "complete-with-substitution"
    REVERT_TO_PLANNED = "revert-to-planned"
    LOG_EATEN = "log-eaten"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: Any) -> "MealAction":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidInputError(f"Unknown meal action: {value!r}")


# --- Payload helpers -------------------------------------------------------

def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _description_and_notes(payload: Any, what: str) -> Tuple[str, Optional[str]]:
    if isinstance(payload, dict):
        description, notes = _text(payload.get("description")), _text(payload.get("notes")) or None
    else:
        description, notes = _text(payload), None
    if not description:
        raise InvalidInputError(f"Please enter {what}")
    return description, notes


def _plan_from_payload(payload: Any) -> PlanDetails:
    if isinstance(payload, PlanDetails):
        plan = payload
    elif isinstance(payload, dict):
        plan = PlanDetails.from_dict(payload)
        plan.recipe_name = _text(plan.recipe_name)
        plan.description = _text(plan.description) or None
    else:
        plan = PlanDetails(recipe_name=_text(payload), source=PLAN_SOURCE_MANUAL)
    if not plan.label:
        raise InvalidInputError("Please enter a meal description")
    return plan


# --- Transitions -------------------------------------------------------------

def _schedule(record: MealPlan, payload: Any, today: date) -> MealPlan:
    return record.with_status(Planned(_plan_from_payload(payload)))


def _edit_plan(record: MealPlan, payload: Any, today: date) -> MealPlan:
    if isinstance(payload, dict):
        changes = {}
        if "recipeName" in payload:
            changes["recipe_name"] = _text(payload.get("recipeName"))
        if "description" in payload:
            changes["description"] = _text(payload.get("description")) or None
    elif _text(payload):
        changes = {"recipe_name": _text(payload)}
    else:
        changes = {}
    if not changes:
        raise InvalidInputError("Please enter a meal description")
    plan = record.planned.with_changes(**changes)
    if not plan.label:
        raise InvalidInputError("Please enter a meal description")
    return record.with_status(Planned(plan))


def _switch_to_edit(record: MealPlan, payload: Any, today: date) -> MealPlan:
    return record.with_status(record.status)


def _complete_as_planned(record: MealPlan, payload: Any, today: date) -> MealPlan:
    plan = record.planned
    if not plan.label:
        raise GuardViolationError("This plan has no description to complete; edit it first")
    notes = _text(payload.get("notes")) if isinstance(payload, dict) else ""
    actual = ActualMeal(plan.label, notes or None, plan.recipe_name or None)
    return record.with_status(Completed(Completion(today, COMPLETION_AS_PLANNED, actual), plan))


def _complete_with_substitution(record: MealPlan, payload: Any, today: date) -> MealPlan:
    description, notes = _description_and_notes(payload, "what you actually ate")
    actual = ActualMeal(description, notes)
    return record.with_status(Completed(Completion(today, COMPLETION_MODIFIED, actual), record.planned))


def _revert_to_planned(record: MealPlan, payload: Any, today: date) -> MealPlan:
    if record.planned is None:
        raise GuardViolationError("This meal was logged without a plan; there is nothing to revert to")
    return record.with_status(Planned(record.planned))


def _log_eaten(record: MealPlan, payload: Any, today: date) -> MealPlan:
    description, notes = _description_and_notes(payload, "a meal description")
    actual = ActualMeal(description, notes)
    return record.with_status(Completed(Completion(today, COMPLETION_MODIFIED, actual)))


def _delete(record: MealPlan, payload: Any, today: date) -> None:
    return None


_ANY: FrozenSet[MealState] = frozenset(MealState)

_TRANSITIONS: Dict[MealAction, Tuple[FrozenSet[MealState], Callable[[MealPlan, Any, date], Optional[MealPlan]]]] = {
    MealAction.SCHEDULE: (frozenset({MealState.EMPTY}), _schedule),
    MealAction.EDIT_PLAN: (frozenset({MealState.PLANNED}), _edit_plan),
    MealAction.SWITCH_TO_EDIT: (frozenset({MealState.PLANNED}), _switch_to_edit),
    MealAction.COMPLETE_AS_PLANNED: (frozenset({MealState.PLANNED}), _complete_as_planned),
    MealAction.COMPLETE_WITH_SUBSTITUTION: (frozenset({MealState.PLANNED}), _complete_with_substitution),
    MealAction.REVERT_TO_PLANNED: (frozenset({MealState.COMPLETED}), _revert_to_planned),
    MealAction.LOG_EATEN: (frozenset({MealState.EMPTY}), _log_eaten),
    MealAction.DELETE: (_ANY, _delete),
}


def allowed_actions(record: MealPlan) -> Tuple[MealAction, ...]:
    """Actions legal from the record's current state, in declaration order."""
    actions = tuple(a for a in MealAction if record.state in _TRANSITIONS[a][0])
    if record.state is MealState.COMPLETED and record.planned is None:
        actions = tuple(a for a in actions if a is not MealAction.REVERT_TO_PLANNED)
    return actions


def apply_transition(record: MealPlan, action: Any, payload: Any = None,
                     today: Optional[date] = None) -> Optional[MealPlan]:
    """Apply one user action to a meal plan record.

    Args:
        record: the current record (not modified).
        action: a MealAction or its string value.
        payload: action input. ``schedule`` takes a plan mapping (recipeId, recipeName,
            ingredients, servings, cookingTime, description, source) or plain text;
            ``edit-plan`` a mapping with recipeName/description or plain text;
            ``complete-with-substitution`` and ``log-eaten`` a description string or
            a mapping with description and optional notes.
        today: completion date; defaults to the current UTC date.

    Returns:
        The new record, or None after ``delete``.

    Raises:
        InvalidInputError: unknown action or blank description.
        GuardViolationError: the action is not allowed from the record's state.
    """
    action = MealAction.parse(action)
    allowed_from, handler = _TRANSITIONS[action]
    if record.state not in allowed_from:
        raise GuardViolationError(
            f"Cannot {action.value.replace('-', ' ')} a meal that is {record.state.value}"
        )
    return handler(record, payload, today or _utc_today())


class MealLifecycle:
    """Convenience wrapper that walks one record through its transitions.

    ``record`` always holds the latest state; it becomes None after ``delete``.
    A rejected transition raises and leaves ``record`` as it was.
    """

    def __init__(self, record: Optional[MealPlan] = None, *, date: Optional[date] = None,
                 meal_type: str = "dinner", today: Optional[date] = None):
        if record is None:
            if date is None:
                raise InvalidInputError("A date is required to start a new meal slot")
            record = MealPlan(date, meal_type, status=Empty())
        self.record: Optional[MealPlan] = record
        self._today = today

    @property
    def state(self) -> Optional[MealState]:
        return self.record.state if self.record is not None else None

    def apply(self, action: Any, payload: Any = None) -> Optional[MealPlan]:
        if self.record is None:
            raise GuardViolationError("This meal has been deleted")
        self.record = apply_transition(self.record, action, payload, today=self._today)
        return self.record

    def schedule(self, plan: Any) -> MealPlan:
        return self.apply(MealAction.SCHEDULE, plan)

    def edit_plan(self, changes: Any) -> MealPlan:
        return self.apply(MealAction.EDIT_PLAN, changes)

    def switch_to_edit(self) -> MealPlan:
        return self.apply(MealAction.SWITCH_TO_EDIT)

    def complete_as_planned(self, notes: Optional[str] = None) -> MealPlan:
        return self.apply(MealAction.COMPLETE_AS_PLANNED, {"notes": notes} if notes else None)

    def complete_with_substitution(self, description: str, notes: Optional[str] = None) -> MealPlan:
        return self.apply(MealAction.COMPLETE_WITH_SUBSTITUTION, {"description": description, "notes": notes})

    def revert_to_planned(self) -> MealPlan:
        return self.apply(MealAction.REVERT_TO_PLANNED)

    def log_eaten(self, description: str, notes: Optional[str] = None) -> MealPlan:
        return self.apply(MealAction.LOG_EATEN, {"description": description, "notes": notes})

    def delete(self) -> None:
        return self.apply(MealAction.DELETE)
