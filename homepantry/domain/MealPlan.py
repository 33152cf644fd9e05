"""MealPlan domain entity: one meal slot (date + meal type) and the state it is in.

The state is held explicitly as one of three status objects:

    Empty()                        nothing scheduled
    Planned(plan)                  a plan exists, not eaten yet
    Completed(completion, plan)    eaten; ``plan`` is None for meals logged directly

Stored documents use the flat camelCase shape (``planned``, ``completed``,
``completedDate``, ``completionType``, ``actual``); ``MealPlan.from_dict``
turns that shape into a status object once, so nothing else has to infer the
state from which fields happen to be set.
"""
from __future__ import annotations
from datetime import date as _date
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from homepantry.utilities.constants import (
    MEAL_TYPES, COMPLETION_AS_PLANNED, COMPLETION_MODIFIED, PLAN_SOURCE_MANUAL, PLAN_SOURCE_RECIPE
)
from homepantry.utilities.dates import parse_date, format_date
from homepantry.utilities.errors import InvalidInputError


class MealState(str, Enum):
    EMPTY = "empty"
    PLANNED = "planned"
    COMPLETED = "completed"


class PlanDetails:
    """What was planned for the slot: a saved recipe or a manual description."""

    def __init__(self, recipe_name: str = "", recipe_id: Optional[str] = None,
                 ingredients: Optional[List[Any]] = None, servings: Optional[int] = None,
                 cooking_time: Optional[str] = None, description: Optional[str] = None,
                 source: str = PLAN_SOURCE_MANUAL):
        self.recipe_name = recipe_name
        self.recipe_id = recipe_id
        self.ingredients = list(ingredients) if ingredients else []
        self.servings = servings
        self.cooking_time = cooking_time
        self.description = description
        self.source = source

    @property
    def label(self) -> str:
        return self.recipe_name or self.description or ""

    def with_changes(self, **changes) -> "PlanDetails":
        fields = {
            "recipe_name": self.recipe_name,
            "recipe_id": self.recipe_id,
            "ingredients": self.ingredients,
            "servings": self.servings,
            "cooking_time": self.cooking_time,
            "description": self.description,
            "source": self.source,
        }
        fields.update(changes)
        return PlanDetails(**fields)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "PlanDetails":
        d = dict(data or {})
        recipe_id = d.get("recipeId")
        return PlanDetails(
            recipe_name=d.get("recipeName") or d.get("title") or d.get("name") or "",
            recipe_id=recipe_id,
            ingredients=d.get("ingredients"),
            servings=d.get("servings"),
            cooking_time=d.get("cookingTime") or d.get("cookTime"),
            description=d.get("description"),
            source=d.get("source") or (PLAN_SOURCE_RECIPE if recipe_id else PLAN_SOURCE_MANUAL),
        )

    def to_dict(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {"recipeName": self.recipe_name, "source": self.source}
        optional = {
            "recipeId": self.recipe_id,
            "ingredients": self.ingredients or None,
            "servings": self.servings,
            "cookingTime": self.cooking_time,
            "description": self.description,
        }
        doc.update({k: v for k, v in optional.items() if v is not None})
        return doc

    def __eq__(self, other):
        return isinstance(other, PlanDetails) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"PlanDetails({self.label!r}, source={self.source!r})"


class ActualMeal:
    """What was actually eaten."""

    def __init__(self, description: str, notes: Optional[str] = None, recipe_name: Optional[str] = None):
        self.description = description
        self.notes = notes
        self.recipe_name = recipe_name

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ActualMeal":
        d = dict(data or {})
        return ActualMeal(d.get("description") or d.get("recipeName") or "", d.get("notes") or None,
                          d.get("recipeName"))

    def to_dict(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {"description": self.description}
        if self.notes:
            doc["notes"] = self.notes
        if self.recipe_name:
            doc["recipeName"] = self.recipe_name
        return doc

    def __eq__(self, other):
        return isinstance(other, ActualMeal) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"ActualMeal({self.description!r})"


class Completion:
    def __init__(self, completed_date: _date, completion_type: str, actual: ActualMeal):
        if completion_type not in (COMPLETION_AS_PLANNED, COMPLETION_MODIFIED):
            raise InvalidInputError(f"Invalid completion type: {completion_type!r}")
        self.completed_date = completed_date
        self.completion_type = completion_type
        self.actual = actual

    def __eq__(self, other):
        return (isinstance(other, Completion) and self.completed_date == other.completed_date
                and self.completion_type == other.completion_type and self.actual == other.actual)


# --- Status objects --------------------------------------------------------

class Empty:
    state = MealState.EMPTY
    plan = None
    completion = None

    def __eq__(self, other):
        return isinstance(other, Empty)

    def __repr__(self) -> str:
        return "Empty()"


class Planned:
    state = MealState.PLANNED
    completion = None

    def __init__(self, plan: PlanDetails):
        self.plan = plan

    def __eq__(self, other):
        return isinstance(other, Planned) and self.plan == other.plan

    def __repr__(self) -> str:
        return f"Planned({self.plan!r})"


class Completed:
    state = MealState.COMPLETED

    def __init__(self, completion: Completion, plan: Optional[PlanDetails] = None):
        self.completion = completion
        self.plan = plan

    def __eq__(self, other):
        return isinstance(other, Completed) and self.completion == other.completion and self.plan == other.plan

    def __repr__(self) -> str:
        return f"Completed({self.completion.completion_type}, {self.completion.actual!r})"


class MealPlan:
    def __init__(self, date: _date, meal_type: str, status=None, id: Optional[str] = None,
                 created_by: Optional[str] = None):
        if meal_type not in MEAL_TYPES:
            raise InvalidInputError(f"Invalid meal type: {meal_type!r}")
        if not isinstance(date, _date):
            raise InvalidInputError("Meal plan date is required")
        self.id = id or uuid4().hex
        self.date = date
        self.meal_type = meal_type
        self.status = status if status is not None else Empty()
        self.created_by = created_by

    # --- State accessors ----------------------------------------------------
    @property
    def state(self) -> MealState:
        return self.status.state

    @property
    def planned(self) -> Optional[PlanDetails]:
        return self.status.plan

    @property
    def completion(self) -> Optional[Completion]:
        return self.status.completion

    @property
    def completed(self) -> bool:
        return self.state is MealState.COMPLETED

    @property
    def actual(self) -> Optional[ActualMeal]:
        return self.completion.actual if self.completion else None

    @property
    def display_name(self) -> str:
        """What the meal card shows: what was eaten if completed, else what is planned."""
        if self.actual is not None:
            return self.actual.recipe_name or self.actual.description
        if self.planned is not None:
            return self.planned.label
        return ""

    def with_status(self, status) -> "MealPlan":
        return MealPlan(self.date, self.meal_type, status=status, id=self.id, created_by=self.created_by)

    def __eq__(self, other):
        return (isinstance(other, MealPlan) and self.id == other.id and self.date == other.date
                and self.meal_type == other.meal_type and self.status == other.status)

    def __repr__(self) -> str:
        return f"MealPlan({self.date}, {self.meal_type}, {self.status!r})"

    # --- Persistence -----------------------------------------------------
    @staticmethod
    def _status_from_dict(d: Dict[str, Any], record_date: _date):
        plan = PlanDetails.from_dict(d["planned"]) if d.get("planned") else None
        if plan is not None and not plan.label:
            plan = None
        actual_doc = d.get("actual")
        if d.get("completed") is True or actual_doc:
            if actual_doc:
                actual = ActualMeal.from_dict(actual_doc)
            elif plan is not None and plan.label:
                actual = ActualMeal(plan.label, recipe_name=plan.recipe_name or None)
            else:
                raise InvalidInputError("Completed meal has no description")
            if not actual.description:
                raise InvalidInputError("Completed meal has no description")
            completion_type = d.get("completionType")
            if not completion_type:
                made_as_planned = isinstance(actual_doc, dict) and actual_doc.get("madeAsPlanned")
                if d.get("completed") is True and not actual_doc:
                    completion_type = COMPLETION_AS_PLANNED
                else:
                    completion_type = COMPLETION_AS_PLANNED if made_as_planned else COMPLETION_MODIFIED
            completed_date = parse_date(d.get("completedDate")) or record_date
            return Completed(Completion(completed_date, completion_type, actual), plan)
        if plan is not None:
            return Planned(plan)
        return Empty()

    @staticmethod
    def from_dict(data):
        '''Builds a MealPlan from a stored document, deriving its state once.'''
        d = dict(data) if isinstance(data, dict) else {}
        record_date = parse_date(d.get("date"))
        if record_date is None:
            raise InvalidInputError("Meal plan date is required")
        return MealPlan(
            record_date,
            d.get("mealType", ""),
            status=MealPlan._status_from_dict(d, record_date),
            id=d.get("id"),
            created_by=d.get("createdBy"),
        )

    def to_dict(self):
        '''Converts the MealPlan to its stored document; ``actual`` only appears once completed.'''
        doc: Dict[str, Any] = {
            "id": self.id,
            "date": format_date(self.date),
            "mealType": self.meal_type,
            "planned": self.planned.to_dict() if self.planned is not None else None,
            "completed": self.completed,
        }
        if self.completion is not None:
            doc["completedDate"] = format_date(self.completion.completed_date)
            doc["completionType"] = self.completion.completion_type
            doc["actual"] = self.completion.actual.to_dict()
        if self.created_by:
            doc["createdBy"] = self.created_by
        return doc
