import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from homepantry.api.dependencies import get_plan_repo
from homepantry.domain.MealPlan import MealPlan
from homepantry.events.event_helpers import publish_meal_completed, publish_meal_reverted
from homepantry.infra.Plan_Repository import PlanRepository
from homepantry.logic.meals.lifecycle import MealAction, allowed_actions, apply_transition
from homepantry.utilities.dates import parse_date
from homepantry.utilities.errors import GuardViolationError, InvalidInputError
from homepantry.utilities.validators import MealLogInput, MealPlanCreateInput, MealTransitionInput

router = APIRouter(prefix="/api/planner", tags=["planner"])
logger = logging.getLogger(__name__)

_COMPLETING = (MealAction.COMPLETE_AS_PLANNED, MealAction.COMPLETE_WITH_SUBSTITUTION, MealAction.LOG_EATEN)


def _meal_view(record: MealPlan) -> dict:
    doc = record.to_dict()
    doc['state'] = record.state.value
    doc['displayName'] = record.display_name
    doc['allowedActions'] = [a.value for a in allowed_actions(record)]
    return doc


def _transition(home_id: str, record: MealPlan, action, payload=None) -> Optional[MealPlan]:
    try:
        return apply_transition(record, action, payload)
    except GuardViolationError as e:
        logger.warning("Rejected %s on meal %s (home=%s, state=%s): %s",
                       action, record.id, home_id, record.state.value, e)
        raise


def _announce(action: MealAction, record: MealPlan) -> None:
    if action in _COMPLETING:
        publish_meal_completed(record, record.completion.completion_type)
    elif action is MealAction.REVERT_TO_PLANNED:
        publish_meal_reverted(record)


@router.get('/{home_id}')
def list_meals(home_id: str,
               start_date: Optional[str] = Query(default=None, alias="startDate"),
               end_date: Optional[str] = Query(default=None, alias="endDate"),
               repo: PlanRepository = Depends(get_plan_repo)):
    """Meal plan records between startDate and endDate (inclusive), date ascending."""
    start, end = parse_date(start_date), parse_date(end_date)
    if start and end and start > end:
        raise InvalidInputError("startDate must not be after endDate")
    records = repo.list(home_id, start, end)
    return {"meals": [_meal_view(r) for r in records], "count": len(records)}


@router.post('/{home_id}', status_code=201)
def create_meal(home_id: str, payload: MealPlanCreateInput, repo: PlanRepository = Depends(get_plan_repo)):
    record = MealPlan(parse_date(payload.date), payload.meal_type, created_by=payload.created_by)
    if payload.planned:
        record = _transition(home_id, record, MealAction.SCHEDULE, payload.planned)
    repo.create(home_id, record)
    return _meal_view(record)


@router.post('/{home_id}/log-meal', status_code=201)
def log_meal(home_id: str, payload: MealLogInput, repo: PlanRepository = Depends(get_plan_repo)):
    """Record a meal that was eaten without a plan. An existing empty slot is reused."""
    day = parse_date(payload.date)
    existing = repo.find_slot(home_id, day, payload.meal_type)
    record = existing or MealPlan(day, payload.meal_type, created_by=payload.created_by)
    logged = _transition(home_id, record, MealAction.LOG_EATEN,
                         {"description": payload.description, "notes": payload.notes})
    if existing is None:
        repo.create(home_id, logged)
    else:
        repo.save(home_id, logged)
    _announce(MealAction.LOG_EATEN, logged)
    return _meal_view(logged)


@router.post('/{home_id}/{plan_id}/transition')
def transition_meal(home_id: str, plan_id: str, payload: MealTransitionInput,
                    repo: PlanRepository = Depends(get_plan_repo)):
    action = MealAction.parse(payload.action)
    record = repo.get(home_id, plan_id)
    result = _transition(home_id, record, action, payload.payload)
    if result is None:
        repo.delete(home_id, plan_id)
        return {"deleted": True, "id": plan_id}
    repo.save(home_id, result)
    logger.info("Meal %s home=%s: %s -> %s", plan_id, home_id, record.state.value, result.state.value)
    _announce(action, result)
    return _meal_view(result)


@router.delete('/{home_id}/{plan_id}')
def delete_meal(home_id: str, plan_id: str, repo: PlanRepository = Depends(get_plan_repo)):
    record = repo.get(home_id, plan_id)
    _transition(home_id, record, MealAction.DELETE)
    repo.delete(home_id, plan_id)
    return {"deleted": True, "id": plan_id}
