import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from homepantry.api.dependencies import get_pantry_repo, split_csv
from homepantry.domain.PantryItem import PantryItem
from homepantry.events.event_helpers import publish_expiring_snapshot, publish_near_expiry
from homepantry.infra.Pantry_Repository import PantryRepository
from homepantry.logic.grouping.engine import GroupStrategy, group
from homepantry.logic.pantry.analysis import build_pantry_export, compute_expiring_soon, filter_pantry_items
from homepantry.logic.pantry.expiry import ExpiryCategory, classify, describe_expiry, remaining_days
from homepantry.utilities.config import PANTRY_GROUP_BY
from homepantry.utilities.dates import parse_timestamp, utcnow
from homepantry.utilities.validators import PantryItemInput, PantryItemUpdate

router = APIRouter(prefix="/api/pantry", tags=["pantry"])
logger = logging.getLogger(__name__)


def _item_view(item: PantryItem, now) -> dict:
    doc = item.to_dict()
    doc['expiry'] = describe_expiry(item, now).to_dict()
    return doc


def _alert_if_expiring(item: PantryItem, now) -> None:
    category = classify(item, now)
    if category in (ExpiryCategory.EXPIRED, ExpiryCategory.EXPIRING_SOON):
        publish_near_expiry(item, category.value, remaining_days(item, now))


@router.get('/{home_id}')
def list_pantry(home_id: str,
                search: str = Query(default=""),
                location: Optional[List[str]] = Query(default=None),
                status: str = Query(default="all"),
                group_by: Optional[str] = Query(default=None),
                repo: PantryRepository = Depends(get_pantry_repo)):
    """
    Pantry items, filtered and grouped.

    ``group_by`` falls back to the configured PANTRY_GROUP_BY; ``status`` is an
    expiry category (expired, expiring-soon, fresh, unknown) or ``all``.
    """
    now = utcnow()
    strategy = GroupStrategy.parse(group_by or PANTRY_GROUP_BY)
    pantry = repo.load(home_id)
    items = filter_pantry_items(pantry.get_items(), now, search=search,
                                locations=split_csv(location), expiration=status)
    grouped = group(items, strategy, now)
    expiring_soon = compute_expiring_soon(pantry.get_items(), now)
    if expiring_soon:
        publish_expiring_snapshot(expiring_soon)
    return {
        "total": len(pantry),
        "count": len(items),
        "groupBy": strategy.value,
        "groups": grouped.to_dict(lambda item: _item_view(item, now)),
        "expiringSoon": expiring_soon,
    }


@router.get('/{home_id}/export')
def export_pantry(home_id: str, repo: PantryRepository = Depends(get_pantry_repo)):
    return build_pantry_export(repo.load(home_id).get_items(), utcnow())


@router.post('/{home_id}/scan')
def scan_pantry(home_id: str, repo: PantryRepository = Depends(get_pantry_repo)):
    """Publish a near-expiry alert for every expired or expiring-soon item."""
    flagged = repo.load(home_id).scan_and_notify(utcnow())
    return {"flagged": len(flagged), "items": [item.id for item in flagged]}


@router.post('/{home_id}', status_code=201)
def add_pantry_item(home_id: str, payload: PantryItemInput, repo: PantryRepository = Depends(get_pantry_repo)):
    now = utcnow()
    item = PantryItem(
        name=payload.name,
        location=payload.location,
        quantity=payload.quantity or None,
        created_at=parse_timestamp(payload.created_at) or now,
        days_until_expiry=payload.days_until_expiry,
        confidence=payload.confidence,
        detected_by=payload.detected_by,
        created_by=payload.created_by,
    )
    repo.add(home_id, item)
    _alert_if_expiring(item, now)
    return _item_view(item, now)


@router.put('/{home_id}/{item_id}')
def update_pantry_item(home_id: str, item_id: str, payload: PantryItemUpdate,
                       repo: PantryRepository = Depends(get_pantry_repo)):
    now = utcnow()
    current = repo.load(home_id).get_item(item_id)
    changes = payload.model_dump(exclude_unset=True)
    quantity = current.quantity
    if 'quantity' in changes:
        quantity = changes['quantity'] or None
    updated = PantryItem(
        id=current.id,
        name=changes.get('name') or current.name,
        location=changes.get('location') or current.location,
        quantity=quantity,
        created_at=current.created_at,
        days_until_expiry=changes.get('days_until_expiry', current.days_until_expiry),
        confidence=current.confidence,
        detected_by=current.detected_by,
        created_by=current.created_by,
    )
    repo.update(home_id, updated)
    logger.info("Pantry item updated home=%s id=%s", home_id, item_id)
    _alert_if_expiring(updated, now)
    return _item_view(updated, now)


@router.delete('/{home_id}/{item_id}')
def delete_pantry_item(home_id: str, item_id: str, repo: PantryRepository = Depends(get_pantry_repo)):
    repo.delete(home_id, item_id)
    return {"success": True}
