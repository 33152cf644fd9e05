import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from homepantry.api.dependencies import get_shopping_repo, split_csv
from homepantry.events.event_helpers import publish_shopping_cleared
from homepantry.infra.Shopping_Repository import ShoppingListRepository
from homepantry.logic.grouping.engine import GroupStrategy, group
from homepantry.logic.grouping.filters import ShoppingListFilters, apply_shopping_filters
from homepantry.utilities.config import SHOPPING_GROUP_BY
from homepantry.utilities.constants import UNKNOWN_USER
from homepantry.utilities.dates import utcnow
from homepantry.utilities.validators import ShoppingCheckInput, ShoppingItemInput, ShoppingItemUpdate

router = APIRouter(prefix="/api/shopping-list", tags=["shopping-list"])
logger = logging.getLogger(__name__)


@router.get('/{home_id}')
def get_shopping_list(home_id: str,
                      search: str = Query(default=""),
                      category: Optional[List[str]] = Query(default=None),
                      status: str = Query(default="all"),
                      user: Optional[List[str]] = Query(default=None),
                      date_added: str = Query(default="all"),
                      group_by: Optional[str] = Query(default=None),
                      repo: ShoppingListRepository = Depends(get_shopping_repo)):
    now = utcnow()
    strategy = GroupStrategy.parse(group_by or SHOPPING_GROUP_BY)
    filters = ShoppingListFilters(search=search, categories=split_csv(category), status=status,
                                  users=split_csv(user), date_added=date_added)
    shopping_list = repo.load(home_id)
    items = apply_shopping_filters(shopping_list.get_items(), filters, now)
    grouped = group(items, strategy, now)
    checked = sum(1 for item in shopping_list.get_items() if item.checked)
    return {
        "total": len(shopping_list),
        "checked": checked,
        "count": len(items),
        "activeFilters": filters.active_count,
        "groupBy": strategy.value,
        "groups": grouped.to_dict(),
    }


@router.post('/{home_id}/items', status_code=201)
def add_shopping_item(home_id: str, payload: ShoppingItemInput,
                      repo: ShoppingListRepository = Depends(get_shopping_repo)):
    shopping_list = repo.load(home_id)
    item = shopping_list.add_item(payload.name, payload.added_by or UNKNOWN_USER, utcnow(),
                                  category=payload.category, quantity=payload.quantity or None)
    repo.save(home_id, shopping_list)
    logger.info("Shopping item added home=%s id=%s name=%s", home_id, item.id, item.name)
    return item.to_dict()


@router.patch('/{home_id}/items/{item_id}/check')
def check_shopping_item(home_id: str, item_id: str, payload: ShoppingCheckInput,
                        repo: ShoppingListRepository = Depends(get_shopping_repo)):
    shopping_list = repo.load(home_id)
    item = shopping_list.set_checked(item_id, payload.checked)
    repo.save(home_id, shopping_list)
    return item.to_dict()


@router.patch('/{home_id}/items/{item_id}')
def update_shopping_item(home_id: str, item_id: str, payload: ShoppingItemUpdate,
                         repo: ShoppingListRepository = Depends(get_shopping_repo)):
    shopping_list = repo.load(home_id)
    item = shopping_list.update_item(item_id, name=payload.name, category=payload.category,
                                     quantity=payload.quantity)
    repo.save(home_id, shopping_list)
    return item.to_dict()


@router.delete('/{home_id}/items/{item_id}')
def delete_shopping_item(home_id: str, item_id: str,
                         repo: ShoppingListRepository = Depends(get_shopping_repo)):
    shopping_list = repo.load(home_id)
    shopping_list.remove_item(item_id)
    repo.save(home_id, shopping_list)
    return {"success": True}


@router.delete('/{home_id}/checked')
def clear_checked_items(home_id: str, repo: ShoppingListRepository = Depends(get_shopping_repo)):
    shopping_list = repo.load(home_id)
    removed = shopping_list.clear_checked()
    if removed:
        repo.save(home_id, shopping_list)
        publish_shopping_cleared(removed)
        logger.info("Cleared %d checked items home=%s", len(removed), home_id)
    return {"removed": len(removed), "remaining": len(shopping_list)}
