"""Shared FastAPI dependencies. Tests swap ``get_store`` through ``app.dependency_overrides``."""
from typing import List, Optional

from fastapi import Depends

from homepantry.infra.Document_Store import DocumentStore
from homepantry.infra.Pantry_Repository import PantryRepository
from homepantry.infra.Plan_Repository import PlanRepository
from homepantry.infra.Recipe_Repository import RecipeRepository
from homepantry.infra.Shopping_Repository import ShoppingListRepository
from homepantry.utilities.config import DATA_DIR


def get_store() -> DocumentStore:
    return DocumentStore(DATA_DIR)


def get_pantry_repo(store: DocumentStore = Depends(get_store)) -> PantryRepository:
    return PantryRepository(store)


def get_shopping_repo(store: DocumentStore = Depends(get_store)) -> ShoppingListRepository:
    return ShoppingListRepository(store)


def get_plan_repo(store: DocumentStore = Depends(get_store)) -> PlanRepository:
    return PlanRepository(store)


def get_recipe_repo(store: DocumentStore = Depends(get_store)) -> RecipeRepository:
    return RecipeRepository(store)


def split_csv(values: Optional[List[str]]) -> List[str]:
    """Accept both ``?x=a&x=b`` and ``?x=a,b`` for multi-value query params."""
    result: List[str] = []
    for value in values or []:
        result.extend(part.strip() for part in value.split(',') if part.strip())
    return result
