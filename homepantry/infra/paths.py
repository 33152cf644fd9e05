from pathlib import Path
import re

from homepantry.utilities.config import DATA_DIR
from homepantry.utilities.errors import InvalidInputError

# Centralized layout for household data files (single source of truth):
#   <data dir>/homes/<home id>/<collection>.json
PANTRY_COLLECTION = 'pantry_items'
SHOPPING_COLLECTION = 'shopping_list'
MEAL_PLAN_COLLECTION = 'meal_plans'
RECIPES_COLLECTION = 'recipes'

_HOME_ID = re.compile(r'^[A-Za-z0-9_-]{1,64}$')


def home_dir(base_dir: Path, home_id: str) -> Path:
    if not isinstance(home_id, str) or not _HOME_ID.match(home_id):
        raise InvalidInputError(f"Invalid household id: {home_id!r}")
    return Path(base_dir) / 'homes' / home_id


def collection_file(base_dir: Path, home_id: str, collection: str) -> Path:
    return home_dir(base_dir, home_id) / f'{collection}.json'


__all__ = ['DATA_DIR', 'PANTRY_COLLECTION', 'SHOPPING_COLLECTION', 'MEAL_PLAN_COLLECTION',
           'RECIPES_COLLECTION', 'home_dir', 'collection_file']
