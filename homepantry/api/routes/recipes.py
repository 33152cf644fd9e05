from fastapi import APIRouter, Depends

from homepantry.api.dependencies import get_pantry_repo, get_recipe_repo
from homepantry.domain.Recipe import Recipe
from homepantry.infra.Pantry_Repository import PantryRepository
from homepantry.infra.Recipe_Repository import RecipeRepository
from homepantry.logic.recipes.availability import annotate_recipes, match_availability
from homepantry.utilities.dates import utcnow
from homepantry.utilities.validators import AvailabilityRequest, RecipeInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get('/{home_id}')
def list_recipes(home_id: str,
                 recipes: RecipeRepository = Depends(get_recipe_repo),
                 pantry: PantryRepository = Depends(get_pantry_repo)):
    """Saved recipes, each with how many of its ingredients the pantry covers."""
    items = pantry.load(home_id).get_items()
    annotated = annotate_recipes(recipes.list(home_id), items, utcnow())
    return {"recipes": annotated, "count": len(annotated)}


@router.post('/{home_id}', status_code=201)
def save_recipe(home_id: str, payload: RecipeInput, recipes: RecipeRepository = Depends(get_recipe_repo)):
    recipe = Recipe(
        id=payload.id,
        title=payload.title,
        ingredients=payload.ingredients,
        servings=payload.servings,
        cooking_time=payload.cooking_time,
        description=payload.description,
        instructions=payload.instructions,
    )
    return recipes.save(home_id, recipe).to_dict()


# ad hoc ingredient lists, e.g. a suggested recipe that was never saved
@router.post('/{home_id}/availability')
def check_availability(home_id: str, payload: AvailabilityRequest,
                       pantry: PantryRepository = Depends(get_pantry_repo)):
    items = pantry.load(home_id).get_items()
    return match_availability(payload.ingredients, items, utcnow()).to_dict()
