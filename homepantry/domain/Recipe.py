"""Recipe domain entity: title, ordered ingredient list, servings, cooking time."""
from typing import Any, Dict, List, Optional
from uuid import uuid4


def ingredient_name(ingredient: Any) -> Optional[str]:
    """Display name of a recipe ingredient: a plain string, or a mapping/object with ``name`` or ``ingredient``."""
    if isinstance(ingredient, str):
        name = ingredient
    elif isinstance(ingredient, dict):
        name = ingredient.get("name") or ingredient.get("ingredient")
    else:
        name = getattr(ingredient, "name", None) or getattr(ingredient, "ingredient", None)
    return name if isinstance(name, str) and name.strip() else None


class Recipe:
    def __init__(self, title: str = "", ingredients: Optional[List[Any]] = None, servings: Optional[int] = None,
                 cooking_time: Optional[str] = None, description: Optional[str] = None,
                 instructions: Optional[List[str]] = None, id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.title = title
        self.ingredients = ingredients[:] if ingredients else []
        self.servings = servings
        self.cooking_time = cooking_time
        self.description = description
        self.instructions = instructions[:] if instructions else []

    @property
    def name(self) -> str:
        return self.title

    def ingredient_names(self) -> List[str]:
        names = (ingredient_name(ing) for ing in self.ingredients)
        return [n for n in names if n]

    def __str__(self) -> str:
        return f"{self.title} - {self.servings or '?'} servings - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    @staticmethod
    def from_dict(data: Dict[str, Any]):
        d = dict(data or {})
        return Recipe(
            id=d.get("id"),
            title=d.get("title") or d.get("name") or "",
            ingredients=d.get("ingredients") or [],
            servings=d.get("servings"),
            cooking_time=d.get("cookingTime") or d.get("cookTime") or d.get("time"),
            description=d.get("description"),
            instructions=d.get("instructions") or [],
        )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "ingredients": self.ingredients,
            "servings": self.servings,
            "cookingTime": self.cooking_time,
            "description": self.description,
            "instructions": self.instructions,
        }

    def to_plan(self, servings: Optional[int] = None) -> Dict[str, Any]:
        '''The ``planned`` payload used when this recipe is scheduled into a meal slot.'''
        return {
            "recipeId": self.id,
            "recipeName": self.title,
            "ingredients": self.ingredients,
            "servings": servings or self.servings,
            "cookingTime": self.cooking_time,
            "description": self.description,
            "source": "recipe",
        }
