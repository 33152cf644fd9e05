"""Saved recipes repository (file persistence)."""
from typing import List

from homepantry.domain.Recipe import Recipe
from homepantry.infra.Document_Store import DocumentStore
from homepantry.infra.paths import RECIPES_COLLECTION
from homepantry.utilities.errors import NotFoundError


class RecipeRepository:
    def __init__(self, store: DocumentStore):
        self.store = store

    def list(self, home_id: str) -> List[Recipe]:
        return [Recipe.from_dict(d) for d in self.store.load(home_id, RECIPES_COLLECTION)]

    def get(self, home_id: str, recipe_id: str) -> Recipe:
        for recipe in self.list(home_id):
            if recipe.id == recipe_id:
                return recipe
        raise NotFoundError("Recipe not found")

    def save(self, home_id: str, recipe: Recipe) -> Recipe:
        '''Inserts the recipe, or replaces the saved one with the same id.'''
        recipes = self.list(home_id)
        for index, existing in enumerate(recipes):
            if existing.id == recipe.id:
                recipes[index] = recipe
                break
        else:
            recipes.append(recipe)
        self.store.save(home_id, RECIPES_COLLECTION, [r.to_dict() for r in recipes])
        return recipe
