"""Recipe ingredient availability against a pantry snapshot.

Matching policy, in order, for each recipe ingredient (names are lower-cased
and trimmed on both sides):

  1. exact name match against the pantry lookup
  2. substring match in either direction, first pantry name wins, pantry names
     iterated in first-insertion order
  3. otherwise the ingredient is reported missing under its display name

Step 2 is a heuristic ("egg" also matches "eggplant"); it is kept as-is so
availability counts stay consistent with what users have always seen.
"""
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from homepantry.domain.PantryItem import PantryItem
from homepantry.domain.Recipe import Recipe, ingredient_name
from homepantry.logic.pantry.expiry import classify

__all__ = ["IngredientMatch", "AvailabilityResult", "match_availability", "annotate_recipes"]

EXACT = "exact"
PARTIAL = "partial"


def _normalize(name: str) -> str:
    return (name or "").strip().lower()


def _pantry_name(item: Any) -> Optional[str]:
    name = item.get("name") if isinstance(item, dict) else getattr(item, "name", None)
    return name if isinstance(name, str) else None


def _as_pantry_item(item: Any) -> Any:
    return PantryItem.from_dict(item) if isinstance(item, dict) else item


class IngredientMatch:
    def __init__(self, ingredient: str, item: Any, kind: str, expiry: Optional[str] = None):
        self.ingredient = ingredient
        self.item = item
        self.kind = kind
        self.expiry = expiry

    def to_dict(self):
        return {
            "ingredient": self.ingredient,
            "pantryItem": _pantry_name(self.item),
            "match": self.kind,
            "expiry": self.expiry,
        }


class AvailabilityResult:
    def __init__(self, available: int = 0, total: int = 0, missing: Optional[List[str]] = None,
                 matches: Optional[List[IngredientMatch]] = None):
        self.available = available
        self.total = total
        self.missing = missing if missing is not None else []
        self.matches = matches if matches is not None else []

    @property
    def complete(self) -> bool:
        return self.available == self.total

    def to_dict(self):
        return {
            "available": self.available,
            "total": self.total,
            "missing": list(self.missing),
            "matches": [m.to_dict() for m in self.matches],
        }

    def __repr__(self) -> str:
        return f"AvailabilityResult({self.available}/{self.total}, missing={self.missing})"


def _build_lookup(pantry_items: Iterable[Any]) -> Dict[str, Any]:
    lookup: Dict[str, Any] = {}
    for item in pantry_items or []:
        key = _normalize(_pantry_name(item) or "")
        if key:
            # dict keeps first-insertion position while the value is overwritten
            lookup[key] = item
    return lookup


def match_availability(recipe_ingredients: Optional[Iterable[Any]], pantry_items: Optional[Iterable[Any]],
                       now: Optional[datetime] = None) -> AvailabilityResult:
    """Count how many of a recipe's ingredients the pantry covers.

    Args:
        recipe_ingredients: strings, or mappings/objects with ``name`` or ``ingredient``.
            Entries without a usable name are ignored and not counted in ``total``.
        pantry_items: PantryItem objects or pantry documents with a ``name``.
        now: when given, each match is annotated with the pantry item's expiry
            category (display only; never affects matching).

    Returns:
        AvailabilityResult with ``available``, ``total``, ``missing`` and ``matches``.
    """
    result = AvailabilityResult()
    if not recipe_ingredients:
        return result
    lookup = _build_lookup(pantry_items)

    for ingredient in recipe_ingredients:
        display = ingredient_name(ingredient)
        if display is None:
            continue
        result.total += 1
        key = _normalize(display)

        item, kind = lookup.get(key), EXACT
        if item is None:
            kind = PARTIAL
            for pantry_key, candidate in lookup.items():
                if pantry_key in key or key in pantry_key:
                    item = candidate
                    break

        if item is None:
            result.missing.append(display)
            continue
        result.available += 1
        expiry = None
        if now is not None:
            expiry = classify(_as_pantry_item(item), now).value
        result.matches.append(IngredientMatch(display, item, kind, expiry))
    return result


def annotate_recipes(recipes: Iterable[Recipe], pantry_items: List[Any],
                     now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Attach an availability summary to each recipe, preserving input order."""
    annotated = []
    for recipe in recipes:
        availability = match_availability(recipe.ingredients, pantry_items, now)
        doc = recipe.to_dict()
        doc["availability"] = availability.to_dict()
        annotated.append(doc)
    return annotated
