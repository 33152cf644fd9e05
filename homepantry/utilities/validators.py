"""
Input validation schemas using Pydantic for request bodies.

Field names follow the camelCase JSON documents; domain rules (locations,
categories, meal types, blank descriptions) are still enforced by the domain
objects so their errors come back as 400 with an error kind.
"""
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def _strip(v):
    if isinstance(v, str):
        return v.strip()
    return v


class PantryItemInput(_CamelModel):
    """Schema for a new pantry item."""
    name: str = Field(..., min_length=1, max_length=100)
    location: Optional[str] = None
    quantity: Optional[str] = Field(None, max_length=100)
    days_until_expiry: Optional[int] = Field(None, ge=0, alias="daysUntilExpiry")
    confidence: Optional[float] = Field(None, ge=0, le=1)
    detected_by: Optional[str] = Field(None, alias="detectedBy")
    created_by: Optional[str] = Field(None, alias="createdBy")
    created_at: Optional[str] = Field(None, alias="createdAt")

    @field_validator('name', 'quantity')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return _strip(v)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('Item name cannot be empty')
        return v


class PantryItemUpdate(_CamelModel):
    """Partial pantry item update; unset fields keep their stored value."""
    name: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = None
    quantity: Optional[str] = Field(None, max_length=100)
    days_until_expiry: Optional[int] = Field(None, ge=0, alias="daysUntilExpiry")

    @field_validator('name', 'quantity')
    @classmethod
    def strip_whitespace(cls, v):
        return _strip(v)


class ShoppingItemInput(_CamelModel):
    """Schema for a new shopping list entry. A blank name is rejected by the list itself."""
    name: str = Field("", max_length=100)
    category: Optional[str] = None
    quantity: Optional[str] = Field(None, max_length=100)
    added_by: Optional[str] = Field(None, alias="addedBy")


class ShoppingItemUpdate(_CamelModel):
    name: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = None
    quantity: Optional[str] = Field(None, max_length=100)


class ShoppingCheckInput(BaseModel):
    checked: bool


class MealPlanCreateInput(_CamelModel):
    """Schema for creating a meal slot; without ``planned`` the slot starts empty."""
    date: str = Field(..., min_length=10)
    meal_type: str = Field(..., alias="mealType")
    planned: Optional[Union[dict, str]] = None
    created_by: Optional[str] = Field(None, alias="createdBy")


class MealLogInput(_CamelModel):
    """Schema for logging a meal that was eaten without being planned."""
    date: str = Field(..., min_length=10)
    meal_type: str = Field(..., alias="mealType")
    description: str = ""
    notes: Optional[str] = None
    created_by: Optional[str] = Field(None, alias="createdBy")


class MealTransitionInput(BaseModel):
    action: str
    payload: Optional[Union[dict, str]] = None


class RecipeInput(_CamelModel):
    """Schema for saving a recipe."""
    id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=200)
    ingredients: List[Any] = Field(default_factory=list)
    servings: Optional[int] = Field(None, ge=1, le=50)
    cooking_time: Optional[str] = Field(None, alias="cookingTime")
    description: Optional[str] = None
    instructions: List[str] = Field(default_factory=list)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """Validate recipe title."""
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()

    @field_validator('instructions')
    @classmethod
    def validate_instructions(cls, v):
        """Filter out empty steps."""
        return [step.strip() for step in v if step and step.strip()]


class AvailabilityRequest(BaseModel):
    ingredients: List[Any] = Field(default_factory=list)
