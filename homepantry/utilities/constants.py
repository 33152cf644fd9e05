from typing import Final, Tuple

DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Pantry
LOCATIONS: Final[Tuple[str, ...]] = ("pantry", "fridge", "freezer")
DEFAULT_LOCATION: Final[str] = "pantry"
EXPIRING_SOON_DAYS: Final[int] = 7
URGENT_EXPIRY_DAYS: Final[int] = 3

# Shopping list
SHOPPING_CATEGORIES: Final[Tuple[str, ...]] = ("produce", "dairy", "meat", "pantry", "frozen", "other")
DEFAULT_CATEGORY: Final[str] = "other"
UNKNOWN_USER: Final[str] = "unknown"
RECENT_DAYS_WINDOW: Final[int] = 7

# Planner
MEAL_TYPES: Final[Tuple[str, ...]] = ("breakfast", "lunch", "dinner", "snacks")
COMPLETION_AS_PLANNED: Final[str] = "as-planned"
COMPLETION_MODIFIED: Final[str] = "modified"
PLAN_SOURCE_RECIPE: Final[str] = "recipe"
PLAN_SOURCE_MANUAL: Final[str] = "manual"

EXPORT_SOURCE: Final[str] = "homepantry"
