"""
Constant tables shared by the planning, recipe and settings screens.

Labels are French: they are shown as-is in the UI.
"""

from enum import Enum
from typing import TypedDict


# Monday-first (French calendar)
DAYS_FRENCH = ("Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche")

# Rows of the planning grid
MEAL_TYPES_FRENCH = ("Petit-déjeuner", "Déjeuner", "Dîner")


class MealType(str, Enum):
    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    SNACK = "SNACK"


MEAL_TYPE_LABELS: dict[MealType, str] = {
    MealType.BREAKFAST: "Petit-déjeuner",
    MealType.LUNCH: "Déjeuner",
    MealType.DINNER: "Dîner",
    MealType.SNACK: "Collation",
}


class RecipeType(str, Enum):
    BREAKFAST = "BREAKFAST"
    APPETIZER = "APPETIZER"
    STARTER = "STARTER"
    MAIN_COURSE = "MAIN_COURSE"
    SIDE_DISH = "SIDE_DISH"
    DESSERT = "DESSERT"
    BEVERAGE = "BEVERAGE"


class RecipeTypeInfo(TypedDict):
    value: str
    label: str
    emoji: str
    color: str


RECIPE_TYPES: dict[RecipeType, RecipeTypeInfo] = {
    RecipeType.BREAKFAST: {
        "value": "BREAKFAST",
        "label": "Petit-déjeuner",
        "emoji": "🌅",
        "color": "bg-yellow-100 text-yellow-800 border-yellow-200",
    },
    RecipeType.APPETIZER: {
        "value": "APPETIZER",
        "label": "Apéritif",
        "emoji": "🥂",
        "color": "bg-purple-100 text-purple-800 border-purple-200",
    },
    RecipeType.STARTER: {
        "value": "STARTER",
        "label": "Entrée",
        "emoji": "🥗",
        "color": "bg-green-100 text-green-800 border-green-200",
    },
    RecipeType.MAIN_COURSE: {
        "value": "MAIN_COURSE",
        "label": "Plat principal",
        "emoji": "🍽️",
        "color": "bg-red-100 text-red-800 border-red-200",
    },
    RecipeType.SIDE_DISH: {
        "value": "SIDE_DISH",
        "label": "Accompagnement",
        "emoji": "🥔",
        "color": "bg-orange-100 text-orange-800 border-orange-200",
    },
    RecipeType.DESSERT: {
        "value": "DESSERT",
        "label": "Dessert",
        "emoji": "🍰",
        "color": "bg-pink-100 text-pink-800 border-pink-200",
    },
    RecipeType.BEVERAGE: {
        "value": "BEVERAGE",
        "label": "Boisson",
        "emoji": "🥤",
        "color": "bg-blue-100 text-blue-800 border-blue-200",
    },
}

DEFAULT_RECIPE_TYPE_COLOR = "bg-gray-100 text-gray-800 border-gray-200"


def _lookup(recipe_type: str) -> RecipeTypeInfo | None:
    try:
        return RECIPE_TYPES[RecipeType(recipe_type)]
    except ValueError:
        return None


def recipe_type_label(recipe_type: str) -> str:
    """French label, or the raw value for unknown types."""
    info = _lookup(recipe_type)
    return info["label"] if info else str(recipe_type)


def recipe_type_emoji(recipe_type: str) -> str:
    info = _lookup(recipe_type)
    return info["emoji"] if info else ""


def recipe_type_color(recipe_type: str) -> str:
    info = _lookup(recipe_type)
    return info["color"] if info else DEFAULT_RECIPE_TYPE_COLOR


def compatible_recipe_types(meal_type: MealType | None) -> list[RecipeTypeInfo]:
    """Recipe types that make sense for a meal slot."""
    if meal_type == MealType.BREAKFAST:
        keys = [RecipeType.BREAKFAST, RecipeType.BEVERAGE]
    elif meal_type in (MealType.LUNCH, MealType.DINNER):
        keys = [
            RecipeType.APPETIZER,
            RecipeType.STARTER,
            RecipeType.MAIN_COURSE,
            RecipeType.SIDE_DISH,
            RecipeType.DESSERT,
            RecipeType.BEVERAGE,
        ]
    elif meal_type == MealType.SNACK:
        keys = [RecipeType.APPETIZER, RecipeType.DESSERT, RecipeType.BEVERAGE]
    else:
        keys = list(RecipeType)
    return [RECIPE_TYPES[key] for key in keys]


def slot_key(day_of_week: int, meal_type: MealType) -> str:
    """Key of a planning slot, e.g. "0-LUNCH" (0 = Monday)."""
    return f"{day_of_week}-{MealType(meal_type).value}"
