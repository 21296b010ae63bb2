"""
Shopping list generation.

Collects the meal plans of a date window eaten by the selected household
profiles, scales each recipe to the number of eaters and merges identical
ingredients (same name and unit) into one line.
"""

import logging
from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from supabase import Client

from littlecook.db import client as db
from littlecook.domain.constants import (
    DAYS_FRENCH,
    MEAL_TYPE_LABELS,
    MealType,
    recipe_type_color,
    recipe_type_emoji,
    recipe_type_label,
)
from littlecook.domain.ingredients import quantity_value

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 7
DEFAULT_CATEGORY = "Autres"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateShoppingListInput(_CamelModel):
    meal_user_ids: list[str] = Field(default_factory=list)
    start_date: date
    end_date: date | None = None


class ShoppingIngredient(_CamelModel):
    id: str | None = None
    name: str
    unit: str = ""
    category: str = DEFAULT_CATEGORY


class ShoppingListItem(_CamelModel):
    ingredient: ShoppingIngredient
    total_quantity: str
    notes: list[str] = Field(default_factory=list)
    recipes: list[str] = Field(default_factory=list)


class RecipeTypeBadge(_CamelModel):
    value: str
    label: str
    emoji: str
    color: str


class PlannedRecipe(_CamelModel):
    title: str
    slot: str
    meal_date: date
    meal_type: MealType
    eaters: int
    types: list[RecipeTypeBadge] = Field(default_factory=list)


class ShoppingList(_CamelModel):
    items: list[ShoppingListItem] = Field(default_factory=list)
    recipes: list[PlannedRecipe] = Field(default_factory=list)


def shopping_window(start: date, end: date | None = None) -> tuple[date, date]:
    """Inclusive date range; a week from start when no end is given."""
    if end is None:
        end = start + timedelta(days=DEFAULT_WINDOW_DAYS - 1)
    return start, end


def _format_quantity(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _eaters(plan: dict) -> list[str]:
    return [a["meal_user_id"] for a in plan.get("meal_plan_assignments") or []]


def _selected(plans: list[dict], meal_user_ids: list[str]) -> list[dict]:
    wanted = set(meal_user_ids)
    return [p for p in plans if p.get("recipes") and wanted.intersection(_eaters(p))]


def serving_multiplier(recipe: dict, eaters: int) -> float:
    """Scale factor from the recipe's servings to the actual eaters."""
    effective = max(eaters, recipe.get("minimal_servings") or 0)
    return effective / (recipe.get("servings") or 1)


def _scaled(quantity, multiplier: float) -> str:
    value = quantity_value(quantity)
    if value is None:
        return "" if quantity is None else str(quantity)
    return _format_quantity(value * multiplier)


def consolidate_ingredients(meal_plans: list[dict], meal_user_ids: list[str]) -> list[ShoppingListItem]:
    """
    Merge the ingredients of the selected meal plans.

    Quantities with the same name and unit are summed when both are
    numeric and joined with " + " otherwise. Sorted by ingredient name.
    """
    items: dict[str, ShoppingListItem] = {}

    for plan in _selected(meal_plans, meal_user_ids):
        recipe = plan["recipes"]
        multiplier = serving_multiplier(recipe, len(_eaters(plan)))

        for entry in recipe.get("recipe_ingredients") or []:
            ingredient = entry.get("ingredients") or {}
            name = (ingredient.get("name") or "").strip()
            if not name:
                logger.warning(f"Skipping ingredient without a name in recipe {recipe.get('id')}")
                continue

            unit = (ingredient.get("unit") or "").strip()
            key = f"{name.lower()}-{unit.lower()}"
            quantity = _scaled(entry.get("quantity"), multiplier)
            notes = entry.get("notes")

            existing = items.get(key)
            if existing is None:
                items[key] = ShoppingListItem(
                    ingredient=ShoppingIngredient(
                        id=ingredient.get("id"),
                        name=name,
                        unit=unit,
                        category=ingredient.get("category") or DEFAULT_CATEGORY,
                    ),
                    total_quantity=quantity,
                    notes=[notes] if notes else [],
                    recipes=[recipe["title"]],
                )
                continue

            current = quantity_value(existing.total_quantity)
            added = quantity_value(quantity)
            if current is not None and added is not None:
                existing.total_quantity = _format_quantity(current + added)
            elif not existing.total_quantity:
                existing.total_quantity = quantity
            elif quantity:
                existing.total_quantity = f"{existing.total_quantity} + {quantity}"

            if notes:
                existing.notes.append(notes)
            if recipe["title"] not in existing.recipes:
                existing.recipes.append(recipe["title"])

    return sorted(items.values(), key=lambda item: item.ingredient.name.casefold())


def summarize_recipes(meal_plans: list[dict], meal_user_ids: list[str]) -> list[PlannedRecipe]:
    """Recipes behind the list, in calendar order, with their slot label."""
    summary = []
    for plan in _selected(meal_plans, meal_user_ids):
        recipe = plan["recipes"]
        meal_date = date.fromisoformat(str(plan["meal_date"])[:10])
        meal_type = MealType(plan["meal_type"])
        summary.append(PlannedRecipe(
            title=recipe["title"],
            slot=f"{DAYS_FRENCH[meal_date.weekday()]} - {MEAL_TYPE_LABELS[meal_type]}",
            meal_date=meal_date,
            meal_type=meal_type,
            eaters=len(_eaters(plan)),
            types=[
                RecipeTypeBadge(
                    value=t["type"],
                    label=recipe_type_label(t["type"]),
                    emoji=recipe_type_emoji(t["type"]),
                    color=recipe_type_color(t["type"]),
                )
                for t in recipe.get("recipe_types") or []
            ],
        ))

    order = list(MealType)
    summary.sort(key=lambda r: (r.meal_date, order.index(r.meal_type)))
    return summary


async def generate_shopping_list(
    client: Client,
    owner_id: str,
    data: GenerateShoppingListInput,
) -> ShoppingList:
    """Shopping list for the selected profiles over the requested window."""
    if not data.meal_user_ids:
        return ShoppingList()

    start, end = shopping_window(data.start_date, data.end_date)
    plans = await db.get_meal_plans(client, owner_id, start.isoformat(), end.isoformat())
    logger.info(f"Building shopping list from {len(plans)} meal plans ({start} to {end}) for user {owner_id}")

    return ShoppingList(
        items=consolidate_ingredients(plans, data.meal_user_ids),
        recipes=summarize_recipes(plans, data.meal_user_ids),
    )
