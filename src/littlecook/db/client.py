"""
My Little Cook - Supabase Client.

Low-level database access. All queries go through here.

The client handle is created once per application lifespan and handed to
request handlers through FastAPI dependency injection (see get_db), so tests
can swap in their own client without touching module state.
"""

import logging

from fastapi import Request
from supabase import Client, create_client

from littlecook.config import LittleCookSettings, get_settings

logger = logging.getLogger(__name__)


def create_service_client(settings: LittleCookSettings | None = None) -> Client:
    """
    Create a Supabase client using the service role key.

    Server-side only: bypasses RLS, so every query below filters by user_id.
    """
    settings = settings or get_settings()
    logger.info(f"Connecting to Supabase at {settings.supabase_url}")
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
    )


def get_db(request: Request) -> Client:
    """FastAPI dependency: the client owned by the running application."""
    return request.app.state.db


# =============================================================================
# User Operations
# =============================================================================


async def get_user(client: Client, user_id: str) -> dict | None:
    """Get a user row by ID."""
    response = client.table("users").select("*").eq("id", user_id).limit(1).execute()
    return response.data[0] if response.data else None


async def mark_onboarding_complete(client: Client, user_id: str) -> dict | None:
    """Flag the user's onboarding as done. Returns None for an unknown user."""
    response = (
        client.table("users")
        .update({"has_completed_onboarding": True})
        .eq("id", user_id)
        .execute()
    )
    return response.data[0] if response.data else None


# =============================================================================
# User Settings Operations
# =============================================================================


async def get_user_settings_row(client: Client, user_id: str) -> dict | None:
    """Get the settings row for a user."""
    response = (
        client.table("user_settings")
        .select("*")
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    return response.data[0] if response.data else None


async def insert_user_settings_if_absent(client: Client, row: dict) -> dict | None:
    """
    Insert a settings row unless one already exists for row["user_id"].

    Relies on the unique constraint on user_settings.user_id. Returns the
    inserted row, or None when another writer got there first.
    """
    response = (
        client.table("user_settings")
        .upsert(row, on_conflict="user_id", ignore_duplicates=True)
        .execute()
    )
    return response.data[0] if response.data else None


async def upsert_user_settings_row(client: Client, row: dict) -> dict:
    """Create or overwrite the settings row keyed by row["user_id"]."""
    response = (
        client.table("user_settings")
        .upsert(row, on_conflict="user_id")
        .execute()
    )
    return response.data[0]


# =============================================================================
# Meal User Operations
# =============================================================================


async def get_meal_users(client: Client, owner_id: str, meal_user_ids: list[str]) -> list[dict]:
    """Household profiles among meal_user_ids that belong to owner_id."""
    if not meal_user_ids:
        return []
    response = (
        client.table("meal_users")
        .select("id, pseudo")
        .eq("owner_id", owner_id)
        .in_("id", meal_user_ids)
        .execute()
    )
    return response.data


# =============================================================================
# Default Slot Settings Operations
# =============================================================================


async def get_slot_setting_rows(
    client: Client,
    owner_id: str,
    day_of_week: int | None = None,
    meal_type: str | None = None,
) -> list[dict]:
    """Default slot settings of a user, optionally narrowed to a day / slot."""
    query = client.table("default_slot_settings").select("*").eq("owner_id", owner_id)
    if day_of_week is not None:
        query = query.eq("day_of_week", day_of_week)
    if meal_type is not None:
        query = query.eq("meal_type", meal_type)
    return query.execute().data


async def upsert_slot_setting_row(client: Client, row: dict) -> dict:
    """Create or overwrite the setting keyed by (owner_id, day_of_week, meal_type)."""
    response = (
        client.table("default_slot_settings")
        .upsert(row, on_conflict="owner_id,day_of_week,meal_type")
        .execute()
    )
    return response.data[0]


async def insert_slot_setting_rows(client: Client, rows: list[dict]) -> list[dict]:
    if not rows:
        return []
    return client.table("default_slot_settings").insert(rows).execute().data


async def delete_slot_setting_rows(
    client: Client,
    owner_id: str,
    day_of_week: int | None = None,
    meal_type: str | None = None,
) -> list[dict]:
    """Delete a user's settings, optionally narrowed to a day / slot."""
    query = client.table("default_slot_settings").delete().eq("owner_id", owner_id)
    if day_of_week is not None:
        query = query.eq("day_of_week", day_of_week)
    if meal_type is not None:
        query = query.eq("meal_type", meal_type)
    return query.execute().data


# =============================================================================
# Meal Plan Operations
# =============================================================================


async def get_meal_plans(client: Client, owner_id: str, start_date: str, end_date: str) -> list[dict]:
    """Meal plans in [start_date, end_date] with recipe, ingredients and eaters."""
    response = (
        client.table("meal_plans")
        .select(
            "*, recipes(*, recipe_types(type), recipe_ingredients(*, ingredients(*))),"
            " meal_plan_assignments(meal_user_id)"
        )
        .eq("owner_id", owner_id)
        .gte("meal_date", start_date)
        .lte("meal_date", end_date)
        .execute()
    )
    return response.data
