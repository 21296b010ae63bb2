"""
Per-user settings.

Settings rows are created lazily: the first read for a user inserts the
default record. Concurrent first reads race on the unique user_id
constraint; the loser simply reloads the row the winner wrote.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field
from supabase import Client

from littlecook.db import client as db

logger = logging.getLogger(__name__)


DEFAULT_PEOPLE_COUNT = 2
MIN_PEOPLE_COUNT = 1
MAX_PEOPLE_COUNT = 20


class UserSettings(BaseModel):
    """Settings record as stored in user_settings, serialized in camelCase."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    default_people_count: int = Field(alias="defaultPeopleCount")


class UserSettingsUpdate(BaseModel):
    """Input of userSettings.update."""

    model_config = ConfigDict(populate_by_name=True)

    default_people_count: int = Field(
        alias="defaultPeopleCount",
        strict=True,
        ge=MIN_PEOPLE_COUNT,
        le=MAX_PEOPLE_COUNT,
    )


class SettingsNotFound(Exception):
    """The settings row vanished between insert and reload."""


async def get_user_settings(client: Client, user_id: str) -> UserSettings:
    """
    Return the user's settings, creating the default record on first access.

    Raises:
        SettingsNotFound: if no row can be read back after the conditional
            insert (rows are never deleted, so this means the store is
            misbehaving).
    """
    row = await db.get_user_settings_row(client, user_id)
    if row is not None:
        return UserSettings.model_validate(row)

    row = await db.insert_user_settings_if_absent(client, {
        "user_id": user_id,
        "default_people_count": DEFAULT_PEOPLE_COUNT,
    })
    if row is not None:
        logger.info(f"Created default settings for user {user_id}")
        return UserSettings.model_validate(row)

    # Lost the create race - the winner's row is there now
    logger.info(f"Settings for user {user_id} created concurrently, reloading")
    row = await db.get_user_settings_row(client, user_id)
    if row is None:
        raise SettingsNotFound(user_id)
    return UserSettings.model_validate(row)


async def update_user_settings(
    client: Client,
    user_id: str,
    default_people_count: int,
) -> UserSettings:
    """
    Validate and store new settings for a user.

    Raises pydantic.ValidationError before touching the database when
    default_people_count is not an integer in [1, 20].
    """
    update = UserSettingsUpdate.model_validate({"defaultPeopleCount": default_people_count})

    row = await db.upsert_user_settings_row(client, {
        "user_id": user_id,
        "default_people_count": update.default_people_count,
    })
    return UserSettings.model_validate(row)


async def complete_onboarding(client: Client, user_id: str) -> dict | None:
    """Mark onboarding as done for a user. None if the user does not exist."""
    user = await db.mark_onboarding_complete(client, user_id)
    if user is not None:
        logger.info(f"User {user_id} completed onboarding")
    return user
