"""
Default slot settings.

For each (day of week, meal type) slot a user can pick the household
profiles who usually eat there, plus the usual cook. New meal plans are
prefilled from these defaults. Days count from Monday = 0.
"""

import logging
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from supabase import Client

from littlecook.db import client as db
from littlecook.domain.constants import DAYS_FRENCH, MEAL_TYPE_LABELS, MealType, slot_key

logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


DayOfWeek = Annotated[int, Field(strict=True, ge=0, le=len(DAYS_FRENCH) - 1)]


class SlotInput(_CamelModel):
    day_of_week: DayOfWeek
    meal_type: MealType


class SlotSettingInput(SlotInput):
    meal_user_ids: list[str] = Field(default_factory=list)
    default_cook_responsible_id: str | None = None


class CopyDayInput(_CamelModel):
    source_day_of_week: DayOfWeek
    target_day_of_week: DayOfWeek


class DefaultSlotSetting(_CamelModel):
    id: str
    owner_id: str
    day_of_week: int
    meal_type: MealType
    meal_user_ids: list[str] = Field(default_factory=list)
    default_cook_responsible_id: str | None = None
    slot_key: str = ""
    day_label: str = ""
    meal_type_label: str = ""

    @classmethod
    def from_row(cls, row: dict) -> "DefaultSlotSetting":
        setting = cls.model_validate(row)
        setting.slot_key = slot_key(setting.day_of_week, setting.meal_type)
        setting.day_label = DAYS_FRENCH[setting.day_of_week]
        setting.meal_type_label = MEAL_TYPE_LABELS[setting.meal_type]
        return setting


class ForeignMealUser(Exception):
    """A referenced household profile does not belong to the user."""


def _sort_key(setting: DefaultSlotSetting) -> tuple[int, int]:
    return setting.day_of_week, list(MealType).index(setting.meal_type)


async def _check_ownership(client: Client, owner_id: str, data: SlotSettingInput) -> None:
    wanted = set(data.meal_user_ids)
    owned = await db.get_meal_users(client, owner_id, list(wanted))
    if len(owned) != len(wanted):
        raise ForeignMealUser("Un ou plusieurs profils ne vous appartiennent pas")

    if data.default_cook_responsible_id:
        cook = await db.get_meal_users(client, owner_id, [data.default_cook_responsible_id])
        if not cook:
            raise ForeignMealUser("Le responsable de cuisine sélectionné ne vous appartient pas")


async def list_slot_settings(client: Client, owner_id: str) -> list[DefaultSlotSetting]:
    """All of a user's settings, Monday first, breakfast before dinner."""
    rows = await db.get_slot_setting_rows(client, owner_id)
    return sorted((DefaultSlotSetting.from_row(r) for r in rows), key=_sort_key)


def slot_settings_map(settings: list[DefaultSlotSetting]) -> dict[str, list[str]]:
    """slot key ("0-LUNCH") -> default meal user IDs."""
    return {s.slot_key: s.meal_user_ids for s in settings}


async def get_default_meal_users(client: Client, owner_id: str, slot: SlotInput) -> list[dict]:
    """Profiles ({id, pseudo}) assigned by default to a slot, in stored order."""
    rows = await db.get_slot_setting_rows(client, owner_id, slot.day_of_week, slot.meal_type.value)
    if not rows:
        return []

    ids = rows[0].get("meal_user_ids") or []
    users = {u["id"]: u for u in await db.get_meal_users(client, owner_id, ids)}
    return [users[i] for i in ids if i in users]


async def upsert_slot_setting(
    client: Client,
    owner_id: str,
    data: SlotSettingInput,
) -> DefaultSlotSetting | None:
    """
    Store the defaults for a slot.

    An empty profile list clears the slot and returns None.

    Raises:
        ForeignMealUser: a profile or the cook is not one of the user's.
    """
    await _check_ownership(client, owner_id, data)

    if not data.meal_user_ids:
        await db.delete_slot_setting_rows(client, owner_id, data.day_of_week, data.meal_type.value)
        return None

    row = await db.upsert_slot_setting_row(client, {
        "owner_id": owner_id,
        "day_of_week": data.day_of_week,
        "meal_type": data.meal_type.value,
        "meal_user_ids": list(dict.fromkeys(data.meal_user_ids)),
        "default_cook_responsible_id": data.default_cook_responsible_id or None,
    })
    return DefaultSlotSetting.from_row(row)


async def delete_slot_setting(client: Client, owner_id: str, slot: SlotInput) -> None:
    await db.delete_slot_setting_rows(client, owner_id, slot.day_of_week, slot.meal_type.value)


async def copy_day_settings(client: Client, owner_id: str, data: CopyDayInput) -> list[DefaultSlotSetting]:
    """
    Replace the target day's settings with copies of the source day's.

    Profiles are copied; the usual cook is not.
    """
    source_rows = await db.get_slot_setting_rows(client, owner_id, data.source_day_of_week)
    if data.source_day_of_week == data.target_day_of_week:
        return sorted((DefaultSlotSetting.from_row(r) for r in source_rows), key=_sort_key)

    await db.delete_slot_setting_rows(client, owner_id, data.target_day_of_week)
    created = await db.insert_slot_setting_rows(client, [
        {
            "owner_id": owner_id,
            "day_of_week": data.target_day_of_week,
            "meal_type": row["meal_type"],
            "meal_user_ids": row.get("meal_user_ids") or [],
        }
        for row in source_rows
    ])
    logger.info(
        f"Copied {len(created)} slot settings from day {data.source_day_of_week} "
        f"to day {data.target_day_of_week} for user {owner_id}"
    )
    return sorted((DefaultSlotSetting.from_row(r) for r in created), key=_sort_key)


async def reset_slot_settings(client: Client, owner_id: str) -> None:
    await db.delete_slot_setting_rows(client, owner_id)
