"""
defaultSlotSettings.* procedures.

Per-user defaults for each (day of week, meal type) slot of the planning.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from littlecook.db.client import get_db
from littlecook.domain.slot_settings import (
    CopyDayInput,
    DefaultSlotSetting,
    ForeignMealUser,
    SlotInput,
    SlotSettingInput,
    copy_day_settings,
    delete_slot_setting,
    get_default_meal_users,
    list_slot_settings,
    reset_slot_settings,
    slot_settings_map,
    upsert_slot_setting,
)
from littlecook.web.auth import get_current_session
from littlecook.web.session import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trpc", tags=["defaultSlotSettings"])


@router.get("/defaultSlotSettings.getUserSettings", response_model=list[DefaultSlotSetting])
async def get_user_slot_settings(
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    return await list_slot_settings(client, session.user_id)


@router.get("/defaultSlotSettings.getMap")
async def get_slot_settings_map(
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    """Slot key -> default profile IDs, used to prefill the planning grid."""
    return slot_settings_map(await list_slot_settings(client, session.user_id))


@router.post("/defaultSlotSettings.getDefaultMealUsers")
async def get_default_meal_users_procedure(
    body: SlotInput,
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    return await get_default_meal_users(client, session.user_id, body)


@router.post("/defaultSlotSettings.upsertSlotSetting", response_model=DefaultSlotSetting | None)
async def upsert_slot_setting_procedure(
    body: SlotSettingInput,
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    try:
        return await upsert_slot_setting(client, session.user_id, body)
    except ForeignMealUser as e:
        logger.warning(f"Rejected slot setting for user {session.user_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/defaultSlotSettings.deleteSlotSetting")
async def delete_slot_setting_procedure(
    body: SlotInput,
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    await delete_slot_setting(client, session.user_id, body)
    return {"success": True}


@router.post("/defaultSlotSettings.copyDaySettings", response_model=list[DefaultSlotSetting])
async def copy_day_settings_procedure(
    body: CopyDayInput,
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    return await copy_day_settings(client, session.user_id, body)


@router.post("/defaultSlotSettings.resetAllSettings")
async def reset_all_settings_procedure(
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    await reset_slot_settings(client, session.user_id)
    return {"success": True}
