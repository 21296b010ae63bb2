"""
userSettings.* procedures.

RPC-style endpoints: one route per procedure, named the way the front end
calls them (e.g. POST /api/trpc/userSettings.update).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from littlecook.db.client import get_db
from littlecook.domain.user_settings import (
    UserSettings,
    UserSettingsUpdate,
    complete_onboarding,
    get_user_settings,
    update_user_settings,
)
from littlecook.web.auth import get_current_session
from littlecook.web.session import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trpc", tags=["userSettings"])


@router.get("/userSettings.get", response_model=UserSettings)
async def get_settings_procedure(
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    """Current user's settings, created with defaults on first access."""
    return await get_user_settings(client, session.user_id)


@router.post("/userSettings.update", response_model=UserSettings)
async def update_settings_procedure(
    body: UserSettingsUpdate,
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    return await update_user_settings(client, session.user_id, body.default_people_count)


@router.post("/userSettings.completeOnboarding")
async def complete_onboarding_procedure(
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    """Unlock the protected pages for the current user."""
    user = await complete_onboarding(client, session.user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {
        "id": user["id"],
        "email": user.get("email"),
        "hasCompletedOnboarding": user["has_completed_onboarding"],
    }
