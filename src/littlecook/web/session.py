"""
Session resolution.

Turns the credential carried by a request (session cookie or bearer token)
into the signed-in user and their account flags. A request without a
usable credential resolves to None - that is a normal outcome, not an error.
"""

import logging

from fastapi import Request
from pydantic import BaseModel
from supabase import Client

from littlecook.config import settings
from littlecook.db import client as db

logger = logging.getLogger(__name__)


class SessionFlags(BaseModel):
    has_completed_onboarding: bool = False


class Session(BaseModel):
    """Resolved identity + account flags for the current request."""
    user_id: str
    email: str | None = None
    flags: SessionFlags = SessionFlags()
    access_token: str


def extract_token(request: Request) -> str | None:
    """Session cookie first, then "Authorization: Bearer <token>"."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token

    authorization = request.headers.get("authorization")
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:] or None

    return None


async def resolve_session(request: Request, client: Client) -> Session | None:
    """
    Resolve the request's session.

    Returns None when the request carries no token or the identity provider
    rejects it. Database errors while reading the user's flags propagate.
    """
    access_token = extract_token(request)
    if not access_token:
        return None

    try:
        user_response = client.auth.get_user(access_token)
    except Exception as e:
        logger.warning(f"Session token rejected: {e}")
        return None

    if not user_response or not user_response.user:
        return None

    user = user_response.user
    row = await db.get_user(client, user.id)

    return Session(
        user_id=user.id,
        email=user.email,
        flags=SessionFlags(
            has_completed_onboarding=bool(row and row.get("has_completed_onboarding")),
        ),
        access_token=access_token,
    )
