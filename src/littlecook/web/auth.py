"""
Authentication dependency for RPC routes.

Same resolution as the page gate, but a missing session is reported as 401:
procedures are an API surface, not pages to hide.
"""

from fastapi import Depends, HTTPException, Request
from supabase import Client

from littlecook.db.client import get_db
from littlecook.web.session import Session, resolve_session


async def get_current_session(
    request: Request,
    client: Client = Depends(get_db),
) -> Session:
    session = await resolve_session(request, client)
    if session is None:
        raise HTTPException(status_code=401, detail="UNAUTHORIZED")
    return session
