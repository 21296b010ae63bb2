"""
Route gate for the protected areas of the site.

Unauthenticated visitors get a 404 rather than a 401/403: protected pages
are hidden from anonymous users instead of advertised as forbidden.
Signed-in users who have not finished onboarding are sent to the household
setup page whatever they asked for.
"""

import logging
from dataclasses import dataclass

from littlecook.web.session import Session

logger = logging.getLogger(__name__)


ONBOARDING_PATH = "/onboarding/foyer"

PROTECTED_PREFIXES = (
    "/planning",
    "/recettes",
    "/liste-de-courses",
    "/admin",
)


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class RedirectTo:
    location: str


@dataclass(frozen=True)
class NotFound:
    pass


RouteDecision = Allow | RedirectTo | NotFound


def is_protected(path: str) -> bool:
    """True for a protected prefix itself or anything below it."""
    return any(
        path == prefix or path.startswith(prefix + "/")
        for prefix in PROTECTED_PREFIXES
    )


def decide(session: Session | None, requested_path: str) -> RouteDecision:
    """Access decision for a protected path."""
    if session is None:
        logger.debug(f"No session for {requested_path}, hiding it")
        return NotFound()

    if not session.flags.has_completed_onboarding:
        logger.debug(f"User {session.user_id} has not finished onboarding, redirecting")
        return RedirectTo(ONBOARDING_PATH)

    return Allow()
