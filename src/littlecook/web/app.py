"""
My Little Cook Web - FastAPI application.

Uses Supabase Auth for identity. Protected pages go through the route gate
middleware; API procedures authenticate through a dependency instead.
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from supabase import Client

from littlecook import __version__
from littlecook.config import settings
from littlecook.db.client import create_service_client, get_db
from littlecook.db import client as db
from littlecook.domain.constants import MealType, compatible_recipe_types
from littlecook.web.auth import get_current_session
from littlecook.web.gate import Allow, RedirectTo, decide, is_protected
from littlecook.web.placeholders import (
    Block,
    admin_table_skeleton,
    planning_grid_skeleton,
    recipe_list_skeleton,
    render_page,
    shopping_list_skeleton,
)
from littlecook.web.session import Session, resolve_session
from littlecook.web.settings_routes import router as settings_router
from littlecook.web.shopping_routes import router as shopping_router
from littlecook.web.slot_settings_routes import router as slot_settings_router

logger = logging.getLogger(__name__)


def create_app(db_factory: Callable[[], Client] | None = None) -> FastAPI:
    """
    Build the application.

    db_factory creates the Supabase client at startup; defaults to the
    service-role client from settings.
    """
    db_factory = db_factory or create_service_client

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"My Little Cook {__version__} starting up...")
        app.state.db = db_factory()
        try:
            yield
        finally:
            app.state.db = None
            logger.info("Database client released")

    app = FastAPI(title="My Little Cook", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def route_gate(request: Request, call_next):
        path = request.url.path
        if not is_protected(path):
            return await call_next(request)

        session = await resolve_session(request, request.app.state.db)
        decision = decide(session, path)

        if isinstance(decision, Allow):
            request.state.session = session
            return await call_next(request)
        if isinstance(decision, RedirectTo):
            return RedirectResponse(decision.location, status_code=307)
        # Same body as an unknown route
        return JSONResponse({"detail": "Not Found"}, status_code=404)

    app.include_router(settings_router, prefix="/api")
    app.include_router(slot_settings_router, prefix="/api")
    app.include_router(shopping_router, prefix="/api")

    _register_api_routes(app)
    _register_pages(app)

    return app


def _register_api_routes(app: FastAPI) -> None:

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.get("/api/me")
    async def get_me(
        session: Session = Depends(get_current_session),
        client: Client = Depends(get_db),
    ):
        """Get current user info."""
        user = await db.get_user(client, session.user_id) or {}

        display_name = user.get("display_name") or user.get("name")
        # Fallback to email prefix if no display name
        if not display_name and session.email:
            display_name = session.email.split("@")[0]

        return {
            "user_id": session.user_id,
            "email": session.email,
            "display_name": display_name or "Utilisateur",
            "has_completed_onboarding": session.flags.has_completed_onboarding,
        }

    @app.get("/api/recipe-types")
    async def list_recipe_types(meal_type: MealType | None = Query(None, alias="mealType")):
        """Recipe types offered when filling a meal slot."""
        return compatible_recipe_types(meal_type)


# Page title and loading skeleton for each protected area
PAGES: dict[str, tuple[str, Callable[[], Block]]] = {
    "/planning": ("Planning", planning_grid_skeleton),
    "/recettes": ("Recettes", recipe_list_skeleton),
    "/liste-de-courses": ("Liste de courses", shopping_list_skeleton),
    "/admin": ("Administration", admin_table_skeleton),
}


def _register_pages(app: FastAPI) -> None:

    def page_shell(title: str, skeleton: Callable[[], Block]):
        async def page(request: Request) -> HTMLResponse:
            return HTMLResponse(render_page(title, skeleton()))
        return page

    for prefix, (title, skeleton) in PAGES.items():
        handler = page_shell(title, skeleton)
        app.add_api_route(prefix, handler, methods=["GET"], response_class=HTMLResponse)
        app.add_api_route(f"{prefix}/{{rest:path}}", handler, methods=["GET"], response_class=HTMLResponse)

    @app.get("/onboarding/foyer", response_class=HTMLResponse)
    async def onboarding_page() -> HTMLResponse:
        """Household setup shell; the front end drives the form."""
        return HTMLResponse(render_page("Configuration du foyer", recipe_list_skeleton(cards=1)))


app = create_app()
