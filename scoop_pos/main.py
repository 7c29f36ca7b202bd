"""FastAPI entrypoint for the ice-cream parlor point of sale."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from scoop_pos.api.v1.api import api_router
from scoop_pos.core.config import settings
from scoop_pos.core.security import get_password_hash
from scoop_pos.db import session as db_session
from scoop_pos.db.base import Base
from scoop_pos.db.seed import ensure_default_menu
from scoop_pos.services.app_state import AppState
from scoop_pos.services.user_service import ensure_admin_user

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            seeded = ensure_default_menu(session)
            logger.info("[BOOTSTRAP] default menu items added: %s", seeded)
            ensure_admin_user(session, get_password_hash(settings.admin_pass) if settings.admin_pass else None)
        except Exception:
            logger.exception("[BOOTSTRAP] Seed/bootstrap failed; continuing startup.")

    state = AppState.from_settings(settings)
    state.load()
    app.state.pos = state
    logger.info("[BOOTSTRAP] local state loaded from %s", settings.local_state_path)


@app.get("/")
def root() -> dict[str, str]:
    return {"status": "ok", "app": settings.app_name}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
