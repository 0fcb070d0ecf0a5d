"""App de teste com rotas que exercitam a Session de formas diferentes."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import Depends, FastAPI

from tests.helpers.fakes import User
from webauth.api.dependencies import get_current_user, get_session
from webauth.application.pipeline import AuthPipeline
from webauth.application.session_manager import CookieSettings
from webauth.domain.session import Session
from webauth.domain.store import Store
from webauth.observability.middleware import get_session_id

COOKIE_NAME = "uid"
TEST_COOKIE = CookieSettings(name=COOKIE_NAME, secure=False)


def build_test_app(
    session_store: Store[Any, Any],
    user_store: Store[Any, Any] | None = None,
    store_timeout_seconds: float | None = None,
) -> FastAPI:
    app = FastAPI()

    @app.get("/noop")
    def noop() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/read")
    def read(session: Session = Depends(get_session)) -> dict[str, Any]:
        return {"x": session.get("x", int), "uid": str(session.uid), "keys": session.keys()}

    @app.post("/insert")
    def insert(session: Session = Depends(get_session)) -> dict[str, str]:
        session.insert("x", 1)
        return {"uid": str(session.uid)}

    @app.post("/cycle")
    def cycle(session: Session = Depends(get_session)) -> dict[str, str]:
        old = session.cycle_uid()
        return {"old": str(old), "new": str(session.uid)}

    @app.get("/boom")
    def boom(session: Session = Depends(get_session)) -> None:
        session.insert("x", 2)
        raise RuntimeError("handler failed")

    @app.get("/log-context")
    async def log_context(session: Session = Depends(get_session)) -> dict[str, str]:
        return {"session_id": get_session_id(), "uid": str(session.uid)}

    @app.get("/me")
    def me(user: User = Depends(get_current_user)) -> dict[str, str]:
        return {"id": str(user.id), "name": user.name}

    builder = AuthPipeline.builder().with_sessions(
        session_store, cookie=TEST_COOKIE, store_timeout_seconds=store_timeout_seconds
    )
    if user_store is not None:
        builder.with_users(user_store, user_id_type=uuid.UUID)
    builder.build().install(app)
    return app
