"""UserManager: resolve o usuário a partir da Session do request.

Precisa rodar depois do SessionManager. A ordem é garantida na composição
(AuthPipelineBuilder); mesmo assim a ausência de Session vira 401.

Nunca escreve na Session nem no Store.
"""

from __future__ import annotations

import logging
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from webauth.application.context import get_auth_context
from webauth.application.errors import call_store, error_response
from webauth.domain.errors import DecodeError, StoreError
from webauth.domain.store import Store
from webauth.domain.user import USER_UID_KEY
from webauth.observability.logging import get_logger, short_id

logger: logging.Logger = get_logger(__name__)


class UserManager(BaseHTTPMiddleware):
    """Middleware que anexa o usuário autenticado ao AuthContext."""

    def __init__(
        self,
        app: ASGIApp,
        store: Store[Any, Any],
        user_id_type: Any = Any,
        user_key: str = USER_UID_KEY,
        store_timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(app)
        self._store = store
        self._user_id_type = user_id_type
        self._user_key = user_key
        self._timeout = store_timeout_seconds

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        context = get_auth_context(request)
        session = context.session
        if session is None:
            logger.warning("No session found, is the session middleware installed?")
            return error_response(401, "Not authenticated")

        try:
            user_id = session.get(self._user_key, self._user_id_type)
        except DecodeError as e:
            logger.warning(
                "Unable to read user id from session",
                extra={"session_id": short_id(session.uid), "error": str(e)},
            )
            return error_response(500, "Invalid session state")

        if user_id is None:
            # Sessão anônima
            logger.info(
                "No user id found in session",
                extra={"session_id": short_id(session.uid)},
            )
            return error_response(401, "Not authenticated")

        try:
            user = await call_store(self._store.load, user_id, timeout_seconds=self._timeout)
        except StoreError as e:
            logger.error(
                "Failed to load user",
                extra={
                    "session_id": short_id(session.uid),
                    "user_id": short_id(user_id),
                    "error": str(e),
                },
            )
            return error_response(500, "User storage unavailable")

        if user is None:
            logger.warning(
                "Session references an unknown user",
                extra={"session_id": short_id(session.uid), "user_id": short_id(user_id)},
            )
            return error_response(401, "Not authenticated")

        logger.debug("User used", extra={"user_id": short_id(user_id)})
        context.user = user
        return await call_next(request)
