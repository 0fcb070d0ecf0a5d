"""SessionManager: estágio que vincula cookie ↔ Session.

Fluxo por request:
1. Lê o cookie configurado e tenta interpretá-lo como UUID
   (valor inválido = sem cookie, apenas log de warning)
2. Sem uid → Session nova. Com uid → Store.load:
   - erro de Store → 500 e o downstream não roda
   - None (ausente/expirada) → Session nova; registro antigo fica intocado
   - encontrada → usada como está
3. Anexa a Session ao AuthContext do request
4. Executa o downstream e repassa o resultado sem alteração
5. Sessão modificada → Store.save e cookie com o uid ATUAL;
   falha no save descarta a resposta e devolve 500 (sem cookie).
   Sessão não modificada → nenhum save, nenhum cookie.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, timedelta
from typing import Literal

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from webauth.application.context import get_auth_context
from webauth.application.errors import call_store, error_response
from webauth.domain.errors import StoreError
from webauth.domain.session import DEFAULT_EXPIRATION, Session
from webauth.domain.store import Store
from webauth.observability.logging import get_logger, short_id
from webauth.observability.middleware import bind_session_id, reset_session_id

logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class CookieSettings:
    """Nome e atributos do cookie de sessão."""

    name: str = "uid"
    path: str = "/"
    domain: str | None = None
    secure: bool = True
    httponly: bool = True
    samesite: Literal["lax", "strict", "none"] = "lax"


class SessionManager(BaseHTTPMiddleware):
    """Middleware de sessão baseado em cookie + Store[Session, UUID]."""

    def __init__(
        self,
        app: ASGIApp,
        store: Store[Session, uuid.UUID],
        cookie: CookieSettings | None = None,
        expires_in: timedelta = DEFAULT_EXPIRATION,
        store_timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(app)
        self._store = store
        self._cookie = cookie or CookieSettings()
        self._expires_in = expires_in
        self._timeout = store_timeout_seconds

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        session_uid = self._read_session_uid(request)

        if session_uid is None:
            session = self._fresh_session()
        else:
            try:
                loaded = await call_store(
                    self._store.load, session_uid, timeout_seconds=self._timeout
                )
            except StoreError as e:
                logger.error(
                    "Failed to load session",
                    extra={"session_id": short_id(session_uid), "error": str(e)},
                )
                return error_response(500, "Session storage unavailable")

            if loaded is None:
                # Ausente ou expirada
                logger.debug(
                    "Session not resolvable, starting a new one",
                    extra={"session_id": short_id(session_uid)},
                )
                session = self._fresh_session()
            else:
                session = loaded

        get_auth_context(request).session = session
        token = bind_session_id(short_id(session.uid))
        try:
            logger.debug("Session used")
            response = await call_next(request)
            return await self._persist(session, response)
        finally:
            reset_session_id(token)

    async def _persist(self, session: Session, response: Response) -> Response:
        if not session.is_modified():
            return response

        try:
            await call_store(
                self._store.save, session.uid, session, timeout_seconds=self._timeout
            )
        except StoreError as e:
            logger.error(
                "Failed to save session",
                extra={"session_id": short_id(session.uid), "error": str(e)},
            )
            return error_response(500, "Session storage unavailable")

        self._write_cookie(response, session)
        return response

    def _fresh_session(self) -> Session:
        # Sessão nova só é persistida se o downstream a alterar
        session = Session.new(self._expires_in)
        session.mark_clean()
        return session

    def _read_session_uid(self, request: Request) -> uuid.UUID | None:
        raw = request.cookies.get(self._cookie.name)
        if raw is None:
            return None
        try:
            return uuid.UUID(raw)
        except ValueError:
            logger.warning(
                "Unable to parse session cookie, ignoring it",
                extra={"cookie_name": self._cookie.name, "cookie_length": len(raw)},
            )
            return None

    def _write_cookie(self, response: Response, session: Session) -> None:
        response.set_cookie(
            self._cookie.name,
            str(session.uid),
            expires=session.expires_at.astimezone(UTC),
            path=self._cookie.path,
            domain=self._cookie.domain,
            secure=self._cookie.secure,
            httponly=self._cookie.httponly,
            samesite=self._cookie.samesite,
        )
