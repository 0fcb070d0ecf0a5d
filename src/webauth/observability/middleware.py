"""Middlewares de observabilidade."""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
# Sempre truncado (short_id); nunca o uid completo da sessão
_session_id: ContextVar[str] = ContextVar("session_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id corrente (ou vazio)."""

    return _correlation_id.get()


def get_session_id() -> str:
    """Retorna o id truncado da sessão do request corrente (ou vazio)."""

    return _session_id.get()


def bind_session_id(short_session_id: str) -> Token[str]:
    """Associa a sessão resolvida aos logs do restante do request."""

    return _session_id.set(short_session_id)


def reset_session_id(token: Token[str]) -> None:
    _session_id.reset(token)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Gera ou propaga correlation_id em cada request.

    Deve ser o middleware mais externo para que os logs de sessão/usuário
    saiam com o mesmo correlation_id.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Correlation-ID") -> None:
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        incoming = request.headers.get(self._header_name)
        correlation_id = incoming or str(uuid.uuid4())
        token = _correlation_id.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            _correlation_id.reset(token)

        response.headers[self._header_name] = correlation_id
        return response
