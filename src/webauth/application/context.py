"""Contexto tipado por request (Session e usuário resolvidos).

Cada request carrega exatamente um AuthContext no estado do escopo ASGI,
visível por todos os estágios downstream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from starlette.requests import HTTPConnection

from webauth.domain.session import Session

_STATE_KEY = "webauth"


@dataclass
class AuthContext:
    """Estado de autenticação do request corrente."""

    session: Session | None = None
    user: Any | None = None


def get_auth_context(conn: HTTPConnection) -> AuthContext:
    """Retorna (criando se preciso) o AuthContext do request."""
    state = conn.scope.setdefault("state", {})
    context = state.get(_STATE_KEY)
    if context is None:
        context = AuthContext()
        state[_STATE_KEY] = context
    return context
