"""Dependências injetadas nas rotas."""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request, status

from webauth.application.context import get_auth_context
from webauth.config.settings import Settings
from webauth.domain.session import Session


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_session(request: Request) -> Session:
    """Retorna a Session anexada pelo SessionManager."""

    session = get_auth_context(request).session
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No Session found, is the session middleware installed?",
        )
    return session


def get_current_user(request: Request) -> Any:
    """Retorna o usuário anexado pelo UserManager."""

    user = get_auth_context(request).user
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No user found, is the user middleware installed?",
        )
    return user
