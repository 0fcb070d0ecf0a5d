"""Rotas HTTP de serviço."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from webauth.api.dependencies import get_session, get_settings
from webauth.config.settings import Settings
from webauth.domain.session import Session
from webauth.domain.user import USER_UID_KEY

router = APIRouter()


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Healthcheck simples."""
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


@router.get("/session")
def session_info(session: Session = Depends(get_session)) -> dict[str, Any]:
    """Resumo da sessão corrente (somente leitura, não gera cookie)."""
    return {
        "expires_at": session.expires_at.isoformat(),
        "keys": sorted(session.keys()),
        "authenticated": USER_UID_KEY in session,
    }
