"""Composição do pipeline de autenticação.

O estágio de usuário só pode ser adicionado depois que o estágio de sessão
estiver configurado; install() registra os middlewares na ordem correta.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from webauth.application.errors import PipelineConfigError
from webauth.application.session_manager import CookieSettings, SessionManager
from webauth.application.user_manager import UserManager
from webauth.domain.session import DEFAULT_EXPIRATION, Session
from webauth.domain.store import Store
from webauth.domain.user import USER_UID_KEY
from webauth.observability.logging import get_logger

if TYPE_CHECKING:
    from starlette.applications import Starlette

    from webauth.config.settings import Settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionStage:
    store: Store[Session, uuid.UUID]
    cookie: CookieSettings
    expires_in: timedelta
    store_timeout_seconds: float | None = None


@dataclass(frozen=True)
class UserStage:
    store: Store[Any, Any]
    user_id_type: Any
    user_key: str = USER_UID_KEY
    store_timeout_seconds: float | None = None


@dataclass(frozen=True)
class AuthPipeline:
    """Pipeline validado: sessão obrigatória, usuário opcional."""

    session_stage: SessionStage
    user_stage: UserStage | None = None

    @staticmethod
    def builder() -> AuthPipelineBuilder:
        return AuthPipelineBuilder()

    def install(self, app: Starlette) -> None:
        """Registra os middlewares na aplicação.

        No Starlette o último middleware adicionado é o mais externo, por isso
        o estágio de usuário entra antes do estágio de sessão.
        """
        if self.user_stage is not None:
            app.add_middleware(
                UserManager,
                store=self.user_stage.store,
                user_id_type=self.user_stage.user_id_type,
                user_key=self.user_stage.user_key,
                store_timeout_seconds=self.user_stage.store_timeout_seconds,
            )
        app.add_middleware(
            SessionManager,
            store=self.session_stage.store,
            cookie=self.session_stage.cookie,
            expires_in=self.session_stage.expires_in,
            store_timeout_seconds=self.session_stage.store_timeout_seconds,
        )
        logger.info(
            "Auth pipeline installed",
            extra={
                "cookie_name": self.session_stage.cookie.name,
                "user_stage": self.user_stage is not None,
            },
        )


class AuthPipelineBuilder:
    """Builder que impede compor o estágio de usuário sem sessão."""

    def __init__(self) -> None:
        self._session_stage: SessionStage | None = None
        self._user_stage: UserStage | None = None

    def with_sessions(
        self,
        store: Store[Session, uuid.UUID],
        cookie: CookieSettings | None = None,
        expires_in: timedelta = DEFAULT_EXPIRATION,
        store_timeout_seconds: float | None = None,
    ) -> AuthPipelineBuilder:
        self._session_stage = SessionStage(
            store=store,
            cookie=cookie or CookieSettings(),
            expires_in=expires_in,
            store_timeout_seconds=store_timeout_seconds,
        )
        return self

    def with_users(
        self,
        store: Store[Any, Any],
        user_id_type: Any = Any,
        user_key: str = USER_UID_KEY,
        store_timeout_seconds: float | None = None,
    ) -> AuthPipelineBuilder:
        if self._session_stage is None:
            raise PipelineConfigError("User stage requires a session stage: call with_sessions first")
        self._user_stage = UserStage(
            store=store,
            user_id_type=user_id_type,
            user_key=user_key,
            store_timeout_seconds=store_timeout_seconds,
        )
        return self

    def build(self) -> AuthPipeline:
        if self._session_stage is None:
            raise PipelineConfigError("Pipeline requires a session stage")
        return AuthPipeline(session_stage=self._session_stage, user_stage=self._user_stage)


def cookie_settings_from(settings: Settings) -> CookieSettings:
    """Converte Settings em CookieSettings."""
    return CookieSettings(
        name=settings.session_cookie_name,
        path=settings.session_cookie_path,
        domain=settings.session_cookie_domain,
        secure=settings.session_cookie_secure,
        httponly=settings.session_cookie_httponly,
        samesite=settings.session_cookie_samesite,
    )


def build_pipeline_from_settings(
    settings: Settings,
    session_store: Store[Session, uuid.UUID],
    user_store: Store[Any, Any] | None = None,
    user_id_type: Any = Any,
) -> AuthPipeline:
    """Monta o pipeline com cookie/expiração/timeout vindos de Settings."""
    builder = AuthPipeline.builder().with_sessions(
        session_store,
        cookie=cookie_settings_from(settings),
        expires_in=settings.session_expiration,
        store_timeout_seconds=settings.store_timeout_seconds,
    )
    if user_store is not None:
        builder.with_users(
            user_store,
            user_id_type=user_id_type,
            store_timeout_seconds=settings.store_timeout_seconds,
        )
    return builder.build()
