"""Configurações da aplicação via variáveis de ambiente.

Todas as configurações são carregadas de env vars (prefixo WEBAUTH_).
Nunca hardcode secrets ou valores sensíveis.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_BACKENDS = {"memory", "redis", "firestore"}


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="WEBAUTH_",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "webauth"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"  # json | text
    correlation_id_header: str = "X-Correlation-ID"

    # Cookie de sessão
    session_cookie_name: str = "uid"
    session_cookie_path: str = "/"
    session_cookie_domain: str | None = None
    session_cookie_secure: bool = True  # False apenas para dev em HTTP
    session_cookie_httponly: bool = True
    session_cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    # Sessão
    session_expiration_seconds: int = 60 * 60 * 24 * 7  # uma semana
    store_timeout_seconds: float | None = None  # None = sem deadline nas chamadas ao Store

    # Backends de Store
    session_store_backend: str = "memory"  # memory | redis | firestore
    user_store_backend: str = "memory"  # memory | redis | firestore
    redis_url: str | None = None
    session_key_prefix: str = "session"
    user_key_prefix: str = "user"

    # Firestore
    firestore_project_id: str | None = None
    firestore_database_id: str = "(default)"
    sessions_collection: str = "sessions"
    users_collection: str = "users"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_staging(self) -> bool:
        return self.environment.lower() in ("staging", "stage")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    @property
    def session_expiration(self) -> timedelta:
        return timedelta(seconds=self.session_expiration_seconds)

    def validate_session_store_config(self) -> list[str]:
        """Valida backend de session store por ambiente.

        Em staging/prod, memory é proibido (instâncias sem estado compartilhado).
        Retorna lista de erros (vazia = tudo OK).
        """
        return self._validate_backend("SESSION_STORE_BACKEND", self.session_store_backend)

    def validate_user_store_config(self) -> list[str]:
        """Valida backend do store de usuários."""
        return self._validate_backend("USER_STORE_BACKEND", self.user_store_backend)

    def validate_session_cookie_config(self) -> list[str]:
        """Valida atributos do cookie e parâmetros de sessão."""
        errors: list[str] = []
        if not self.session_cookie_name:
            errors.append("SESSION_COOKIE_NAME não pode ser vazio")
        if self.session_expiration_seconds <= 0:
            errors.append("SESSION_EXPIRATION_SECONDS deve ser positivo")
        if self.store_timeout_seconds is not None and self.store_timeout_seconds <= 0:
            errors.append("STORE_TIMEOUT_SECONDS deve ser positivo quando configurado")
        if self.session_cookie_samesite == "none" and not self.session_cookie_secure:
            errors.append("SESSION_COOKIE_SAMESITE=none requer SESSION_COOKIE_SECURE=true")
        if (self.is_staging or self.is_production) and not self.session_cookie_secure:
            errors.append("SESSION_COOKIE_SECURE=false é proibido em staging/production")
        return errors

    def _validate_backend(self, name: str, value: str) -> list[str]:
        errors: list[str] = []
        backend = value.lower()

        if backend not in _VALID_BACKENDS:
            errors.append(f"{name} '{backend}' inválido. Valores válidos: {sorted(_VALID_BACKENDS)}")

        if backend == "memory" and (self.is_staging or self.is_production):
            errors.append(
                f"{name}=memory é proibido em staging/production. "
                "Use 'redis' ou 'firestore'."
            )
        if backend == "redis" and not self.redis_url:
            errors.append(f"{name}=redis requer REDIS_URL configurado")
        return errors


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
