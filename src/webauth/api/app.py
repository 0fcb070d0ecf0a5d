"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import FastAPI
from pydantic import BaseModel

from webauth.api.routes import router
from webauth.application.pipeline import build_pipeline_from_settings
from webauth.config.settings import Settings, get_settings
from webauth.domain.store import Store
from webauth.infra.codec import ModelCodec
from webauth.infra.store_factory import create_session_store, create_user_store
from webauth.observability.logging import configure_logging, get_logger
from webauth.observability.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)


def _create_redis_client(redis_url: str | None) -> Any:
    """Cria cliente redis.asyncio se URL disponível."""
    if not redis_url:
        return None
    from redis import asyncio as aioredis

    return aioredis.from_url(redis_url, decode_responses=True)


def _create_firestore_client(settings: Settings) -> Any:
    from google.cloud import firestore

    return firestore.Client(
        project=settings.firestore_project_id,
        database=settings.firestore_database_id,
    )


def create_app(
    settings: Settings | None = None,
    session_store: Store[Any, Any] | None = None,
    user_store: Store[Any, Any] | None = None,
    user_id_type: Any = uuid.UUID,
    user_model: type[BaseModel] | None = None,
) -> FastAPI:
    """Cria a aplicação FastAPI com o pipeline de sessão instalado.

    Args:
        settings: Configurações (default: get_settings())
        session_store: Store de sessões; se None, criado a partir de settings
        user_store: Store de usuários; se informado, o estágio de usuário é
            instalado e todas as rotas passam a exigir usuário autenticado
        user_id_type: Tipo do id de usuário guardado em "user_uid"
        user_model: Modelo pydantic dos usuários; com ele (e sem user_store)
            o store de usuários é criado a partir de USER_STORE_BACKEND
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name, settings.log_format)

    validation_errors: list[str] = []
    validation_errors.extend(settings.validate_session_cookie_config())
    if session_store is None:
        validation_errors.extend(settings.validate_session_store_config())
    if user_store is None and user_model is not None:
        validation_errors.extend(settings.validate_user_store_config())

    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    backends: set[str] = set()
    if session_store is None:
        backends.add(settings.session_store_backend.lower())
    if user_store is None and user_model is not None:
        backends.add(settings.user_store_backend.lower())
    # Um client por backend, compartilhado entre os stores
    redis_client = _create_redis_client(settings.redis_url) if "redis" in backends else None
    firestore_client = _create_firestore_client(settings) if "firestore" in backends else None

    if session_store is None:
        session_store = create_session_store(
            settings, redis_client=redis_client, firestore_client=firestore_client
        )
    if user_store is None and user_model is not None:
        user_store = create_user_store(
            settings,
            ModelCodec(user_model),
            redis_client=redis_client,
            firestore_client=firestore_client,
        )

    app = FastAPI(title=settings.service_name, version=settings.version)
    app.include_router(router)

    pipeline = build_pipeline_from_settings(
        settings, session_store, user_store=user_store, user_id_type=user_id_type
    )
    pipeline.install(app)
    # Adicionado por último = mais externo
    app.add_middleware(CorrelationIdMiddleware, header_name=settings.correlation_id_header)

    app.state.settings = settings
    app.state.session_store = session_store
    app.state.user_store = user_store

    logger.info(
        "Application created",
        extra={
            "environment": settings.environment,
            "session_store_backend": settings.session_store_backend,
            "user_stage": user_store is not None,
        },
    )
    return app
