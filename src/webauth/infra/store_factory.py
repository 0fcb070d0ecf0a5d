"""Factory de Store: criação backend-agnóstica.

Responsabilidades:
- Criar instâncias de Store conforme backend configurado
- Validar clientes obrigatórios
- Registrar escolha de backend
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from webauth.domain.store import Store
from webauth.infra.codec import RecordCodec, SessionCodec
from webauth.infra.store_firestore import FirestoreStore
from webauth.infra.store_memory import InMemoryStore
from webauth.infra.store_redis import RedisStore
from webauth.observability.logging import get_logger

if TYPE_CHECKING:
    from uuid import UUID

    from webauth.config.settings import Settings
    from webauth.domain.session import Session

logger: logging.Logger = get_logger(__name__)


def create_store(
    backend: str,
    codec: RecordCodec[Any],
    namespace: str,
    redis_client: Any | None = None,
    firestore_client: Any | None = None,
) -> Store[Any, Any]:
    """Factory para Store.

    Args:
        backend: "memory", "redis" ou "firestore"
        codec: Codec do tipo armazenado
        namespace: Prefixo de chave (Redis) ou coleção (Firestore)
        redis_client: Cliente redis.asyncio (obrigatório se backend="redis")
        firestore_client: Cliente Firestore (obrigatório se backend="firestore")

    Raises:
        ValueError: Se backend inválido ou cliente não fornecido
    """
    backend = backend.lower()

    if backend == "memory":
        logger.warning("Using in-memory store (dev only)", extra={"namespace": namespace})
        return InMemoryStore(codec)

    if backend == "redis":
        if redis_client is None:
            msg = "redis_client required for redis backend"
            raise ValueError(msg)
        logger.info("Using Redis store", extra={"namespace": namespace})
        return RedisStore(redis_client, codec, prefix=namespace)

    if backend == "firestore":
        if firestore_client is None:
            msg = "firestore_client required for firestore backend"
            raise ValueError(msg)
        logger.info("Using Firestore store", extra={"namespace": namespace})
        return FirestoreStore(firestore_client, codec, collection=namespace)

    raise ValueError(f"Backend de store não reconhecido: {backend}")


def create_session_store(
    settings: Settings,
    redis_client: Any | None = None,
    firestore_client: Any | None = None,
) -> Store[Session, UUID]:
    """Cria o Store de sessões a partir das configurações."""
    namespace = (
        settings.sessions_collection
        if settings.session_store_backend.lower() == "firestore"
        else settings.session_key_prefix
    )
    return create_store(
        settings.session_store_backend,
        SessionCodec(),
        namespace,
        redis_client=redis_client,
        firestore_client=firestore_client,
    )


def create_user_store(
    settings: Settings,
    codec: RecordCodec[Any],
    redis_client: Any | None = None,
    firestore_client: Any | None = None,
) -> Store[Any, Any]:
    """Cria o Store de usuários; o codec vem da aplicação (modelo de usuário)."""
    namespace = (
        settings.users_collection
        if settings.user_store_backend.lower() == "firestore"
        else settings.user_key_prefix
    )
    return create_store(
        settings.user_store_backend,
        codec,
        namespace,
        redis_client=redis_client,
        firestore_client=firestore_client,
    )
