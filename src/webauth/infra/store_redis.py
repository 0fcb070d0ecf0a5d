"""Implementação de Store usando Redis (produção)."""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from redis.exceptions import RedisError

from webauth.domain.errors import BackendError
from webauth.domain.store import Store
from webauth.infra.codec import RecordCodec
from webauth.observability.logging import get_logger, short_id

logger: logging.Logger = get_logger(__name__)

ObjT = TypeVar("ObjT")
IdT = TypeVar("IdT")


class RedisStore(Store[ObjT, IdT], Generic[ObjT, IdT]):
    """Armazenamento em Redis via cliente `redis.asyncio`.

    Chave: "{prefix}:{id}". Quando o codec sugere TTL (sessões), o registro
    é gravado com EX para que o Redis o descarte fisicamente; a expiração
    lógica continua verificada no load.
    """

    def __init__(self, redis_client: Any, codec: RecordCodec[ObjT], prefix: str) -> None:
        self._redis = redis_client
        self._codec = codec
        self._prefix = prefix

    def _key(self, id_: IdT) -> str:
        return f"{self._prefix}:{id_}"

    async def load(self, id_: IdT) -> ObjT | None:
        try:
            payload = await self._redis.get(self._key(id_))
        except RedisError as e:
            logger.error(
                "Failed to load record from Redis",
                extra={"record_id": short_id(id_), "prefix": self._prefix, "error": str(e)},
            )
            raise BackendError(f"Redis load failed: {e}") from e

        if not payload:
            logger.debug("Record not found (Redis)", extra={"record_id": short_id(id_)})
            return None

        obj = self._codec.decode(payload)
        if not self._codec.is_live(obj):
            logger.debug("Record expired (Redis)", extra={"record_id": short_id(id_)})
            return None

        logger.debug("Record loaded (Redis)", extra={"record_id": short_id(id_)})
        return obj

    async def save(self, id_: IdT, obj: ObjT) -> None:
        payload = self._codec.encode(obj)
        ttl = self._codec.ttl_seconds(obj)

        try:
            await self._redis.set(self._key(id_), payload, ex=ttl)
        except RedisError as e:
            logger.error(
                "Failed to save record to Redis",
                extra={"record_id": short_id(id_), "prefix": self._prefix, "error": str(e)},
            )
            raise BackendError(f"Redis save failed: {e}") from e

        logger.debug(
            "Record saved (Redis)",
            extra={"record_id": short_id(id_), "ttl_seconds": ttl},
        )

    async def delete(self, id_: IdT) -> None:
        try:
            deleted = await self._redis.delete(self._key(id_))
        except RedisError as e:
            logger.error(
                "Failed to delete record from Redis",
                extra={"record_id": short_id(id_), "prefix": self._prefix, "error": str(e)},
            )
            raise BackendError(f"Redis delete failed: {e}") from e

        if deleted:
            logger.debug("Record deleted (Redis)", extra={"record_id": short_id(id_)})
