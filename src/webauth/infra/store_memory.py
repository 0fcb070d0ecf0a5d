"""Implementação de Store em memória (apenas dev/testes)."""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable
from typing import Generic, TypeVar

from webauth.domain.store import Store
from webauth.infra.codec import RecordCodec
from webauth.observability.logging import get_logger, short_id

logger: logging.Logger = get_logger(__name__)

ObjT = TypeVar("ObjT")
IdT = TypeVar("IdT", bound=Hashable)


class InMemoryStore(Store[ObjT, IdT], Generic[ObjT, IdT]):
    """Armazenamento em memória (não usar em produção).

    - Não persiste entre restarts
    - Não funciona com múltiplas instâncias
    - Guarda o payload serializado: load sempre devolve uma cópia nova
    """

    def __init__(self, codec: RecordCodec[ObjT]) -> None:
        self._codec = codec
        self._records: dict[IdT, str] = {}
        self._lock = threading.Lock()

    async def load(self, id_: IdT) -> ObjT | None:
        with self._lock:
            payload = self._records.get(id_)

        if payload is None:
            logger.debug("Record not found (in-memory)", extra={"record_id": short_id(id_)})
            return None

        obj = self._codec.decode(payload)
        if not self._codec.is_live(obj):
            logger.debug("Record expired (in-memory)", extra={"record_id": short_id(id_)})
            return None

        logger.debug("Record loaded (in-memory)", extra={"record_id": short_id(id_)})
        return obj

    async def save(self, id_: IdT, obj: ObjT) -> None:
        payload = self._codec.encode(obj)
        with self._lock:
            self._records[id_] = payload
        logger.debug("Record saved (in-memory)", extra={"record_id": short_id(id_)})

    async def delete(self, id_: IdT) -> None:
        with self._lock:
            removed = self._records.pop(id_, None)
        if removed is not None:
            logger.debug("Record deleted (in-memory)", extra={"record_id": short_id(id_)})

    async def purge_expired(self) -> int:
        """Remove fisicamente registros expirados. Retorna quantos saíram."""
        with self._lock:
            expired = [
                id_
                for id_, payload in self._records.items()
                if not self._codec.is_live(self._codec.decode(payload))
            ]
            for id_ in expired:
                del self._records[id_]
        if expired:
            logger.info("Expired records purged (in-memory)", extra={"count": len(expired)})
        return len(expired)

    def __contains__(self, id_: object) -> bool:
        """Presença física do registro (ignora expiração)."""
        return id_ in self._records

    def __len__(self) -> int:
        return len(self._records)
