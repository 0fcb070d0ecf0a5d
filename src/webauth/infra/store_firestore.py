"""Implementação de Store usando Firestore (produção alternativa)."""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

import anyio

from webauth.domain.errors import BackendError
from webauth.domain.store import Store
from webauth.infra.codec import RecordCodec
from webauth.observability.logging import get_logger, short_id

logger: logging.Logger = get_logger(__name__)

ObjT = TypeVar("ObjT")
IdT = TypeVar("IdT")

_PAYLOAD_FIELD = "payload"
_TTL_FIELD = "_ttl_expire_at"


class FirestoreStore(Store[ObjT, IdT], Generic[ObjT, IdT]):
    """Armazenamento em Firestore.

    Documento: {collection}/{id} com o payload JSON do codec e, quando o
    codec informa expiração, o campo _ttl_expire_at (política de TTL do
    Firestore remove o documento fisicamente).

    O client síncrono roda em worker thread (anyio) para não bloquear o loop.
    """

    def __init__(self, firestore_client: Any, codec: RecordCodec[ObjT], collection: str) -> None:
        self._client = firestore_client
        self._codec = codec
        self._collection = collection

    def _doc_ref(self, id_: IdT) -> Any:
        return self._client.collection(self._collection).document(str(id_))

    def _read(self, id_: IdT) -> dict[str, Any] | None:
        doc = self._doc_ref(id_).get()
        if not doc.exists:
            return None
        return doc.to_dict() or {}

    def _write(self, id_: IdT, document: dict[str, Any]) -> None:
        self._doc_ref(id_).set(document)

    def _remove(self, id_: IdT) -> None:
        self._doc_ref(id_).delete()

    async def load(self, id_: IdT) -> ObjT | None:
        try:
            document = await anyio.to_thread.run_sync(self._read, id_)
        except Exception as e:  # noqa: BLE001 - driver errors viram BackendError
            logger.error(
                "Failed to load record from Firestore",
                extra={"record_id": short_id(id_), "collection": self._collection, "error": str(e)},
            )
            raise BackendError(f"Firestore load failed: {e}") from e

        if document is None or _PAYLOAD_FIELD not in document:
            logger.debug("Record not found (Firestore)", extra={"record_id": short_id(id_)})
            return None

        obj = self._codec.decode(document[_PAYLOAD_FIELD])
        if not self._codec.is_live(obj):
            logger.debug("Record expired (Firestore)", extra={"record_id": short_id(id_)})
            return None

        logger.debug("Record loaded (Firestore)", extra={"record_id": short_id(id_)})
        return obj

    async def save(self, id_: IdT, obj: ObjT) -> None:
        document: dict[str, Any] = {_PAYLOAD_FIELD: self._codec.encode(obj)}
        expire_at = self._codec.expires_at(obj)
        if expire_at is not None:
            document[_TTL_FIELD] = expire_at

        try:
            await anyio.to_thread.run_sync(self._write, id_, document)
        except Exception as e:  # noqa: BLE001
            logger.error(
                "Failed to save record to Firestore",
                extra={"record_id": short_id(id_), "collection": self._collection, "error": str(e)},
            )
            raise BackendError(f"Firestore save failed: {e}") from e

        logger.debug("Record saved (Firestore)", extra={"record_id": short_id(id_)})

    async def delete(self, id_: IdT) -> None:
        try:
            await anyio.to_thread.run_sync(self._remove, id_)
        except Exception as e:  # noqa: BLE001
            logger.error(
                "Failed to delete record from Firestore",
                extra={"record_id": short_id(id_), "collection": self._collection, "error": str(e)},
            )
            raise BackendError(f"Firestore delete failed: {e}") from e

        logger.debug("Record deleted (Firestore)", extra={"record_id": short_id(id_)})
