"""Codecs de registro usados pelos backends de Store.

O codec concentra o que é específico do tipo armazenado:
- serialização (JSON) e desserialização
- validade lógica do registro (expiração)
- TTL físico sugerido ao backend

Assim os backends continuam genéricos sem inspecionar o tipo do objeto.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from webauth.domain.errors import DecodeError, EncodeError
from webauth.domain.session import Session, SessionRecord

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class RecordCodec(Generic[T]):
    """Contrato de codec: encode/decode + validade do registro."""

    def encode(self, obj: T) -> str:
        raise NotImplementedError

    def decode(self, payload: str | bytes) -> T:
        raise NotImplementedError

    def is_live(self, obj: T) -> bool:
        """Registros sem noção de expiração são sempre válidos."""
        return True

    def ttl_seconds(self, obj: T) -> int | None:
        """TTL físico sugerido ao backend (None = sem TTL)."""
        return None

    def expires_at(self, obj: T) -> datetime | None:
        return None


class ModelCodec(RecordCodec[M]):
    """Codec para qualquer modelo pydantic (ex.: usuários)."""

    def __init__(self, model: type[M]) -> None:
        self._model = model

    def encode(self, obj: M) -> str:
        try:
            return obj.model_dump_json()
        except PydanticSerializationError as e:
            raise EncodeError(f"Cannot encode {self._model.__name__}: {e}") from e

    def decode(self, payload: str | bytes) -> M:
        try:
            return self._model.model_validate_json(payload)
        except ValidationError as e:
            raise DecodeError(f"Cannot decode {self._model.__name__}: {e}") from e


class SessionCodec(RecordCodec[Session]):
    """Codec de Session: aplica expiração e entrega sessões não modificadas."""

    def encode(self, obj: Session) -> str:
        try:
            return obj.to_record().model_dump_json()
        except PydanticSerializationError as e:
            raise EncodeError(f"Cannot encode session: {e}") from e

    def decode(self, payload: str | bytes) -> Session:
        try:
            record = SessionRecord.model_validate_json(payload)
        except ValidationError as e:
            raise DecodeError(f"Cannot decode session: {e}") from e
        return Session.from_record(record)

    def is_live(self, obj: Session) -> bool:
        return not obj.is_expired()

    def ttl_seconds(self, obj: Session) -> int | None:
        remaining = (obj.expires_at - datetime.now(tz=UTC)).total_seconds()
        # Redis exige TTL >= 1
        return max(1, math.ceil(remaining))

    def expires_at(self, obj: Session) -> datetime | None:
        return obj.expires_at
