"""Entidade Session: estado por cliente identificado por um token opaco.

- Uma sessão = um uid (UUID4) exposto ao cliente apenas via cookie
- Dados em mapa chave → valor JSON
- Flag de modificação (dirty) decide se a sessão é persistida ao fim do request

Leituras (get, keys, __contains__) nunca alteram a flag de modificação.
"""

from __future__ import annotations

import copy
import json
import uuid
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json, to_jsonable_python

from webauth.domain.errors import DecodeError, EncodeError

# Expira em uma semana
DEFAULT_EXPIRATION: timedelta = timedelta(days=7)


@lru_cache(maxsize=128)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


class SessionRecord(BaseModel):
    """Snapshot serializável de uma Session (formato persistido)."""

    uid: uuid.UUID
    expires_at: datetime
    data: dict[str, Any] = Field(default_factory=dict)


class Session:
    """Estado de sessão do lado servidor.

    Criada via `Session.new()` (sempre modificada) ou reconstituída de um
    Store via `Session.from_record()` (não modificada).
    """

    __slots__ = ("_uid", "_expires_at", "_data", "_modified")

    def __init__(
        self,
        uid: uuid.UUID,
        expires_at: datetime,
        data: dict[str, Any] | None = None,
        *,
        modified: bool = True,
    ) -> None:
        self._uid = uid
        self._expires_at = expires_at
        self._data: dict[str, Any] = data if data is not None else {}
        self._modified = modified

    @classmethod
    def new(cls, expires_in: timedelta = DEFAULT_EXPIRATION) -> Session:
        """Cria sessão nova com uid aleatório, sem dados e marcada como modificada."""
        return cls(uuid.uuid4(), datetime.now(tz=UTC) + expires_in)

    @classmethod
    def from_record(cls, record: SessionRecord) -> Session:
        """Reconstitui sessão persistida (não modificada)."""
        return cls(
            record.uid,
            record.expires_at,
            copy.deepcopy(record.data),
            modified=False,
        )

    def to_record(self) -> SessionRecord:
        """Snapshot independente do estado atual."""
        return SessionRecord(
            uid=self._uid,
            expires_at=self._expires_at,
            data=copy.deepcopy(self._data),
        )

    @property
    def uid(self) -> uuid.UUID:
        return self._uid

    @property
    def expires_at(self) -> datetime:
        return self._expires_at

    def is_modified(self) -> bool:
        return self._modified

    def is_expired(self, now: datetime | None = None) -> bool:
        """True quando expires_at já passou."""
        now = now or datetime.now(tz=UTC)
        return self._expires_at < now

    def mark_clean(self) -> None:
        """Zera a flag de modificação.

        Usado pelo SessionManager na sessão nova de um request, para que ela
        só seja persistida se o handler alterá-la. Sessões vindas de um Store
        já chegam limpas via from_record.
        """
        self._modified = False

    def cycle_uid(self) -> uuid.UUID:
        """Gera novo uid, mantendo os dados. Retorna o uid anterior.

        O registro persistido sob o uid anterior não é removido nem migrado;
        isso fica a cargo de quem chama.
        """
        old_uid = self._uid
        self._uid = uuid.uuid4()
        self._modified = True
        return old_uid

    def insert(self, key: str, value: Any) -> None:
        """Insere (ou sobrescreve) um valor serializável em JSON.

        Raises:
            EncodeError: Se o valor não puder ser serializado (inclusive
                floats não finitos, que o JSON não representa)
        """
        try:
            encoded = to_jsonable_python(value)
            json.dumps(encoded, allow_nan=False)
        except (PydanticSerializationError, ValueError) as e:
            raise EncodeError(f"Cannot encode value for key {key!r}: {e}") from e
        self._data[key] = encoded
        self._modified = True

    def get(self, key: str, type_: Any = Any) -> Any | None:
        """Lê um valor, validando-o contra `type_`.

        Returns:
            Valor decodificado ou None se a chave não existe

        Raises:
            DecodeError: Se o valor armazenado não for compatível com `type_`
        """
        if key not in self._data:
            return None
        return self._decode(key, self._data[key], type_)

    def remove(self, key: str, type_: Any = Any) -> Any | None:
        """Remove um valor, retornando-o decodificado (ou None se ausente).

        A decodificação acontece antes da remoção: em DecodeError a chave
        permanece e a sessão não é marcada como modificada.
        """
        if key not in self._data:
            return None
        value = self._decode(key, self._data[key], type_)
        del self._data[key]
        self._modified = True
        return value

    def clear(self) -> None:
        """Remove todos os dados (sempre marca como modificada)."""
        self._data.clear()
        self._modified = True

    def keys(self) -> list[str]:
        return list(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Session):
            return NotImplemented
        return (
            self._uid == other._uid
            and self._expires_at == other._expires_at
            and self._data == other._data
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Session(uid={self._uid}, expires_at={self._expires_at.isoformat()}, "
            f"keys={len(self._data)}, modified={self._modified})"
        )

    @staticmethod
    def _decode(key: str, raw: Any, type_: Any) -> Any:
        # Estrito sobre JSON: "42" não vira int, 1.0 não vira int
        try:
            return _adapter(type_).validate_json(to_json(raw), strict=True)
        except ValidationError as e:
            raise DecodeError(f"Cannot decode value for key {key!r}: {e}") from e
