"""Fakes de Store e modelos usados nos testes de pipeline."""

from __future__ import annotations

import asyncio
import uuid
from typing import Any

import anyio
from pydantic import BaseModel

from webauth.domain.errors import BackendError
from webauth.domain.session import Session
from webauth.domain.store import Store


class User(BaseModel):
    """Usuário mínimo para testes."""

    id: uuid.UUID
    name: str


class RecordingStore(Store[Any, Any]):
    """Envolve um Store real registrando chamadas."""

    def __init__(self, inner: Store[Any, Any]) -> None:
        self.inner = inner
        self.loads: list[Any] = []
        self.saves: list[Any] = []
        self.deletes: list[Any] = []

    async def load(self, id_: Any) -> Any | None:
        self.loads.append(id_)
        return await self.inner.load(id_)

    async def save(self, id_: Any, obj: Any) -> None:
        self.saves.append(id_)
        await self.inner.save(id_, obj)

    async def delete(self, id_: Any) -> None:
        self.deletes.append(id_)
        await self.inner.delete(id_)


class FailingStore(Store[Any, Any]):
    """Store cujas operações configuradas falham com BackendError."""

    def __init__(self, inner: Store[Any, Any], fail_on: set[str]) -> None:
        self.inner = inner
        self.fail_on = fail_on
        self.calls: list[str] = []

    async def load(self, id_: Any) -> Any | None:
        self.calls.append("load")
        if "load" in self.fail_on:
            raise BackendError("load unavailable")
        return await self.inner.load(id_)

    async def save(self, id_: Any, obj: Any) -> None:
        self.calls.append("save")
        if "save" in self.fail_on:
            raise BackendError("save unavailable")
        await self.inner.save(id_, obj)

    async def delete(self, id_: Any) -> None:
        self.calls.append("delete")
        if "delete" in self.fail_on:
            raise BackendError("delete unavailable")
        await self.inner.delete(id_)


class SlowStore(Store[Any, Any]):
    """Store que demora `delay` segundos em load."""

    def __init__(self, inner: Store[Any, Any], delay: float) -> None:
        self.inner = inner
        self.delay = delay

    async def load(self, id_: Any) -> Any | None:
        await anyio.sleep(self.delay)
        return await self.inner.load(id_)

    async def save(self, id_: Any, obj: Any) -> None:
        await self.inner.save(id_, obj)

    async def delete(self, id_: Any) -> None:
        await self.inner.delete(id_)


def seed(store: Store[Any, Any], id_: Any, obj: Any) -> None:
    """Grava um objeto no store fora de um event loop (testes síncronos)."""
    asyncio.run(store.save(id_, obj))


def fetch(store: Store[Any, Any], id_: Any) -> Any | None:
    """Lê um objeto do store fora de um event loop (testes síncronos)."""
    return asyncio.run(store.load(id_))


def set_cookie_value(response: Any, name: str) -> str | None:
    """Extrai o valor de um Set-Cookie da resposta (None se ausente)."""
    for header in response.headers.get_list("set-cookie"):
        cookie_name, _, rest = header.partition("=")
        if cookie_name.strip() == name:
            return rest.split(";", 1)[0]
    return None


def logged_in_session(user_id: uuid.UUID) -> Session:
    """Session já contendo user_uid."""
    session = Session.new()
    session.insert("user_uid", user_id)
    return session
