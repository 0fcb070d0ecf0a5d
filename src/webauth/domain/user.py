"""Contrato mínimo de usuário visto por este pacote."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# Chave da Session que referencia o usuário autenticado
USER_UID_KEY: str = "user_uid"


@runtime_checkable
class AuthUser(Protocol):
    """Usuário identificável por um id; o restante é opaco."""

    @property
    def id(self) -> Any: ...
