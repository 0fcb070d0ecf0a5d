"""Contrato genérico de persistência (Store).

Um Store é genérico sobre (Objeto, Id) e é usado tanto para Session quanto
para usuários. Implementações concretas vivem em webauth.infra.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

ObjT = TypeVar("ObjT")
IdT = TypeVar("IdT")


class Store(ABC, Generic[ObjT, IdT]):
    """Contrato assíncrono load/save/delete.

    Regras:
    - load é idempotente e retorna None para registro ausente ou expirado
    - save é upsert (cria ou sobrescreve)
    - delete é idempotente (remover id inexistente não é erro)
    - load retorna cópia independente; alterar o objeto não afeta o registro
      até o próximo save
    - Falhas: EncodeError, DecodeError ou BackendError
    - Deve ser seguro para uso concorrente por múltiplos requests
    """

    @abstractmethod
    async def load(self, id_: IdT) -> ObjT | None:
        """Carrega objeto por id (None se ausente ou expirado)."""
        ...

    @abstractmethod
    async def save(self, id_: IdT, obj: ObjT) -> None:
        """Persiste objeto (upsert)."""
        ...

    @abstractmethod
    async def delete(self, id_: IdT) -> None:
        """Remove objeto; não falha se já não existir."""
        ...
