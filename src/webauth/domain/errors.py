"""Taxonomia de erros de persistência e de sessão.

Três categorias, todas terminais para a operação que as recebe:
- EncodeError: valor não serializável na representação de armazenamento
- DecodeError: valor armazenado incompatível com o formato pedido
- BackendError: falha de I/O do backend de armazenamento
"""

from __future__ import annotations


class StoreError(Exception):
    """Erro base de Store/Session."""

    pass


class EncodeError(StoreError):
    """Valor não pôde ser serializado."""

    pass


class DecodeError(StoreError):
    """Valor armazenado não corresponde ao tipo solicitado."""

    pass


class BackendError(StoreError):
    """Falha do backend (rede, timeout, driver)."""

    pass
