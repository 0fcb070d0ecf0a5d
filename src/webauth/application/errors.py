"""Erros de composição e respostas de falha dos estágios do pipeline."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import anyio
from starlette.responses import JSONResponse

from webauth.domain.errors import BackendError

T = TypeVar("T")


class PipelineConfigError(Exception):
    """Pipeline montado em ordem ou configuração inválida."""

    pass


def error_response(status_code: int, detail: str) -> JSONResponse:
    """Resposta substituta usada em 401/500 (nunca carrega cookie)."""
    return JSONResponse({"detail": detail}, status_code=status_code)


async def call_store(
    fn: Callable[..., Awaitable[T]],
    *args: Any,
    timeout_seconds: float | None = None,
) -> T:
    """Executa uma chamada ao Store, com deadline opcional.

    Timeout é tratado como falha de backend.
    """
    if timeout_seconds is None:
        return await fn(*args)
    try:
        with anyio.fail_after(timeout_seconds):
            return await fn(*args)
    except TimeoutError as e:
        raise BackendError(f"Store call exceeded {timeout_seconds}s") from e
