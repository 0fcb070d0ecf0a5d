"""Entidades e contratos de domínio (sem dependência de infraestrutura)."""

from webauth.domain.errors import BackendError, DecodeError, EncodeError, StoreError
from webauth.domain.session import DEFAULT_EXPIRATION, Session, SessionRecord
from webauth.domain.store import Store
from webauth.domain.user import USER_UID_KEY, AuthUser

__all__ = [
    "AuthUser",
    "BackendError",
    "DEFAULT_EXPIRATION",
    "DecodeError",
    "EncodeError",
    "Session",
    "SessionRecord",
    "Store",
    "StoreError",
    "USER_UID_KEY",
]
