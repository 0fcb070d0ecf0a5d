"""Utilitários de segurança (hash de senha)."""

from webauth.security.password import (
    CipheredPassword,
    InvalidPasswordHash,
    PlainPassword,
    hash_password,
    verify_password,
)

__all__ = [
    "CipheredPassword",
    "InvalidPasswordHash",
    "PlainPassword",
    "hash_password",
    "verify_password",
]
