"""Hash e verificação de senha (Argon2id via argon2-cffi).

Usado por quem implementa o login para validar credenciais antes de gravar
"user_uid" na Session. Nunca registrar senhas ou hashes em logs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from argon2 import PasswordHasher, Type, extract_parameters
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_hasher = PasswordHasher(type=Type.ID)


class InvalidPasswordHash(ValueError):
    """String não é um hash Argon2 em formato PHC."""

    pass


def hash_password(password: str | bytes) -> str:
    """Gera hash Argon2id (formato PHC, prefixo "$argon2id$") com salt aleatório."""
    return _hasher.hash(password)


def verify_password(password: str | bytes, password_hash: str) -> bool:
    """Verifica se a senha corresponde ao hash.

    Raises:
        InvalidPasswordHash: Se password_hash não for um hash Argon2 válido
    """
    try:
        return _hasher.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except InvalidHashError as e:
        raise InvalidPasswordHash("Malformed password hash") from e
    except VerificationError:
        return False


@dataclass(frozen=True)
class PlainPassword:
    """Senha em texto puro (repr mascarado)."""

    value: str = field(repr=False)

    def cipher(self) -> CipheredPassword:
        return CipheredPassword(hash_password(self.value))


@dataclass(frozen=True)
class CipheredPassword:
    """Hash de senha validado."""

    value: str

    def __post_init__(self) -> None:
        try:
            extract_parameters(self.value)
        except InvalidHashError as e:
            raise InvalidPasswordHash("Malformed password hash") from e

    def verify(self, password: str | bytes) -> bool:
        return verify_password(password, self.value)

    def __str__(self) -> str:
        return self.value
