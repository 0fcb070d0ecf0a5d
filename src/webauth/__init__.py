"""webauth: sessões por cookie e resolução de usuário para apps ASGI.

Uso típico:
    from webauth import AuthPipeline, InMemoryStore, SessionCodec

    store = InMemoryStore(SessionCodec())
    AuthPipeline.builder().with_sessions(store).build().install(app)
"""

from webauth.application import (
    AuthContext,
    AuthPipeline,
    AuthPipelineBuilder,
    CookieSettings,
    PipelineConfigError,
    SessionManager,
    UserManager,
    get_auth_context,
)
from webauth.domain import (
    DEFAULT_EXPIRATION,
    USER_UID_KEY,
    AuthUser,
    BackendError,
    DecodeError,
    EncodeError,
    Session,
    Store,
    StoreError,
)
from webauth.infra import InMemoryStore, ModelCodec, SessionCodec

__version__ = "0.1.0"

__all__ = [
    "AuthContext",
    "AuthPipeline",
    "AuthPipelineBuilder",
    "AuthUser",
    "BackendError",
    "CookieSettings",
    "DEFAULT_EXPIRATION",
    "DecodeError",
    "EncodeError",
    "InMemoryStore",
    "ModelCodec",
    "PipelineConfigError",
    "Session",
    "SessionCodec",
    "SessionManager",
    "Store",
    "StoreError",
    "USER_UID_KEY",
    "UserManager",
    "get_auth_context",
]
