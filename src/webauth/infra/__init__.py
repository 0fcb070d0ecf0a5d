"""Camada de infraestrutura: backends de Store.

Este módulo exporta:

- Codecs: RecordCodec, ModelCodec, SessionCodec
- Stores: InMemoryStore, RedisStore, FirestoreStore
- Factories: create_store, create_session_store, create_user_store

Uso típico:
    from webauth.infra import SessionCodec, create_store

Infraestrutura não decide regra de negócio; domínio não conhece infraestrutura.
"""

from webauth.infra.codec import ModelCodec, RecordCodec, SessionCodec
from webauth.infra.store_factory import create_session_store, create_store, create_user_store
from webauth.infra.store_firestore import FirestoreStore
from webauth.infra.store_memory import InMemoryStore
from webauth.infra.store_redis import RedisStore

__all__ = [
    "FirestoreStore",
    "InMemoryStore",
    "ModelCodec",
    "RecordCodec",
    "RedisStore",
    "SessionCodec",
    "create_session_store",
    "create_store",
    "create_user_store",
]
