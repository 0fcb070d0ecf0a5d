"""Testes para a factory de Store."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.helpers.fakes import User
from webauth.config.settings import Settings
from webauth.infra.codec import ModelCodec, SessionCodec
from webauth.infra.store_factory import create_session_store, create_store, create_user_store
from webauth.infra.store_firestore import FirestoreStore
from webauth.infra.store_memory import InMemoryStore
from webauth.infra.store_redis import RedisStore


class TestCreateStore:
    """Testes para create_store."""

    def test_memory_backend(self):
        store = create_store("memory", SessionCodec(), "session")
        assert isinstance(store, InMemoryStore)

    def test_backend_is_case_insensitive(self):
        store = create_store("MEMORY", SessionCodec(), "session")
        assert isinstance(store, InMemoryStore)

    def test_redis_backend(self):
        store = create_store("redis", SessionCodec(), "session", redis_client=AsyncMock())
        assert isinstance(store, RedisStore)

    def test_redis_backend_requires_client(self):
        with pytest.raises(ValueError, match="redis_client"):
            create_store("redis", SessionCodec(), "session")

    def test_firestore_backend(self):
        store = create_store("firestore", SessionCodec(), "sessions", firestore_client=MagicMock())
        assert isinstance(store, FirestoreStore)

    def test_firestore_backend_requires_client(self):
        with pytest.raises(ValueError, match="firestore_client"):
            create_store("firestore", SessionCodec(), "sessions")

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="não reconhecido"):
            create_store("postgres", SessionCodec(), "session")


class TestCreateFromSettings:
    """Testes para create_session_store e create_user_store."""

    @pytest.mark.asyncio
    async def test_session_store_uses_key_prefix(self):
        mock_redis = AsyncMock()
        mock_redis.get.return_value = None
        settings = Settings(
            session_store_backend="redis",
            redis_url="redis://localhost:6379/0",
            session_key_prefix="sess",
        )

        store = create_session_store(settings, redis_client=mock_redis)
        await store.load("abc")

        mock_redis.get.assert_awaited_once_with("sess:abc")

    def test_session_store_firestore_uses_collection(self):
        client = MagicMock()
        settings = Settings(session_store_backend="firestore", sessions_collection="web_sessions")

        store = create_session_store(settings, firestore_client=client)

        assert isinstance(store, FirestoreStore)
        store._doc_ref("abc")  # noqa: SLF001
        client.collection.assert_called_with("web_sessions")

    def test_user_store_memory_default(self):
        store = create_user_store(Settings(), ModelCodec(User))
        assert isinstance(store, InMemoryStore)

    @pytest.mark.asyncio
    async def test_user_store_uses_user_prefix(self):
        mock_redis = AsyncMock()
        mock_redis.get.return_value = None
        settings = Settings(user_store_backend="redis", redis_url="redis://localhost:6379/0")

        store = create_user_store(settings, ModelCodec(User), redis_client=mock_redis)
        await store.load("42")

        mock_redis.get.assert_awaited_once_with("user:42")
