from __future__ import annotations

import pytest

from tests.helpers.fakes import RecordingStore, User
from webauth.config.settings import get_settings
from webauth.infra.codec import ModelCodec, SessionCodec
from webauth.infra.store_memory import InMemoryStore


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def session_store() -> RecordingStore:
    """Store de sessões em memória que registra chamadas."""
    return RecordingStore(InMemoryStore(SessionCodec()))


@pytest.fixture()
def user_store() -> RecordingStore:
    """Store de usuários em memória que registra chamadas."""
    return RecordingStore(InMemoryStore(ModelCodec(User)))
