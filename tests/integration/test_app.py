"""Testes de integração da app FastAPI criada por create_app."""

from __future__ import annotations

import logging
import uuid

import pytest
from fastapi.testclient import TestClient

from tests.helpers.fakes import User, logged_in_session, seed
from webauth.api.app import create_app
from webauth.config.settings import Settings
from webauth.infra.codec import ModelCodec, SessionCodec
from webauth.infra.store_memory import InMemoryStore
from webauth.infra.store_redis import RedisStore


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture()
def settings() -> Settings:
    return Settings(session_cookie_secure=False, log_format="text")


class TestCreateApp:
    """Bootstrap da aplicação."""

    def test_health(self, settings):
        client = TestClient(create_app(settings))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "webauth", "version": "0.1.0"}
        assert "set-cookie" not in response.headers

    def test_correlation_id_generated(self, settings):
        client = TestClient(create_app(settings))

        response = client.get("/health")

        assert response.headers["X-Correlation-ID"]

    def test_correlation_id_propagated(self, settings):
        client = TestClient(create_app(settings))

        response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"

    def test_state(self, settings):
        app = create_app(settings)

        assert app.state.settings is settings
        assert isinstance(app.state.session_store, InMemoryStore)
        assert app.state.user_store is None

    def test_invalid_configuration_raises(self):
        with pytest.raises(ValueError, match="Configuração inválida"):
            create_app(Settings(environment="production"))

    def test_explicit_store_skips_backend_validation(self):
        store = InMemoryStore(SessionCodec())
        app = create_app(Settings(environment="production"), session_store=store)
        assert app.state.session_store is store


class TestSessionRoute:
    """Rota /session (somente leitura)."""

    def test_anonymous_session(self, settings):
        client = TestClient(create_app(settings))

        response = client.get("/session")

        body = response.json()
        assert body["keys"] == []
        assert body["authenticated"] is False
        assert "set-cookie" not in response.headers

    def test_existing_session(self, settings):
        store = InMemoryStore(SessionCodec())
        session = logged_in_session(uuid.uuid4())
        session.insert("theme", "dark")
        seed(store, session.uid, session)
        client = TestClient(create_app(settings, session_store=store))
        client.cookies.set("uid", str(session.uid))

        response = client.get("/session")

        body = response.json()
        assert body["keys"] == ["theme", "user_uid"]
        assert body["authenticated"] is True
        assert body["expires_at"] == session.expires_at.isoformat()


class TestWithUserStage:
    """App com estágio de usuário: todas as rotas exigem login."""

    def test_anonymous_request_is_unauthorized(self, settings):
        user_store = InMemoryStore(ModelCodec(User))
        client = TestClient(create_app(settings, user_store=user_store))

        response = client.get("/health")

        assert response.status_code == 401
        assert response.headers["X-Correlation-ID"]

    def test_logged_in_request(self, settings):
        session_store = InMemoryStore(SessionCodec())
        user_store = InMemoryStore(ModelCodec(User))
        user = User(id=uuid.uuid4(), name="Ana")
        seed(user_store, user.id, user)
        session = logged_in_session(user.id)
        seed(session_store, session.uid, session)
        client = TestClient(create_app(settings, session_store=session_store, user_store=user_store))
        client.cookies.set("uid", str(session.uid))

        response = client.get("/session")

        assert response.status_code == 200
        assert response.json()["authenticated"] is True


class TestUserStoreFromSettings:
    """Store de usuários criado a partir de USER_STORE_BACKEND."""

    def test_user_model_creates_memory_user_store(self, settings):
        app = create_app(settings, user_model=User)
        client = TestClient(app)

        response = client.get("/session")

        assert isinstance(app.state.user_store, InMemoryStore)
        assert response.status_code == 401

    def test_user_model_with_redis_backend(self):
        settings = Settings(
            session_cookie_secure=False,
            log_format="text",
            user_store_backend="redis",
            redis_url="redis://localhost:6379/0",
        )

        app = create_app(settings, user_model=User)

        assert isinstance(app.state.user_store, RedisStore)
        assert isinstance(app.state.session_store, InMemoryStore)

    def test_invalid_user_store_config_raises(self, settings):
        settings.user_store_backend = "redis"

        with pytest.raises(ValueError, match="USER_STORE_BACKEND=redis requer REDIS_URL"):
            create_app(settings, user_model=User)

    def test_without_user_model_user_settings_are_ignored(self, settings):
        settings.user_store_backend = "redis"

        app = create_app(settings)

        assert app.state.user_store is None
