import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.constants import StoreBackendEnum
from app.core.database import build_engine, build_session_factory, create_tables
from app.core.security import create_access_token
from app.store.database import DatabaseStore
from app.store.memory import MemoryStore
from app.store.provider import DatabaseStoreProvider, MemoryStoreProvider
from main import create_app

BACKENDS = [StoreBackendEnum.MEMORY.value, StoreBackendEnum.DATABASE.value]

@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, SECRET_KEY="test-secret", LOG_TO_FILE=False)

@pytest.fixture
def database_engine():
    engine = build_engine("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()

@pytest.fixture(params=BACKENDS)
def store(request):
    """An empty store, once per backend."""
    if request.param == StoreBackendEnum.MEMORY.value:
        yield MemoryStore()
        return

    database_engine = request.getfixturevalue("database_engine")
    db_store = DatabaseStore(build_session_factory(database_engine)())
    try:
        yield db_store
    finally:
        db_store.close()

@pytest.fixture(params=BACKENDS)
def store_provider(request):
    if request.param == StoreBackendEnum.MEMORY.value:
        return MemoryStoreProvider()
    return DatabaseStoreProvider(request.getfixturevalue("database_engine"))

@pytest.fixture
def client(test_settings, store_provider):
    # Each test gets its own app and store, seeded on startup
    app = create_app(test_settings, store_provider)
    with TestClient(app) as test_client:
        yield test_client

@pytest.fixture
def token_factory(test_settings):
    def _token_factory(user_id: str = "user-1", **claims) -> str:
        return create_access_token(user_id, settings=test_settings, **claims)
    return _token_factory

@pytest.fixture
def auth_headers(token_factory):
    token = token_factory("user-1", email="trader@example.com", name="Test Trader")
    return {"Authorization": f"Bearer {token}"}
