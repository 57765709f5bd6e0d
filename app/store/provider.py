import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.engine import Engine

from app.core.config import Settings
from app.core.constants import StoreBackendEnum
from app.core.database import build_engine, build_session_factory, create_tables
from app.store.base import EntityStore
from app.store.database import DatabaseStore
from app.store.memory import MemoryStore

logger = logging.getLogger(__name__)


class StoreProvider(ABC):
    """Hands out an ``EntityStore`` for the duration of one unit of work."""
    backend: StoreBackendEnum

    def initialize(self) -> None:
        pass

    @abstractmethod
    @contextmanager
    def session(self) -> Iterator[EntityStore]:
        ...

    def shutdown(self) -> None:
        pass


class MemoryStoreProvider(StoreProvider):
    backend = StoreBackendEnum.MEMORY

    def __init__(self, store: Optional[MemoryStore] = None):
        self.store = store or MemoryStore()

    @contextmanager
    def session(self) -> Iterator[EntityStore]:
        yield self.store


class DatabaseStoreProvider(StoreProvider):
    backend = StoreBackendEnum.DATABASE

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = build_session_factory(engine)

    def initialize(self) -> None:
        create_tables(self.engine)
        logger.info(f"Database tables ready on {self.engine.url.render_as_string(hide_password=True)}")

    @contextmanager
    def session(self) -> Iterator[EntityStore]:
        store = DatabaseStore(self.session_factory())
        try:
            yield store
        finally:
            store.close()

    def shutdown(self) -> None:
        self.engine.dispose()


def build_store_provider(settings: Settings) -> StoreProvider:
    if settings.STORE_BACKEND == StoreBackendEnum.DATABASE:
        return DatabaseStoreProvider(build_engine(settings.DATABASE_URL))
    return MemoryStoreProvider()
