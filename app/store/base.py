"""Uniform access to the three record kinds the dashboard keeps.

Repositories in ``app.crud`` only talk to an ``EntityStore``; whether the
records live in process memory or in relational tables is decided once, when
the ``StoreProvider`` is built at startup.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar

from app.core.database import Base
from app.models.stock import StockData
from app.models.user import User
from app.models.watchlist import WatchlistItem

ModelType = TypeVar("ModelType", bound=Base)


class EntityCollection(ABC, Generic[ModelType]):
    """All records of one kind.

    ``order_by`` names a column; records with equal keys keep the backend's
    natural order (insertion order for memory, primary key for SQL).
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    @abstractmethod
    def all(self, *, order_by: Optional[List[str]] = None) -> List[ModelType]:
        ...

    @abstractmethod
    def filter_by(self, *, order_by: Optional[List[str]] = None, **criteria: Any) -> List[ModelType]:
        ...

    def first_by(self, **criteria: Any) -> Optional[ModelType]:
        matches = self.filter_by(**criteria)
        return matches[0] if matches else None

    @abstractmethod
    def get(self, id: Any) -> Optional[ModelType]:
        ...

    @abstractmethod
    def add(self, obj: ModelType) -> ModelType:
        ...

    @abstractmethod
    def update(self, obj: ModelType, values: Dict[str, Any]) -> ModelType:
        ...

    @abstractmethod
    def remove(self, obj: ModelType) -> None:
        ...


class EntityStore(ABC):
    backend_name: str = ""

    users: EntityCollection[User]
    stocks: EntityCollection[StockData]
    watchlist: EntityCollection[WatchlistItem]

    @contextmanager
    def guard(self, key: str) -> Iterator[None]:
        """Serialize check-then-write sequences on ``key``.

        The default does nothing; backends without storage-level uniqueness
        override it.
        """
        yield

    def close(self) -> None:
        pass
