import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type

from app.models.stock import StockData
from app.models.user import User
from app.models.watchlist import WatchlistItem
from app.store.base import EntityCollection, EntityStore, ModelType

LOCK_STRIPES = 64


class MemoryCollection(EntityCollection[ModelType]):
    def __init__(self, model: Type[ModelType]):
        super().__init__(model)
        self._rows: "OrderedDict[Any, ModelType]" = OrderedDict()

    def _sorted(self, rows: List[ModelType], order_by: Optional[List[str]]) -> List[ModelType]:
        if not order_by:
            return rows
        # sorted() is stable, so ties keep insertion order
        return sorted(rows, key=lambda row: tuple(getattr(row, key) for key in order_by))

    def all(self, *, order_by: Optional[List[str]] = None) -> List[ModelType]:
        return self._sorted(list(self._rows.values()), order_by)

    def filter_by(self, *, order_by: Optional[List[str]] = None, **criteria: Any) -> List[ModelType]:
        rows = [
            row for row in self._rows.values()
            if all(getattr(row, key) == value for key, value in criteria.items())
        ]
        return self._sorted(rows, order_by)

    def get(self, id: Any) -> Optional[ModelType]:
        return self._rows.get(id)

    def add(self, obj: ModelType) -> ModelType:
        self._rows[obj.id] = obj
        return obj

    def update(self, obj: ModelType, values: Dict[str, Any]) -> ModelType:
        for field, value in values.items():
            setattr(obj, field, value)
        return obj

    def remove(self, obj: ModelType) -> None:
        self._rows.pop(obj.id, None)

    def __len__(self) -> int:
        return len(self._rows)


class MemoryStore(EntityStore):
    """Process-local store. One instance is shared by every request."""
    backend_name = "memory"

    def __init__(self):
        self.users = MemoryCollection(User)
        self.stocks = MemoryCollection(StockData)
        self.watchlist = MemoryCollection(WatchlistItem)
        # Fixed pool of locks. Unrelated keys may share a stripe, guards never nest.
        self._locks: List[threading.Lock] = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def _lock_for(self, key: str) -> threading.Lock:
        return self._locks[hash(key) % LOCK_STRIPES]

    @contextmanager
    def guard(self, key: str) -> Iterator[None]:
        with self._lock_for(key):
            yield
