import logging
from functools import wraps
from typing import Any, Dict, List, Optional, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateEntryError, StoreFailure
from app.models.stock import StockData
from app.models.user import User
from app.models.watchlist import WatchlistItem
from app.store.base import EntityCollection, EntityStore, ModelType

logger = logging.getLogger(__name__)


def _wrap_store_errors(func):
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error on {self.model.__tablename__}: {e.orig}")
            raise DuplicateEntryError(f"{self.model.__tablename__} record already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage error on {self.model.__tablename__}: {e}", exc_info=True)
            raise StoreFailure("Storage operation failed") from e
    return wrapper


class SQLCollection(EntityCollection[ModelType]):
    """Collection backed by one table. Every write commits on its own."""

    def __init__(self, model: Type[ModelType], db: Session):
        super().__init__(model)
        self.db = db

    def _order(self, query, order_by: Optional[List[str]]):
        columns = [getattr(self.model, key) for key in (order_by or [])]
        # Primary key as the final tie-breaker keeps results stable across calls
        return query.order_by(*columns, self.model.id)

    @_wrap_store_errors
    def all(self, *, order_by: Optional[List[str]] = None) -> List[ModelType]:
        return self._order(self.db.query(self.model), order_by).all()

    @_wrap_store_errors
    def filter_by(self, *, order_by: Optional[List[str]] = None, **criteria: Any) -> List[ModelType]:
        query = self.db.query(self.model).filter_by(**criteria)
        return self._order(query, order_by).all()

    @_wrap_store_errors
    def get(self, id: Any) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    @_wrap_store_errors
    def add(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    @_wrap_store_errors
    def update(self, obj: ModelType, values: Dict[str, Any]) -> ModelType:
        for field, value in values.items():
            setattr(obj, field, value)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    @_wrap_store_errors
    def remove(self, obj: ModelType) -> None:
        self.db.delete(obj)
        self.db.commit()


class DatabaseStore(EntityStore):
    """Store over one SQLAlchemy session, opened per request.

    Uniqueness of (user_id, symbol) and of symbol is enforced by the table
    constraints, so ``guard`` is left as a no-op.
    """
    backend_name = "database"

    def __init__(self, db: Session):
        self.db = db
        self.users = SQLCollection(User, db)
        self.stocks = SQLCollection(StockData, db)
        self.watchlist = SQLCollection(WatchlistItem, db)

    def close(self) -> None:
        self.db.close()
