import logging
from typing import List

from app.core.exceptions import DuplicateEntryError, MissingFieldError
from app.crud.base import CRUDBase, utcnow
from app.models.watchlist import WatchlistItem
from app.schemas.watchlist import WatchlistItemCreate
from app.store.base import EntityStore

logger = logging.getLogger(__name__)

class CRUDWatchlist(CRUDBase[WatchlistItem, WatchlistItemCreate]):
    def list_for_user(self, store: EntityStore, user_id: str) -> List[WatchlistItem]:
        return self.records(store).filter_by(user_id=user_id, order_by=["added_at"])

    def add(self, store: EntityStore, user_id: str, obj_in: WatchlistItemCreate) -> WatchlistItem:
        symbol = (obj_in.symbol or "").strip()
        name = (obj_in.name or "").strip()
        if not symbol or not name:
            raise MissingFieldError("Symbol and name are required")

        with store.guard(f"watchlist:{user_id}:{symbol}"):
            existing = self.list_for_user(store, user_id)
            if any(item.symbol == symbol for item in existing):
                raise DuplicateEntryError("Stock is already in your watchlist")

            try:
                item = self.create(store, obj_in={
                    "user_id": user_id,
                    "symbol": symbol,
                    "name": name,
                    "sector": obj_in.sector,
                    "added_at": utcnow(),
                })
            except DuplicateEntryError as e:
                # Lost a race against a concurrent add, caught by the unique constraint
                raise DuplicateEntryError("Stock is already in your watchlist") from e

        logger.info(f"User {user_id} added {symbol} to watchlist")
        return item

    def remove(self, store: EntityStore, user_id: str, symbol: str) -> bool:
        with store.guard(f"watchlist:{user_id}:{symbol}"):
            item = self.records(store).first_by(user_id=user_id, symbol=symbol)
            if not item:
                return False
            self.delete(store, db_obj=item)

        logger.info(f"User {user_id} removed {symbol} from watchlist")
        return True

watchlist = CRUDWatchlist(WatchlistItem, "watchlist")
