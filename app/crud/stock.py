import logging
from typing import Iterable, List, Optional

from app.core.exceptions import DuplicateEntryError
from app.crud.base import CRUDBase, utcnow
from app.models.stock import StockData
from app.schemas.stock import StockDataCreate
from app.store.base import EntityStore

logger = logging.getLogger(__name__)

# Fields an upsert overwrites on an existing quote. Symbol and id never change.
MUTABLE_FIELDS = ("name", "price", "change", "change_percent", "volume", "market_cap", "sector")

class CRUDStock(CRUDBase[StockData, StockDataCreate]):
    def list_all(self, store: EntityStore) -> List[StockData]:
        return self.get_multi(store, order_by=["symbol"])

    def get_by_symbol(self, store: EntityStore, symbol: str) -> Optional[StockData]:
        """Exact match on an already normalized symbol, ``None`` when absent."""
        return self.records(store).first_by(symbol=symbol)

    def upsert(self, store: EntityStore, obj_in: StockDataCreate) -> StockData:
        values = {field: getattr(obj_in, field) for field in MUTABLE_FIELDS}

        with store.guard(f"stock:{obj_in.symbol}"):
            # Stamped under the guard so last_updated follows commit order
            values["last_updated"] = utcnow()
            existing = self.get_by_symbol(store, obj_in.symbol)
            if existing:
                return self.update(store, db_obj=existing, obj_in=values)

            logger.info(f"Adding new stock {obj_in.symbol}")
            try:
                return self.create(store, obj_in={"symbol": obj_in.symbol, **values})
            except DuplicateEntryError:
                winner = self.records(store).first_by(symbol=obj_in.symbol)
                if winner is None:
                    raise
                logger.info(f"Stock {obj_in.symbol} was inserted concurrently, updating instead")
                return self.update(store, db_obj=winner, obj_in=values)

    def batch_update_prices(self, store: EntityStore, records: Iterable[StockDataCreate]) -> None:
        # Each upsert stands alone, a failure leaves earlier ones in place
        count = 0
        for record in records:
            self.upsert(store, record)
            count += 1
        logger.info(f"Batch updated {count} stocks")

stock = CRUDStock(StockData, "stocks")
