import logging
from typing import List, Optional
from pydantic.alias_generators import to_camel

from app.core.constants import DEFAULT_STOCKS, SortDirectionEnum
from app.core.exceptions import InvalidSortKeyError
from app.crud.stock import stock as crud_stock
from app.models.stock import StockData
from app.schemas.stock import StockDataCreate, StockDataSchema
from app.services.market_data import MarketDataFeed, SyntheticMarketDataGenerator
from app.store.base import EntityStore

logger = logging.getLogger(__name__)

# Sort keys accepted by the listing, in both spellings the client may send
SORTABLE_FIELDS = {
    name: field
    for field in StockDataSchema.model_fields
    for name in (field, to_camel(field))
}


class StockService:
    def __init__(self, feed: Optional[MarketDataFeed] = None):
        self.feed = feed or SyntheticMarketDataGenerator()

    def seed_default_stocks(self, store: EntityStore) -> int:
        records = [StockDataCreate(**data) for data in DEFAULT_STOCKS]
        crud_stock.batch_update_prices(store, records)
        logger.info(f"Seeded {len(records)} default stocks into {store.backend_name} store")
        return len(records)

    def list_stocks(
        self,
        store: EntityStore,
        *,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        direction: SortDirectionEnum = SortDirectionEnum.ASC,
    ) -> List[StockData]:
        stocks = crud_stock.list_all(store)

        if search:
            term = search.lower()
            stocks = [s for s in stocks if term in s.symbol.lower() or term in s.name.lower()]

        if sort:
            field = SORTABLE_FIELDS.get(sort)
            if field is None:
                raise InvalidSortKeyError(f"Cannot sort by '{sort}'")
            reverse = direction == SortDirectionEnum.DESC
            # Missing optional values sort last in either direction
            present = [s for s in stocks if getattr(s, field) is not None]
            missing = [s for s in stocks if getattr(s, field) is None]
            stocks = sorted(present, key=lambda s: getattr(s, field), reverse=reverse) + missing

        return stocks

    def refresh_prices(self, store: EntityStore) -> List[StockData]:
        current = crud_stock.list_all(store)
        updates = self.feed.latest_quotes(current)
        crud_stock.batch_update_prices(store, updates)
        return crud_stock.list_all(store)

stock_service = StockService()
