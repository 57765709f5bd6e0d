from typing import List

from app.crud.stock import stock as crud_stock
from app.crud.watchlist import watchlist as crud_watchlist
from app.schemas.stock import StockDataSchema
from app.schemas.watchlist import WatchlistItemSchema, WatchlistQuoteSchema
from app.store.base import EntityStore

class WatchlistService:
    def get_watchlist_quotes(self, store: EntityStore, user_id: str) -> List[WatchlistQuoteSchema]:
        """Pairs each entry with the current quote for its symbol.

        Entries whose symbol is no longer tracked come back with ``quote``
        set to None rather than being dropped.
        """
        quotes = {s.symbol: s for s in crud_stock.list_all(store)}
        result = []
        for item in crud_watchlist.list_for_user(store, user_id):
            quote = quotes.get(item.symbol)
            result.append(WatchlistQuoteSchema(
                entry=WatchlistItemSchema.model_validate(item),
                quote=StockDataSchema.model_validate(quote) if quote else None,
            ))
        return result

watchlist_service = WatchlistService()
