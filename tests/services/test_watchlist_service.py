from app.crud.stock import stock as crud_stock
from app.crud.watchlist import watchlist as crud_watchlist
from app.schemas.stock import StockDataCreate
from app.schemas.watchlist import WatchlistItemCreate
from app.services.watchlist import watchlist_service
from app.store.base import EntityStore


def test_quotes_resolve_by_symbol_and_tolerate_dangling(store: EntityStore):
    crud_stock.upsert(store, StockDataCreate(
        symbol="AAPL", name="Apple Inc.", price=189.84, change=2.47, change_percent=1.32, volume=45200000
    ))
    crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="AAPL", name="Apple Inc."))
    crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="GONE", name="Delisted Co."))

    rows = {row.entry.symbol: row for row in watchlist_service.get_watchlist_quotes(store, "u1")}

    assert rows["AAPL"].quote.price == 189.84
    assert rows["GONE"].quote is None


def test_quotes_empty_watchlist(store: EntityStore):
    assert watchlist_service.get_watchlist_quotes(store, "nobody") == []
