import pytest

from app.core.exceptions import DuplicateEntryError, MissingFieldError
from app.crud.watchlist import watchlist as crud_watchlist
from app.schemas.watchlist import WatchlistItemCreate
from app.store.base import EntityStore


def test_add_list_remove_round_trip(store: EntityStore):
    assert crud_watchlist.list_for_user(store, "u1") == []

    item = crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="MSFT", name="Microsoft Corp."))
    assert item.id
    assert item.user_id == "u1"
    assert item.added_at is not None
    assert item.sector is None
    assert len(crud_watchlist.list_for_user(store, "u1")) == 1

    assert crud_watchlist.remove(store, "u1", "MSFT") is True
    assert crud_watchlist.list_for_user(store, "u1") == []


def test_duplicate_add_rejected(store: EntityStore):
    crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="AAPL", name="Apple Inc.", sector="Technology"))

    with pytest.raises(DuplicateEntryError):
        crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="AAPL", name="Apple Inc."))

    assert len(crud_watchlist.list_for_user(store, "u1")) == 1


def test_same_symbol_for_different_users(store: EntityStore):
    crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="AAPL", name="Apple Inc."))
    crud_watchlist.add(store, "u2", WatchlistItemCreate(symbol="AAPL", name="Apple Inc."))

    assert len(crud_watchlist.list_for_user(store, "u1")) == 1
    assert len(crud_watchlist.list_for_user(store, "u2")) == 1


def test_remove_missing_is_noop(store: EntityStore):
    crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="AAPL", name="Apple Inc."))

    assert crud_watchlist.remove(store, "u1", "TSLA") is False
    assert crud_watchlist.remove(store, "u2", "AAPL") is False
    assert len(crud_watchlist.list_for_user(store, "u1")) == 1


@pytest.mark.parametrize("payload", [
    {"symbol": "AAPL"},
    {"name": "Apple Inc."},
    {"symbol": "  ", "name": "Apple Inc."},
    {},
])
def test_add_requires_symbol_and_name(store: EntityStore, payload):
    with pytest.raises(MissingFieldError):
        crud_watchlist.add(store, "u1", WatchlistItemCreate(**payload))

    assert crud_watchlist.list_for_user(store, "u1") == []


def test_list_order_is_stable(store: EntityStore):
    for symbol in ["TSLA", "AAPL", "NVDA"]:
        crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol=symbol, name=symbol))

    first = [i.symbol for i in crud_watchlist.list_for_user(store, "u1")]
    second = [i.symbol for i in crud_watchlist.list_for_user(store, "u1")]
    assert first == second
    assert sorted(first) == ["AAPL", "NVDA", "TSLA"]


def test_entry_keeps_name_captured_at_add_time(store: EntityStore):
    from app.crud.stock import stock as crud_stock
    from app.schemas.stock import StockDataCreate

    quote = dict(symbol="META", price=300.0, change=0.0, change_percent=0.0, volume=1, sector="Technology")
    crud_stock.upsert(store, StockDataCreate(name="Facebook Inc.", **quote))
    crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="META", name="Facebook Inc.", sector="Technology"))

    crud_stock.upsert(store, StockDataCreate(name="Meta Platforms Inc.", **quote))

    [item] = crud_watchlist.list_for_user(store, "u1")
    assert item.name == "Facebook Inc."
