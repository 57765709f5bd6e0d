import threading
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from app.core.config import Settings
from app.core.constants import StoreBackendEnum
from app.core.exceptions import DuplicateEntryError, StoreFailure
from app.crud.base import new_id, utcnow
from app.crud.stock import stock as crud_stock
from app.crud.user import user as crud_user
from app.crud.watchlist import watchlist as crud_watchlist
from app.core.database import build_session_factory
from app.models.watchlist import WatchlistItem
from app.schemas.stock import StockDataCreate
from app.schemas.user import UserUpsert
from app.schemas.watchlist import WatchlistItemCreate
from app.store.database import DatabaseStore
from app.store.memory import LOCK_STRIPES, MemoryStore
from app.store.provider import DatabaseStoreProvider, MemoryStoreProvider, build_store_provider


def _watchlist_row(user_id: str, symbol: str) -> WatchlistItem:
    return WatchlistItem(id=new_id(), user_id=user_id, symbol=symbol, name=symbol, added_at=utcnow())


def test_memory_collection_preserves_insertion_order():
    store = MemoryStore()
    for symbol in ["TSLA", "AAPL", "NVDA"]:
        store.watchlist.add(_watchlist_row("u1", symbol))

    assert [row.symbol for row in store.watchlist.all()] == ["TSLA", "AAPL", "NVDA"]
    assert [row.symbol for row in store.watchlist.all(order_by=["symbol"])] == ["AAPL", "NVDA", "TSLA"]


def test_memory_remove_unknown_row_is_noop():
    store = MemoryStore()
    store.watchlist.remove(_watchlist_row("u1", "AAPL"))
    assert store.watchlist.all() == []


def test_memory_guard_serializes_concurrent_adds():
    store = MemoryStore()
    barrier = threading.Barrier(8)
    errors = []

    def worker():
        barrier.wait()
        try:
            crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="AAPL", name="Apple Inc."))
        except DuplicateEntryError as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(crud_watchlist.list_for_user(store, "u1")) == 1
    assert len(errors) == 7


def test_database_unique_constraint_maps_to_duplicate(database_engine):
    store = DatabaseStore(build_session_factory(database_engine)())
    try:
        store.watchlist.add(_watchlist_row("u1", "AAPL"))
        with pytest.raises(DuplicateEntryError):
            store.watchlist.add(_watchlist_row("u1", "AAPL"))

        # Session is usable again after the rollback
        assert len(store.watchlist.filter_by(user_id="u1")) == 1
    finally:
        store.close()


def test_database_race_past_existence_check_is_still_duplicate(database_engine):
    store = DatabaseStore(build_session_factory(database_engine)())
    try:
        crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="AAPL", name="Apple Inc."))
        # Simulate a concurrent request that listed the watchlist before the first insert landed
        with patch.object(crud_watchlist, "list_for_user", return_value=[]):
            with pytest.raises(DuplicateEntryError, match="already in your watchlist"):
                crud_watchlist.add(store, "u1", WatchlistItemCreate(symbol="AAPL", name="Apple Inc."))
    finally:
        store.close()


def test_memory_guard_locks_stay_bounded():
    store = MemoryStore()
    for i in range(5000):
        assert crud_watchlist.remove(store, "u1", f"SYM{i}") is False

    assert len(store._locks) == LOCK_STRIPES


def test_database_user_upsert_recovers_from_concurrent_insert(database_engine):
    session_factory = build_session_factory(database_engine)
    first, second = DatabaseStore(session_factory()), DatabaseStore(session_factory())
    try:
        crud_user.upsert(first, UserUpsert(id="u1", email="a@example.com"))
        # Second request read the users table before the first insert landed
        with patch.object(crud_user, "get", return_value=None):
            merged = crud_user.upsert(second, UserUpsert(id="u1", email="b@example.com"))

        assert merged.id == "u1"
        assert merged.email == "b@example.com"
        assert len(crud_user.get_multi(second)) == 1
    finally:
        first.close()
        second.close()


def test_database_stock_upsert_recovers_from_concurrent_insert(database_engine):
    session_factory = build_session_factory(database_engine)
    first, second = DatabaseStore(session_factory()), DatabaseStore(session_factory())
    quote = {"symbol": "AAPL", "name": "Apple Inc.", "price": 100.0, "change": 1.0, "change_percent": 1.0, "volume": 1_000}
    try:
        crud_stock.upsert(first, StockDataCreate(**quote))
        with patch.object(crud_stock, "get_by_symbol", return_value=None):
            merged = crud_stock.upsert(second, StockDataCreate(**{**quote, "price": 120.0}))

        assert merged.price == 120.0
        rows = crud_stock.list_all(second)
        assert [(s.symbol, s.price) for s in rows] == [("AAPL", 120.0)]
    finally:
        first.close()
        second.close()


def test_database_errors_become_store_failure(database_engine):
    store = DatabaseStore(build_session_factory(database_engine)())
    try:
        with patch.object(store.db, "query", side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))):
            with pytest.raises(StoreFailure) as exc_info:
                crud_stock.list_all(store)
        assert "disk" not in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OperationalError)
    finally:
        store.close()


def test_build_store_provider_follows_settings():
    memory = build_store_provider(Settings(_env_file=None, STORE_BACKEND="memory"))
    database = build_store_provider(Settings(_env_file=None, STORE_BACKEND="database", DATABASE_URL="sqlite://"))

    assert isinstance(memory, MemoryStoreProvider)
    assert isinstance(database, DatabaseStoreProvider)
    assert database.backend == StoreBackendEnum.DATABASE
    database.shutdown()


def test_memory_provider_shares_one_store():
    provider = MemoryStoreProvider()
    with provider.session() as first, provider.session() as second:
        assert first is second


def test_database_provider_opens_fresh_sessions(database_engine):
    provider = DatabaseStoreProvider(database_engine)
    provider.initialize()
    with provider.session() as first, provider.session() as second:
        assert first is not second
        assert first.db is not second.db
