from typing import List, Optional

from fastapi import APIRouter, Body, Depends

from app.crud.watchlist import watchlist as crud_watchlist
from app.models.user import User
from app.schemas.response import APIResponse
from app.schemas.watchlist import WatchlistItemCreate, WatchlistItemSchema, WatchlistQuoteSchema
from app.services.watchlist import watchlist_service
from app.store.base import EntityStore
from app.utils import deps
from app.utils.logger import setup_logger

logger = setup_logger("watchlist_api", "watchlist.log")

router = APIRouter()

@router.get("", response_model=List[WatchlistItemSchema])
async def get_watchlist(
    store: EntityStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user)
):
    return crud_watchlist.list_for_user(store, current_user.id)

@router.get("/quotes", response_model=List[WatchlistQuoteSchema])
async def get_watchlist_quotes(
    store: EntityStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user)
):
    return watchlist_service.get_watchlist_quotes(store, current_user.id)

@router.post("", response_model=WatchlistItemSchema)
async def add_to_watchlist(
    item_in: Optional[WatchlistItemCreate] = Body(None),
    store: EntityStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user)
):
    # An empty request is reported like any other missing field
    if item_in is None:
        item_in = WatchlistItemCreate()
    if item_in.symbol:
        item_in.symbol = item_in.symbol.strip().upper()
    return crud_watchlist.add(store, current_user.id, item_in)

@router.delete("/{symbol}", response_model=APIResponse[None])
async def remove_from_watchlist(
    symbol: str,
    store: EntityStore = Depends(deps.get_store),
    current_user: User = Depends(deps.get_current_user)
):
    removed = crud_watchlist.remove(store, current_user.id, symbol.upper())
    if not removed:
        logger.info(f"User {current_user.id} removed {symbol.upper()} which was not in watchlist")
    return APIResponse(message="Removed from watchlist")
