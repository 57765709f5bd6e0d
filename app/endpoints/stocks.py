from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.constants import CHART_DEFAULT_DAYS, CHART_MAX_DAYS, SortDirectionEnum
from app.crud.stock import stock as crud_stock
from app.schemas.stock import StockChartSchema, StockDataSchema
from app.services.chart import chart_service
from app.services.stock import stock_service
from app.store.base import EntityStore
from app.utils import deps
from app.utils.logger import setup_logger

logger = setup_logger("stocks_api", "stocks.log")

router = APIRouter()

@router.get("", response_model=List[StockDataSchema])
async def get_stocks(
    store: EntityStore = Depends(deps.get_store),
    search: Optional[str] = None,
    sort: Optional[str] = None,
    direction: SortDirectionEnum = SortDirectionEnum.ASC
):
    return stock_service.list_stocks(store, search=search, sort=sort, direction=direction)

@router.post("/refresh", response_model=List[StockDataSchema])
async def refresh_stocks(store: EntityStore = Depends(deps.get_store)):
    stocks = stock_service.refresh_prices(store)
    logger.info(f"Refreshed {len(stocks)} stocks")
    return stocks

@router.get("/{symbol}", response_model=StockDataSchema)
async def get_stock(symbol: str, store: EntityStore = Depends(deps.get_store)):
    stock = crud_stock.get_by_symbol(store, symbol.upper())
    if not stock:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stock not found")
    return stock

@router.get("/{symbol}/chart", response_model=StockChartSchema)
async def get_stock_chart(
    symbol: str,
    days: int = Query(CHART_DEFAULT_DAYS, ge=1, le=CHART_MAX_DAYS),
    store: EntityStore = Depends(deps.get_store)
):
    stock = crud_stock.get_by_symbol(store, symbol.upper())
    if not stock:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stock not found")
    return chart_service.build_chart(stock, days=days)
