import math
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from app.core.constants import (
    REFRESH_CHANGE_PERCENT_RANGE,
    REFRESH_CHANGE_RANGE,
    REFRESH_PRICE_DELTA,
    REFRESH_VOLUME_FLOOR,
    REFRESH_VOLUME_SPAN,
)
from app.models.stock import StockData
from app.schemas.stock import StockDataCreate


class MarketDataFeed(ABC):
    """Source of fresh quotes for the stocks we already track."""

    @abstractmethod
    def latest_quotes(self, stocks: Sequence[StockData]) -> List[StockDataCreate]:
        ...


class SyntheticMarketDataGenerator(MarketDataFeed):
    """Random-walk quotes for demos.

    Each refresh moves the price by up to five dollars either way and draws
    change, percent change and volume from scratch. Prices are not bounded,
    so enough refreshes can push one below zero.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _symmetric(self, bound: float) -> float:
        return self.rng.uniform(-bound, bound)

    def next_quote(self, stock: StockData) -> StockDataCreate:
        return StockDataCreate(
            symbol=stock.symbol,
            name=stock.name,
            price=stock.price + self._symmetric(REFRESH_PRICE_DELTA),
            change=self._symmetric(REFRESH_CHANGE_RANGE),
            change_percent=self._symmetric(REFRESH_CHANGE_PERCENT_RANGE),
            volume=math.floor(self.rng.uniform(0, REFRESH_VOLUME_SPAN)) + REFRESH_VOLUME_FLOOR,
            market_cap=stock.market_cap,
            sector=stock.sector,
        )

    def latest_quotes(self, stocks: Sequence[StockData]) -> List[StockDataCreate]:
        return [self.next_quote(stock) for stock in stocks]
