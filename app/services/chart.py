import math
import random
from datetime import date, timedelta
from typing import List, Optional, Sequence

from app.core.constants import CHART_DEFAULT_DAYS, MOVING_AVERAGE_WINDOWS
from app.models.stock import StockData
from app.schemas.stock import ChartPointSchema, MovingAveragesSchema, StockChartSchema

# The synthetic series swings around the base price by these amounts for a $150 stock
REFERENCE_PRICE = 150.0
NOISE_AMPLITUDE = 40.0
WAVE_AMPLITUDE = 20.0


def simple_moving_average(values: Sequence[float], window: int) -> Optional[float]:
    if window <= 0 or len(values) < window:
        return None
    return round(sum(values[-window:]) / window, 2)


def rolling_average(values: Sequence[float], window: int) -> List[Optional[float]]:
    result: List[Optional[float]] = []
    running = 0.0
    for i, value in enumerate(values):
        running += value
        if i >= window:
            running -= values[i - window]
        result.append(round(running / window, 2) if i >= window - 1 else None)
    return result


class ChartService:
    """Fabricates daily price and volume history for the analytics view.

    Nothing is stored; every call draws a new series around the quote's
    current price.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate_series(self, base_price: float, length: int, end: Optional[date] = None):
        end = end or date.today()
        scale = base_price / REFERENCE_PRICE
        series = []
        for i in range(length - 1, -1, -1):
            price = (
                base_price
                + (self.rng.random() - 0.5) * NOISE_AMPLITUDE * scale
                + math.sin(i / 5) * WAVE_AMPLITUDE * scale
            )
            series.append({
                "date": end - timedelta(days=i),
                "price": round(price, 2),
                "volume": math.floor(self.rng.random() * 10_000_000) + 1_000_000,
            })
        return series

    def build_chart(self, stock: StockData, days: int = CHART_DEFAULT_DAYS) -> StockChartSchema:
        history_length = max(days, max(MOVING_AVERAGE_WINDOWS))
        series = self.generate_series(stock.price, history_length)
        closes = [point["price"] for point in series]
        ma20_series = rolling_average(closes, 20)

        points = [
            ChartPointSchema(**point, ma20=ma20)
            for point, ma20 in zip(series[-days:], ma20_series[-days:])
        ]
        averages = MovingAveragesSchema(**{
            f"ma{window}": simple_moving_average(closes, window)
            for window in MOVING_AVERAGE_WINDOWS
        })
        return StockChartSchema(symbol=stock.symbol, days=days, points=points, moving_averages=averages)

chart_service = ChartService()
