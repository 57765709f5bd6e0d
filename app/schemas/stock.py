from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import date as CalendarDate, datetime

class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts either case on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class StockDataBase(CamelModel):
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    volume: int = Field(..., ge=0)
    market_cap: Optional[float] = None
    sector: Optional[str] = None

class StockDataCreate(StockDataBase):
    """Full set of mutable quote fields written by an upsert."""
    pass

class StockDataSchema(StockDataBase):
    id: str
    last_updated: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

class MarketIndexSchema(CamelModel):
    name: str
    value: float
    change: float
    change_percent: float

class ChartPointSchema(CamelModel):
    date: CalendarDate
    price: float
    volume: int
    ma20: Optional[float] = None

class MovingAveragesSchema(CamelModel):
    ma20: Optional[float] = None
    ma50: Optional[float] = None
    ma200: Optional[float] = None

class StockChartSchema(CamelModel):
    symbol: str
    days: int
    points: List[ChartPointSchema]
    moving_averages: MovingAveragesSchema
