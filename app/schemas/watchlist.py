from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

from app.schemas.stock import CamelModel, StockDataSchema

class WatchlistItemCreate(CamelModel):
    # Optional here so a missing field is reported as a 400, not a 422
    symbol: Optional[str] = None
    name: Optional[str] = None
    sector: Optional[str] = None

class WatchlistItemSchema(CamelModel):
    id: str
    user_id: str
    symbol: str
    name: str
    sector: Optional[str] = None
    added_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

class WatchlistQuoteSchema(CamelModel):
    entry: WatchlistItemSchema
    # None when the symbol no longer resolves to a quote
    quote: Optional[StockDataSchema] = None
