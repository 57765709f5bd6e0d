from typing import List

from fastapi import APIRouter

from app.core.constants import MARKET_INDICES
from app.schemas.stock import MarketIndexSchema

router = APIRouter()

@router.get("/market-indices", response_model=List[MarketIndexSchema])
async def get_market_indices():
    # Static figures until an index feed is wired in
    return [MarketIndexSchema(**index) for index in MARKET_INDICES]
