from enum import Enum


class StoreBackendEnum(str, Enum):
    MEMORY = "memory"
    DATABASE = "database"

class SortDirectionEnum(str, Enum):
    ASC = "asc"
    DESC = "desc"

# Reference quotes loaded into an empty store at startup
DEFAULT_STOCKS = [
    {"symbol": "AAPL", "name": "Apple Inc.", "price": 189.84, "change": 2.47, "change_percent": 1.32, "volume": 45200000, "market_cap": 2980000000000, "sector": "Technology"},
    {"symbol": "GOOGL", "name": "Alphabet Inc.", "price": 139.23, "change": -1.87, "change_percent": -1.32, "volume": 28700000, "market_cap": 1750000000000, "sector": "Technology"},
    {"symbol": "MSFT", "name": "Microsoft Corp.", "price": 374.51, "change": 5.23, "change_percent": 1.42, "volume": 32100000, "market_cap": 2780000000000, "sector": "Technology"},
    {"symbol": "AMZN", "name": "Amazon.com Inc.", "price": 142.18, "change": 0.95, "change_percent": 0.67, "volume": 41800000, "market_cap": 1480000000000, "sector": "Consumer Discretionary"},
    {"symbol": "TSLA", "name": "Tesla Inc.", "price": 248.87, "change": -7.23, "change_percent": -2.82, "volume": 52600000, "market_cap": 791000000000, "sector": "Consumer Discretionary"},
    {"symbol": "META", "name": "Meta Platforms Inc.", "price": 318.75, "change": 4.12, "change_percent": 1.31, "volume": 19500000, "market_cap": 810000000000, "sector": "Technology"},
    {"symbol": "NVDA", "name": "NVIDIA Corp.", "price": 875.28, "change": 12.54, "change_percent": 1.45, "volume": 35600000, "market_cap": 2160000000000, "sector": "Technology"},
    {"symbol": "NFLX", "name": "Netflix Inc.", "price": 421.32, "change": -3.87, "change_percent": -0.91, "volume": 8200000, "market_cap": 187000000000, "sector": "Communication Services"},
    {"symbol": "AMD", "name": "Advanced Micro Devices", "price": 137.45, "change": 2.18, "change_percent": 1.61, "volume": 42300000, "market_cap": 222000000000, "sector": "Technology"},
    {"symbol": "UBER", "name": "Uber Technologies", "price": 56.23, "change": -1.42, "change_percent": -2.46, "volume": 18700000, "market_cap": 115000000000, "sector": "Technology"},
]

MARKET_INDICES = [
    {"name": "S&P 500", "value": 4185.47, "change": 12.38, "change_percent": 0.30},
    {"name": "NASDAQ", "value": 12843.81, "change": -24.67, "change_percent": -0.19},
    {"name": "Dow Jones", "value": 33976.61, "change": 156.82, "change_percent": 0.46},
    {"name": "VIX", "value": 18.45, "change": 0.73, "change_percent": 4.12},
]

# Synthetic refresh ranges, each draw is uniform in [-x, x]
REFRESH_PRICE_DELTA = 5.0
REFRESH_CHANGE_RANGE = 2.5
REFRESH_CHANGE_PERCENT_RANGE = 1.5
REFRESH_VOLUME_SPAN = 50_000_000
REFRESH_VOLUME_FLOOR = 10_000_000

MOVING_AVERAGE_WINDOWS = (20, 50, 200)
CHART_DEFAULT_DAYS = 30
CHART_MAX_DAYS = 365
