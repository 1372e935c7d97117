"""Market data containers: yield curve, volatility surface, snapshots."""

from .data_store import MarketDataStore
from .snapshot import MarketSnapshot, historical_volatility, seed_market_data

__all__ = [
    "MarketDataStore",
    "MarketSnapshot",
    "historical_volatility",
    "seed_market_data",
]
