"""European equity option pricing on an interpolated market environment."""

from .errors import (
    EmptyDataError,
    EquityOptionsError,
    InsufficientDataError,
    InvalidArgumentError,
    MissingGridPointError,
    OutOfRangeError,
    UnconfiguredError,
    UnsupportedError,
)
from .market import MarketDataStore, MarketSnapshot, seed_market_data
from .options import (
    AnalyticBlackScholes,
    ContractTerms,
    EuropeanOption,
    Greeks,
    Instrument,
    PricingStrategy,
)

__all__ = [
    "MarketDataStore",
    "MarketSnapshot",
    "seed_market_data",
    "ContractTerms",
    "Greeks",
    "Instrument",
    "EuropeanOption",
    "PricingStrategy",
    "AnalyticBlackScholes",
    "EquityOptionsError",
    "InvalidArgumentError",
    "EmptyDataError",
    "InsufficientDataError",
    "OutOfRangeError",
    "MissingGridPointError",
    "UnconfiguredError",
    "UnsupportedError",
]
