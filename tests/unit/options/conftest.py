import numpy as np
import pytest

from equity_options.market import MarketDataStore


def _reference_market(dtype) -> MarketDataStore:
    market = MarketDataStore(dtype=dtype)
    market.add_rate(1.0, 0.05)
    market.add_volatility_point(100, 1.0, 0.20)
    return market


@pytest.fixture
def market() -> MarketDataStore:
    """Flat 5% curve and a single 20% vol point at K=100, T=1."""
    return _reference_market(np.float64)


@pytest.fixture
def market_float32() -> MarketDataStore:
    return _reference_market(np.float32)
