"""Observed market snapshot and helpers to seed a `MarketDataStore` from it.

A snapshot is what an upstream quote provider hands over for one symbol:
spot price, a volatility estimate, and a risk-free rate. Fetching it is not
done here.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd
from numpy.typing import DTypeLike

from equity_options.errors import InvalidArgumentError
from equity_options.market.data_store import MarketDataStore

logger = logging.getLogger(__name__)

TRADING_DAYS_PER_YEAR = 252
DEFAULT_VOL_WINDOW = 30


@dataclass(frozen=True)
class MarketSnapshot:
    """Spot, volatility and risk-free rate observed for one underlying."""

    spot: float
    volatility: float
    rate: float

    def __post_init__(self) -> None:
        if not self.spot > 0:
            raise InvalidArgumentError("spot must be > 0")
        if not self.volatility >= 0:
            raise InvalidArgumentError("volatility must be >= 0")
        if not self.rate >= 0:
            raise InvalidArgumentError("rate must be >= 0")


def seed_market_data(
    snapshot: MarketSnapshot,
    strike: float,
    maturity: float,
    *,
    dtype: DTypeLike = np.float64,
    store: MarketDataStore | None = None,
) -> MarketDataStore:
    """Load a flat rate and a single vol point for ``(strike, maturity)``.

    Pass ``store`` to add the points to an existing store instead of a new one.
    """
    if store is None:
        store = MarketDataStore(dtype=dtype)
    store.add_rate(maturity, snapshot.rate)
    store.add_volatility_point(strike, maturity, snapshot.volatility)
    logger.debug(
        "Seeded market data: T=%s r=%s K=%s vol=%s",
        maturity,
        snapshot.rate,
        strike,
        snapshot.volatility,
    )
    return store


def historical_volatility(
    prices: Sequence[float] | pd.Series,
    window: int | None = DEFAULT_VOL_WINDOW,
    ann: int = TRADING_DAYS_PER_YEAR,
) -> float:
    """Annualised close-to-close volatility of the last ``window`` prices.

    Uses the sample standard deviation of daily log returns. ``window=None``
    uses the whole series.
    """
    try:
        closes = pd.Series(prices, dtype=float).dropna()
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"prices must be numeric: {exc}") from exc
    if window is not None:
        closes = closes.iloc[-window:]
    # The sample variance needs at least two returns.
    if len(closes) < 3:
        raise InvalidArgumentError(
            "Not enough price data to calculate volatility"
        )
    if (closes <= 0).any():
        raise InvalidArgumentError("prices must be > 0")

    log_returns = np.log(closes / closes.shift(1)).dropna()
    return float(np.sqrt(log_returns.var(ddof=1) * ann))
