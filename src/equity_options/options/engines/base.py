"""Interface for option-pricing strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from equity_options.errors import UnsupportedError
from equity_options.market.data_store import MarketDataStore
from equity_options.options.types import Greeks

if TYPE_CHECKING:
    from equity_options.options.instruments import Instrument


class PricingStrategy(ABC):
    """Prices an instrument against a market-data snapshot.

    Strategies must not keep per-call mutable state, so one instance can be
    shared across instruments. Use `clone` to hand an isolated copy to
    another thread or task.

    ``dtype`` is the floating-point type the strategy computes in; subclasses
    that do not set one work in ``float64``.
    """

    dtype: np.dtype = np.dtype(np.float64)

    @abstractmethod
    def price(self, instrument: Instrument, market: MarketDataStore) -> float:
        """Return the value of one unit of ``instrument``."""

    def greeks(self, instrument: Instrument, market: MarketDataStore) -> Greeks:
        """Return per-unit sensitivities; not every strategy provides them."""
        raise UnsupportedError(
            f"{type(self).__name__} does not support Greeks calculation"
        )

    @abstractmethod
    def clone(self) -> PricingStrategy:
        """Return an independent copy with the same configuration."""
