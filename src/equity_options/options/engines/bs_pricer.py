"""Closed-form Black-Scholes pricing strategy."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import DTypeLike

from equity_options.market.data_store import MarketDataStore, coerce_float_dtype
from equity_options.options.engines.base import PricingStrategy
from equity_options.options.models.black_scholes import bs_greeks, bs_price
from equity_options.options.types import Greeks

if TYPE_CHECKING:
    from equity_options.options.instruments import Instrument


@dataclass(frozen=True)
class AnalyticBlackScholes(PricingStrategy):
    """Exact Black-Scholes strategy for European options.

    The rate is read from the yield curve at the option maturity and the
    volatility from the surface at ``(strike, maturity)``; lookup failures
    propagate unchanged.
    """

    dtype: DTypeLike = np.float64

    def __post_init__(self) -> None:
        object.__setattr__(self, "dtype", coerce_float_dtype(self.dtype))

    def _inputs(
        self, instrument: Instrument, market: MarketDataStore
    ) -> dict[str, Any]:
        terms = instrument.terms
        cast = self.dtype.type
        T = cast(terms.maturity)
        K = cast(terms.strike)
        r = cast(market.get_rate(T))
        sigma = cast(market.get_volatility(K, T))
        return {
            "S": cast(terms.spot),
            "K": K,
            "T": T,
            "sigma": sigma,
            "r": r,
            "option_type": terms.option_type,
        }

    def price(self, instrument: Instrument, market: MarketDataStore) -> float:
        return self.dtype.type(bs_price(**self._inputs(instrument, market)))

    def greeks(self, instrument: Instrument, market: MarketDataStore) -> Greeks:
        out = bs_greeks(**self._inputs(instrument, market))
        cast = self.dtype.type
        return Greeks(
            delta=cast(out["delta"]),
            gamma=cast(out["gamma"]),
            vega=cast(out["vega"]),
            theta=cast(out["theta"]),
            rho=cast(out["rho"]),
        )

    def clone(self) -> AnalyticBlackScholes:
        return replace(self)
