"""Priceable instruments and the contract strategies rely on."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from equity_options.errors import InvalidArgumentError, UnconfiguredError
from equity_options.market.data_store import MarketDataStore
from equity_options.options.engines.base import PricingStrategy
from equity_options.options.types import ContractTerms, Greeks


@runtime_checkable
class Instrument(Protocol):
    """Capabilities every priceable contract exposes."""

    @property
    def terms(self) -> ContractTerms:
        """Immutable contract terms."""

    def price(self) -> float:
        """Return the value of the whole position."""

    def greeks(self) -> Greeks:
        """Return per-unit sensitivities."""

    def attach_market_data(self, market: MarketDataStore) -> None:
        """Replace the market snapshot used for pricing."""

    def attach_strategy(self, strategy: PricingStrategy) -> None:
        """Replace the pricing strategy."""

    def validate(self) -> None:
        """Raise if the contract terms are not valid."""


class EuropeanOption:
    """European equity option that delegates valuation to a strategy.

    The market snapshot is copied on attach, so later edits to the caller's
    store do not change this option. The strategy is held by reference and
    may be shared with other instruments.
    """

    def __init__(
        self,
        terms: ContractTerms,
        *,
        strategy: PricingStrategy | None = None,
        market: MarketDataStore | None = None,
    ) -> None:
        self._terms = terms
        self.validate()
        self._strategy: PricingStrategy | None = None
        self._market: MarketDataStore | None = None
        if market is not None:
            self.attach_market_data(market)
        if strategy is not None:
            self.attach_strategy(strategy)

    def __repr__(self) -> str:
        strategy = type(self._strategy).__name__ if self._strategy else None
        return f"{type(self).__name__}(terms={self._terms!r}, strategy={strategy})"

    @property
    def terms(self) -> ContractTerms:
        return self._terms

    @property
    def strategy(self) -> PricingStrategy | None:
        return self._strategy

    @property
    def market(self) -> MarketDataStore | None:
        """The attached snapshot (this option's own copy)."""
        return self._market

    def validate(self) -> None:
        self._terms.validate()

    def attach_market_data(self, market: MarketDataStore) -> None:
        if self._strategy is not None:
            _check_same_dtype(market, self._strategy)
        self._market = market.copy()

    def attach_strategy(self, strategy: PricingStrategy) -> None:
        if self._market is not None:
            _check_same_dtype(self._market, strategy)
        self._strategy = strategy

    def _require_strategy(self) -> PricingStrategy:
        if self._strategy is None:
            raise UnconfiguredError("Pricing strategy not set for European option")
        return self._strategy

    def _snapshot(self, strategy: PricingStrategy) -> MarketDataStore:
        # Without attached data the strategy sees an empty store and fails there.
        if self._market is None:
            return MarketDataStore(dtype=strategy.dtype)
        return self._market

    def price(self) -> float:
        strategy = self._require_strategy()
        unit_price = strategy.price(self, self._snapshot(strategy))
        return unit_price * strategy.dtype.type(self._terms.notional)

    def greeks(self) -> Greeks:
        strategy = self._require_strategy()
        return strategy.greeks(self, self._snapshot(strategy))


def _check_same_dtype(market: MarketDataStore, strategy: PricingStrategy) -> None:
    if market.dtype != strategy.dtype:
        raise InvalidArgumentError(
            "Market data and pricing strategy must share one precision: "
            f"market={market.dtype}, strategy={strategy.dtype}"
        )
