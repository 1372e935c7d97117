"""Exception types raised by the market-data and pricing core.

Each class also derives from the closest builtin so callers that already
catch ``ValueError``/``LookupError`` keep working.
"""

from __future__ import annotations


class EquityOptionsError(Exception):
    """Base class for every error raised by the package."""


class InvalidArgumentError(EquityOptionsError, ValueError):
    """An input violates its domain (negative rate, non-positive strike...)."""


class EmptyDataError(EquityOptionsError, LookupError):
    """A rate query was made against a yield curve with no points."""


class InsufficientDataError(EquityOptionsError, LookupError):
    """The volatility surface has fewer than two strikes or maturities."""


class OutOfRangeError(EquityOptionsError, ValueError):
    """A volatility query falls outside the known strike/maturity bounds."""


class MissingGridPointError(EquityOptionsError, LookupError):
    """A bilinear corner required for interpolation has no stored value."""

    def __init__(self, strike: float, maturity: float) -> None:
        super().__init__(
            f"Missing volatility point at (K={strike}, T={maturity})"
        )
        self.strike = strike
        self.maturity = maturity


class UnconfiguredError(EquityOptionsError, RuntimeError):
    """An instrument was priced without an attached pricing strategy."""


class UnsupportedError(EquityOptionsError, NotImplementedError):
    """The pricing strategy does not provide the requested computation."""
