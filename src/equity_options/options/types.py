"""Shared option dataclasses and aliases."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Literal, TypeAlias

from equity_options.errors import InvalidArgumentError


class OptionType(StrEnum):
    """Canonical option side labels used across pricing code."""

    CALL = "call"
    PUT = "put"


# Tolerant input type accepted at system boundaries (CLI/config/tests).
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]


def normalize_option_type(option_type: OptionTypeInput | str) -> OptionType:
    """Normalize option type labels to `OptionType`."""
    label = str(option_type).strip()
    if label.lower() in ("call", "c"):
        return OptionType.CALL
    if label.lower() in ("put", "p"):
        return OptionType.PUT
    raise InvalidArgumentError(
        "option_type must be one of {'call', 'put', 'C', 'P'}"
    )


@dataclass(frozen=True)
class ContractTerms:
    """Immutable terms of one European equity option.

    `notional` multiplies the per-unit price (e.g. 100 for a US equity
    contract). `maturity` is the time to expiry in years.
    """

    notional: float
    strike: float
    maturity: float
    spot: float
    is_call: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise `InvalidArgumentError` unless every term is in its domain."""
        if not self.strike > 0:
            raise InvalidArgumentError("Strike price must be positive")
        if not self.maturity > 0:
            raise InvalidArgumentError("Time to maturity must be positive")
        if not self.spot > 0:
            raise InvalidArgumentError("Stock spot price must be positive")
        if not self.notional > 0:
            raise InvalidArgumentError("Contract notional must be positive")

    @property
    def option_type(self) -> OptionType:
        return OptionType.CALL if self.is_call else OptionType.PUT


@dataclass(frozen=True, slots=True)
class Greeks:
    """Per-unit sensitivities in reporting units.

    Units:
    - `vega`: price change per 1 volatility point (0.01)
    - `theta`: price change per calendar day
    - `rho`: price change per 1 rate point (0.01)
    """

    delta: float
    gamma: float
    vega: float
    theta: float
    rho: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)
