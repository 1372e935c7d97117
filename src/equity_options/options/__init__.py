"""Option instruments, pricing strategies, models, and shared types."""

from .engines import AnalyticBlackScholes, PricingStrategy
from .instruments import EuropeanOption, Instrument
from .models.black_scholes import (
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
)
from .types import (
    ContractTerms,
    Greeks,
    OptionType,
    OptionTypeInput,
    normalize_option_type,
)

__all__ = [
    "OptionType",
    "OptionTypeInput",
    "ContractTerms",
    "Greeks",
    "normalize_option_type",
    "Instrument",
    "EuropeanOption",
    "PricingStrategy",
    "AnalyticBlackScholes",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_vega",
    "bs_theta",
    "bs_rho",
    "bs_greeks",
]
