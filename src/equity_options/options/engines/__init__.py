"""Pricing strategies that instruments delegate to."""

from .base import PricingStrategy
from .bs_pricer import AnalyticBlackScholes

__all__ = [
    "PricingStrategy",
    "AnalyticBlackScholes",
]
