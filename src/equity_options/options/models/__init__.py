"""Analytical option-pricing models."""

from .black_scholes import (
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
    norm_cdf,
    norm_pdf,
)

__all__ = [
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_vega",
    "bs_theta",
    "bs_rho",
    "bs_greeks",
    "norm_cdf",
    "norm_pdf",
]
