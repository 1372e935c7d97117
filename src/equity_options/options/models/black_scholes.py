"""Black-Scholes pricing and Greeks for European options.

Greeks follow desk reporting units: vega and rho per 1% move, theta per
calendar day.
"""

from __future__ import annotations

import numpy as np
from scipy.special import erf
from scipy.stats import norm

from equity_options.errors import InvalidArgumentError
from equity_options.options.types import (
    OptionType,
    OptionTypeInput,
    normalize_option_type,
)

DAYS_PER_YEAR = 365.0
PERCENT = 0.01


def norm_cdf(x: float) -> float:
    """Standard normal CDF via the error function."""
    return 0.5 * (1.0 + erf(x / np.sqrt(2.0)))


def norm_pdf(x: float) -> float:
    """Standard normal density."""
    return norm.pdf(x)


def bs_d1_d2(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> tuple[float, float]:
    """Compute d1 and d2.

    With zero total volatility both collapse to +/-inf following the sign of
    the forward moneyness ``ln(S/K) + rT`` (0 when at-the-money forward), so
    prices reduce to the discounted intrinsic value.
    """
    if S <= 0 or K <= 0:
        raise InvalidArgumentError("S and K must be positive")
    if T <= 0:
        raise InvalidArgumentError("T must be positive")
    if sigma < 0:
        raise InvalidArgumentError("sigma must be non-negative")

    vol_sqrt_t = sigma * np.sqrt(T)
    moneyness = np.log(S / K) + (r + 0.5 * sigma**2) * T
    if vol_sqrt_t == 0:
        d = np.copysign(np.inf, moneyness) if moneyness != 0 else 0.0
        return d, d

    d1 = moneyness / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    return d1, d2


def bs_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes price of one unit."""
    opt_type = normalize_option_type(option_type)
    d1, d2 = bs_d1_d2(S, K, T, sigma, r)
    discount = np.exp(-r * T)

    if opt_type == OptionType.CALL:
        return S * norm_cdf(d1) - K * discount * norm_cdf(d2)
    return K * discount * norm_cdf(-d2) - S * norm_cdf(-d1)


def _delta(d1: float, opt_type: OptionType) -> float:
    delta_call = norm_cdf(d1)
    if opt_type == OptionType.CALL:
        return delta_call
    return delta_call - 1.0


def _gamma(S: float, T: float, sigma: float, d1: float) -> float:
    vol_sqrt_t = sigma * np.sqrt(T)
    if vol_sqrt_t == 0:
        return 0.0
    return norm_pdf(d1) / (S * vol_sqrt_t)


def _vega(S: float, T: float, d1: float) -> float:
    return S * np.sqrt(T) * norm_pdf(d1) * PERCENT


def _theta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float,
    d1: float,
    d2: float,
    opt_type: OptionType,
) -> float:
    decay = -(S * sigma * norm_pdf(d1)) / (2 * np.sqrt(T))
    carry = r * K * np.exp(-r * T)
    if opt_type == OptionType.CALL:
        return (decay - carry * norm_cdf(d2)) / DAYS_PER_YEAR
    return (decay + carry * norm_cdf(-d2)) / DAYS_PER_YEAR


def _rho(K: float, T: float, r: float, d2: float, opt_type: OptionType) -> float:
    scale = K * T * np.exp(-r * T) * PERCENT
    if opt_type == OptionType.CALL:
        return scale * norm_cdf(d2)
    return -scale * norm_cdf(-d2)


def bs_delta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes spot delta."""
    opt_type = normalize_option_type(option_type)
    d1, _ = bs_d1_d2(S, K, T, sigma, r)
    return _delta(d1, opt_type)


def bs_gamma(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> float:
    """Black-Scholes gamma (0 when the total volatility is 0)."""
    d1, _ = bs_d1_d2(S, K, T, sigma, r)
    return _gamma(S, T, sigma, d1)


def bs_vega(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> float:
    """Black-Scholes vega per 1 volatility point."""
    d1, _ = bs_d1_d2(S, K, T, sigma, r)
    return _vega(S, T, d1)


def bs_theta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes theta per calendar day."""
    opt_type = normalize_option_type(option_type)
    d1, d2 = bs_d1_d2(S, K, T, sigma, r)
    return _theta(S, K, T, sigma, r, d1, d2, opt_type)


def bs_rho(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes rho per 1 rate point."""
    opt_type = normalize_option_type(option_type)
    _, d2 = bs_d1_d2(S, K, T, sigma, r)
    return _rho(K, T, r, d2, opt_type)


def bs_greeks(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> dict[str, float]:
    """Return all Black-Scholes Greeks for one unit from a single d1, d2."""
    opt_type = normalize_option_type(option_type)
    d1, d2 = bs_d1_d2(S, K, T, sigma, r)
    return {
        "delta": _delta(d1, opt_type),
        "gamma": _gamma(S, T, sigma, d1),
        "vega": _vega(S, T, d1),
        "theta": _theta(S, K, T, sigma, r, d1, d2, opt_type),
        "rho": _rho(K, T, r, d2, opt_type),
    }
