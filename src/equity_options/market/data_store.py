"""Yield curve and volatility surface with interpolated lookups.

The store keeps every value in a single floating-point type chosen at
construction (``float64`` unless told otherwise):

- `get_rate` reads the yield curve with flat extrapolation outside the stored
  times and linear interpolation between them.
- `get_volatility` reads the surface with exact-hit lookup first, then
  bilinear interpolation inside the rectangle spanned by the known strikes
  and maturities.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right, insort
from collections.abc import Mapping
from typing import TypeAlias

import numpy as np
from numpy.typing import DTypeLike

from equity_options.errors import (
    EmptyDataError,
    InsufficientDataError,
    InvalidArgumentError,
    MissingGridPointError,
    OutOfRangeError,
)

GridKey: TypeAlias = tuple[np.floating, np.floating]


def coerce_float_dtype(dtype: DTypeLike) -> np.dtype:
    """Return ``dtype`` as a numpy floating dtype or raise."""
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise InvalidArgumentError(f"Unknown dtype: {dtype!r}") from exc
    if not np.issubdtype(resolved, np.floating):
        raise InvalidArgumentError(
            f"dtype must be a floating-point type, got {resolved}"
        )
    return resolved


def _bracket(
    values: list[np.floating], x: np.floating
) -> tuple[np.floating, np.floating]:
    """Return the neighbours ``(lo, hi)`` of ``x`` in sorted ``values``.

    ``x`` must lie within ``[values[0], values[-1]]``. When ``x`` sits exactly
    on a known value the bracket collapses to ``(x, x)``.
    """
    i = bisect_left(values, x)
    if values[i] == x:
        return values[i], values[i]
    return values[i - 1], values[i]


class MarketDataStore:
    """Interest-rate term structure plus strike/maturity volatility grid."""

    def __init__(self, dtype: DTypeLike = np.float64) -> None:
        self._dtype = coerce_float_dtype(dtype)
        self._eps = np.finfo(self._dtype).eps
        self._yield_curve: dict[np.floating, np.floating] = {}
        self._rate_times: list[np.floating] = []
        self._vol_surface: dict[GridKey, np.floating] = {}
        self._strikes: list[np.floating] = []
        self._maturities: list[np.floating] = []

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(dtype={self._dtype.name}, "
            f"rates={len(self._yield_curve)}, "
            f"vol_points={len(self._vol_surface)})"
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def yield_curve(self) -> Mapping[np.floating, np.floating]:
        """Stored rates keyed by time, in ascending time order."""
        return {t: self._yield_curve[t] for t in self._rate_times}

    @property
    def vol_surface(self) -> Mapping[GridKey, np.floating]:
        return dict(self._vol_surface)

    @property
    def known_strikes(self) -> tuple[np.floating, ...]:
        return tuple(self._strikes)

    @property
    def known_maturities(self) -> tuple[np.floating, ...]:
        return tuple(self._maturities)

    def copy(self) -> MarketDataStore:
        """Return an independent copy; later edits to either side don't leak."""
        other = type(self)(self._dtype)
        other._yield_curve = dict(self._yield_curve)
        other._rate_times = list(self._rate_times)
        other._vol_surface = dict(self._vol_surface)
        other._strikes = list(self._strikes)
        other._maturities = list(self._maturities)
        return other

    __copy__ = copy

    def _cast(self, value: float) -> np.floating:
        return self._dtype.type(value)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_rate(self, time: float, rate: float) -> None:
        """Store ``rate`` for time-to-maturity ``time``; last write wins."""
        if not (time >= 0 and rate >= 0):
            raise InvalidArgumentError(
                f"Invalid time/rate: time={time}, rate={rate} (both must be >= 0)"
            )
        t = self._cast(time)
        if t not in self._yield_curve:
            insort(self._rate_times, t)
        self._yield_curve[t] = self._cast(rate)

    def add_volatility_point(
        self,
        strike: float,
        maturity: float,
        vol: float,
    ) -> None:
        """Store ``vol`` at grid point ``(strike, maturity)``; last write wins."""
        if not (strike > 0 and maturity >= 0 and vol >= 0):
            raise InvalidArgumentError(
                "Invalid strike/maturity/volatility: "
                f"strike={strike} (> 0), maturity={maturity} (>= 0), "
                f"vol={vol} (>= 0)"
            )
        k = self._cast(strike)
        t = self._cast(maturity)
        self._vol_surface[(k, t)] = self._cast(vol)

        i = bisect_left(self._strikes, k)
        if i == len(self._strikes) or self._strikes[i] != k:
            self._strikes.insert(i, k)
        j = bisect_left(self._maturities, t)
        if j == len(self._maturities) or self._maturities[j] != t:
            self._maturities.insert(j, t)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_rate(self, time: float) -> np.floating:
        """Return the rate at ``time`` from the yield curve.

        One stored point means a flat curve. Outside the stored times the
        nearest end point is used; inside, rates are linearly interpolated.
        """
        if not self._yield_curve:
            raise EmptyDataError("Yield curve is empty")

        times = self._rate_times
        if len(times) == 1:
            return self._yield_curve[times[0]]

        t = self._cast(time)
        upper = bisect_right(times, t)
        if upper == 0:
            return self._yield_curve[times[0]]
        if upper == len(times):
            return self._yield_curve[times[-1]]

        t0, t1 = times[upper - 1], times[upper]
        r0, r1 = self._yield_curve[t0], self._yield_curve[t1]
        if t1 - t0 < self._eps:
            return r0
        alpha = (t - t0) / (t1 - t0)
        return r0 + alpha * (r1 - r0)

    def _grid_value(self, strike: np.floating, maturity: np.floating) -> np.floating:
        try:
            return self._vol_surface[(strike, maturity)]
        except KeyError:
            raise MissingGridPointError(float(strike), float(maturity)) from None

    def get_volatility(self, strike: float, maturity: float) -> np.floating:
        """Return the volatility at ``(strike, maturity)``.

        Exact grid hits are returned as stored. A surface holding a single
        strike and maturity is treated as flat. Anything else is bilinearly
        interpolated and must fall inside the known strike/maturity range.
        """
        k = self._cast(strike)
        t = self._cast(maturity)

        exact = self._vol_surface.get((k, t))
        if exact is not None:
            return exact

        strikes, maturities = self._strikes, self._maturities
        if len(strikes) == 1 and len(maturities) == 1:
            return self._vol_surface[(strikes[0], maturities[0])]

        if len(strikes) < 2 or len(maturities) < 2:
            raise InsufficientDataError(
                "Insufficient data for interpolation: need at least two "
                f"strikes and two maturities, have {len(strikes)} and "
                f"{len(maturities)}"
            )
        if not strikes[0] <= k <= strikes[-1]:
            raise OutOfRangeError(
                f"Strike {strike} out of bounds [{strikes[0]}, {strikes[-1]}]"
            )
        if not maturities[0] <= t <= maturities[-1]:
            raise OutOfRangeError(
                f"Maturity {maturity} out of bounds "
                f"[{maturities[0]}, {maturities[-1]}]"
            )

        k0, k1 = _bracket(strikes, k)
        t0, t1 = _bracket(maturities, t)
        if k0 == k1 and t0 == t1:
            return self._grid_value(k0, t0)

        single_strike = k0 == k1
        single_maturity = t0 == t1

        # A collapsed axis reuses the corner on the known line.
        v00 = self._grid_value(k0, t0)
        v01 = v00 if single_maturity else self._grid_value(k0, t1)
        v10 = v00 if single_strike else self._grid_value(k1, t0)
        if single_strike:
            v11 = v01
        elif single_maturity:
            v11 = v10
        else:
            v11 = self._grid_value(k1, t1)

        x = 0 if single_strike else (k - k0) / (k1 - k0)
        y = 0 if single_maturity else (t - t0) / (t1 - t0)

        return (
            (1 - x) * (1 - y) * v00
            + (1 - x) * y * v01
            + x * (1 - y) * v10
            + x * y * v11
        )
