#!/usr/bin/env python
"""Price one European equity option from an observed market snapshot."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from equity_options.apps._cli import add_print_config_arg, print_json
from equity_options.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    collect_logging_overrides,
    setup_logging_from_config,
)
from equity_options.errors import EquityOptionsError, InvalidArgumentError
from equity_options.market import (
    MarketSnapshot,
    historical_volatility,
    seed_market_data,
)
from equity_options.options import (
    AnalyticBlackScholes,
    ContractTerms,
    EuropeanOption,
    OptionType,
    normalize_option_type,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "precision": "float64",
    "market": {
        "spot": None,
        "volatility": None,
        "rate": None,
        # Daily closes, oldest first; used when `volatility` is not set.
        "closes": None,
        "vol_window": 30,
    },
    "option": {
        "strike": None,
        "maturity": None,
        "notional": 1.0,
        "type": "call",
    },
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Price a European option and report its Greeks."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)

    parser.add_argument("--spot", type=float, default=None)
    parser.add_argument("--vol", dest="volatility", type=float, default=None)
    parser.add_argument("--rate", type=float, default=None)
    parser.add_argument("--strike", type=float, default=None)
    parser.add_argument(
        "--maturity", type=float, default=None, help="Time to expiry in years."
    )
    parser.add_argument("--notional", type=float, default=None)
    parser.add_argument(
        "--type",
        dest="option_type",
        type=str,
        default=None,
        help="call/put (C/P accepted).",
    )
    parser.add_argument(
        "--precision",
        choices=("float32", "float64"),
        default=None,
        help="Floating-point type shared by market data and pricing.",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    market = {
        key: getattr(args, key)
        for key in ("spot", "volatility", "rate")
        if getattr(args, key) is not None
    }
    if market:
        overrides["market"] = market

    option: dict[str, Any] = {}
    for key in ("strike", "maturity", "notional"):
        if getattr(args, key) is not None:
            option[key] = getattr(args, key)
    if args.option_type is not None:
        option["type"] = args.option_type
    if option:
        overrides["option"] = option

    if args.precision is not None:
        overrides["precision"] = args.precision

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def _as_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}.") from exc


def _require(section: dict[str, Any], key: str, name: str) -> float:
    value = section.get(key)
    if value is None:
        raise InvalidArgumentError(f"{name}.{key} must be set.")
    return _as_float(value, f"{name}.{key}")


def build_snapshot(market_cfg: dict[str, Any]) -> MarketSnapshot:
    """Build the snapshot, estimating volatility from closes when needed."""
    volatility = market_cfg.get("volatility")
    if volatility is None:
        closes = market_cfg.get("closes")
        if not closes:
            raise InvalidArgumentError(
                "market.volatility or market.closes must be set."
            )
        window = market_cfg.get("vol_window")
        if window is not None:
            window = int(_as_float(window, "market.vol_window"))
        volatility = historical_volatility(closes, window=window)
        logger.info(
            "Historical volatility from %d closes: %.6f", len(closes), volatility
        )

    return MarketSnapshot(
        spot=_require(market_cfg, "spot", "market"),
        volatility=_as_float(volatility, "market.volatility"),
        rate=_require(market_cfg, "rate", "market"),
    )


def run(config: dict[str, Any]) -> dict[str, Any]:
    """Price the configured option; return the report written by `main`."""
    snapshot = build_snapshot(config["market"])
    option_cfg = config["option"]
    option_type = normalize_option_type(option_cfg.get("type", "call"))
    terms = ContractTerms(
        notional=_as_float(option_cfg.get("notional", 1.0), "option.notional"),
        strike=_require(option_cfg, "strike", "option"),
        maturity=_require(option_cfg, "maturity", "option"),
        spot=snapshot.spot,
        is_call=option_type == OptionType.CALL,
    )
    precision = config.get("precision", "float64")

    logger.info("Spot price:     %s", snapshot.spot)
    logger.info("Volatility:     %s", snapshot.volatility)
    logger.info("Risk-free rate: %s", snapshot.rate)
    logger.info(
        "Option:         %s K=%s T=%s notional=%s",
        option_type,
        terms.strike,
        terms.maturity,
        terms.notional,
    )

    market = seed_market_data(snapshot, terms.strike, terms.maturity, dtype=precision)
    option = EuropeanOption(
        terms,
        strategy=AnalyticBlackScholes(dtype=precision),
        market=market,
    )
    return {
        "option_type": str(option_type),
        "price": option.price(),
        "greeks": option.greeks().as_dict(),
    }


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = build_config(DEFAULT_CONFIG, args.config, _build_overrides(args))
    if args.print_config:
        print_json(config)
        return 0

    setup_logging_from_config(config.get("logging"))
    try:
        report = run(config)
    except EquityOptionsError as exc:
        logger.error("Error: %s", exc)
        return 1

    print_json(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
