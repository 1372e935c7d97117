import numpy as np
import pytest

from equity_options.errors import (
    EmptyDataError,
    InvalidArgumentError,
    OutOfRangeError,
    UnsupportedError,
)
from equity_options.market import MarketDataStore
from equity_options.options import (
    AnalyticBlackScholes,
    ContractTerms,
    EuropeanOption,
    PricingStrategy,
    bs_d1_d2,
    bs_greeks,
    bs_price,
)
from equity_options.options.models import black_scholes as bs_model


def _option(is_call: bool = True, **overrides) -> EuropeanOption:
    terms = {"notional": 1.0, "strike": 100.0, "maturity": 1.0, "spot": 100.0}
    terms.update(overrides)
    return EuropeanOption(ContractTerms(is_call=is_call, **terms))


def test_reference_call_and_put_prices(market: MarketDataStore):
    engine = AnalyticBlackScholes()

    assert engine.price(_option(True), market) == pytest.approx(10.45, abs=0.01)
    assert engine.price(_option(False), market) == pytest.approx(5.57, abs=0.01)


def test_put_call_parity(market: MarketDataStore):
    engine = AnalyticBlackScholes()
    call = engine.price(_option(True), market)
    put = engine.price(_option(False), market)

    assert call - put == pytest.approx(100.0 - 100.0 * np.exp(-0.05))


def test_reference_call_greeks(market: MarketDataStore):
    greeks = AnalyticBlackScholes().greeks(_option(True), market)

    assert greeks.delta == pytest.approx(0.6368, rel=1e-3)
    assert greeks.gamma == pytest.approx(0.01876, rel=1e-3)
    assert greeks.vega == pytest.approx(0.3752, rel=1e-3)
    assert greeks.theta == pytest.approx(-0.0176, rel=1e-2)
    assert greeks.rho == pytest.approx(0.5327, rel=1e-3)


def test_put_greeks_relate_to_call_greeks(market: MarketDataStore):
    engine = AnalyticBlackScholes()
    call = engine.greeks(_option(True), market)
    put = engine.greeks(_option(False), market)

    assert put.delta == pytest.approx(call.delta - 1.0)
    assert put.gamma == pytest.approx(call.gamma)
    assert put.vega == pytest.approx(call.vega)
    assert put.rho == pytest.approx(-0.4189, rel=1e-3)
    assert put.theta > call.theta


def test_zero_volatility_atm_put_is_worth_intrinsic():
    market = MarketDataStore()
    market.add_rate(1.0, 0.05)
    market.add_volatility_point(100, 1.0, 0.0)

    assert AnalyticBlackScholes().price(_option(False), market) == pytest.approx(0.0)


def test_zero_volatility_call_is_discounted_forward_intrinsic():
    market = MarketDataStore()
    market.add_rate(1.0, 0.05)
    market.add_volatility_point(90, 1.0, 0.0)
    option = _option(True, strike=90.0)

    greeks = AnalyticBlackScholes().greeks(option, market)

    assert AnalyticBlackScholes().price(option, market) == pytest.approx(
        100.0 - 90.0 * np.exp(-0.05)
    )
    assert greeks.delta == pytest.approx(1.0)
    assert greeks.gamma == 0.0


def test_pricing_uses_interpolated_market_data():
    market = MarketDataStore()
    market.add_rate(0.5, 0.04)
    market.add_rate(1.5, 0.06)
    for strike in (90.0, 110.0):
        for maturity in (0.5, 1.5):
            market.add_volatility_point(strike, maturity, 0.20)

    expected = bs_price(S=100.0, K=100.0, T=1.0, sigma=0.20, r=0.05)

    price = AnalyticBlackScholes().price(_option(True), market)
    assert price == pytest.approx(expected)


def test_market_data_errors_propagate():
    engine = AnalyticBlackScholes()
    with pytest.raises(EmptyDataError):
        engine.price(_option(True), MarketDataStore())

    market = MarketDataStore()
    market.add_rate(1.0, 0.05)
    market.add_volatility_point(100, 0.5, 0.2)
    market.add_volatility_point(100, 0.75, 0.2)
    market.add_volatility_point(120, 0.5, 0.2)
    market.add_volatility_point(120, 0.75, 0.2)
    with pytest.raises(OutOfRangeError):
        engine.greeks(_option(True), market)


def test_clone_returns_independent_equal_strategy():
    engine = AnalyticBlackScholes(dtype=np.float32)
    clone = engine.clone()

    assert clone is not engine
    assert clone == engine
    assert clone.dtype == np.float32


def test_float32_strategy_returns_float32(market_float32: MarketDataStore):
    engine = AnalyticBlackScholes(dtype=np.float32)
    option = _option(True)

    price = engine.price(option, market_float32)
    greeks = engine.greeks(option, market_float32)

    assert isinstance(price, np.float32)
    assert isinstance(greeks.gamma, np.float32)
    assert price == pytest.approx(10.45, abs=0.01)
    assert greeks.delta == pytest.approx(0.6368, rel=1e-3)


def test_default_greeks_is_unsupported(market: MarketDataStore):
    class FlatStrategy(PricingStrategy):
        def price(self, instrument, market):
            return 1.0

        def clone(self):
            return FlatStrategy()

    strategy = FlatStrategy()

    assert strategy.price(_option(True), market) == 1.0
    with pytest.raises(UnsupportedError, match="FlatStrategy"):
        strategy.greeks(_option(True), market)


def test_functional_greeks_match_strategy(market: MarketDataStore):
    out = bs_greeks(S=100.0, K=100.0, T=1.0, sigma=0.2, r=0.05, option_type="P")
    greeks = AnalyticBlackScholes().greeks(_option(False), market)

    assert set(out) == {"delta", "gamma", "vega", "theta", "rho"}
    assert greeks.as_dict() == pytest.approx(out)


def test_greeks_share_one_d1_d2(monkeypatch, market: MarketDataStore):
    calls = []
    original = bs_model.bs_d1_d2

    def _counting_d1_d2(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(bs_model, "bs_d1_d2", _counting_d1_d2)

    out = bs_model.bs_greeks(S=100.0, K=100.0, T=1.0, sigma=0.2, r=0.05)
    AnalyticBlackScholes().greeks(_option(True), market)

    assert len(calls) == 2
    assert out["delta"] == pytest.approx(0.6368, rel=1e-3)


def test_d1_d2_reference_values():
    d1, d2 = bs_d1_d2(S=100.0, K=100.0, T=1.0, sigma=0.2, r=0.05)

    assert d1 == pytest.approx(0.35)
    assert d2 == pytest.approx(0.15)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"S": 0.0, "K": 100.0, "T": 1.0, "sigma": 0.2},
        {"S": 100.0, "K": 100.0, "T": 0.0, "sigma": 0.2},
        {"S": 100.0, "K": 100.0, "T": 1.0, "sigma": -0.2},
    ],
)
def test_d1_d2_rejects_invalid_inputs(kwargs):
    with pytest.raises(InvalidArgumentError):
        bs_d1_d2(**kwargs)
