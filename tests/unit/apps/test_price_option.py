from __future__ import annotations

import json
import logging

import numpy as np
import pytest
import yaml

from equity_options.apps import price_option as app
from equity_options.errors import InvalidArgumentError

REFERENCE_ARGS = [
    "--spot",
    "100",
    "--vol",
    "0.2",
    "--rate",
    "0.05",
    "--strike",
    "100",
    "--maturity",
    "1.0",
]


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    monkeypatch.setattr(app, "setup_logging_from_config", lambda config: None)


def _config(**market) -> dict:
    config = app.build_config(app.DEFAULT_CONFIG, None, None)
    config["market"].update(market)
    config["option"].update({"strike": 100.0, "maturity": 1.0})
    return config


def test_main_prints_price_and_greeks(capsys):
    assert app.main(REFERENCE_ARGS) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["option_type"] == "call"
    assert report["price"] == pytest.approx(10.45, abs=0.01)
    assert report["greeks"]["delta"] == pytest.approx(0.6368, rel=1e-3)
    assert report["greeks"]["rho"] == pytest.approx(0.5327, rel=1e-3)


def test_main_put_with_notional(capsys):
    assert app.main(REFERENCE_ARGS + ["--type", "P", "--notional", "10"]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["option_type"] == "put"
    assert report["price"] == pytest.approx(55.7, abs=0.1)
    assert report["greeks"]["delta"] == pytest.approx(0.6368 - 1.0, rel=1e-3)


def test_main_reads_yaml_config_and_cli_overrides(tmp_path, capsys):
    path = tmp_path / "option.yml"
    path.write_text(
        yaml.safe_dump(
            {
                "market": {"spot": 100.0, "volatility": 0.2, "rate": 0.01},
                "option": {"strike": 100.0, "maturity": 1.0, "type": "put"},
            }
        ),
        encoding="utf-8",
    )

    assert app.main(["--config", str(path), "--rate", "0.05"]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["price"] == pytest.approx(5.57, abs=0.01)


def test_print_config_shows_merged_values(capsys):
    assert app.main(REFERENCE_ARGS + ["--precision", "float32", "--print-config"]) == 0

    config = json.loads(capsys.readouterr().out)
    assert config["precision"] == "float32"
    assert config["market"]["spot"] == 100.0
    assert config["option"]["type"] == "call"


def test_invalid_terms_exit_with_error(capsys, caplog):
    with caplog.at_level(logging.ERROR, logger=app.__name__):
        argv = REFERENCE_ARGS[:-4] + ["--strike", "-5", "--maturity", "1"]
        assert app.main(argv) == 1

    assert capsys.readouterr().out == ""
    assert "Strike price must be positive" in caplog.text


def test_missing_required_input_is_reported():
    config = _config(spot=100.0, volatility=0.2)
    with pytest.raises(InvalidArgumentError, match="market.rate must be set"):
        app.run(config)


def test_volatility_estimated_from_closes_when_not_given():
    closes = [100.0, 101.0, 99.5, 102.0, 103.5, 102.5]
    config = _config(spot=100.0, rate=0.05, closes=closes)

    snapshot = app.build_snapshot(config["market"])

    expected = np.std(np.diff(np.log(closes)), ddof=1) * np.sqrt(252)
    assert snapshot.volatility == pytest.approx(expected)
    assert app.run(config)["price"] > 0


def test_missing_volatility_and_closes_is_reported():
    with pytest.raises(
        InvalidArgumentError, match="market.volatility or market.closes"
    ):
        app.build_snapshot({"spot": 100.0, "rate": 0.05})


def test_float32_precision_runs_end_to_end():
    config = _config(spot=100.0, volatility=0.2, rate=0.05)
    config["precision"] = "float32"

    report = app.run(config)

    assert isinstance(report["price"], np.float32)
    assert report["price"] == pytest.approx(10.45, abs=0.01)


def test_non_numeric_config_value_exits_with_error(tmp_path, capsys, caplog):
    path = tmp_path / "option.yml"
    path.write_text(
        yaml.safe_dump(
            {
                "market": {"spot": "abc", "volatility": 0.2, "rate": 0.05},
                "option": {"strike": 100.0, "maturity": 1.0},
            }
        ),
        encoding="utf-8",
    )

    with caplog.at_level(logging.ERROR, logger=app.__name__):
        assert app.main(["--config", str(path)]) == 1

    assert capsys.readouterr().out == ""
    assert "market.spot must be a number" in caplog.text


@pytest.mark.parametrize(
    ("section", "key", "value"),
    [
        ("market", "volatility", "high"),
        ("option", "strike", [100]),
        ("option", "notional", "ten"),
    ],
)
def test_non_numeric_values_are_invalid_arguments(section, key, value):
    config = _config(spot=100.0, volatility=0.2, rate=0.05)
    config[section][key] = value

    with pytest.raises(InvalidArgumentError, match=f"{section}.{key} must be a number"):
        app.run(config)


def test_non_numeric_closes_are_invalid_arguments():
    config = _config(spot=100.0, rate=0.05, closes=[100.0, "x", 101.0, 102.0])

    with pytest.raises(InvalidArgumentError, match="prices must be numeric"):
        app.build_snapshot(config["market"])
