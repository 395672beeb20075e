# tests/test_config.py
import json
import logging

import pytest
from pydantic import ValidationError

from propsim.adapters.config import AppConfig
from propsim.adapters.logging_utils import JsonLogFormatter
from propsim.domain.assumptions import ScenarioDefaults


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PROPSIM_CALC_SERVICE_URL", "http://calc:9000/simular")
    monkeypatch.setenv("PROPSIM_DISPATCH_MAX_WORKERS", "3")
    monkeypatch.setenv("PROPSIM_DEFAULT_VACANCY_RATE", "4%")

    cfg = AppConfig()

    assert cfg.CALC_SERVICE_URL == "http://calc:9000/simular"
    assert cfg.DISPATCH_MAX_WORKERS == 3
    assert cfg.DEFAULT_VACANCY_RATE == pytest.approx(0.04)


def test_percent_like_rates_become_fractions():
    cfg = AppConfig(DEFAULT_APPRECIATION_RATE=7, DEFAULT_VACANCY_RATE="0.03")
    assert cfg.DEFAULT_APPRECIATION_RATE == pytest.approx(0.07)
    assert cfg.DEFAULT_VACANCY_RATE == pytest.approx(0.03)


@pytest.mark.parametrize(
    "overrides",
    [
        {"DISPATCH_MAX_WORKERS": 0},
        {"MIN_SCENARIOS": -1},
        {"CALC_TIMEOUT_S": -5},
        {"DEFAULT_VACANCY_RATE": "lots"},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        AppConfig(**overrides)


def test_blank_timeout_means_none():
    assert AppConfig(CALC_TIMEOUT_S="").CALC_TIMEOUT_S is None


def test_scenario_defaults_from_config():
    cfg = AppConfig(DEFAULT_PURCHASE_PRICE=80_000, DEFAULT_TERM_YEARS=15, DEFAULT_APPRECIATION_RATE=0.03)
    d = ScenarioDefaults.from_config(cfg)
    assert d.purchase_price == 80_000.0
    assert d.term_years == 15
    assert d.appreciation_rate == pytest.approx(0.03)


def test_json_formatter_merges_context():
    record = logging.LogRecord(
        name="propsim.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="simulation_failed",
        args=(),
        exc_info=None,
    )
    record.context = {"index": 2, "error": "HTTP 500"}

    payload = json.loads(JsonLogFormatter().format(record))

    assert payload["event"] == "simulation_failed"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "propsim.test"
    assert payload["index"] == 2
    assert payload["error"] == "HTTP 500"
