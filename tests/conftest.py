# tests/conftest.py
import threading
import time

import pytest

from propsim.adapters.config import AppConfig
from propsim.domain.scenario import PropertyScenario


class FakeCalcService:
    """
    Stand-in for the calculation service.

    The answer is a simple function of the request so tests can tell which
    scenario a result came from. Prices listed in `fail_prices` raise;
    `delays` maps a price to a sleep, to shuffle completion order.
    """

    def __init__(self, fail_prices=(), delays=None, on_call=None):
        self.fail_prices = set(fail_prices)
        self.delays = dict(delays or {})
        self.on_call = on_call
        self.calls = []
        self._lock = threading.Lock()

    def simulate(self, payload):
        with self._lock:
            self.calls.append(payload)
        if self.on_call is not None:
            self.on_call(payload)
        price = payload["precio_propiedad"]
        time.sleep(self.delays.get(price, 0.0))
        if price in self.fail_prices:
            raise RuntimeError(f"service failed for price={price}")
        return {
            "cap_rate": price / 20_000.0,
            "cash_on_cash": payload["pie"] / 10_000.0,
            "cuota_mensual": price / 500.0,
            "valor_futuro": price * 1.25,
        }


def make_scenario(purchase_price=100_000.0, down_payment=20_000.0, **overrides):
    fields = dict(
        purchase_price=purchase_price,
        down_payment=down_payment,
        annual_rate=5.0,
        term_years=25,
        monthly_rent=500.0,
        monthly_admin_cost=50.0,
        vacancy_rate=0.02,
        appreciation_rate=0.05,
    )
    fields.update(overrides)
    return PropertyScenario(**fields)


@pytest.fixture
def fake_service():
    return FakeCalcService()


@pytest.fixture
def app_config():
    return AppConfig(DISPATCH_MAX_WORKERS=4, MIN_SCENARIOS=1, PROJECTION_YEARS=5)


@pytest.fixture
def scenario_factory():
    return make_scenario


@pytest.fixture
def service_factory():
    return FakeCalcService
