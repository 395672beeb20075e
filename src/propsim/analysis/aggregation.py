# src/propsim/analysis/aggregation.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from propsim.domain.results import SimulationResult
from propsim.domain.scenario import PropertyScenario


@dataclass
class PortfolioSummary:
    """
    Portfolio-wide figures across all scenarios.

    Price and down-payment totals cover every scenario. The result-based
    figures only cover scenarios that have a result; `n_results` says how
    many that is.
    """
    n_scenarios: int
    n_results: int
    total_purchase_price: float
    total_down_payment: float
    total_capital_gain: float
    avg_cap_rate: float
    avg_cash_on_cash: float
    total_monthly_payment: float
    total_future_value: float

    @property
    def has_results(self) -> bool:
        return self.n_results > 0


@dataclass
class IndicatorSeries:
    """Per-property cap rate and cash-on-cash, ready for a bar chart."""
    labels: list[str]
    cap_rate: list[Optional[float]] = field(default_factory=list)
    cash_on_cash: list[Optional[float]] = field(default_factory=list)


def property_label(index: int) -> str:
    return f"Property {index + 1}"


def capital_gain(scenario: PropertyScenario, result: SimulationResult) -> float:
    return result.future_value - scenario.purchase_price


def _pairs(
    scenarios: Sequence[PropertyScenario],
    results: Sequence[Optional[SimulationResult]],
) -> list[tuple[PropertyScenario, SimulationResult]]:
    # zip stops at the shorter side; unsimulated slots are None and dropped
    return [(s, r) for s, r in zip(scenarios, results) if r is not None]


def summarize_portfolio(
    scenarios: Sequence[PropertyScenario],
    results: Sequence[Optional[SimulationResult]],
) -> PortfolioSummary:
    """
    Reduce per-property scenarios and results into one PortfolioSummary.

    `results` is position-aligned with `scenarios` and may be shorter or hold
    None for scenarios not simulated yet. Those scenarios still count toward
    the price and down-payment totals but are left out of everything that
    needs a result. With no results at all the averages are 0, not NaN.
    """
    prices = np.asarray([s.purchase_price for s in scenarios], dtype=float)
    downs = np.asarray([s.down_payment for s in scenarios], dtype=float)

    pairs = _pairs(scenarios, results)
    m = len(pairs)

    if m == 0:
        return PortfolioSummary(
            n_scenarios=len(scenarios),
            n_results=0,
            total_purchase_price=float(prices.sum()),
            total_down_payment=float(downs.sum()),
            total_capital_gain=0.0,
            avg_cap_rate=0.0,
            avg_cash_on_cash=0.0,
            total_monthly_payment=0.0,
            total_future_value=0.0,
        )

    paired_prices = np.asarray([s.purchase_price for s, _ in pairs], dtype=float)
    future = np.asarray([r.future_value for _, r in pairs], dtype=float)
    cap = np.asarray([r.cap_rate for _, r in pairs], dtype=float)
    coc = np.asarray([r.cash_on_cash for _, r in pairs], dtype=float)
    payment = np.asarray([r.monthly_payment for _, r in pairs], dtype=float)

    return PortfolioSummary(
        n_scenarios=len(scenarios),
        n_results=m,
        total_purchase_price=float(prices.sum()),
        total_down_payment=float(downs.sum()),
        total_capital_gain=float((future - paired_prices).sum()),
        avg_cap_rate=float(cap.sum() / m),
        avg_cash_on_cash=float(coc.sum() / m),
        total_monthly_payment=float(payment.sum()),
        total_future_value=float(future.sum()),
    )


def indicator_series(
    scenarios: Sequence[PropertyScenario],
    results: Sequence[Optional[SimulationResult]],
) -> IndicatorSeries:
    """
    Cap rate and cash-on-cash per property, labelled by position.
    Slots without a result hold None so bars stay under the right label.
    """
    out = IndicatorSeries(labels=[property_label(i) for i in range(len(scenarios))])
    for i in range(len(scenarios)):
        r = results[i] if i < len(results) else None
        out.cap_rate.append(r.cap_rate if r is not None else None)
        out.cash_on_cash.append(r.cash_on_cash if r is not None else None)
    return out
