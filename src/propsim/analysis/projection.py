# src/propsim/analysis/projection.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from propsim.analysis.aggregation import property_label
from propsim.domain.scenario import PropertyScenario

# Series colour is position mod palette size, so removing a scenario
# recolours every scenario after it.
PALETTE: tuple[str, ...] = (
    "rgba(255, 99, 132, 0.6)",
    "rgba(54, 162, 235, 0.6)",
    "rgba(255, 206, 86, 0.6)",
    "rgba(75, 192, 192, 0.6)",
    "rgba(153, 102, 255, 0.6)",
    "rgba(255, 159, 64, 0.6)",
)

DEFAULT_HORIZON_YEARS = 5


@dataclass
class ProjectionSeries:
    label: str
    color: str
    years: list[int]
    values: list[float]


def projection_years(horizon: int = DEFAULT_HORIZON_YEARS) -> list[int]:
    return list(range(horizon + 1))


def project_value(scenario: PropertyScenario, years: Sequence[int]) -> list[float]:
    """purchase_price * (1 + appreciation_rate) ** y for each year offset."""
    y = np.asarray(years, dtype=float)
    growth = np.power(1.0 + scenario.appreciation_rate, y)
    return [float(v) for v in scenario.purchase_price * growth]


def build_projections(
    scenarios: Sequence[PropertyScenario],
    horizon: int = DEFAULT_HORIZON_YEARS,
) -> list[ProjectionSeries]:
    years = projection_years(horizon)
    return [
        ProjectionSeries(
            label=property_label(i),
            color=PALETTE[i % len(PALETTE)],
            years=years,
            values=project_value(s, years),
        )
        for i, s in enumerate(scenarios)
    ]


def projection_frame(
    scenarios: Sequence[PropertyScenario],
    horizon: int = DEFAULT_HORIZON_YEARS,
) -> pd.DataFrame:
    """Same projections as a year-indexed frame, one column per property."""
    series = build_projections(scenarios, horizon)
    years = projection_years(horizon)
    df = pd.DataFrame({s.label: s.values for s in series}, index=pd.Index(years, name="year"))
    return df
