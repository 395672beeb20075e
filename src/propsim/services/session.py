# src/propsim/services/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from propsim.adapters.calc_client import make_calc_client
from propsim.adapters.config import AppConfig, config
from propsim.adapters.logging_utils import get_logger, log_event
from propsim.analysis.aggregation import (
    IndicatorSeries,
    PortfolioSummary,
    capital_gain,
    indicator_series,
    property_label,
    summarize_portfolio,
)
from propsim.analysis.projection import ProjectionSeries, build_projections
from propsim.domain.assumptions import ScenarioDefaults
from propsim.domain.ports import CalculationService
from propsim.domain.results import SimulationResult
from propsim.domain.scenario import PropertyScenario, ScenarioField
from propsim.repos.result_repo import ResultStore
from propsim.repos.scenario_repo import ScenarioStore
from propsim.services.dispatcher import SimulationDispatcher, SimulationError

logger = get_logger(__name__)


@dataclass
class PropertyRow:
    """What one property card shows: inputs, result (if any), capital gain."""
    index: int
    label: str
    scenario: PropertyScenario
    result: Optional[SimulationResult]
    capital_gain: Optional[float]


class PortfolioSession:
    """
    Owns the scenario and result stores for one user session.

    Every user action goes through here. Derived views (summary, rows,
    projections, indicators) are recomputed from current state on each call.
    """

    def __init__(
        self,
        service: CalculationService | None = None,
        *,
        scenarios: Iterable[PropertyScenario] | None = None,
        cfg: AppConfig | None = None,
    ) -> None:
        self.cfg = cfg or config
        self.scenarios = ScenarioStore(scenarios, defaults=ScenarioDefaults.from_config(self.cfg))
        self.results = ResultStore()
        self.dispatcher = SimulationDispatcher(
            service if service is not None else make_calc_client(self.cfg),
            max_workers=self.cfg.DISPATCH_MAX_WORKERS,
        )
        self.min_scenarios = self.cfg.MIN_SCENARIOS
        self.busy = False
        self.last_error: SimulationError | None = None

        if scenarios is None:
            self.scenarios.add()

    # -----------------------------
    # Mutations
    # -----------------------------
    def add_scenario(self) -> PropertyScenario:
        scenario = self.scenarios.add()
        log_event(logger, "scenario_added", count=len(self.scenarios))
        return scenario

    def update_scenario(self, index: int, field: ScenarioField | str, raw_value: Any) -> bool:
        return self.scenarios.update(index, field, raw_value)

    @property
    def can_remove(self) -> bool:
        return len(self.scenarios) > self.min_scenarios

    def remove_scenario(self, index: int) -> bool:
        """
        Drop a scenario and its result together. Refused (False) when it
        would leave fewer than `min_scenarios` scenarios.
        """
        if not self.can_remove:
            return False
        removed = self.scenarios.remove(index)
        self.results.remove(removed.scenario_id)
        log_event(logger, "scenario_removed", index=index, count=len(self.scenarios))
        return True

    def simulate(self) -> bool:
        """
        Compute every scenario and replace the result set.

        On failure the previous results stay in place, the error is logged and
        kept on `last_error`, and False is returned. `busy` is cleared either way.
        """
        if self.busy:
            # advisory only; a second submission still runs
            log_event(logger, "simulation_reentrant_submit", level=logging.WARNING)

        submitted = self.scenarios.all()
        self.busy = True
        try:
            results = self.dispatcher.run(submitted)
        except SimulationError as e:
            self.last_error = e
            log_event(
                logger,
                "simulation_failed",
                level=logging.ERROR,
                index=e.index,
                error=str(e),
            )
            return False
        finally:
            self.busy = False

        self.results.replace_all([s.scenario_id for s in submitted], results)
        self.last_error = None
        log_event(logger, "simulation_completed", count=len(results))
        return True

    # -----------------------------
    # Derived views
    # -----------------------------
    def aligned_results(self) -> list[SimulationResult | None]:
        return self.results.aligned(self.scenarios.ids())

    def rows(self) -> list[PropertyRow]:
        out: list[PropertyRow] = []
        for i, (s, r) in enumerate(zip(self.scenarios.all(), self.aligned_results())):
            out.append(
                PropertyRow(
                    index=i,
                    label=property_label(i),
                    scenario=s,
                    result=r,
                    capital_gain=capital_gain(s, r) if r is not None else None,
                )
            )
        return out

    def summary(self) -> PortfolioSummary | None:
        """None while there is nothing to summarize (no results yet)."""
        summary = summarize_portfolio(self.scenarios.all(), self.aligned_results())
        return summary if summary.has_results else None

    def projections(self) -> list[ProjectionSeries]:
        return build_projections(self.scenarios.all(), self.cfg.PROJECTION_YEARS)

    def indicators(self) -> IndicatorSeries:
        return indicator_series(self.scenarios.all(), self.aligned_results())
