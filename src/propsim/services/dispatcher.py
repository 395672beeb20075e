# src/propsim/services/dispatcher.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Sequence

from propsim.adapters.config import config
from propsim.adapters.logging_utils import get_logger, log_event
from propsim.domain.ports import CalculationService
from propsim.domain.results import SimulationResult
from propsim.domain.scenario import PropertyScenario

logger = get_logger(__name__)


class SimulationError(RuntimeError):
    """
    A batch failed because at least one scenario could not be computed.
    `index` is the position of the first failure observed.
    """

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class SimulationDispatcher:
    """
    Fan one calculation request per scenario out to a thread pool and join.

    The join is all-or-nothing: either every scenario produced a result and
    the list comes back in input order, or SimulationError is raised and no
    result is returned at all. In-flight siblings are not cancelled; their
    outcomes are discarded.
    """

    def __init__(
        self,
        service: CalculationService,
        *,
        max_workers: int | None = None,
    ) -> None:
        self.service = service
        self.max_workers = max_workers or config.DISPATCH_MAX_WORKERS

    def _simulate_one(self, payload: dict[str, Any]) -> SimulationResult:
        body = self.service.simulate(payload)
        return SimulationResult.from_response(body)

    def run(self, scenarios: Sequence[PropertyScenario]) -> list[SimulationResult]:
        n = len(scenarios)
        if n == 0:
            return []

        # serialize up front so later edits cannot leak into an in-flight batch
        payloads = [s.to_request_payload() for s in scenarios]
        results: list[SimulationResult | None] = [None] * n
        workers = max(1, min(n, int(self.max_workers)))

        log_event(logger, "simulation_dispatch", count=n, workers=workers)

        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = {ex.submit(self._simulate_one, p): i for i, p in enumerate(payloads)}

            for fut in as_completed(futures):
                i = futures[fut]
                try:
                    results[i] = fut.result()
                except Exception as e:
                    log_event(
                        logger,
                        "simulation_request_failed",
                        level=logging.WARNING,
                        index=i,
                        error=str(e),
                    )
                    raise SimulationError(
                        f"scenario {i + 1} of {n} failed: {e}", index=i
                    ) from e

        return [r for r in results if r is not None]
