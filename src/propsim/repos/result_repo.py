# src/propsim/repos/result_repo.py
from __future__ import annotations

from typing import Iterable, Sequence

from propsim.domain.results import SimulationResult


class ResultStore:
    """
    Latest simulation results, keyed by scenario id.

    Results are only ever replaced as a whole set. Positional views are
    produced by walking a scenario id order, so removing or inserting a
    scenario can never shift a result onto the wrong property.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, SimulationResult] = {}

    def replace_all(
        self,
        scenario_ids: Sequence[str],
        results: Sequence[SimulationResult],
    ) -> None:
        if len(scenario_ids) != len(results):
            raise ValueError(
                f"got {len(results)} results for {len(scenario_ids)} scenarios"
            )
        self._by_id = dict(zip(scenario_ids, results))

    def get(self, scenario_id: str) -> SimulationResult | None:
        return self._by_id.get(scenario_id)

    def remove(self, scenario_id: str) -> SimulationResult | None:
        return self._by_id.pop(scenario_id, None)

    def aligned(self, scenario_ids: Iterable[str]) -> list[SimulationResult | None]:
        """One slot per scenario id, None where nothing has been computed yet."""
        return [self._by_id.get(sid) for sid in scenario_ids]

    def snapshot(self) -> dict[str, SimulationResult]:
        return dict(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)
