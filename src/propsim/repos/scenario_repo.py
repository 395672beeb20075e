# src/propsim/repos/scenario_repo.py
from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from propsim.adapters.logging_utils import get_logger, log_event
from propsim.domain.assumptions import ScenarioDefaults
from propsim.domain.scenario import (
    PropertyScenario,
    ScenarioField,
    ScenarioParseError,
    parse_field_value,
)

logger = get_logger(__name__)


class ScenarioStore:
    """
    Ordered, in-memory collection of property scenarios.

    Position matters: it decides labels and colours in every derived view.
    Indexes are expected to come from a rendered list, so an out-of-range
    index surfaces as the list's own IndexError.
    """

    def __init__(
        self,
        scenarios: Iterable[PropertyScenario] | None = None,
        *,
        defaults: ScenarioDefaults | None = None,
    ) -> None:
        self._defaults = defaults or ScenarioDefaults.from_config()
        self._items: list[PropertyScenario] = list(scenarios or [])

    def add(self) -> PropertyScenario:
        scenario = PropertyScenario.from_defaults(self._defaults)
        self._items.append(scenario)
        return scenario

    def update(self, index: int, field: ScenarioField | str, raw_value: Any) -> bool:
        """
        Set one field from user input. Returns False and keeps the previous
        value when the input does not parse.
        """
        f = ScenarioField.coerce(field)
        scenario = self._items[index]
        try:
            value = parse_field_value(f, raw_value)
        except ScenarioParseError as e:
            log_event(
                logger,
                "scenario_update_rejected",
                level=logging.DEBUG,
                index=index,
                field=f.value,
                reason=str(e),
            )
            return False
        setattr(scenario, f.value, value)
        return True

    def remove(self, index: int) -> PropertyScenario:
        return self._items.pop(index)

    def get(self, index: int) -> PropertyScenario:
        return self._items[index]

    def all(self) -> list[PropertyScenario]:
        return list(self._items)

    def ids(self) -> list[str]:
        return [s.scenario_id for s in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PropertyScenario]:
        return iter(list(self._items))
