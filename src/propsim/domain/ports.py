# src/propsim/domain/ports.py
from __future__ import annotations

from typing import Any, Protocol


# ----------------------------
# Calculation service
# ----------------------------

class CalculationService(Protocol):
    def simulate(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Compute one scenario. `payload` is PropertyScenario.to_request_payload().
        Raises on any failure; never returns a partial answer.
        """
        ...
