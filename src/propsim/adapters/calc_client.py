# src/propsim/adapters/calc_client.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import requests

from propsim.adapters.config import AppConfig, config


class CalcServiceError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class CalcServiceClient:
    """
    HTTP client for the scenario calculation service.

    One POST per scenario, JSON in and JSON out. No retries: a failed call
    is reported to the caller, who decides what a failure means for the batch.
    `timeout_s=None` leaves the request without a client-side timeout.
    """

    url: str
    timeout_s: float | None = None

    def simulate(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        try:
            resp = requests.post(
                self.url,
                json=payload,
                headers=headers,
                timeout=self.timeout_s,
            )
        except requests.RequestException as e:
            raise CalcServiceError(f"calculation service unreachable: {e!r}") from e

        if not resp.ok:
            raise CalcServiceError(
                f"calculation service HTTP {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise CalcServiceError(
                "calculation service returned a non-JSON body",
                status_code=resp.status_code,
            ) from e

        if not isinstance(body, dict):
            raise CalcServiceError(
                f"Unexpected response type: {type(body).__name__}",
                status_code=resp.status_code,
            )
        return body


def make_calc_client(cfg: AppConfig | None = None) -> CalcServiceClient:
    cfg = cfg or config
    return CalcServiceClient(url=cfg.CALC_SERVICE_URL, timeout_s=cfg.CALC_TIMEOUT_S)
