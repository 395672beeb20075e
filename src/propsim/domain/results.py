# src/propsim/domain/results.py
from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SimulationResult(BaseModel):
    """
    Output of the calculation service for one scenario.

    All four numbers are computed remotely and treated as opaque here.
    The service answers with `cap_rate`, `cash_on_cash`, `cuota_mensual`
    and `valor_futuro`; camelCase spellings are accepted too.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    cap_rate: float = Field(
        ...,
        validation_alias=AliasChoices("cap_rate", "capRate"),
        allow_inf_nan=False,
        description="percent, e.g. 6.2",
    )
    cash_on_cash: float = Field(
        ...,
        validation_alias=AliasChoices("cash_on_cash", "cashOnCash"),
        allow_inf_nan=False,
        description="percent, e.g. 4.8",
    )
    monthly_payment: float = Field(
        ...,
        validation_alias=AliasChoices("monthly_payment", "cuota_mensual", "monthlyPayment"),
        allow_inf_nan=False,
    )
    future_value: float = Field(
        ...,
        validation_alias=AliasChoices("future_value", "valor_futuro", "futureValue"),
        allow_inf_nan=False,
        description="property value at the service's fixed horizon",
    )

    @classmethod
    def from_response(cls, payload: Any) -> "SimulationResult":
        return cls.model_validate(payload)
