# src/propsim/domain/scenario.py
from __future__ import annotations

import math
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from propsim.domain.assumptions import ScenarioDefaults


class ScenarioParseError(ValueError):
    pass


class ScenarioField(str, Enum):
    """
    Editable scenario fields.

    The value is the attribute name on PropertyScenario; `wire_key` is the
    name the calculation service expects in the request body.
    """

    PURCHASE_PRICE = "purchase_price"
    DOWN_PAYMENT = "down_payment"
    ANNUAL_RATE = "annual_rate"
    TERM_YEARS = "term_years"
    MONTHLY_RENT = "monthly_rent"
    MONTHLY_ADMIN_COST = "monthly_admin_cost"
    VACANCY_RATE = "vacancy_rate"
    APPRECIATION_RATE = "appreciation_rate"

    @property
    def wire_key(self) -> str:
        return _WIRE_KEYS[self]

    @property
    def is_percent(self) -> bool:
        """Stored as a fraction, shown to the user as a percentage."""
        return self in (ScenarioField.VACANCY_RATE, ScenarioField.APPRECIATION_RATE)

    @property
    def is_integer(self) -> bool:
        return self is ScenarioField.TERM_YEARS

    def to_display(self, stored: float) -> float:
        return stored * 100.0 if self.is_percent else stored

    def to_stored(self, displayed: float) -> float:
        return displayed / 100.0 if self.is_percent else displayed

    @classmethod
    def coerce(cls, name: "ScenarioField | str") -> "ScenarioField":
        """
        Accept an enum member, an attribute name or a wire key.
        Unknown names raise ValueError.
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        try:
            return cls(key)
        except ValueError:
            pass
        for member, wire in _WIRE_KEYS.items():
            if wire == key:
                return member
        raise ValueError(f"unknown scenario field: {name!r}")


_WIRE_KEYS: dict[ScenarioField, str] = {
    ScenarioField.PURCHASE_PRICE: "precio_propiedad",
    ScenarioField.DOWN_PAYMENT: "pie",
    ScenarioField.ANNUAL_RATE: "tasa_anual",
    ScenarioField.TERM_YEARS: "plazo_anos",
    ScenarioField.MONTHLY_RENT: "arriendo_mensual",
    ScenarioField.MONTHLY_ADMIN_COST: "gastos_admin",
    ScenarioField.VACANCY_RATE: "vacancia",
    ScenarioField.APPRECIATION_RATE: "tasa_plusvalia",
}


def _new_scenario_id() -> str:
    return uuid4().hex


class PropertyScenario(BaseModel):
    """
    One investment candidate.

    Rates follow two conventions: `annual_rate` is a plain percentage
    (5 means 5%), while `vacancy_rate` and `appreciation_rate` are fractions
    (0.05 means 5%).
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    scenario_id: str = Field(default_factory=_new_scenario_id, exclude=True)

    purchase_price: float = Field(..., alias="precio_propiedad", allow_inf_nan=False)
    down_payment: float = Field(..., alias="pie", allow_inf_nan=False)
    annual_rate: float = Field(..., alias="tasa_anual", allow_inf_nan=False, description="5 means 5%")
    term_years: int = Field(..., alias="plazo_anos", description="Loan term in years")
    monthly_rent: float = Field(..., alias="arriendo_mensual", allow_inf_nan=False)
    monthly_admin_cost: float = Field(..., alias="gastos_admin", allow_inf_nan=False)
    vacancy_rate: float = Field(..., alias="vacancia", allow_inf_nan=False, description="0.02 means 2%")
    appreciation_rate: float = Field(..., alias="tasa_plusvalia", allow_inf_nan=False, description="0.05 means 5%")

    @classmethod
    def from_defaults(cls, defaults: ScenarioDefaults | None = None) -> "PropertyScenario":
        defaults = defaults or ScenarioDefaults.from_config()
        return cls(**defaults.model_dump())

    def get(self, field: ScenarioField | str) -> float:
        return getattr(self, ScenarioField.coerce(field).value)

    def display_value(self, field: ScenarioField | str) -> float:
        f = ScenarioField.coerce(field)
        return f.to_display(getattr(self, f.value))

    def to_request_payload(self) -> dict[str, Any]:
        """Body for one calculation-service request, keyed by wire names."""
        return self.model_dump(by_alias=True)


def parse_field_value(field: ScenarioField | str, raw: Any) -> float | int:
    """
    Parse a user-entered value for `field` into its stored representation.

    Strings may carry surrounding whitespace, "," thousands separators and a
    trailing "%". Percent fields are entered as percentages and returned as
    fractions. Raises ScenarioParseError for anything that is not a finite
    number (or not a whole number, for the loan term).
    """
    f = ScenarioField.coerce(field)

    if raw is None or isinstance(raw, bool):
        raise ScenarioParseError(f"{f.value}: not a number: {raw!r}")

    if isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if text.endswith("%"):
            text = text[:-1].strip()
        try:
            value = float(text)
        except ValueError as err:
            raise ScenarioParseError(f"{f.value}: not a number: {raw!r}") from err
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError, OverflowError) as err:
            raise ScenarioParseError(f"{f.value}: not a number: {raw!r}") from err

    if not math.isfinite(value):
        raise ScenarioParseError(f"{f.value}: not finite: {raw!r}")

    if f.is_integer:
        if not value.is_integer():
            raise ScenarioParseError(f"{f.value}: must be a whole number: {raw!r}")
        return int(value)

    return f.to_stored(value)
