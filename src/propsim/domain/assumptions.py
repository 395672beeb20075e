# src/propsim/domain/assumptions.py
from __future__ import annotations

from pydantic import BaseModel

from propsim.adapters.config import AppConfig, config


class ScenarioDefaults(BaseModel):
    """Field values a freshly added scenario starts from; see from_config."""

    purchase_price: float
    down_payment: float
    annual_rate: float
    term_years: int
    monthly_rent: float
    monthly_admin_cost: float
    vacancy_rate: float
    appreciation_rate: float

    @classmethod
    def from_config(cls, cfg: AppConfig | None = None) -> "ScenarioDefaults":
        cfg = cfg or config
        return cls(
            purchase_price=cfg.DEFAULT_PURCHASE_PRICE,
            down_payment=cfg.DEFAULT_DOWN_PAYMENT,
            annual_rate=cfg.DEFAULT_ANNUAL_RATE,
            term_years=cfg.DEFAULT_TERM_YEARS,
            monthly_rent=cfg.DEFAULT_MONTHLY_RENT,
            monthly_admin_cost=cfg.DEFAULT_MONTHLY_ADMIN_COST,
            vacancy_rate=cfg.DEFAULT_VACANCY_RATE,
            appreciation_rate=cfg.DEFAULT_APPRECIATION_RATE,
        )
