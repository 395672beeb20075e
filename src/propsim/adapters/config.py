# src/propsim/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # Calculation service
    # -----------------------------
    CALC_SERVICE_URL: str = Field(default="http://127.0.0.1:5000/simular")
    # None leaves requests without a timeout
    CALC_TIMEOUT_S: float | None = Field(default=None)
    DISPATCH_MAX_WORKERS: int = Field(default=8)

    # -----------------------------
    # Portfolio session
    # -----------------------------
    MIN_SCENARIOS: int = Field(default=1)
    PROJECTION_YEARS: int = Field(default=5)

    # Default values for a newly added scenario
    DEFAULT_PURCHASE_PRICE: float = Field(default=100_000.0)
    DEFAULT_DOWN_PAYMENT: float = Field(default=20_000.0)
    DEFAULT_ANNUAL_RATE: float = Field(default=5.0)  # percent, e.g. 5 = 5%
    DEFAULT_TERM_YEARS: int = Field(default=25)
    DEFAULT_MONTHLY_RENT: float = Field(default=500.0)
    DEFAULT_MONTHLY_ADMIN_COST: float = Field(default=50.0)
    DEFAULT_VACANCY_RATE: float = Field(default=0.02)
    DEFAULT_APPRECIATION_RATE: float = Field(default=0.05)

    model_config = SettingsConfigDict(
        env_prefix="PROPSIM_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "DEFAULT_VACANCY_RATE",
        "DEFAULT_APPRECIATION_RATE",
        mode="before",
    )
    @classmethod
    def _to_non_negative_fraction(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("rate must be numeric or percent-like") from err
        if f > 1.0:
            f = f / 100.0
        if f < 0:
            raise ValueError("rate must be non-negative")
        return f

    @field_validator("DISPATCH_MAX_WORKERS", mode="before")
    @classmethod
    def _workers_positive(cls, v: Any) -> Any:
        n = int(v)
        if n < 1:
            raise ValueError("DISPATCH_MAX_WORKERS must be >= 1")
        return n

    @field_validator("MIN_SCENARIOS", "PROJECTION_YEARS", mode="before")
    @classmethod
    def _non_negative_int(cls, v: Any) -> Any:
        n = int(v)
        if n < 0:
            raise ValueError("must be >= 0")
        return n

    @field_validator("CALC_TIMEOUT_S", mode="before")
    @classmethod
    def _timeout_positive(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        f = float(v)
        if f <= 0:
            raise ValueError("CALC_TIMEOUT_S must be > 0")
        return f


config = AppConfig()
