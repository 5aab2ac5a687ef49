"""
Service settings.

Values are read from the environment (prefix ``DCF_``) or a local ``.env``
file; the engine fallbacks are handed to ``dcf_engine`` as a ``DCFDefaults``
instance rather than patched into module state.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dcf_engine import (
    DEFAULT_BASE_REVENUE,
    DEFAULT_MARKET_PRICE,
    DEFAULT_PERIOD_YEARS,
    DEFAULT_SHARES_OUTSTANDING,
    MAX_PERIOD_YEARS,
    TERMINAL_DENOMINATOR_FLOOR,
    DCFDefaults,
)


class Settings(BaseSettings):
    app_title: str = "DCF Valuation API"
    app_version: str = "0.1.0"

    default_base_revenue: float = DEFAULT_BASE_REVENUE
    default_shares_outstanding: float = DEFAULT_SHARES_OUTSTANDING
    default_market_price: float = DEFAULT_MARKET_PRICE
    default_period_years: int = Field(DEFAULT_PERIOD_YEARS, ge=1, le=MAX_PERIOD_YEARS)
    terminal_denominator_floor: float = Field(TERMINAL_DENOMINATOR_FLOOR, gt=0)

    default_source: str = "mock"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="DCF_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def engine_defaults(self) -> DCFDefaults:
        return DCFDefaults(
            base_revenue=self.default_base_revenue,
            shares_outstanding=self.default_shares_outstanding,
            market_price=self.default_market_price,
            period_years=self.default_period_years,
            terminal_denominator_floor=self.terminal_denominator_floor,
        )


def get_settings() -> Settings:
    """Fresh settings instance so environment changes are picked up."""
    return Settings()
