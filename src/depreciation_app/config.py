"""Application configuration loaded from ``ASSET_REGISTER_*`` environment variables or ``.env``."""
from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.common import (
    CurrencySettings,
    DigitGrouping,
    FiscalYearStart,
    ProRataBasis,
    RegisterSettings,
)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ASSET_REGISTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Fixed Asset Register"
    log_level: str = "INFO"

    # Defaults handed to every calculation
    fiscal_year_start_month: int = 4
    fiscal_year_start_day: int = 1
    default_residual_value_percent: float = 5.0
    currency_code: str = "INR"
    currency_symbol: str = "₹"
    digit_grouping: DigitGrouping = DigitGrouping.INDIAN
    display_decimal_places: int = 0
    rounding_places: int = 0
    pro_rata_basis: ProRataBasis = ProRataBasis.MONTHS
    it_act_max_years: int = 20

    def register_settings(self) -> RegisterSettings:
        return RegisterSettings(
            fiscal_year_start=FiscalYearStart(month=self.fiscal_year_start_month, day=self.fiscal_year_start_day),
            default_residual_value_percent=self.default_residual_value_percent,
            currency=CurrencySettings(
                code=self.currency_code,
                symbol=self.currency_symbol,
                grouping=self.digit_grouping,
                decimal_places=self.display_decimal_places,
            ),
            rounding_places=self.rounding_places,
            pro_rata_basis=self.pro_rata_basis,
            it_act_max_years=self.it_act_max_years,
        )


@lru_cache()
def get_settings() -> AppSettings:
    return AppSettings()
