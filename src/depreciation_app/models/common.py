from __future__ import annotations

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field, conint, confloat


class ApplicableLaw(str, Enum):
    COMPANIES_ACT = "Companies Act"
    IT_ACT = "IT Act"


class DepreciationMethod(str, Enum):
    SLM = "SLM"
    WDV = "WDV"


class AssetStatus(str, Enum):
    ACTIVE = "Active"
    DISPOSED = "Disposed"


class ProRataBasis(str, Enum):
    MONTHS = "months"
    DAYS = "days"


class DigitGrouping(str, Enum):
    INDIAN = "indian"
    INTERNATIONAL = "international"


SHIFT_FACTORS: Dict[int, float] = {1: 1.0, 2: 1.5, 3: 2.0}


class FiscalYearStart(BaseModel):
    month: conint(ge=1, le=12) = 4
    day: conint(ge=1, le=31) = 1


class CurrencySettings(BaseModel):
    code: str = Field("INR", description="ISO currency code")
    symbol: str = Field("₹", description="Symbol prefixed to formatted amounts")
    grouping: DigitGrouping = DigitGrouping.INDIAN
    decimal_places: conint(ge=0, le=2) = 0


class RegisterSettings(BaseModel):
    """Preferences shared by every calculation and report.

    Passed explicitly into the engine instead of being read from global state.
    """

    fiscal_year_start: FiscalYearStart = Field(default_factory=FiscalYearStart)
    default_residual_value_percent: confloat(ge=0, le=100) = 5.0
    currency: CurrencySettings = Field(default_factory=CurrencySettings)
    rounding_places: conint(ge=0, le=2) = Field(0, description="Decimal places each year's depreciation is rounded to")
    pro_rata_basis: ProRataBasis = ProRataBasis.MONTHS
    it_act_max_years: conint(ge=1) = 20
    half_year_threshold_days: conint(ge=1) = 180
