from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional, Set
from uuid import uuid4

from pydantic import BaseModel, Field, condecimal, conint, field_validator, model_validator

from .common import ApplicableLaw, AssetStatus, DepreciationMethod


class CompaniesActInput(BaseModel):
    """Fields the Companies Act calculator reads. Not range-checked."""

    original_cost: Decimal
    useful_life_years: int
    residual_value_percent: Decimal = Decimal("5")
    capitalization_date: date
    depreciation_method: DepreciationMethod = DepreciationMethod.SLM
    multi_shift_use: int = 1
    rate_percent: Optional[Decimal] = Field(default=None, description="Statutory WDV rate used instead of the life-derived rate")


class IncomeTaxActInput(BaseModel):
    """Fields the Income Tax Act calculator reads. Not range-checked."""

    original_cost: Decimal
    depreciation_rate_percent: Decimal
    capitalization_date: date
    additional_depreciation_eligible: bool = False
    max_years: Optional[int] = None


class AssetRecord(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    category_name: str = ""
    location: str = ""
    department: str = ""
    serial_number: str = ""
    purchase_date: date
    capitalization_date: Optional[date] = None
    purchase_value: condecimal(gt=0)
    used_for: List[ApplicableLaw] = Field(default_factory=lambda: [ApplicableLaw.COMPANIES_ACT])
    useful_life_years: Optional[conint(gt=0)] = None
    residual_value_percent: Optional[condecimal(ge=0, le=100)] = None
    depreciation_method: DepreciationMethod = DepreciationMethod.SLM
    depreciation_rate_percent: Optional[condecimal(gt=0, le=100)] = None
    companies_act_rate_percent: Optional[condecimal(gt=0, le=100)] = None
    multi_shift_use: conint(ge=1, le=3) = 1
    additional_depreciation_eligible: bool = False
    status: AssetStatus = AssetStatus.ACTIVE
    disposal_date: Optional[date] = None
    disposal_value: Optional[condecimal(ge=0)] = None

    @field_validator("used_for", mode="before")
    @classmethod
    def _expand_both(cls, value):
        if isinstance(value, str):
            value = [value]
        expanded: List[str] = []
        for item in value:
            if item == "Both":
                expanded.extend([ApplicableLaw.COMPANIES_ACT.value, ApplicableLaw.IT_ACT.value])
            elif item in ("Income Tax Act", "IT"):
                expanded.append(ApplicableLaw.IT_ACT.value)
            else:
                expanded.append(item)
        return expanded

    @model_validator(mode="after")
    def _check_dates(self) -> "AssetRecord":
        if self.capitalization_date is None:
            self.capitalization_date = self.purchase_date
        elif self.capitalization_date < self.purchase_date:
            raise ValueError("capitalization_date cannot precede purchase_date")
        if self.status == AssetStatus.DISPOSED:
            if self.disposal_date is None:
                raise ValueError("disposal_date is required for a disposed asset")
            if self.disposal_date < self.capitalization_date:
                raise ValueError("disposal_date cannot precede capitalization_date")
            if self.disposal_value is None:
                self.disposal_value = Decimal("0")
        return self

    @property
    def laws(self) -> Set[ApplicableLaw]:
        return set(self.used_for)

    def residual_percent(self, default: float | Decimal) -> Decimal:
        if self.residual_value_percent is not None:
            return self.residual_value_percent
        return Decimal(str(default))

    def companies_act_input(self, default_residual_percent: float | Decimal) -> CompaniesActInput | None:
        if not self.useful_life_years:
            return None
        return CompaniesActInput(
            original_cost=self.purchase_value,
            useful_life_years=self.useful_life_years,
            residual_value_percent=self.residual_percent(default_residual_percent),
            capitalization_date=self.capitalization_date,
            depreciation_method=self.depreciation_method,
            multi_shift_use=self.multi_shift_use,
            rate_percent=self.companies_act_rate_percent,
        )

    def income_tax_act_input(self) -> IncomeTaxActInput | None:
        if not self.depreciation_rate_percent:
            return None
        return IncomeTaxActInput(
            original_cost=self.purchase_value,
            depreciation_rate_percent=self.depreciation_rate_percent,
            capitalization_date=self.capitalization_date,
            additional_depreciation_eligible=self.additional_depreciation_eligible,
        )
