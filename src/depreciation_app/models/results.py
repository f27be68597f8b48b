from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import ApplicableLaw, DepreciationMethod


class DepreciationEntry(BaseModel):
    year: int
    label: str
    opening_value: Decimal
    depreciation: Decimal
    additional_depreciation: Decimal = Decimal("0")
    closing_value: Decimal
    accumulated_depreciation: Decimal
    is_pro_rata: bool = False

    @property
    def total_depreciation(self) -> Decimal:
        return self.depreciation + self.additional_depreciation


class DepreciationSchedule(BaseModel):
    law: ApplicableLaw
    method: DepreciationMethod
    rate_percent: Optional[Decimal] = None
    entries: List[DepreciationEntry] = Field(default_factory=list)
    total_depreciation: Decimal = Decimal("0")
    current_wdv: Decimal

    def entry_for_year(self, year: int) -> DepreciationEntry | None:
        return next((entry for entry in self.entries if entry.year == year), None)


class ReconciliationRow(BaseModel):
    asset_id: str
    asset_name: str
    category_name: str
    purchase_value: Decimal
    companies_act_wdv: Decimal
    it_act_wdv: Decimal
    wdv_difference: Decimal
    companies_act_depreciation: Decimal
    it_act_depreciation: Decimal
    depreciation_difference: Decimal
    department: str = ""
    location: str = ""


class ReconciliationReport(BaseModel):
    rows: List[ReconciliationRow]
    totals: ReconciliationRow


class DisposalRow(BaseModel):
    asset_id: str
    asset_name: str
    disposal_date: str
    purchase_value: Decimal
    wdv_at_disposal: Decimal
    disposal_value: Decimal
    gain_loss: Decimal


class DisposalReport(BaseModel):
    rows: List[DisposalRow]
    total_purchase_value: Decimal = Decimal("0")
    total_wdv_at_disposal: Decimal = Decimal("0")
    total_disposal_value: Decimal = Decimal("0")
    total_gain_loss: Decimal = Decimal("0")


class DepreciationReportRow(BaseModel):
    asset_id: str
    asset_name: str
    category_name: str
    purchase_value: Decimal
    method_or_rate: str
    useful_life_years: Optional[int] = None
    current_year_depreciation: Decimal
    accumulated_depreciation: Decimal
    current_wdv: Decimal


class DepreciationReport(BaseModel):
    law: ApplicableLaw
    year: int
    rows: List[DepreciationReportRow]


class DashboardSummary(BaseModel):
    """Register-wide totals as at one period year.

    Per-law figures cover active assets only; counts and purchase value cover
    the whole register.
    """

    year: int
    total_assets: int
    active_assets: int
    disposed_assets: int
    total_purchase_value: Decimal
    companies_act_assets: int
    it_act_assets: int
    companies_act_current_year_depreciation: Decimal
    it_act_current_year_depreciation: Decimal
    total_current_year_depreciation: Decimal
    companies_act_accumulated_depreciation: Decimal
    it_act_accumulated_depreciation: Decimal
    companies_act_wdv: Decimal
    it_act_wdv: Decimal
