from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .models.asset import AssetRecord
from .models.categories import AssetCategory
from .models.results import DepreciationSchedule


class AssetCreateRequest(BaseModel):
    asset: AssetRecord
    companies_act_category: Optional[str] = Field(default=None, description="Schedule II category to take life and method from")
    it_act_category: Optional[str] = Field(default=None, description="IT Act block to take the rate from")


class AssetCreateResponse(BaseModel):
    asset_id: str


class AssetListResponse(BaseModel):
    assets: List[AssetRecord]


class ScheduleRequest(BaseModel):
    asset: AssetRecord


class ScheduleResponse(BaseModel):
    asset_id: str
    schedules: List[DepreciationSchedule]


class CategoryListResponse(BaseModel):
    categories: List[AssetCategory]
