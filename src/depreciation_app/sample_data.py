from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List

from .models.asset import AssetRecord
from .models.common import ApplicableLaw, AssetStatus, DepreciationMethod


def build_sample_assets() -> List[AssetRecord]:
    laptop = AssetRecord(
        id="laptop-001",
        name="Engineering Laptop",
        category_name="Computers / Servers",
        location="Bengaluru",
        department="Engineering",
        serial_number="LT-2291",
        purchase_date=date(2023, 10, 15),
        purchase_value=Decimal("150000"),
        used_for=["Both"],
        useful_life_years=3,
        residual_value_percent=Decimal("5"),
        depreciation_method=DepreciationMethod.WDV,
        depreciation_rate_percent=Decimal("40"),
    )

    press = AssetRecord(
        id="press-001",
        name="Hydraulic Press",
        category_name="Plant & Machinery (General)",
        location="Pune",
        department="Production",
        serial_number="HP-88",
        purchase_date=date(2022, 4, 1),
        capitalization_date=date(2022, 6, 1),
        purchase_value=Decimal("2500000"),
        used_for=[ApplicableLaw.COMPANIES_ACT, ApplicableLaw.IT_ACT],
        useful_life_years=15,
        depreciation_method=DepreciationMethod.SLM,
        depreciation_rate_percent=Decimal("15"),
        multi_shift_use=2,
        additional_depreciation_eligible=True,
    )

    furniture = AssetRecord(
        id="furniture-001",
        name="Boardroom Furniture",
        category_name="Furniture & Fixtures",
        location="Mumbai",
        department="Administration",
        purchase_date=date(2020, 1, 10),
        purchase_value=Decimal("400000"),
        used_for=[ApplicableLaw.COMPANIES_ACT],
        useful_life_years=10,
        depreciation_method=DepreciationMethod.SLM,
        status=AssetStatus.DISPOSED,
        disposal_date=date(2024, 3, 31),
        disposal_value=Decimal("180000"),
    )

    return [laptop, press, furniture]
