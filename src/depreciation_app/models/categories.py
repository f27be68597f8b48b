from __future__ import annotations

from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel

from ..errors import UnknownCategory
from .asset import AssetRecord
from .common import ApplicableLaw, DepreciationMethod


class AssetCategory(BaseModel):
    name: str
    law: ApplicableLaw
    useful_life_years: int
    rate_percent: Decimal
    method: DepreciationMethod


def _category(law: ApplicableLaw, name: str, life: int, rate: str, method: DepreciationMethod) -> AssetCategory:
    return AssetCategory(name=name, law=law, useful_life_years=life, rate_percent=Decimal(rate), method=method)


# Schedule II useful lives
COMPANIES_ACT_CATEGORIES: Dict[str, AssetCategory] = {
    c.name: c
    for c in [
        _category(ApplicableLaw.COMPANIES_ACT, "Buildings (Factory)", 30, "3.17", DepreciationMethod.SLM),
        _category(ApplicableLaw.COMPANIES_ACT, "Buildings (Other)", 60, "1.58", DepreciationMethod.SLM),
        _category(ApplicableLaw.COMPANIES_ACT, "Plant & Machinery (General)", 15, "10", DepreciationMethod.WDV),
        _category(ApplicableLaw.COMPANIES_ACT, "Computers / Servers", 3, "31.67", DepreciationMethod.WDV),
        _category(ApplicableLaw.COMPANIES_ACT, "Furniture & Fixtures", 10, "9.5", DepreciationMethod.WDV),
        _category(ApplicableLaw.COMPANIES_ACT, "Motor Vehicles", 8, "11.88", DepreciationMethod.WDV),
        _category(ApplicableLaw.COMPANIES_ACT, "Office Equipment", 5, "19", DepreciationMethod.WDV),
    ]
}

# Income Tax Act blocks of assets
IT_ACT_CATEGORIES: Dict[str, AssetCategory] = {
    c.name: c
    for c in [
        _category(ApplicableLaw.IT_ACT, "Buildings (Residential)", 20, "5", DepreciationMethod.WDV),
        _category(ApplicableLaw.IT_ACT, "Buildings (Commercial)", 10, "10", DepreciationMethod.WDV),
        _category(ApplicableLaw.IT_ACT, "Furniture & Fittings", 10, "10", DepreciationMethod.WDV),
        _category(ApplicableLaw.IT_ACT, "Plant & Machinery (General)", 7, "15", DepreciationMethod.WDV),
        _category(ApplicableLaw.IT_ACT, "Motor Cars (non-commercial)", 7, "15", DepreciationMethod.WDV),
        _category(ApplicableLaw.IT_ACT, "Computers & Software", 3, "40", DepreciationMethod.WDV),
        _category(ApplicableLaw.IT_ACT, "Books (Professionals)", 2, "60", DepreciationMethod.WDV),
    ]
}


def list_categories(law: ApplicableLaw | None = None) -> List[AssetCategory]:
    if law == ApplicableLaw.COMPANIES_ACT:
        return list(COMPANIES_ACT_CATEGORIES.values())
    if law == ApplicableLaw.IT_ACT:
        return list(IT_ACT_CATEGORIES.values())
    return list(COMPANIES_ACT_CATEGORIES.values()) + list(IT_ACT_CATEGORIES.values())


def get_category(law: ApplicableLaw, name: str) -> AssetCategory:
    table = COMPANIES_ACT_CATEGORIES if law == ApplicableLaw.COMPANIES_ACT else IT_ACT_CATEGORIES
    try:
        return table[name]
    except KeyError:
        raise UnknownCategory(law.value, name) from None


def apply_category(
    asset: AssetRecord,
    companies_act_category: str | None = None,
    it_act_category: str | None = None,
) -> AssetRecord:
    """Fill life, method and rates the asset leaves blank from the master tables."""
    update: Dict[str, object] = {}
    if companies_act_category:
        category = get_category(ApplicableLaw.COMPANIES_ACT, companies_act_category)
        if asset.useful_life_years is None:
            update["useful_life_years"] = category.useful_life_years
            update["depreciation_method"] = category.method
            if category.method == DepreciationMethod.WDV and asset.companies_act_rate_percent is None:
                update["companies_act_rate_percent"] = category.rate_percent
        update.setdefault("category_name", asset.category_name or category.name)
    if it_act_category:
        category = get_category(ApplicableLaw.IT_ACT, it_act_category)
        if asset.depreciation_rate_percent is None:
            update["depreciation_rate_percent"] = category.rate_percent
        update.setdefault("category_name", asset.category_name or category.name)
    if not update:
        return asset
    return asset.model_copy(update=update)
