from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import get_settings
from .errors import AssetNotFound, RegisterError
from .logging_config import setup_logging
from .models.asset import AssetRecord
from .models.categories import apply_category, list_categories
from .models.common import ApplicableLaw
from .models.results import DashboardSummary, DepreciationReport, DisposalReport, ReconciliationReport
from .schemas import (
    AssetCreateRequest,
    AssetCreateResponse,
    AssetListResponse,
    CategoryListResponse,
    ScheduleRequest,
    ScheduleResponse,
)
from .services.calculator import DepreciationCalculator
from .services.fiscal import period_year
from .services import reports

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")

ASSETS: Dict[str, AssetRecord] = {}
register_settings = settings.register_settings()
calculator = DepreciationCalculator(register_settings)

LAW_SLUGS = {"companies-act": ApplicableLaw.COMPANIES_ACT, "it-act": ApplicableLaw.IT_ACT}


@app.exception_handler(RegisterError)
def register_error_handler(request: Request, exc: RegisterError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def _get_asset(asset_id: str) -> AssetRecord:
    asset = ASSETS.get(asset_id)
    if asset is None:
        raise AssetNotFound(asset_id)
    return asset


def _law_from_slug(slug: str) -> ApplicableLaw:
    law = LAW_SLUGS.get(slug)
    if law is None:
        raise HTTPException(status_code=404, detail=f"Unknown law {slug}")
    return law


@app.post("/assets", response_model=AssetCreateResponse)
def create_asset(payload: AssetCreateRequest) -> AssetCreateResponse:
    asset = apply_category(payload.asset, payload.companies_act_category, payload.it_act_category)
    ASSETS[asset.id] = asset
    logger.info("Registered asset %s (%s)", asset.id, asset.name)
    return AssetCreateResponse(asset_id=asset.id)


@app.get("/assets", response_model=AssetListResponse)
def list_assets() -> AssetListResponse:
    return AssetListResponse(assets=list(ASSETS.values()))


@app.get("/assets/{asset_id}", response_model=AssetRecord)
def get_asset(asset_id: str) -> AssetRecord:
    return _get_asset(asset_id)


@app.delete("/assets/{asset_id}")
def delete_asset(asset_id: str) -> Dict[str, str]:
    _get_asset(asset_id)
    del ASSETS[asset_id]
    logger.info("Removed asset %s", asset_id)
    return {"status": "deleted"}


@app.get("/assets/{asset_id}/schedules", response_model=ScheduleResponse)
def get_asset_schedules(asset_id: str) -> ScheduleResponse:
    asset = _get_asset(asset_id)
    return ScheduleResponse(asset_id=asset.id, schedules=calculator.run(asset))


@app.get("/assets/{asset_id}/schedules/{law_slug}.csv", response_class=PlainTextResponse)
def export_asset_schedule(asset_id: str, law_slug: str) -> PlainTextResponse:
    asset = _get_asset(asset_id)
    law = _law_from_slug(law_slug)
    schedule = next((s for s in calculator.run(asset) if s.law == law), None)
    if schedule is None:
        raise HTTPException(status_code=404, detail=f"No {law.value} schedule for asset {asset_id}")
    return PlainTextResponse(reports.schedule_csv(schedule), media_type="text/csv")


@app.post("/schedules", response_model=ScheduleResponse)
def compute_schedules(payload: ScheduleRequest) -> ScheduleResponse:
    return ScheduleResponse(asset_id=payload.asset.id, schedules=calculator.run(payload.asset))


@app.get("/schedules/{law_slug}.csv", response_class=PlainTextResponse)
def export_schedules(law_slug: str) -> PlainTextResponse:
    law = _law_from_slug(law_slug)
    items = []
    for asset in ASSETS.values():
        schedule = next((s for s in calculator.run(asset) if s.law == law), None)
        if schedule is not None:
            items.append((asset, schedule))
    return PlainTextResponse(reports.schedules_csv(items, law, date.today()), media_type="text/csv")


@app.get("/reports/reconciliation", response_model=ReconciliationReport)
def get_reconciliation(department: Optional[str] = None, location: Optional[str] = None) -> ReconciliationReport:
    return reports.reconciliation_report(ASSETS.values(), register_settings, department=department, location=location)


@app.get("/reports/reconciliation.csv", response_class=PlainTextResponse)
def export_reconciliation(department: Optional[str] = None, location: Optional[str] = None) -> PlainTextResponse:
    report = get_reconciliation(department=department, location=location)
    return PlainTextResponse(reports.reconciliation_csv(report), media_type="text/csv")


@app.get("/reports/disposals", response_model=DisposalReport)
def get_disposals(date_from: Optional[date] = None, date_to: Optional[date] = None) -> DisposalReport:
    return reports.disposal_report(ASSETS.values(), register_settings, date_from=date_from, date_to=date_to)


@app.get("/reports/disposals.csv", response_class=PlainTextResponse)
def export_disposals(date_from: Optional[date] = None, date_to: Optional[date] = None) -> PlainTextResponse:
    report = get_disposals(date_from=date_from, date_to=date_to)
    return PlainTextResponse(reports.disposal_csv(report), media_type="text/csv")


@app.get("/reports/depreciation", response_model=DepreciationReport)
def get_depreciation_report(law: str = "companies-act", year: Optional[int] = None) -> DepreciationReport:
    if year is None:
        year = period_year(date.today(), register_settings)
    return reports.depreciation_report(ASSETS.values(), _law_from_slug(law), year, register_settings)


@app.get("/reports/depreciation.csv", response_class=PlainTextResponse)
def export_depreciation_report(law: str = "companies-act", year: Optional[int] = None) -> PlainTextResponse:
    report = get_depreciation_report(law=law, year=year)
    return PlainTextResponse(reports.depreciation_report_csv(report), media_type="text/csv")


@app.get("/reports/summary", response_model=DashboardSummary)
def get_summary(year: Optional[int] = None) -> DashboardSummary:
    return reports.dashboard_summary(ASSETS.values(), register_settings, year=year)


@app.get("/reports/register.csv", response_class=PlainTextResponse)
def export_register() -> PlainTextResponse:
    return PlainTextResponse(reports.fixed_asset_register_csv(ASSETS.values()), media_type="text/csv")


@app.get("/categories", response_model=CategoryListResponse)
def get_categories(law: Optional[str] = None) -> CategoryListResponse:
    selected = _law_from_slug(law) if law else None
    return CategoryListResponse(categories=list_categories(selected))


@app.get("/health")
def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}
