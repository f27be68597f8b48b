"""Registers and reports built from computed schedules.

Schedules always run the asset's full life; disposal is handled here by
clipping entries after the disposal period.
"""
from __future__ import annotations

import csv
import io
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from ..models.asset import AssetRecord
from ..models.common import ApplicableLaw, AssetStatus, RegisterSettings
from ..models.results import (
    DashboardSummary,
    DepreciationReport,
    DepreciationReportRow,
    DepreciationSchedule,
    DisposalReport,
    DisposalRow,
    ReconciliationReport,
    ReconciliationRow,
)
from .calculator import DepreciationCalculator
from .fiscal import period_year
from .formatting import csv_amount

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

COMPANIES_ACT_COLUMNS = ["Year", "Opening Value", "Depreciation", "Closing Value"]
IT_ACT_COLUMNS = ["Year", "Opening Value", "Depreciation", "Additional Depreciation", "Closing Value"]


def _write(rows: Iterable[Sequence[object]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def schedule_csv(schedule: DepreciationSchedule, decimal_places: int = 2) -> str:
    """CSV for one schedule followed by the total and current WDV summary lines."""
    is_it_act = schedule.law == ApplicableLaw.IT_ACT
    rows: List[List[str]] = [IT_ACT_COLUMNS if is_it_act else COMPANIES_ACT_COLUMNS]
    for entry in schedule.entries:
        row = [entry.label, csv_amount(entry.opening_value, decimal_places), csv_amount(entry.depreciation, decimal_places)]
        if is_it_act:
            row.append(csv_amount(entry.additional_depreciation, decimal_places))
        row.append(csv_amount(entry.closing_value, decimal_places))
        rows.append(row)
    rows.append(["Total Depreciation", csv_amount(schedule.total_depreciation, decimal_places)])
    rows.append(["Current WDV", csv_amount(schedule.current_wdv, decimal_places)])
    return _write(rows)


def schedules_csv(
    items: Sequence[Tuple[AssetRecord, DepreciationSchedule]],
    law: ApplicableLaw,
    generated_on: date,
    decimal_places: int = 2,
) -> str:
    rows: List[List[str]] = [
        [f"Depreciation Schedule - {law.value}"],
        [f"Generated on: {generated_on.isoformat()}"],
        [],
        ["Asset Name", "Year", "Opening Value", "Depreciation", "Additional Depreciation", "Closing Value", "Method"],
    ]
    for asset, schedule in items:
        method = schedule.method.value if law == ApplicableLaw.COMPANIES_ACT else f"WDV {schedule.rate_percent}%"
        for entry in schedule.entries:
            rows.append(
                [
                    asset.name,
                    entry.label,
                    csv_amount(entry.opening_value, decimal_places),
                    csv_amount(entry.depreciation, decimal_places),
                    csv_amount(entry.additional_depreciation, decimal_places),
                    csv_amount(entry.closing_value, decimal_places),
                    method,
                ]
            )
    return _write(rows)


def fixed_asset_register_csv(assets: Iterable[AssetRecord], decimal_places: int = 2) -> str:
    rows: List[List[str]] = [
        ["Asset Name", "Purchase Date", "Purchase Value", "Location", "Department", "Category", "Status", "Serial/Tag No."]
    ]
    for asset in assets:
        rows.append(
            [
                asset.name,
                asset.purchase_date.isoformat(),
                csv_amount(asset.purchase_value, decimal_places),
                asset.location,
                asset.department,
                asset.category_name,
                asset.status.value,
                asset.serial_number,
            ]
        )
    return _write(rows)


def clip_to_disposal(schedule: DepreciationSchedule, disposal_date: date, settings: Optional[RegisterSettings] = None) -> DepreciationSchedule:
    """Drop entries for periods after the one holding ``disposal_date``."""
    settings = settings or RegisterSettings()
    last_year = period_year(disposal_date, settings)
    entries = [entry for entry in schedule.entries if entry.year <= last_year]
    if len(entries) == len(schedule.entries):
        return schedule
    if entries:
        current_wdv = entries[-1].closing_value
    elif schedule.entries:
        current_wdv = schedule.entries[0].opening_value
    else:
        current_wdv = schedule.current_wdv
    return schedule.model_copy(
        update={
            "entries": entries,
            "total_depreciation": sum((entry.total_depreciation for entry in entries), ZERO),
            "current_wdv": current_wdv,
        }
    )


def _schedule_for(schedules: List[DepreciationSchedule], law: ApplicableLaw) -> DepreciationSchedule | None:
    return next((schedule for schedule in schedules if schedule.law == law), None)


def reconciliation_report(
    assets: Iterable[AssetRecord],
    settings: Optional[RegisterSettings] = None,
    department: Optional[str] = None,
    location: Optional[str] = None,
) -> ReconciliationReport:
    """Compare book (Companies Act) and tax (IT Act) values for assets tracked under both laws."""
    calculator = DepreciationCalculator(settings)
    rows: List[ReconciliationRow] = []
    for asset in assets:
        if not {ApplicableLaw.COMPANIES_ACT, ApplicableLaw.IT_ACT} <= asset.laws:
            continue
        if department and asset.department != department:
            continue
        if location and asset.location != location:
            continue
        schedules = calculator.run(asset)
        companies = _schedule_for(schedules, ApplicableLaw.COMPANIES_ACT)
        it_act = _schedule_for(schedules, ApplicableLaw.IT_ACT)
        companies_wdv = companies.current_wdv if companies else ZERO
        it_wdv = it_act.current_wdv if it_act else ZERO
        companies_dep = companies.total_depreciation if companies else ZERO
        it_dep = it_act.total_depreciation if it_act else ZERO
        rows.append(
            ReconciliationRow(
                asset_id=asset.id,
                asset_name=asset.name,
                category_name=asset.category_name,
                purchase_value=asset.purchase_value,
                companies_act_wdv=companies_wdv,
                it_act_wdv=it_wdv,
                wdv_difference=companies_wdv - it_wdv,
                companies_act_depreciation=companies_dep,
                it_act_depreciation=it_dep,
                depreciation_difference=companies_dep - it_dep,
                department=asset.department,
                location=asset.location,
            )
        )

    totals = ReconciliationRow(
        asset_id="",
        asset_name="Total",
        category_name="",
        purchase_value=sum((row.purchase_value for row in rows), ZERO),
        companies_act_wdv=sum((row.companies_act_wdv for row in rows), ZERO),
        it_act_wdv=sum((row.it_act_wdv for row in rows), ZERO),
        wdv_difference=sum((row.wdv_difference for row in rows), ZERO),
        companies_act_depreciation=sum((row.companies_act_depreciation for row in rows), ZERO),
        it_act_depreciation=sum((row.it_act_depreciation for row in rows), ZERO),
        depreciation_difference=sum((row.depreciation_difference for row in rows), ZERO),
    )
    return ReconciliationReport(rows=rows, totals=totals)


def reconciliation_csv(report: ReconciliationReport, decimal_places: int = 2) -> str:
    rows: List[List[str]] = [
        [
            "Asset Name",
            "Category",
            "Purchase Value",
            "Companies Act WDV",
            "IT Act WDV",
            "WDV Difference",
            "Companies Act Depreciation",
            "IT Act Depreciation",
            "Depreciation Difference",
            "Department",
            "Location",
        ]
    ]
    for row in report.rows + [report.totals]:
        rows.append(
            [
                row.asset_name,
                row.category_name,
                csv_amount(row.purchase_value, decimal_places),
                csv_amount(row.companies_act_wdv, decimal_places),
                csv_amount(row.it_act_wdv, decimal_places),
                csv_amount(row.wdv_difference, decimal_places),
                csv_amount(row.companies_act_depreciation, decimal_places),
                csv_amount(row.it_act_depreciation, decimal_places),
                csv_amount(row.depreciation_difference, decimal_places),
                row.department,
                row.location,
            ]
        )
    return _write(rows)


def wdv_at_disposal(asset: AssetRecord, schedule: DepreciationSchedule | None, settings: RegisterSettings) -> Decimal:
    """Closing value of the disposal period, or the purchase value if nothing was charged by then."""
    if schedule is None or asset.disposal_date is None:
        return asset.purchase_value
    clipped = clip_to_disposal(schedule, asset.disposal_date, settings)
    if not clipped.entries:
        return asset.purchase_value
    return clipped.entries[-1].closing_value


def disposal_report(
    assets: Iterable[AssetRecord],
    settings: Optional[RegisterSettings] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> DisposalReport:
    settings = settings or RegisterSettings()
    calculator = DepreciationCalculator(settings)
    rows: List[DisposalRow] = []
    for asset in assets:
        if asset.status != AssetStatus.DISPOSED or asset.disposal_date is None:
            continue
        if date_from and asset.disposal_date < date_from:
            continue
        if date_to and asset.disposal_date > date_to:
            continue
        schedules = calculator.run(asset)
        schedule = _schedule_for(schedules, ApplicableLaw.COMPANIES_ACT) or _schedule_for(schedules, ApplicableLaw.IT_ACT)
        if schedule is None:
            logger.info("No schedule for disposed asset %s, using purchase value as WDV", asset.id)
        wdv = wdv_at_disposal(asset, schedule, settings)
        disposal_value = asset.disposal_value or ZERO
        rows.append(
            DisposalRow(
                asset_id=asset.id,
                asset_name=asset.name,
                disposal_date=asset.disposal_date.isoformat(),
                purchase_value=asset.purchase_value,
                wdv_at_disposal=wdv,
                disposal_value=disposal_value,
                gain_loss=disposal_value - wdv,
            )
        )
    return DisposalReport(
        rows=rows,
        total_purchase_value=sum((row.purchase_value for row in rows), ZERO),
        total_wdv_at_disposal=sum((row.wdv_at_disposal for row in rows), ZERO),
        total_disposal_value=sum((row.disposal_value for row in rows), ZERO),
        total_gain_loss=sum((row.gain_loss for row in rows), ZERO),
    )


def disposal_csv(report: DisposalReport, decimal_places: int = 2) -> str:
    rows: List[List[str]] = [["Asset Name", "Disposal Date", "Purchase Value", "WDV at Disposal", "Disposal Value", "Gain/Loss"]]
    for row in report.rows:
        rows.append(
            [
                row.asset_name,
                row.disposal_date,
                csv_amount(row.purchase_value, decimal_places),
                csv_amount(row.wdv_at_disposal, decimal_places),
                csv_amount(row.disposal_value, decimal_places),
                csv_amount(row.gain_loss, decimal_places),
            ]
        )
    rows.append(
        [
            "Total",
            "",
            csv_amount(report.total_purchase_value, decimal_places),
            csv_amount(report.total_wdv_at_disposal, decimal_places),
            csv_amount(report.total_disposal_value, decimal_places),
            csv_amount(report.total_gain_loss, decimal_places),
        ]
    )
    return _write(rows)


def depreciation_report(
    assets: Iterable[AssetRecord],
    law: ApplicableLaw,
    year: int,
    settings: Optional[RegisterSettings] = None,
) -> DepreciationReport:
    """Per-asset charge for ``year`` with accumulated depreciation and WDV as at that year."""
    calculator = DepreciationCalculator(settings)
    rows: List[DepreciationReportRow] = []
    for asset in assets:
        schedule = _schedule_for(calculator.run(asset), law)
        if schedule is None:
            continue
        to_date = [entry for entry in schedule.entries if entry.year <= year]
        current = schedule.entry_for_year(year)
        if law == ApplicableLaw.COMPANIES_ACT:
            method_or_rate = schedule.method.value
        else:
            method_or_rate = f"{schedule.rate_percent}%"
        rows.append(
            DepreciationReportRow(
                asset_id=asset.id,
                asset_name=asset.name,
                category_name=asset.category_name,
                purchase_value=asset.purchase_value,
                method_or_rate=method_or_rate,
                useful_life_years=asset.useful_life_years,
                current_year_depreciation=current.total_depreciation if current else ZERO,
                accumulated_depreciation=to_date[-1].accumulated_depreciation if to_date else ZERO,
                current_wdv=to_date[-1].closing_value if to_date else asset.purchase_value,
            )
        )
    return DepreciationReport(law=law, year=year, rows=rows)


def depreciation_report_csv(report: DepreciationReport, decimal_places: int = 2) -> str:
    rows: List[List[str]] = [
        [
            "Asset Name",
            "Category",
            "Purchase Value",
            "Method/Rate",
            "Useful Life (Years)",
            "Current Year Depreciation",
            "Accumulated Depreciation",
            "Current WDV",
        ]
    ]
    for row in report.rows:
        rows.append(
            [
                row.asset_name,
                row.category_name,
                csv_amount(row.purchase_value, decimal_places),
                row.method_or_rate,
                str(row.useful_life_years) if row.useful_life_years else "N/A",
                csv_amount(row.current_year_depreciation, decimal_places),
                csv_amount(row.accumulated_depreciation, decimal_places),
                csv_amount(row.current_wdv, decimal_places),
            ]
        )
    return _write(rows)


def dashboard_summary(
    assets: Iterable[AssetRecord],
    settings: Optional[RegisterSettings] = None,
    year: Optional[int] = None,
) -> DashboardSummary:
    """Headline figures for the register as at ``year`` (the current period by default)."""
    settings = settings or RegisterSettings()
    if year is None:
        year = period_year(date.today(), settings)
    calculator = DepreciationCalculator(settings)
    assets = list(assets)
    active = [asset for asset in assets if asset.status == AssetStatus.ACTIVE]

    counts = {ApplicableLaw.COMPANIES_ACT: 0, ApplicableLaw.IT_ACT: 0}
    current = {law: ZERO for law in counts}
    accumulated = {law: ZERO for law in counts}
    wdv = {law: ZERO for law in counts}
    for asset in active:
        schedules = calculator.run(asset)
        for law in counts:
            if law not in asset.laws:
                continue
            counts[law] += 1
            schedule = _schedule_for(schedules, law)
            if schedule is None:
                continue
            entry = schedule.entry_for_year(year)
            to_date = [e for e in schedule.entries if e.year <= year]
            current[law] += entry.total_depreciation if entry else ZERO
            accumulated[law] += to_date[-1].accumulated_depreciation if to_date else ZERO
            wdv[law] += to_date[-1].closing_value if to_date else asset.purchase_value

    return DashboardSummary(
        year=year,
        total_assets=len(assets),
        active_assets=len(active),
        disposed_assets=sum(1 for asset in assets if asset.status == AssetStatus.DISPOSED),
        total_purchase_value=sum((asset.purchase_value for asset in assets), ZERO),
        companies_act_assets=counts[ApplicableLaw.COMPANIES_ACT],
        it_act_assets=counts[ApplicableLaw.IT_ACT],
        companies_act_current_year_depreciation=current[ApplicableLaw.COMPANIES_ACT],
        it_act_current_year_depreciation=current[ApplicableLaw.IT_ACT],
        total_current_year_depreciation=sum(current.values(), ZERO),
        companies_act_accumulated_depreciation=accumulated[ApplicableLaw.COMPANIES_ACT],
        it_act_accumulated_depreciation=accumulated[ApplicableLaw.IT_ACT],
        companies_act_wdv=wdv[ApplicableLaw.COMPANIES_ACT],
        it_act_wdv=wdv[ApplicableLaw.IT_ACT],
    )
