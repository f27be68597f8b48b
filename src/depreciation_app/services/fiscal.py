"""Fiscal-year arithmetic shared by the calculators and reports.

Two period conventions are supported. ``ProRataBasis.MONTHS`` works on calendar
years and counts whole months; ``ProRataBasis.DAYS`` works on fiscal years that
begin on the configured ``FiscalYearStart`` and counts actual days.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Tuple

from dateutil.relativedelta import relativedelta

from ..models.common import FiscalYearStart, ProRataBasis, RegisterSettings


def fiscal_year_bounds(day: date, start: FiscalYearStart) -> Tuple[date, date]:
    """Return ``(first_day, first_day_of_next_year)`` for the fiscal year holding ``day``."""
    # relativedelta(day=...) clamps to the month end, e.g. a 31 Feb start.
    fy_start = date(day.year, start.month, 1) + relativedelta(day=start.day)
    if day < fy_start:
        fy_start = date(day.year - 1, start.month, 1) + relativedelta(day=start.day)
    fy_end = date(fy_start.year + 1, start.month, 1) + relativedelta(day=start.day)
    return fy_start, fy_end


def days_in_fiscal_year(day: date, start: FiscalYearStart) -> int:
    fy_start, fy_end = fiscal_year_bounds(day, start)
    return (fy_end - fy_start).days


def days_used_in_first_year(day: date, start: FiscalYearStart) -> int:
    """Days from ``day`` (inclusive) to the end of its fiscal year."""
    _, fy_end = fiscal_year_bounds(day, start)
    return min(max(0, (fy_end - day).days), days_in_fiscal_year(day, start))


def financial_year_label(purchase_date: date, year_number: int, start: FiscalYearStart) -> str:
    """Label the ``year_number``-th (1-based) fiscal year of an asset's life."""
    fy_start, _ = fiscal_year_bounds(purchase_date, start)
    start_year = fy_start.year + year_number - 1
    return f"FY {start_year}-{start_year + 1}"


def months_fraction(day: date) -> Decimal:
    # the capitalisation month counts as a full month
    return Decimal(13 - day.month) / Decimal(12)


def days_fraction(day: date, start: FiscalYearStart) -> Decimal:
    return Decimal(days_used_in_first_year(day, start)) / Decimal(days_in_fiscal_year(day, start))


def first_year_fraction(day: date, settings: RegisterSettings) -> Decimal:
    if settings.pro_rata_basis == ProRataBasis.DAYS:
        return days_fraction(day, settings.fiscal_year_start)
    return months_fraction(day)


def is_half_year(day: date, settings: RegisterSettings) -> bool:
    """True when the asset is in use for less than the half-year threshold in its first year."""
    if settings.pro_rata_basis == ProRataBasis.DAYS:
        return days_used_in_first_year(day, settings.fiscal_year_start) < settings.half_year_threshold_days
    return day.month >= 10


def period_year(day: date, settings: RegisterSettings) -> int:
    """Year number of the period holding ``day``: calendar year or fiscal start year."""
    if settings.pro_rata_basis == ProRataBasis.DAYS:
        fy_start, _ = fiscal_year_bounds(day, settings.fiscal_year_start)
        return fy_start.year
    return day.year


def period_label(capitalization_date: date, offset: int, settings: RegisterSettings) -> Tuple[int, str]:
    """Year and label of the period ``offset`` years (0-based) after capitalisation."""
    year = period_year(capitalization_date, settings) + offset
    if settings.pro_rata_basis == ProRataBasis.DAYS:
        return year, financial_year_label(capitalization_date, offset + 1, settings.fiscal_year_start)
    return year, str(year)
