from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from depreciation_app.models.common import FiscalYearStart, ProRataBasis, RegisterSettings
from depreciation_app.services.fiscal import (
    days_in_fiscal_year,
    days_used_in_first_year,
    financial_year_label,
    first_year_fraction,
    fiscal_year_bounds,
    is_half_year,
    months_fraction,
    period_label,
    period_year,
)

APRIL = FiscalYearStart()


def test_fiscal_year_bounds_roll_back_before_start():
    assert fiscal_year_bounds(date(2024, 3, 31), APRIL) == (date(2023, 4, 1), date(2024, 4, 1))
    assert fiscal_year_bounds(date(2024, 4, 1), APRIL) == (date(2024, 4, 1), date(2025, 4, 1))


def test_fiscal_year_start_is_clamped_to_month_end():
    start = FiscalYearStart(month=2, day=30)
    assert fiscal_year_bounds(date(2023, 5, 1), start) == (date(2023, 2, 28), date(2024, 2, 29))


@pytest.mark.parametrize(
    "purchased, year_number, label",
    [
        (date(2024, 2, 10), 1, "FY 2023-2024"),
        (date(2024, 2, 10), 3, "FY 2025-2026"),
        (date(2024, 4, 1), 1, "FY 2024-2025"),
        (date(2024, 12, 31), 2, "FY 2025-2026"),
    ],
)
def test_financial_year_label(purchased, year_number, label):
    assert financial_year_label(purchased, year_number, APRIL) == label


def test_financial_year_label_with_calendar_start():
    assert financial_year_label(date(2024, 5, 1), 1, FiscalYearStart(month=1, day=1)) == "FY 2024-2025"


def test_days_in_fiscal_year_counts_leap_days():
    assert days_in_fiscal_year(date(2023, 6, 1), APRIL) == 366
    assert days_in_fiscal_year(date(2024, 6, 1), APRIL) == 365


def test_days_used_include_capitalisation_day():
    assert days_used_in_first_year(date(2025, 3, 31), APRIL) == 1
    assert days_used_in_first_year(date(2024, 4, 1), APRIL) == 365
    assert days_used_in_first_year(date(2024, 10, 1), APRIL) == 182


def test_months_fraction():
    assert months_fraction(date(2024, 1, 20)) == 1
    assert months_fraction(date(2024, 10, 1)) == Decimal("0.25")
    assert months_fraction(date(2024, 12, 31)) == Decimal(1) / Decimal(12)


def test_first_year_fraction_follows_basis():
    days = RegisterSettings(pro_rata_basis=ProRataBasis.DAYS)
    assert first_year_fraction(date(2024, 10, 1), RegisterSettings()) == Decimal("0.25")
    assert first_year_fraction(date(2024, 10, 1), days) == Decimal(182) / Decimal(365)
    assert first_year_fraction(date(2024, 4, 1), days) == 1


def test_half_year_detection():
    months = RegisterSettings()
    days = RegisterSettings(pro_rata_basis=ProRataBasis.DAYS)
    assert is_half_year(date(2024, 10, 1), months)
    assert not is_half_year(date(2024, 9, 30), months)
    assert not is_half_year(date(2024, 10, 1), days)
    assert is_half_year(date(2024, 10, 4), days)


def test_period_year_and_label():
    days = RegisterSettings(pro_rata_basis=ProRataBasis.DAYS)
    assert period_year(date(2024, 2, 1), RegisterSettings()) == 2024
    assert period_year(date(2024, 2, 1), days) == 2023
    assert period_label(date(2024, 2, 1), 1, RegisterSettings()) == (2025, "2025")
    assert period_label(date(2024, 2, 1), 1, days) == (2024, "FY 2024-2025")
