from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from ..models.asset import AssetRecord, CompaniesActInput, IncomeTaxActInput
from ..models.common import SHIFT_FACTORS, ApplicableLaw, DepreciationMethod, RegisterSettings
from ..models.results import DepreciationEntry, DepreciationSchedule
from .fiscal import first_year_fraction, is_half_year, period_label
from .formatting import round_amount

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
# IT Act s.32(1)(iia) rates on actual cost
ADDITIONAL_RATE_FULL_YEAR = Decimal("0.20")
ADDITIONAL_RATE_HALF_YEAR = Decimal("0.10")
# IT Act schedules stop once the written down value is at or below this
IT_ACT_TERMINAL_VALUE = Decimal("1")


@dataclass
class ScheduleState:
    opening: Decimal
    accumulated: Decimal = ZERO
    entries: List[DepreciationEntry] = field(default_factory=list)


class DepreciationCalculator:
    def __init__(self, settings: Optional[RegisterSettings] = None) -> None:
        self.settings = settings or RegisterSettings()

    def run(self, asset: AssetRecord) -> List[DepreciationSchedule]:
        """Compute every schedule the asset's ``used_for`` set asks for.

        A law whose required field is missing (useful life for the Companies
        Act, statutory rate for the IT Act) is left out of the result.
        """
        schedules: List[DepreciationSchedule] = []
        if ApplicableLaw.COMPANIES_ACT in asset.laws:
            inputs = asset.companies_act_input(self.settings.default_residual_value_percent)
            if inputs is None:
                logger.debug("Skipping Companies Act schedule for %s: no useful life", asset.id)
            else:
                schedules.append(self.companies_act(inputs))
        if ApplicableLaw.IT_ACT in asset.laws:
            inputs = asset.income_tax_act_input()
            if inputs is None:
                logger.debug("Skipping IT Act schedule for %s: no depreciation rate", asset.id)
            else:
                schedules.append(self.income_tax_act(inputs))
        return schedules

    def companies_act(self, inputs: CompaniesActInput) -> DepreciationSchedule:
        cost = inputs.original_cost
        life = inputs.useful_life_years
        method = inputs.depreciation_method
        if cost <= 0 or life <= 0:
            return self._empty(ApplicableLaw.COMPANIES_ACT, method, cost)

        residual = cost * inputs.residual_value_percent / HUNDRED
        depreciable = cost - residual
        fraction = first_year_fraction(inputs.capitalization_date, self.settings)
        shift_factor = Decimal(str(SHIFT_FACTORS.get(inputs.multi_shift_use, 1.0)))

        rate: Optional[Decimal] = None
        if method == DepreciationMethod.WDV:
            if inputs.rate_percent:
                rate = inputs.rate_percent / HUNDRED
            else:
                rate = Decimal(1) - (residual / cost) ** (Decimal(1) / Decimal(life))

        state = ScheduleState(opening=cost)
        for offset in range(life):
            if method == DepreciationMethod.SLM:
                charge = depreciable / life
            else:
                charge = state.opening * rate
            if offset == 0:
                charge *= fraction
            charge = round_amount(charge * shift_factor, self.settings.rounding_places)

            if state.opening - charge < residual:
                logger.debug("Companies Act charge clamped to residual value in year %d", offset + 1)
            closing = max(state.opening - charge, residual)
            self._append(state, inputs.capitalization_date, offset, state.opening - closing, ZERO, offset == 0 and fraction < 1)
            if closing <= residual:
                break

        return self._finish(ApplicableLaw.COMPANIES_ACT, method, rate * HUNDRED if rate is not None else None, cost, state)

    def income_tax_act(self, inputs: IncomeTaxActInput) -> DepreciationSchedule:
        cost = inputs.original_cost
        statutory_rate = inputs.depreciation_rate_percent
        if cost <= 0 or statutory_rate <= 0:
            return self._empty(ApplicableLaw.IT_ACT, DepreciationMethod.WDV, cost, statutory_rate)

        rate = statutory_rate / HUNDRED
        half_year = is_half_year(inputs.capitalization_date, self.settings)
        first_year_rate = rate / 2 if half_year else rate
        max_years = inputs.max_years or self.settings.it_act_max_years
        places = self.settings.rounding_places

        state = ScheduleState(opening=cost)
        for offset in range(max_years):
            if state.opening <= IT_ACT_TERMINAL_VALUE:
                break
            applicable_rate = first_year_rate if offset == 0 else rate
            charge = round_amount(state.opening * applicable_rate, places)
            additional = ZERO
            if offset == 0 and inputs.additional_depreciation_eligible:
                additional_rate = ADDITIONAL_RATE_HALF_YEAR if half_year else ADDITIONAL_RATE_FULL_YEAR
                additional = round_amount(cost * additional_rate, places)
            if charge + additional > state.opening:
                charge = min(charge, state.opening)
                additional = state.opening - charge
            self._append(state, inputs.capitalization_date, offset, charge, additional, offset == 0 and half_year)
            if state.opening <= 0:
                break

        return self._finish(ApplicableLaw.IT_ACT, DepreciationMethod.WDV, statutory_rate, cost, state)

    def _append(
        self,
        state: ScheduleState,
        capitalization_date,
        offset: int,
        depreciation: Decimal,
        additional: Decimal,
        is_pro_rata: bool,
    ) -> None:
        year, label = period_label(capitalization_date, offset, self.settings)
        opening = state.opening
        closing = opening - depreciation - additional
        state.accumulated += depreciation + additional
        state.entries.append(
            DepreciationEntry(
                year=year,
                label=label,
                opening_value=opening,
                depreciation=depreciation,
                additional_depreciation=additional,
                closing_value=closing,
                accumulated_depreciation=state.accumulated,
                is_pro_rata=is_pro_rata,
            )
        )
        state.opening = closing

    def _finish(
        self,
        law: ApplicableLaw,
        method: DepreciationMethod,
        rate_percent: Optional[Decimal],
        cost: Decimal,
        state: ScheduleState,
    ) -> DepreciationSchedule:
        total = sum((entry.total_depreciation for entry in state.entries), ZERO)
        current_wdv = state.entries[-1].closing_value if state.entries else cost
        return DepreciationSchedule(
            law=law,
            method=method,
            rate_percent=rate_percent,
            entries=state.entries,
            total_depreciation=total,
            current_wdv=current_wdv,
        )

    def _empty(
        self,
        law: ApplicableLaw,
        method: DepreciationMethod,
        cost: Decimal,
        rate_percent: Optional[Decimal] = None,
    ) -> DepreciationSchedule:
        return DepreciationSchedule(law=law, method=method, rate_percent=rate_percent, current_wdv=max(cost, ZERO))


def compute_companies_act_schedule(inputs: CompaniesActInput, settings: Optional[RegisterSettings] = None) -> DepreciationSchedule:
    return DepreciationCalculator(settings).companies_act(inputs)


def compute_income_tax_act_schedule(inputs: IncomeTaxActInput, settings: Optional[RegisterSettings] = None) -> DepreciationSchedule:
    return DepreciationCalculator(settings).income_tax_act(inputs)


def calculate_depreciation(asset: AssetRecord, settings: Optional[RegisterSettings] = None) -> List[DepreciationSchedule]:
    return DepreciationCalculator(settings).run(asset)
