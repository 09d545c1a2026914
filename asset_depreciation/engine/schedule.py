"""Depreciation schedule generation: straight-line, declining balance,
sum-of-years-digits, and units of production.

Pure functions: AssetFinancials in, DepreciationSchedule out. No I/O, no clock.
"""

import logging
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Callable, Optional, Sequence

from asset_depreciation.config import settings
from asset_depreciation.engine.periods import period_bounds
from asset_depreciation.models.errors import InvalidInput
from asset_depreciation.models.financials import AssetFinancials, DepreciationMethod
from asset_depreciation.models.schedule import (
    DepreciationSchedule,
    Notice,
    NoticeKind,
    ScheduleEntry,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")

UnitsStream = Sequence[Optional[int]]


def _round(amount: Decimal) -> Decimal:
    return amount.quantize(TWO_PLACES, ROUND_HALF_UP)


def _round_down(amount: Decimal) -> Decimal:
    """Truncate so the running total stays under the base until the final period."""
    return amount.quantize(TWO_PLACES, ROUND_DOWN)


def declining_rate(financials: AssetFinancials) -> Decimal:
    """Annual declining-balance rate in percent.

    Defaults to double declining: 2 / useful life in years * 100.
    """
    if financials.declining_rate_override is not None:
        return financials.declining_rate_override
    return settings.default_declining_factor / financials.useful_life_years * HUNDRED


class _EntryBuilder:
    """Appends monthly entries while holding book value at or above salvage."""

    def __init__(self, financials: AssetFinancials):
        self.financials = financials
        self.accumulated = Decimal("0")
        self.entries: list[ScheduleEntry] = []
        self.notices: list[Notice] = []

    @property
    def book_value(self) -> Decimal:
        return self.financials.acquisition_cost - self.accumulated

    @property
    def remaining(self) -> Decimal:
        return self.financials.depreciable_base - self.accumulated

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    def add(
        self,
        charge: Decimal,
        units: Optional[int] = None,
        needs_usage_data: bool = False,
    ) -> ScheduleEntry:
        # Never cross the salvage floor
        charge = max(Decimal("0"), min(charge, self.remaining))
        period_index = len(self.entries) + 1
        period_start, period_end = period_bounds(self.financials.start_date, period_index)
        opening = self.book_value
        self.accumulated += charge

        entry = ScheduleEntry(
            period_index=period_index,
            period_start=period_start,
            period_end=period_end,
            opening_book_value=opening,
            period_depreciation=charge,
            accumulated_depreciation=self.accumulated,
            ending_book_value=self.book_value,
            units=units,
            needs_usage_data=needs_usage_data,
        )
        self.entries.append(entry)
        return entry

    def build(self) -> DepreciationSchedule:
        return DepreciationSchedule(
            financials=self.financials,
            entries=tuple(self.entries),
            notices=tuple(self.notices),
        )


def _straight_line(builder: _EntryBuilder, units: Optional[UnitsStream]) -> None:
    f = builder.financials
    monthly = _round_down(f.depreciable_base / f.useful_life_months)

    for period in range(1, f.useful_life_months + 1):
        # Final period absorbs the rounding remainder
        charge = builder.remaining if period == f.useful_life_months else monthly
        builder.add(charge)
        if builder.exhausted:
            break


def _declining_balance(builder: _EntryBuilder, units: Optional[UnitsStream]) -> None:
    f = builder.financials
    monthly_rate = declining_rate(f) / HUNDRED / 12

    for period in range(1, f.useful_life_months + 1):
        if period == f.useful_life_months:
            # End of useful life: write off down to salvage
            charge = builder.remaining
        else:
            charge = _round(builder.book_value * monthly_rate)
        builder.add(charge)
        if builder.exhausted:
            break


def _sum_of_years_digits(builder: _EntryBuilder, units: Optional[UnitsStream]) -> None:
    f = builder.financials
    n_months = f.useful_life_months
    n_years = -(-n_months // 12)  # A partial final year still gets a digit
    digits_total = Decimal(n_years * (n_years + 1) // 2)

    for period in range(1, n_months + 1):
        if period == n_months:
            charge = builder.remaining
        else:
            year = (period - 1) // 12 + 1
            annual_share = f.depreciable_base * (n_years - year + 1) / digits_total
            # Short final year spreads its share over the months it has
            months_in_year = min(12, n_months - (year - 1) * 12)
            charge = _round_down(annual_share / months_in_year)
        builder.add(charge)
        if builder.exhausted:
            break


def _units_of_production(builder: _EntryBuilder, units: Optional[UnitsStream]) -> None:
    f = builder.financials
    if not units:
        logger.warning(
            "No usage data for units-of-production asset starting %s; schedule is empty",
            f.start_date,
        )
        builder.notices.append(Notice(
            kind=NoticeKind.INSUFFICIENT_USAGE_DATA,
            message="No unit consumption reported; schedule cannot be generated",
        ))
        return

    total_units = Decimal(f.total_expected_units)
    units_to_date = 0

    for period, period_units in enumerate(units, start=1):
        if period_units is None:
            builder.add(Decimal("0"), needs_usage_data=True)
            builder.notices.append(Notice(
                kind=NoticeKind.INSUFFICIENT_USAGE_DATA,
                message=f"No unit consumption reported for period {period}",
                period_index=period,
            ))
            continue

        units_to_date += period_units
        if units_to_date >= f.total_expected_units:
            charge = builder.remaining
        else:
            charge = _round(f.depreciable_base * Decimal(period_units) / total_units)
        builder.add(charge, units=period_units)
        if builder.exhausted:
            break

    missing = sum(1 for e in builder.entries if e.needs_usage_data)
    if missing:
        logger.warning("%d period(s) lack unit consumption data", missing)


_METHODS: dict[DepreciationMethod, Callable[[_EntryBuilder, Optional[UnitsStream]], None]] = {
    DepreciationMethod.STRAIGHT_LINE: _straight_line,
    DepreciationMethod.DECLINING_BALANCE: _declining_balance,
    DepreciationMethod.SUM_OF_YEARS_DIGITS: _sum_of_years_digits,
    DepreciationMethod.UNITS_OF_PRODUCTION: _units_of_production,
}


def generate(
    financials: AssetFinancials,
    units_per_period: Optional[UnitsStream] = None,
) -> DepreciationSchedule:
    """Generate the monthly depreciation schedule for an asset.

    Args:
        financials: Validated asset parameters
        units_per_period: Units consumed per month, units of production only.
            A None item marks a month with no reported usage.

    Returns an empty schedule when the depreciable base is zero.
    """
    if units_per_period is not None and any(u is not None and u < 0 for u in units_per_period):
        raise InvalidInput("units_per_period cannot contain negative values")

    builder = _EntryBuilder(financials)
    if financials.depreciable_base <= 0:
        return builder.build()

    _METHODS[financials.method](builder, units_per_period)
    return builder.build()
