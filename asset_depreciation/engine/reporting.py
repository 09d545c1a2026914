"""Portfolio depreciation reports: net book value rows and summary totals.

Pure functions over recomputed schedules. No I/O.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from asset_depreciation.engine.book_value import value_as_of
from asset_depreciation.engine.period_close import period_charge, schedule_for
from asset_depreciation.models.asset import AssetRecord
from asset_depreciation.models.financials import DepreciationMethod

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class NetBookValueRow:
    item_code: str
    description: str
    category: str
    method: DepreciationMethod
    acquisition_cost: Decimal
    salvage_value: Decimal
    accumulated_depreciation: Decimal
    book_value: Decimal
    monthly_depreciation: Decimal  # Charge for the month containing as_of
    remaining_useful_life_months: int
    depreciation_rate: Decimal  # Accumulated as % of cost
    is_fully_depreciated: bool
    projected_full_depreciation_date: Optional[date] = None
    is_pre_depreciated: bool = False


@dataclass
class MethodBreakdown:
    method: DepreciationMethod
    count: int = 0
    total_book_value: Decimal = Decimal("0")


@dataclass
class CategoryBreakdown:
    category: str
    count: int = 0
    total_book_value: Decimal = Decimal("0")
    total_depreciation: Decimal = Decimal("0")


@dataclass
class PortfolioSummary:
    as_of: date
    total_assets: int = 0
    total_acquisition_cost: Decimal = Decimal("0")
    total_book_value: Decimal = Decimal("0")
    total_accumulated_depreciation: Decimal = Decimal("0")
    total_monthly_depreciation: Decimal = Decimal("0")
    fully_depreciated_count: int = 0
    by_method: list[MethodBreakdown] = field(default_factory=list)
    by_category: list[CategoryBreakdown] = field(default_factory=list)


def net_book_value_row(asset: AssetRecord, as_of: date) -> NetBookValueRow:
    """Net book value of one asset at `as_of`.

    For a pre-depreciated asset, cost and accumulated depreciation include
    what was recognized before system entry.
    """
    schedule = schedule_for(asset)
    value = value_as_of(schedule, as_of)
    charge = period_charge(schedule, as_of)

    cost = asset.financials.acquisition_cost
    accumulated = cost - value.book_value

    remaining_months = sum(1 for e in schedule.entries if e.period_end > as_of)
    if value.is_fully_depreciated:
        remaining_months = 0

    rate = Decimal("0")
    if cost > 0:
        rate = (accumulated / cost * 100).quantize(TWO_PLACES, ROUND_HALF_UP)

    return NetBookValueRow(
        item_code=asset.item_code,
        description=asset.description,
        category=asset.category,
        method=asset.financials.method,
        acquisition_cost=cost,
        salvage_value=asset.financials.salvage_value,
        accumulated_depreciation=accumulated,
        book_value=value.book_value,
        monthly_depreciation=charge.depreciation_amount,
        remaining_useful_life_months=remaining_months,
        depreciation_rate=rate,
        is_fully_depreciated=value.is_fully_depreciated,
        projected_full_depreciation_date=schedule.fully_depreciated_on,
        is_pre_depreciated=asset.is_pre_depreciated,
    )


def summarize(assets: Iterable[AssetRecord], as_of: date) -> PortfolioSummary:
    """Totals across a portfolio, broken down by method and category."""
    return summarize_rows((net_book_value_row(a, as_of) for a in assets), as_of)


def summarize_rows(rows: Iterable[NetBookValueRow], as_of: date) -> PortfolioSummary:
    summary = PortfolioSummary(as_of=as_of)
    methods: dict[DepreciationMethod, MethodBreakdown] = {}
    categories: dict[str, CategoryBreakdown] = {}

    for row in rows:
        summary.total_assets += 1
        summary.total_acquisition_cost += row.acquisition_cost
        summary.total_book_value += row.book_value
        summary.total_accumulated_depreciation += row.accumulated_depreciation
        summary.total_monthly_depreciation += row.monthly_depreciation
        if row.is_fully_depreciated:
            summary.fully_depreciated_count += 1

        by_method = methods.setdefault(row.method, MethodBreakdown(method=row.method))
        by_method.count += 1
        by_method.total_book_value += row.book_value

        by_category = categories.setdefault(row.category, CategoryBreakdown(category=row.category))
        by_category.count += 1
        by_category.total_book_value += row.book_value
        by_category.total_depreciation += row.accumulated_depreciation

    summary.by_method = list(methods.values())
    summary.by_category = sorted(categories.values(), key=lambda c: c.category)
    return summary
