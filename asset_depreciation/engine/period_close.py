"""Month-end depreciation runs over a set of registered assets.

Each asset's charge for the month is read off its recomputed schedule; a
failing asset is recorded and the run continues.
"""

import logging
from bisect import bisect_left
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from asset_depreciation.engine.pre_depreciation import remaining_schedule
from asset_depreciation.engine.schedule import generate
from asset_depreciation.models.asset import AssetRecord
from asset_depreciation.models.schedule import DepreciationSchedule, Notice

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"  # Nothing to charge this period
    FAILED = "failed"


class BatchStatus(Enum):
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class PeriodCharge:
    period_date: date
    book_value_before: Decimal
    depreciation_amount: Decimal
    book_value_after: Decimal
    accumulated_depreciation: Decimal
    is_fully_depreciated: bool
    period_index: Optional[int] = None
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    next_depreciation_date: Optional[date] = None


@dataclass(frozen=True)
class AssetRunResult:
    item_code: str
    status: RunStatus
    charge: Optional[PeriodCharge] = None
    error: Optional[str] = None
    notices: tuple[Notice, ...] = field(default_factory=tuple)

    @property
    def depreciation_amount(self) -> Decimal:
        return self.charge.depreciation_amount if self.charge else Decimal("0")


@dataclass(frozen=True)
class BatchResult:
    period_date: date
    results: tuple[AssetRunResult, ...] = ()

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.status != RunStatus.FAILED)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.status == RunStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == RunStatus.FAILED)

    @property
    def total_depreciation(self) -> Decimal:
        return sum((r.depreciation_amount for r in self.results), Decimal("0"))

    @property
    def status(self) -> BatchStatus:
        if self.failed > 0 and self.successful == 0:
            return BatchStatus.FAILED
        return BatchStatus.COMPLETED


def schedule_for(asset: AssetRecord) -> DepreciationSchedule:
    """Current schedule: future periods only for pre-depreciated assets."""
    if asset.prior is not None:
        return remaining_schedule(asset.financials, asset.prior, asset.units_per_period)
    return generate(asset.financials, asset.units_per_period)


def period_charge(schedule: DepreciationSchedule, period_date: date) -> PeriodCharge:
    """Depreciation for the schedule period containing `period_date`.

    Outside the schedule the charge is zero and the book value is whatever
    the asset is carried at on that date.
    """
    financials = schedule.financials
    entries = schedule.entries
    position = bisect_left([e.period_end for e in entries], period_date)

    if position < len(entries) and entries[position].period_start <= period_date:
        entry = entries[position]
        fully = entry.ending_book_value <= financials.salvage_value
        is_last = position == len(entries) - 1
        return PeriodCharge(
            period_date=period_date,
            book_value_before=entry.opening_book_value,
            depreciation_amount=entry.period_depreciation,
            book_value_after=entry.ending_book_value,
            accumulated_depreciation=entry.accumulated_depreciation,
            is_fully_depreciated=fully,
            period_index=entry.period_index,
            period_start=entry.period_start,
            period_end=entry.period_end,
            next_depreciation_date=None if fully or is_last else entry.period_end + timedelta(days=1),
        )

    if position == 0:
        # Before the first period (or nothing scheduled at all)
        return PeriodCharge(
            period_date=period_date,
            book_value_before=financials.acquisition_cost,
            depreciation_amount=Decimal("0"),
            book_value_after=financials.acquisition_cost,
            accumulated_depreciation=Decimal("0"),
            is_fully_depreciated=financials.depreciable_base <= 0,
            next_depreciation_date=schedule.first_period_start,
        )

    last = entries[-1]
    return PeriodCharge(
        period_date=period_date,
        book_value_before=last.ending_book_value,
        depreciation_amount=Decimal("0"),
        book_value_after=last.ending_book_value,
        accumulated_depreciation=last.accumulated_depreciation,
        is_fully_depreciated=last.ending_book_value <= financials.salvage_value,
    )


def run_asset(asset: AssetRecord, period_date: date) -> AssetRunResult:
    """Charge one asset for the period. Errors are captured, not raised."""
    try:
        schedule = schedule_for(asset)
    except ValueError as e:
        logger.warning("Depreciation failed for %s: %s", asset.item_code, e)
        return failed_result(asset.item_code, str(e))

    charge = period_charge(schedule, period_date)
    status = RunStatus.SUCCESS if charge.depreciation_amount > 0 else RunStatus.SKIPPED
    return AssetRunResult(
        item_code=asset.item_code,
        status=status,
        charge=charge,
        notices=schedule.notices,
    )


def failed_result(item_code: str, error: str) -> AssetRunResult:
    return AssetRunResult(item_code=item_code, status=RunStatus.FAILED, error=error)


def collect_batch(period_date: date, results: Iterable[AssetRunResult]) -> BatchResult:
    batch = BatchResult(period_date=period_date, results=tuple(results))
    logger.info(
        "Depreciation run for %s: %d processed, %d successful, %d failed, total %s",
        period_date,
        batch.processed,
        batch.successful,
        batch.failed,
        batch.total_depreciation,
    )
    return batch


def run_batch(assets: Iterable[AssetRecord], period_date: date) -> BatchResult:
    """Run month-end depreciation for every asset in `assets`."""
    return collect_batch(period_date, (run_asset(a, period_date) for a in assets))
