from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from asset_depreciation.models.financials import AssetFinancials


class NoticeKind(Enum):
    INSUFFICIENT_USAGE_DATA = "insufficient_usage_data"
    BOOK_VALUE_MISMATCH = "book_value_mismatch"


@dataclass(frozen=True)
class Notice:
    """Non-fatal condition surfaced to the caller for display or follow-up."""
    kind: NoticeKind
    message: str
    period_index: Optional[int] = None


@dataclass(frozen=True)
class ScheduleEntry:
    period_index: int  # 1-indexed
    period_start: date
    period_end: date
    opening_book_value: Decimal
    period_depreciation: Decimal
    accumulated_depreciation: Decimal
    ending_book_value: Decimal
    units: Optional[int] = None  # Units of production only
    needs_usage_data: bool = False


@dataclass(frozen=True)
class DepreciationSchedule:
    financials: AssetFinancials
    entries: tuple[ScheduleEntry, ...] = ()
    notices: tuple[Notice, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def total_depreciation(self) -> Decimal:
        if not self.entries:
            return Decimal("0")
        return self.entries[-1].accumulated_depreciation

    @property
    def final_book_value(self) -> Decimal:
        if not self.entries:
            return self.financials.acquisition_cost
        return self.entries[-1].ending_book_value

    @property
    def first_period_start(self) -> Optional[date]:
        return self.entries[0].period_start if self.entries else None

    @property
    def last_period_end(self) -> Optional[date]:
        return self.entries[-1].period_end if self.entries else None

    @property
    def fully_depreciated_on(self) -> Optional[date]:
        """End of the period in which book value reaches salvage, if it does."""
        salvage = self.financials.salvage_value
        for entry in self.entries:
            if entry.ending_book_value <= salvage:
                return entry.period_end
        return None


@dataclass(frozen=True)
class BookValue:
    as_of: date
    accumulated_depreciation: Decimal
    book_value: Decimal
    period_index: Optional[int] = None  # None = before the first period
    is_fully_depreciated: bool = False
