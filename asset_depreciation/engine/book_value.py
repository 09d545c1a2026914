"""Book value lookup against a generated schedule.

Pure lookup: never regenerates or mutates the schedule.
"""

from bisect import bisect_right
from datetime import date
from decimal import Decimal

from asset_depreciation.models.schedule import BookValue, DepreciationSchedule


def value_as_of(schedule: DepreciationSchedule, query_date: date) -> BookValue:
    """Accumulated depreciation and book value at `query_date`.

    Uses the latest period ending on or before the query date. Before the
    first period the asset is carried at cost; past the last period the
    final entry's values hold.
    """
    financials = schedule.financials
    period_ends = [entry.period_end for entry in schedule.entries]
    position = bisect_right(period_ends, query_date)

    if position == 0:
        return BookValue(
            as_of=query_date,
            accumulated_depreciation=Decimal("0"),
            book_value=financials.acquisition_cost,
            is_fully_depreciated=financials.depreciable_base <= 0,
        )

    entry = schedule.entries[position - 1]
    return BookValue(
        as_of=query_date,
        accumulated_depreciation=entry.accumulated_depreciation,
        book_value=entry.ending_book_value,
        period_index=entry.period_index,
        is_fully_depreciated=entry.ending_book_value <= financials.salvage_value,
    )
