"""Monthly depreciation estimate shown while an asset is being entered.

Pure function. No I/O.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from asset_depreciation.engine.pre_depreciation import adjust
from asset_depreciation.engine.schedule import UnitsStream, declining_rate, generate
from asset_depreciation.models.financials import (
    AssetFinancials,
    DepreciationMethod,
    PriorAccrual,
)
from asset_depreciation.models.schedule import Notice


@dataclass(frozen=True)
class DepreciationPreview:
    method: DepreciationMethod
    depreciable_base: Decimal
    monthly_depreciation: Decimal  # First period charge
    total_periods: int
    annual_rate: Optional[Decimal] = None  # Declining balance only, percent
    fully_depreciated_on: Optional[date] = None
    notices: tuple[Notice, ...] = field(default_factory=tuple)


def preview(
    financials: AssetFinancials,
    units_per_period: Optional[UnitsStream] = None,
    prior: Optional[PriorAccrual] = None,
) -> DepreciationPreview:
    """Summarize the schedule an asset would get, led by its first monthly charge.

    With `prior`, the estimate covers the re-based remaining life and carries
    any book value mismatch notice.
    """
    notices: tuple[Notice, ...] = ()
    if prior is not None:
        adjustment = adjust(financials, prior)
        notices = adjustment.notices
        if adjustment.financials is None:
            return DepreciationPreview(
                method=financials.method,
                depreciable_base=Decimal("0"),
                monthly_depreciation=Decimal("0"),
                total_periods=0,
                notices=notices,
            )
        financials = adjustment.financials

    schedule = generate(financials, units_per_period)
    first_charge = (
        schedule.entries[0].period_depreciation if schedule.entries else Decimal("0")
    )

    annual_rate = None
    if financials.method == DepreciationMethod.DECLINING_BALANCE:
        annual_rate = declining_rate(financials).quantize(Decimal("0.0001"))

    return DepreciationPreview(
        method=financials.method,
        depreciable_base=financials.depreciable_base,
        monthly_depreciation=first_charge,
        total_periods=len(schedule.entries),
        annual_rate=annual_rate,
        fully_depreciated_on=schedule.fully_depreciated_on,
        notices=notices + schedule.notices,
    )
