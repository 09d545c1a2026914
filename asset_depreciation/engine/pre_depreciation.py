"""Re-basing for assets that enter the register already partly depreciated.

The asserted entry book value becomes the new cost basis and the remaining
useful life the new life, so the schedule generator runs unmodified over
the future periods only.
"""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional

from asset_depreciation.config import settings
from asset_depreciation.engine.periods import add_months
from asset_depreciation.engine.schedule import UnitsStream, declining_rate, generate
from asset_depreciation.models.financials import (
    AssetFinancials,
    DepreciationMethod,
    PriorAccrual,
)
from asset_depreciation.models.schedule import DepreciationSchedule, Notice, NoticeKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreDepreciationAdjustment:
    remaining_useful_life_months: int
    implied_book_value: Decimal
    entry_book_value: Decimal
    financials: Optional[AssetFinancials] = None  # None = nothing left to depreciate
    notices: tuple[Notice, ...] = field(default_factory=tuple)

    @property
    def is_exhausted(self) -> bool:
        return self.financials is None

    @property
    def book_value_difference(self) -> Decimal:
        return self.entry_book_value - self.implied_book_value


def adjust(
    original: AssetFinancials,
    prior: PriorAccrual,
    tolerance: Optional[Decimal] = None,
) -> PreDepreciationAdjustment:
    """Re-base `original` onto its entry book value and remaining life.

    Declining balance keeps the annual rate of the original life as an
    override rather than deriving a steeper one from the remaining life.

    Args:
        original: Financials as of original acquisition
        prior: Depreciation already accrued before system entry
        tolerance: Allowed gap between implied and asserted book value
            (defaults to settings.book_value_tolerance)
    """
    if tolerance is None:
        tolerance = settings.book_value_tolerance

    remaining_months = original.useful_life_months - prior.prior_depreciation_months
    implied = original.acquisition_cost - prior.prior_depreciation_amount

    notices: list[Notice] = []
    if abs(implied - prior.entry_book_value) > tolerance:
        logger.warning(
            "Entry book value %s differs from implied book value %s (cost %s - prior %s)",
            prior.entry_book_value,
            implied,
            original.acquisition_cost,
            prior.prior_depreciation_amount,
        )
        notices.append(Notice(
            kind=NoticeKind.BOOK_VALUE_MISMATCH,
            message=(
                f"Entry book value {prior.entry_book_value} differs from cost less prior "
                f"depreciation ({implied}); the entry book value is used"
            ),
        ))

    result = PreDepreciationAdjustment(
        remaining_useful_life_months=max(remaining_months, 0),
        implied_book_value=implied,
        entry_book_value=prior.entry_book_value,
        notices=tuple(notices),
    )

    if remaining_months <= 0 or prior.entry_book_value <= original.salvage_value:
        return result

    if prior.use_system_entry_as_start:
        start_date = prior.system_entry_date
    else:
        start_date = add_months(original.start_date, prior.prior_depreciation_months)

    overrides: dict = {}
    if original.method == DepreciationMethod.DECLINING_BALANCE:
        # Keep the original life's rate; a shorter remaining life must not raise it
        overrides["declining_rate_override"] = declining_rate(original)
    elif original.method == DepreciationMethod.UNITS_OF_PRODUCTION:
        remaining_units = original.total_expected_units - prior.prior_units
        if remaining_units <= 0:
            return result
        overrides["total_expected_units"] = remaining_units

    rebased = replace(
        original,
        acquisition_cost=prior.entry_book_value,
        useful_life_months=remaining_months,
        start_date=start_date,
        **overrides,
    )
    return replace(result, financials=rebased)


def remaining_schedule(
    original: AssetFinancials,
    prior: PriorAccrual,
    units_per_period: Optional[UnitsStream] = None,
    tolerance: Optional[Decimal] = None,
) -> DepreciationSchedule:
    """Adjust, then generate the schedule for the future periods only.

    An exhausted asset gets an empty schedule carried at its entry book value,
    which also becomes its floor so lookups report it fully depreciated.
    """
    adjustment = adjust(original, prior, tolerance)
    if adjustment.is_exhausted:
        # Book value never drops below salvage, even if asserted lower
        carried_cost = max(prior.entry_book_value, original.salvage_value)
        carried = replace(original, acquisition_cost=carried_cost, salvage_value=carried_cost)
        return DepreciationSchedule(financials=carried, notices=adjustment.notices)

    schedule = generate(adjustment.financials, units_per_period)
    return replace(schedule, notices=adjustment.notices + schedule.notices)
