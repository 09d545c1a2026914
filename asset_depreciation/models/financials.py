"""Asset financial parameters: the only input the depreciation engine needs."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from asset_depreciation.models.errors import InvalidInput


class DepreciationMethod(Enum):
    STRAIGHT_LINE = "STRAIGHT_LINE"
    DECLINING_BALANCE = "DECLINING_BALANCE"
    SUM_OF_YEARS_DIGITS = "SUM_OF_YEARS_DIGITS"
    UNITS_OF_PRODUCTION = "UNITS_OF_PRODUCTION"


@dataclass(frozen=True)
class AssetFinancials:
    """Cost basis and depreciation terms for one asset.

    Validated on construction, so a schedule is never generated from
    inconsistent parameters.
    """
    acquisition_cost: Decimal
    useful_life_months: int
    start_date: date
    salvage_value: Decimal = Decimal("0")
    method: DepreciationMethod = DepreciationMethod.STRAIGHT_LINE
    declining_rate_override: Optional[Decimal] = None  # Annual %, e.g. Decimal("40")
    total_expected_units: Optional[int] = None

    def __post_init__(self) -> None:
        if self.useful_life_months is None or self.useful_life_months <= 0:
            raise InvalidInput(
                f"useful_life_months must be positive, got {self.useful_life_months}"
            )
        if self.acquisition_cost < 0:
            raise InvalidInput(f"acquisition_cost cannot be negative, got {self.acquisition_cost}")
        if self.salvage_value < 0:
            raise InvalidInput(f"salvage_value cannot be negative, got {self.salvage_value}")
        if self.salvage_value > self.acquisition_cost:
            raise InvalidInput(
                f"salvage_value {self.salvage_value} exceeds acquisition_cost {self.acquisition_cost}"
            )
        if self.declining_rate_override is not None and self.declining_rate_override <= 0:
            raise InvalidInput(
                f"declining_rate_override must be positive, got {self.declining_rate_override}"
            )
        if self.method == DepreciationMethod.UNITS_OF_PRODUCTION:
            if not self.total_expected_units or self.total_expected_units <= 0:
                raise InvalidInput("total_expected_units is required for UNITS_OF_PRODUCTION")

    @property
    def depreciable_base(self) -> Decimal:
        """Amount eligible to be expensed over the asset's life."""
        return self.acquisition_cost - self.salvage_value

    @property
    def useful_life_years(self) -> Decimal:
        return Decimal(self.useful_life_months) / 12


@dataclass(frozen=True)
class PriorAccrual:
    """Depreciation already recognized before the asset entered the register."""
    prior_depreciation_amount: Decimal
    prior_depreciation_months: int
    entry_book_value: Decimal

    # Import-template extras
    system_entry_date: Optional[date] = None
    use_system_entry_as_start: bool = False
    prior_units: int = 0  # Units of production only

    def __post_init__(self) -> None:
        if self.prior_depreciation_amount < 0:
            raise InvalidInput("prior_depreciation_amount cannot be negative")
        if self.prior_depreciation_months < 0:
            raise InvalidInput("prior_depreciation_months cannot be negative")
        if self.entry_book_value < 0:
            raise InvalidInput("entry_book_value cannot be negative")
        if self.prior_units < 0:
            raise InvalidInput("prior_units cannot be negative")
        if self.use_system_entry_as_start and self.system_entry_date is None:
            raise InvalidInput("system_entry_date is required when use_system_entry_as_start is set")
