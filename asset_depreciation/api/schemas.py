"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from asset_depreciation.models.asset import AssetRecord
from asset_depreciation.models.financials import (
    AssetFinancials,
    DepreciationMethod,
    PriorAccrual,
)


# ---- Request schemas ----

class FinancialsRequest(BaseModel):
    acquisition_cost: Decimal = Field(..., description="Original cost basis")
    salvage_value: Decimal = Decimal("0")
    useful_life_months: int = Field(..., description="Total depreciable life in months")
    method: DepreciationMethod = DepreciationMethod.STRAIGHT_LINE
    declining_rate_override: Decimal | None = Field(None, description="Annual %, declining balance only")
    total_expected_units: int | None = Field(None, description="Required for units of production")
    start_date: date

    def to_financials(self) -> AssetFinancials:
        """Build validated engine input. Raises InvalidInput."""
        return AssetFinancials(
            acquisition_cost=self.acquisition_cost,
            salvage_value=self.salvage_value,
            useful_life_months=self.useful_life_months,
            method=self.method,
            declining_rate_override=self.declining_rate_override,
            total_expected_units=self.total_expected_units,
            start_date=self.start_date,
        )


class PriorAccrualRequest(BaseModel):
    """Depreciation recognized before the asset entered the register."""
    prior_depreciation_amount: Decimal
    prior_depreciation_months: int
    entry_book_value: Decimal
    system_entry_date: date | None = None
    use_system_entry_as_start: bool = False
    prior_units: int = 0

    def to_prior(self) -> PriorAccrual:
        return PriorAccrual(
            prior_depreciation_amount=self.prior_depreciation_amount,
            prior_depreciation_months=self.prior_depreciation_months,
            entry_book_value=self.entry_book_value,
            system_entry_date=self.system_entry_date,
            use_system_entry_as_start=self.use_system_entry_as_start,
            prior_units=self.prior_units,
        )


class ScheduleRequest(BaseModel):
    financials: FinancialsRequest
    prior: PriorAccrualRequest | None = None
    units_per_period: list[int | None] | None = Field(
        None, description="Units consumed per month; null marks a month with no report"
    )


class BookValueRequest(ScheduleRequest):
    as_of: date


class AssetItem(BaseModel):
    item_code: str
    description: str = ""
    category: str = "Uncategorized"
    financials: FinancialsRequest
    prior: PriorAccrualRequest | None = None
    units_per_period: list[int | None] | None = None

    def to_asset(self) -> AssetRecord:
        return AssetRecord(
            item_code=self.item_code,
            description=self.description,
            category=self.category,
            financials=self.financials.to_financials(),
            prior=self.prior.to_prior() if self.prior else None,
            units_per_period=tuple(self.units_per_period) if self.units_per_period is not None else None,
        )


class BatchRequest(BaseModel):
    period_date: date = Field(..., description="Any date within the month being closed")
    assets: list[AssetItem]


class ReportRequest(BaseModel):
    as_of: date
    assets: list[AssetItem]


# ---- Response schemas ----

class NoticeResponse(BaseModel):
    kind: str
    message: str
    period_index: int | None = None


class ScheduleEntryResponse(BaseModel):
    period_index: int
    period_start: date
    period_end: date
    opening_book_value: Decimal
    period_depreciation: Decimal
    accumulated_depreciation: Decimal
    ending_book_value: Decimal
    units: int | None = None
    needs_usage_data: bool = False


class ScheduleResponse(BaseModel):
    method: str
    acquisition_cost: Decimal
    salvage_value: Decimal
    depreciable_base: Decimal
    total_depreciation: Decimal
    final_book_value: Decimal
    fully_depreciated_on: date | None = None
    entries: list[ScheduleEntryResponse] = []
    notices: list[NoticeResponse] = []


class PreviewResponse(BaseModel):
    method: str
    depreciable_base: Decimal
    monthly_depreciation: Decimal
    total_periods: int
    annual_rate: Decimal | None = None
    fully_depreciated_on: date | None = None
    currency_code: str
    notices: list[NoticeResponse] = []


class BookValueResponse(BaseModel):
    as_of: date
    accumulated_depreciation: Decimal
    book_value: Decimal
    period_index: int | None = None
    is_fully_depreciated: bool
    notices: list[NoticeResponse] = []


class PeriodChargeResponse(BaseModel):
    period_index: int | None = None
    period_start: date | None = None
    period_end: date | None = None
    book_value_before: Decimal
    depreciation_amount: Decimal
    book_value_after: Decimal
    accumulated_depreciation: Decimal
    is_fully_depreciated: bool
    next_depreciation_date: date | None = None


class AssetRunResponse(BaseModel):
    item_code: str
    status: str
    charge: PeriodChargeResponse | None = None
    error: str | None = None
    notices: list[NoticeResponse] = []


class BatchResponse(BaseModel):
    period_date: date
    status: str
    processed: int
    successful: int
    skipped: int
    failed: int
    total_depreciation: Decimal
    results: list[AssetRunResponse] = []


class NetBookValueRowResponse(BaseModel):
    item_code: str
    description: str
    category: str
    method: str
    acquisition_cost: Decimal
    salvage_value: Decimal
    accumulated_depreciation: Decimal
    book_value: Decimal
    monthly_depreciation: Decimal
    remaining_useful_life_months: int
    depreciation_rate: Decimal
    is_fully_depreciated: bool
    projected_full_depreciation_date: date | None = None
    is_pre_depreciated: bool = False


class MethodBreakdownResponse(BaseModel):
    method: str
    count: int
    total_book_value: Decimal


class CategoryBreakdownResponse(BaseModel):
    category: str
    count: int
    total_book_value: Decimal
    total_depreciation: Decimal


class SummaryResponse(BaseModel):
    as_of: date
    total_assets: int
    total_acquisition_cost: Decimal
    total_book_value: Decimal
    total_accumulated_depreciation: Decimal
    total_monthly_depreciation: Decimal
    fully_depreciated_count: int
    by_method: list[MethodBreakdownResponse] = []
    by_category: list[CategoryBreakdownResponse] = []
