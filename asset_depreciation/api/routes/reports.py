"""Portfolio report routes."""

from fastapi import APIRouter, HTTPException

from asset_depreciation.api.schemas import (
    AssetItem,
    CategoryBreakdownResponse,
    MethodBreakdownResponse,
    NetBookValueRowResponse,
    ReportRequest,
    SummaryResponse,
)
from asset_depreciation.engine.reporting import (
    NetBookValueRow,
    net_book_value_row,
    summarize_rows,
)
from asset_depreciation.models.asset import AssetRecord

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


def _assets(items: list[AssetItem]) -> list[AssetRecord]:
    """Build engine records, rejecting the whole report on the first bad asset."""
    assets = []
    for item in items:
        try:
            assets.append(item.to_asset())
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"{item.item_code}: {e}")
    return assets


def _rows(req: ReportRequest) -> list[NetBookValueRow]:
    """Report rows; an asset whose schedule cannot be built rejects the report."""
    rows = []
    for asset in _assets(req.assets):
        try:
            rows.append(net_book_value_row(asset, req.as_of))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"{asset.item_code}: {e}")
    return rows


@router.post("/net-book-value", response_model=list[NetBookValueRowResponse])
async def net_book_value(req: ReportRequest):
    return [
        NetBookValueRowResponse(
            item_code=r.item_code,
            description=r.description,
            category=r.category,
            method=r.method.value,
            acquisition_cost=r.acquisition_cost,
            salvage_value=r.salvage_value,
            accumulated_depreciation=r.accumulated_depreciation,
            book_value=r.book_value,
            monthly_depreciation=r.monthly_depreciation,
            remaining_useful_life_months=r.remaining_useful_life_months,
            depreciation_rate=r.depreciation_rate,
            is_fully_depreciated=r.is_fully_depreciated,
            projected_full_depreciation_date=r.projected_full_depreciation_date,
            is_pre_depreciated=r.is_pre_depreciated,
        )
        for r in _rows(req)
    ]


@router.post("/summary", response_model=SummaryResponse)
async def summary(req: ReportRequest):
    """Depreciation totals by method and category."""
    s = summarize_rows(_rows(req), req.as_of)
    return SummaryResponse(
        as_of=s.as_of,
        total_assets=s.total_assets,
        total_acquisition_cost=s.total_acquisition_cost,
        total_book_value=s.total_book_value,
        total_accumulated_depreciation=s.total_accumulated_depreciation,
        total_monthly_depreciation=s.total_monthly_depreciation,
        fully_depreciated_count=s.fully_depreciated_count,
        by_method=[
            MethodBreakdownResponse(
                method=m.method.value, count=m.count, total_book_value=m.total_book_value
            )
            for m in s.by_method
        ],
        by_category=[
            CategoryBreakdownResponse(
                category=c.category,
                count=c.count,
                total_book_value=c.total_book_value,
                total_depreciation=c.total_depreciation,
            )
            for c in s.by_category
        ],
    )
