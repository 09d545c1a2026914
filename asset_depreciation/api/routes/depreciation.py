"""Depreciation routes: schedule, preview, book value, and month-end runs."""

from fastapi import APIRouter, HTTPException

from asset_depreciation.api.schemas import (
    AssetRunResponse,
    BatchRequest,
    BatchResponse,
    BookValueRequest,
    BookValueResponse,
    NoticeResponse,
    PeriodChargeResponse,
    PreviewResponse,
    ScheduleEntryResponse,
    ScheduleRequest,
    ScheduleResponse,
)
from asset_depreciation.config import settings
from asset_depreciation.engine.book_value import value_as_of
from asset_depreciation.engine.period_close import (
    AssetRunResult,
    collect_batch,
    failed_result,
    run_asset,
)
from asset_depreciation.engine.pre_depreciation import remaining_schedule
from asset_depreciation.engine.preview import preview
from asset_depreciation.engine.schedule import generate
from asset_depreciation.models.schedule import DepreciationSchedule, Notice

router = APIRouter(prefix="/api/v1/depreciation", tags=["depreciation"])


def _notices(notices: tuple[Notice, ...]) -> list[NoticeResponse]:
    return [
        NoticeResponse(kind=n.kind.value, message=n.message, period_index=n.period_index)
        for n in notices
    ]


def _build_schedule(req: ScheduleRequest) -> DepreciationSchedule:
    financials = req.financials.to_financials()
    if req.prior is not None:
        return remaining_schedule(financials, req.prior.to_prior(), req.units_per_period)
    return generate(financials, req.units_per_period)


def _schedule_to_response(schedule: DepreciationSchedule) -> ScheduleResponse:
    f = schedule.financials
    entries = [
        ScheduleEntryResponse(
            period_index=e.period_index,
            period_start=e.period_start,
            period_end=e.period_end,
            opening_book_value=e.opening_book_value,
            period_depreciation=e.period_depreciation,
            accumulated_depreciation=e.accumulated_depreciation,
            ending_book_value=e.ending_book_value,
            units=e.units,
            needs_usage_data=e.needs_usage_data,
        )
        for e in schedule.entries
    ]
    return ScheduleResponse(
        method=f.method.value,
        acquisition_cost=f.acquisition_cost,
        salvage_value=f.salvage_value,
        depreciable_base=f.depreciable_base,
        total_depreciation=schedule.total_depreciation,
        final_book_value=schedule.final_book_value,
        fully_depreciated_on=schedule.fully_depreciated_on,
        entries=entries,
        notices=_notices(schedule.notices),
    )


def _run_to_response(result: AssetRunResult) -> AssetRunResponse:
    charge = None
    if result.charge is not None:
        c = result.charge
        charge = PeriodChargeResponse(
            period_index=c.period_index,
            period_start=c.period_start,
            period_end=c.period_end,
            book_value_before=c.book_value_before,
            depreciation_amount=c.depreciation_amount,
            book_value_after=c.book_value_after,
            accumulated_depreciation=c.accumulated_depreciation,
            is_fully_depreciated=c.is_fully_depreciated,
            next_depreciation_date=c.next_depreciation_date,
        )
    return AssetRunResponse(
        item_code=result.item_code,
        status=result.status.value,
        charge=charge,
        error=result.error,
        notices=_notices(result.notices),
    )


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: ScheduleRequest):
    """Full monthly schedule. Pre-depreciated assets get future periods only."""
    try:
        result = _build_schedule(req)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _schedule_to_response(result)


@router.post("/preview", response_model=PreviewResponse)
async def preview_asset(req: ScheduleRequest):
    """Monthly depreciation estimate for an asset being entered."""
    try:
        prior = req.prior.to_prior() if req.prior else None
        result = preview(req.financials.to_financials(), req.units_per_period, prior)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PreviewResponse(
        method=result.method.value,
        depreciable_base=result.depreciable_base,
        monthly_depreciation=result.monthly_depreciation,
        total_periods=result.total_periods,
        annual_rate=result.annual_rate,
        fully_depreciated_on=result.fully_depreciated_on,
        currency_code=settings.currency_code,
        notices=_notices(result.notices),
    )


@router.post("/book-value", response_model=BookValueResponse)
async def book_value(req: BookValueRequest):
    """Accumulated depreciation and book value at a report date."""
    try:
        result = _build_schedule(req)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    value = value_as_of(result, req.as_of)
    return BookValueResponse(
        as_of=value.as_of,
        accumulated_depreciation=value.accumulated_depreciation,
        book_value=value.book_value,
        period_index=value.period_index,
        is_fully_depreciated=value.is_fully_depreciated,
        notices=_notices(result.notices),
    )


@router.post("/batch", response_model=BatchResponse)
async def run_depreciation(req: BatchRequest):
    """Month-end run. Invalid assets are reported as failed; the rest proceed."""
    results: list[AssetRunResult] = []
    for item in req.assets:
        try:
            asset = item.to_asset()
        except ValueError as e:
            results.append(failed_result(item.item_code, str(e)))
            continue
        results.append(run_asset(asset, req.period_date))

    batch = collect_batch(req.period_date, results)
    return BatchResponse(
        period_date=batch.period_date,
        status=batch.status.value,
        processed=batch.processed,
        successful=batch.successful,
        skipped=batch.skipped,
        failed=batch.failed,
        total_depreciation=batch.total_depreciation,
        results=[_run_to_response(r) for r in batch.results],
    )
