"""CLI client for the Asset Depreciation API: posts an asset, prints its preview and schedule.

Usage:
    python asset-preview/preview_asset.py --cost 120000 --life-months 60 --start 2025-01-01
    python asset-preview/preview_asset.py --cost 50000 --life-months 60 --start 2023-01-01 --prior-amount 20000 --prior-months 24 --entry-book-value 30000
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _peso(v) -> str:
    return f"₱{Decimal(str(v)):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_preview(data: dict) -> None:
    _header(f"Depreciation Preview ({data['method']})")
    print(f"  Depreciable Base:      {_peso(data['depreciable_base'])}")
    print(f"  Monthly Depreciation:  {_peso(data['monthly_depreciation'])}")
    print(f"  Periods:               {data['total_periods']}")
    if data.get("annual_rate") is not None:
        print(f"  Annual Rate:           {float(data['annual_rate']):.2f}%")
    if data.get("fully_depreciated_on"):
        print(f"  Fully Depreciated On:  {data['fully_depreciated_on']}")


def print_notices(data: dict) -> None:
    notices = data.get("notices", [])
    if not notices:
        return
    print()
    for n in notices:
        print(f"  NOTE [{n['kind']}]: {n['message']}")


def print_schedule(data: dict, limit: int) -> None:
    entries = data.get("entries", [])
    _header("Schedule")
    if not entries:
        print("  No depreciation to schedule.")
        return
    print(f"  {'#':>4}  {'Period End':>10}  {'Charge':>14}  {'Accumulated':>16}  {'Book Value':>16}")
    print(f"  {'-' * 4}  {'-' * 10}  {'-' * 14}  {'-' * 16}  {'-' * 16}")
    shown = entries if limit <= 0 else entries[:limit]
    for e in shown:
        print(
            f"  {e['period_index']:>4}  {e['period_end']:>10}  {_peso(e['period_depreciation']):>14}  "
            f"{_peso(e['accumulated_depreciation']):>16}  {_peso(e['ending_book_value']):>16}"
        )
    if len(shown) < len(entries):
        last = entries[-1]
        print(f"  ... {len(entries) - len(shown)} more period(s), final book value {_peso(last['ending_book_value'])}")


# ── Main ─────────────────────────────────────────────────────────────────────

async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Preview an asset's depreciation via the Asset Depreciation API"
    )
    parser.add_argument("--cost", type=Decimal, required=True, help="Acquisition cost")
    parser.add_argument("--salvage", type=Decimal, help="Salvage value")
    parser.add_argument("--life-months", type=int, required=True, help="Useful life in months")
    parser.add_argument(
        "--method",
        choices=["STRAIGHT_LINE", "DECLINING_BALANCE", "SUM_OF_YEARS_DIGITS", "UNITS_OF_PRODUCTION"],
        default=None,
        help="Depreciation method (default: STRAIGHT_LINE)",
    )
    parser.add_argument("--rate", type=Decimal, help="Declining balance annual rate %%")
    parser.add_argument("--units-total", type=int, help="Total expected units")
    parser.add_argument("--start", required=True, help="Depreciation start date (YYYY-MM-DD)")
    parser.add_argument("--prior-amount", type=Decimal, help="Depreciation recognized before entry")
    parser.add_argument("--prior-months", type=int, help="Months already depreciated")
    parser.add_argument("--entry-book-value", type=Decimal, help="Book value at system entry")
    parser.add_argument("--rows", type=int, default=12, help="Schedule rows to print (0 = all)")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )

    args = parser.parse_args()

    # Build payload, only including non-None values
    financials: dict = {
        "acquisition_cost": str(args.cost),
        "useful_life_months": args.life_months,
        "start_date": args.start,
    }
    field_map = {
        "salvage": "salvage_value",
        "method": "method",
        "rate": "declining_rate_override",
        "units_total": "total_expected_units",
    }
    for cli_name, api_name in field_map.items():
        val = getattr(args, cli_name)
        if val is not None:
            financials[api_name] = val if not isinstance(val, Decimal) else str(val)

    payload: dict = {"financials": financials}
    if args.entry_book_value is not None:
        payload["prior"] = {
            "prior_depreciation_amount": str(args.prior_amount or Decimal("0")),
            "prior_depreciation_months": args.prior_months or 0,
            "entry_book_value": str(args.entry_book_value),
        }

    async with httpx.AsyncClient(base_url=args.api_url, timeout=30) as client:
        try:
            preview_resp = await client.post("/api/v1/depreciation/preview", json=payload)
            schedule_resp = await client.post("/api/v1/depreciation/schedule", json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn asset_depreciation.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        for resp in (preview_resp, schedule_resp):
            if resp.status_code != 200:
                print(f"Error: API returned {resp.status_code}", file=sys.stderr)
                try:
                    detail = resp.json().get("detail", resp.text)
                except ValueError:
                    detail = resp.text
                print(f"  {detail}", file=sys.stderr)
                sys.exit(1)

    preview = preview_resp.json()
    print_preview(preview)
    print_notices(preview)
    print_schedule(schedule_resp.json(), args.rows)
    print()


if __name__ == "__main__":
    asyncio.run(main())
