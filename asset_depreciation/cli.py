"""CLI for previewing depreciation schedules.

Usage:
    python -m asset_depreciation.cli --cost 120000 --life-months 60 --start 2025-01-01
    python -m asset_depreciation.cli --cost 100000 --salvage 10000 --life-months 60 --method DECLINING_BALANCE --start 2025-01-01 --preview
    python -m asset_depreciation.cli --cost 50000 --life-months 60 --start 2023-01-01 --prior-amount 20000 --prior-months 24 --entry-book-value 30000 --as-of 2026-06-30
"""

import argparse
import sys
from datetime import date
from decimal import Decimal

from asset_depreciation.config import settings
from asset_depreciation.engine.book_value import value_as_of
from asset_depreciation.engine.pre_depreciation import remaining_schedule
from asset_depreciation.engine.preview import preview
from asset_depreciation.engine.schedule import generate
from asset_depreciation.models.financials import (
    AssetFinancials,
    DepreciationMethod,
    PriorAccrual,
)


def _money(v: Decimal) -> str:
    return f"{settings.currency_symbol}{v:,.2f}"


def _parse_units(raw: str) -> list[int | None]:
    """Comma-separated units per month; blank or '-' marks a missing report."""
    units: list[int | None] = []
    for part in raw.split(","):
        part = part.strip()
        units.append(None if part in ("", "-") else int(part))
    return units


def print_preview(p) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Depreciation Preview ({p.method.value})")
    print(f"{'=' * 60}")
    print(f"  Depreciable Base:      {_money(p.depreciable_base)}")
    print(f"  Monthly Depreciation:  {_money(p.monthly_depreciation)}")
    print(f"  Periods:               {p.total_periods}")
    if p.annual_rate is not None:
        print(f"  Annual Rate:           {p.annual_rate:.2f}%")
    if p.fully_depreciated_on:
        print(f"  Fully Depreciated On:  {p.fully_depreciated_on.isoformat()}")
    print_notices(p.notices)


def print_schedule(schedule) -> None:
    f = schedule.financials
    print(f"\n{'=' * 78}")
    print(f"  Schedule ({f.method.value}): cost {_money(f.acquisition_cost)}, salvage {_money(f.salvage_value)}")
    print(f"{'=' * 78}")
    if schedule.is_empty:
        print("  No depreciation to schedule.")
    for e in schedule.entries:
        flag = "  *no usage*" if e.needs_usage_data else ""
        print(
            f"  {e.period_index:>4}  {e.period_start.isoformat()} – {e.period_end.isoformat()}"
            f"  {_money(e.period_depreciation):>14}  {_money(e.accumulated_depreciation):>16}"
            f"  {_money(e.ending_book_value):>16}{flag}"
        )
    print_notices(schedule.notices)


def print_notices(notices) -> None:
    if not notices:
        print()
        return
    print()
    for n in notices:
        print(f"  NOTE [{n.kind.value}]: {n.message}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Asset depreciation schedule CLI")
    parser.add_argument("--cost", type=Decimal, required=True, help="Acquisition cost")
    parser.add_argument("--salvage", type=Decimal, default=Decimal("0"), help="Salvage value (default: 0)")
    parser.add_argument("--life-months", type=int, required=True, help="Useful life in months")
    parser.add_argument(
        "--method",
        choices=[m.value for m in DepreciationMethod],
        default=DepreciationMethod.STRAIGHT_LINE.value,
        help="Depreciation method",
    )
    parser.add_argument("--rate", type=Decimal, default=None, help="Annual declining balance rate %%")
    parser.add_argument("--units-total", type=int, default=None, help="Total expected units")
    parser.add_argument("--units", default=None, help="Units per month, comma-separated")
    parser.add_argument("--start", type=date.fromisoformat, required=True, help="Depreciation start date (YYYY-MM-DD)")
    parser.add_argument("--prior-amount", type=Decimal, default=None, help="Depreciation recognized before entry")
    parser.add_argument("--prior-months", type=int, default=0, help="Months already depreciated")
    parser.add_argument("--entry-book-value", type=Decimal, default=None, help="Book value at system entry")
    parser.add_argument("--as-of", type=date.fromisoformat, default=None, help="Report book value at this date")
    parser.add_argument("--preview", action="store_true", help="Show the monthly estimate only")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    units = _parse_units(args.units) if args.units else None
    try:
        financials = AssetFinancials(
            acquisition_cost=args.cost,
            salvage_value=args.salvage,
            useful_life_months=args.life_months,
            method=DepreciationMethod(args.method),
            declining_rate_override=args.rate,
            total_expected_units=args.units_total,
            start_date=args.start,
        )
        prior = None
        if args.prior_amount is not None or args.entry_book_value is not None:
            prior_amount = args.prior_amount or Decimal("0")
            prior = PriorAccrual(
                prior_depreciation_amount=prior_amount,
                prior_depreciation_months=args.prior_months,
                entry_book_value=(
                    args.entry_book_value
                    if args.entry_book_value is not None
                    else args.cost - prior_amount
                ),
            )

        if args.preview:
            print_preview(preview(financials, units, prior))
            return 0

        if prior is not None:
            schedule = remaining_schedule(financials, prior, units)
        else:
            schedule = generate(financials, units)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print_schedule(schedule)
    if args.as_of:
        value = value_as_of(schedule, args.as_of)
        print(f"  As of {value.as_of.isoformat()}:")
        print(f"    Accumulated Depreciation:  {_money(value.accumulated_depreciation)}")
        print(f"    Book Value:                {_money(value.book_value)}")
        print(f"    Fully Depreciated:         {'Yes' if value.is_fully_depreciated else 'No'}")
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
