from datetime import date
from decimal import Decimal

import pytest

from asset_depreciation.engine.schedule import declining_rate, generate
from asset_depreciation.models.errors import InvalidInput
from asset_depreciation.models.financials import AssetFinancials, DepreciationMethod
from asset_depreciation.models.schedule import NoticeKind


def _assert_monotonic(schedule):
    salvage = schedule.financials.salvage_value
    cost = schedule.financials.acquisition_cost
    previous_accumulated = Decimal("0")
    previous_book_value = cost
    for entry in schedule.entries:
        assert entry.accumulated_depreciation >= previous_accumulated
        assert entry.ending_book_value <= previous_book_value
        assert entry.ending_book_value >= salvage
        assert entry.ending_book_value == cost - entry.accumulated_depreciation
        previous_accumulated = entry.accumulated_depreciation
        previous_book_value = entry.ending_book_value


class TestStraightLine:
    def test_flat_monthly_charge(self, straight_line_financials):
        """₱120,000 over 60 months = ₱2,000.00 every period."""
        schedule = generate(straight_line_financials)
        assert len(schedule.entries) == 60
        assert all(e.period_depreciation == Decimal("2000.00") for e in schedule.entries)

    def test_fully_depreciated_after_60_periods(self, straight_line_financials):
        schedule = generate(straight_line_financials)
        last = schedule.entries[-1]
        assert last.accumulated_depreciation == Decimal("120000.00")
        assert last.ending_book_value == Decimal("0.00")

    def test_final_period_absorbs_rounding(self):
        financials = AssetFinancials(
            acquisition_cost=Decimal("1000"),
            useful_life_months=3,
            start_date=date(2025, 1, 1),
        )
        charges = [e.period_depreciation for e in generate(financials).entries]
        assert charges == [Decimal("333.33"), Decimal("333.33"), Decimal("333.34")]
        assert sum(charges) == Decimal("1000")

    def test_tiny_base_runs_full_life(self):
        """Sub-cent monthly charges truncate to zero; the final period takes the base."""
        financials = AssetFinancials(
            acquisition_cost=Decimal("0.50"),
            useful_life_months=60,
            start_date=date(2025, 1, 1),
        )
        schedule = generate(financials)
        assert len(schedule.entries) == 60
        assert schedule.entries[0].period_depreciation == Decimal("0.00")
        assert schedule.entries[-1].period_depreciation == Decimal("0.50")
        assert schedule.final_book_value == Decimal("0")

    def test_charges_never_exhaust_base_early(self):
        financials = AssetFinancials(
            acquisition_cost=Decimal("1.00"),
            useful_life_months=60,
            start_date=date(2025, 1, 1),
        )
        charges = [e.period_depreciation for e in generate(financials).entries]
        assert len(charges) == 60
        assert set(charges[:-1]) == {Decimal("0.01")}
        assert charges[-1] == Decimal("0.41")

    def test_stops_at_salvage(self):
        financials = AssetFinancials(
            acquisition_cost=Decimal("120000"),
            salvage_value=Decimal("20000"),
            useful_life_months=60,
            start_date=date(2025, 1, 1),
        )
        schedule = generate(financials)
        assert schedule.total_depreciation == Decimal("100000")
        assert schedule.final_book_value == Decimal("20000")
        _assert_monotonic(schedule)

    def test_monthly_periods(self, straight_line_financials):
        entries = generate(straight_line_financials).entries
        assert entries[0].period_start == date(2025, 1, 1)
        assert entries[0].period_end == date(2025, 1, 31)
        assert entries[1].period_start == date(2025, 2, 1)
        assert entries[1].period_end == date(2025, 2, 28)
        assert entries[-1].period_end == date(2029, 12, 31)

    def test_opening_book_value_chains(self, straight_line_financials):
        entries = generate(straight_line_financials).entries
        assert entries[0].opening_book_value == Decimal("120000")
        for prev, cur in zip(entries, entries[1:]):
            assert cur.opening_book_value == prev.ending_book_value


class TestDecliningBalance:
    def test_default_double_declining_rate(self, declining_financials):
        """5-year life: 2 / 5 * 100 = 40% per year."""
        assert declining_rate(declining_financials) == Decimal("40")

    def test_rate_override(self, declining_financials):
        from dataclasses import replace
        financials = replace(declining_financials, declining_rate_override=Decimal("30"))
        assert declining_rate(financials) == Decimal("30")

    def test_first_period(self, declining_financials):
        """100,000 * 40% / 12 = 3,333.33."""
        first = generate(declining_financials).entries[0]
        assert first.period_depreciation == Decimal("3333.33")
        assert first.ending_book_value == Decimal("96666.67")

    def test_charge_follows_book_value(self, declining_financials):
        entries = generate(declining_financials).entries
        # 96,666.67 * 40% / 12
        assert entries[1].period_depreciation == Decimal("3222.22")

    def test_terminates_at_floor(self):
        """50%/month: 5000, 2500, 1250, then only 250 left above salvage."""
        financials = AssetFinancials(
            acquisition_cost=Decimal("10000"),
            salvage_value=Decimal("1000"),
            useful_life_months=60,
            method=DepreciationMethod.DECLINING_BALANCE,
            declining_rate_override=Decimal("600"),
            start_date=date(2025, 1, 1),
        )
        schedule = generate(financials)
        charges = [e.period_depreciation for e in schedule.entries]
        assert charges == [
            Decimal("5000.00"), Decimal("2500.00"), Decimal("1250.00"), Decimal("250.00"),
        ]
        assert schedule.final_book_value == Decimal("1000")
        assert schedule.fully_depreciated_on == date(2025, 4, 30)

    def test_written_down_to_salvage_at_end_of_life(self, declining_financials):
        schedule = generate(declining_financials)
        assert len(schedule.entries) == 60
        assert schedule.final_book_value == Decimal("10000")
        _assert_monotonic(schedule)


class TestSumOfYearsDigits:
    def test_first_year_weight(self, syd_financials):
        """Year 1 weight 5/15 of ₱15,000 = ₱5,000/year, truncated to ₱416.66/month."""
        entries = generate(syd_financials).entries
        assert entries[0].period_depreciation == Decimal("416.66")

    def test_second_year_weight(self, syd_financials):
        """Year 2 weight 4/15 = ₱4,000/year = ₱333.33/month."""
        entries = generate(syd_financials).entries
        assert entries[12].period_depreciation == Decimal("333.33")

    def test_conserves_depreciable_base(self, syd_financials):
        schedule = generate(syd_financials)
        assert len(schedule.entries) == 60
        assert sum(e.period_depreciation for e in schedule.entries) == Decimal("15000")
        _assert_monotonic(schedule)

    def test_tiny_base_runs_full_life(self):
        financials = AssetFinancials(
            acquisition_cost=Decimal("0.50"),
            useful_life_months=60,
            method=DepreciationMethod.SUM_OF_YEARS_DIGITS,
            start_date=date(2025, 1, 1),
        )
        schedule = generate(financials)
        assert len(schedule.entries) == 60
        assert schedule.total_depreciation == Decimal("0.50")
        _assert_monotonic(schedule)

    def test_partial_final_year(self):
        """30 months: years weighted 3/6, 2/6, 1/6; the 6-month year expenses its full share."""
        financials = AssetFinancials(
            acquisition_cost=Decimal("9000"),
            useful_life_months=30,
            method=DepreciationMethod.SUM_OF_YEARS_DIGITS,
            start_date=date(2025, 1, 1),
        )
        entries = generate(financials).entries
        assert entries[0].period_depreciation == Decimal("375.00")
        assert entries[12].period_depreciation == Decimal("250.00")
        assert entries[24].period_depreciation == Decimal("250.00")
        assert entries[-1].accumulated_depreciation == Decimal("9000")


class TestUnitsOfProduction:
    def test_charge_per_unit(self, units_financials):
        """₱90,000 base * 50 / 1,000 units = ₱4,500."""
        schedule = generate(units_financials, [50])
        assert schedule.entries[0].period_depreciation == Decimal("4500.00")
        assert schedule.entries[0].units == 50

    def test_no_usage_stream(self, units_financials):
        schedule = generate(units_financials)
        assert schedule.is_empty
        assert schedule.notices[0].kind == NoticeKind.INSUFFICIENT_USAGE_DATA

    def test_missing_period_flagged(self, units_financials):
        schedule = generate(units_financials, [50, None, 100])
        missing = schedule.entries[1]
        assert missing.period_depreciation == Decimal("0")
        assert missing.needs_usage_data is True
        assert [n.period_index for n in schedule.notices] == [2]
        assert schedule.entries[2].period_depreciation == Decimal("9000.00")

    def test_stops_when_units_exhausted(self, units_financials):
        schedule = generate(units_financials, [600, 500, 100])
        assert len(schedule.entries) == 2
        assert schedule.entries[0].period_depreciation == Decimal("54000.00")
        assert schedule.entries[1].period_depreciation == Decimal("36000.00")
        assert schedule.final_book_value == Decimal("10000")

    def test_negative_units_rejected(self, units_financials):
        with pytest.raises(InvalidInput):
            generate(units_financials, [10, -5])


class TestScheduleProperties:
    def test_empty_when_nothing_to_depreciate(self):
        financials = AssetFinancials(
            acquisition_cost=Decimal("5000"),
            salvage_value=Decimal("5000"),
            useful_life_months=12,
            start_date=date(2025, 1, 1),
        )
        schedule = generate(financials)
        assert schedule.is_empty
        assert schedule.final_book_value == Decimal("5000")

    def test_idempotent(self, straight_line_financials, declining_financials, syd_financials):
        for financials in (straight_line_financials, declining_financials, syd_financials):
            assert generate(financials) == generate(financials)

    def test_monotonic_all_methods(
        self, straight_line_financials, declining_financials, syd_financials, units_financials
    ):
        _assert_monotonic(generate(straight_line_financials))
        _assert_monotonic(generate(declining_financials))
        _assert_monotonic(generate(syd_financials))
        _assert_monotonic(generate(units_financials, [100, 250, None, 400, 300]))
