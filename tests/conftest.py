"""Canonical test fixtures used across all engine tests.

Fixture: ₱120K laptop fleet, 60-month straight-line, no salvage.
Vehicle: ₱100K, ₱10K salvage, 60-month double declining balance.
"""

import pytest
from datetime import date
from decimal import Decimal

from asset_depreciation.models.asset import AssetRecord
from asset_depreciation.models.financials import (
    AssetFinancials,
    DepreciationMethod,
    PriorAccrual,
)


@pytest.fixture
def straight_line_financials() -> AssetFinancials:
    """₱120,000 over 60 months, no salvage: ₱2,000/month."""
    return AssetFinancials(
        acquisition_cost=Decimal("120000"),
        salvage_value=Decimal("0"),
        useful_life_months=60,
        method=DepreciationMethod.STRAIGHT_LINE,
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def declining_financials() -> AssetFinancials:
    """₱100,000, ₱10,000 salvage, 5 years: 40% double declining rate."""
    return AssetFinancials(
        acquisition_cost=Decimal("100000"),
        salvage_value=Decimal("10000"),
        useful_life_months=60,
        method=DepreciationMethod.DECLINING_BALANCE,
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def syd_financials() -> AssetFinancials:
    """₱15,000 over 5 years: digits sum to 15."""
    return AssetFinancials(
        acquisition_cost=Decimal("15000"),
        useful_life_months=60,
        method=DepreciationMethod.SUM_OF_YEARS_DIGITS,
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def units_financials() -> AssetFinancials:
    """₱90,000 depreciable base spread over 1,000 units."""
    return AssetFinancials(
        acquisition_cost=Decimal("100000"),
        salvage_value=Decimal("10000"),
        useful_life_months=60,
        method=DepreciationMethod.UNITS_OF_PRODUCTION,
        total_expected_units=1000,
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def pre_depreciated_original() -> AssetFinancials:
    """₱50,000 asset bought Jan 2023, 60-month life."""
    return AssetFinancials(
        acquisition_cost=Decimal("50000"),
        useful_life_months=60,
        start_date=date(2023, 1, 1),
    )


@pytest.fixture
def prior_accrual() -> PriorAccrual:
    """24 months already depreciated, entered at ₱30,000."""
    return PriorAccrual(
        prior_depreciation_amount=Decimal("20000"),
        prior_depreciation_months=24,
        entry_book_value=Decimal("30000"),
    )


@pytest.fixture
def laptop_asset(straight_line_financials) -> AssetRecord:
    return AssetRecord(
        item_code="IT-00001",
        description="Laptop fleet",
        category="IT Equipment",
        financials=straight_line_financials,
    )


@pytest.fixture
def vehicle_asset(declining_financials) -> AssetRecord:
    return AssetRecord(
        item_code="VH-00001",
        description="Delivery van",
        category="Vehicles",
        financials=declining_financials,
    )


@pytest.fixture
def migrated_asset(pre_depreciated_original, prior_accrual) -> AssetRecord:
    return AssetRecord(
        item_code="IT-00002",
        description="Server carried over from legacy register",
        category="IT Equipment",
        financials=pre_depreciated_original,
        prior=prior_accrual,
    )
