from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from asset_depreciation.api.app import app


@pytest.fixture
def client():
    return TestClient(app)


ASSETS = [
    {
        "item_code": "IT-00001",
        "category": "IT Equipment",
        "financials": {
            "acquisition_cost": "120000",
            "useful_life_months": 60,
            "start_date": "2025-01-01",
        },
    },
    {
        "item_code": "VH-00001",
        "category": "Vehicles",
        "financials": {
            "acquisition_cost": "100000",
            "salvage_value": "10000",
            "useful_life_months": 60,
            "method": "DECLINING_BALANCE",
            "start_date": "2025-01-01",
        },
    },
]


class TestNetBookValueRoute:
    def test_rows(self, client):
        resp = client.post(
            "/api/v1/reports/net-book-value",
            json={"as_of": "2025-01-31", "assets": ASSETS},
        )
        assert resp.status_code == 200
        rows = resp.json()
        assert [r["item_code"] for r in rows] == ["IT-00001", "VH-00001"]
        assert Decimal(rows[0]["book_value"]) == Decimal("118000")
        assert Decimal(rows[1]["monthly_depreciation"]) == Decimal("3333.33")
        assert rows[1]["method"] == "DECLINING_BALANCE"

    def test_invalid_asset_rejects_report(self, client):
        bad = {
            "item_code": "BAD-1",
            "financials": {
                "acquisition_cost": "1000",
                "useful_life_months": -1,
                "start_date": "2025-01-01",
            },
        }
        resp = client.post(
            "/api/v1/reports/net-book-value",
            json={"as_of": "2025-01-31", "assets": ASSETS + [bad]},
        )
        assert resp.status_code == 400
        assert resp.json()["detail"].startswith("BAD-1:")


class TestSummaryRoute:
    def test_summary(self, client):
        resp = client.post(
            "/api/v1/reports/summary",
            json={"as_of": "2025-01-31", "assets": ASSETS},
        )
        data = resp.json()
        assert data["total_assets"] == 2
        assert Decimal(data["total_book_value"]) == Decimal("214666.67")
        assert Decimal(data["total_monthly_depreciation"]) == Decimal("5333.33")
        assert [c["category"] for c in data["by_category"]] == ["IT Equipment", "Vehicles"]


NEGATIVE_UNITS = {
    "item_code": "MC-00001",
    "financials": {
        "acquisition_cost": "100000",
        "salvage_value": "10000",
        "useful_life_months": 60,
        "method": "UNITS_OF_PRODUCTION",
        "total_expected_units": 1000,
        "start_date": "2025-01-01",
    },
    "units_per_period": [10, -5],
}


class TestUnbuildableSchedule:
    @pytest.mark.parametrize("path", ["/api/v1/reports/summary", "/api/v1/reports/net-book-value"])
    def test_negative_units_is_400(self, client, path):
        resp = client.post(path, json={"as_of": "2025-01-31", "assets": ASSETS + [NEGATIVE_UNITS]})
        assert resp.status_code == 400
        assert resp.json()["detail"].startswith("MC-00001:")
        assert "negative" in resp.json()["detail"]
