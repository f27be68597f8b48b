from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from depreciation_app import main
from depreciation_app.models.common import ProRataBasis, RegisterSettings
from depreciation_app.sample_data import build_sample_assets
from depreciation_app.services.fiscal import period_year


@pytest.fixture
def client():
    main.ASSETS.clear()
    yield TestClient(main.app)
    main.ASSETS.clear()


@pytest.fixture
def loaded_client(client):
    for asset in build_sample_assets():
        main.ASSETS[asset.id] = asset
    return client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_asset_and_fetch_schedules(client):
    payload = {
        "asset": {
            "name": "Server Rack",
            "purchase_date": "2024-10-01",
            "purchase_value": "100000",
            "used_for": "Both",
            "useful_life_years": 5,
            "depreciation_rate_percent": "40",
            "additional_depreciation_eligible": True,
        }
    }
    response = client.post("/assets", json=payload)
    assert response.status_code == 200
    asset_id = response.json()["asset_id"]

    schedules = client.get(f"/assets/{asset_id}/schedules").json()["schedules"]
    assert [schedule["law"] for schedule in schedules] == ["Companies Act", "IT Act"]
    assert Decimal(schedules[0]["entries"][0]["depreciation"]) == Decimal("4750")
    assert schedules[0]["entries"][0]["is_pro_rata"] is True
    it_first = schedules[1]["entries"][0]
    assert Decimal(it_first["depreciation"]) == Decimal("20000")
    assert Decimal(it_first["additional_depreciation"]) == Decimal("10000")


def test_create_asset_from_category(client):
    payload = {
        "asset": {"name": "Car", "purchase_date": "2024-04-10", "purchase_value": "800000", "used_for": "Both"},
        "companies_act_category": "Motor Vehicles",
        "it_act_category": "Motor Cars (non-commercial)",
    }
    asset_id = client.post("/assets", json=payload).json()["asset_id"]

    asset = client.get(f"/assets/{asset_id}").json()
    assert asset["useful_life_years"] == 8
    assert Decimal(asset["depreciation_rate_percent"]) == Decimal("15")

    bad = dict(payload, companies_act_category="Spaceships")
    assert client.post("/assets", json=bad).status_code == 404


def test_invalid_asset_is_rejected(client):
    payload = {"asset": {"name": "Bad", "purchase_date": "2024-01-01", "purchase_value": "-1"}}
    response = client.post("/assets", json=payload)
    assert response.status_code == 422


def test_unknown_asset_returns_404(client):
    assert client.get("/assets/missing/schedules").status_code == 404
    assert client.delete("/assets/missing").status_code == 404


def test_delete_asset(loaded_client):
    assert loaded_client.delete("/assets/laptop-001").json() == {"status": "deleted"}
    assert loaded_client.get("/assets/laptop-001").status_code == 404


def test_schedule_csv_export(loaded_client):
    response = loaded_client.get("/assets/laptop-001/schedules/it-act.csv")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.text.splitlines()[0] == "Year,Opening Value,Depreciation,Additional Depreciation,Closing Value"

    assert loaded_client.get("/assets/furniture-001/schedules/it-act.csv").status_code == 404
    assert loaded_client.get("/assets/laptop-001/schedules/gst.csv").status_code == 404


def test_inline_schedule_computation(client):
    payload = {
        "asset": {
            "id": "adhoc",
            "name": "Chair",
            "purchase_date": "2024-01-01",
            "purchase_value": "10000",
            "useful_life_years": 2,
        }
    }
    body = client.post("/schedules", json=payload).json()
    assert body["asset_id"] == "adhoc"
    assert Decimal(body["schedules"][0]["current_wdv"]) == Decimal("500")
    assert main.ASSETS == {}


def test_reports(loaded_client):
    reconciliation = loaded_client.get("/reports/reconciliation").json()
    assert len(reconciliation["rows"]) == 2

    disposals = loaded_client.get("/reports/disposals").json()
    assert Decimal(disposals["total_gain_loss"]) == Decimal("-30000")

    depreciation = loaded_client.get("/reports/depreciation", params={"law": "companies-act", "year": 2022}).json()
    assert len(depreciation["rows"]) == 3

    register = loaded_client.get("/reports/register.csv")
    assert len(register.text.splitlines()) == 4


def test_categories(client):
    categories = client.get("/categories", params={"law": "it-act"}).json()["categories"]
    assert {category["law"] for category in categories} == {"IT Act"}
    assert len(client.get("/categories").json()["categories"]) == 14


def test_report_csv_exports(loaded_client):
    reconciliation = loaded_client.get("/reports/reconciliation.csv")
    assert reconciliation.headers["content-type"].startswith("text/csv")
    lines = reconciliation.text.splitlines()
    assert lines[0].startswith("Asset Name,Category,Purchase Value,Companies Act WDV")
    assert lines[-1].startswith("Total,,2650000.00")

    production = loaded_client.get("/reports/reconciliation.csv", params={"department": "Production"})
    assert len(production.text.splitlines()) == 3

    disposals = loaded_client.get("/reports/disposals.csv").text.splitlines()
    assert disposals[1] == "Boardroom Furniture,2024-03-31,400000.00,210000.00,180000.00,-30000.00"
    assert disposals[-1].startswith("Total,")

    depreciation = loaded_client.get("/reports/depreciation.csv", params={"law": "it-act", "year": 2024})
    assert depreciation.text.splitlines()[0].endswith("Current WDV")
    assert len(depreciation.text.splitlines()) == 3
    assert loaded_client.get("/reports/depreciation.csv", params={"law": "gst"}).status_code == 404


def test_multi_asset_schedule_export(loaded_client):
    response = loaded_client.get("/schedules/it-act.csv")
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.splitlines()
    assert lines[0] == "Depreciation Schedule - IT Act"
    assert lines[1] == f"Generated on: {date.today().isoformat()}"
    assert lines[3].startswith("Asset Name,Year,Opening Value")
    assert {line.split(",")[0] for line in lines[4:]} == {"Engineering Laptop", "Hydraulic Press"}

    companies = loaded_client.get("/schedules/companies-act.csv").text.splitlines()
    assert "Boardroom Furniture" in {line.split(",")[0] for line in companies[4:]}
    assert loaded_client.get("/schedules/gst.csv").status_code == 404


def test_summary(loaded_client):
    summary = loaded_client.get("/reports/summary", params={"year": 2022}).json()
    assert summary["total_assets"] == 3
    assert summary["disposed_assets"] == 1
    assert summary["companies_act_assets"] == 2
    assert Decimal(summary["total_current_year_depreciation"]) == Decimal("1013542")


def test_reports_default_to_current_fiscal_period(client, monkeypatch):
    days_settings = RegisterSettings(pro_rata_basis=ProRataBasis.DAYS)
    monkeypatch.setattr(main, "register_settings", days_settings)
    expected = period_year(date.today(), days_settings)

    assert client.get("/reports/depreciation").json()["year"] == expected
    assert client.get("/reports/summary").json()["year"] == expected


def test_category_rate_carried_to_companies_act_schedule(client):
    payload = {
        "asset": {"name": "Van", "purchase_date": "2024-01-01", "purchase_value": "100000"},
        "companies_act_category": "Motor Vehicles",
    }
    asset_id = client.post("/assets", json=payload).json()["asset_id"]

    schedule = client.get(f"/assets/{asset_id}/schedules").json()["schedules"][0]
    assert Decimal(schedule["rate_percent"]) == Decimal("11.88")
    assert Decimal(schedule["entries"][0]["depreciation"]) == Decimal("11880")
