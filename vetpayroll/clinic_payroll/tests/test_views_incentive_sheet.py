import pytest
from decimal import Decimal
from clinic_payroll.models import Incentive, IncentiveSheet


@pytest.mark.django_db
def test_sheet_flow(api_client, branch, staff, payrolls):
    resp = api_client.get("/api/incentive-sheets/", {
        "branch_id": branch.id, "start_date": "2025-01-01", "end_date": "2025-01-15",
    })
    assert resp.status_code == 200, resp.content
    body = resp.json()
    sheet_id = body["sheet"]["id"]
    assert len(body["days"]) == 15
    assert IncentiveSheet.objects.count() == 1

    resp = api_client.put(f"/api/incentive-sheets/{sheet_id}/inputs/", {"inputs": [
        {"date": "2025-01-02", "type": "CONFINEMENT", "value": 10},
    ]}, format="json")
    assert resp.status_code == 200, resp.content
    preview = {r["config_key"]: r for r in resp.json()["distribution_preview"]}
    assert preview["CONFINEMENT_VET"]["per_person"] == "137.50"

    resp = api_client.post(f"/api/incentive-sheets/{sheet_id}/distribute/")
    assert resp.status_code == 200, resp.content
    assert resp.json()["affected_payrolls"] == 3
    assert Incentive.objects.get(payroll=payrolls["res2"], incentive_type="CONFINEMENT_VET").amount == Decimal("137.50")

@pytest.mark.django_db
def test_sheet_input_outside_range(api_client, sheet):
    resp = api_client.put(f"/api/incentive-sheets/{sheet.id}/inputs/", {"inputs": [
        {"date": "2025-03-01", "type": "SURGERY", "value": 1},
    ]}, format="json")
    assert resp.status_code == 400

@pytest.mark.django_db
def test_sheet_requires_query(api_client):
    assert api_client.get("/api/incentive-sheets/").status_code == 400

@pytest.mark.django_db
def test_distribution_config(api_client):
    resp = api_client.get("/api/incentive-sheets/config/")
    assert resp.status_code == 200
    assert resp.json()["shared_types"] == ["GROOMING", "SURGERY", "EMERGENCY", "CONFINEMENT"]
