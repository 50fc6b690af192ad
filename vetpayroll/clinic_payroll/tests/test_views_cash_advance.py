import pytest
from decimal import Decimal


@pytest.mark.django_db
def test_cash_advance_flow(api_client, payrolls, staff):
    emp = staff["asst"]
    payroll = payrolls["asst"]

    resp = api_client.post("/api/cash-advances/", {"employee_id": emp.id, "amount": "800", "date_taken": "2025-01-05"}, format="json")
    assert resp.status_code == 201, resp.content
    advance_id = resp.json()["id"]
    assert resp.json()["employee_name"] == emp.name
    assert resp.json()["is_paid"] is False

    resp = api_client.get(f"/api/cash-advances/employee/{emp.id}/unpaid/")
    assert resp.status_code == 200
    assert resp.json()["total"] == "800.00"
    assert len(resp.json()["cash_advances"]) == 1

    resp = api_client.post(f"/api/cash-advances/{advance_id}/mark-paid/", {"payroll_id": payroll.id}, format="json")
    assert resp.status_code == 200, resp.content
    assert resp.json()["is_paid"] is True
    assert resp.json()["payroll"] == payroll.id

    resp = api_client.get(f"/api/payrolls/{payroll.id}/")
    body = resp.json()
    assert [(d["type"], d["amount"]) for d in body["deductions"]] == [("CASH_ADVANCE", "800.00")]
    assert body["net_pay"] == "14200.00"

    resp = api_client.get("/api/cash-advances/", {"employee_id": emp.id, "is_paid": "true"})
    assert resp.json()["count"] == 1

    resp = api_client.post(f"/api/cash-advances/{advance_id}/mark-paid/", {"payroll_id": payroll.id}, format="json")
    assert resp.status_code == 400
    assert api_client.delete(f"/api/cash-advances/{advance_id}/").status_code == 400

@pytest.mark.django_db
def test_cash_advance_validation(api_client, staff):
    resp = api_client.post("/api/cash-advances/", {"employee_id": staff["asst"].id, "amount": "0", "date_taken": "2025-01-05"}, format="json")
    assert resp.status_code == 400
    resp = api_client.post("/api/cash-advances/", {"employee_id": 9999, "amount": "10", "date_taken": "2025-01-05"}, format="json")
    assert resp.status_code == 404
    assert api_client.post("/api/cash-advances/9999/mark-paid/", {}, format="json").status_code == 404

@pytest.mark.django_db
def test_cash_advance_edit(api_client, staff):
    resp = api_client.post("/api/cash-advances/", {"employee_id": staff["groomer"].id, "amount": "300", "date_taken": "2025-01-02"}, format="json")
    advance_id = resp.json()["id"]
    resp = api_client.patch(f"/api/cash-advances/{advance_id}/", {"amount": "450.50"}, format="json")
    assert resp.status_code == 200
    assert Decimal(resp.json()["amount"]) == Decimal("450.50")
    assert api_client.delete(f"/api/cash-advances/{advance_id}/").status_code == 204
