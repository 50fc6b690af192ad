import pytest
from clinic_payroll.models import Employee


@pytest.mark.django_db
def test_employee_create_computes_rates(api_client, branch):
    payload = {"branch": branch.id, "name": "Hana", "position": "VETERINARY_ASSISTANT", "salary": "45000.00"}
    resp = api_client.post("/api/employees/", payload, format="json")
    assert resp.status_code == 201, resp.content
    assert resp.json()["rate_per_day"] == "1725.24"
    assert resp.json()["rate_formula"] == "Annual: (Salary × 12) ÷ 313"

@pytest.mark.django_db
def test_employee_create_half_manual_rates_rejected(api_client, branch):
    payload = {"branch": branch.id, "name": "Ivy", "position": "STAFF", "salary": "15000", "rate_per_day": "600"}
    assert api_client.post("/api/employees/", payload, format="json").status_code == 400

@pytest.mark.django_db
def test_employee_list_filters(api_client, staff, branch):
    resp = api_client.get("/api/employees/", {"branch_id": branch.id, "position": "resident_veterinarian"})
    assert resp.status_code == 200
    assert resp.json()["count"] == 2

@pytest.mark.django_db
def test_recalculate_rates_endpoint(api_client, staff):
    emp = staff["res1"]
    resp = api_client.post(f"/api/employees/{emp.id}/recalculate-rates/")
    assert resp.status_code == 200
    # 45000 ÷ 26 branch days
    assert resp.json()["rate_per_day"] == "1730.77"

@pytest.mark.django_db
def test_fixed_deductions_replace(api_client, staff):
    emp = staff["asst"]
    resp = api_client.put(f"/api/employees/{emp.id}/fixed-deductions/", {"deductions": [
        {"type": "SSS", "category": "GOVERNMENT", "amount": "1125"},
        {"type": "SUNLIFE", "category": "INSURANCE", "amount": "500"},
    ]}, format="json")
    assert resp.status_code == 200, resp.content
    assert {d["type"] for d in resp.json()} == {"SSS", "SUNLIFE"}

@pytest.mark.django_db
def test_toggle_exclusion_endpoint(api_client, staff):
    emp = staff["jr1"]
    url = f"/api/employees/{emp.id}/incentive-exclusions/toggle/"
    resp = api_client.post(url, {"incentive_type": "confinement_vet"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["excluded"] is True
    resp = api_client.get(f"/api/employees/{emp.id}/incentive-exclusions/")
    assert [e["incentive_type"] for e in resp.json()] == ["CONFINEMENT_VET"]
    assert api_client.post(url, {}, format="json").status_code == 400

@pytest.mark.django_db
def test_branch_patch_recomputes(api_client, branch, staff):
    resp = api_client.patch(f"/api/branches/{branch.id}/", {"working_days_per_month": 25}, format="json")
    assert resp.status_code == 200, resp.content
    assert resp.json()["recalculated_employees"] == 2
    assert Employee.objects.get(id=staff["res1"].id).rate_per_day == 1800

@pytest.mark.django_db
def test_incentive_config_endpoints(api_client):
    resp = api_client.get("/api/incentive-configs/")
    assert resp.status_code == 200
    assert resp.json()[0]["incentive_type"] == "CBC"

    assert api_client.post("/api/incentive-configs/init/").status_code == 201
    assert api_client.post("/api/incentive-configs/init/").status_code == 400

    resp = api_client.put("/api/incentive-configs/CBC/", {"rate": "65"}, format="json")
    assert resp.status_code == 200, resp.content
    assert resp.json()["rate"] == "65.0000"
    assert resp.json()["version"] == 2

    resp = api_client.get("/api/incentive-configs/position/GROOMER/")
    assert "GROOMING" in [c["incentive_type"] for c in resp.json()]
