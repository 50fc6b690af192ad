import pytest
from decimal import Decimal
from django.core.exceptions import ValidationError
from clinic_payroll.models import Employee, IncentiveExclusion, PayrollPeriod, Position
from clinic_payroll.services import branch_service, employee_service, exclusion_service, payroll_service
from clinic_payroll.services.eligibility_service import eligible_counts_for_branch
from clinic_payroll.services.incentive_config_service import IncentiveConfigStore
from datetime import date

PERIOD_START = date(2025, 1, 1)
PERIOD_END = date(2025, 1, 15)


@pytest.mark.django_db
def test_create_employee_computes_rates(branch):
    emp = employee_service.create_employee({
        "branch": branch, "name": "Dr. New", "position": Position.RESIDENT_VETERINARIAN, "salary": Decimal("52000"),
    })
    assert emp.rate_per_day == Decimal("2000.00")
    assert emp.rate_per_hour == Decimal("250.00")

@pytest.mark.django_db
def test_create_employee_with_manual_rates(branch):
    emp = employee_service.create_employee({
        "branch": branch, "name": "Gina", "position": Position.STAFF, "salary": Decimal("15000"),
        "rate_per_day": Decimal("700"), "rate_per_hour": Decimal("90"),
    }, fixed_deductions=[{"type": "SSS", "category": "GOVERNMENT", "amount": "450"}])
    assert emp.rate_per_day == Decimal("700.00")
    assert emp.fixed_deductions.get().amount == Decimal("450.00")

@pytest.mark.django_db
def test_update_keeps_rates_unless_asked(staff):
    emp = staff["asst"]
    emp = employee_service.update_employee(emp, {"salary": Decimal("45000")})
    assert emp.rate_per_day == Decimal("1000.00")
    emp = employee_service.update_employee(emp, {"salary": Decimal("45000")}, recalculate_rates=True)
    assert emp.rate_per_day == Decimal("1725.24")

@pytest.mark.django_db
def test_branch_dh_change_recomputes_resident_vets_only(branch, staff):
    branch, count = branch_service.update_branch(branch, {"working_days_per_month": 25})
    assert count == 2
    res = Employee.objects.get(id=staff["res1"].id)
    assert res.rate_per_day == Decimal("1800.00")
    assert res.rate_per_hour == Decimal("225.00")
    assert Employee.objects.get(id=staff["jr1"].id).rate_per_day == Decimal("1000.00")

@pytest.mark.django_db
def test_branch_rename_does_not_recompute(branch, staff):
    _, count = branch_service.update_branch(branch, {"name": "Renamed"})
    assert count == 0
    assert Employee.objects.get(id=staff["res1"].id).rate_per_day == Decimal("1000.00")

@pytest.mark.django_db
def test_branch_rejects_zero_days(branch):
    with pytest.raises(ValidationError):
        branch_service.update_branch(branch, {"working_days_per_month": 0})

@pytest.mark.django_db
def test_toggle_exclusion_round_trip(staff):
    emp = staff["jr1"]
    on = exclusion_service.toggle_exclusion(employee_id=emp.id, incentive_type="CONFINEMENT_VET")
    assert on["excluded"] is True
    off = exclusion_service.toggle_exclusion(employee_id=emp.id, incentive_type="CONFINEMENT_VET")
    assert off["excluded"] is False
    assert not IncentiveExclusion.objects.filter(employee=emp).exists()

@pytest.mark.django_db
def test_toggle_exclusion_requires_type(staff):
    with pytest.raises(ValidationError):
        exclusion_service.toggle_exclusion(employee_id=staff["jr1"].id, incentive_type="")

@pytest.mark.django_db
def test_eligible_counts_apply_exclusions(branch, staff):
    IncentiveExclusion.objects.create(employee=staff["jr2"], incentive_type="CONFINEMENT_VET")
    counts = eligible_counts_for_branch(branch.id, IncentiveConfigStore())
    assert counts["CONFINEMENT_VET"] == 3
    assert counts["CONFINEMENT_ASST"] == 2
    assert counts["GROOMING"] == 1

@pytest.mark.django_db
def test_create_period_for_branch_is_idempotent(branch, staff):
    first = payroll_service.create_period_for_branch(branch_id=branch.id, start_date=PERIOD_START, end_date=PERIOD_END)
    assert len(first) == 6
    assert all(p.working_days == 15 and p.deduction_divisor == 2 for p in first)
    second = payroll_service.create_period_for_branch(branch_id=branch.id, start_date=PERIOD_START, end_date=PERIOD_END)
    assert {p.id for p in second} == {p.id for p in first}
    assert PayrollPeriod.objects.count() == 6

@pytest.mark.django_db
def test_update_payroll_recomputes_days_present(payrolls):
    payroll = payroll_service.update_payroll(payroll_id=payrolls["asst"].id, changes={"absences": 2, "day_off": 1})
    assert payroll.total_days_present == 12
    assert payroll.basic_pay == Decimal("12000.00")

@pytest.mark.django_db
def test_payroll_summary_totals_and_status_counts(branch, staff, payrolls):
    for payroll in payrolls.values():
        payroll_service.recalculate(payroll_id=payroll.id)
    payroll_service.update_payroll(payroll_id=payrolls["res1"].id, changes={"status": "APPROVED", "overtime_hours": 2})
    staff["groomer"].is_active = False
    staff["groomer"].save()
    PayrollPeriod.objects.create(employee=staff["asst"], start_date=date(2025, 1, 16), end_date=date(2025, 1, 31))

    summary = payroll_service.payroll_summary(start_date=PERIOD_START, end_date=PERIOD_END, branch_id=branch.id)
    assert summary["total_employees"] == 5
    assert summary["total_basic_pay"] == Decimal("75000.00")
    assert summary["total_overtime_pay"] == Decimal("250.00")
    assert summary["total_gross_pay"] == Decimal("75250.00")
    assert summary["total_net_pay"] == Decimal("75250.00")
    assert summary["total_deductions"] == Decimal("0.00")
    assert summary["by_status"] == {"DRAFT": 4, "PENDING": 0, "APPROVED": 1, "PAID": 0}
    assert len(summary["payrolls"]) == 5

@pytest.mark.django_db
def test_payroll_summary_empty_range_and_bad_input(branch):
    summary = payroll_service.payroll_summary(start_date=PERIOD_START, end_date=PERIOD_END)
    assert summary["total_employees"] == 0
    assert summary["total_net_pay"] == Decimal("0.00")
    with pytest.raises(ValidationError):
        payroll_service.payroll_summary(start_date=PERIOD_END, end_date=PERIOD_START)
