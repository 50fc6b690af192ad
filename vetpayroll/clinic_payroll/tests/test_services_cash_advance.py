import pytest
from datetime import date
from decimal import Decimal
from django.core.exceptions import ValidationError
from clinic_payroll.models import CashAdvance, Deduction, Employee
from clinic_payroll.services.cash_advance_service import (
    create_cash_advance, delete_cash_advance, mark_paid, unpaid_for_employee, update_cash_advance,
)


@pytest.fixture
def advances(staff):
    emp = staff["asst"]
    return [
        create_cash_advance(employee_id=emp.id, amount="1000", date_taken=date(2025, 1, 3)),
        create_cash_advance(employee_id=emp.id, amount=Decimal("500.00"), date_taken=date(2025, 1, 8), notes="meds"),
    ]


@pytest.mark.django_db
@pytest.mark.parametrize("amount", [0, "-5"])
def test_create_rejects_non_positive_amount(staff, amount):
    with pytest.raises(ValidationError):
        create_cash_advance(employee_id=staff["asst"].id, amount=amount, date_taken=date(2025, 1, 3))

@pytest.mark.django_db
def test_create_unknown_employee():
    with pytest.raises(Employee.DoesNotExist):
        create_cash_advance(employee_id=9999, amount="100", date_taken=date(2025, 1, 3))

@pytest.mark.django_db
def test_unpaid_total(staff, advances):
    result = unpaid_for_employee(staff["asst"].id)
    assert [a.date_taken for a in result["cash_advances"]] == [date(2025, 1, 3), date(2025, 1, 8)]
    assert result["total"] == Decimal("1500.00")
    assert unpaid_for_employee(staff["groomer"].id)["total"] == Decimal("0.00")

@pytest.mark.django_db
def test_mark_paid_adds_up_on_one_deduction_line(payrolls, advances):
    payroll = payrolls["asst"]
    for adv in advances:
        mark_paid(advance_id=adv.id, payroll_id=payroll.id)

    row = Deduction.objects.get(payroll=payroll, deduction_type="CASH_ADVANCE")
    assert row.amount == Decimal("1500.00")
    assert row.notes == "Cash advance from 2025-01-03; Cash advance from 2025-01-08"

    payroll.refresh_from_db()
    assert payroll.total_deductions == Decimal("1500.00")
    assert payroll.net_pay == Decimal("13500.00")

    adv = CashAdvance.objects.get(id=advances[0].id)
    assert adv.is_paid
    assert adv.payroll_id == payroll.id
    assert adv.date_deducted is not None
    assert unpaid_for_employee(payroll.employee_id)["total"] == Decimal("0.00")

@pytest.mark.django_db
def test_mark_paid_without_payroll_leaves_deductions_alone(payrolls, advances):
    adv = mark_paid(advance_id=advances[0].id)
    assert adv.is_paid and adv.payroll is None
    assert not Deduction.objects.exists()

@pytest.mark.django_db
def test_mark_paid_rejects_other_employees_period(payrolls, advances):
    with pytest.raises(ValidationError):
        mark_paid(advance_id=advances[0].id, payroll_id=payrolls["groomer"].id)
    assert not CashAdvance.objects.get(id=advances[0].id).is_paid
    assert not Deduction.objects.exists()

@pytest.mark.django_db
def test_paid_advance_is_read_only(payrolls, advances):
    adv = advances[0]
    mark_paid(advance_id=adv.id, payroll_id=payrolls["asst"].id)
    with pytest.raises(ValidationError):
        mark_paid(advance_id=adv.id, payroll_id=payrolls["asst"].id)
    with pytest.raises(ValidationError):
        update_cash_advance(advance_id=adv.id, changes={"amount": "10"})
    with pytest.raises(ValidationError):
        delete_cash_advance(advance_id=adv.id)
    assert Deduction.objects.get(payroll=payrolls["asst"], deduction_type="CASH_ADVANCE").amount == Decimal("1000.00")

@pytest.mark.django_db
def test_update_and_delete_unpaid(advances):
    adv = update_cash_advance(advance_id=advances[1].id, changes={"amount": "750", "notes": None})
    assert adv.amount == Decimal("750.00")
    assert adv.notes == "meds"
    delete_cash_advance(advance_id=adv.id)
    assert CashAdvance.objects.count() == 1
