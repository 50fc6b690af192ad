import pytest
from decimal import Decimal
from django.core.exceptions import ValidationError
from clinic_payroll.models import Deduction, FixedDeduction
from clinic_payroll.services.deduction_service import (
    apply_fixed_deductions, bulk_replace_deductions, set_deduction_divisor, upsert_deduction,
)


@pytest.fixture
def fixed(staff):
    emp = staff["asst"]
    FixedDeduction.objects.create(employee=emp, deduction_type="SSS", category="GOVERNMENT", amount=Decimal("1125.00"))
    FixedDeduction.objects.create(employee=emp, deduction_type="PAGIBIG", category="GOVERNMENT", amount=Decimal("200.00"))
    FixedDeduction.objects.create(employee=emp, deduction_type="SUNLIFE", category="INSURANCE", amount=Decimal("999"), is_active=False)
    return emp


@pytest.mark.django_db
def test_apply_fixed_divides_and_skips_existing(payrolls, fixed):
    payroll = payrolls["asst"]
    upsert_deduction(payroll_id=payroll.id, deduction_type="PAGIBIG", amount=Decimal("50"))

    apply_fixed_deductions(payroll_id=payroll.id)
    rows = {d.deduction_type: d for d in Deduction.objects.filter(payroll=payroll)}
    assert set(rows) == {"SSS", "PAGIBIG"}
    assert rows["SSS"].amount == Decimal("562.50")
    assert rows["SSS"].notes == "Fixed Government ÷ 2"
    assert rows["PAGIBIG"].amount == Decimal("50.00")

    payroll.refresh_from_db()
    assert payroll.total_deductions == Decimal("612.50")
    assert payroll.net_pay == Decimal("14387.50")

@pytest.mark.django_db
def test_divisor_change_applies_to_next_seed(payrolls, fixed):
    payroll = payrolls["asst"]
    set_deduction_divisor(payroll_id=payroll.id, divisor=1)
    apply_fixed_deductions(payroll_id=payroll.id)
    assert Deduction.objects.get(payroll=payroll, deduction_type="SSS").amount == Decimal("1125.00")

@pytest.mark.django_db
@pytest.mark.parametrize("divisor", [0, -2, "x"])
def test_invalid_divisor(payrolls, divisor):
    with pytest.raises(ValidationError):
        set_deduction_divisor(payroll_id=payrolls["asst"].id, divisor=divisor)

@pytest.mark.django_db
def test_bulk_replace_keeps_zero_amounts(payrolls):
    payroll = payrolls["asst"]
    upsert_deduction(payroll_id=payroll.id, deduction_type="UNIFORM", amount=Decimal("300"))
    bulk_replace_deductions(payroll_id=payroll.id, deductions=[
        {"type": "SSS", "amount": "500"},
        {"type": "CASH_ADVANCE", "amount": "0"},
    ])
    types = set(Deduction.objects.filter(payroll=payroll).values_list("deduction_type", flat=True))
    assert types == {"SSS", "CASH_ADVANCE"}
    payroll.refresh_from_db()
    assert payroll.total_deductions == Decimal("500.00")

@pytest.mark.django_db
def test_unknown_deduction_type(payrolls):
    with pytest.raises(ValidationError):
        upsert_deduction(payroll_id=payrolls["asst"].id, deduction_type="BEER", amount=1)
