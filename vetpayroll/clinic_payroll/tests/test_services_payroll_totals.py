import pytest
from decimal import Decimal
from clinic_payroll.models import Deduction, Incentive
from clinic_payroll.services.payroll_totals_service import (
    PayrollInputs, compute_totals, recalculate_payroll_totals,
)


def test_gross_and_net():
    totals = compute_totals(PayrollInputs(
        rate_per_day=Decimal("1000"), rate_per_hour=Decimal("125"), working_days=20,
        total_incentives=Decimal("500"), total_deductions=Decimal("1200"),
    ))
    assert totals.basic_pay == Decimal("20000.00")
    assert totals.gross_pay == Decimal("20500.00")
    assert totals.net_pay == Decimal("19300.00")

def test_attendance_parts_and_late():
    totals = compute_totals(PayrollInputs(
        rate_per_day=Decimal("1725.24"), rate_per_hour=Decimal("215.66"),
        working_days=15, day_off=2, absences=1, holidays=Decimal("1"),
        overtime_hours=Decimal("3"), late_minutes=30, meal_allowance=Decimal("300"),
    ))
    assert totals.total_days_present == 12
    assert totals.basic_pay == Decimal("20702.88")
    assert totals.holiday_pay == Decimal("1725.24")
    assert totals.overtime_pay == Decimal("646.98")
    assert totals.late_deduction == Decimal("107.83")
    assert totals.gross_pay == Decimal("23375.10")
    assert totals.net_pay == Decimal("23267.27")

def test_overtime_multiplier():
    totals = compute_totals(
        PayrollInputs(rate_per_day=Decimal("800"), rate_per_hour=Decimal("100"), overtime_hours=Decimal("2")),
        overtime_multiplier=Decimal("1.25"),
    )
    assert totals.overtime_pay == Decimal("250.00")

@pytest.mark.django_db
def test_recalculate_persists_line_sums(payrolls):
    payroll = payrolls["asst"]
    Incentive.objects.create(payroll=payroll, incentive_type="CBC", count=5, rate=50, amount=Decimal("250"))
    Incentive.objects.create(payroll=payroll, incentive_type="XRAY", count=1, rate=100, amount=Decimal("100"))
    Deduction.objects.create(payroll=payroll, deduction_type="SSS", amount=Decimal("500"))

    recalculate_payroll_totals(payroll.id)
    payroll.refresh_from_db()
    assert payroll.total_days_present == 15
    assert payroll.total_incentives == Decimal("350.00")
    assert payroll.total_deductions == Decimal("500.00")
    assert payroll.gross_pay == Decimal("15350.00")
    assert payroll.net_pay == Decimal("14850.00")
