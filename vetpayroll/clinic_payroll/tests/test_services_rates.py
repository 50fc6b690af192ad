import pytest
from decimal import Decimal
from clinic_payroll.models import Position
from clinic_payroll.services.rate_service import calculate_rates, rate_formula_description


def test_annual_formula_for_non_branch_positions():
    rates = calculate_rates(45000, Position.VETERINARY_ASSISTANT)
    assert rates.rate_per_day == Decimal("1725.24")
    assert rates.rate_per_hour == Decimal("215.66")

def test_branch_days_are_ignored_for_annual_positions():
    a = calculate_rates(45000, Position.JUNIOR_VETERINARIAN, working_days_per_month=26)
    b = calculate_rates(45000, Position.JUNIOR_VETERINARIAN, working_days_per_month=20)
    assert a == b

def test_resident_vet_uses_branch_days_and_hours():
    rates = calculate_rates(45000, Position.RESIDENT_VETERINARIAN, working_days_per_month=26, working_hours_per_day=8)
    assert rates.rate_per_day == Decimal("1730.77")
    assert rates.rate_per_hour == Decimal("216.35")

def test_resident_vet_defaults_to_22_days():
    rates = calculate_rates("44000", Position.RESIDENT_VETERINARIAN)
    assert rates.rate_per_day == Decimal("2000.00")
    assert rates.rate_per_hour == Decimal("250.00")

@pytest.mark.parametrize("position,expected", [
    (Position.RESIDENT_VETERINARIAN, "Monthly: Salary ÷ D (branch days)"),
    (Position.GROOMER, "Annual: (Salary × 12) ÷ 313"),
])
def test_rate_formula_description(position, expected):
    assert rate_formula_description(position) == expected
