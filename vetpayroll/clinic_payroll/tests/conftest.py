import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from clinic_payroll.models import Branch, Employee, PayrollPeriod, IncentiveSheet

P = Employee.Position

PERIOD_START = date(2025, 1, 1)
PERIOD_END = date(2025, 1, 15)


@pytest.fixture
def api_client():
    return APIClient()

@pytest.fixture
def branch(db):
    return Branch.objects.create(name="Main Clinic", working_days_per_month=26, working_hours_per_day=8)

def _employee(branch, name, position, salary="20000.00", rpd="1000.00", rph="125.00", **extra):
    return Employee.objects.create(
        branch=branch, name=name, position=position, salary=Decimal(salary),
        rate_per_day=Decimal(rpd), rate_per_hour=Decimal(rph), **extra
    )

@pytest.fixture
def staff(db, branch):
    """2 resident vets, 2 junior vets, 1 assistant, 1 groomer."""
    return {
        "res1": _employee(branch, "Dr. Alma", P.RESIDENT_VETERINARIAN, salary="45000.00"),
        "res2": _employee(branch, "Dr. Bong", P.RESIDENT_VETERINARIAN, salary="45000.00"),
        "jr1": _employee(branch, "Dr. Carlo", P.JUNIOR_VETERINARIAN),
        "jr2": _employee(branch, "Dr. Dina", P.JUNIOR_VETERINARIAN),
        "asst": _employee(branch, "Ella", P.VETERINARY_ASSISTANT),
        "groomer": _employee(branch, "Fely", P.GROOMER),
    }

@pytest.fixture
def payrolls(db, staff):
    """One DRAFT period per staff member for PERIOD_START..PERIOD_END."""
    return {
        key: PayrollPeriod.objects.create(
            employee=emp, start_date=PERIOD_START, end_date=PERIOD_END, working_days=15, deduction_divisor=2,
        )
        for key, emp in staff.items()
    }

@pytest.fixture
def sheet(db, branch):
    return IncentiveSheet.objects.create(branch=branch, start_date=PERIOD_START, end_date=PERIOD_END)
