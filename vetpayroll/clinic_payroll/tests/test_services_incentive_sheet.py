import pytest
from datetime import date
from decimal import Decimal
from django.core.exceptions import ValidationError
from clinic_payroll.models import Branch, DailyIncentiveInput
from clinic_payroll.services.incentive_sheet_service import (
    days_in_range, get_or_create_sheet, period_totals, save_daily_inputs,
)


def test_days_in_range_inclusive():
    days = days_in_range(date(2025, 1, 30), date(2025, 2, 2))
    assert days == [date(2025, 1, 30), date(2025, 1, 31), date(2025, 2, 1), date(2025, 2, 2)]

@pytest.mark.django_db
def test_get_or_create_sheet_is_idempotent(branch):
    s1, created1 = get_or_create_sheet(branch_id=branch.id, start_date="2025-01-01", end_date="2025-01-15")
    s2, created2 = get_or_create_sheet(branch_id=branch.id, start_date=date(2025, 1, 1), end_date=date(2025, 1, 15))
    assert created1 and not created2
    assert s1.id == s2.id

@pytest.mark.django_db
def test_get_or_create_sheet_rejects_reversed_range(branch):
    with pytest.raises(ValidationError):
        get_or_create_sheet(branch_id=branch.id, start_date="2025-01-15", end_date="2025-01-01")

@pytest.mark.django_db
def test_get_or_create_sheet_unknown_branch():
    with pytest.raises(Branch.DoesNotExist):
        get_or_create_sheet(branch_id=999, start_date="2025-01-01", end_date="2025-01-15")

@pytest.mark.django_db
def test_save_inputs_upserts_and_zero_clears(sheet):
    save_daily_inputs(sheet_id=sheet.id, inputs=[
        {"date": "2025-01-02", "type": "SURGERY", "value": 2},
        {"date": "2025-01-03", "type": "SURGERY", "value": 1},
    ])
    save_daily_inputs(sheet_id=sheet.id, inputs=[
        {"date": "2025-01-02", "type": "SURGERY", "value": 5},
        {"date": "2025-01-03", "type": "SURGERY", "value": 0},
    ])
    rows = DailyIncentiveInput.objects.filter(sheet=sheet)
    assert rows.count() == 1
    assert rows.get().value == Decimal("5")
    assert period_totals(sheet)["SURGERY"] == Decimal("5")

@pytest.mark.django_db
@pytest.mark.parametrize("bad", [
    {"date": "2025-02-01", "type": "SURGERY", "value": 1},
    {"date": "2025-01-02", "type": "CBC", "value": 1},
    {"date": "2025-01-02", "type": "SURGERY", "value": -1},
    {"date": "not-a-date", "type": "SURGERY", "value": 1},
])
def test_invalid_batch_writes_nothing(sheet, bad):
    with pytest.raises(ValidationError):
        save_daily_inputs(sheet_id=sheet.id, inputs=[
            {"date": "2025-01-02", "type": "GROOMING", "value": 3},
            bad,
        ])
    assert not DailyIncentiveInput.objects.filter(sheet=sheet).exists()
