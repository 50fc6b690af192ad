import pytest
from decimal import Decimal
from clinic_payroll.incentive_defaults import IncentiveConfigItem
from clinic_payroll.services.incentive_config_service import IncentiveConfigStore
from clinic_payroll.services.incentive_formula import (
    FormulaType, calculate_bulk, calculate_incentive, pooled_share,
)


def test_count_multiply_trace():
    r = calculate_incentive(incentive_type="CBC", count=5, rate=50, formula_type=FormulaType.COUNT_MULTIPLY)
    assert r.amount == Decimal("250.00")
    assert r.formula == "5 × ₱50 = ₱250.00"

def test_count_multiply_pooled():
    r = calculate_incentive(
        incentive_type="CONFINEMENT_VET", count=10, rate=55,
        formula_type=FormulaType.COUNT_MULTIPLY, num_eligible=4,
    )
    assert r.amount == Decimal("137.50")
    assert r.formula == "(10 × ₱55) ÷ 4 = ₱137.50"

def test_single_eligible_is_not_pooled():
    r = calculate_incentive(
        incentive_type="GROOMING", count=3, rate=75,
        formula_type=FormulaType.COUNT_MULTIPLY, num_eligible=1,
    )
    assert r.formula == "3 × ₱75 = ₱225.00"

def test_percent_ignores_count():
    r = calculate_incentive(
        incentive_type="SURGERY", count=99, input_value=5000, rate=Decimal("0.10"),
        formula_type=FormulaType.PERCENT,
    )
    assert r.amount == Decimal("500.00")
    assert r.formula == "₱5,000 × 10% = ₱500.00"

def test_unknown_formula_type_yields_zero():
    r = calculate_incentive(incentive_type="X", count=5, rate=50, formula_type="WEIRD")
    assert r.amount == Decimal("0.00")
    assert r.formula == ""

def test_pooled_share_rounds_half_up():
    r = pooled_share(1, 10, 3)
    assert r.amount == Decimal("3.33")
    assert r.formula.endswith("÷ 3 = ₱3.33")

def test_calculate_bulk_with_defaults_and_override():
    store = IncentiveConfigStore(use_persisted=False)
    out = calculate_bulk([
        {"type": "CBC", "count": 5},
        {"type": "SURGERY", "input_value": 2000},
        {"type": "XRAY", "count": 2, "rate": 150},
        {"type": "MYSTERY", "count": 3},
    ], store)
    by_type = {r["type"]: r for r in out["incentives"]}
    assert by_type["CBC"]["amount"] == Decimal("250.00")
    assert by_type["SURGERY"]["amount"] == Decimal("200.00")
    assert by_type["XRAY"]["amount"] == Decimal("300.00")
    assert by_type["MYSTERY"]["amount"] == Decimal("0.00")
    assert by_type["MYSTERY"]["name"] == "MYSTERY"
    # percent lines do not add to the count total
    assert out["total_count"] == Decimal("10")
    assert out["total_amount"] == Decimal("750.00")

def test_calculate_bulk_with_injected_defaults():
    custom = (IncentiveConfigItem("CBC", "CBC", Decimal("70"), FormulaType.COUNT_MULTIPLY, ("RESIDENT_VETERINARIAN",)),)
    out = calculate_bulk([{"type": "CBC", "count": 2}], IncentiveConfigStore(defaults=custom, use_persisted=False))
    assert out["total_amount"] == Decimal("140.00")
