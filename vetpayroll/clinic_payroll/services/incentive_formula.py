# -*- coding: utf-8 -*-
"""
Single-line incentive arithmetic + the human-readable trace stored on Incentive.formula.

COUNT_MULTIPLY: count × rate, divided by num_eligible when pooled (num_eligible > 1)
PERCENT:        input_value × rate (rate is a 0–1 fraction, count ignored)
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from clinic_payroll.models import IncentiveConfig
from clinic_payroll.utils.money import ZERO, round2, to_decimal, format_number, format_peso

FormulaType = IncentiveConfig.FormulaType


@dataclass(frozen=True)
class IncentiveResult:
    amount: Decimal
    formula: str


def pooled_share(count: Any, rate: Any, divisor: int) -> IncentiveResult:
    """(count × rate) ÷ divisor, trace always shows the divisor."""
    count = to_decimal(count)
    rate = to_decimal(rate)
    amount = round2(count * rate / divisor)
    formula = f"({format_number(count)} × {format_peso(rate)}) ÷ {divisor} = {format_peso(amount, fixed=True)}"
    return IncentiveResult(amount, formula)


def calculate_incentive(
    *, incentive_type: str, count: Any = 0, input_value: Any = 0, rate: Any = 0,
    formula_type: str, num_eligible: Optional[int] = None,
) -> IncentiveResult:
    count = to_decimal(count)
    input_value = to_decimal(input_value)
    rate = to_decimal(rate)
    pool = int(num_eligible) if num_eligible and num_eligible > 0 else 0

    if formula_type == FormulaType.COUNT_MULTIPLY:
        total_pay = count * rate
        if pool > 1:
            return pooled_share(count, rate, pool)
        amount = round2(total_pay)
        formula = f"{format_number(count)} × {format_peso(rate)} = {format_peso(amount, fixed=True)}"
        return IncentiveResult(amount, formula)

    if formula_type == FormulaType.PERCENT:
        amount = round2(input_value * rate)
        percent = (rate * 100).quantize(Decimal("1"))
        formula = f"{format_peso(input_value)} × {percent}% = {format_peso(amount, fixed=True)}"
        return IncentiveResult(amount, formula)

    return IncentiveResult(ZERO, "")


def calculate_bulk(inputs: Iterable[Dict[str, Any]], config_store) -> Dict[str, Any]:
    """
    Preview (nothing saved) for a list of {type, count, input_value, rate?}.
    Rate override wins over the configured rate; unknown types fall back to COUNT_MULTIPLY at rate 0.
    """
    results: List[Dict[str, Any]] = []
    total_count = Decimal("0")
    total_amount = ZERO

    for line in inputs:
        incentive_type = line["type"]
        config = config_store.get(incentive_type)
        rate = line.get("rate")
        if rate is None:
            rate = config.rate if config else ZERO
        formula_type = config.formula_type if config else FormulaType.COUNT_MULTIPLY
        count = to_decimal(line.get("count"))
        input_value = to_decimal(line.get("input_value"))

        result = calculate_incentive(
            incentive_type=incentive_type, count=count, input_value=input_value,
            rate=rate, formula_type=formula_type,
        )
        if formula_type == FormulaType.COUNT_MULTIPLY:
            total_count += count
        total_amount += result.amount

        results.append({
            "type": incentive_type,
            "name": config.name if config else incentive_type,
            "count": count,
            "input_value": input_value,
            "rate": to_decimal(rate),
            "formula_type": formula_type,
            "amount": result.amount,
            "formula": result.formula,
        })

    return {"incentives": results, "total_count": total_count, "total_amount": round2(total_amount)}
