# -*- coding: utf-8 -*-
"""
Daily / hourly rate derivation.

- Resident veterinarians: monthly formula using the branch's D (days/month) and H (hours/day)
- Everyone else: annual formula, (salary × 12) ÷ 313, and an 8-hour day
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from clinic_payroll.models import Position
from clinic_payroll.utils.money import round2, to_decimal

ANNUAL_WORKING_DAYS = Decimal("313")
STANDARD_HOURS_PER_DAY = Decimal("8")
DEFAULT_WORKING_DAYS_PER_MONTH = 22
DEFAULT_WORKING_HOURS_PER_DAY = 8

BRANCH_FORMULA_POSITIONS = {Position.RESIDENT_VETERINARIAN.value}


@dataclass(frozen=True)
class Rates:
    rate_per_day: Decimal
    rate_per_hour: Decimal


def uses_branch_formula(position: str) -> bool:
    return str(position) in BRANCH_FORMULA_POSITIONS


def calculate_rates(
    monthly_salary: Any,
    position: str,
    working_days_per_month: int = DEFAULT_WORKING_DAYS_PER_MONTH,
    working_hours_per_day: int = DEFAULT_WORKING_HOURS_PER_DAY,
) -> Rates:
    salary = to_decimal(monthly_salary)
    if uses_branch_formula(position):
        days = Decimal(working_days_per_month or DEFAULT_WORKING_DAYS_PER_MONTH)
        hours = Decimal(working_hours_per_day or DEFAULT_WORKING_HOURS_PER_DAY)
        per_day = round2(salary / days)
        return Rates(per_day, round2(per_day / hours))

    per_day = round2(salary * 12 / ANNUAL_WORKING_DAYS)
    return Rates(per_day, round2(per_day / STANDARD_HOURS_PER_DAY))


def rates_for_branch(monthly_salary: Any, position: str, branch) -> Rates:
    return calculate_rates(
        monthly_salary, position,
        working_days_per_month=branch.working_days_per_month,
        working_hours_per_day=branch.working_hours_per_day,
    )


def rate_formula_description(position: str) -> str:
    if uses_branch_formula(position):
        return "Monthly: Salary ÷ D (branch days)"
    return "Annual: (Salary × 12) ÷ 313"
