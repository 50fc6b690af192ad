# -*- coding: utf-8 -*-
"""
Payroll period totals.

compute_totals() is pure arithmetic; recalculate_payroll_totals() locks the period row,
sums its Incentive / Deduction rows, applies compute_totals() and persists the result.
Every monetary intermediate is rounded half-up to the cent on its own, and gross is
built from the rounded parts.

Not reactive: callers invoke recalculate_payroll_totals() after each mutation of
incentives, deductions or attendance fields of a period.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import transaction

from clinic_payroll.models import PayrollPeriod
from clinic_payroll.repositories import payroll_repository as repo
from clinic_payroll.utils.money import round2, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollInputs:
    rate_per_day: Decimal
    rate_per_hour: Decimal
    working_days: int = 0
    day_off: int = 0
    absences: int = 0
    holidays: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    late_minutes: int = 0
    meal_allowance: Decimal = Decimal("0")
    sil_pay: Decimal = Decimal("0")
    birthday_leave: Decimal = Decimal("0")
    total_incentives: Decimal = Decimal("0")
    total_deductions: Decimal = Decimal("0")


@dataclass(frozen=True)
class PayrollTotals:
    total_days_present: int
    basic_pay: Decimal
    holiday_pay: Decimal
    overtime_pay: Decimal
    late_deduction: Decimal
    total_incentives: Decimal
    total_deductions: Decimal
    gross_pay: Decimal
    net_pay: Decimal

    def as_fields(self) -> Dict[str, Any]:
        return asdict(self)


def overtime_multiplier() -> Decimal:
    return to_decimal(getattr(settings, "PAYROLL_OVERTIME_MULTIPLIER", Decimal("1.00")))


def compute_totals(data: PayrollInputs, overtime_multiplier: Any = Decimal("1.00")) -> PayrollTotals:
    rpd = to_decimal(data.rate_per_day)
    rph = to_decimal(data.rate_per_hour)

    days_present = int(data.working_days) - int(data.day_off) - int(data.absences)
    basic_pay = round2(rpd * days_present)
    holiday_pay = round2(to_decimal(data.holidays) * rpd)
    overtime_pay = round2(rph * to_decimal(data.overtime_hours) * to_decimal(overtime_multiplier))
    late_deduction = round2(rph * to_decimal(data.late_minutes) / 60)

    total_incentives = round2(data.total_incentives)
    total_deductions = round2(data.total_deductions)

    gross_pay = round2(
        basic_pay + holiday_pay + overtime_pay + total_incentives
        + to_decimal(data.meal_allowance) + to_decimal(data.sil_pay) + to_decimal(data.birthday_leave)
    )
    net_pay = round2(gross_pay - total_deductions - late_deduction)

    return PayrollTotals(
        total_days_present=days_present,
        basic_pay=basic_pay,
        holiday_pay=holiday_pay,
        overtime_pay=overtime_pay,
        late_deduction=late_deduction,
        total_incentives=total_incentives,
        total_deductions=total_deductions,
        gross_pay=gross_pay,
        net_pay=net_pay,
    )


def inputs_from_payroll(payroll: PayrollPeriod, total_incentives: Any, total_deductions: Any) -> PayrollInputs:
    employee = payroll.employee
    return PayrollInputs(
        rate_per_day=employee.rate_per_day,
        rate_per_hour=employee.rate_per_hour,
        working_days=payroll.working_days,
        day_off=payroll.day_off,
        absences=payroll.absences,
        holidays=payroll.holidays,
        overtime_hours=payroll.overtime_hours,
        late_minutes=payroll.late_minutes,
        meal_allowance=payroll.meal_allowance,
        sil_pay=payroll.sil_pay,
        birthday_leave=payroll.birthday_leave,
        total_incentives=to_decimal(total_incentives),
        total_deductions=to_decimal(total_deductions),
    )


@transaction.atomic
def recalculate_payroll_totals(payroll_id: int, multiplier: Optional[Any] = None) -> PayrollPeriod:
    payroll = repo.lock(payroll_id)
    inputs = inputs_from_payroll(
        payroll,
        total_incentives=repo.sum_incentives(payroll.id),
        total_deductions=repo.sum_deductions(payroll.id),
    )
    totals = compute_totals(inputs, overtime_multiplier() if multiplier is None else multiplier)
    payroll = repo.save_fields(payroll, totals.as_fields())
    logger.debug(
        "[payroll] recalculated #%s gross=%s net=%s", payroll.id, totals.gross_pay, totals.net_pay,
    )
    return payroll
