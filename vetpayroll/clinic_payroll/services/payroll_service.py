# -*- coding: utf-8 -*-
"""
Service for PayrollPeriod:
- create one DRAFT period per active employee of a branch (existing periods returned as-is)
- update attendance / allowances / status, then recalculate totals
- delete
- range summary: money totals and counts by status
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from clinic_payroll.models import PayrollPeriod
from clinic_payroll.repositories import branch_repository as branch_repo
from clinic_payroll.repositories import employee_repository as employee_repo
from clinic_payroll.repositories import payroll_repository as repo
from clinic_payroll.services.payroll_totals_service import recalculate_payroll_totals
from clinic_payroll.utils.money import round2, to_decimal

logger = logging.getLogger(__name__)

_ATTENDANCE_FIELDS = {
    "working_days", "day_off", "absences", "holidays", "overtime_hours", "late_minutes",
    "meal_allowance", "sil_pay", "birthday_leave", "status",
}
_NON_NEGATIVE = {
    "working_days", "day_off", "absences", "holidays", "overtime_hours", "late_minutes",
    "meal_allowance", "sil_pay", "birthday_leave",
}


def default_working_days() -> int:
    return int(getattr(settings, "PAYROLL_DEFAULT_WORKING_DAYS", 15))


@transaction.atomic
def create_period_for_branch(
    *, branch_id: int, start_date: date, end_date: date, working_days: Optional[int] = None,
) -> List[PayrollPeriod]:
    if end_date < start_date:
        raise ValidationError("end_date must be >= start_date.")
    branch_repo.get_by_id(branch_id)
    days = working_days or default_working_days()
    divisor = int(getattr(settings, "PAYROLL_DEFAULT_DEDUCTION_DIVISOR", 2))

    out: List[PayrollPeriod] = []
    created = 0
    for employee in employee_repo.list_active_for_branch(branch_id):
        existing = repo.find_for_period(employee.id, start_date, end_date)
        if existing:
            out.append(existing)
            continue
        out.append(repo.create({
            "employee": employee,
            "start_date": start_date,
            "end_date": end_date,
            "working_days": days,
            "total_days_present": days,
            "deduction_divisor": divisor,
            "status": PayrollPeriod.Status.DRAFT,
        }))
        created += 1
    logger.info("[payroll] branch=%s %s→%s: %d created, %d existing", branch_id, start_date, end_date, created, len(out) - created)
    return out


@transaction.atomic
def update_payroll(*, payroll_id: int, changes: Dict[str, Any]) -> PayrollPeriod:
    payroll = repo.lock(payroll_id)
    patch = {k: v for k, v in changes.items() if k in _ATTENDANCE_FIELDS and v is not None}
    for k in _NON_NEGATIVE & patch.keys():
        if to_decimal(patch[k]) < 0:
            raise ValidationError({k: "Must be >= 0."})
    if "status" in patch and patch["status"] not in PayrollPeriod.Status.values:
        raise ValidationError({"status": f"Unknown status: {patch['status']!r}"})
    repo.save_fields(payroll, patch)
    return recalculate_payroll_totals(payroll_id)


def recalculate(*, payroll_id: int) -> PayrollPeriod:
    return recalculate_payroll_totals(payroll_id)


def delete_payroll(*, payroll_id: int) -> None:
    repo.delete(repo.get_by_id(payroll_id))


def payroll_summary(*, start_date: date, end_date: date, branch_id: Optional[int] = None) -> Dict[str, Any]:
    """Money totals and status counts over the periods inside start..end."""
    if end_date < start_date:
        raise ValidationError("end_date must be >= start_date.")
    if branch_id:
        branch_repo.get_by_id(branch_id)
    qs = repo.within_range(start_date, end_date, branch_id)
    agg = repo.summarize(qs)
    sums = agg["sums"]
    out: Dict[str, Any] = {
        "start_date": start_date,
        "end_date": end_date,
        "branch_id": branch_id,
        "total_employees": sums["count"],
    }
    for field in repo.SUMMARY_FIELDS:
        key = field if field.startswith("total_") else f"total_{field}"
        out[key] = round2(sums[field] or 0)
    out["by_status"] = {s: agg["by_status"].get(s, 0) for s in PayrollPeriod.Status.values}
    out["payrolls"] = list(qs)
    return out
