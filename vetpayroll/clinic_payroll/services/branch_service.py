# -*- coding: utf-8 -*-
"""
Service for branch-level settings that feed the rate formula.
Changing D (working days/month) or H (working hours/day) recomputes rates of every
active employee of that branch whose position uses the branch formula; nobody else.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction

from clinic_payroll.models import Branch
from clinic_payroll.repositories import branch_repository as repo
from clinic_payroll.repositories import employee_repository as employee_repo
from clinic_payroll.services import rate_service

logger = logging.getLogger(__name__)

_ALLOWED_FIELDS = {
    "name", "address", "contact", "branch_type", "is_active",
    "working_days_per_month", "working_hours_per_day",
}


def _validate_dh(data: Dict[str, Any]) -> None:
    for field in ("working_days_per_month", "working_hours_per_day"):
        if field in data and data[field] is not None and int(data[field]) < 1:
            raise ValidationError({field: "Must be a positive integer."})


def create_branch(data: Dict[str, Any]) -> Branch:
    _validate_dh(data)
    return repo.create({k: v for k, v in data.items() if k in _ALLOWED_FIELDS})


@transaction.atomic
def recalculate_branch_rates(branch: Branch) -> int:
    count = 0
    employees = employee_repo.list_branch_formula_employees(branch.id, rate_service.BRANCH_FORMULA_POSITIONS)
    for employee in employees:
        rates = rate_service.rates_for_branch(employee.salary, employee.position, branch)
        employee_repo.save_fields(employee, {
            "rate_per_day": rates.rate_per_day,
            "rate_per_hour": rates.rate_per_hour,
        })
        count += 1
    return count


@transaction.atomic
def update_branch(branch: Branch, data: Dict[str, Any]) -> Tuple[Branch, int]:
    """Returns (branch, number of employees whose rates were recomputed)."""
    _validate_dh(data)
    old_dh = (branch.working_days_per_month, branch.working_hours_per_day)
    branch = repo.save_fields(branch, {k: v for k, v in data.items() if v is not None}, allowed=_ALLOWED_FIELDS)

    recalculated = 0
    if (branch.working_days_per_month, branch.working_hours_per_day) != old_dh:
        recalculated = recalculate_branch_rates(branch)
        logger.info(
            "[branch] #%s D/H %s -> %s/%s: rates recomputed for %d employee(s)",
            branch.id, old_dh, branch.working_days_per_month, branch.working_hours_per_day, recalculated,
        )
    return branch, recalculated
