# -*- coding: utf-8 -*-
"""
Service for Employee rows that carry calculation logic:
- create / update with rates from rate_service, or manual rates (both supplied) stored as-is
- recalculate rates on demand
- replace fixed deduction templates wholesale
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from clinic_payroll.models import DeductionCategory, DeductionType, Employee, FixedDeduction, Position
from clinic_payroll.repositories import branch_repository as branch_repo
from clinic_payroll.repositories import employee_repository as repo
from clinic_payroll.services import rate_service
from clinic_payroll.utils.money import round2

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = {
    "name", "position", "salary", "address", "sss_no", "tin_no", "philhealth_no",
    "pagibig_no", "hired_on", "is_active", "branch",
}


def _manual_rates(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    rpd, rph = data.get("rate_per_day"), data.get("rate_per_hour")
    if rpd is None or rph is None:
        return None
    return {"rate_per_day": round2(rpd), "rate_per_hour": round2(rph)}


def _check_position(position: Any) -> None:
    if position is not None and position not in Position.values:
        raise ValidationError({"position": f"Unknown position: {position!r}"})


@transaction.atomic
def create_employee(data: Dict[str, Any], fixed_deductions: Optional[Iterable[Dict[str, Any]]] = None) -> Employee:
    _check_position(data.get("position"))
    branch = data["branch"]
    payload = {k: v for k, v in data.items() if k in _PROFILE_FIELDS}
    manual = _manual_rates(data)
    if manual:
        payload.update(manual)
    else:
        rates = rate_service.rates_for_branch(data.get("salary") or 0, data["position"], branch)
        payload.update(rate_per_day=rates.rate_per_day, rate_per_hour=rates.rate_per_hour)

    employee = repo.create(payload)
    if fixed_deductions:
        replace_fixed_deductions(employee=employee, deductions=fixed_deductions)
    logger.info("[employee] created #%s %s (%s)", employee.id, employee.name, employee.position)
    return employee


@transaction.atomic
def update_employee(employee: Employee, data: Dict[str, Any], recalculate_rates: bool = False) -> Employee:
    _check_position(data.get("position"))
    patch = {k: v for k, v in data.items() if k in _PROFILE_FIELDS and v is not None}
    manual = _manual_rates(data)
    if manual:
        patch.update(manual)
    elif recalculate_rates and "salary" in patch:
        branch = patch.get("branch") or employee.branch
        rates = rate_service.rates_for_branch(patch["salary"], patch.get("position", employee.position), branch)
        patch.update(rate_per_day=rates.rate_per_day, rate_per_hour=rates.rate_per_hour)
    # otherwise existing rates are kept
    return repo.save_fields(employee, patch)


@transaction.atomic
def recalculate_rates(employee: Employee) -> Employee:
    branch = branch_repo.get_by_id(employee.branch_id)
    rates = rate_service.rates_for_branch(employee.salary, employee.position, branch)
    return repo.save_fields(employee, {"rate_per_day": rates.rate_per_day, "rate_per_hour": rates.rate_per_hour})


def deactivate_employee(employee: Employee) -> Employee:
    return repo.save_fields(employee, {"is_active": False})


@transaction.atomic
def replace_fixed_deductions(*, employee: Employee, deductions: Iterable[Dict[str, Any]]) -> List[FixedDeduction]:
    rows: Dict[str, Dict[str, Any]] = {}
    for d in deductions or []:
        deduction_type = d.get("type") or d.get("deduction_type")
        if deduction_type not in DeductionType.values:
            raise ValidationError({"type": f"Unknown deduction type: {deduction_type!r}"})
        category = d.get("category") or DeductionCategory.OTHERS
        if category not in DeductionCategory.values:
            raise ValidationError({"category": f"Unknown category: {category!r}"})
        amount = round2(d.get("amount"))
        if amount < 0:
            raise ValidationError({"amount": "Amount must be >= 0."})
        rows[deduction_type] = {
            "deduction_type": deduction_type,
            "category": category,
            "amount": amount,
            "is_active": d.get("is_active", True),
        }
    return repo.replace_fixed_deductions(employee.id, list(rows.values()))
