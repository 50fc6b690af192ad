# -*- coding: utf-8 -*-
"""
Service for period Deductions:
- upsert by type, bulk replace, delete
- seed from the employee's active FixedDeduction templates ÷ deduction_divisor
- change the divisor
Each mutation recalculates the period totals.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from clinic_payroll.models import Deduction, DeductionType, PayrollPeriod
from clinic_payroll.repositories import deduction_repository as repo
from clinic_payroll.repositories import employee_repository as employee_repo
from clinic_payroll.repositories import payroll_repository as payroll_repo
from clinic_payroll.services.payroll_totals_service import recalculate_payroll_totals
from clinic_payroll.utils.money import round2, to_decimal

logger = logging.getLogger(__name__)


def _check_type(deduction_type: str) -> str:
    if deduction_type not in DeductionType.values:
        raise ValidationError({"type": f"Unknown deduction type: {deduction_type!r}"})
    return deduction_type


def _check_amount(amount: Any) -> Any:
    value = round2(amount)
    if value < 0:
        raise ValidationError({"amount": "Amount must be >= 0."})
    return value


def list_deductions(payroll_id: int):
    return repo.list_for_payroll(payroll_id)


@transaction.atomic
def upsert_deduction(*, payroll_id: int, deduction_type: str, amount: Any = None, notes: Optional[str] = None) -> Deduction:
    _check_type(deduction_type)
    payroll_repo.lock(payroll_id)
    existing = repo.get_for_type(payroll_id, deduction_type)
    if amount is None:
        amount = existing.amount if existing else 0
    if notes is None:
        notes = existing.notes if existing else ""
    obj = repo.upsert(payroll_id, deduction_type, {"amount": _check_amount(amount), "notes": notes})
    recalculate_payroll_totals(payroll_id)
    return obj


@transaction.atomic
def bulk_replace_deductions(*, payroll_id: int, deductions: Iterable[Dict[str, Any]]) -> List[Deduction]:
    payroll_repo.lock(payroll_id)
    rows: Dict[str, Dict[str, Any]] = {}
    for d in deductions or []:
        deduction_type = _check_type(d.get("type") or d.get("deduction_type"))
        amount = _check_amount(d.get("amount"))
        rows[deduction_type] = {"deduction_type": deduction_type, "amount": amount, "notes": d.get("notes") or ""}
    created = repo.replace_all(payroll_id, list(rows.values()))
    recalculate_payroll_totals(payroll_id)
    return created


@transaction.atomic
def apply_fixed_deductions(*, payroll_id: int) -> PayrollPeriod:
    """Add the employee's active fixed deductions (÷ divisor) whose type is not on the period yet."""
    payroll = payroll_repo.lock(payroll_id)
    divisor = payroll.deduction_divisor or 1
    present = repo.existing_types(payroll_id)

    rows = []
    for fd in employee_repo.list_fixed_deductions(payroll.employee_id, active_only=True):
        if fd.deduction_type in present:
            continue
        rows.append({
            "deduction_type": fd.deduction_type,
            "amount": round2(to_decimal(fd.amount) / divisor),
            "notes": f"Fixed {fd.get_category_display()} ÷ {divisor}",
        })
    repo.bulk_add(payroll_id, rows)
    logger.info("[deduction] payroll #%s: %d fixed deductions applied (÷%s)", payroll_id, len(rows), divisor)
    return recalculate_payroll_totals(payroll_id)


@transaction.atomic
def set_deduction_divisor(*, payroll_id: int, divisor: Any) -> PayrollPeriod:
    try:
        value = int(divisor)
    except (TypeError, ValueError) as ex:
        raise ValidationError({"deduction_divisor": "Must be an integer."}) from ex
    if value < 1:
        raise ValidationError({"deduction_divisor": "Must be >= 1."})
    payroll = payroll_repo.lock(payroll_id)
    return payroll_repo.save_fields(payroll, {"deduction_divisor": value})


@transaction.atomic
def delete_deduction(*, deduction_id: int) -> int:
    obj = repo.get_by_id(deduction_id)
    payroll_id = obj.payroll_id
    payroll_repo.lock(payroll_id)
    repo.delete(obj)
    recalculate_payroll_totals(payroll_id)
    return payroll_id
