# -*- coding: utf-8 -*-
"""
Service for the cash advance ledger:
- record / edit / delete unpaid advances
- unpaid advances of an employee with their total
- mark paid, optionally recovering the amount as a CASH_ADVANCE deduction
  on one of the employee's payroll periods (amounts of several advances add up
  on the single CASH_ADVANCE line), then recalculate that period's totals
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from clinic_payroll.models import CashAdvance, DeductionType
from clinic_payroll.repositories import cash_advance_repository as repo
from clinic_payroll.repositories import deduction_repository as deduction_repo
from clinic_payroll.repositories import employee_repository as employee_repo
from clinic_payroll.repositories import payroll_repository as payroll_repo
from clinic_payroll.services.payroll_totals_service import recalculate_payroll_totals
from clinic_payroll.utils.money import round2

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {"amount", "date_taken", "notes"}
_NOTES_MAX = 255


def _check_amount(amount: Any):
    value = round2(amount)
    if value <= 0:
        raise ValidationError({"amount": "Amount must be > 0."})
    return value


def _ensure_unpaid(advance: CashAdvance) -> None:
    if advance.is_paid:
        raise ValidationError({"is_paid": f"Cash advance #{advance.id} is already paid."})


@transaction.atomic
def create_cash_advance(*, employee_id: int, amount: Any, date_taken: date, notes: str = "") -> CashAdvance:
    employee = employee_repo.get_by_id(employee_id)
    obj = repo.create({
        "employee": employee,
        "amount": _check_amount(amount),
        "date_taken": date_taken,
        "notes": notes or "",
    })
    logger.info("[cash-advance] #%s recorded for employee #%s: %s", obj.id, employee.id, obj.amount)
    return obj


@transaction.atomic
def update_cash_advance(*, advance_id: int, changes: Dict[str, Any]) -> CashAdvance:
    advance = repo.lock(advance_id)
    _ensure_unpaid(advance)
    patch = {k: v for k, v in changes.items() if k in _EDITABLE_FIELDS and v is not None}
    if "amount" in patch:
        patch["amount"] = _check_amount(patch["amount"])
    return repo.save_fields(advance, patch)


@transaction.atomic
def delete_cash_advance(*, advance_id: int) -> None:
    advance = repo.lock(advance_id)
    _ensure_unpaid(advance)
    repo.delete(advance)


def unpaid_for_employee(employee_id: int) -> Dict[str, Any]:
    employee_repo.get_by_id(employee_id)
    qs = repo.list_unpaid(employee_id)
    return {"employee_id": employee_id, "cash_advances": list(qs), "total": round2(repo.sum_amount(qs))}


@transaction.atomic
def mark_paid(*, advance_id: int, payroll_id: Optional[int] = None) -> CashAdvance:
    advance = repo.lock(advance_id)
    _ensure_unpaid(advance)

    payroll = None
    if payroll_id is not None:
        payroll = payroll_repo.lock(payroll_id)
        if payroll.employee_id != advance.employee_id:
            raise ValidationError({"payroll_id": "Payroll period belongs to another employee."})

        note = f"Cash advance from {advance.date_taken.isoformat()}"
        existing = deduction_repo.get_for_type(payroll.id, DeductionType.CASH_ADVANCE)
        amount = advance.amount
        if existing:
            amount = existing.amount + advance.amount
            if existing.notes:
                note = f"{existing.notes}; {note}"
        deduction_repo.upsert(payroll.id, DeductionType.CASH_ADVANCE, {
            "amount": round2(amount),
            "notes": note[:_NOTES_MAX],
        })
        recalculate_payroll_totals(payroll.id)

    advance = repo.save_fields(advance, {
        "is_paid": True,
        "date_deducted": timezone.localdate(),
        "payroll": payroll,
    })
    logger.info(
        "[cash-advance] #%s marked paid%s", advance.id,
        f", deducted on payroll #{payroll.id}" if payroll else "",
    )
    return advance
