# -*- coding: utf-8 -*-
"""
Repository layer for CashAdvance (pure DB).
"""
from __future__ import annotations
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from django.db import transaction
from django.db.models import QuerySet, Sum

from clinic_payroll.models import CashAdvance


def base_qs() -> QuerySet[CashAdvance]:
    return CashAdvance.objects.select_related("employee", "employee__branch")

def get_by_id(advance_id: int) -> CashAdvance:
    return base_qs().get(id=advance_id)

def lock(advance_id: int) -> CashAdvance:
    """Row lock; caller must already be inside transaction.atomic."""
    return CashAdvance.objects.select_for_update().select_related("employee").get(id=advance_id)

def filter_advances(filters: Dict[str, Any]) -> QuerySet[CashAdvance]:
    qs = base_qs()
    if (emp_ids := filters.get("employee_id")):
        qs = qs.filter(employee_id__in=emp_ids)
    if (branch_ids := filters.get("branch_id")):
        qs = qs.filter(employee__branch_id__in=branch_ids)
    if filters.get("is_paid") is not None:
        qs = qs.filter(is_paid=filters["is_paid"])
    return qs.order_by("-date_taken", "-id")

def list_unpaid(employee_id: int) -> QuerySet[CashAdvance]:
    return base_qs().filter(employee_id=employee_id, is_paid=False).order_by("date_taken", "id")

def sum_amount(qs: QuerySet[CashAdvance]) -> Decimal:
    return qs.aggregate(s=Sum("amount"))["s"] or Decimal("0")

@transaction.atomic
def create(data: Dict[str, Any]) -> CashAdvance:
    return CashAdvance.objects.create(**data)

@transaction.atomic
def save_fields(obj: CashAdvance, patch: Dict[str, Any], allowed: Optional[Iterable[str]] = None) -> CashAdvance:
    fields: List[str] = []
    for k, v in patch.items():
        if (allowed is None) or (k in allowed):
            setattr(obj, k, v)
            fields.append(k)
    if fields:
        fields.append("updated_at")
        obj.save(update_fields=fields)
    return obj

@transaction.atomic
def delete(obj: CashAdvance) -> None:
    obj.delete()
