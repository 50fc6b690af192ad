# -*- coding: utf-8 -*-
"""
Repository layer for PayrollPeriod (pure DB):
- filter / lookup, row locks (select_for_update) for read→compute→write
- aggregate sums over the owned Incentive / Deduction rows
- range summary (money sums, counts by status)
"""
from __future__ import annotations
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from django.db import transaction
from django.db.models import Count, QuerySet, Sum

from clinic_payroll.models import PayrollPeriod, Incentive, Deduction


def base_qs() -> QuerySet[PayrollPeriod]:
    return PayrollPeriod.objects.select_related("employee", "employee__branch")

def get_by_id(payroll_id: int) -> PayrollPeriod:
    return base_qs().get(id=payroll_id)

def get_with_lines(payroll_id: int) -> PayrollPeriod:
    return base_qs().prefetch_related("incentives", "deductions").get(id=payroll_id)

def lock(payroll_id: int) -> PayrollPeriod:
    """Row lock; caller must already be inside transaction.atomic."""
    return PayrollPeriod.objects.select_for_update().select_related("employee").get(id=payroll_id)

def filter_payrolls(filters: Dict[str, Any]) -> QuerySet[PayrollPeriod]:
    qs = base_qs()
    if (branch_ids := filters.get("branch_id")):
        qs = qs.filter(employee__branch_id__in=branch_ids)
    if (emp_ids := filters.get("employee_id")):
        qs = qs.filter(employee_id__in=emp_ids)
    if (statuses := filters.get("status")):
        qs = qs.filter(status__in=statuses)
    if (start := filters.get("start_date")):
        qs = qs.filter(start_date=start)
    if (end := filters.get("end_date")):
        qs = qs.filter(end_date=end)
    return qs.order_by("-start_date", "employee__name")

def within_range(start_date: date, end_date: date, branch_id: Optional[int] = None) -> QuerySet[PayrollPeriod]:
    """Periods fully inside start..end of active employees."""
    qs = base_qs().filter(start_date__gte=start_date, end_date__lte=end_date, employee__is_active=True)
    if branch_id:
        qs = qs.filter(employee__branch_id=branch_id)
    return qs.order_by("-start_date", "employee__name")

SUMMARY_FIELDS = (
    "basic_pay", "holiday_pay", "overtime_pay", "total_incentives",
    "total_deductions", "gross_pay", "net_pay",
)

def summarize(qs: QuerySet[PayrollPeriod]) -> Dict[str, Any]:
    sums = qs.aggregate(count=Count("id"), **{f: Sum(f) for f in SUMMARY_FIELDS})
    by_status = {row["status"]: row["n"] for row in qs.order_by().values("status").annotate(n=Count("id"))}
    return {"sums": sums, "by_status": by_status}

def find_for_period(employee_id: int, start_date: date, end_date: date) -> Optional[PayrollPeriod]:
    return base_qs().filter(employee_id=employee_id, start_date=start_date, end_date=end_date).first()

def lock_matching(employee_ids: Iterable[int], start_date: date, end_date: date) -> List[PayrollPeriod]:
    return list(
        PayrollPeriod.objects.select_for_update()
        .filter(employee_id__in=list(employee_ids), start_date=start_date, end_date=end_date)
        .order_by("id")
    )

def sum_incentives(payroll_id: int) -> Decimal:
    return Incentive.objects.filter(payroll_id=payroll_id).aggregate(s=Sum("amount"))["s"] or Decimal("0")

def sum_deductions(payroll_id: int) -> Decimal:
    return Deduction.objects.filter(payroll_id=payroll_id).aggregate(s=Sum("amount"))["s"] or Decimal("0")

@transaction.atomic
def create(data: Dict[str, Any]) -> PayrollPeriod:
    return PayrollPeriod.objects.create(**data)

@transaction.atomic
def save_fields(obj: PayrollPeriod, patch: Dict[str, Any], allowed: Optional[Iterable[str]] = None) -> PayrollPeriod:
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
def delete(obj: PayrollPeriod) -> None:
    obj.delete()
