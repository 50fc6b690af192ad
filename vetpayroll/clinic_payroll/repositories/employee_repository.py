# -*- coding: utf-8 -*-
"""
Repository layer for Employee and its owned rows (pure DB):
- Employee CRUD / filter
- FixedDeduction templates (replace wholesale)
- IncentiveExclusion pairs
No business rules here: rate formulas and toggles live in services.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
from django.db import transaction
from django.db.models import QuerySet

from clinic_payroll.models import Employee, FixedDeduction, IncentiveExclusion


# ============================
# Employee
# ============================
def base_qs() -> QuerySet[Employee]:
    return Employee.objects.select_related("branch")

def get_by_id(employee_id: int) -> Employee:
    return base_qs().get(id=employee_id)

def list_active_for_branch(branch_id: int) -> QuerySet[Employee]:
    return base_qs().filter(branch_id=branch_id, is_active=True).order_by("id")

def filter_employees(filters: Dict[str, Any]) -> QuerySet[Employee]:
    qs = base_qs()
    if (branch_ids := filters.get("branch_id")):
        qs = qs.filter(branch_id__in=branch_ids)
    if (positions := filters.get("position")):
        qs = qs.filter(position__in=positions)
    if filters.get("is_active") is not None:
        qs = qs.filter(is_active=filters["is_active"])
    if (qtext := (filters.get("q") or "").strip()):
        qs = qs.filter(name__icontains=qtext)
    return qs.order_by("name")

def list_branch_formula_employees(branch_id: int, positions: Iterable[str]) -> QuerySet[Employee]:
    return (
        Employee.objects.select_for_update()
        .filter(branch_id=branch_id, is_active=True, position__in=list(positions))
    )

@transaction.atomic
def create(data: Dict[str, Any]) -> Employee:
    return Employee.objects.create(**data)

@transaction.atomic
def save_fields(obj: Employee, patch: Dict[str, Any], allowed: Optional[Iterable[str]] = None) -> Employee:
    fields: List[str] = []
    for k, v in patch.items():
        if (allowed is None) or (k in allowed):
            setattr(obj, k, v)
            fields.append(k)
    if fields:
        fields.append("updated_at")
        obj.save(update_fields=fields)
    return obj


# ============================
# Fixed deductions
# ============================
def list_fixed_deductions(employee_id: int, active_only: bool = False) -> QuerySet[FixedDeduction]:
    qs = FixedDeduction.objects.filter(employee_id=employee_id)
    if active_only:
        qs = qs.filter(is_active=True)
    return qs.order_by("category", "deduction_type")

@transaction.atomic
def replace_fixed_deductions(employee_id: int, rows: List[Dict[str, Any]]) -> List[FixedDeduction]:
    FixedDeduction.objects.filter(employee_id=employee_id).delete()
    objs = [FixedDeduction(employee_id=employee_id, **row) for row in rows]
    FixedDeduction.objects.bulk_create(objs)
    return list(list_fixed_deductions(employee_id))


# ============================
# Incentive exclusions
# ============================
def list_exclusions(employee_ids: Iterable[int]) -> QuerySet[IncentiveExclusion]:
    return IncentiveExclusion.objects.filter(employee_id__in=list(employee_ids))

def list_exclusions_for_employee(employee_id: int) -> QuerySet[IncentiveExclusion]:
    return IncentiveExclusion.objects.filter(employee_id=employee_id).order_by("incentive_type")

def get_exclusion(employee_id: int, incentive_type: str) -> Optional[IncentiveExclusion]:
    return IncentiveExclusion.objects.filter(employee_id=employee_id, incentive_type=incentive_type).first()

@transaction.atomic
def create_exclusion(employee_id: int, incentive_type: str) -> IncentiveExclusion:
    obj, _ = IncentiveExclusion.objects.get_or_create(employee_id=employee_id, incentive_type=incentive_type)
    return obj

@transaction.atomic
def delete_exclusion(obj: IncentiveExclusion) -> None:
    obj.delete()
