# -*- coding: utf-8 -*-
"""
Repository layer for Deduction rows of a PayrollPeriod (pure DB).
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Set
from django.db import transaction
from django.db.models import QuerySet

from clinic_payroll.models import Deduction


def list_for_payroll(payroll_id: int) -> QuerySet[Deduction]:
    return Deduction.objects.filter(payroll_id=payroll_id).order_by("deduction_type")

def get_by_id(deduction_id: int) -> Deduction:
    return Deduction.objects.get(id=deduction_id)

def get_for_type(payroll_id: int, deduction_type: str) -> Optional[Deduction]:
    return Deduction.objects.filter(payroll_id=payroll_id, deduction_type=deduction_type).first()

def existing_types(payroll_id: int) -> Set[str]:
    return set(Deduction.objects.filter(payroll_id=payroll_id).values_list("deduction_type", flat=True))

@transaction.atomic
def upsert(payroll_id: int, deduction_type: str, data: Dict[str, Any]) -> Deduction:
    obj, _ = Deduction.objects.update_or_create(
        payroll_id=payroll_id, deduction_type=deduction_type, defaults=data,
    )
    return obj

@transaction.atomic
def bulk_add(payroll_id: int, rows: List[Dict[str, Any]]) -> None:
    Deduction.objects.bulk_create([Deduction(payroll_id=payroll_id, **row) for row in rows])

@transaction.atomic
def replace_all(payroll_id: int, rows: List[Dict[str, Any]]) -> List[Deduction]:
    Deduction.objects.filter(payroll_id=payroll_id).delete()
    bulk_add(payroll_id, rows)
    return list(list_for_payroll(payroll_id))

@transaction.atomic
def delete(obj: Deduction) -> None:
    obj.delete()
