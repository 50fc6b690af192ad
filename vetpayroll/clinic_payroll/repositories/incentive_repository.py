# -*- coding: utf-8 -*-
"""
Repository layer for Incentive rows of a PayrollPeriod (pure DB).
One row per (payroll, incentive_type): upsert overwrites, never appends.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
from django.db import transaction
from django.db.models import QuerySet

from clinic_payroll.models import Incentive


def list_for_payroll(payroll_id: int) -> QuerySet[Incentive]:
    return Incentive.objects.filter(payroll_id=payroll_id).order_by("incentive_type")

def get_by_id(incentive_id: int) -> Incentive:
    return Incentive.objects.get(id=incentive_id)

def get_for_type(payroll_id: int, incentive_type: str) -> Optional[Incentive]:
    return Incentive.objects.filter(payroll_id=payroll_id, incentive_type=incentive_type).first()

@transaction.atomic
def upsert(payroll_id: int, incentive_type: str, data: Dict[str, Any]) -> Incentive:
    obj, _ = Incentive.objects.update_or_create(
        payroll_id=payroll_id, incentive_type=incentive_type, defaults=data,
    )
    return obj

@transaction.atomic
def replace_all(payroll_id: int, rows: List[Dict[str, Any]]) -> List[Incentive]:
    Incentive.objects.filter(payroll_id=payroll_id).delete()
    Incentive.objects.bulk_create([Incentive(payroll_id=payroll_id, **row) for row in rows])
    return list(list_for_payroll(payroll_id))

@transaction.atomic
def delete(obj: Incentive) -> None:
    obj.delete()
