# -*- coding: utf-8 -*-
"""
Repository layer for IncentiveSheet + DailyIncentiveInput (pure DB).
"""
from __future__ import annotations
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Tuple
from django.db import transaction
from django.db.models import QuerySet, Sum
from django.utils import timezone

from clinic_payroll.models import IncentiveSheet, DailyIncentiveInput


def base_qs() -> QuerySet[IncentiveSheet]:
    return IncentiveSheet.objects.select_related("branch")

def get_by_id(sheet_id: int) -> IncentiveSheet:
    return base_qs().get(id=sheet_id)

def lock(sheet_id: int) -> IncentiveSheet:
    """Row lock; caller must already be inside transaction.atomic."""
    return IncentiveSheet.objects.select_for_update().get(id=sheet_id)

@transaction.atomic
def get_or_create(branch_id: int, start_date: date, end_date: date) -> Tuple[IncentiveSheet, bool]:
    return IncentiveSheet.objects.get_or_create(branch_id=branch_id, start_date=start_date, end_date=end_date)

def list_inputs(sheet_id: int) -> QuerySet[DailyIncentiveInput]:
    return DailyIncentiveInput.objects.filter(sheet_id=sheet_id).order_by("date", "incentive_type")

def sum_by_type(sheet: IncentiveSheet) -> Dict[str, Decimal]:
    rows = (
        DailyIncentiveInput.objects
        .filter(sheet_id=sheet.id, date__gte=sheet.start_date, date__lte=sheet.end_date)
        .values("incentive_type")
        .annotate(total=Sum("value"))
    )
    return {r["incentive_type"]: r["total"] or Decimal("0") for r in rows}

def delete_input(sheet_id: int, day: date, incentive_type: str) -> int:
    deleted, _ = DailyIncentiveInput.objects.filter(sheet_id=sheet_id, date=day, incentive_type=incentive_type).delete()
    return deleted

def upsert_input(sheet_id: int, day: date, incentive_type: str, value: Decimal) -> DailyIncentiveInput:
    obj, _ = DailyIncentiveInput.objects.update_or_create(
        sheet_id=sheet_id, date=day, incentive_type=incentive_type, defaults={"value": value},
    )
    return obj

def mark_distributed(sheet: IncentiveSheet) -> IncentiveSheet:
    sheet.is_distributed = True
    sheet.distributed_at = timezone.now()
    sheet.save(update_fields=["is_distributed", "distributed_at", "updated_at"])
    return sheet
