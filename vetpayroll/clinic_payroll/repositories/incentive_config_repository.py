# -*- coding: utf-8 -*-
"""
Repository layer for IncentiveConfig (pure DB).
Version bump on write is decided by the config store service.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
from django.db import transaction
from django.db.models import QuerySet

from clinic_payroll.models import IncentiveConfig


def base_qs() -> QuerySet[IncentiveConfig]:
    return IncentiveConfig.objects.all()

def list_active() -> QuerySet[IncentiveConfig]:
    return base_qs().filter(is_active=True).order_by("sort_order", "incentive_type")

def list_all() -> QuerySet[IncentiveConfig]:
    return base_qs().order_by("sort_order", "incentive_type")

def count() -> int:
    return base_qs().count()

def get_by_type(incentive_type: str) -> Optional[IncentiveConfig]:
    return base_qs().filter(incentive_type=incentive_type).first()

def lock_by_type(incentive_type: str) -> Optional[IncentiveConfig]:
    return IncentiveConfig.objects.select_for_update().filter(incentive_type=incentive_type).first()

@transaction.atomic
def create(data: Dict[str, Any]) -> IncentiveConfig:
    return IncentiveConfig.objects.create(**data)

@transaction.atomic
def bulk_create(rows: List[Dict[str, Any]]) -> List[IncentiveConfig]:
    IncentiveConfig.objects.bulk_create([IncentiveConfig(**row) for row in rows])
    return list(list_all())

@transaction.atomic
def save_fields(obj: IncentiveConfig, patch: Dict[str, Any]) -> IncentiveConfig:
    fields: List[str] = []
    for k, v in patch.items():
        setattr(obj, k, v)
        fields.append(k)
    if fields:
        fields.append("updated_at")
        obj.save(update_fields=fields)
    return obj
