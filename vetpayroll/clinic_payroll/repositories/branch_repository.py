# -*- coding: utf-8 -*-
"""
Repository layer for Branch (pure DB).
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
from django.db import transaction
from django.db.models import QuerySet, Count, Q

from clinic_payroll.models import Branch


def base_qs() -> QuerySet[Branch]:
    return Branch.objects.all()

def get_by_id(branch_id: int) -> Branch:
    return base_qs().get(id=branch_id)

def list_branches(active_only: bool = False) -> QuerySet[Branch]:
    qs = base_qs().annotate(employee_count=Count("employees", filter=Q(employees__is_active=True)))
    if active_only:
        qs = qs.filter(is_active=True)
    return qs.order_by("name")

@transaction.atomic
def create(data: Dict[str, Any]) -> Branch:
    return Branch.objects.create(**data)

@transaction.atomic
def save_fields(obj: Branch, patch: Dict[str, Any], allowed: Optional[Iterable[str]] = None) -> Branch:
    fields: List[str] = []
    for k, v in patch.items():
        if (allowed is None) or (k in allowed):
            setattr(obj, k, v)
            fields.append(k)
    if fields:
        fields.append("updated_at")
        obj.save(update_fields=fields)
    return obj
