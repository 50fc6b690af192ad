# -*- coding: utf-8 -*-
"""
Selector for CashAdvance:
- normalise query input (csv → list, "true"/"false" → bool)
- delegate to repository
"""
from __future__ import annotations
from typing import Any, Dict
from django.db.models import QuerySet

from clinic_payroll.models import CashAdvance
from clinic_payroll.repositories import cash_advance_repository as repo
from clinic_payroll.selectors._common import as_bool, as_int_list


def filter_cash_advances(filters: Dict[str, Any]) -> QuerySet[CashAdvance]:
    norm = {
        "employee_id": as_int_list(filters.get("employee_id")),
        "branch_id": as_int_list(filters.get("branch_id")),
        "is_paid": as_bool(filters.get("is_paid")),
    }
    return repo.filter_advances(norm)

get_cash_advance_by_id = repo.get_by_id
