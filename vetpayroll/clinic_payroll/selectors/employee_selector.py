# -*- coding: utf-8 -*-
"""
Selector for Employee / Branch lookups used by the API layer.
"""
from __future__ import annotations
from typing import Any, Dict
from django.db.models import QuerySet

from clinic_payroll.models import Employee
from clinic_payroll.repositories import branch_repository as branch_repo
from clinic_payroll.repositories import employee_repository as repo
from clinic_payroll.selectors._common import as_bool, as_int_list, as_str_list


def filter_employees(filters: Dict[str, Any]) -> QuerySet[Employee]:
    norm = {
        "branch_id": as_int_list(filters.get("branch_id")),
        "position": as_str_list(filters.get("position")),
        "is_active": as_bool(filters.get("is_active")),
        "q": (filters.get("q") or "").strip(),
    }
    return repo.filter_employees(norm)

get_employee_by_id = repo.get_by_id
list_fixed_deductions = repo.list_fixed_deductions

list_branches = branch_repo.list_branches
get_branch_by_id = branch_repo.get_by_id
