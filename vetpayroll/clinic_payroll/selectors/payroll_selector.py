# -*- coding: utf-8 -*-
"""
Selector for PayrollPeriod:
- normalise query input (string → list/date)
- delegate to repository
"""
from __future__ import annotations
from typing import Any, Dict
from django.db.models import QuerySet
from django.utils.dateparse import parse_date

from clinic_payroll.models import PayrollPeriod
from clinic_payroll.repositories import payroll_repository as repo
from clinic_payroll.selectors._common import as_int_list, as_str_list


def filter_payrolls(filters: Dict[str, Any]) -> QuerySet[PayrollPeriod]:
    norm = {
        "branch_id": as_int_list(filters.get("branch_id")),
        "employee_id": as_int_list(filters.get("employee_id")),
        "status": as_str_list(filters.get("status")),
        "start_date": parse_date(filters.get("start_date")) if filters.get("start_date") else None,
        "end_date": parse_date(filters.get("end_date")) if filters.get("end_date") else None,
    }
    return repo.filter_payrolls(norm)

get_payroll_by_id = repo.get_with_lines
