# -*- coding: utf-8 -*-
"""
Selector for IncentiveSheet lookups used by the API layer.
"""
from __future__ import annotations

from clinic_payroll.repositories import incentive_sheet_repository as repo

get_sheet_by_id = repo.get_by_id
