# -*- coding: utf-8 -*-
"""
Per-employee incentive exclusions (toggle on / off).
An exclusion removes the employee from both receivers and the division pool of that type.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError

from clinic_payroll.repositories import employee_repository as repo

logger = logging.getLogger(__name__)


def list_exclusions(employee_id: int):
    repo.get_by_id(employee_id)
    return repo.list_exclusions_for_employee(employee_id)


def toggle_exclusion(*, employee_id: int, incentive_type: Optional[str]) -> Dict[str, Any]:
    if not incentive_type:
        raise ValidationError({"incentive_type": "This field is required."})
    repo.get_by_id(employee_id)  # DoesNotExist -> 404

    existing = repo.get_exclusion(employee_id, incentive_type)
    if existing:
        repo.delete_exclusion(existing)
        logger.info("[exclusion] employee #%s back in %s", employee_id, incentive_type)
        return {"excluded": False, "exclusion": None, "message": "Incentive exclusion removed"}

    obj = repo.create_exclusion(employee_id, incentive_type)
    logger.info("[exclusion] employee #%s excluded from %s", employee_id, incentive_type)
    return {"excluded": True, "exclusion": obj, "message": "Incentive exclusion added"}
