# -*- coding: utf-8 -*-
"""
Per-employee incentive entry on a payroll period:
- single upsert by type (config rate or an explicit override, never pooled)
- bulk replace of all lines (shared types pooled by the branch division count,
  except types whose config turns pooling off for individual entry)
- delete
Each mutation recalculates the period totals in the same transaction.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from clinic_payroll.models import Incentive, PayrollPeriod
from clinic_payroll.repositories import incentive_repository as repo
from clinic_payroll.repositories import payroll_repository as payroll_repo
from clinic_payroll.services import eligibility_service as eligibility
from clinic_payroll.services.incentive_config_service import IncentiveConfigStore, get_config_store
from clinic_payroll.services.incentive_formula import FormulaType, calculate_incentive
from clinic_payroll.services.payroll_totals_service import recalculate_payroll_totals
from clinic_payroll.utils.money import ZERO, to_decimal

logger = logging.getLogger(__name__)


def list_incentives(payroll_id: int):
    return repo.list_for_payroll(payroll_id)


def _rate_and_formula(config, override_rate: Any):
    rate = override_rate if override_rate is not None else (config.rate if config else ZERO)
    formula_type = config.formula_type if config else FormulaType.COUNT_MULTIPLY
    return to_decimal(rate), formula_type


@transaction.atomic
def upsert_incentive(
    *, payroll_id: int, incentive_type: str, count: Any = None, input_value: Any = None,
    rate: Any = None, date_earned=None, config_store: Optional[IncentiveConfigStore] = None,
) -> Incentive:
    if not incentive_type:
        raise ValidationError({"type": "This field is required."})
    store = config_store or get_config_store()
    payroll_repo.lock(payroll_id)  # DoesNotExist -> 404

    existing = repo.get_for_type(payroll_id, incentive_type)
    if count is None:
        count = existing.count if existing else ZERO
    if input_value is None:
        input_value = existing.input_value if existing else ZERO
    if date_earned is None and existing:
        date_earned = existing.date_earned

    effective_rate, formula_type = _rate_and_formula(store.get(incentive_type), rate)
    result = calculate_incentive(
        incentive_type=incentive_type, count=count, input_value=input_value,
        rate=effective_rate, formula_type=formula_type,
    )
    obj = repo.upsert(payroll_id, incentive_type, {
        "count": to_decimal(count),
        "input_value": to_decimal(input_value),
        "rate": effective_rate,
        "amount": result.amount,
        "formula": result.formula,
        "date_earned": date_earned,
    })
    recalculate_payroll_totals(payroll_id)
    return obj


@transaction.atomic
def bulk_replace_incentives(
    *, payroll_id: int, incentives: Iterable[Dict[str, Any]],
    config_store: Optional[IncentiveConfigStore] = None,
) -> PayrollPeriod:
    store = config_store or get_config_store()
    payroll = payroll_repo.lock(payroll_id)
    lines = list(incentives or [])

    roster = eligibility.load_branch_roster(payroll.employee.branch_id)
    exclusions = eligibility.load_exclusion_map(e.employee_id for e in roster)

    # one row per type; a repeated type keeps its last line
    rows: Dict[str, Dict[str, Any]] = {}
    for line in lines:
        incentive_type = (line.get("type") or "").strip().upper()
        if not incentive_type:
            raise ValidationError({"type": "This field is required."})
        config = store.get(incentive_type)
        effective_rate, formula_type = _rate_and_formula(config, line.get("rate"))

        num_eligible = None
        if config is not None and config.pools_on_individual_entry:
            elig = eligibility.resolve(
                roster, config.receiving_positions, config.effective_division_positions,
                exclusions, incentive_type,
            )
            num_eligible = elig.divisor

        count = to_decimal(line.get("count"))
        input_value = to_decimal(line.get("input_value"))
        result = calculate_incentive(
            incentive_type=incentive_type, count=count, input_value=input_value,
            rate=effective_rate, formula_type=formula_type, num_eligible=num_eligible,
        )
        # lines with no input are dropped
        if count > 0 or input_value > 0:
            rows[incentive_type] = {
                "incentive_type": incentive_type,
                "count": count,
                "input_value": input_value,
                "rate": effective_rate,
                "amount": result.amount,
                "formula": result.formula,
                "date_earned": line.get("date_earned"),
            }
        else:
            rows.pop(incentive_type, None)

    repo.replace_all(payroll_id, list(rows.values()))
    logger.info("[incentive] payroll #%s replaced with %d lines", payroll_id, len(rows))
    recalculate_payroll_totals(payroll_id)
    return payroll_repo.get_with_lines(payroll_id)


@transaction.atomic
def delete_incentive(*, incentive_id: int) -> int:
    obj = repo.get_by_id(incentive_id)
    payroll_id = obj.payroll_id
    payroll_repo.lock(payroll_id)
    repo.delete(obj)
    recalculate_payroll_totals(payroll_id)
    return payroll_id
