# -*- coding: utf-8 -*-
"""
Branch daily incentive sheet:
- get-or-create the sheet for (branch, start, end)
- batch save of daily tallies (0 deletes the cell, otherwise upsert), one transaction per sheet
- period totals per input type and the day × type grid (missing cells = 0)
"""
from __future__ import annotations
import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils.dateparse import parse_date

from clinic_payroll.incentive_defaults import SHEET_INPUT_TYPES
from clinic_payroll.models import IncentiveSheet
from clinic_payroll.repositories import branch_repository as branch_repo
from clinic_payroll.repositories import incentive_sheet_repository as repo
from clinic_payroll.utils.money import to_decimal

logger = logging.getLogger(__name__)


def _as_date(value: Any, field: str) -> date:
    if isinstance(value, date):
        return value
    try:
        parsed = parse_date(str(value)) if value else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError({field: f"Invalid date: {value!r}"})
    return parsed


def days_in_range(start_date: date, end_date: date) -> List[date]:
    days: List[date] = []
    current = start_date
    while current <= end_date:
        days.append(current)
        current += timedelta(days=1)
    return days


def get_or_create_sheet(*, branch_id: int, start_date: Any, end_date: Any) -> Tuple[IncentiveSheet, bool]:
    start = _as_date(start_date, "start_date")
    end = _as_date(end_date, "end_date")
    if end < start:
        raise ValidationError("end_date must be >= start_date.")
    branch_repo.get_by_id(branch_id)  # DoesNotExist -> 404
    sheet, created = repo.get_or_create(branch_id, start, end)
    if created:
        logger.info("[incentive-sheet] created sheet #%s branch=%s %s→%s", sheet.id, branch_id, start, end)
    return sheet, created


def _normalize_inputs(sheet: IncentiveSheet, inputs: Iterable[Dict[str, Any]]) -> List[Tuple[date, str, Decimal]]:
    """Validate the whole batch before any write."""
    out: Dict[Tuple[date, str], Decimal] = {}
    for idx, raw in enumerate(inputs):
        day = _as_date(raw.get("date"), f"inputs[{idx}].date")
        incentive_type = str(raw.get("type") or raw.get("incentive_type") or "")
        if incentive_type not in SHEET_INPUT_TYPES:
            raise ValidationError({f"inputs[{idx}].type": f"Unknown sheet type: {incentive_type!r}"})
        if not (sheet.start_date <= day <= sheet.end_date):
            raise ValidationError({f"inputs[{idx}].date": f"{day} is outside {sheet.start_date}→{sheet.end_date}"})
        try:
            value = to_decimal(raw.get("value"))
        except ValueError as ex:
            raise ValidationError({f"inputs[{idx}].value": str(ex)}) from ex
        if value < 0:
            raise ValidationError({f"inputs[{idx}].value": "Value must be >= 0."})
        # last write wins inside one batch
        out[(day, incentive_type)] = value
    return [(day, t, v) for (day, t), v in out.items()]


@transaction.atomic
def save_daily_inputs(*, sheet_id: int, inputs: Iterable[Dict[str, Any]]) -> IncentiveSheet:
    sheet = repo.lock(sheet_id)
    rows = _normalize_inputs(sheet, inputs)
    upserted = deleted = 0
    for day, incentive_type, value in rows:
        if value == 0:
            deleted += repo.delete_input(sheet.id, day, incentive_type)
        else:
            repo.upsert_input(sheet.id, day, incentive_type, value)
            upserted += 1
    logger.info("[incentive-sheet] sheet #%s saved: %d upserted, %d cleared", sheet.id, upserted, deleted)
    return sheet


def period_totals(sheet: IncentiveSheet) -> Dict[str, Decimal]:
    sums = repo.sum_by_type(sheet)
    return {t: sums.get(t, Decimal("0")) for t in SHEET_INPUT_TYPES}


def build_grid(sheet: IncentiveSheet) -> Dict[str, Dict[str, Decimal]]:
    """grid[type][iso_date] = value, every day of the range present."""
    days = [d.isoformat() for d in days_in_range(sheet.start_date, sheet.end_date)]
    grid: Dict[str, Dict[str, Decimal]] = {t: {d: Decimal("0") for d in days} for t in SHEET_INPUT_TYPES}
    for row in repo.list_inputs(sheet.id):
        key = row.date.isoformat()
        if row.incentive_type in grid and key in grid[row.incentive_type]:
            grid[row.incentive_type][key] = row.value
    return grid
