# -*- coding: utf-8 -*-
"""
Distribution of an incentive sheet's period totals into employee payrolls.

For each DistributionRule (independently, several rules may share one source tally):
  total      = period total of rule.source_type (rule skipped when 0)
  receivers  = eligible receivers for rule.incentive_type (rule skipped when none)
  per person = round2(total × rule.rate ÷ max(division_count, 1))
Each receiver's payroll for the exact sheet period gets its Incentive row for the
type overwritten (re-running never stacks amounts). Receivers without a matching
payroll period are skipped. Every touched payroll is recalculated, then the sheet
is marked distributed. All of it runs in one transaction with the sheet and the
matching payroll rows locked.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence

from django.db import transaction

from clinic_payroll.incentive_defaults import DISTRIBUTION_RULES, SHEET_INPUT_TYPES, DistributionRule
from clinic_payroll.models import IncentiveSheet
from clinic_payroll.repositories import incentive_repository as incentive_repo
from clinic_payroll.repositories import incentive_sheet_repository as sheet_repo
from clinic_payroll.repositories import payroll_repository as payroll_repo
from clinic_payroll.services import eligibility_service as eligibility
from clinic_payroll.services.eligibility_service import ExclusionMap, RosterEntry
from clinic_payroll.services.incentive_formula import pooled_share
from clinic_payroll.services.incentive_sheet_service import build_grid, days_in_range, period_totals
from clinic_payroll.services.payroll_totals_service import recalculate_payroll_totals
from clinic_payroll.utils.money import ZERO, round2, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistributionLine:
    rule_key: str
    employee_id: int
    employee_name: str
    incentive_type: str
    total: Decimal
    rate: Decimal
    num_eligible: int
    amount: Decimal
    formula: str


@dataclass
class DistributionReport:
    sheet_id: int
    lines: List[Dict[str, Any]] = field(default_factory=list)
    skipped_employee_ids: List[int] = field(default_factory=list)
    affected_payroll_ids: List[int] = field(default_factory=list)

    @property
    def affected_payrolls(self) -> int:
        return len(self.affected_payroll_ids)


def _eligibility_for(rule: DistributionRule, roster, exclusions) -> eligibility.Eligibility:
    # resolved at the derived type so CONFINEMENT_VET / CONFINEMENT_ASST exclusions stay independent
    return eligibility.resolve(
        roster, rule.receiving_positions, rule.effective_division_positions,
        exclusions, str(rule.incentive_type),
    )


def compute_distributions(
    totals: Mapping[str, Any],
    roster: Sequence[RosterEntry],
    exclusions: ExclusionMap,
    rules: Sequence[DistributionRule] = DISTRIBUTION_RULES,
) -> List[DistributionLine]:
    lines: List[DistributionLine] = []
    for rule in rules:
        total = to_decimal(totals.get(rule.source_type, 0))
        if total == 0:
            continue
        elig = _eligibility_for(rule, roster, exclusions)
        if not elig.receivers:
            continue

        result = pooled_share(total, rule.rate, elig.divisor)
        for entry in elig.receivers:
            lines.append(DistributionLine(
                rule_key=rule.key,
                employee_id=entry.employee_id,
                employee_name=entry.name,
                incentive_type=str(rule.incentive_type),
                total=total,
                rate=rule.rate,
                num_eligible=elig.division_count,
                amount=result.amount,
                formula=result.formula,
            ))
    return lines


def preview_distribution(
    totals: Mapping[str, Any],
    roster: Sequence[RosterEntry],
    exclusions: ExclusionMap,
    rules: Sequence[DistributionRule] = DISTRIBUTION_RULES,
) -> List[Dict[str, Any]]:
    """One row per rule, nothing written. per_person is 0 while nobody is in the division pool."""
    preview: List[Dict[str, Any]] = []
    for rule in rules:
        total = to_decimal(totals.get(rule.source_type, 0))
        elig = _eligibility_for(rule, roster, exclusions)
        total_pay = total * rule.rate
        per_person = total_pay / elig.division_count if elig.division_count else ZERO
        preview.append({
            "config_key": rule.key,
            "label": rule.label,
            "source_type": rule.source_type,
            "incentive_type": str(rule.incentive_type),
            "total": total,
            "rate": rule.rate,
            "num_eligible": elig.division_count,
            "total_pay": round2(total_pay),
            "per_person": round2(per_person),
            "eligible_names": [e.name for e in elig.receivers],
        })
    return preview


def sheet_overview(sheet: IncentiveSheet, rules: Sequence[DistributionRule] = DISTRIBUTION_RULES) -> Dict[str, Any]:
    """Sheet + days + grid + totals + distribution preview + branch roster."""
    roster = eligibility.load_branch_roster(sheet.branch_id)
    exclusions = eligibility.load_exclusion_map(e.employee_id for e in roster)
    totals = period_totals(sheet)
    return {
        "sheet": sheet,
        "days": [d.isoformat() for d in days_in_range(sheet.start_date, sheet.end_date)],
        "grid": build_grid(sheet),
        "totals": totals,
        "distribution_preview": preview_distribution(totals, roster, exclusions, rules),
        "employees": [{"id": e.employee_id, "name": e.name, "position": e.position} for e in roster],
    }


def distribution_config(rules: Sequence[DistributionRule] = DISTRIBUTION_RULES) -> Dict[str, Any]:
    return {
        "shared_types": list(SHEET_INPUT_TYPES),
        "rules": [
            {
                "key": r.key,
                "label": r.label,
                "source_type": r.source_type,
                "incentive_type": str(r.incentive_type),
                "rate": r.rate,
                "receiving_positions": [str(p) for p in r.receiving_positions],
                "division_positions": [str(p) for p in r.effective_division_positions],
            }
            for r in rules
        ],
    }


@transaction.atomic
def distribute_sheet(*, sheet_id: int, rules: Optional[Sequence[DistributionRule]] = None) -> DistributionReport:
    rules = DISTRIBUTION_RULES if rules is None else rules
    sheet = sheet_repo.lock(sheet_id)

    # one consistent snapshot: roster, exclusions, payroll rows (locked)
    roster = eligibility.load_branch_roster(sheet.branch_id)
    exclusions = eligibility.load_exclusion_map(e.employee_id for e in roster)
    payrolls = payroll_repo.lock_matching([e.employee_id for e in roster], sheet.start_date, sheet.end_date)
    payroll_by_employee = {p.employee_id: p for p in payrolls}

    totals = period_totals(sheet)
    lines = compute_distributions(totals, roster, exclusions, rules)

    report = DistributionReport(sheet_id=sheet.id)
    touched: List[int] = []
    for line in lines:
        payroll = payroll_by_employee.get(line.employee_id)
        if payroll is None:
            if line.employee_id not in report.skipped_employee_ids:
                report.skipped_employee_ids.append(line.employee_id)
            continue
        incentive_repo.upsert(payroll.id, line.incentive_type, {
            "count": line.total,
            "input_value": ZERO,
            "rate": line.rate,
            "amount": line.amount,
            "formula": line.formula,
        })
        if payroll.id not in touched:
            touched.append(payroll.id)
        report.lines.append({
            "employee_id": line.employee_id,
            "employee_name": line.employee_name,
            "payroll_id": payroll.id,
            "incentive_type": line.incentive_type,
            "amount": line.amount,
            "formula": line.formula,
        })

    for payroll_id in touched:
        recalculate_payroll_totals(payroll_id)
    report.affected_payroll_ids = touched

    sheet_repo.mark_distributed(sheet)
    logger.info(
        "[distribution] sheet #%s: %d lines, %d payrolls, %d receivers without payroll",
        sheet.id, len(report.lines), len(touched), len(report.skipped_employee_ids),
    )
    return report
