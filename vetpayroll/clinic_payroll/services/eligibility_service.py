# -*- coding: utf-8 -*-
"""
Who receives a shared incentive, and how many people its pool is divided by.

- receivers: roster entries whose position is a receiving position, minus exclusions for the type
- division pool: roster entries whose position is a division position, minus the same exclusions
Division positions default to the receiving positions; they may be a strict superset
(confinement: resident vets are paid, every vet grade is counted).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set

from clinic_payroll.repositories import employee_repository as employee_repo

ExclusionMap = Dict[int, Set[str]]


@dataclass(frozen=True)
class RosterEntry:
    employee_id: int
    position: str
    name: str = ""


@dataclass(frozen=True)
class Eligibility:
    incentive_type: str
    receivers: List[RosterEntry]
    division_employees: List[RosterEntry]

    @property
    def division_count(self) -> int:
        return len(self.division_employees)

    @property
    def divisor(self) -> int:
        # empty pool divides by 1
        return max(self.division_count, 1)


def is_excluded(exclusions: ExclusionMap, employee_id: int, incentive_type: str) -> bool:
    return incentive_type in exclusions.get(employee_id, ())


def resolve(
    roster: Iterable[RosterEntry],
    receiving_positions: Sequence[str],
    division_positions: Optional[Sequence[str]],
    exclusions: ExclusionMap,
    incentive_type: str,
) -> Eligibility:
    receiving = {str(p) for p in receiving_positions}
    division = {str(p) for p in division_positions} if division_positions else receiving

    receivers: List[RosterEntry] = []
    division_employees: List[RosterEntry] = []
    for entry in roster:
        if is_excluded(exclusions, entry.employee_id, incentive_type):
            continue
        position = str(entry.position)
        if position in receiving:
            receivers.append(entry)
        if position in division:
            division_employees.append(entry)
    return Eligibility(incentive_type, receivers, division_employees)


# ============================
# Snapshot loaders
# ============================
def load_branch_roster(branch_id: int) -> List[RosterEntry]:
    return [
        RosterEntry(e.id, e.position, e.name)
        for e in employee_repo.list_active_for_branch(branch_id)
    ]


def load_exclusion_map(employee_ids: Iterable[int]) -> ExclusionMap:
    out: ExclusionMap = {}
    for row in employee_repo.list_exclusions(employee_ids):
        out.setdefault(row.employee_id, set()).add(row.incentive_type)
    return out


def eligible_counts_for_branch(branch_id: int, config_store) -> Dict[str, int]:
    """Division count per shared incentive type for a branch (exclusions applied)."""
    roster = load_branch_roster(branch_id)
    exclusions = load_exclusion_map(e.employee_id for e in roster)
    return {
        str(config.incentive_type): resolve(
            roster, config.receiving_positions, config.effective_division_positions,
            exclusions, str(config.incentive_type),
        ).division_count
        for config in config_store.shared_configs()
    }
