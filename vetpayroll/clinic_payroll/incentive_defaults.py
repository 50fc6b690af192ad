# -*- coding: utf-8 -*-
"""
Seed tables for the incentive engine:
- DEFAULT_INCENTIVE_CONFIG: fallback per-type config (used until configs are persisted)
- DISTRIBUTION_RULES: how the branch daily sheet fans out into payroll incentives
- SHEET_INPUT_TYPES: the four tallies entered on the daily sheet

Both tables are plain immutable records; services receive them as arguments so
tests (and admins through IncentiveConfig rows) can substitute their own.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from clinic_payroll.models import Position, IncentiveType, IncentiveConfig, DailyIncentiveInput

FormulaType = IncentiveConfig.FormulaType
P = Position

VETS = (P.RESIDENT_VETERINARIAN, P.JUNIOR_VETERINARIAN)
# positions paid from the surgery / emergency / confinement staff pools
SUPPORT_STAFF = (
    P.VETERINARY_ASSISTANT,
    P.VETERINARY_NURSE,
    P.CLINIC_SECRETARY,
    P.STAFF,
    P.GROOMER_VET_ASSISTANT,
)

SHEET_INPUT_TYPES: Tuple[str, ...] = tuple(DailyIncentiveInput.InputType.values)


@dataclass(frozen=True)
class IncentiveConfigItem:
    incentive_type: str
    name: str
    rate: Decimal
    formula_type: str
    positions: Tuple[str, ...]
    sort_order: int = 0
    description: str = ""
    is_shared: bool = False
    division_positions: Optional[Tuple[str, ...]] = None
    pool_on_individual_entry: bool = True
    is_active: bool = True
    version: int = 0  # 0 = built-in default, never persisted

    @property
    def receiving_positions(self) -> Tuple[str, ...]:
        return tuple(self.positions)

    @property
    def effective_division_positions(self) -> Tuple[str, ...]:
        if self.division_positions:
            return tuple(self.division_positions)
        return self.receiving_positions

    @property
    def pools_on_individual_entry(self) -> bool:
        return self.is_shared and self.pool_on_individual_entry

    @classmethod
    def from_model(cls, obj: IncentiveConfig) -> "IncentiveConfigItem":
        return cls(
            incentive_type=obj.incentive_type,
            name=obj.name,
            rate=obj.rate,
            formula_type=obj.formula_type,
            positions=tuple(obj.positions or ()),
            sort_order=obj.sort_order,
            description=obj.description or "",
            is_shared=obj.is_shared,
            division_positions=tuple(obj.division_positions) if obj.division_positions else None,
            pool_on_individual_entry=obj.pool_on_individual_entry,
            is_active=obj.is_active,
            version=obj.version,
        )


@dataclass(frozen=True)
class DistributionRule:
    """One source tally → one payroll incentive type, with its own rate and pools."""
    key: str
    source_type: str
    incentive_type: str
    label: str
    rate: Decimal
    receiving_positions: Tuple[str, ...]
    division_positions: Optional[Tuple[str, ...]] = field(default=None)

    @property
    def effective_division_positions(self) -> Tuple[str, ...]:
        return tuple(self.division_positions) if self.division_positions else tuple(self.receiving_positions)


DEFAULT_INCENTIVE_CONFIG: Tuple[IncentiveConfigItem, ...] = (
    IncentiveConfigItem(
        IncentiveType.CBC, "CBC", Decimal("50"), FormulaType.COUNT_MULTIPLY, VETS,
        sort_order=1, description="Count × ₱50 per procedure",
    ),
    IncentiveConfigItem(
        IncentiveType.BLOOD_CHEM, "Blood Chemistry", Decimal("100"), FormulaType.COUNT_MULTIPLY, VETS,
        sort_order=2, description="Count × ₱100 per procedure",
    ),
    IncentiveConfigItem(
        IncentiveType.ULTRASOUND, "Ultrasound", Decimal("100"), FormulaType.COUNT_MULTIPLY, VETS,
        sort_order=3, description="Count × ₱100 per procedure",
    ),
    IncentiveConfigItem(
        IncentiveType.TEST_KITS, "Test Kits", Decimal("50"), FormulaType.COUNT_MULTIPLY, VETS,
        sort_order=4, description="Count × ₱50 per test",
    ),
    IncentiveConfigItem(
        IncentiveType.XRAY, "X-Ray", Decimal("100"), FormulaType.COUNT_MULTIPLY, VETS,
        sort_order=5, description="Count × ₱100 per X-ray",
    ),
    IncentiveConfigItem(
        IncentiveType.SURGERY, "Surgery", Decimal("0.10"), FormulaType.PERCENT,
        VETS + (P.VETERINARY_ASSISTANT, P.VETERINARY_NURSE, P.STAFF, P.GROOMER),
        sort_order=6, description="Total Surgery Amount × 10%",
    ),
    IncentiveConfigItem(
        IncentiveType.EMERGENCY, "Emergency", Decimal("0.40"), FormulaType.PERCENT,
        VETS + (P.VETERINARY_ASSISTANT, P.VETERINARY_NURSE, P.STAFF, P.GROOMER),
        sort_order=7, description="Total Emergency Amount × 40%",
    ),
    IncentiveConfigItem(
        IncentiveType.CONFINEMENT_VET, "Confinement (Vet)", Decimal("55"), FormulaType.COUNT_MULTIPLY,
        (P.RESIDENT_VETERINARIAN,),
        sort_order=8, description="Total units × ₱55 ÷ all vets (Resident Vets only receive)",
        is_shared=True, division_positions=VETS,
    ),
    IncentiveConfigItem(
        IncentiveType.CONFINEMENT_ASST, "Confinement (Assistant)", Decimal("45"), FormulaType.COUNT_MULTIPLY,
        (P.VETERINARY_ASSISTANT, P.GROOMER_VET_ASSISTANT, P.VETERINARY_NURSE, P.STAFF, P.GROOMER),
        sort_order=9, description="Total units × ₱45 ÷ eligible staff",
        is_shared=True,
    ),
    IncentiveConfigItem(
        IncentiveType.GROOMING, "Grooming", Decimal("75"), FormulaType.COUNT_MULTIPLY,
        (P.GROOMER, P.GROOMER_VET_ASSISTANT),
        sort_order=10, description="Total units × ₱75 ÷ eligible groomers",
        is_shared=True, pool_on_individual_entry=False,
    ),
    IncentiveConfigItem(
        IncentiveType.NURSING, "Nursing", Decimal("80"), FormulaType.COUNT_MULTIPLY,
        (P.VETERINARY_NURSE, P.VETERINARY_ASSISTANT, P.STAFF, P.GROOMER),
        sort_order=11, description="Count × ₱80 per nursing case",
        is_shared=True, pool_on_individual_entry=False,
    ),
)


DISTRIBUTION_RULES: Tuple[DistributionRule, ...] = (
    DistributionRule(
        key="GROOMING", source_type="GROOMING", incentive_type=IncentiveType.GROOMING,
        label="Grooming", rate=Decimal("75"),
        receiving_positions=(P.GROOMER, P.GROOMER_VET_ASSISTANT),
    ),
    DistributionRule(
        key="SURGERY", source_type="SURGERY", incentive_type=IncentiveType.SURGERY,
        label="Surgery", rate=Decimal("100"),
        receiving_positions=SUPPORT_STAFF,
    ),
    DistributionRule(
        key="EMERGENCY", source_type="EMERGENCY", incentive_type=IncentiveType.EMERGENCY,
        label="Emergency", rate=Decimal("120"),
        receiving_positions=SUPPORT_STAFF,
    ),
    # resident vets are paid, every vet grade is counted in the divisor
    DistributionRule(
        key="CONFINEMENT_VET", source_type="CONFINEMENT", incentive_type=IncentiveType.CONFINEMENT_VET,
        label="Confinement (Vet)", rate=Decimal("55"),
        receiving_positions=(P.RESIDENT_VETERINARIAN,),
        division_positions=VETS,
    ),
    DistributionRule(
        key="CONFINEMENT_STAFF", source_type="CONFINEMENT", incentive_type=IncentiveType.CONFINEMENT_ASST,
        label="Confinement (Staff)", rate=Decimal("45"),
        receiving_positions=SUPPORT_STAFF,
    ),
)
