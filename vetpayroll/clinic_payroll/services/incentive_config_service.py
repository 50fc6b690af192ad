# -*- coding: utf-8 -*-
"""
Incentive configuration store.

Two-tier lookup: persisted IncentiveConfig rows first, then the built-in default
table. The defaults are injected (constructor argument) so callers and tests can
substitute their own table. Every admin write bumps IncentiveConfig.version.
"""
from __future__ import annotations
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from django.core.exceptions import ValidationError
from django.db import transaction

from clinic_payroll.incentive_defaults import DEFAULT_INCENTIVE_CONFIG, IncentiveConfigItem
from clinic_payroll.models import IncentiveConfig, Position
from clinic_payroll.repositories import incentive_config_repository as repo
from clinic_payroll.utils.money import to_decimal

logger = logging.getLogger(__name__)

NEW_TYPE_SORT_ORDER = 99

_EDITABLE_FIELDS = {
    "name", "description", "rate", "formula_type", "positions", "division_positions",
    "is_shared", "pool_on_individual_entry", "is_active", "sort_order",
}


def _validate_positions(value: Any, field: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValidationError({field: "Must be a list of positions."})
    valid = set(Position.values)
    out = [str(p) for p in value]
    unknown = [p for p in out if p not in valid]
    if unknown:
        raise ValidationError({field: f"Unknown position(s): {', '.join(unknown)}"})
    return out


class IncentiveConfigStore:
    def __init__(self, defaults: Sequence[IncentiveConfigItem] = DEFAULT_INCENTIVE_CONFIG, use_persisted: bool = True):
        self.defaults = tuple(defaults)
        self.use_persisted = use_persisted

    # ---------- read ----------
    def default_for(self, incentive_type: str) -> Optional[IncentiveConfigItem]:
        for item in self.defaults:
            if item.incentive_type == incentive_type:
                return item
        return None

    def list_active(self) -> List[IncentiveConfigItem]:
        """Active persisted configs by sort order; the default table while none are persisted."""
        if self.use_persisted:
            rows = [IncentiveConfigItem.from_model(obj) for obj in repo.list_active()]
            if rows:
                return rows
        return sorted((c for c in self.defaults if c.is_active), key=lambda c: c.sort_order)

    def get(self, incentive_type: str) -> Optional[IncentiveConfigItem]:
        """Persisted row for the type (active or not), otherwise the built-in default."""
        if self.use_persisted:
            obj = repo.get_by_type(incentive_type)
            if obj is not None:
                return IncentiveConfigItem.from_model(obj)
        return self.default_for(incentive_type)

    def for_position(self, position: str) -> List[IncentiveConfigItem]:
        position = str(position)
        return [c for c in self.list_active() if position in c.receiving_positions]

    def shared_configs(self) -> List[IncentiveConfigItem]:
        return [c for c in self.list_active() if c.is_shared]

    # ---------- write ----------
    @transaction.atomic
    def upsert(self, incentive_type: str, data: Dict[str, Any]) -> IncentiveConfig:
        incentive_type = (incentive_type or "").strip().upper()
        if not incentive_type:
            raise ValidationError({"incentive_type": "This field is required."})

        patch = {k: v for k, v in data.items() if k in _EDITABLE_FIELDS and v is not None}
        if "formula_type" in patch and patch["formula_type"] not in IncentiveConfig.FormulaType.values:
            raise ValidationError({"formula_type": f"Unknown formula type: {patch['formula_type']}"})
        if "rate" in patch:
            patch["rate"] = to_decimal(patch["rate"])
            if patch["rate"] < 0:
                raise ValidationError({"rate": "Rate must be >= 0."})
        if "positions" in patch:
            patch["positions"] = _validate_positions(patch["positions"], "positions")
        if "division_positions" in patch:
            patch["division_positions"] = _validate_positions(patch["division_positions"], "division_positions") or None

        obj = repo.lock_by_type(incentive_type)
        if obj is None:
            obj = repo.create({
                "incentive_type": incentive_type,
                "name": patch.get("name") or incentive_type,
                "description": patch.get("description") or "",
                "rate": patch.get("rate", Decimal("0")),
                "formula_type": patch.get("formula_type", IncentiveConfig.FormulaType.COUNT_MULTIPLY),
                "positions": patch.get("positions", []),
                "division_positions": patch.get("division_positions"),
                "is_shared": patch.get("is_shared", False),
                "pool_on_individual_entry": patch.get("pool_on_individual_entry", True),
                "is_active": patch.get("is_active", True),
                "sort_order": patch.get("sort_order", NEW_TYPE_SORT_ORDER),
                "version": 1,
            })
            logger.info("[incentive-config] created %s", incentive_type)
            return obj

        patch["version"] = obj.version + 1
        obj = repo.save_fields(obj, patch)
        logger.info("[incentive-config] updated %s -> v%s", incentive_type, obj.version)
        return obj

    @transaction.atomic
    def seed_defaults(self) -> List[IncentiveConfig]:
        if repo.count() > 0:
            raise ValidationError("Incentive configs already initialized.")
        rows = [
            {
                "incentive_type": str(c.incentive_type),
                "name": c.name,
                "description": c.description,
                "rate": c.rate,
                "formula_type": str(c.formula_type),
                "positions": [str(p) for p in c.positions],
                "division_positions": [str(p) for p in c.division_positions] if c.division_positions else None,
                "is_shared": c.is_shared,
                "pool_on_individual_entry": c.pool_on_individual_entry,
                "is_active": c.is_active,
                "sort_order": c.sort_order,
                "version": 1,
            }
            for c in self.defaults
        ]
        created = repo.bulk_create(rows)
        logger.info("[incentive-config] seeded %d default configs", len(created))
        return created


def get_config_store() -> IncentiveConfigStore:
    return IncentiveConfigStore()
