# -*- coding: utf-8 -*-
"""
Decimal helpers for peso amounts:
- to_decimal: normalise int/float/str/None into Decimal
- round2: half-up rounding at the cent
- format_peso / format_number: display strings for formula traces
"""
from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # go through str() so 0.1 stays 0.1
        value = repr(value)
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as ex:
        raise ValueError(f"Not a number: {value!r}") from ex


def round2(value: Any) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_number(value: Any) -> str:
    """1234.5 -> '1,234.5', 50.00 -> '50' (at most 2 decimals, thousands separators)."""
    d = round2(value)
    if d == d.to_integral_value():
        return f"{d:,.0f}"
    text = f"{d:,.2f}"
    return text.rstrip("0")


def format_peso(value: Any, fixed: bool = False) -> str:
    """'₱' + number; fixed=True always shows two decimals (₱250.00)."""
    if fixed:
        return f"₱{round2(value):,.2f}"
    return f"₱{format_number(value)}"
