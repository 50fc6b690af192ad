# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Any, List, Optional


def as_int_list(v: Any) -> List[int]:
    if v is None:
        return []
    if isinstance(v, (list, tuple, set)):
        raw = []
        for x in v:
            if x is None:
                continue
            raw.extend(str(x).split(","))
    else:
        raw = str(v).split(",")
    out = []
    for s in raw:
        s = s.strip()
        if s.isdigit():
            out.append(int(s))
    return out


def as_str_list(v: Any) -> List[str]:
    if not v:
        return []
    if isinstance(v, (list, tuple, set)):
        raw = [str(x) for x in v if x]
    else:
        raw = str(v).split(",")
    return [s.strip().upper() for s in raw if s.strip()]


def as_bool(v: Any) -> Optional[bool]:
    if v is None or v == "":
        return None
    return str(v).strip().lower() in ("1", "true", "yes")
