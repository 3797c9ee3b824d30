"""Shared helpers for reading and writing flat query-string parameters."""

from __future__ import annotations

import math
import re
from typing import Dict, Mapping, Optional, Sequence, Union
from urllib.parse import parse_qsl

from fincalc.core.rates import round_half_up, round_to

QueryParams = Union[Mapping[str, str], str]

TRUTHY = {"1", "true", "yes", "on"}

# plain ASCII decimals only: no "1_000", "nan", "inf" or non-ASCII digits
DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z", re.ASCII)


def as_mapping(params: QueryParams) -> Mapping[str, str]:
    """Accept either a mapping (dict, ``request.args``) or a raw query string."""
    if isinstance(params, str):
        # first occurrence wins, matching MultiDict.get
        out: Dict[str, str] = {}
        for key, value in parse_qsl(params.lstrip("?"), keep_blank_values=True):
            out.setdefault(key, value)
        return out
    return params


def get_first(params: Mapping[str, str], key: str) -> Optional[str]:
    value = params.get(key)
    if value is None:
        return None
    trimmed = str(value).strip()
    return trimmed or None


def parse_number(params: Mapping[str, str], key: str) -> Optional[float]:
    raw = get_first(params, key)
    if raw is None or not DECIMAL_LITERAL.match(raw):
        return None
    parsed = float(raw)
    if not math.isfinite(parsed):
        return None
    return parsed


def first_number(params: Mapping[str, str], keys: Sequence[str], default: float) -> float:
    """Return the first key that parses as a finite number, else ``default``."""
    for key in keys:
        parsed = parse_number(params, key)
        if parsed is not None:
            return parsed
    return default


def first_flag(params: Mapping[str, str], keys: Sequence[str], default: bool) -> bool:
    for key in keys:
        raw = get_first(params, key)
        if raw is not None:
            return raw.lower() in TRUTHY
    return default


def parse_mode(params: Mapping[str, str], allowed: Sequence[str], default: str) -> str:
    mode = (get_first(params, "mode") or "").lower()
    return mode if mode in allowed else default


def format_number(value: float) -> str:
    """Stringify without a trailing ``.0`` so 5000.0 reads as ``5000``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def set_if_finite(params: Dict[str, str], key: str, value: float) -> None:
    if not math.isfinite(value):
        return
    params[key] = format_number(value)


def set_whole(params: Dict[str, str], key: str, value: float) -> None:
    set_if_finite(params, key, round_half_up(value))


def set_rounded(params: Dict[str, str], key: str, value: float, decimals: int) -> None:
    if not math.isfinite(value):
        return
    set_if_finite(params, key, round_to(value, decimals))


def has_any(params: QueryParams, keys: Sequence[str]) -> bool:
    mapping = as_mapping(params)
    return any(key in mapping for key in keys)
