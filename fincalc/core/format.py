"""Indian-style amount formatting (lakh / crore) and display labels."""

from __future__ import annotations

import math
import re
from typing import Optional

from fincalc.core.rates import round_half_up, round_to, to_finite

LAKH = 100_000
CRORE = 10_000_000

INVESTMENT_MODE_LABELS = {
    "sip": "SIP",
    "stepup": "Step-up SIP",
    "lumpsum": "Lumpsum",
    "hybrid": "SIP + Lumpsum",
}

LOAN_MODE_LABELS = {
    "emi": "Home Loan EMI",
    "neutralize": "EMI + MF neutralizer",
}


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567: last three digits, then pairs
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def _short(value: float) -> str:
    """Up to two decimals with trailing zeros trimmed: 12.50 -> 12.5, 3.00 -> 3."""
    text = f"{round_to(value, 2):.2f}"
    text = re.sub(r"\.00$", "", text)
    return re.sub(r"(\.\d)0$", r"\1", text)


def format_inr_number(value: float) -> str:
    safe = to_finite(value) or 0.0
    whole = int(round_half_up(safe))
    sign = "-" if whole < 0 else ""
    return f"{sign}{_group_indian(str(abs(whole)))}"


def format_inr(value: float) -> str:
    text = format_inr_number(value)
    if text.startswith("-"):
        return f"-₹{text[1:]}"
    return f"₹{text}"


def format_indian_amount_hint(amount: float) -> Optional[str]:
    if not math.isfinite(amount) or amount == 0:
        return None

    size = abs(amount)
    grouped = format_inr_number(amount)

    if size < 100:
        return grouped
    if size < 1000:
        return f"{grouped} ({_short(amount / 100)} hundred)"
    if size < LAKH:
        return f"{grouped} ({_short(amount / 1000)} thousand)"
    if size < CRORE:
        return f"{grouped} ({_short(amount / LAKH)} lakh)"
    return f"{grouped} ({_short(amount / CRORE)} crore)"


def format_indian_compact(amount: float) -> str:
    if not math.isfinite(amount):
        return "0"

    sign = "-" if amount < 0 else ""
    size = abs(amount)

    if size < 1000:
        return f"{sign}{format_inr_number(size)}"
    if size < LAKH:
        return f"{sign}{_short(size / 1000)} thousand"
    if size < CRORE:
        return f"{sign}{_short(size / LAKH)} lakh"
    return f"{sign}{_short(size / CRORE)} crore"


def investment_mode_label(mode: str) -> str:
    return INVESTMENT_MODE_LABELS[mode]


def loan_mode_label(mode: str) -> str:
    return LOAN_MODE_LABELS[mode]
