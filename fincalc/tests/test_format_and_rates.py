from __future__ import annotations

import math
from math import isclose

import pytest

from fincalc.core.format import (
    format_indian_amount_hint,
    format_indian_compact,
    format_inr,
    format_inr_number,
    investment_mode_label,
    loan_mode_label,
)
from fincalc.core.rates import (
    clamp,
    effective_monthly_rate,
    loan_monthly_rate,
    round_half_up,
    round_to,
    to_finite,
)


def test_effective_monthly_rate_compounds_back_to_annual():
    r = effective_monthly_rate(12)
    assert isclose((1 + r) ** 12, 1.12)
    assert effective_monthly_rate(0) == 0
    assert effective_monthly_rate(-100) == 0
    assert effective_monthly_rate(-250) == 0
    assert effective_monthly_rate(math.nan) == 0
    assert effective_monthly_rate(-50) < 0


def test_loan_monthly_rate_is_nominal():
    assert isclose(loan_monthly_rate(12), 0.01)
    assert loan_monthly_rate(-1) == 0
    assert loan_monthly_rate(math.inf) == 0
    # the two conventions differ for the same quoted rate
    assert loan_monthly_rate(12) > effective_monthly_rate(12)


def test_numeric_helpers():
    assert clamp(5, 0, 3) == 3
    assert clamp(-5, 0, 3) == 0
    assert clamp(math.nan, 1, 60) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_to(8.12345, 3) == 8.123
    assert to_finite(3) == 3.0
    assert to_finite(math.inf) is None
    assert to_finite(True) is None
    assert to_finite("3") is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "0"),
        (999, "999"),
        (1000, "1,000"),
        (100000, "1,00,000"),
        (1234567, "12,34,567"),
        (123456789, "12,34,56,789"),
        (-1234567.6, "-12,34,568"),
        (math.nan, "0"),
    ],
)
def test_indian_digit_grouping(value, expected):
    assert format_inr_number(value) == expected


def test_format_inr_prefixes_rupee_sign():
    assert format_inr(1161695.4) == "₹11,61,695"
    assert format_inr(-2500) == "-₹2,500"


def test_compact_amounts():
    assert format_indian_compact(999) == "999"
    assert format_indian_compact(1500) == "1.5 thousand"
    assert format_indian_compact(250000) == "2.5 lakh"
    assert format_indian_compact(-250000) == "-2.5 lakh"
    assert format_indian_compact(12000000) == "1.2 crore"
    assert format_indian_compact(30000000) == "3 crore"
    assert format_indian_compact(math.inf) == "0"


def test_amount_hints():
    assert format_indian_amount_hint(0) is None
    assert format_indian_amount_hint(math.nan) is None
    assert format_indian_amount_hint(50) == "50"
    assert format_indian_amount_hint(500) == "500 (5 hundred)"
    assert format_indian_amount_hint(250000) == "2,50,000 (2.5 lakh)"
    assert format_indian_amount_hint(15000000) == "1,50,00,000 (1.5 crore)"


def test_mode_labels():
    assert investment_mode_label("hybrid") == "SIP + Lumpsum"
    assert investment_mode_label("stepup") == "Step-up SIP"
    assert loan_mode_label("neutralize") == "EMI + MF neutralizer"
