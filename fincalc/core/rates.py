"""Numeric helpers shared by the investment and loan engines."""

from __future__ import annotations

import math
from typing import Optional


def to_finite(value: object) -> Optional[float]:
    """Return ``value`` as a float when it is a finite number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def clamp(value: float, low: float, high: float) -> float:
    # NaN compares false against everything, so pin it to the floor explicitly.
    if math.isnan(value):
        return low
    return min(high, max(low, value))


def round_half_up(value: float) -> float:
    """Round to the nearest whole number, ties away from zero on the positive side."""
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def round_to(value: float, decimals: int) -> float:
    factor = 10 ** decimals
    return round_half_up(value * factor) / factor


def effective_monthly_rate(annual_percent: float) -> float:
    """
    Geometric monthly rate for an annual percentage: (1 + annual)^(1/12) - 1.

    Used for investments, where the quoted annual return is an effective rate.
    """
    annual = annual_percent / 100.0
    if not math.isfinite(annual) or annual <= -1:
        return 0.0
    return (1.0 + annual) ** (1.0 / 12.0) - 1.0


def loan_monthly_rate(annual_percent: float) -> float:
    """Nominal monthly rate for a loan: annual / 12."""
    annual = annual_percent / 100.0
    if not math.isfinite(annual) or annual < 0:
        return 0.0
    return annual / 12.0
