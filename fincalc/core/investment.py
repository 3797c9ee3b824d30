"""Month-by-month growth simulation for SIP, step-up, lumpsum and hybrid plans."""

from __future__ import annotations

import logging
import math
from typing import List

from fincalc.core.rates import clamp, effective_monthly_rate, round_half_up
from fincalc.schemas.investment import (
    HybridInputs,
    InvestmentInputs,
    InvestmentResult,
    InvestmentYearRow,
    LumpsumInputs,
    SipInputs,
    StepUpInputs,
)

logger = logging.getLogger(__name__)

MAX_YEARS = 60
MAX_MONTHLY = 10_000_000
MAX_LUMPSUM = 1_000_000_000
MAX_LUMPSUM_EVERY_YEARS = 10


def normalize_investment_inputs(raw: InvestmentInputs) -> InvestmentInputs:
    """Clamp every field into range. Never raises; bad values are pinned, not rejected."""
    years = int(clamp(round_half_up(raw.years), 1, MAX_YEARS))
    rate = clamp(raw.annualReturnRate, -100, 100)

    if isinstance(raw, LumpsumInputs):
        return LumpsumInputs(
            lumpsumInvestment=clamp(raw.lumpsumInvestment, 0, MAX_LUMPSUM),
            annualReturnRate=rate,
            years=years,
        )

    if isinstance(raw, HybridInputs):
        every = int(clamp(round_half_up(raw.lumpsumEveryYears), 1, MAX_LUMPSUM_EVERY_YEARS))
        start = int(clamp(round_half_up(raw.lumpsumStartYear), 1, years))
        end = int(clamp(round_half_up(raw.lumpsumEndYear), start, years))
        return HybridInputs(
            monthlyInvestment=clamp(raw.monthlyInvestment, 0, MAX_MONTHLY),
            stepUpEnabled=bool(raw.stepUpEnabled),
            annualStepUpPercent=clamp(raw.annualStepUpPercent, 0, 100),
            lumpsumAmount=clamp(raw.lumpsumAmount, 0, MAX_LUMPSUM),
            lumpsumEveryYears=every,
            lumpsumStartYear=start,
            lumpsumEndYear=end,
            annualReturnRate=rate,
            years=years,
        )

    if isinstance(raw, StepUpInputs):
        return StepUpInputs(
            monthlyInvestment=clamp(raw.monthlyInvestment, 0, MAX_MONTHLY),
            annualStepUpPercent=clamp(raw.annualStepUpPercent, 0, 100),
            annualReturnRate=rate,
            years=years,
        )

    return SipInputs(
        monthlyInvestment=clamp(raw.monthlyInvestment, 0, MAX_MONTHLY),
        annualReturnRate=rate,
        years=years,
    )


def _stepped_amount(base: float, step_percent: float, year_index: int) -> float:
    return base * (1.0 + step_percent / 100.0) ** year_index


def sip_amount_for_month(month_index: int, inputs: InvestmentInputs) -> float:
    """Monthly SIP deposited at the start of month ``month_index`` (0-based)."""
    year_index = month_index // 12

    if isinstance(inputs, LumpsumInputs):
        return 0.0
    if isinstance(inputs, StepUpInputs):
        return _stepped_amount(inputs.monthlyInvestment, inputs.annualStepUpPercent, year_index)
    if isinstance(inputs, HybridInputs) and inputs.stepUpEnabled:
        return _stepped_amount(inputs.monthlyInvestment, inputs.annualStepUpPercent, year_index)
    return inputs.monthlyInvestment


def lumpsum_for_month(month_index: int, inputs: InvestmentInputs) -> float:
    """
    Lumpsum deposited at the start of month ``month_index`` (0-based).

    Deposits only ever land on the first month of a year:
      - lumpsum mode: the whole amount in year 1.
      - hybrid mode: every ``lumpsumEveryYears`` years from start through end.
    """
    if month_index % 12 != 0:
        return 0.0

    year = month_index // 12 + 1

    if isinstance(inputs, LumpsumInputs):
        return inputs.lumpsumInvestment if year == 1 else 0.0

    if not isinstance(inputs, HybridInputs):
        return 0.0

    if year < inputs.lumpsumStartYear or year > inputs.lumpsumEndYear:
        return 0.0
    offset = year - int(inputs.lumpsumStartYear)
    if offset % int(inputs.lumpsumEveryYears) != 0:
        return 0.0
    return inputs.lumpsumAmount


def calculate_investment(inputs: InvestmentInputs) -> InvestmentResult:
    """
    Simulate the plan month by month and return the yearly schedule.

    Order of operations (per month):
      1) Deposit the SIP and any lumpsum due at the START of the month.
      2) Compound the whole value by one month of the effective monthly rate.
      3) On every 12th month, record a year row and reset the yearly totals.
    """
    normalized = normalize_investment_inputs(inputs)
    monthly_rate = effective_monthly_rate(normalized.annualReturnRate)
    months = int(normalized.years) * 12

    logger.debug(
        "investment mode=%s years=%d monthly_rate=%.6f",
        normalized.mode,
        normalized.years,
        monthly_rate,
    )

    value = 0.0
    invested_total = 0.0
    invested_this_year = 0.0
    lumpsum_this_year = 0.0
    schedule: List[InvestmentYearRow] = []

    for month_index in range(months):
        sip = sip_amount_for_month(month_index, normalized)
        lump = lumpsum_for_month(month_index, normalized)

        contribution = sip + lump
        if contribution > 0:
            invested_total += contribution
            invested_this_year += contribution
            value += contribution
        if lump > 0:
            lumpsum_this_year += lump

        value *= 1.0 + monthly_rate
        if not math.isfinite(value):
            value = 0.0

        if (month_index + 1) % 12 == 0:
            year = (month_index + 1) // 12
            schedule.append(
                InvestmentYearRow(
                    year=year,
                    investedThisYear=invested_this_year,
                    investedTotal=invested_total,
                    endValue=value,
                    gainsTotal=value - invested_total,
                    sipMonthlyForYear=_sip_for_year(normalized, year),
                    lumpsumThisYear=(
                        lumpsum_this_year if isinstance(normalized, HybridInputs) else None
                    ),
                )
            )
            invested_this_year = 0.0
            lumpsum_this_year = 0.0

    return InvestmentResult(
        inputs=normalized,
        totalInvested=invested_total,
        maturityValue=value,
        estimatedReturns=value - invested_total,
        monthlyRate=monthly_rate,
        schedule=schedule,
    )


def _sip_for_year(inputs: InvestmentInputs, year: int):
    if isinstance(inputs, LumpsumInputs):
        return None
    # first month of the year carries that year's SIP amount
    return sip_amount_for_month((year - 1) * 12, inputs)
