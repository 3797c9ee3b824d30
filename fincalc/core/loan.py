"""Fixed-rate home-loan amortization, with an optional mutual-fund neutralizer run."""

from __future__ import annotations

import logging
import math
from typing import List

from fincalc.core.rates import clamp, effective_monthly_rate, loan_monthly_rate, round_half_up
from fincalc.schemas.loan import (
    EmiInputs,
    LoanInputs,
    LoanMonthRow,
    LoanResult,
    LoanYearRow,
    NeutralizeInputs,
)

logger = logging.getLogger(__name__)

MAX_YEARS = 50
MAX_PRINCIPAL = 1_000_000_000
MAX_INTEREST_RATE = 50
MAX_MF_MONTHLY = 10_000_000


def normalize_loan_inputs(raw: LoanInputs) -> LoanInputs:
    years = int(clamp(round_half_up(raw.years), 1, MAX_YEARS))
    principal = clamp(raw.principal, 0, MAX_PRINCIPAL)
    rate = clamp(raw.annualInterestRate, 0, MAX_INTEREST_RATE)

    if isinstance(raw, NeutralizeInputs):
        return NeutralizeInputs(
            principal=principal,
            annualInterestRate=rate,
            years=years,
            mfMonthlyInvestment=clamp(raw.mfMonthlyInvestment, 0, MAX_MF_MONTHLY),
            mfAnnualReturnRate=clamp(raw.mfAnnualReturnRate, -100, 50),
        )

    return EmiInputs(principal=principal, annualInterestRate=rate, years=years)


def calculate_emi(principal: float, monthly_rate: float, months: int) -> float:
    """Standard EMI: P * r * (1+r)^n / ((1+r)^n - 1); straight-line P/n when r is 0."""
    if not math.isfinite(principal) or principal <= 0:
        return 0.0
    if not math.isfinite(months) or months <= 0:
        return 0.0
    if not math.isfinite(monthly_rate) or monthly_rate <= 0:
        return principal / months

    growth = (1.0 + monthly_rate) ** months
    emi = principal * monthly_rate * growth / (growth - 1.0)
    return emi if math.isfinite(emi) else 0.0


def required_monthly_investment(target: float, monthly_rate: float, months: int) -> float:
    """
    Level start-of-month contribution whose future value after ``months`` hits ``target``.

    Inverts FV = P * ((1+r)^n - 1) / r * (1+r).
    """
    if not math.isfinite(target) or target <= 0:
        return 0.0
    if not math.isfinite(months) or months <= 0:
        return 0.0
    if not math.isfinite(monthly_rate) or monthly_rate == 0:
        return target / months

    growth = (1.0 + monthly_rate) ** months
    factor = (growth - 1.0) / monthly_rate * (1.0 + monthly_rate)
    if not math.isfinite(factor) or factor <= 0:
        return 0.0
    return target / factor


def _year_row(
    year: int,
    months_for_year: List[LoanMonthRow],
    last: LoanMonthRow,
) -> LoanYearRow:
    return LoanYearRow(
        year=year,
        openingBalance=months_for_year[0].openingBalance,
        principalPaidYear=sum(row.principalPaid for row in months_for_year),
        interestPaidYear=sum(row.interestPaid for row in months_for_year),
        totalPaidYear=sum(row.emi for row in months_for_year),
        closingBalance=months_for_year[-1].closingBalance,
        cumulativePrincipalPaid=last.cumulativePrincipalPaid,
        cumulativeInterestPaid=last.cumulativeInterestPaid,
        cumulativeTotalPaid=last.cumulativeTotalPaid,
        mfInvestedTotal=last.mfInvestedTotal,
        mfValue=last.mfValue,
        mfGains=last.mfGains,
    )


def calculate_home_loan(inputs: LoanInputs) -> LoanResult:
    """
    Amortize the loan month by month.

    Per month:
      1) interest = opening balance * monthly rate (nominal annual / 12).
      2) principal = EMI - interest, capped at the remaining balance so the
         last month never overshoots zero.
      3) Neutralize mode only: deposit the MF SIP, then compound the MF value
         by its effective monthly rate.
    Every 12th month the preceding 12 month rows are rolled up into a year row.
    """
    normalized = normalize_loan_inputs(inputs)
    neutralize = isinstance(normalized, NeutralizeInputs)

    months = int(normalized.years) * 12
    monthly_rate = loan_monthly_rate(normalized.annualInterestRate)
    emi = calculate_emi(normalized.principal, monthly_rate, months)
    mf_monthly_rate = (
        effective_monthly_rate(normalized.mfAnnualReturnRate) if neutralize else 0.0
    )

    logger.debug(
        "loan mode=%s months=%d monthly_rate=%.6f emi=%.2f",
        normalized.mode,
        months,
        monthly_rate,
        emi,
    )

    balance = float(normalized.principal)
    cumulative_principal = 0.0
    cumulative_interest = 0.0
    cumulative_total = 0.0
    mf_value = 0.0
    mf_invested = 0.0

    monthly_schedule: List[LoanMonthRow] = []
    schedule: List[LoanYearRow] = []

    for month_index in range(months):
        opening = balance
        interest = opening * monthly_rate
        principal_paid = emi - interest
        if not math.isfinite(principal_paid):
            principal_paid = 0.0
        if principal_paid > balance:
            principal_paid = balance

        balance = opening - principal_paid
        cumulative_principal += principal_paid
        cumulative_interest += interest
        cumulative_total += principal_paid + interest

        mf_fields = {}
        if neutralize:
            sip = normalized.mfMonthlyInvestment
            if sip > 0:
                mf_invested += sip
                mf_value += sip
            mf_value *= 1.0 + mf_monthly_rate
            mf_fields = {
                "mfInvestedTotal": mf_invested,
                "mfValue": mf_value,
                "mfGains": mf_value - mf_invested,
            }

        row = LoanMonthRow(
            month=month_index + 1,
            year=month_index // 12 + 1,
            monthOfYear=month_index % 12 + 1,
            openingBalance=opening,
            emi=emi,
            principalPaid=principal_paid,
            interestPaid=interest,
            closingBalance=balance,
            cumulativePrincipalPaid=cumulative_principal,
            cumulativeInterestPaid=cumulative_interest,
            cumulativeTotalPaid=cumulative_total,
            **mf_fields,
        )
        monthly_schedule.append(row)

        if (month_index + 1) % 12 == 0:
            year = (month_index + 1) // 12
            schedule.append(_year_row(year, monthly_schedule[(year - 1) * 12 :], row))

    result = LoanResult(
        inputs=normalized,
        months=months,
        monthlyRateLoan=monthly_rate,
        emi=emi,
        totalInterest=cumulative_interest,
        totalPayment=cumulative_total,
        schedule=schedule,
        monthlySchedule=monthly_schedule,
    )

    if not neutralize:
        return result

    return result.model_copy(
        update={
            "mfMonthlyRate": mf_monthly_rate,
            "mfMaturityValue": mf_value,
            "mfTotalInvested": mf_invested,
            "mfEstimatedGains": mf_value - mf_invested,
            "mfRequiredMonthlyInvestmentToMatchInterest": required_monthly_investment(
                cumulative_interest, mf_monthly_rate, months
            ),
            "mfAmountLeftAfterInterest": mf_value - cumulative_interest,
        }
    )
