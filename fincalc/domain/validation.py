from __future__ import annotations

from typing import List

from fincalc.schemas.investment import HybridInputs, InvestmentInputs, LumpsumInputs
from fincalc.schemas.loan import LoanInputs, NeutralizeInputs


class InputIssuesError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def investment_issues(inputs: InvestmentInputs) -> List[str]:
    """Human-readable problems with normalized investment inputs; empty when usable."""
    issues: List[str] = []

    if inputs.years < 1:
        issues.append("Years must be at least 1.")

    if isinstance(inputs, LumpsumInputs):
        if inputs.lumpsumInvestment <= 0:
            issues.append("Lumpsum amount must be greater than 0.")
    elif isinstance(inputs, HybridInputs):
        if inputs.monthlyInvestment <= 0:
            issues.append("Monthly SIP amount must be greater than 0.")
        if inputs.lumpsumAmount <= 0:
            issues.append("Periodic lumpsum amount must be greater than 0.")
        if inputs.lumpsumEveryYears < 1:
            issues.append("Lumpsum frequency must be at least every 1 year.")
        if inputs.lumpsumStartYear < 1 or inputs.lumpsumStartYear > inputs.years:
            issues.append("Lumpsum start year must be within the time period.")
        if inputs.lumpsumEndYear < inputs.lumpsumStartYear:
            issues.append("Lumpsum end year must be after start year.")
    elif inputs.monthlyInvestment <= 0:
        issues.append("Monthly SIP amount must be greater than 0.")

    if inputs.annualReturnRate <= -100:
        issues.append("Expected return must be greater than -100%.")

    return issues


def loan_issues(inputs: LoanInputs) -> List[str]:
    issues: List[str] = []

    if inputs.principal <= 0:
        issues.append("Loan amount must be greater than 0.")
    if inputs.years < 1:
        issues.append("Loan tenure must be at least 1 year.")
    if inputs.annualInterestRate < 0:
        issues.append("Interest rate cannot be negative.")

    if isinstance(inputs, NeutralizeInputs):
        if inputs.mfMonthlyInvestment < 0:
            issues.append("MF monthly investment cannot be negative.")
        if inputs.mfAnnualReturnRate <= -100:
            issues.append("MF expected return must be greater than -100%.")

    return issues


def ensure_no_issues(issues: List[str]) -> None:
    if issues:
        raise InputIssuesError(issues)
