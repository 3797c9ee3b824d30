"""Data contracts for the home-loan EMI calculator."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from fincalc.schemas.investment import YearCount


class EmiInputs(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["emi"] = "emi"
    principal: float
    annualInterestRate: float = Field(description="Nominal annual rate, in percent.")
    years: YearCount


class NeutralizeInputs(BaseModel):
    """Loan inputs paired with a mutual-fund SIP run alongside the EMI."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["neutralize"] = "neutralize"
    principal: float
    annualInterestRate: float
    years: YearCount
    mfMonthlyInvestment: float
    mfAnnualReturnRate: float = Field(description="Effective annual return, in percent.")


LoanInputs = Annotated[Union[EmiInputs, NeutralizeInputs], Field(discriminator="mode")]

LoanMode = Literal["emi", "neutralize"]

loan_inputs_adapter: TypeAdapter = TypeAdapter(LoanInputs)


class LoanMonthRow(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int = Field(..., ge=1)
    year: int = Field(..., ge=1)
    monthOfYear: int = Field(..., ge=1, le=12)
    openingBalance: float
    emi: float
    principalPaid: float
    interestPaid: float
    closingBalance: float
    cumulativePrincipalPaid: float
    cumulativeInterestPaid: float
    cumulativeTotalPaid: float
    mfInvestedTotal: Optional[float] = None
    mfValue: Optional[float] = None
    mfGains: Optional[float] = None


class LoanYearRow(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1)
    openingBalance: float
    principalPaidYear: float
    interestPaidYear: float
    totalPaidYear: float
    closingBalance: float
    cumulativePrincipalPaid: float
    cumulativeInterestPaid: float
    cumulativeTotalPaid: float
    mfInvestedTotal: Optional[float] = None
    mfValue: Optional[float] = None
    mfGains: Optional[float] = None


class LoanResult(BaseModel):
    """Amortization result; the ``mf*`` fields are only set in neutralize mode."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    inputs: LoanInputs
    months: int
    monthlyRateLoan: float
    emi: float
    totalInterest: float
    totalPayment: float
    schedule: List[LoanYearRow]
    monthlySchedule: List[LoanMonthRow]

    mfMonthlyRate: Optional[float] = None
    mfMaturityValue: Optional[float] = None
    mfTotalInvested: Optional[float] = None
    mfEstimatedGains: Optional[float] = None
    mfRequiredMonthlyInvestmentToMatchInterest: Optional[float] = None
    mfAmountLeftAfterInterest: Optional[float] = None
