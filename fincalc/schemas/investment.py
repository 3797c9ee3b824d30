"""Data contracts for the investment growth calculator."""

from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, TypeAdapter


def _whole_if_integral(value: float):
    return int(value) if float(value).is_integer() else value


# decode keeps whatever number it was given; normalized counts dump as ints
YearCount = Annotated[float, PlainSerializer(_whole_if_integral)]


class SipInputs(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["sip"] = "sip"
    monthlyInvestment: float
    annualReturnRate: float = Field(description="Expected annual return, in percent.")
    years: YearCount


class StepUpInputs(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["stepup"] = "stepup"
    monthlyInvestment: float = Field(description="Monthly amount during year 1.")
    annualStepUpPercent: float
    annualReturnRate: float
    years: YearCount


class LumpsumInputs(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["lumpsum"] = "lumpsum"
    lumpsumInvestment: float
    annualReturnRate: float
    years: YearCount


class HybridInputs(BaseModel):
    """Monthly SIP (optionally stepped up) plus periodic lumpsum deposits."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Literal["hybrid"] = "hybrid"
    monthlyInvestment: float
    stepUpEnabled: bool = False
    annualStepUpPercent: float
    lumpsumAmount: float = Field(description="Amount per periodic deposit.")
    lumpsumEveryYears: YearCount = Field(description="1 = yearly, 2 = every other year, ...")
    lumpsumStartYear: YearCount = Field(description="1-based first deposit year.")
    lumpsumEndYear: YearCount = Field(description="1-based last eligible deposit year.")
    annualReturnRate: float
    years: YearCount


InvestmentInputs = Annotated[
    Union[SipInputs, StepUpInputs, LumpsumInputs, HybridInputs],
    Field(discriminator="mode"),
]

InvestmentMode = Literal["sip", "stepup", "lumpsum", "hybrid"]

investment_inputs_adapter: TypeAdapter = TypeAdapter(InvestmentInputs)


class InvestmentYearRow(BaseModel):
    """Single year of an investment schedule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=1)
    investedThisYear: float
    investedTotal: float
    endValue: float
    gainsTotal: float
    # sip/stepup/hybrid only
    sipMonthlyForYear: Optional[float] = None
    # hybrid only
    lumpsumThisYear: Optional[float] = None


class InvestmentResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    inputs: InvestmentInputs
    totalInvested: float
    maturityValue: float
    estimatedReturns: float
    monthlyRate: float
    schedule: List[InvestmentYearRow]
