"""Query-string codec for investment calculator links."""

from __future__ import annotations

from typing import Dict
from urllib.parse import urlencode

from fincalc.codec.query import (
    QueryParams,
    as_mapping,
    first_flag,
    first_number,
    has_any,
    parse_mode,
    set_rounded,
    set_whole,
)
from fincalc.schemas.investment import (
    HybridInputs,
    InvestmentInputs,
    LumpsumInputs,
    SipInputs,
    StepUpInputs,
)

MODES = ("sip", "stepup", "lumpsum", "hybrid")

DEFAULT_MODE = "sip"
DEFAULT_MONTHLY_INVESTMENT = 5000.0
DEFAULT_STEP_UP_PERCENT = 10.0
DEFAULT_LUMPSUM_INVESTMENT = 100000.0
DEFAULT_ANNUAL_RETURN_RATE = 12.0
DEFAULT_YEARS = 10.0
DEFAULT_LUMPSUM_EVERY_YEARS = 1.0
DEFAULT_LUMPSUM_START_YEAR = 1.0

RATE_DECIMALS = 2

# first key of each tuple is the canonical one written by the encoder
MONTHLY_KEYS = ("amt", "m")
LUMPSUM_KEYS = ("amt", "l")
RATE_KEYS = ("rate", "r")
YEARS_KEYS = ("years", "y")
STEP_KEYS = ("step", "s")
LUMP_AMOUNT_KEYS = ("lump", "lumpAmt")
EVERY_KEYS = ("every", "freq")
START_KEYS = ("start",)
END_KEYS = ("end",)
STEP_UP_FLAG_KEYS = ("stepUp", "su")

ALL_KEYS = (
    ("mode",)
    + MONTHLY_KEYS
    + ("l",)
    + RATE_KEYS
    + YEARS_KEYS
    + STEP_KEYS
    + LUMP_AMOUNT_KEYS
    + EVERY_KEYS
    + START_KEYS
    + END_KEYS
    + STEP_UP_FLAG_KEYS
)


def decode_investment_params(params: QueryParams) -> InvestmentInputs:
    """Build investment inputs from query params, defaulting anything missing or unparseable."""
    query = as_mapping(params)
    mode = parse_mode(query, MODES, DEFAULT_MODE)

    rate = first_number(query, RATE_KEYS, DEFAULT_ANNUAL_RETURN_RATE)
    years = first_number(query, YEARS_KEYS, DEFAULT_YEARS)

    if mode == "lumpsum":
        return LumpsumInputs(
            lumpsumInvestment=first_number(query, LUMPSUM_KEYS, DEFAULT_LUMPSUM_INVESTMENT),
            annualReturnRate=rate,
            years=years,
        )

    monthly = first_number(query, MONTHLY_KEYS, DEFAULT_MONTHLY_INVESTMENT)
    step = first_number(query, STEP_KEYS, DEFAULT_STEP_UP_PERCENT)

    if mode == "hybrid":
        return HybridInputs(
            monthlyInvestment=monthly,
            stepUpEnabled=first_flag(query, STEP_UP_FLAG_KEYS, False),
            annualStepUpPercent=step,
            lumpsumAmount=first_number(query, LUMP_AMOUNT_KEYS, DEFAULT_LUMPSUM_INVESTMENT),
            lumpsumEveryYears=first_number(query, EVERY_KEYS, DEFAULT_LUMPSUM_EVERY_YEARS),
            lumpsumStartYear=first_number(query, START_KEYS, DEFAULT_LUMPSUM_START_YEAR),
            lumpsumEndYear=first_number(query, END_KEYS, years),
            annualReturnRate=rate,
            years=years,
        )

    if mode == "stepup":
        return StepUpInputs(
            monthlyInvestment=monthly,
            annualStepUpPercent=step,
            annualReturnRate=rate,
            years=years,
        )

    return SipInputs(monthlyInvestment=monthly, annualReturnRate=rate, years=years)


def encode_investment_inputs(inputs: InvestmentInputs) -> Dict[str, str]:
    params: Dict[str, str] = {"mode": inputs.mode}
    set_rounded(params, RATE_KEYS[0], inputs.annualReturnRate, RATE_DECIMALS)
    set_whole(params, YEARS_KEYS[0], inputs.years)

    if isinstance(inputs, LumpsumInputs):
        set_whole(params, LUMPSUM_KEYS[0], inputs.lumpsumInvestment)
        return params

    set_whole(params, MONTHLY_KEYS[0], inputs.monthlyInvestment)

    if isinstance(inputs, StepUpInputs):
        set_rounded(params, STEP_KEYS[0], inputs.annualStepUpPercent, RATE_DECIMALS)

    if isinstance(inputs, HybridInputs):
        set_rounded(params, STEP_KEYS[0], inputs.annualStepUpPercent, RATE_DECIMALS)
        params[STEP_UP_FLAG_KEYS[0]] = "1" if inputs.stepUpEnabled else "0"
        set_whole(params, LUMP_AMOUNT_KEYS[0], inputs.lumpsumAmount)
        set_whole(params, EVERY_KEYS[0], inputs.lumpsumEveryYears)
        set_whole(params, START_KEYS[0], inputs.lumpsumStartYear)
        set_whole(params, END_KEYS[0], inputs.lumpsumEndYear)

    return params


def investment_query_string(inputs: InvestmentInputs) -> str:
    return urlencode(encode_investment_inputs(inputs))


def has_any_investment_params(params: QueryParams) -> bool:
    return has_any(params, ALL_KEYS)
