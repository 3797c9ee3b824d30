"""Query-string codec for home-loan calculator links."""

from __future__ import annotations

from typing import Dict
from urllib.parse import urlencode

from fincalc.codec.query import (
    QueryParams,
    as_mapping,
    first_number,
    has_any,
    parse_mode,
    set_rounded,
    set_whole,
)
from fincalc.schemas.loan import EmiInputs, LoanInputs, NeutralizeInputs

MODES = ("emi", "neutralize")

DEFAULT_MODE = "emi"
DEFAULT_PRINCIPAL = 1_000_000.0
DEFAULT_ANNUAL_INTEREST_RATE = 8.5
DEFAULT_YEARS = 20.0
DEFAULT_MF_MONTHLY_INVESTMENT = 10_000.0
DEFAULT_MF_ANNUAL_RETURN_RATE = 12.0

RATE_DECIMALS = 3

PRINCIPAL_KEYS = ("principal", "p", "amt")
RATE_KEYS = ("rate", "r")
YEARS_KEYS = ("years", "y")
MF_SIP_KEYS = ("sip", "mfSip")
MF_RATE_KEYS = ("mfRate", "mfr")

ALL_KEYS = ("mode",) + PRINCIPAL_KEYS + RATE_KEYS + YEARS_KEYS + MF_SIP_KEYS + MF_RATE_KEYS


def decode_loan_params(params: QueryParams) -> LoanInputs:
    query = as_mapping(params)
    mode = parse_mode(query, MODES, DEFAULT_MODE)

    principal = first_number(query, PRINCIPAL_KEYS, DEFAULT_PRINCIPAL)
    rate = first_number(query, RATE_KEYS, DEFAULT_ANNUAL_INTEREST_RATE)
    years = first_number(query, YEARS_KEYS, DEFAULT_YEARS)

    if mode == "neutralize":
        return NeutralizeInputs(
            principal=principal,
            annualInterestRate=rate,
            years=years,
            mfMonthlyInvestment=first_number(query, MF_SIP_KEYS, DEFAULT_MF_MONTHLY_INVESTMENT),
            mfAnnualReturnRate=first_number(query, MF_RATE_KEYS, DEFAULT_MF_ANNUAL_RETURN_RATE),
        )

    return EmiInputs(principal=principal, annualInterestRate=rate, years=years)


def encode_loan_inputs(inputs: LoanInputs) -> Dict[str, str]:
    params: Dict[str, str] = {"mode": inputs.mode}
    set_whole(params, PRINCIPAL_KEYS[0], inputs.principal)
    set_rounded(params, RATE_KEYS[0], inputs.annualInterestRate, RATE_DECIMALS)
    set_whole(params, YEARS_KEYS[0], inputs.years)

    if isinstance(inputs, NeutralizeInputs):
        set_whole(params, MF_SIP_KEYS[0], inputs.mfMonthlyInvestment)
        set_rounded(params, MF_RATE_KEYS[0], inputs.mfAnnualReturnRate, RATE_DECIMALS)

    return params


def loan_query_string(inputs: LoanInputs) -> str:
    return urlencode(encode_loan_inputs(inputs))


def has_any_loan_params(params: QueryParams) -> bool:
    return has_any(params, ALL_KEYS)
