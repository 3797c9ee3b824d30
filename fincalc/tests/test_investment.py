from __future__ import annotations

import math
from math import isclose

import pytest

from fincalc.core.investment import (
    calculate_investment,
    lumpsum_for_month,
    normalize_investment_inputs,
    sip_amount_for_month,
)
from fincalc.core.rates import effective_monthly_rate
from fincalc.schemas.investment import HybridInputs, LumpsumInputs, SipInputs, StepUpInputs


def hybrid(**overrides) -> HybridInputs:
    fields = dict(
        monthlyInvestment=1000.0,
        stepUpEnabled=False,
        annualStepUpPercent=10.0,
        lumpsumAmount=50000.0,
        lumpsumEveryYears=2,
        lumpsumStartYear=3,
        lumpsumEndYear=5,
        annualReturnRate=0.0,
        years=5,
    )
    fields.update(overrides)
    return HybridInputs(**fields)


def test_sip_zero_rate_schedule_has_one_row_per_year():
    result = calculate_investment(SipInputs(monthlyInvestment=5000, annualReturnRate=0, years=10))

    assert len(result.schedule) == 10
    assert [row.year for row in result.schedule] == list(range(1, 11))
    assert result.schedule[9].investedTotal == 5000 * 120
    assert result.totalInvested == 600000
    assert result.maturityValue == 600000
    assert result.estimatedReturns == 0
    for row in result.schedule:
        assert row.investedThisYear == 60000
        assert row.sipMonthlyForYear == 5000
        assert row.lumpsumThisYear is None


def test_sip_matches_annuity_due_closed_form():
    """Contribution-then-compound is an annuity due at the effective monthly rate."""
    result = calculate_investment(SipInputs(monthlyInvestment=5000, annualReturnRate=12, years=10))

    r = effective_monthly_rate(12)
    n = 120
    expected = 5000 * (((1 + r) ** n - 1) / r) * (1 + r)
    assert isclose(result.monthlyRate, r)
    assert isclose(result.maturityValue, expected, rel_tol=1e-9)
    assert result.schedule[-1].endValue == result.maturityValue


def test_lumpsum_grows_by_annual_rate_each_year():
    result = calculate_investment(
        LumpsumInputs(lumpsumInvestment=100000, annualReturnRate=12, years=3)
    )

    assert result.totalInvested == 100000
    assert result.schedule[0].investedThisYear == 100000
    assert result.schedule[1].investedThisYear == 0
    assert isclose(result.schedule[0].endValue, 112000, rel_tol=1e-9)
    assert isclose(result.maturityValue, 100000 * 1.12 ** 3, rel_tol=1e-9)
    assert all(row.sipMonthlyForYear is None for row in result.schedule)


def test_stepup_raises_sip_once_per_year():
    result = calculate_investment(
        StepUpInputs(monthlyInvestment=1000, annualStepUpPercent=10, annualReturnRate=0, years=3)
    )

    sips = [row.sipMonthlyForYear for row in result.schedule]
    assert isclose(sips[0], 1000)
    assert isclose(sips[1], 1100)
    assert isclose(sips[2], 1210)
    assert isclose(result.totalInvested, 12 * (1000 + 1100 + 1210))


def test_hybrid_lumpsum_lands_only_on_gated_years():
    result = calculate_investment(hybrid())

    assert [row.lumpsumThisYear for row in result.schedule] == [0, 0, 50000, 0, 50000]
    assert [row.investedThisYear for row in result.schedule] == [
        12000,
        12000,
        62000,
        12000,
        62000,
    ]


def test_hybrid_step_up_toggle():
    flat = calculate_investment(hybrid(stepUpEnabled=False))
    stepped = calculate_investment(hybrid(stepUpEnabled=True))

    assert [row.sipMonthlyForYear for row in flat.schedule] == [1000] * 5
    assert isclose(stepped.schedule[1].sipMonthlyForYear, 1100)
    assert stepped.totalInvested > flat.totalInvested


def test_contribution_helpers_are_pure_functions_of_month():
    plan = normalize_investment_inputs(hybrid(stepUpEnabled=True))

    assert sip_amount_for_month(0, plan) == 1000
    assert sip_amount_for_month(11, plan) == 1000
    assert isclose(sip_amount_for_month(12, plan), 1100)
    assert lumpsum_for_month(24, plan) == 50000  # year 3
    assert lumpsum_for_month(25, plan) == 0  # not the first month
    assert lumpsum_for_month(36, plan) == 0  # year 4 is skipped
    assert lumpsum_for_month(48, plan) == 50000  # year 5

    lump = LumpsumInputs(lumpsumInvestment=1000, annualReturnRate=5, years=2)
    assert lumpsum_for_month(0, lump) == 1000
    assert lumpsum_for_month(12, lump) == 0
    assert sip_amount_for_month(0, lump) == 0


def test_returns_equal_maturity_minus_invested():
    cases = [
        SipInputs(monthlyInvestment=7300, annualReturnRate=11.3, years=17),
        StepUpInputs(monthlyInvestment=2500, annualStepUpPercent=7, annualReturnRate=-4, years=9),
        LumpsumInputs(lumpsumInvestment=333333, annualReturnRate=8.8, years=21),
        hybrid(annualReturnRate=14, stepUpEnabled=True),
    ]
    for case in cases:
        result = calculate_investment(case)
        assert result.estimatedReturns == result.maturityValue - result.totalInvested


def test_higher_rate_never_lowers_maturity():
    rates = [-50, -5, 0, 5, 12, 20, 45]
    values = [
        calculate_investment(
            StepUpInputs(monthlyInvestment=3000, annualStepUpPercent=5, annualReturnRate=rate, years=12)
        ).maturityValue
        for rate in rates
    ]
    assert values == sorted(values)


def test_more_years_never_lowers_invested_total():
    totals = [
        calculate_investment(hybrid(years=years, lumpsumEndYear=years)).totalInvested
        for years in range(1, 15)
    ]
    assert totals == sorted(totals)


@pytest.mark.parametrize(
    "raw_years, expected",
    [(0, 1), (-3, 1), (10.4, 10), (10.5, 11), (75, 60), (float("nan"), 1)],
)
def test_normalize_clamps_years(raw_years, expected):
    normalized = normalize_investment_inputs(
        SipInputs(monthlyInvestment=1000, annualReturnRate=10, years=raw_years)
    )
    assert normalized.years == expected


def test_normalize_clamps_amounts_and_rates():
    normalized = normalize_investment_inputs(
        StepUpInputs(
            monthlyInvestment=-10, annualStepUpPercent=250, annualReturnRate=-150, years=5
        )
    )
    assert normalized.monthlyInvestment == 0
    assert normalized.annualStepUpPercent == 100
    assert normalized.annualReturnRate == -100

    lump = normalize_investment_inputs(
        LumpsumInputs(lumpsumInvestment=5e12, annualReturnRate=math.inf, years=5)
    )
    assert lump.lumpsumInvestment == 1_000_000_000
    assert lump.annualReturnRate == 100


def test_normalize_keeps_hybrid_window_inside_horizon():
    normalized = normalize_investment_inputs(
        hybrid(years=8, lumpsumEveryYears=0, lumpsumStartYear=12, lumpsumEndYear=2)
    )
    assert normalized.lumpsumEveryYears == 1
    assert normalized.lumpsumStartYear == 8
    assert normalized.lumpsumEndYear == 8

    wide = normalize_investment_inputs(
        hybrid(years=8, lumpsumEveryYears=14.6, lumpsumStartYear=0, lumpsumEndYear=30)
    )
    assert wide.lumpsumEveryYears == 10
    assert wide.lumpsumStartYear == 1
    assert wide.lumpsumEndYear == 8


def test_normalize_is_idempotent():
    cases = [
        SipInputs(monthlyInvestment=-5, annualReturnRate=140, years=0.2),
        StepUpInputs(monthlyInvestment=2e9, annualStepUpPercent=-1, annualReturnRate=9, years=99),
        LumpsumInputs(lumpsumInvestment=float("nan"), annualReturnRate=7, years=7.5),
        hybrid(years=6.6, lumpsumEveryYears=2.4, lumpsumStartYear=9, lumpsumEndYear=-1),
    ]
    for case in cases:
        once = normalize_investment_inputs(case)
        assert normalize_investment_inputs(once) == once


def test_calculate_reports_normalized_inputs():
    result = calculate_investment(SipInputs(monthlyInvestment=-1, annualReturnRate=12, years=0))
    assert result.inputs.years == 1
    assert result.inputs.monthlyInvestment == 0
    assert len(result.schedule) == 1
    assert result.maturityValue == 0


def test_normalized_year_counts_dump_as_ints():
    dumped = normalize_investment_inputs(hybrid(years=7.6, lumpsumStartYear=2.2)).model_dump()

    assert dumped["years"] == 8 and isinstance(dumped["years"], int)
    assert isinstance(dumped["lumpsumStartYear"], int)
    assert isinstance(dumped["lumpsumEveryYears"], int)
    # fractional drafts keep their value
    assert SipInputs(monthlyInvestment=1, annualReturnRate=1, years=2.5).model_dump()["years"] == 2.5
