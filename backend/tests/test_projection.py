from __future__ import annotations

from math import isclose

import pytest
from pydantic import ValidationError

from backend.core.projection import (
    DurationUnit,
    InputParameters,
    RateBasis,
    effective_monthly_rate,
    project,
)


def scenario_params(**overrides) -> InputParameters:
    values = dict(
        initial_amount=10000.0,
        periodic_contribution=1000.0,
        interest_rate=15.0,
        rate_basis=RateBasis.ANNUAL,
        duration=10,
        duration_unit=DurationUnit.YEARS,
        annual_contribution_growth_rate=6.5,
    )
    values.update(overrides)
    return InputParameters(**values)


def test_ten_year_scenario_reconciles():
    result = project(scenario_params())

    assert result.total_months == 120
    assert len(result.ledger) == 120
    assert isclose(result.monthly_rate, 0.011715, abs_tol=1e-6)
    assert isclose(
        result.final_amount,
        result.total_contributed + result.total_interest,
        rel_tol=1e-12,
    )


def test_totals_match_ledger():
    params = scenario_params()
    result = project(params)
    ledger = result.ledger

    assert [entry.month for entry in ledger] == list(range(1, 121))
    assert result.final_amount == ledger[-1].closing_balance
    assert isclose(
        result.total_contributed,
        params.initial_amount + sum(e.contribution_this_month for e in ledger),
        rel_tol=1e-12,
    )
    assert isclose(
        result.total_interest, sum(e.interest_earned for e in ledger), rel_tol=1e-12
    )


def test_each_month_opens_where_the_last_closed():
    ledger = project(scenario_params()).ledger

    assert ledger[0].opening_balance == 10000.0
    for prev, entry in zip(ledger, ledger[1:]):
        assert entry.opening_balance == prev.closing_balance


def test_interest_is_accrued_before_contribution():
    """A deposit earns nothing in the month it is made."""
    result = project(
        scenario_params(
            initial_amount=1000.0,
            periodic_contribution=100.0,
            interest_rate=1.0,
            rate_basis=RateBasis.MONTHLY,
            duration=2,
            duration_unit=DurationUnit.MONTHS,
            annual_contribution_growth_rate=0.0,
        )
    )
    first, second = result.ledger

    assert isclose(first.interest_earned, 10.0)
    assert isclose(first.closing_balance, 1110.0)
    assert isclose(first.cumulative_contributed, 1100.0)
    assert isclose(second.interest_earned, 11.1)
    assert isclose(second.closing_balance, 1221.1)
    assert isclose(second.cumulative_interest, 21.1)


def test_closing_balance_never_decreases_for_non_negative_inputs():
    ledger = project(scenario_params(duration=25)).ledger

    prev = 0.0
    for entry in ledger:
        assert entry.closing_balance >= prev
        prev = entry.closing_balance


def test_annual_rate_compounds_to_stated_yield_after_twelve_months():
    result = project(
        scenario_params(
            initial_amount=1000.0,
            periodic_contribution=0.0,
            interest_rate=10.0,
            duration=1,
            annual_contribution_growth_rate=0.0,
        )
    )

    assert isclose(result.final_amount, 1100.0, rel_tol=1e-9)
    assert isclose((1 + result.monthly_rate) ** 12, 1.10, rel_tol=1e-12)


def test_monthly_rate_is_used_as_given():
    assert effective_monthly_rate(1.5, RateBasis.MONTHLY) == 0.015
    assert effective_monthly_rate(12.0, RateBasis.ANNUAL) < 0.01


def test_duration_units_normalize_to_months():
    assert scenario_params(duration=3, duration_unit=DurationUnit.YEARS).total_months == 36
    assert scenario_params(duration=3, duration_unit=DurationUnit.MONTHS).total_months == 3


def test_negative_inputs_are_not_rejected_by_the_engine():
    result = project(
        scenario_params(initial_amount=-500.0, periodic_contribution=0.0, duration=1)
    )

    assert result.final_amount < 0
    assert len(result.ledger) == 12


def test_result_is_immutable():
    result = project(scenario_params(duration=1))

    with pytest.raises(ValidationError):
        result.final_amount = 0.0
    with pytest.raises(ValidationError):
        result.ledger[0].closing_balance = 0.0


def test_repeated_calls_are_independent():
    params = scenario_params()

    assert project(params) == project(params)
