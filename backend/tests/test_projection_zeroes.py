from __future__ import annotations

from math import isclose

import pytest

from backend.core.projection import (
    DurationUnit,
    InputParameters,
    InvalidDuration,
    RateBasis,
    project,
)


def test_projection_zeroes_produces_zero_rows():
    """
    Sanity check: with zero capital, zero contributions, and no interest, all outputs stay at zero.
    """
    params = InputParameters(
        initial_amount=0.0,
        periodic_contribution=0.0,
        interest_rate=0.0,
        rate_basis=RateBasis.ANNUAL,
        duration=1,
        duration_unit=DurationUnit.MONTHS,
    )

    result = project(params)

    assert len(result.ledger) == 1
    (entry,) = result.ledger
    assert entry.month == 1
    for value in (
        entry.opening_balance,
        entry.contribution_this_month,
        entry.interest_earned,
        entry.closing_balance,
        entry.cumulative_contributed,
        entry.cumulative_interest,
    ):
        assert isclose(value, 0.0, abs_tol=0.0)
    assert result.final_amount == 0.0
    assert result.total_contributed == 0.0
    assert result.total_interest == 0.0


@pytest.mark.parametrize("unit", [DurationUnit.YEARS, DurationUnit.MONTHS])
def test_zero_duration_raises_invalid_duration(unit: DurationUnit):
    params = InputParameters(
        initial_amount=1000.0,
        periodic_contribution=100.0,
        interest_rate=5.0,
        duration=0,
        duration_unit=unit,
    )

    with pytest.raises(InvalidDuration) as excinfo:
        project(params)

    assert excinfo.value.total_months == 0
    assert excinfo.value.unit == unit


def test_negative_duration_raises_invalid_duration():
    params = InputParameters(
        initial_amount=0.0,
        periodic_contribution=0.0,
        interest_rate=0.0,
        duration=-2,
        duration_unit=DurationUnit.YEARS,
    )

    with pytest.raises(InvalidDuration, match="at least one month"):
        project(params)


def test_invalid_duration_is_a_value_error():
    assert issubclass(InvalidDuration, ValueError)
