from __future__ import annotations

import logging
from enum import Enum
from math import ceil
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

logger = logging.getLogger(__name__)

# Horizons up to this many months are charted month by month.
MONTHLY_SERIES_MAX_MONTHS = 36
MONTHS_PER_YEAR = 12


# -----------------------------
# Errors
# -----------------------------


class ProjectionError(ValueError):
    """Base class for inputs the engine refuses to project."""


class InvalidDuration(ProjectionError):
    def __init__(self, duration: int, unit: "DurationUnit", total_months: int):
        super().__init__(
            f"duration must cover at least one month (got {duration} {unit.value}, "
            f"{total_months} months)"
        )
        self.duration = duration
        self.unit = unit
        self.total_months = total_months


# -----------------------------
# Models
# -----------------------------


class RateBasis(str, Enum):
    ANNUAL = "annual"
    MONTHLY = "monthly"


class DurationUnit(str, Enum):
    YEARS = "years"
    MONTHS = "months"


class SeriesGranularity(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class InputParameters(BaseModel):
    """
    One projection request, already parsed into plain numbers.

    Rates are percentages (15 means 15%). Amounts and rates are not
    sign-checked here; that belongs to whoever collects the input.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    initial_amount: float
    periodic_contribution: float
    interest_rate: float
    rate_basis: RateBasis = RateBasis.ANNUAL
    duration: int
    duration_unit: DurationUnit = DurationUnit.YEARS
    annual_contribution_growth_rate: float = 0.0

    @property
    def total_months(self) -> int:
        return total_months(self.duration, self.duration_unit)


class LedgerEntry(BaseModel):
    """State of the investment at the close of one month."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    month: int
    opening_balance: float
    contribution_this_month: float
    interest_earned: float
    closing_balance: float
    cumulative_contributed: float
    cumulative_interest: float


class SummaryPoint(BaseModel):
    """Chart checkpoint keyed by either month or year, never both."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    month: Optional[int] = None
    year: Optional[int] = None
    cumulative_contributed: float
    final_value: float

    @model_validator(mode="after")
    def _one_key(self) -> "SummaryPoint":
        if (self.month is None) == (self.year is None):
            raise ValueError("summary point needs exactly one of month or year")
        return self


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    final_amount: float
    total_contributed: float
    total_interest: float
    monthly_rate: float
    total_months: int
    granularity: SeriesGranularity
    ledger: Tuple[LedgerEntry, ...]
    summary_series: Tuple[SummaryPoint, ...]


# -----------------------------
# Normalization
# -----------------------------


def effective_monthly_rate(rate_pct: float, basis: RateBasis) -> float:
    """
    Monthly rate as a decimal.

    Annual rates are de-annualized geometrically, so twelve months of
    compounding reproduce the stated annual yield: (1 + r)^(1/12) - 1.
    """
    rate = rate_pct / 100.0
    if basis == RateBasis.ANNUAL:
        return (1.0 + rate) ** (1.0 / MONTHS_PER_YEAR) - 1.0
    return rate


def total_months(duration: int, unit: DurationUnit) -> int:
    if unit == DurationUnit.YEARS:
        return duration * MONTHS_PER_YEAR
    return duration


def annual_growth_factor(growth_pct: float) -> float:
    return 1.0 + growth_pct / 100.0


# -----------------------------
# Ledger + summary
# -----------------------------


def build_ledger(
    initial_amount: float,
    contribution: float,
    monthly_rate: float,
    months: int,
    growth_factor: float,
) -> List[LedgerEntry]:
    """
    Advance the balance one month at a time.

    Order of operations (per month):
      1) Step the contribution up at the start of every year after the first.
      2) Accrue interest on the opening balance only.
      3) Deposit the contribution (it earns nothing this month).
      4) Record the closing state.
    """
    balance = float(initial_amount)
    current_contribution = float(contribution)
    contributed = float(initial_amount)
    interest_total = 0.0

    ledger: List[LedgerEntry] = []
    for month in range(1, months + 1):
        opening = balance

        if month > 1 and (month - 1) % MONTHS_PER_YEAR == 0:
            current_contribution *= growth_factor

        interest = opening * monthly_rate
        balance = opening + interest
        interest_total += interest

        balance += current_contribution
        contributed += current_contribution

        ledger.append(
            LedgerEntry(
                month=month,
                opening_balance=opening,
                contribution_this_month=current_contribution,
                interest_earned=interest,
                closing_balance=balance,
                cumulative_contributed=contributed,
                cumulative_interest=interest_total,
            )
        )

    return ledger


def build_summary_series(
    ledger: List[LedgerEntry], initial_amount: float
) -> Tuple[SeriesGranularity, List[SummaryPoint]]:
    """
    Reduce the ledger to chart checkpoints.

    Short horizons keep every month. Longer ones get a year-0 point at the
    initial amount followed by the year-end entry of each year; a trailing
    partial year still gets its own point.
    """
    if len(ledger) <= MONTHLY_SERIES_MAX_MONTHS:
        points = [
            SummaryPoint(
                month=entry.month,
                cumulative_contributed=entry.cumulative_contributed,
                final_value=entry.closing_balance,
            )
            for entry in ledger
        ]
        return SeriesGranularity.MONTHLY, points

    # dicts keep insertion order, so the last month of each year wins
    by_year: Dict[int, LedgerEntry] = {}
    for entry in ledger:
        by_year[ceil(entry.month / MONTHS_PER_YEAR)] = entry

    points = [
        SummaryPoint(
            year=0,
            cumulative_contributed=initial_amount,
            final_value=initial_amount,
        )
    ]
    points.extend(
        SummaryPoint(
            year=year,
            cumulative_contributed=entry.cumulative_contributed,
            final_value=entry.closing_balance,
        )
        for year, entry in by_year.items()
    )
    return SeriesGranularity.YEARLY, points


def project(params: InputParameters) -> ProjectionResult:
    """Run a full projection. Raises InvalidDuration for horizons under a month."""
    months = params.total_months
    if months < 1:
        raise InvalidDuration(params.duration, params.duration_unit, months)

    monthly_rate = effective_monthly_rate(params.interest_rate, params.rate_basis)
    growth_factor = annual_growth_factor(params.annual_contribution_growth_rate)

    ledger = build_ledger(
        initial_amount=params.initial_amount,
        contribution=params.periodic_contribution,
        monthly_rate=monthly_rate,
        months=months,
        growth_factor=growth_factor,
    )
    granularity, series = build_summary_series(ledger, params.initial_amount)

    last = ledger[-1]
    logger.debug(
        "projected %d months at %.6f/month: final=%.2f contributed=%.2f interest=%.2f",
        months,
        monthly_rate,
        last.closing_balance,
        last.cumulative_contributed,
        last.cumulative_interest,
    )

    return ProjectionResult(
        final_amount=last.closing_balance,
        total_contributed=last.cumulative_contributed,
        total_interest=last.cumulative_interest,
        monthly_rate=monthly_rate,
        total_months=months,
        granularity=granularity,
        ledger=tuple(ledger),
        summary_series=tuple(series),
    )


__all__ = [
    "MONTHLY_SERIES_MAX_MONTHS",
    "ProjectionError",
    "InvalidDuration",
    "RateBasis",
    "DurationUnit",
    "SeriesGranularity",
    "InputParameters",
    "LedgerEntry",
    "SummaryPoint",
    "ProjectionResult",
    "effective_monthly_rate",
    "total_months",
    "annual_growth_factor",
    "build_ledger",
    "build_summary_series",
    "project",
]
