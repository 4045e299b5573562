"""Data contracts for the projection endpoint."""

from __future__ import annotations

from math import isfinite
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from backend.core.formatting import (
    format_brl,
    format_percent,
    parse_brl_input,
    parse_percent_input,
)
from backend.core.projection import (
    DurationUnit,
    InputParameters,
    ProjectionError,
    ProjectionResult,
    RateBasis,
    SeriesGranularity,
    total_months,
)

# Longest horizon the API will compute (100 years).
MAX_PROJECTION_MONTHS = 1200


class NonFiniteResult(ProjectionError):
    """The inputs overflowed floating point; JSON cannot carry the result."""


class ProjectionRequest(BaseModel):
    """
    Form payload. Field names follow the web client.

    Amounts may be numbers or the form's display text ("10.000,00", read as
    cents). Rates may be numbers or comma-decimal text ("6,5"). Non-finite
    numbers and horizons beyond MAX_PROJECTION_MONTHS are rejected.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    initialAmount: float = Field(..., ge=0, description="Capital at month 0.")
    monthlyContribution: float = Field(
        ..., ge=0, description="Contribution in the first year, added every month."
    )
    interestRate: float = Field(..., ge=0, description="Interest rate in percent.")
    interestType: RateBasis = RateBasis.ANNUAL
    duration: int = Field(..., ge=0)
    durationType: DurationUnit = DurationUnit.YEARS
    annualGrowthRate: float = Field(
        0.0, ge=0, description="Yearly step-up of the contribution, in percent."
    )

    @field_validator("initialAmount", "monthlyContribution", mode="before")
    @classmethod
    def _parse_amount_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_brl_input(value)
        return value

    @field_validator("interestRate", "annualGrowthRate", mode="before")
    @classmethod
    def _parse_percent_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_percent_input(value)
        return value

    @model_validator(mode="after")
    def _bounded_horizon(self) -> "ProjectionRequest":
        if total_months(self.duration, self.durationType) > MAX_PROJECTION_MONTHS:
            raise ValueError(
                f"duration must not exceed {MAX_PROJECTION_MONTHS} months"
            )
        return self

    def to_parameters(self) -> InputParameters:
        return InputParameters(
            initial_amount=self.initialAmount,
            periodic_contribution=self.monthlyContribution,
            interest_rate=self.interestRate,
            rate_basis=self.interestType,
            duration=self.duration,
            duration_unit=self.durationType,
            annual_contribution_growth_rate=self.annualGrowthRate,
        )


class MonthlyDataPoint(BaseModel):
    month: int
    initialBalance: float
    contributionAmount: float
    interestEarned: float
    finalBalance: float
    totalContributed: float
    totalInterest: float


class ChartDataPoint(BaseModel):
    # only one of month / year is set; dump with exclude_none
    month: Optional[int] = None
    year: Optional[int] = None
    totalInvested: float
    finalValue: float


class DisplayTotals(BaseModel):
    finalAmount: str
    totalInvested: str
    totalInterest: str
    monthlyRate: str


class ProjectionResponse(BaseModel):
    finalAmount: float
    totalInvested: float
    totalInterest: float
    monthlyRate: float
    totalMonths: int
    granularity: SeriesGranularity
    monthlyData: List[MonthlyDataPoint]
    chartData: List[ChartDataPoint]
    display: DisplayTotals

    @classmethod
    def from_result(cls, result: ProjectionResult) -> "ProjectionResponse":
        totals = (result.final_amount, result.total_contributed, result.total_interest)
        if not all(isfinite(value) for value in totals):
            raise NonFiniteResult("projection overflowed; reduce the amounts or rates")

        return cls(
            finalAmount=result.final_amount,
            totalInvested=result.total_contributed,
            totalInterest=result.total_interest,
            monthlyRate=result.monthly_rate,
            totalMonths=result.total_months,
            granularity=result.granularity,
            monthlyData=[
                MonthlyDataPoint(
                    month=entry.month,
                    initialBalance=entry.opening_balance,
                    contributionAmount=entry.contribution_this_month,
                    interestEarned=entry.interest_earned,
                    finalBalance=entry.closing_balance,
                    totalContributed=entry.cumulative_contributed,
                    totalInterest=entry.cumulative_interest,
                )
                for entry in result.ledger
            ],
            chartData=[
                ChartDataPoint(
                    month=point.month,
                    year=point.year,
                    totalInvested=point.cumulative_contributed,
                    finalValue=point.final_value,
                )
                for point in result.summary_series
            ],
            display=DisplayTotals(
                finalAmount=format_brl(result.final_amount),
                totalInvested=format_brl(result.total_contributed),
                totalInterest=format_brl(result.total_interest),
                monthlyRate=format_percent(result.monthly_rate * 100, decimals=4),
            ),
        )
