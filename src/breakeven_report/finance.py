# src/breakeven_report/finance.py
"""
Breakeven derivation.

- variable expense ratio = gross profit / revenue (0 when revenue is 0)
- variable expense share = 1 - ratio, both steps rounded to 2 decimals (half up)
- breakeven point = fixed costs / ratio (0 when the ratio is 0)
- margin of safety = revenue - breakeven point
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Mapping, NamedTuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def js_round(value: float) -> float:
    """Round half toward +inf, matching the chart's original rounding (not banker's).

    Infinities and NaN come back unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def round2(value: float) -> float:
    return js_round(value * 100) / 100


class FinancialInput(BaseModel):
    """Raw figures for one breakeven chart. Missing or null fields count as 0."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    revenue: float = 0.0
    fixed_costs: float = Field(
        default=0.0,
        validation_alias=AliasChoices("fixed_costs", "fixedcosts", "fixedCosts"),
    )
    expenses: float = 0.0
    gross_profit: float = Field(
        default=0.0,
        validation_alias=AliasChoices("gross_profit", "grossProfit"),
    )

    @field_validator("revenue", "fixed_costs", "expenses", "gross_profit", mode="before")
    @classmethod
    def _none_as_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FinancialInput":
        return cls.model_validate(dict(data))


@dataclass(frozen=True, slots=True)
class DerivedMetrics:
    revenue: float
    fixed_costs: float
    expenses: float
    gross_profit: float
    variable_expense_ratio: float
    variable_expense_share: float
    breakeven_point: float
    margin_of_safety: float

    def as_dict(self) -> dict[str, float]:
        return {
            "revenue": self.revenue,
            "fixed_costs": self.fixed_costs,
            "expenses": self.expenses,
            "gross_profit": self.gross_profit,
            "variable_expense_ratio": self.variable_expense_ratio,
            "variable_expense_share": self.variable_expense_share,
            "breakeven_point": self.breakeven_point,
            "margin_of_safety": self.margin_of_safety,
        }


class SeriesPoint(NamedTuple):
    name: str
    value: float


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def derive_metrics(data: FinancialInput) -> DerivedMetrics:
    revenue = data.revenue
    fixed_costs = data.fixed_costs
    gross_profit = data.gross_profit

    # quotients that overflow are treated like division by zero
    ratio = _finite_or_zero(gross_profit / revenue if revenue != 0 else 0.0)
    breakeven_point = _finite_or_zero(fixed_costs / ratio if ratio != 0 else 0.0)

    # Slope of the total-cost line. The ratio is rounded before and after the
    # subtraction; keep both roundings.
    share = _finite_or_zero(js_round((1.00 - round2(ratio)) * 100) / 100)

    return DerivedMetrics(
        revenue=revenue,
        fixed_costs=fixed_costs,
        expenses=data.expenses,
        gross_profit=gross_profit,
        variable_expense_ratio=ratio,
        variable_expense_share=share,
        breakeven_point=breakeven_point,
        margin_of_safety=_finite_or_zero(revenue - breakeven_point),
    )


def build_series(metrics: DerivedMetrics) -> List[SeriesPoint]:
    return [
        SeriesPoint("revenue", metrics.revenue),
        SeriesPoint("expenses", metrics.expenses),
        SeriesPoint("fixed_costs", metrics.fixed_costs),
        SeriesPoint("breakeven_point", metrics.breakeven_point),
    ]
