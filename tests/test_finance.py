# tests/test_finance.py
# -----------------------------------------------------------------------
# Unit tests for breakeven_report/finance.py
#
# Expected values are written as the formula they come from rather than
# as rounded decimals, and compared with pytest.approx.
# -----------------------------------------------------------------------

import math

import pytest

from breakeven_report.demo import DEMO_FINANCIALS
from breakeven_report.finance import (
    FinancialInput,
    build_series,
    derive_metrics,
    js_round,
    round2,
)

DEMO = FinancialInput.from_mapping(DEMO_FINANCIALS)


# ═══════════════════════════════════════════════════════════════════════
# FinancialInput
# ═══════════════════════════════════════════════════════════════════════

class TestFinancialInput:
    def test_demo_keys_are_mapped(self):
        assert DEMO.revenue == 22973.18
        assert DEMO.fixed_costs == 19167.52
        assert DEMO.expenses == 19943.5
        assert DEMO.gross_profit == 22197.2

    def test_missing_fields_default_to_zero(self):
        data = FinancialInput.from_mapping({})
        assert (data.revenue, data.fixed_costs, data.expenses, data.gross_profit) == (0, 0, 0, 0)

    def test_null_fields_default_to_zero(self):
        data = FinancialInput.from_mapping({"revenue": None, "fixedcosts": None})
        assert data.revenue == 0
        assert data.fixed_costs == 0

    def test_camel_case_aliases(self):
        data = FinancialInput.from_mapping({"fixedCosts": 5, "grossProfit": 7})
        assert data.fixed_costs == 5
        assert data.gross_profit == 7

    def test_field_names_accepted(self):
        data = FinancialInput(revenue=10, fixed_costs=2, expenses=3, gross_profit=4)
        assert data.fixed_costs == 2

    def test_unknown_fields_ignored(self):
        data = FinancialInput.from_mapping({"revenue": 1, "top_expense": {"Rent": 3}})
        assert data.revenue == 1

    def test_is_immutable(self):
        with pytest.raises(Exception):
            DEMO.revenue = 1.0


# ═══════════════════════════════════════════════════════════════════════
# Rounding helpers
# ═══════════════════════════════════════════════════════════════════════

class TestRounding:
    def test_half_rounds_up_not_to_even(self):
        assert js_round(2.5) == 3
        assert js_round(0.5) == 1

    def test_negative_half_rounds_toward_positive(self):
        assert js_round(-2.5) == -2

    def test_round2(self):
        assert round2(0.9662) == pytest.approx(0.97)
        assert round2(0.125) == pytest.approx(0.13)


# ═══════════════════════════════════════════════════════════════════════
# derive_metrics
# ═══════════════════════════════════════════════════════════════════════

class TestDeriveMetrics:
    def test_demo_ratio(self):
        m = derive_metrics(DEMO)
        assert m.variable_expense_ratio == pytest.approx(22197.2 / 22973.18)
        assert m.variable_expense_ratio == pytest.approx(0.9662, abs=1e-4)

    def test_demo_share_is_double_rounded(self):
        assert derive_metrics(DEMO).variable_expense_share == 0.03

    def test_demo_breakeven_uses_unrounded_ratio(self):
        m = derive_metrics(DEMO)
        expected = 19167.52 / (22197.2 / 22973.18)
        assert m.breakeven_point == pytest.approx(expected)
        assert m.breakeven_point != pytest.approx(19167.52 / 0.97)

    def test_demo_margin_of_safety(self):
        m = derive_metrics(DEMO)
        assert m.margin_of_safety == pytest.approx(22973.18 - 19167.52 / (22197.2 / 22973.18))

    def test_margin_is_exact_difference(self):
        m = derive_metrics(FinancialInput(revenue=1234.5, fixed_costs=321.0, gross_profit=456.7))
        assert m.margin_of_safety == m.revenue - m.breakeven_point

    def test_zero_revenue(self):
        m = derive_metrics(FinancialInput(revenue=0, fixed_costs=500, expenses=900, gross_profit=300))
        assert m.variable_expense_ratio == 0
        assert m.breakeven_point == 0
        assert m.margin_of_safety == 0
        assert m.variable_expense_share == 1.0

    def test_zero_gross_profit(self):
        m = derive_metrics(FinancialInput(revenue=1000, fixed_costs=500, gross_profit=0))
        assert m.variable_expense_ratio == 0
        assert m.breakeven_point == 0
        assert m.margin_of_safety == 1000

    def test_zero_fixed_costs(self):
        m = derive_metrics(FinancialInput(revenue=1000, fixed_costs=0, gross_profit=400))
        assert m.breakeven_point == 0
        assert m.margin_of_safety == 1000

    def test_negative_gross_profit(self):
        m = derive_metrics(FinancialInput(revenue=1000, fixed_costs=200, gross_profit=-100))
        assert m.variable_expense_ratio == pytest.approx(-0.1)
        assert m.breakeven_point == pytest.approx(-2000)
        assert m.variable_expense_share == pytest.approx(1.1)

    @pytest.mark.parametrize(
        "revenue,fixed_costs,gross_profit",
        [
            (0, 0, 0),
            (0, 1e6, -5),
            (1e-3, 1e3, 1e-6),
            (5e7, 3e6, 4.2e7),
            (100, 100, 100),
            (-50, 10, 20),
        ],
    )
    def test_results_are_finite(self, revenue, fixed_costs, gross_profit):
        m = derive_metrics(FinancialInput(revenue=revenue, fixed_costs=fixed_costs, gross_profit=gross_profit))
        for value in m.as_dict().values():
            assert math.isfinite(value)

    @pytest.mark.parametrize("gross_profit", [0, 1, 250.5, 999.99, 1000])
    def test_ratio_between_zero_and_one(self, gross_profit):
        m = derive_metrics(FinancialInput(revenue=1000, gross_profit=gross_profit))
        assert 0 <= m.variable_expense_ratio <= 1

    def test_echoes_inputs(self):
        m = derive_metrics(DEMO)
        assert (m.revenue, m.fixed_costs, m.expenses, m.gross_profit) == (
            DEMO.revenue, DEMO.fixed_costs, DEMO.expenses, DEMO.gross_profit,
        )


# ═══════════════════════════════════════════════════════════════════════
# build_series
# ═══════════════════════════════════════════════════════════════════════

class TestBuildSeries:
    def test_order_and_values(self):
        m = derive_metrics(DEMO)
        series = build_series(m)
        assert [p.name for p in series] == ["revenue", "expenses", "fixed_costs", "breakeven_point"]
        assert [p.value for p in series] == [m.revenue, m.expenses, m.fixed_costs, m.breakeven_point]


class TestDeriveMetricsOverflow:
    def test_overflowing_ratio_counts_as_zero(self):
        m = derive_metrics(FinancialInput(revenue=1e-310, fixed_costs=10, gross_profit=1e10))
        assert m.variable_expense_ratio == 0
        assert m.breakeven_point == 0
        assert m.variable_expense_share == 1.0
        assert m.margin_of_safety == 1e-310

    def test_huge_negative_ratio_stays_finite(self):
        m = derive_metrics(FinancialInput(revenue=1e-290, fixed_costs=10, gross_profit=-1e18))
        for value in m.as_dict().values():
            assert math.isfinite(value)


class TestJsRoundNonFinite:
    def test_infinity_passes_through(self):
        assert js_round(float("inf")) == float("inf")
        assert js_round(float("-inf")) == float("-inf")

    def test_nan_passes_through(self):
        assert math.isnan(js_round(float("nan")))
