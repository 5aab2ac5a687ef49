"""
Tests for input resolution: override > assumption-derived > default.
"""

from dataclasses import replace

import pytest

from dcf_engine import (
    SAMPLE_INPUTS,
    DCFCalcOptions,
    DCFDefaults,
    ProjectionPath,
    resolve_assumptions,
    select_projection_path,
)


def test_empty_options_resolve_to_defaults():
    resolved = resolve_assumptions(SAMPLE_INPUTS)

    assert resolved.path is ProjectionPath.REVENUE_DRIVEN
    assert resolved.period_years == 5
    assert resolved.discount_rate == 10.0
    assert resolved.terminal_growth == 3.0
    assert resolved.market_price == 25.0
    assert resolved.shares == 100_000_000
    assert resolved.base_revenue == 1_000_000_000
    assert resolved.net_debt == 0.0
    assert resolved.da_percent == 0.0
    assert resolved.use_mid_year is False


def test_overrides_take_precedence():
    options = DCFCalcOptions(
        base_revenue=5e8,
        shares_outstanding=2e7,
        market_price=40.0,
        period_years=7,
        net_debt=1e8,
        da_percent=4.0,
        use_mid_year=True,
        wacc=8.0,
    )
    resolved = resolve_assumptions(SAMPLE_INPUTS, options)

    assert resolved.base_revenue == 5e8
    assert resolved.shares == 2e7
    assert resolved.market_price == 40.0
    assert resolved.period_years == 7
    assert resolved.net_debt == 1e8
    assert resolved.da_percent == 4.0
    assert resolved.use_mid_year is True
    assert resolved.discount_rate == 8.0


def test_injected_defaults_replace_hardcoded_fallbacks():
    defaults = DCFDefaults(base_revenue=2e9, shares_outstanding=5e7, market_price=10.0, period_years=8)
    resolved = resolve_assumptions(SAMPLE_INPUTS, DCFCalcOptions(), defaults)

    assert resolved.base_revenue == 2e9
    assert resolved.shares == 5e7
    assert resolved.market_price == 10.0
    assert resolved.period_years == 8


def test_shares_derived_from_market_cap_and_default_price():
    resolved = resolve_assumptions(SAMPLE_INPUTS, DCFCalcOptions(market_cap=5e9))
    assert resolved.shares == pytest.approx(5e9 / 25.0)


def test_fractional_period_years_truncated():
    assert resolve_assumptions(SAMPLE_INPUTS, DCFCalcOptions(period_years=3.7)).period_years == 3
    assert resolve_assumptions(SAMPLE_INPUTS, DCFCalcOptions(period_years=0.5)).period_years == 5


def test_terminal_rate_override_depends_on_path():
    revenue = resolve_assumptions(SAMPLE_INPUTS, DCFCalcOptions(terminal_rate=1.5))
    fcf = resolve_assumptions(
        SAMPLE_INPUTS, DCFCalcOptions(terminal_rate=1.5, fcf_latest=100.0, growth_estimate_5y=5.0)
    )

    assert revenue.terminal_growth == SAMPLE_INPUTS.terminal_growth
    assert fcf.terminal_growth == 1.5


def test_inputs_are_left_untouched():
    inputs = replace(SAMPLE_INPUTS)
    resolve_assumptions(inputs, DCFCalcOptions(wacc=7.0, terminal_rate=1.0))
    assert inputs == SAMPLE_INPUTS


@pytest.mark.parametrize(
    "options, expected",
    [
        (DCFCalcOptions(), ProjectionPath.REVENUE_DRIVEN),
        (DCFCalcOptions(fcf_latest=1.0), ProjectionPath.REVENUE_DRIVEN),
        (DCFCalcOptions(growth_estimate_5y=1.0), ProjectionPath.REVENUE_DRIVEN),
        (DCFCalcOptions(fcf_latest=1.0, growth_estimate_5y=0.0), ProjectionPath.FCF_GROWTH),
        (DCFCalcOptions(fcf_latest=-50.0, growth_estimate_5y=-3.0), ProjectionPath.FCF_GROWTH),
    ],
)
def test_select_projection_path(options, expected):
    assert select_projection_path(options) is expected
