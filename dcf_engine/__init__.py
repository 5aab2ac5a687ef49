"""
DCF Engine
==========

Pure discounted-cash-flow valuation engine with zero external dependencies.

Public API:
- ``DCFInputs`` / ``DCFCalcOptions`` / ``DCFResults``: data contracts
- ``DCFDefaults``: injectable fallback constants
- ``resolve_assumptions(inputs, options, defaults)``: override > derived > default
- ``calculate_dcf(inputs, options, defaults)``: main valuation computation
- ``generate_sensitivity_data(inputs, options, defaults)``: 5x5 rate grid
"""

from dcf_engine.engine import (
    DEFAULT_BASE_REVENUE,
    DEFAULT_MARKET_PRICE,
    DEFAULT_PERIOD_YEARS,
    DEFAULT_SHARES_OUTSTANDING,
    DEFAULTS,
    MAX_PERIOD_YEARS,
    SAMPLE_INPUTS,
    TERMINAL_DENOMINATOR_FLOOR,
    DCFCalcOptions,
    DCFDefaults,
    DCFInputs,
    DCFResults,
    InputError,
    ProjectionPath,
    ResolvedAssumptions,
    ValuationStatus,
    calculate_dcf,
    compute_terminal_value,
    discount_cash_flows,
    project_fcf_growth,
    project_revenue_driven,
    resolve_assumptions,
    select_projection_path,
    valuation_status,
)
from dcf_engine.sensitivity import (
    TERMINAL_GROWTH_RATES,
    SensitivityData,
    generate_sensitivity_data,
    round_half_up,
)

__all__ = [
    "DEFAULT_BASE_REVENUE",
    "DEFAULT_MARKET_PRICE",
    "DEFAULT_PERIOD_YEARS",
    "DEFAULT_SHARES_OUTSTANDING",
    "DEFAULTS",
    "MAX_PERIOD_YEARS",
    "SAMPLE_INPUTS",
    "TERMINAL_DENOMINATOR_FLOOR",
    "TERMINAL_GROWTH_RATES",
    "DCFCalcOptions",
    "DCFDefaults",
    "DCFInputs",
    "DCFResults",
    "InputError",
    "ProjectionPath",
    "ResolvedAssumptions",
    "SensitivityData",
    "ValuationStatus",
    "calculate_dcf",
    "compute_terminal_value",
    "discount_cash_flows",
    "generate_sensitivity_data",
    "project_fcf_growth",
    "project_revenue_driven",
    "resolve_assumptions",
    "round_half_up",
    "select_projection_path",
    "valuation_status",
]
