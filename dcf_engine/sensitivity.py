"""
Sensitivity Grid
================

Re-runs ``calculate_dcf`` over a discount-rate x terminal-growth grid.

The discount-rate axis is centred on the effective WACC and stepped by one
percentage point; the terminal-growth axis is fixed. ``wacc`` and
``terminal_rate`` are stripped from the options passed to each cell so the
axis values, not a pass-through override, drive every cell.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .engine import DEFAULTS, DCFCalcOptions, DCFDefaults, DCFInputs, calculate_dcf

DISCOUNT_RATE_STEPS: Tuple[int, ...] = (-2, -1, 0, 1, 2)
TERMINAL_GROWTH_RATES: Tuple[float, ...] = (1.0, 1.5, 2.0, 2.5, 3.0)


@dataclass(frozen=True)
class SensitivityData:
    discount_rates: Tuple[int, ...]
    terminal_growth_rates: Tuple[float, ...]
    values: Tuple[Tuple[int, ...], ...]  # values[discount_rate_index][terminal_growth_index]


def round_half_up(value: float) -> int:
    """Nearest integer with .5 rounded towards +infinity (not banker's rounding)."""
    # floor(value + 0.5) maps 0.49999999999999994 to 1.
    whole = math.floor(value)
    return int(whole + 1 if value - whole >= 0.5 else whole)


def discount_rate_axis(inputs: DCFInputs, options: Optional[DCFCalcOptions] = None) -> Tuple[int, ...]:
    center = options.wacc if options is not None and options.wacc is not None else inputs.discount_rate
    return tuple(round_half_up(center + step) for step in DISCOUNT_RATE_STEPS)


def generate_sensitivity_data(
    inputs: DCFInputs,
    options: Optional[DCFCalcOptions] = None,
    defaults: DCFDefaults = DEFAULTS,
) -> SensitivityData:
    if options is None:
        options = DCFCalcOptions()

    discount_rates = discount_rate_axis(inputs, options)
    cell_options = replace(options, wacc=None, terminal_rate=None)

    values: List[Tuple[int, ...]] = []
    for discount_rate in discount_rates:
        row: List[int] = []
        for terminal_growth in TERMINAL_GROWTH_RATES:
            cell_inputs = replace(inputs, discount_rate=float(discount_rate), terminal_growth=terminal_growth)
            result = calculate_dcf(cell_inputs, cell_options, defaults)
            row.append(round_half_up(result.intrinsic_value))
        values.append(tuple(row))

    return SensitivityData(
        discount_rates=discount_rates,
        terminal_growth_rates=TERMINAL_GROWTH_RATES,
        values=tuple(values),
    )
