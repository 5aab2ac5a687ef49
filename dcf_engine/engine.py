"""
DCF Valuation Engine
====================

This module contains the *pure* discounted-cash-flow engine:

- No data fetching
- No HTTP / CLI
- No module-level mutable state

Two projection paths feed the same terminal-value / discounting / equity
bridge math:

- FCF-growth path: compound the latest actual free cash flow by a growth
  estimate (used when both ``fcf_latest`` and ``growth_estimate_5y`` are given)
- Revenue-driven path: build free cash flow from revenue, margin, tax,
  D&A, CapEx and working-capital assumptions

API surface area (stable):
- ``DCFInputs`` (percentage assumptions)
- ``DCFCalcOptions`` (absolute-unit overrides, every field optional)
- ``DCFResults`` (computed outputs)
- ``DCFDefaults`` (fallback constants injected per call)
- ``resolve_assumptions(inputs, options, defaults)``
- ``calculate_dcf(inputs, options, defaults)``
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, fields
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


DEFAULT_BASE_REVENUE: float = 1_000_000_000.0
DEFAULT_SHARES_OUTSTANDING: float = 100_000_000.0
DEFAULT_MARKET_PRICE: float = 25.0
DEFAULT_PERIOD_YEARS: int = 5
MAX_PERIOD_YEARS: int = 100
TERMINAL_DENOMINATOR_FLOOR: float = 0.02
VALUATION_STATUS_THRESHOLD: float = 15.0


class InputError(ValueError):
    pass


class ProjectionPath(str, enum.Enum):
    FCF_GROWTH = "fcf_growth"
    REVENUE_DRIVEN = "revenue_driven"


class ValuationStatus(str, enum.Enum):
    UNDERVALUED = "UNDERVALUED"
    OVERVALUED = "OVERVALUED"


@dataclass(frozen=True)
class DCFInputs:
    """Assumption set. Every field is a percentage (15 means 15%)."""

    revenue_cagr: float
    ebit_margin: float
    tax_rate: float
    capex_percent: float
    nwc_percent: float
    terminal_growth: float
    discount_rate: float


@dataclass(frozen=True)
class DCFCalcOptions:
    """
    Per-company overrides in absolute units (rates still in percent).

    ``None`` means "not supplied"; the resolver falls back to the
    assumption-derived value or the configured default.
    """

    base_revenue: Optional[float] = None
    shares_outstanding: Optional[float] = None
    market_price: Optional[float] = None
    market_cap: Optional[float] = None
    fcf_latest: Optional[float] = None
    growth_estimate_5y: Optional[float] = None  # percent
    period_years: Optional[int] = None
    terminal_rate: Optional[float] = None  # percent
    net_debt: Optional[float] = None
    da_percent: Optional[float] = None  # percent of revenue
    use_mid_year: Optional[bool] = None
    wacc: Optional[float] = None  # percent


@dataclass(frozen=True)
class DCFResults:
    intrinsic_value: float  # per share
    enterprise_value: float
    implied_market_cap: float  # equity value after the net debt bridge
    margin_of_safety: float  # percent
    projected_fcfs: Tuple[float, ...]


@dataclass(frozen=True)
class DCFDefaults:
    """Fallback constants used when neither an override nor an assumption applies."""

    base_revenue: float = DEFAULT_BASE_REVENUE
    shares_outstanding: float = DEFAULT_SHARES_OUTSTANDING
    market_price: float = DEFAULT_MARKET_PRICE
    period_years: int = DEFAULT_PERIOD_YEARS
    terminal_denominator_floor: float = TERMINAL_DENOMINATOR_FLOOR

    def __post_init__(self) -> None:
        if not 1 <= self.period_years <= MAX_PERIOD_YEARS:
            raise InputError(f"default period_years must be between 1 and {MAX_PERIOD_YEARS}, got {self.period_years}")
        if not self.terminal_denominator_floor > 0:
            raise InputError(
                f"terminal_denominator_floor must be positive, got {self.terminal_denominator_floor}"
            )


DEFAULTS = DCFDefaults()

SAMPLE_INPUTS = DCFInputs(
    revenue_cagr=15.0,
    ebit_margin=25.0,
    tax_rate=21.0,
    capex_percent=3.0,
    nwc_percent=2.0,
    terminal_growth=3.0,
    discount_rate=10.0,
)


@dataclass(frozen=True)
class ResolvedAssumptions:
    """Everything ``calculate_dcf`` needs after the override > derived > default pass."""

    path: ProjectionPath
    period_years: int
    discount_rate: float  # percent
    terminal_growth: float  # percent
    market_price: float
    shares: float
    net_debt: float
    da_percent: float
    use_mid_year: bool
    base_revenue: float


def select_projection_path(options: DCFCalcOptions) -> ProjectionPath:
    if options.fcf_latest is not None and options.growth_estimate_5y is not None:
        return ProjectionPath.FCF_GROWTH
    return ProjectionPath.REVENUE_DRIVEN


def resolve_assumptions(
    inputs: DCFInputs,
    options: Optional[DCFCalcOptions] = None,
    defaults: DCFDefaults = DEFAULTS,
) -> ResolvedAssumptions:
    """
    Apply the three-tier precedence shared by both projection paths:

    1. explicit override from ``options``
    2. value derived from ``inputs`` (or from other overrides, e.g. shares
       from market cap / price)
    3. hardcoded fallback from ``defaults``

    The terminal growth override (``options.terminal_rate``) is honoured on
    the FCF-growth path only; the revenue-driven path always uses
    ``inputs.terminal_growth``.
    """
    if options is None:
        options = DCFCalcOptions()

    path = select_projection_path(options)

    if options.period_years is not None and options.period_years >= 1:
        period_years = int(options.period_years)
    else:
        period_years = defaults.period_years

    discount_rate = options.wacc if options.wacc is not None else inputs.discount_rate

    if path is ProjectionPath.FCF_GROWTH and options.terminal_rate is not None:
        terminal_growth = options.terminal_rate
    else:
        terminal_growth = inputs.terminal_growth

    if options.market_price is not None:
        market_price = options.market_price
    else:
        logger.debug(f"No market price supplied, using default {defaults.market_price}")
        market_price = defaults.market_price

    if options.shares_outstanding and options.shares_outstanding > 0:
        shares = options.shares_outstanding
    elif options.market_cap and market_price > 0:
        shares = options.market_cap / market_price
    else:
        logger.debug(f"No share count resolvable, using default {defaults.shares_outstanding}")
        shares = defaults.shares_outstanding

    if options.base_revenue is not None:
        base_revenue = options.base_revenue
    else:
        base_revenue = defaults.base_revenue

    return ResolvedAssumptions(
        path=path,
        period_years=period_years,
        discount_rate=discount_rate,
        terminal_growth=terminal_growth,
        market_price=market_price,
        shares=shares,
        net_debt=options.net_debt if options.net_debt is not None else 0.0,
        da_percent=options.da_percent if options.da_percent is not None else 0.0,
        use_mid_year=bool(options.use_mid_year),
        base_revenue=base_revenue,
    )


def calculate_dcf(
    inputs: DCFInputs,
    options: Optional[DCFCalcOptions] = None,
    defaults: DCFDefaults = DEFAULTS,
) -> DCFResults:
    if options is None:
        options = DCFCalcOptions()
    _validate_inputs(inputs, options)

    resolved = resolve_assumptions(inputs, options, defaults)

    if resolved.path is ProjectionPath.FCF_GROWTH:
        projected_fcfs = project_fcf_growth(
            fcf_latest=options.fcf_latest,
            growth_rate=options.growth_estimate_5y / 100.0,
            years=resolved.period_years,
        )
    else:
        projected_fcfs = project_revenue_driven(
            inputs,
            base_revenue=resolved.base_revenue,
            da_rate=resolved.da_percent / 100.0,
            years=resolved.period_years,
        )

    discount_rate = resolved.discount_rate / 100.0
    terminal_growth = resolved.terminal_growth / 100.0

    terminal_value = compute_terminal_value(
        last_fcf=projected_fcfs[-1],
        discount_rate=discount_rate,
        terminal_growth=terminal_growth,
        floor=defaults.terminal_denominator_floor,
    )
    enterprise_value = discount_cash_flows(
        projected_fcfs,
        terminal_value=terminal_value,
        discount_rate=discount_rate,
        use_mid_year=resolved.use_mid_year,
    )

    implied_market_cap = enterprise_value - resolved.net_debt
    intrinsic_value = implied_market_cap / resolved.shares if resolved.shares > 0 else 0.0
    if resolved.market_price > 0:
        margin_of_safety = (intrinsic_value - resolved.market_price) / resolved.market_price * 100.0
    else:
        margin_of_safety = 0.0

    return DCFResults(
        intrinsic_value=intrinsic_value,
        enterprise_value=enterprise_value,
        implied_market_cap=implied_market_cap,
        margin_of_safety=margin_of_safety,
        projected_fcfs=tuple(projected_fcfs),
    )


def project_fcf_growth(*, fcf_latest: float, growth_rate: float, years: int) -> List[float]:
    """Compound the latest FCF; year 1 is already one growth step ahead."""
    projected: List[float] = []
    fcf = fcf_latest
    for _ in range(years):
        fcf = fcf * (1.0 + growth_rate)
        projected.append(fcf)
    return projected


def project_revenue_driven(
    inputs: DCFInputs,
    *,
    base_revenue: float,
    da_rate: float,
    years: int,
) -> List[float]:
    """
    Free cash flow per year from the revenue build:

    FCF = EBIT * (1 - t) + D&A - CapEx - dNWC

    where dNWC is the NWC percentage applied to the revenue *change*,
    not to absolute revenue.
    """
    growth = inputs.revenue_cagr / 100.0
    ebit_margin = inputs.ebit_margin / 100.0
    tax_rate = inputs.tax_rate / 100.0
    capex_rate = inputs.capex_percent / 100.0
    nwc_rate = inputs.nwc_percent / 100.0

    projected: List[float] = []
    revenue = base_revenue
    for _ in range(years):
        prior_revenue = revenue
        revenue = revenue * (1.0 + growth)

        ebit = revenue * ebit_margin
        tax = ebit * tax_rate
        nopat = ebit - tax
        da = revenue * da_rate
        capex = revenue * capex_rate
        nwc_change = (revenue - prior_revenue) * nwc_rate

        projected.append(nopat + da - capex - nwc_change)
    return projected


def compute_terminal_value(
    *,
    last_fcf: float,
    discount_rate: float,
    terminal_growth: float,
    floor: float = TERMINAL_DENOMINATOR_FLOOR,
) -> float:
    # Gordon growth; the floor keeps the denominator positive when the
    # discount rate is at or below terminal growth.
    denominator = max(discount_rate - terminal_growth, floor)
    return last_fcf * (1.0 + terminal_growth) / denominator


def discount_cash_flows(
    projected_fcfs: List[float],
    *,
    terminal_value: float,
    discount_rate: float,
    use_mid_year: bool,
) -> float:
    """Present value of the explicit forecast plus the terminal value (decimal rate)."""
    offset = 0.5 if use_mid_year else 1.0
    pv = 0.0
    for i, fcf in enumerate(projected_fcfs):
        pv += fcf / _discount_factor(discount_rate, i + offset)

    years = len(projected_fcfs)
    terminal_exponent = years - 0.5 if use_mid_year else years
    pv += terminal_value / _discount_factor(discount_rate, terminal_exponent)
    return pv


def _discount_factor(discount_rate: float, exponent: float) -> float:
    try:
        factor = (1.0 + discount_rate) ** exponent
    except OverflowError as e:
        raise InputError(f"discount factor out of range at rate {discount_rate:.4%} over {exponent} years") from e
    if factor == 0.0:
        raise InputError(f"discount factor underflows at rate {discount_rate:.4%} over {exponent} years")
    return factor


def valuation_status(
    margin_of_safety: float,
    threshold: float = VALUATION_STATUS_THRESHOLD,
) -> Optional[ValuationStatus]:
    if abs(margin_of_safety) < threshold:
        return None
    if margin_of_safety > 0:
        return ValuationStatus.UNDERVALUED
    return ValuationStatus.OVERVALUED


def _validate_inputs(inputs: DCFInputs, options: DCFCalcOptions) -> None:
    for record in (inputs, options):
        for f in fields(record):
            value = getattr(record, f.name)
            if isinstance(value, bool) or value is None:
                continue
            if not math.isfinite(value):
                raise InputError(f"{f.name} must be a finite number, got {value!r}")

    effective_rate = options.wacc if options.wacc is not None else inputs.discount_rate
    if effective_rate <= -100.0:
        raise InputError("discount rate must be greater than -100%")

    if options.period_years is not None and int(options.period_years) > MAX_PERIOD_YEARS:
        raise InputError(f"period_years must be at most {MAX_PERIOD_YEARS}, got {options.period_years}")
