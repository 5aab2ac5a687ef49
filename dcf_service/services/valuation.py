"""
Valuation Service
=================

Thin orchestration layer: fetch company data via a Connector, map the
metadata onto engine overrides, run the engine and the sensitivity grid,
and return an API-ready response.

All computation lives in **dcf_engine** so there is exactly one source of truth.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from dcf_engine import (
    DEFAULTS,
    DCFCalcOptions,
    DCFDefaults,
    DCFInputs,
    calculate_dcf,
    generate_sensitivity_data,
    valuation_status,
)

from dcf_service.api.schemas import (
    CompanyMeta,
    DCFCalcOptionsModel,
    DCFInputsModel,
    DCFResultsModel,
    SensitivityDataModel,
    ValuationResponse,
)
from dcf_service.connectors.base import BaseConnector

logger = logging.getLogger(__name__)


# Market inputs used when a connector supplies beta but not the CAPM rates (percent).
DEFAULT_RISK_FREE_RATE = 3.0
DEFAULT_MARKET_RISK_PREMIUM = 5.5


def cost_of_equity(*, beta: float, risk_free_rate: float, market_risk_premium: float) -> float:
    """CAPM: risk-free rate + beta x market risk premium (percent in, percent out)."""
    return risk_free_rate + beta * market_risk_premium


def compute_wacc(
    *,
    market_cap: float,
    net_debt: float,
    cost_of_equity: float,
    cost_of_debt: float,
    tax_rate: float,
) -> float:
    """
    Weighted average cost of capital in percent.

    Equity is weighted by market cap and debt by net debt (debt minus cash);
    the cost of debt is taken after tax. When the capital base is not
    positive the weights are meaningless and the cost of equity is returned.
    """
    total_value = market_cap + net_debt
    if total_value <= 0:
        return cost_of_equity

    equity_weight = market_cap / total_value
    debt_weight = net_debt / total_value
    return equity_weight * cost_of_equity + debt_weight * cost_of_debt * (1.0 - tax_rate / 100.0)


def derive_wacc(meta: CompanyMeta, net_debt: Optional[float], tax_rate: float) -> Optional[float]:
    """
    Discount rate for *meta*: the reported WACC if present, otherwise one
    built from its parts. ``None`` when there is no cost of equity to start
    from, leaving the engine on the assumption's discount rate.
    """
    if meta.wacc is not None:
        return meta.wacc

    equity_cost = meta.cost_of_equity
    if equity_cost is None and meta.beta is not None:
        equity_cost = cost_of_equity(
            beta=meta.beta,
            risk_free_rate=meta.risk_free_rate if meta.risk_free_rate is not None else DEFAULT_RISK_FREE_RATE,
            market_risk_premium=(
                meta.market_risk_premium if meta.market_risk_premium is not None else DEFAULT_MARKET_RISK_PREMIUM
            ),
        )
    if equity_cost is None:
        return None

    if meta.market_cap is None or not net_debt or meta.cost_of_debt is None:
        logger.debug(f"Incomplete capital structure, using cost of equity {equity_cost:.2f}% as WACC")
        return equity_cost

    return compute_wacc(
        market_cap=meta.market_cap,
        net_debt=net_debt,
        cost_of_equity=equity_cost,
        cost_of_debt=meta.cost_of_debt,
        tax_rate=tax_rate,
    )


def options_from_meta(
    meta: CompanyMeta,
    overrides: Optional[Dict[str, Any]] = None,
    tax_rate: float = 0.0,
) -> DCFCalcOptions:
    """
    Map company metadata onto engine overrides.

    Any key present in *overrides* (``DCFCalcOptions`` field names) takes
    precedence over the value taken from *meta*. Net debt is derived from
    total debt and cash when the connector does not supply it directly, and
    the WACC is built from its parts (see ``derive_wacc``) when it is not
    reported. *tax_rate* (percent) applies to the cost of debt.
    """
    if overrides is None:
        overrides = {}

    net_debt = meta.net_debt
    if net_debt is None and meta.total_debt is not None and meta.cash is not None:
        net_debt = meta.total_debt - meta.cash

    options = DCFCalcOptions(
        base_revenue=meta.revenue_latest,
        shares_outstanding=meta.shares_outstanding,
        market_price=meta.price,
        market_cap=meta.market_cap,
        fcf_latest=meta.fcf_latest,
        growth_estimate_5y=meta.growth_estimate_5y,
        period_years=meta.period_years,
        terminal_rate=meta.terminal_rate,
        net_debt=net_debt,
        da_percent=meta.da_percent,
        wacc=derive_wacc(meta, net_debt, tax_rate),
    )
    return replace(options, **overrides)


class ValuationService:
    def __init__(self, connector: BaseConnector, defaults: DCFDefaults = DEFAULTS):
        self.connector = connector
        self.defaults = defaults

    def calculate_valuation(
        self,
        ticker: str,
        inputs: Optional[DCFInputs] = None,
        option_overrides: Optional[Dict[str, Any]] = None,
    ) -> ValuationResponse:
        """
        Orchestrates the valuation process.

        1. Fetch assumptions and company metadata from the Connector.
        2. Merge caller overrides (assumptions replace, options patch).
        3. Run the engine and the sensitivity grid.
        4. Return an API-ready response.
        """
        data = self.connector.get_dcf_inputs(ticker)

        if inputs is None:
            inputs = data.inputs.to_engine()
        options = options_from_meta(data.meta, option_overrides, tax_rate=inputs.tax_rate)

        results = calculate_dcf(inputs, options, self.defaults)
        sensitivity = generate_sensitivity_data(inputs, options, self.defaults)
        status = valuation_status(results.margin_of_safety)

        logger.info(
            f"Valued {data.ticker}: intrinsic value {results.intrinsic_value:.2f} "
            f"vs price {options.market_price}, margin of safety {results.margin_of_safety:.1f}%"
        )

        return ValuationResponse(
            ticker=data.ticker,
            currency=data.meta.currency,
            inputs=DCFInputsModel.from_engine(inputs),
            options=DCFCalcOptionsModel.from_engine(options),
            results=DCFResultsModel.from_engine(results),
            sensitivity=SensitivityDataModel.from_engine(sensitivity),
            status=status,
        )
