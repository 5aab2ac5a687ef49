import logging

from dcf_engine import DEFAULT_MARKET_PRICE, DEFAULT_SHARES_OUTSTANDING, SAMPLE_INPUTS

from dcf_service.api.schemas import CompanyMeta, DCFAPIResponse, DCFInputsModel
from dcf_service.connectors.base import BaseConnector, ConnectorFactory

logger = logging.getLogger(__name__)


# Static AAPL profile (raw currency units, rates in percent).
AAPL_INPUTS = DCFInputsModel(
    revenue_cagr=7.0,
    ebit_margin=30.0,
    tax_rate=18.0,
    capex_percent=3.0,
    nwc_percent=1.5,
    terminal_growth=3.0,
    discount_rate=9.0,  # used when WACC not provided
)

AAPL_META = CompanyMeta(
    price=220.03,
    shares_outstanding=15_500_000_000,
    currency="USD",
    revenue_latest=383_000_000_000,
    fcf_latest=110_000_000_000,
    growth_estimate_5y=6.5,
    period_years=5,
    terminal_rate=3.0,
    market_cap=3_410_465_000_000,
    total_debt=110_000_000_000,
    cash=162_000_000_000,
    net_debt=-52_000_000_000,
    beta=1.2,
    risk_free_rate=4.0,
    market_risk_premium=5.5,
    wacc=6.5,
    da_percent=3.0,
)


class MockConnector(BaseConnector):
    """Offline connector: a fixed AAPL profile, sample assumptions for anything else."""

    def get_dcf_inputs(self, ticker: str) -> DCFAPIResponse:
        symbol = ticker.strip().upper()
        if not symbol:
            raise ValueError("Ticker must not be empty.")

        if symbol == "AAPL":
            return DCFAPIResponse(ticker=symbol, inputs=AAPL_INPUTS, meta=AAPL_META)

        logger.info(f"No mock profile for {symbol}, returning sample assumptions")
        return DCFAPIResponse(
            ticker=symbol,
            inputs=DCFInputsModel.from_engine(SAMPLE_INPUTS),
            meta=CompanyMeta(
                price=DEFAULT_MARKET_PRICE,
                shares_outstanding=DEFAULT_SHARES_OUTSTANDING,
                currency="USD",
                market_cap=DEFAULT_MARKET_PRICE * DEFAULT_SHARES_OUTSTANDING,
                period_years=5,
                terminal_rate=2.5,
                da_percent=0.0,
            ),
        )


# Register the connector
ConnectorFactory.register("mock", MockConnector)
