from dataclasses import asdict
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dcf_engine import DCFCalcOptions, DCFInputs, DCFResults, SensitivityData, ValuationStatus


class CamelModel(BaseModel):
    """Base for the JSON boundary: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DCFInputsModel(CamelModel):
    """Percentage assumptions (15 means 15%)."""

    revenue_cagr: float = Field(..., description="Annual revenue growth rate")
    ebit_margin: float = Field(..., description="EBIT as % of revenue")
    tax_rate: float = Field(..., description="Corporate tax rate")
    capex_percent: float = Field(..., description="Capital expenditure as % of revenue")
    nwc_percent: float = Field(..., description="Net working capital as % of the revenue change")
    terminal_growth: float = Field(..., description="Long-term growth rate beyond the forecast period")
    discount_rate: float = Field(..., description="Required rate of return (WACC)")

    def to_engine(self) -> DCFInputs:
        return DCFInputs(**self.model_dump())

    @classmethod
    def from_engine(cls, inputs: DCFInputs) -> "DCFInputsModel":
        return cls(**asdict(inputs))


class DCFCalcOptionsModel(CamelModel):
    """Absolute-unit overrides. Omitted fields fall back to assumptions or defaults."""

    base_revenue: Optional[float] = Field(None, description="Latest annual revenue")
    shares_outstanding: Optional[float] = Field(None, description="Diluted shares outstanding")
    market_price: Optional[float] = Field(None, description="Current share price")
    market_cap: Optional[float] = Field(None, description="Market capitalisation")
    fcf_latest: Optional[float] = Field(None, description="Latest annual free cash flow")
    growth_estimate_5y: Optional[float] = Field(
        None, alias="growthEstimate5Y", description="Expected FCF growth for the next 5 years (%)"
    )
    period_years: Optional[int] = Field(None, description="Explicit forecast horizon in years")
    terminal_rate: Optional[float] = Field(None, description="Terminal growth override (%)")
    net_debt: Optional[float] = Field(None, description="Debt minus cash, bridges EV to equity")
    da_percent: Optional[float] = Field(None, description="D&A as % of revenue")
    use_mid_year: Optional[bool] = Field(None, description="Apply the mid-year discounting convention")
    wacc: Optional[float] = Field(None, description="Discount rate override (%)")

    def to_engine(self) -> DCFCalcOptions:
        return DCFCalcOptions(**self.model_dump())

    @classmethod
    def from_engine(cls, options: DCFCalcOptions) -> "DCFCalcOptionsModel":
        return cls(**asdict(options))


class DCFResultsModel(CamelModel):
    intrinsic_value: float
    enterprise_value: float
    implied_market_cap: float
    margin_of_safety: float
    projected_fcfs: List[float] = Field(..., alias="projectedFCFs")

    @classmethod
    def from_engine(cls, results: DCFResults) -> "DCFResultsModel":
        return cls(**asdict(results))


class SensitivityDataModel(CamelModel):
    discount_rates: List[int]
    terminal_growth_rates: List[float]
    values: List[List[int]]

    @classmethod
    def from_engine(cls, data: SensitivityData) -> "SensitivityDataModel":
        return cls(**asdict(data))


class CompanyMeta(CamelModel):
    """Per-company market data. Every rate field is a percentage."""

    price: float
    shares_outstanding: float
    currency: str
    revenue_latest: Optional[float] = None
    fcf_latest: Optional[float] = None
    growth_estimate_5y: Optional[float] = Field(None, alias="growthEstimate5Y")
    eps: Optional[float] = None
    period_years: Optional[int] = None
    terminal_rate: Optional[float] = None
    market_cap: Optional[float] = None
    total_debt: Optional[float] = None
    cash: Optional[float] = None
    net_debt: Optional[float] = None
    beta: Optional[float] = None
    risk_free_rate: Optional[float] = None
    market_risk_premium: Optional[float] = None
    cost_of_equity: Optional[float] = None
    cost_of_debt: Optional[float] = None
    wacc: Optional[float] = None
    da_percent: Optional[float] = None


class DCFAPIResponse(CamelModel):
    ticker: str
    inputs: DCFInputsModel
    meta: CompanyMeta


class DCFRequest(CamelModel):
    """Request body for the stateless calculation endpoints."""

    inputs: DCFInputsModel
    options: Optional[DCFCalcOptionsModel] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "inputs": {
                    "revenueCagr": 15,
                    "ebitMargin": 25,
                    "taxRate": 21,
                    "capexPercent": 3,
                    "nwcPercent": 2,
                    "terminalGrowth": 3,
                    "discountRate": 10,
                },
                "options": {"netDebt": 0, "useMidYear": False},
            }
        }
    )


class ValuationRequest(CamelModel):
    """Request body for the ticker valuation endpoint."""

    ticker: str = Field(..., description="Stock ticker symbol (e.g., AAPL)")
    source: Optional[str] = Field(None, description="Data source connector (defaults to settings)")
    inputs: Optional[DCFInputsModel] = Field(None, description="Replaces the fetched assumptions")
    options: Optional[DCFCalcOptionsModel] = Field(
        None, description="Overrides individual fetched company values"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ticker": "AAPL",
                "source": "mock",
                "options": {"wacc": 8.5, "useMidYear": True},
            }
        }
    )


class ValuationResponse(CamelModel):
    ticker: str
    currency: str
    inputs: DCFInputsModel
    options: DCFCalcOptionsModel
    results: DCFResultsModel
    sensitivity: SensitivityDataModel
    status: Optional[ValuationStatus] = None
