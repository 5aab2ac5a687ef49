"""
API Router: all endpoint definitions for the DCF service.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from dcf_engine import calculate_dcf, generate_sensitivity_data

from dcf_service.api.schemas import (
    DCFAPIResponse,
    DCFRequest,
    DCFResultsModel,
    SensitivityDataModel,
    ValuationRequest,
    ValuationResponse,
)
from dcf_service.config import get_settings
from dcf_service.connectors import ConnectorFactory
from dcf_service.services.valuation import ValuationService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/data/dcf-inputs/{ticker}",
    response_model=DCFAPIResponse,
    summary="Get DCF Inputs",
    description="Fetches the assumption set and company metadata for a ticker from the selected source.",
)
def get_dcf_inputs(ticker: str, source: Optional[str] = Query(None, description="Data source connector")):
    try:
        connector = ConnectorFactory.get_connector(source or get_settings().default_source)
        return connector.get_dcf_inputs(ticker)
    except ValueError as e:
        logger.warning(f"Bad Request for {ticker}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Internal Error fetching DCF inputs for {ticker}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post(
    "/dcf/calculate",
    response_model=DCFResultsModel,
    summary="Calculate DCF",
    description="Runs the DCF engine on explicit assumptions and optional overrides.",
)
def calculate(request: DCFRequest):
    # InputError from the engine is turned into a 400 by the app's exception handler.
    options = request.options.to_engine() if request.options else None
    results = calculate_dcf(request.inputs.to_engine(), options, get_settings().engine_defaults())
    return DCFResultsModel.from_engine(results)


@router.post(
    "/dcf/sensitivity",
    response_model=SensitivityDataModel,
    summary="Sensitivity Grid",
    description="Intrinsic value per share over a 5x5 discount-rate / terminal-growth grid.",
)
def sensitivity(request: DCFRequest):
    options = request.options.to_engine() if request.options else None
    data = generate_sensitivity_data(request.inputs.to_engine(), options, get_settings().engine_defaults())
    return SensitivityDataModel.from_engine(data)


@router.post(
    "/valuation/calculate",
    response_model=ValuationResponse,
    summary="Value a Ticker",
    description="Fetches company data, applies overrides, and returns the DCF valuation with its sensitivity grid.",
)
def calculate_valuation(request: ValuationRequest):
    try:
        settings = get_settings()
        connector = ConnectorFactory.get_connector(request.source or settings.default_source)
        service = ValuationService(connector, defaults=settings.engine_defaults())

        inputs = request.inputs.to_engine() if request.inputs else None
        overrides = request.options.model_dump(exclude_unset=True) if request.options else None
        return service.calculate_valuation(request.ticker, inputs, overrides)
    except ValueError as e:
        logger.warning(f"Bad Request for {request.ticker}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Internal Error valuing {request.ticker}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")
