"""
Indicator API Endpoints

Endpoints the chart renderer calls for indicator series.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from stockchart.schemas.indicators import (
    ChartDataOutput,
    ChartDataRequest,
    IndicatorConfig,
    LevelsOutput,
    LevelsRequest,
    Placement,
)
from stockchart.services.base import ServiceError, ValidationError
from stockchart.services.indicators import get_indicator_service
from stockchart.services.indicators.registry import list_indicators

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http(e: ServiceError) -> HTTPException:
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=e.message)
    logger.error(f"{e.service_name} failed: {e.message}")
    return HTTPException(status_code=500, detail=f"Indicator calculation failed: {e.message}")


@router.get("/catalog", response_model=list[IndicatorConfig])
async def get_catalog(placement: Optional[Placement] = None):
    """
    List the indicators the chart can toggle.

    Overlay indicators draw on the price panel; separate ones get their
    own sub-panel.
    """
    return list_indicators(placement)


@router.post("/chart-data", response_model=ChartDataOutput)
async def get_chart_data(request: ChartDataRequest):
    """
    Compute indicator series for a bar history.

    Returns the cleaned bars plus, per indicator, lines aligned with them:
    - Overlays: SMA 20/50/200, EMA 12/26, Bollinger Bands, VWAP
    - Panels: RSI (with 70/30 guides), MACD (line, signal, histogram)
    - Support/resistance levels
    Absent slots are null.
    """
    service = get_indicator_service()
    try:
        return await service.execute(request)
    except ServiceError as e:
        raise _to_http(e)


@router.post("/levels", response_model=LevelsOutput)
async def get_levels(request: LevelsRequest):
    """
    Get support/resistance levels for a bar history.
    """
    service = get_indicator_service()
    try:
        return await service.find_levels(request)
    except ServiceError as e:
        raise _to_http(e)
