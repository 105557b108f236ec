"""
Indicator Engine Service

CONTRACT:
    Input:  ChartDataRequest (raw OHLCV history for one symbol)
    Output: ChartDataOutput

RESPONSIBILITIES:
    - Clean raw bar history (drop malformed, sort, dedupe)
    - Moving averages (SMA, EMA)
    - Oscillators (RSI, MACD)
    - Volatility bands (Bollinger)
    - Volume benchmark (VWAP)
    - Support/resistance detection and clustering
    - Static indicator catalog for the chart toggles

PURE PYTHON - Uses NumPy for windowed math.
Every output series is aligned 1:1 with the cleaned bars.
"""

from stockchart.services.indicators.interface import IndicatorServiceInterface
from stockchart.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
]
