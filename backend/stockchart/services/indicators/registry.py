"""
Indicator Catalog

Static, read-only table of the indicators the chart can toggle.
Only display metadata lives here; the math is in calculations.py.
"""

from types import MappingProxyType
from typing import Optional, Union

from stockchart.schemas.indicators import IndicatorConfig, IndicatorId, Placement
from stockchart.services.base import InvalidParameterError

AVAILABLE_INDICATORS: tuple[IndicatorConfig, ...] = (
    IndicatorConfig(id=IndicatorId.SMA_20, name="SMA (20)", short_name="SMA20", color="#f59e0b", placement=Placement.OVERLAY),
    IndicatorConfig(id=IndicatorId.SMA_50, name="SMA (50)", short_name="SMA50", color="#3b82f6", placement=Placement.OVERLAY),
    IndicatorConfig(id=IndicatorId.SMA_200, name="SMA (200)", short_name="SMA200", color="#8b5cf6", placement=Placement.OVERLAY),
    IndicatorConfig(id=IndicatorId.EMA_12, name="EMA (12)", short_name="EMA12", color="#22c55e", placement=Placement.OVERLAY),
    IndicatorConfig(id=IndicatorId.EMA_26, name="EMA (26)", short_name="EMA26", color="#ef4444", placement=Placement.OVERLAY),
    IndicatorConfig(id=IndicatorId.BOLLINGER, name="Bollinger Bands", short_name="BB", color="#6366f1", placement=Placement.OVERLAY),
    IndicatorConfig(id=IndicatorId.VWAP, name="VWAP", short_name="VWAP", color="#ec4899", placement=Placement.OVERLAY),
    IndicatorConfig(id=IndicatorId.RSI, name="RSI (14)", short_name="RSI", color="#8b5cf6", placement=Placement.SEPARATE),
    IndicatorConfig(id=IndicatorId.MACD, name="MACD (12,26,9)", short_name="MACD", color="#3b82f6", placement=Placement.SEPARATE),
)

INDICATOR_REGISTRY = MappingProxyType({config.id: config for config in AVAILABLE_INDICATORS})


def get_indicator_config(indicator_id: Union[IndicatorId, str]) -> IndicatorConfig:
    """Look up one catalog entry by id."""
    try:
        return INDICATOR_REGISTRY[IndicatorId(indicator_id)]
    except (KeyError, ValueError):
        raise InvalidParameterError(
            "IndicatorRegistry",
            f"Unknown indicator: {indicator_id}",
            {"indicator": str(indicator_id)},
        ) from None


def list_indicators(placement: Optional[Placement] = None) -> list[IndicatorConfig]:
    """Catalog entries in display order, optionally only one placement."""
    if placement is None:
        return list(AVAILABLE_INDICATORS)
    return [config for config in AVAILABLE_INDICATORS if config.placement == placement]


def default_indicators() -> list[IndicatorId]:
    """Ids switched on when the chart first renders."""
    return [config.id for config in AVAILABLE_INDICATORS if config.default_enabled]
