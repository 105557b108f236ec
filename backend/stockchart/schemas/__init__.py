"""
StockChart Schema Contracts

This module defines all JSON contracts between the indicator engine
and its collaborators (history provider, chart renderer).
"""

from stockchart.schemas.market import (
    Bar,
    BarLike,
    RawBar,
)
from stockchart.schemas.indicators import (
    ChartDataOutput,
    ChartDataRequest,
    IndicatorConfig,
    IndicatorId,
    IndicatorSeries,
    Level,
    LevelKind,
    LevelsOutput,
    LevelsRequest,
    Placement,
    Series,
)

__all__ = [
    # Market
    "Bar",
    "BarLike",
    "RawBar",
    # Indicators
    "ChartDataOutput",
    "ChartDataRequest",
    "IndicatorConfig",
    "IndicatorId",
    "IndicatorSeries",
    "Level",
    "LevelKind",
    "LevelsOutput",
    "LevelsRequest",
    "Placement",
    "Series",
]
