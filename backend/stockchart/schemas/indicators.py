"""
CONTRACT 2: Indicator Engine

Input: ChartDataRequest (bars for one symbol + which indicators to draw)
Output: ChartDataOutput

Every series is aligned 1:1 with the cleaned bars. Absent slots are None,
never 0 or NaN.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from stockchart.schemas.market import Bar

# One slot per cleaned bar; None means "not defined yet"
Series = list[Optional[float]]


# =============================================================================
# ENUMS
# =============================================================================


class IndicatorId(str, Enum):
    SMA_20 = "sma_20"
    SMA_50 = "sma_50"
    SMA_200 = "sma_200"
    EMA_12 = "ema_12"
    EMA_26 = "ema_26"
    RSI = "rsi"
    MACD = "macd"
    BOLLINGER = "bollinger"
    VWAP = "vwap"


class Placement(str, Enum):
    OVERLAY = "overlay"  # drawn on the price panel
    SEPARATE = "separate"  # own sub-panel


class LevelKind(str, Enum):
    SUPPORT = "support"
    RESISTANCE = "resistance"


# =============================================================================
# STATIC METADATA
# =============================================================================


class IndicatorConfig(BaseModel):
    """Display metadata for one indicator toggle."""

    model_config = ConfigDict(frozen=True)

    id: IndicatorId
    name: str
    short_name: str
    color: str = Field(..., description="Hex color used for the trace")
    placement: Placement
    default_enabled: bool = False


# =============================================================================
# SUPPORT / RESISTANCE
# =============================================================================


class Level(BaseModel):
    """Support or resistance price level."""

    model_config = ConfigDict(frozen=True)

    price: float
    kind: LevelKind
    strength: int = Field(default=1, ge=1, le=3, description="Merged points, capped at 3")


# =============================================================================
# INPUT: ChartDataRequest
# =============================================================================


class ChartDataRequest(BaseModel):
    """
    Request for chart indicator series.
    Sent by: Chart renderer
    Received by: Indicator Service
    """

    symbol: str = Field(default="", description="Market symbol, informational only")
    bars: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Raw bar records; malformed ones are dropped during cleaning",
    )
    indicators: Optional[list[IndicatorId]] = Field(
        default=None,
        description="Indicators to compute (default: every catalog entry)",
    )
    include_levels: bool = True
    level_lookback: Optional[int] = Field(default=None, description="Defaults to settings")
    level_cluster_threshold: Optional[float] = Field(default=None, description="Defaults to settings")


class LevelsRequest(BaseModel):
    """Support/resistance request for one bar window."""

    bars: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Raw bar records; malformed ones are dropped during cleaning",
    )
    lookback: Optional[int] = None
    cluster_threshold: Optional[float] = None


# =============================================================================
# OUTPUT: ChartDataOutput
# =============================================================================


class IndicatorSeries(BaseModel):
    """
    Computed lines for one indicator.

    Single-line indicators use the key "value"; MACD uses
    "macd"/"signal"/"histogram"; Bollinger uses "upper"/"middle"/"lower".
    """

    config: IndicatorConfig
    lines: dict[str, Series]
    latest: dict[str, Optional[float]] = Field(
        default_factory=dict,
        description="Last defined value per line, for the chart legend",
    )
    guides: dict[str, float] = Field(
        default_factory=dict,
        description="Horizontal reference lines (e.g. RSI overbought/oversold)",
    )


class ChartDataOutput(BaseModel):
    """
    Chart-ready indicator bundle for a symbol.
    Returned by: Indicator Service
    Consumed by: Chart renderer
    """

    symbol: str
    empty: bool = False
    message: Optional[str] = None
    bars: list[Bar]
    series: dict[IndicatorId, IndicatorSeries]
    levels: list[Level] = Field(default_factory=list)


class LevelsOutput(BaseModel):
    """Clustered support/resistance levels, highest price first."""

    levels: list[Level]
