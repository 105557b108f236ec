"""
Indicator Engine Service Implementation

Cleans bar history and computes the chart's indicator series.
Pure Python/NumPy calculations, recomputed from scratch per request.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Optional

from stockchart.core.config import Settings, get_settings
from stockchart.schemas.indicators import (
    ChartDataOutput,
    ChartDataRequest,
    IndicatorId,
    IndicatorSeries,
    LevelsOutput,
    LevelsRequest,
    Series,
)
from stockchart.schemas.market import Bar
from stockchart.services.base import EmptySeriesError, ValidationError
from stockchart.services.indicators.calculations import (
    bollinger_bands,
    ema,
    get_last_valid,
    macd,
    rsi,
    sma,
    vwap,
)
from stockchart.services.indicators.interface import IndicatorServiceInterface
from stockchart.services.indicators.levels import detect_support_resistance
from stockchart.services.indicators.preprocessing import closes_of, preprocess_bars
from stockchart.services.indicators.registry import AVAILABLE_INDICATORS, get_indicator_config

logger = logging.getLogger(__name__)

RSI_GUIDES = {"overbought": 70.0, "oversold": 30.0}


def _single(compute: Callable[[list[float]], Series]) -> Callable[[Sequence[Bar]], dict[str, Series]]:
    return lambda bars: {"value": compute(closes_of(list(bars)))}


def _macd_lines(bars: Sequence[Bar]) -> dict[str, Series]:
    result = macd(closes_of(list(bars)), 12, 26, 9)
    return {"macd": result.macd_line, "signal": result.signal_line, "histogram": result.histogram}


def _bollinger_lines(bars: Sequence[Bar]) -> dict[str, Series]:
    bands = bollinger_bands(closes_of(list(bars)), 20, 2.0)
    return {"upper": bands.upper, "middle": bands.middle, "lower": bands.lower}


# Indicator id -> function producing its named lines from cleaned bars
INDICATOR_FUNCTIONS: dict[IndicatorId, Callable[[Sequence[Bar]], dict[str, Series]]] = {
    IndicatorId.SMA_20: _single(lambda closes: sma(closes, 20)),
    IndicatorId.SMA_50: _single(lambda closes: sma(closes, 50)),
    IndicatorId.SMA_200: _single(lambda closes: sma(closes, 200)),
    IndicatorId.EMA_12: _single(lambda closes: ema(closes, 12)),
    IndicatorId.EMA_26: _single(lambda closes: ema(closes, 26)),
    IndicatorId.RSI: _single(lambda closes: rsi(closes, 14)),
    IndicatorId.MACD: _macd_lines,
    IndicatorId.BOLLINGER: _bollinger_lines,
    IndicatorId.VWAP: lambda bars: {"value": vwap(bars)},
}

LINE_NAMES: dict[IndicatorId, tuple[str, ...]] = {
    IndicatorId.MACD: ("macd", "signal", "histogram"),
    IndicatorId.BOLLINGER: ("upper", "middle", "lower"),
}


def _guides_for(indicator_id: IndicatorId) -> dict[str, float]:
    return dict(RSI_GUIDES) if indicator_id == IndicatorId.RSI else {}


def calculate_indicator(indicator_id: IndicatorId, bars: Sequence[Bar]) -> IndicatorSeries:
    """Compute every line of one catalog indicator over cleaned bars."""
    config = get_indicator_config(indicator_id)
    lines = INDICATOR_FUNCTIONS[config.id](bars)
    return IndicatorSeries(
        config=config,
        lines=lines,
        latest={name: get_last_valid(values) for name, values in lines.items()},
        guides=_guides_for(config.id),
    )


def empty_indicator(indicator_id: IndicatorId) -> IndicatorSeries:
    """Zero-length series for the "no data" render state."""
    config = get_indicator_config(indicator_id)
    names = LINE_NAMES.get(config.id, ("value",))
    return IndicatorSeries(
        config=config,
        lines={name: [] for name in names},
        latest={name: None for name in names},
        guides=_guides_for(config.id),
    )


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates chart indicator series from OHLCV history.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def validate_input(self, input_data: ChartDataRequest) -> ChartDataRequest:
        """Reject oversized history before any work."""
        self._check_size(len(input_data.bars))
        return input_data

    def _check_size(self, count: int) -> None:
        if count > self.settings.max_bars:
            raise ValidationError(
                self.name,
                f"Too many bars: {count} (max {self.settings.max_bars})",
                {"bars": count, "max_bars": self.settings.max_bars},
            )

    def _level_params(
        self, lookback: Optional[int], threshold: Optional[float]
    ) -> tuple[int, float]:
        return (
            lookback if lookback is not None else self.settings.level_lookback,
            threshold if threshold is not None else self.settings.level_cluster_threshold,
        )

    async def execute(self, input_data: ChartDataRequest) -> ChartDataOutput:
        """Calculate the requested indicator series for one symbol."""
        request = await self.validate_input(input_data)

        requested = request.indicators
        if requested is None:
            requested = [config.id for config in AVAILABLE_INDICATORS]
        indicator_ids = list(dict.fromkeys(requested))

        lookback, threshold = self._level_params(
            request.level_lookback, request.level_cluster_threshold
        )

        try:
            bars = preprocess_bars(request.bars)
        except EmptySeriesError as e:
            logger.warning(f"No usable bars for {request.symbol or '<unnamed>'}: {e.message}")
            return ChartDataOutput(
                symbol=request.symbol,
                empty=True,
                message=e.message,
                bars=[],
                series={indicator_id: empty_indicator(indicator_id) for indicator_id in indicator_ids},
            )

        logger.info(
            f"Calculating {len(indicator_ids)} indicators for {request.symbol or '<unnamed>'} "
            f"over {len(bars)} bars",
            extra={"symbol": request.symbol, "bars": len(bars), "received": len(request.bars)},
        )

        series = {
            indicator_id: calculate_indicator(indicator_id, bars)
            for indicator_id in indicator_ids
        }

        levels = []
        if request.include_levels:
            levels = detect_support_resistance(bars, lookback, threshold)

        return ChartDataOutput(
            symbol=request.symbol,
            bars=bars,
            series=series,
            levels=levels,
        )

    async def find_levels(self, input_data: LevelsRequest) -> LevelsOutput:
        """Detect support/resistance levels for one bar window."""
        self._check_size(len(input_data.bars))
        lookback, threshold = self._level_params(input_data.lookback, input_data.cluster_threshold)

        try:
            bars = preprocess_bars(input_data.bars)
        except EmptySeriesError:
            bars = []

        return LevelsOutput(levels=detect_support_resistance(bars, lookback, threshold))

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
