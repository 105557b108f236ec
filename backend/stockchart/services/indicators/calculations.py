"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic.

Every function returns series aligned 1:1 with its input. Slots that are
not defined yet (warm-up windows, zero volume) hold None.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Integral
from typing import Optional

import numpy as np

from stockchart.schemas.indicators import Series
from stockchart.schemas.market import Bar
from stockchart.services.base import InvalidParameterError

SERVICE_NAME = "IndicatorEngine"


@dataclass(frozen=True)
class MACDResult:
    """MACD lines, each aligned with the input closes."""

    macd_line: Series
    signal_line: Series
    histogram: Series


@dataclass(frozen=True)
class BollingerBands:
    """Bollinger band lines, each aligned with the input closes."""

    upper: Series
    middle: Series
    lower: Series


def _check_period(name: str, period: int) -> None:
    if isinstance(period, bool) or not isinstance(period, Integral) or period <= 0:
        raise InvalidParameterError(
            SERVICE_NAME,
            f"{name} must be a positive integer, got {period!r}",
            {name: period},
        )


def _absent(length: int) -> Series:
    return [None] * length


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: Sequence[float], period: int) -> Series:
    """Simple Moving Average."""
    _check_period("period", period)
    values = np.asarray(data, dtype=float)
    result = _absent(len(values))

    for i in range(period - 1, len(values)):
        result[i] = float(np.mean(values[i - period + 1 : i + 1]))
    return result


def ema(data: Sequence[float], period: int) -> Series:
    """
    Exponential Moving Average.

    Seeded at index period-1 with the SMA of the first `period` values,
    then ema[i] = (x[i] - ema[i-1]) * 2/(period+1) + ema[i-1].
    """
    _check_period("period", period)
    values = np.asarray(data, dtype=float)
    result = _absent(len(values))
    if len(values) < period:
        return result

    multiplier = 2 / (period + 1)

    # Start with SMA
    current = float(np.mean(values[:period]))
    result[period - 1] = current

    for i in range(period, len(values)):
        current = (float(values[i]) - current) * multiplier + current
        result[i] = current

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def rsi(closes: Sequence[float], period: int = 14) -> Series:
    """
    Relative Strength Index (Wilder smoothing).

    The first value is defined at index `period`: it needs `period`
    price changes, and the first change only exists at index 1.
    """
    _check_period("period", period)
    values = np.asarray(closes, dtype=float)
    result = _absent(len(values))
    if len(values) < period + 1:
        return result

    deltas = np.diff(values)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average
    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))
    result[period] = _rsi_value(avg_gain, avg_loss)

    # Subsequent values use smoothed averages
    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + float(gains[i])) / period
        avg_loss = (avg_loss * (period - 1) + float(losses[i])) / period
        result[i + 1] = _rsi_value(avg_gain, avg_loss)

    return result


def _pairwise(left: Series, right: Series) -> Series:
    """left - right, absent where either side is absent."""
    return [
        a - b if a is not None and b is not None else None
        for a, b in zip(left, right)
    ]


def macd(
    closes: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """
    MACD (Moving Average Convergence Divergence).

    The signal line is an EMA over the defined MACD values only, so its
    warm-up counts valid MACD points rather than raw bar indices.
    """
    _check_period("fast_period", fast_period)
    _check_period("slow_period", slow_period)
    _check_period("signal_period", signal_period)
    if fast_period >= slow_period:
        raise InvalidParameterError(
            SERVICE_NAME,
            f"fast_period ({fast_period}) must be less than slow_period ({slow_period})",
            {"fast_period": fast_period, "slow_period": slow_period},
        )

    macd_line = _pairwise(ema(closes, fast_period), ema(closes, slow_period))

    # Signal line over the compacted MACD values, mapped back to full length
    compact = [value for value in macd_line if value is not None]
    compact_signal = iter(ema(compact, signal_period))
    signal_line: Series = [
        next(compact_signal) if value is not None else None for value in macd_line
    ]

    histogram = _pairwise(macd_line, signal_line)

    return MACDResult(macd_line=macd_line, signal_line=signal_line, histogram=histogram)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    closes: Sequence[float], period: int = 20, std_dev: float = 2.0
) -> BollingerBands:
    """
    Bollinger Bands.

    middle = SMA(period); bands sit std_dev population standard
    deviations (divide by period) either side of it.
    """
    _check_period("period", period)
    if std_dev < 0 or np.isnan(std_dev):
        raise InvalidParameterError(
            SERVICE_NAME,
            f"std_dev must be non-negative, got {std_dev!r}",
            {"std_dev": std_dev},
        )

    values = np.asarray(closes, dtype=float)
    middle = sma(values, period)
    upper = _absent(len(values))
    lower = _absent(len(values))

    for i, mean in enumerate(middle):
        if mean is None:
            continue
        window = values[i - period + 1 : i + 1]
        std = float(np.sqrt(np.sum((window - mean) ** 2) / period))
        upper[i] = mean + std_dev * std
        lower[i] = mean - std_dev * std

    return BollingerBands(upper=upper, middle=middle, lower=lower)


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def vwap(bars: Sequence[Bar]) -> Series:
    """
    Volume Weighted Average Price.

    Cumulative over the whole input; resetting per session is up to the
    caller. Absent while no volume has traded yet.
    """
    result: Series = []
    cumulative_tpv = 0.0
    cumulative_volume = 0.0

    for bar in bars:
        cumulative_tpv += bar.typical_price * bar.volume
        cumulative_volume += bar.volume
        result.append(cumulative_tpv / cumulative_volume if cumulative_volume != 0 else None)

    return result


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_last_valid(series: Series) -> Optional[float]:
    """Get last defined value from a series."""
    for value in reversed(series):
        if value is not None:
            return value
    return None
