"""
Series Preprocessing

Turns whatever the history provider returned into a clean, ascending,
duplicate-free list of Bars. Pure function: same input, same output,
and cleaning an already-clean list changes nothing.
"""

import logging
import math
from collections.abc import Iterable
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from stockchart.schemas.market import Bar, BarLike, RawBar
from stockchart.services.base import EmptySeriesError

logger = logging.getLogger(__name__)

SERVICE_NAME = "SeriesPreprocessor"

_PRICE_FIELDS = ("open", "high", "low", "close")


def _is_missing_price(value: Optional[float]) -> bool:
    return value is None or math.isnan(value) or value <= 0


def _to_bar(record: BarLike) -> Optional[Bar]:
    """Validate one record; None when it is unusable."""
    if isinstance(record, Bar):
        return record

    try:
        raw = record if isinstance(record, RawBar) else RawBar.model_validate(record)
    except PydanticValidationError:
        return None

    if raw.time is None:
        return None
    if any(_is_missing_price(getattr(raw, name)) for name in _PRICE_FIELDS):
        return None

    volume = raw.volume
    if volume is None or math.isnan(volume) or volume < 0:
        volume = 0.0

    try:
        return Bar(
            time=raw.time,
            open=raw.open,
            high=raw.high,
            low=raw.low,
            close=raw.close,
            volume=volume,
        )
    except PydanticValidationError:
        return None


def preprocess_bars(records: Iterable[BarLike]) -> list[Bar]:
    """
    Clean a raw bar sequence.

    - Drops records missing time/open/high/low/close (zero, negative
      and NaN prices count as missing)
    - Sorts ascending by time (stable)
    - Keeps the first bar of every run sharing a time key

    Raises:
        EmptySeriesError: nothing usable survived
    """
    received = 0
    valid: list[Bar] = []
    for record in records:
        received += 1
        bar = _to_bar(record)
        if bar is not None:
            valid.append(bar)

    valid.sort(key=lambda b: b.time)

    cleaned: list[Bar] = []
    for bar in valid:
        if cleaned and cleaned[-1].time == bar.time:
            continue
        cleaned.append(bar)

    dropped = received - len(valid)
    duplicates = len(valid) - len(cleaned)
    if dropped or duplicates:
        logger.debug(
            f"Preprocessed {received} records: dropped {dropped} malformed, "
            f"{duplicates} duplicate timestamps"
        )

    if not cleaned:
        raise EmptySeriesError(
            SERVICE_NAME,
            "No chart data available",
            {"received": received, "dropped": dropped},
        )

    return cleaned


def closes_of(bars: list[Bar]) -> list[float]:
    """Closing-price array aligned with the bars."""
    return [bar.close for bar in bars]
