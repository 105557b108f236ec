"""Shared fixtures: synthetic bar histories."""

from datetime import datetime, timedelta, timezone

import pytest

from stockchart.schemas.market import Bar

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def build_bars(closes, volumes=None, spread=1.0):
    """Daily bars around the given closes, one day apart."""
    volumes = volumes if volumes is not None else [1000.0] * len(closes)
    return [
        Bar(
            time=START + timedelta(days=i),
            open=close,
            high=close + spread,
            low=max(close - spread, 0.01),
            close=close,
            volume=volume,
        )
        for i, (close, volume) in enumerate(zip(closes, volumes))
    ]


@pytest.fixture
def make_bars():
    return build_bars


@pytest.fixture
def zigzag_closes():
    """60 closes oscillating around an uptrend."""
    pattern = [0.0, 1.5, 3.0, 1.0, -0.5, 2.0, 4.0, 2.5]
    return [100.0 + i * 0.4 + pattern[i % len(pattern)] for i in range(60)]
