"""
Support/Resistance Detection

Finds local closing-price extremes and merges nearby ones into zones.

Clustering is greedy and single-pass: each unclaimed level seeds a
cluster and claims every later same-kind level within the threshold of
the seed. Results depend on input order when levels chain together
without all being pairwise close.
"""

import logging
from collections.abc import Sequence
from numbers import Integral

from stockchart.schemas.indicators import Level, LevelKind
from stockchart.schemas.market import Bar
from stockchart.services.base import InvalidParameterError

logger = logging.getLogger(__name__)

SERVICE_NAME = "LevelDetector"

MAX_STRENGTH = 3


def _validate(lookback: int, threshold: float) -> None:
    if isinstance(lookback, bool) or not isinstance(lookback, Integral) or lookback <= 0:
        raise InvalidParameterError(
            SERVICE_NAME,
            f"lookback must be a positive integer, got {lookback!r}",
            {"lookback": lookback},
        )
    if not threshold > 0:
        raise InvalidParameterError(
            SERVICE_NAME,
            f"cluster threshold must be positive, got {threshold!r}",
            {"cluster_threshold": threshold},
        )


def find_local_levels(closes: Sequence[float], lookback: int = 5) -> list[Level]:
    """
    Local minima/maxima of the closes, in index order.

    A close is support when no close within `lookback` bars on either
    side is lower, resistance when none is higher. Flat runs are both.
    """
    _validate(lookback, 1.0)
    levels: list[Level] = []

    for i in range(lookback, len(closes) - lookback):
        current = closes[i]
        neighbours = [*closes[i - lookback : i], *closes[i + 1 : i + lookback + 1]]

        if all(p >= current for p in neighbours):
            levels.append(Level(price=current, kind=LevelKind.SUPPORT, strength=1))
        if all(p <= current for p in neighbours):
            levels.append(Level(price=current, kind=LevelKind.RESISTANCE, strength=1))

    return levels


def cluster_levels(levels: Sequence[Level], threshold: float = 0.02) -> list[Level]:
    """
    Merge same-kind levels within `threshold` relative distance of a seed.

    Cluster price is the mean of the merged prices; strength is the summed
    strength of the members, capped at 3. Sorted by price, highest first.

    Re-clustering the output is a no-op only while cluster prices stay at
    least `threshold` apart. A chained run such as 100.0, 101.9, 102.5
    yields 102.5 and 100.95, which a second pass merges into one level.
    """
    _validate(1, threshold)
    clustered: list[Level] = []
    processed: set[int] = set()

    for i, seed in enumerate(levels):
        if i in processed:
            continue

        cluster = [seed]
        processed.add(i)

        for j in range(i + 1, len(levels)):
            if j in processed:
                continue
            other = levels[j]
            distance = abs(seed.price - other.price) / seed.price
            if distance < threshold and other.kind == seed.kind:
                cluster.append(other)
                processed.add(j)

        clustered.append(
            Level(
                price=sum(level.price for level in cluster) / len(cluster),
                kind=seed.kind,
                strength=min(MAX_STRENGTH, sum(level.strength for level in cluster)),
            )
        )

    return sorted(clustered, key=lambda level: level.price, reverse=True)


def detect_support_resistance(
    bars: Sequence[Bar],
    lookback: int = 5,
    cluster_threshold: float = 0.02,
) -> list[Level]:
    """Support/resistance zones for a cleaned bar window, highest price first."""
    _validate(lookback, cluster_threshold)
    closes = [bar.close for bar in bars]
    raw = find_local_levels(closes, lookback)
    levels = cluster_levels(raw, cluster_threshold)
    logger.debug(f"Detected {len(raw)} local levels in {len(bars)} bars, {len(levels)} after clustering")
    return levels
