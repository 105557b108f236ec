"""RSI and MACD."""

import pytest

from stockchart.services.base import InvalidParameterError
from stockchart.services.indicators.calculations import ema, macd, rsi


def test_rsi_all_gains_is_100() -> None:
    closes = [float(i) for i in range(1, 21)]
    result = rsi(closes, 14)

    assert result[:14] == [None] * 14
    assert result[14:] == [100.0] * 6


def test_rsi_all_losses_is_0() -> None:
    closes = [float(i) for i in range(30, 0, -1)]
    defined = [v for v in rsi(closes, 14) if v is not None]

    assert defined
    assert all(v == 0 for v in defined)


def test_rsi_first_value_uses_simple_average() -> None:
    closes = [10.0, 11.0, 10.5, 11.5, 11.0]
    result = rsi(closes, 4)
    # gains 1, 0, 1, 0 ; losses 0, 0.5, 0, 0.5
    avg_gain, avg_loss = 0.5, 0.25

    assert result[:4] == [None] * 4
    assert result[4] == pytest.approx(100 - 100 / (1 + avg_gain / avg_loss))


def test_rsi_wilder_smoothing() -> None:
    closes = [10.0, 11.0, 10.5, 11.5, 11.0, 12.0]
    result = rsi(closes, 4)
    avg_gain = (0.5 * 3 + 1.0) / 4
    avg_loss = (0.25 * 3 + 0.0) / 4

    assert result[5] == pytest.approx(100 - 100 / (1 + avg_gain / avg_loss))


def test_rsi_bounded(zigzag_closes) -> None:
    result = rsi(zigzag_closes, 14)

    assert result[0] is None
    assert all(0 <= v <= 100 for v in result if v is not None)
    assert len(result) == len(zigzag_closes)


def test_rsi_short_input_is_all_absent() -> None:
    assert rsi([1.0] * 14, 14) == [None] * 14


def test_macd_histogram_is_line_minus_signal(zigzag_closes) -> None:
    result = macd(zigzag_closes, 12, 26, 9)

    for line, signal, hist in zip(result.macd_line, result.signal_line, result.histogram):
        if line is None or signal is None:
            assert hist is None
        else:
            assert hist == pytest.approx(line - signal)


def test_macd_line_defined_from_slow_warmup(zigzag_closes) -> None:
    result = macd(zigzag_closes, 12, 26, 9)
    fast, slow = ema(zigzag_closes, 12), ema(zigzag_closes, 26)

    assert result.macd_line[:25] == [None] * 25
    assert result.macd_line[25] == pytest.approx(fast[25] - slow[25])


def test_macd_signal_runs_over_defined_values_only(zigzag_closes) -> None:
    result = macd(zigzag_closes, 12, 26, 9)
    defined = [v for v in result.macd_line if v is not None]
    expected = ema(defined, 9)

    # 26 - 1 bars of slow warm-up, then 9 - 1 MACD points of signal warm-up
    first_signal = 25 + 8
    assert result.signal_line[:first_signal] == [None] * first_signal
    assert result.signal_line[first_signal] == pytest.approx(sum(defined[:9]) / 9)
    assert [v for v in result.signal_line if v is not None] == pytest.approx(
        [v for v in expected if v is not None]
    )


def test_macd_short_input_all_absent() -> None:
    result = macd([1.0] * 10)

    assert result.macd_line == [None] * 10
    assert result.signal_line == [None] * 10
    assert result.histogram == [None] * 10


@pytest.mark.parametrize("fast,slow", [(26, 12), (12, 12)])
def test_macd_rejects_fast_not_below_slow(fast, slow) -> None:
    with pytest.raises(InvalidParameterError):
        macd([1.0] * 40, fast, slow, 9)


def test_macd_rejects_bad_signal_period() -> None:
    with pytest.raises(InvalidParameterError):
        macd([1.0] * 40, 12, 26, 0)
