"""
Technical indicators over a fixed, chronological price series.
Every function is pure: same input, same output, nothing cached.
"""
from typing import Sequence

import numpy as np

from dashboard.exception import EmptySeriesError, ProcessingError

NEUTRAL_RSI = 50.0
RSI_FLOOR = 0.01


def _as_array(series: Sequence[float], name: str) -> np.ndarray:
    arr = np.asarray(series, dtype=float)
    if arr.size == 0:
        raise EmptySeriesError(f"Cannot compute {name} on an empty price series")
    return arr


def moving_average(series: Sequence[float], period: int) -> float:
    """Mean of the last `period` prices (or of all of them if the series is shorter)."""
    arr = _as_array(series, "moving average")
    return float(arr[-period:].mean())


def volatility(series: Sequence[float]) -> float:
    """Population standard deviation as a percentage of the mean price; exactly 0 for a flat series."""
    arr = _as_array(series, "volatility")
    if np.ptp(arr) == 0:
        return 0.0
    avg = arr.mean()
    if avg == 0:
        raise ProcessingError("Cannot express volatility against a zero mean price")
    return float(np.std(arr) / avg * 100)


def rsi(series: Sequence[float], period: int = 14) -> float:
    """Relative Strength Index over the last `period` deltas.

    Returns a neutral 50 when fewer than `period + 1` prices exist. When a window
    has no gains (or no losses) the corresponding average is floored at 0.01, so
    the result never reaches exactly 0 or 100.
    """
    arr = np.asarray(series, dtype=float)
    if arr.size < period + 1:
        return NEUTRAL_RSI

    changes = np.diff(arr)[-period:]
    gains = changes[changes > 0]
    losses = np.abs(changes[changes < 0])

    avg_gain = gains.sum() / period if gains.size else RSI_FLOOR
    avg_loss = losses.sum() / period if losses.size else RSI_FLOOR

    rs = avg_gain / avg_loss
    return float(100 - 100 / (1 + rs))


def volume_trend(series: Sequence[float], window: int = 10) -> float:
    """Percent change between the mean of the last `window` points and the `window` before."""
    arr = np.asarray(series, dtype=float)
    if arr.size < 2 * window:
        return 0.0

    recent_avg = arr[-window:].mean()
    old_avg = arr[-2 * window:-window].mean()
    if old_avg == 0:
        return 0.0
    return float((recent_avg - old_avg) / old_avg * 100)


def price_change(first: float, last: float) -> float:
    """Percent move from `first` to `last`; 0 when there is no base price."""
    if not first:
        return 0.0
    return (last - first) / first * 100


def mean(series: Sequence[float]) -> float:
    return float(_as_array(series, "mean").mean())
