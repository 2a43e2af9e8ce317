"""Fair market value estimation from a card's trade prices.

FMV is an outlier-trimmed mean: within a window of trades, prices further
than ``threshold`` population standard deviations from the window mean are
dropped and the rest are averaged. If nothing survives the filter, the plain
window mean is used.

Two forms share that rule:

- ``rolling_fmv``: one value per trade, each from its own window.
- ``reference_fmv``: a single value from the last ``window`` entries, drawn
  as a flat reference line.

Neither function reorders its input. Callers decide what "last" and
"backward" mean by the order they pass trades in; the tracker always passes
a chronological (oldest first) series.
"""

from collections.abc import Iterable
from enum import Enum

import numpy as np

from card_price_tracker.config import DEFAULT_OUTLIER_THRESHOLD, FMV_WINDOW


class WindowDirection(Enum):
    """Which neighbours of trade ``i`` form its window."""

    BACKWARD = "backward"  # [i - window + 1 .. i]
    FORWARD = "forward"  # [i .. i + window - 1]


def _as_prices(values: Iterable) -> np.ndarray:
    """Accept plain numbers or objects with a ``price`` attribute."""
    if isinstance(values, np.ndarray):
        return values.astype(float, copy=False)
    prices = [getattr(v, "price", v) for v in values]
    return np.asarray(prices, dtype=float)


def _check_params(window: int, threshold: float) -> None:
    if window < 1:
        raise ValueError(f"window must be at least 1, got {window}")
    if threshold < 0:
        raise ValueError(f"threshold must be >= 0, got {threshold}")


def trim_outliers(prices: Iterable, threshold: float = DEFAULT_OUTLIER_THRESHOLD) -> np.ndarray:
    """Return the prices within ``threshold`` std devs of their mean."""
    arr = _as_prices(prices)
    if arr.size == 0:
        return arr
    mean = arr.mean()
    deviation = arr.std()  # population (ddof=0)
    return arr[np.abs(arr - mean) <= threshold * deviation]


def trimmed_mean(prices: Iterable, threshold: float = DEFAULT_OUTLIER_THRESHOLD) -> float:
    """
    Mean of ``prices`` after dropping outliers.

    Falls back to the untrimmed mean when the filter keeps nothing, and
    returns 0.0 for no prices at all.
    """
    arr = _as_prices(prices)
    if arr.size == 0:
        return 0.0
    kept = trim_outliers(arr, threshold)
    if kept.size == 0:
        return float(arr.mean())
    return float(kept.mean())


def window_bounds(
    index: int, length: int, window: int, direction: WindowDirection
) -> tuple[int, int]:
    """Half-open ``[start, end)`` slice of the window for position ``index``."""
    if direction is WindowDirection.BACKWARD:
        return max(0, index - window + 1), index + 1
    return index, min(length, index + window)


def rolling_fmv(
    prices: Iterable,
    window: int = FMV_WINDOW,
    threshold: float = DEFAULT_OUTLIER_THRESHOLD,
    direction: WindowDirection = WindowDirection.BACKWARD,
) -> list[float]:
    """
    FMV for every position of ``prices``.

    Args:
        prices: Prices or trades, in the order the caller wants windows taken
        window: Number of trades per window (fewer at the edges)
        threshold: Outlier cut-off in population standard deviations, >= 0
        direction: Whether each window looks back or forward from its trade

    Returns:
        List aligned index-for-index with ``prices``
    """
    _check_params(window, threshold)
    arr = _as_prices(prices)
    n = arr.size

    values = []
    for i in range(n):
        start, end = window_bounds(i, n, window, direction)
        values.append(trimmed_mean(arr[start:end], threshold))
    return values


def reference_fmv(
    prices: Iterable,
    window: int = FMV_WINDOW,
    threshold: float = DEFAULT_OUTLIER_THRESHOLD,
) -> float:
    """Single FMV over the last ``window`` entries; 0.0 when there are none."""
    _check_params(window, threshold)
    arr = _as_prices(prices)
    return trimmed_mean(arr[-window:], threshold)
