"""Fair market value calculations."""

from card_price_tracker.indicators.calculator import ChartData, FmvCalculator, FmvResult
from card_price_tracker.indicators.fmv import (
    WindowDirection,
    reference_fmv,
    rolling_fmv,
    trimmed_mean,
)

__all__ = [
    "ChartData",
    "FmvCalculator",
    "FmvResult",
    "WindowDirection",
    "reference_fmv",
    "rolling_fmv",
    "trimmed_mean",
]
