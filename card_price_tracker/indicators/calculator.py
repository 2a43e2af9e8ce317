"""Turn a card's trade history into price and fair market value series."""

from dataclasses import dataclass
import logging

import pandas as pd

from card_price_tracker.config import TrackerSettings
from card_price_tracker.indicators.fmv import WindowDirection, reference_fmv, rolling_fmv
from card_price_tracker.models import CardInfo, TradeSeries


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartData:
    """Aligned arrays handed to the chart layer."""

    labels: list[str]
    prices: list[float]
    fmv: list[float]  # Rolling FMV, one per trade
    fmv_line: list[tuple[str, float]]  # Flat reference FMV, two points

    def to_dict(self) -> dict:
        return {
            "labels": self.labels,
            "prices": self.prices,
            "fmv": self.fmv,
            "fmv_line": [{"x": x, "y": y} for x, y in self.fmv_line],
        }


@dataclass
class FmvResult:
    """Complete result for one card."""

    card: CardInfo
    trades: TradeSeries  # Chronological, limited
    history: pd.DataFrame  # timestamp index, price + fmv columns
    reference_fmv: float
    chart: ChartData
    settings: TrackerSettings

    @property
    def trade_count(self) -> int:
        return len(self.trades)

    @property
    def latest_price(self) -> float | None:
        return self.trades[-1].price if self.trades else None

    @property
    def latest_fmv(self) -> float | None:
        return self.chart.fmv[-1] if self.chart.fmv else None


class FmvCalculator:
    """Applies display limits and runs both FMV forms over a trade series."""

    def __init__(
        self,
        settings: TrackerSettings | None = None,
        direction: WindowDirection = WindowDirection.BACKWARD,
    ) -> None:
        self.settings = settings or TrackerSettings()
        self.direction = direction

    def calculate(self, card: CardInfo, series: TradeSeries) -> FmvResult:
        """
        Compute FMV for the most recent ``trade_limit`` trades.

        Trades are put in chronological order first, so a backward window
        covers a trade and the ones before it, and the reference FMV covers
        the most recent trades.
        """
        settings = self.settings
        trades = series.limit(settings.trade_limit).chronological()
        prices = trades.prices()

        fmv = rolling_fmv(
            prices,
            window=settings.window,
            threshold=settings.outlier_threshold,
            direction=self.direction,
        )
        flat = reference_fmv(
            prices, window=settings.window, threshold=settings.outlier_threshold
        )

        labels = trades.labels()
        fmv_line = [(labels[0], flat), (labels[-1], flat)] if labels else []

        history = trades.to_frame()
        history["fmv"] = fmv

        logger.info(
            f"Card {card.card_id} S{card.season}: {len(trades)} trades, "
            f"reference FMV {flat:.2f}"
        )

        return FmvResult(
            card=card,
            trades=trades,
            history=history,
            reference_fmv=flat,
            chart=ChartData(labels=labels, prices=prices, fmv=fmv, fmv_line=fmv_line),
            settings=settings,
        )
