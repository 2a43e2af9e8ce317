"""Data models for card trade history."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import math

import pandas as pd


class TradeOrder(Enum):
    """Ordering of a trade series."""

    NEWEST_FIRST = "newest_first"  # As delivered by the API
    CHRONOLOGICAL = "chronological"


@dataclass(frozen=True)
class CardInfo:
    """Identifies one card in one season."""

    card_id: str
    season: str


@dataclass(frozen=True)
class Trade:
    """A single priced trade of a card."""

    price: float
    timestamp: datetime

    def __post_init__(self) -> None:
        if not math.isfinite(self.price) or self.price <= 0:
            raise ValueError(f"Trade price must be positive, got {self.price}")

    @property
    def label(self) -> str:
        """X-axis label for charts."""
        return self.timestamp.strftime("%Y-%m-%d")


@dataclass(frozen=True)
class TradeSeries:
    """Immutable, explicitly ordered sequence of trades."""

    trades: tuple[Trade, ...] = field(default_factory=tuple)
    order: TradeOrder = TradeOrder.NEWEST_FIRST

    def __post_init__(self) -> None:
        object.__setattr__(self, "trades", tuple(self.trades))

    def __len__(self) -> int:
        return len(self.trades)

    def __iter__(self):
        return iter(self.trades)

    def __getitem__(self, index: int) -> Trade:
        return self.trades[index]

    def chronological(self) -> "TradeSeries":
        """Oldest trade first."""
        if self.order is TradeOrder.CHRONOLOGICAL:
            return self
        return TradeSeries(self.trades[::-1], TradeOrder.CHRONOLOGICAL)

    def newest_first(self) -> "TradeSeries":
        """Most recent trade first."""
        if self.order is TradeOrder.NEWEST_FIRST:
            return self
        return TradeSeries(self.trades[::-1], TradeOrder.NEWEST_FIRST)

    def limit(self, count: int) -> "TradeSeries":
        """Keep the ``count`` most recent trades, preserving this series' order."""
        if count <= 0:
            return TradeSeries((), self.order)
        if self.order is TradeOrder.NEWEST_FIRST:
            return TradeSeries(self.trades[:count], self.order)
        return TradeSeries(self.trades[-count:], self.order)

    def prices(self) -> list[float]:
        return [trade.price for trade in self.trades]

    def labels(self) -> list[str]:
        return [trade.label for trade in self.trades]

    def to_frame(self) -> pd.DataFrame:
        """DataFrame with a timestamp index and a price column, in series order."""
        if not self.trades:
            return pd.DataFrame(columns=["price"], index=pd.DatetimeIndex([], name="timestamp"))

        df = pd.DataFrame(
            {
                "timestamp": [trade.timestamp for trade in self.trades],
                "price": self.prices(),
            }
        )
        df["timestamp"] = pd.to_datetime(df["timestamp"])
        df.set_index("timestamp", inplace=True)
        return df
