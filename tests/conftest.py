"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import httpx
import pytest

from card_price_tracker.config import Settings
from card_price_tracker.data.store import MemorySettingsStore
from card_price_tracker.data.trades_fetcher import TradesFetcher
from card_price_tracker.models import CardInfo, Trade, TradeOrder, TradeSeries


BASE_TS = 1_700_000_000


def make_trades_xml(records: list[tuple[str, int]]) -> str:
    """
    Build a ``q=card+trades`` response from (price, timestamp) pairs.

    Usage:
        make_trades_xml([("1.50", 1700000300), ("", 1700000200)])
    """
    trades = "".join(
        f"<TRADE><BUYER>buyer</BUYER><PRICE>{price}</PRICE>"
        f"<SELLER>seller</SELLER><TIMESTAMP>{ts}</TIMESTAMP></TRADE>"
        for price, ts in records
    )
    return f'<CARD id="42" season="3"><TRADES>{trades}</TRADES></CARD>'


def make_series(prices: list[float], order: TradeOrder = TradeOrder.CHRONOLOGICAL) -> TradeSeries:
    """Trades one hour apart; ``prices`` are given in ``order``."""
    start = datetime.fromtimestamp(BASE_TS, tz=timezone.utc)
    count = len(prices)
    if order is TradeOrder.CHRONOLOGICAL:
        stamps = [start + timedelta(hours=i) for i in range(count)]
    else:
        stamps = [start + timedelta(hours=count - 1 - i) for i in range(count)]
    return TradeSeries(
        tuple(Trade(price=p, timestamp=ts) for p, ts in zip(prices, stamps)), order
    )


@pytest.fixture
def card() -> CardInfo:
    return CardInfo(card_id="42", season="3")


@pytest.fixture
def sample_xml() -> str:
    """Newest first, with one gift trade."""
    return make_trades_xml([
        ("1.20", BASE_TS + 400),
        ("", BASE_TS + 300),
        ("0.90", BASE_TS + 200),
        ("1.00", BASE_TS + 100),
        ("1.10", BASE_TS),
    ])


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(user_agent="Testlandia (card tracker tests)", cache_dir=tmp_path / "cache")


@pytest.fixture
def memory_store() -> MemorySettingsStore:
    return MemorySettingsStore()


@pytest.fixture
def make_fetcher(settings: Settings):
    """Factory for a TradesFetcher backed by an httpx.MockTransport."""
    requests: list[httpx.Request] = []

    def factory(body: str = "", status_code: int = 200) -> TradesFetcher:
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status_code, text=body)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        fetcher = TradesFetcher(settings, client=client)
        fetcher.requests = requests
        return fetcher

    return factory
