"""Data fetching, parsing and preference storage."""

from .trades_fetcher import TradesFetcher
from .store import MemorySettingsStore, SettingsStore

__all__ = ["TradesFetcher", "SettingsStore", "MemorySettingsStore"]
