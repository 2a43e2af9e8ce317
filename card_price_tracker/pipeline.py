"""Fetch, compute and render cycle for one card.

A change to either preference is an event: it is saved, then exactly one
refresh runs. Every refresh takes a generation number when it starts. If a
newer refresh has started by the time an older one finishes fetching, the
older result is dropped rather than rendered over the newer one. The
check is repeated before each renderer, so a refresh started while an
older one is still rendering stops the older one.
"""

from collections.abc import Callable
from dataclasses import replace
import logging
import threading

import httpx

from card_price_tracker.config import (
    OUTLIER_THRESHOLD_KEY,
    TRADE_LIMIT_KEY,
    TrackerSettings,
    parse_outlier_threshold,
    parse_trade_limit,
)
from card_price_tracker.config.settings import SettingsPort
from card_price_tracker.data.trades_fetcher import TradesFetcher
from card_price_tracker.indicators import FmvCalculator, FmvResult, WindowDirection
from card_price_tracker.models import CardInfo


logger = logging.getLogger(__name__)

Renderer = Callable[[FmvResult], None]


class TrackerSession:
    """Owns the current preferences for a card and re-renders on change."""

    def __init__(
        self,
        card: CardInfo,
        fetcher: TradesFetcher,
        store: SettingsPort,
        settings: TrackerSettings | None = None,
        direction: WindowDirection = WindowDirection.BACKWARD,
    ) -> None:
        self.card = card
        self.fetcher = fetcher
        self.store = store
        self.settings = settings or TrackerSettings.load(store)
        self.direction = direction
        self.latest: FmvResult | None = None
        self._renderers: list[Renderer] = []
        self._generation = 0
        self._lock = threading.Lock()
        self._render_lock = threading.RLock()

    def add_renderer(self, renderer: Renderer) -> None:
        self._renderers.append(renderer)

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def refresh(self) -> FmvResult | None:
        """
        Refetch trades, recompute FMV and render.

        Returns:
            The rendered result, or None if the fetch failed or a newer
            refresh superseded this one
        """
        generation = self._next_generation()
        settings = self.settings

        try:
            series = self.fetcher.fetch_trades(self.card)
        except httpx.HTTPStatusError as e:
            logger.error(f"Error fetching data: {e.response.status_code}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Request failed: {e}")
            return None
        except ValueError as e:
            logger.error(f"Could not parse trades: {e}")
            return None

        result = FmvCalculator(settings, self.direction).calculate(self.card, series)

        with self._lock:
            if generation != self._generation:
                logger.info(f"Dropping superseded refresh #{generation}")
                return None
            self.latest = result

        with self._render_lock:
            for renderer in self._renderers:
                with self._lock:
                    if generation != self._generation:
                        logger.info(f"Stopping render of superseded refresh #{generation}")
                        return None
                renderer(result)
        return result

    def set_trade_limit(self, raw: object) -> FmvResult | None:
        """Setting-changed event for the trade display limit."""
        limit = parse_trade_limit(raw)
        self.store.set(TRADE_LIMIT_KEY, str(limit))
        self.settings = replace(self.settings, trade_limit=limit)
        return self.refresh()

    def set_outlier_threshold(self, raw: object) -> FmvResult | None:
        """Setting-changed event for the outlier threshold."""
        threshold = parse_outlier_threshold(raw)
        self.store.set(OUTLIER_THRESHOLD_KEY, repr(threshold))
        self.settings = replace(self.settings, outlier_threshold=threshold)
        return self.refresh()
