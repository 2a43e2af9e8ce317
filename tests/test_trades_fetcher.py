"""Tests for the NationStates trades fetcher."""

import httpx
import pytest

from card_price_tracker.config import (
    DEFAULT_OUTLIER_THRESHOLD,
    DEFAULT_TRADE_LIMIT,
    Settings,
    TrackerSettings,
)
from card_price_tracker.data.trades_fetcher import TradesFetcher, apply_overrides


class TestTradesFetcher:
    def test_request_shape(self, make_fetcher, card, sample_xml, settings):
        fetcher = make_fetcher(sample_xml)
        fetcher.fetch_trades(card)

        request = fetcher.requests[0]
        assert request.method == "GET"
        assert request.url.host == "www.nationstates.net"
        assert request.url.path == "/cgi-bin/api.cgi"
        url = str(request.url)
        for part in ("card+trades", "cardid=42", "season=3", "limit=1000"):
            assert part in url
        assert request.headers["User-Agent"] == settings.user_agent

    def test_build_url(self, make_fetcher, card):
        url = make_fetcher().build_url(card, limit=50)
        assert url.endswith("?q=card+trades;cardid=42;season=3;limit=50")

    def test_fetch_trades_parses_and_drops_gifts(self, make_fetcher, card, sample_xml):
        series = make_fetcher(sample_xml).fetch_trades(card)
        assert len(series) == 4

    def test_http_error_raised(self, make_fetcher, card):
        fetcher = make_fetcher("Too many requests", status_code=429)
        with pytest.raises(httpx.HTTPStatusError) as excinfo:
            fetcher.fetch_trades(card)
        assert excinfo.value.response.status_code == 429

    def test_transport_error_propagates(self, settings, card):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with TradesFetcher(settings, client=client) as fetcher:
            with pytest.raises(httpx.TransportError):
                fetcher.fetch_trades(card)

    def test_requires_user_agent(self, tmp_path):
        with pytest.raises(ValueError, match="NS_USER_AGENT"):
            TradesFetcher(Settings(user_agent="", cache_dir=tmp_path))

    def test_close_releases_client(self, make_fetcher):
        fetcher = make_fetcher()
        fetcher.close()
        assert fetcher._client is None


class TestApplyOverrides:
    def test_no_overrides(self):
        tracker = TrackerSettings(trade_limit=50, outlier_threshold=1.5)
        assert apply_overrides(tracker) == tracker

    def test_valid_overrides(self):
        tracker = apply_overrides(TrackerSettings(), limit=25, threshold=0.0)
        assert (tracker.trade_limit, tracker.outlier_threshold) == (25, 0.0)

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_falls_back(self, limit):
        tracker = apply_overrides(TrackerSettings(trade_limit=50), limit=limit)
        assert tracker.trade_limit == DEFAULT_TRADE_LIMIT

    def test_negative_threshold_falls_back(self):
        tracker = apply_overrides(TrackerSettings(outlier_threshold=1.0), threshold=-2.0)
        assert tracker.outlier_threshold == DEFAULT_OUTLIER_THRESHOLD
