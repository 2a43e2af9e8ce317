"""NationStates card trades fetcher."""

import logging

import httpx

from card_price_tracker.config import (
    API_RESULT_LIMIT,
    Settings,
    TrackerSettings,
    parse_outlier_threshold,
    parse_trade_limit,
)
from card_price_tracker.data.parsers import parse_trades
from card_price_tracker.models import CardInfo, TradeSeries


logger = logging.getLogger(__name__)


class TradesFetcher:
    """Fetches trade history for a card from the NationStates API."""

    def __init__(
        self, settings: Settings | None = None, client: httpx.Client | None = None
    ) -> None:
        self.settings = settings or Settings()
        self.settings.validate()
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.request_timeout)
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "TradesFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def build_url(self, card: CardInfo, limit: int = API_RESULT_LIMIT) -> str:
        # The API separates shards with ';', which httpx params would escape
        return (
            f"{self.settings.api_url}?q=card+trades;"
            f"cardid={card.card_id};season={card.season};limit={limit}"
        )

    def fetch_xml(self, card: CardInfo, limit: int = API_RESULT_LIMIT) -> str:
        """
        Fetch the raw trades document.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            httpx.TransportError: On connection failures and timeouts
        """
        url = self.build_url(card, limit)
        logger.info(f"Fetching trades for card {card.card_id} season {card.season}...")
        response = self.client.get(url, headers={"User-Agent": self.settings.user_agent})
        response.raise_for_status()
        return response.text

    def fetch_trades(self, card: CardInfo, limit: int = API_RESULT_LIMIT) -> TradeSeries:
        """Fetch and parse trades, newest first, gifts removed."""
        series = parse_trades(self.fetch_xml(card, limit))
        logger.info(f"  Parsed {len(series)} priced trades")
        return series


def apply_overrides(
    tracker: TrackerSettings, limit: object = None, threshold: object = None
) -> TrackerSettings:
    """Apply command-line overrides; invalid values fall back to the defaults."""
    if limit is not None:
        tracker = TrackerSettings(parse_trade_limit(limit), tracker.outlier_threshold, tracker.window)
    if threshold is not None:
        tracker = TrackerSettings(tracker.trade_limit, parse_outlier_threshold(threshold), tracker.window)
    return tracker


def main() -> None:
    """CLI entry point for fetching trades and printing FMV."""
    import argparse
    import json
    import sys

    from card_price_tracker.data.parsers import parse_card_ref
    from card_price_tracker.data.store import SettingsStore
    from card_price_tracker.indicators import FmvCalculator, WindowDirection

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Fetch card trades and compute FMV")
    parser.add_argument("card", help="Card ID or card page URL")
    parser.add_argument("--season", type=str, help="Season (default: from URL or config)")
    parser.add_argument("--limit", type=int, help="Trades to show (default: saved setting)")
    parser.add_argument(
        "--threshold", type=float, help="Outlier threshold in std devs (default: saved setting)"
    )
    parser.add_argument(
        "--direction",
        choices=[d.value for d in WindowDirection],
        default=WindowDirection.BACKWARD.value,
        help="Rolling window direction over chronological trades",
    )
    parser.add_argument("--json", action="store_true", help="Print chart data as JSON")
    args = parser.parse_args()

    try:
        settings = Settings()
        card = parse_card_ref(args.card, settings.current_season)
        if args.season:
            card = CardInfo(card.card_id, args.season)

        tracker = TrackerSettings.load(SettingsStore(settings.db_path))
        tracker = apply_overrides(tracker, args.limit, args.threshold)

        with TradesFetcher(settings) as fetcher:
            series = fetcher.fetch_trades(card)

        calculator = FmvCalculator(tracker, WindowDirection(args.direction))
        result = calculator.calculate(card, series)

    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        print(f"API error: {e.response.status_code} - {e.response.text}")
        sys.exit(1)
    except httpx.TransportError as e:
        print(f"Request failed: {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.chart.to_dict()))
        return

    print(f"\nCard {card.card_id} (season {card.season})")
    print("=" * 50)
    print(f"Trades:        {result.trade_count}")
    if result.trade_count:
        print(f"Latest price:  {result.latest_price:.2f}")
        print(f"Rolling FMV:   {result.latest_fmv:.2f}")
    print(f"Reference FMV: {result.reference_fmv:.2f}")


if __name__ == "__main__":
    main()
