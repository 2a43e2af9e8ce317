"""Export a card's price chart as self-contained HTML."""

import html
from datetime import datetime
from pathlib import Path

from card_price_tracker.config import Settings, TrackerSettings
from card_price_tracker.data.store import SettingsStore
from card_price_tracker.data.trades_fetcher import TradesFetcher
from card_price_tracker.indicators import FmvCalculator, FmvResult
from card_price_tracker.models import CardInfo
from card_price_tracker.ui.chart import build_price_figure


def format_price(value: float | None) -> str:
    return "N/A" if value is None else f"{value:,.2f}"


def render_html(result: FmvResult) -> str:
    """Build the page for one result. Plotly.js is loaded from its CDN."""
    figure_json = build_price_figure(result).to_json()
    card = result.card
    settings = result.settings
    title = html.escape(f"Card {card.card_id} - Season {card.season}")

    return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} | Card Price Tracker</title>
    <script src="https://cdn.plot.ly/plotly-2.27.0.min.js"></script>
    <style>
        body {{ font-family: 'Inter', sans-serif; background: #0f172a; color: #e2e8f0; margin: 0; padding: 20px; }}
        .summary {{ display: flex; gap: 2rem; margin-bottom: 1rem; }}
        .metric .label {{ color: #94a3b8; font-size: 0.75rem; text-transform: uppercase; }}
        .metric .value {{ font-size: 1.5rem; font-weight: 600; font-family: 'SF Mono', 'Consolas', monospace; }}
        #chart {{ width: 100%; height: 400px; background: #ffffff; border-radius: 8px; }}
        .footer {{ color: #64748b; font-size: 0.7rem; margin-top: 1rem; }}
    </style>
</head>
<body>
    <h1>{title}</h1>
    <div class="summary">
        <div class="metric"><div class="label">Trades</div><div class="value">{result.trade_count}</div></div>
        <div class="metric"><div class="label">Latest Price</div><div class="value">{format_price(result.latest_price)}</div></div>
        <div class="metric"><div class="label">Rolling FMV</div><div class="value">{format_price(result.latest_fmv)}</div></div>
        <div class="metric"><div class="label">Reference FMV</div><div class="value">{format_price(result.reference_fmv)}</div></div>
    </div>
    <div id="chart"></div>
    <div class="footer">
        Window {settings.window} trades | Outlier threshold {settings.outlier_threshold:g} std dev |
        Generated {datetime.now().strftime('%Y-%m-%d %H:%M')}
    </div>
    <script>
        const FIGURE = {figure_json};
        Plotly.newPlot('chart', FIGURE.data, FIGURE.layout, {{ displayModeBar: false, responsive: true }});
    </script>
</body>
</html>'''


def export_html(
    card: CardInfo,
    output_path: Path | str | None = None,
    settings: Settings | None = None,
    tracker: TrackerSettings | None = None,
    fetcher: TradesFetcher | None = None,
) -> Path:
    """
    Fetch trades for ``card`` and write its chart page.

    Args:
        card: Card to chart
        output_path: Where to save the HTML file. Defaults to dist/card_<id>.html
        settings: Application settings
        tracker: Preferences; loaded from the saved store when omitted
        fetcher: Fetcher to use; one is created (and closed) when omitted

    Returns:
        Path to the generated file
    """
    settings = settings or Settings()
    tracker = tracker or TrackerSettings.load(SettingsStore(settings.db_path))

    if fetcher is None:
        with TradesFetcher(settings) as own_fetcher:
            series = own_fetcher.fetch_trades(card)
    else:
        series = fetcher.fetch_trades(card)

    result = FmvCalculator(tracker).calculate(card, series)

    if output_path is None:
        output_path = settings.cache_dir.parent / "dist" / f"card_{card.card_id}.html"
    else:
        output_path = Path(output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html(result), encoding="utf-8")

    return output_path


def main() -> None:
    """CLI entry point."""
    import argparse
    import logging

    import httpx

    from card_price_tracker.data.parsers import parse_card_ref

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Export a card price chart as HTML")
    parser.add_argument("card", help="Card ID or card page URL")
    parser.add_argument("--season", type=str, default=None, help="Season override")
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output path (default: dist/card_<id>.html)"
    )
    args = parser.parse_args()

    try:
        settings = Settings()
        card = parse_card_ref(args.card, settings.current_season)
        if args.season:
            card = CardInfo(card.card_id, args.season)
        path = export_html(card, args.output, settings=settings)
        print(f"Chart exported to: {path}")
        print(f"File size: {path.stat().st_size / 1024:.1f} KB")
    except ValueError as e:
        print(f"Error: {e}")
        raise SystemExit(1)
    except httpx.HTTPError as e:
        print(f"Request failed: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
