"""Tests for the chart figure and HTML export."""

from card_price_tracker.config import TrackerSettings
from card_price_tracker.indicators import FmvCalculator
from card_price_tracker.models import TradeOrder
from card_price_tracker.ui.chart import build_price_figure
from card_price_tracker.ui.html_exporter import export_html, render_html

from tests.conftest import make_series


def make_result(card, prices):
    series = make_series(prices, order=TradeOrder.NEWEST_FIRST)
    return FmvCalculator().calculate(card, series)


class TestPriceFigure:
    def test_traces(self, card):
        fig = build_price_figure(make_result(card, [3.0, 2.0, 1.0]))
        names = [trace.name for trace in fig.data]
        assert names[0] == "Market Price"
        assert names[1] == "Fair Market Value (Rolling Window)"
        assert names[2].startswith("Fair Market Value (")
        assert list(fig.data[0].y) == [1.0, 2.0, 3.0]

    def test_reference_line_has_two_points(self, card):
        fig = build_price_figure(make_result(card, [3.0, 2.0, 1.0]))
        flat = fig.data[2]
        assert list(flat.x) == [0, 2]
        assert flat.y[0] == flat.y[1]

    def test_empty_result(self, card):
        fig = build_price_figure(make_result(card, []))
        assert len(fig.data) == 2


class TestHtmlExport:
    def test_render_html(self, card):
        html = render_html(make_result(card, [3.0, 2.0, 1.0]))
        assert "cdn.plot.ly" in html
        assert "Card 42 - Season 3" in html
        assert "Plotly.newPlot" in html

    def test_export_html_writes_file(self, card, make_fetcher, sample_xml, settings, tmp_path):
        output = tmp_path / "out" / "chart.html"
        path = export_html(
            card,
            output,
            settings=settings,
            tracker=TrackerSettings(),
            fetcher=make_fetcher(sample_xml),
        )
        assert path == output
        assert "Market Price" in path.read_text(encoding="utf-8")

    def test_export_html_default_path(self, card, make_fetcher, sample_xml, settings):
        path = export_html(card, settings=settings, fetcher=make_fetcher(sample_xml))
        assert path.name == "card_42.html"
        assert path.parent == settings.cache_dir.parent / "dist"
