"""Tests for trade XML and card URL parsing."""

from datetime import datetime, timezone

import pytest

from card_price_tracker.data.parsers import parse_card_ref, parse_card_url, parse_trades
from card_price_tracker.indicators import reference_fmv, rolling_fmv
from card_price_tracker.models import CardInfo, TradeOrder

from tests.conftest import BASE_TS, make_trades_xml


class TestParseTrades:
    def test_gift_trades_dropped(self, sample_xml):
        series = parse_trades(sample_xml)
        assert series.prices() == [1.20, 0.90, 1.00, 1.10]

    def test_series_is_newest_first(self, sample_xml):
        series = parse_trades(sample_xml)
        assert series.order is TradeOrder.NEWEST_FIRST
        stamps = [trade.timestamp for trade in series]
        assert stamps == sorted(stamps, reverse=True)

    def test_timestamps_are_utc_epoch_seconds(self, sample_xml):
        series = parse_trades(sample_xml)
        assert series[-1].timestamp == datetime.fromtimestamp(BASE_TS, tz=timezone.utc)

    def test_bytes_input(self, sample_xml):
        assert len(parse_trades(sample_xml.encode("utf-8"))) == 4

    def test_whitespace_price_is_a_gift(self):
        series = parse_trades(make_trades_xml([("  ", BASE_TS), ("2.00", BASE_TS)]))
        assert series.prices() == [2.0]

    def test_unreadable_records_skipped(self):
        xml = make_trades_xml([("abc", BASE_TS), ("1.00", "soon"), ("3.00", BASE_TS)])
        assert parse_trades(xml).prices() == [3.0]

    @pytest.mark.parametrize("price", ["nan", "inf", "-4", "0", "0.00"])
    def test_non_positive_or_non_finite_price_dropped(self, price):
        series = parse_trades(make_trades_xml([(price, BASE_TS + 1), ("2.00", BASE_TS)]))
        assert series.prices() == [2.0]

    def test_invalid_prices_never_reach_fmv(self):
        xml = make_trades_xml([
            ("nan", BASE_TS + 3), ("-4", BASE_TS + 2), ("0", BASE_TS + 1), ("2.0", BASE_TS),
        ])
        series = parse_trades(xml).chronological()
        assert rolling_fmv(series) == [2.0]
        assert reference_fmv(series) == 2.0

    def test_missing_price_element_is_a_gift(self):
        xml = "<CARD><TRADES><TRADE><TIMESTAMP>1700000000</TIMESTAMP></TRADE></TRADES></CARD>"
        assert len(parse_trades(xml)) == 0

    def test_no_trades(self):
        assert len(parse_trades("<CARD><TRADES/></CARD>")) == 0

    def test_malformed_xml(self):
        with pytest.raises(ValueError, match="Malformed"):
            parse_trades("<CARD><TRADES>")


class TestParseCardUrl:
    def test_card_and_season(self):
        url = "https://www.nationstates.net/page=deck/card=123/season=2"
        assert parse_card_url(url) == CardInfo("123", "2")

    def test_default_season(self):
        url = "https://www.nationstates.net/page=deck/card=123"
        assert parse_card_url(url) == CardInfo("123", "3")
        assert parse_card_url(url, default_season="1") == CardInfo("123", "1")

    def test_missing_card_id(self):
        with pytest.raises(ValueError, match="Card ID not found"):
            parse_card_url("https://www.nationstates.net/page=deck")

    def test_bare_id(self):
        assert parse_card_ref(" 987 ", default_season="2") == CardInfo("987", "2")

    def test_ref_with_url(self):
        assert parse_card_ref("page=deck/card=5/season=1") == CardInfo("5", "1")
