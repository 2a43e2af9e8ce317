"""Parse NationStates card trade XML and card page URLs."""

import logging
import math
import re
from datetime import datetime, timezone
from xml.etree import ElementTree as ET

from card_price_tracker.config import DEFAULT_SEASON
from card_price_tracker.models import CardInfo, Trade, TradeOrder, TradeSeries


logger = logging.getLogger(__name__)

_CARD_RE = re.compile(r"card=(\d+)")
_SEASON_RE = re.compile(r"season=(\d+)")


def _text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def parse_trades(xml_text: str | bytes) -> TradeSeries:
    """
    Parse a ``q=card+trades`` response.

    Trades with an empty price are gifts and are dropped, as are records
    whose timestamp cannot be read or whose price is not a positive number.

    Returns:
        Series in API order (newest first)

    Raises:
        ValueError: If the document is not well-formed XML
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ValueError(f"Malformed trades XML: {e}") from e

    trades = []
    skipped = 0
    for element in root.iter("TRADE"):
        price_text = _text(element, "PRICE")
        if not price_text:
            skipped += 1
            continue
        try:
            price = float(price_text)
            if not math.isfinite(price) or price <= 0:
                raise ValueError(f"price must be a positive number, got {price_text!r}")
            timestamp = datetime.fromtimestamp(int(_text(element, "TIMESTAMP")), tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            logger.debug(f"Skipping unreadable trade record: {e}")
            skipped += 1
            continue
        trades.append(Trade(price=price, timestamp=timestamp))

    if skipped:
        logger.debug(f"Dropped {skipped} unpriced or unreadable trades")

    return TradeSeries(tuple(trades), TradeOrder.NEWEST_FIRST)


def parse_card_url(url: str, default_season: str = DEFAULT_SEASON) -> CardInfo:
    """
    Extract card id and season from a card page URL.

    ``https://www.nationstates.net/page=deck/card=123/season=2`` gives
    ``CardInfo("123", "2")``; without ``season=`` the default is used.
    """
    card_match = _CARD_RE.search(url)
    if not card_match:
        raise ValueError(f"Card ID not found in URL: {url}")

    season_match = _SEASON_RE.search(url)
    season = season_match.group(1) if season_match else default_season
    return CardInfo(card_id=card_match.group(1), season=season)


def parse_card_ref(ref: str, default_season: str = DEFAULT_SEASON) -> CardInfo:
    """Accept either a bare card id or a card page URL."""
    ref = ref.strip()
    if ref.isdigit():
        return CardInfo(card_id=ref, season=default_season)
    return parse_card_url(ref, default_season)
