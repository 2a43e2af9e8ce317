"""Data models for card trades."""

from card_price_tracker.models.trades import CardInfo, Trade, TradeOrder, TradeSeries

__all__ = ["CardInfo", "Trade", "TradeOrder", "TradeSeries"]
