"""Configuration and persisted user preferences."""

from card_price_tracker.config.settings import (
    API_RESULT_LIMIT,
    DEFAULT_OUTLIER_THRESHOLD,
    DEFAULT_SEASON,
    DEFAULT_TRADE_LIMIT,
    FMV_WINDOW,
    NS_API_URL,
    OUTLIER_THRESHOLD_KEY,
    TRADE_LIMIT_KEY,
    Settings,
    TrackerSettings,
    parse_outlier_threshold,
    parse_trade_limit,
)

__all__ = [
    "API_RESULT_LIMIT",
    "DEFAULT_OUTLIER_THRESHOLD",
    "DEFAULT_SEASON",
    "DEFAULT_TRADE_LIMIT",
    "FMV_WINDOW",
    "NS_API_URL",
    "OUTLIER_THRESHOLD_KEY",
    "TRADE_LIMIT_KEY",
    "Settings",
    "TrackerSettings",
    "parse_outlier_threshold",
    "parse_trade_limit",
]
