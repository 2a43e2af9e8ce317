"""Configuration settings for the card price tracker."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol
import math
import os

from dotenv import load_dotenv


load_dotenv()


# NationStates API
NS_API_URL = "https://www.nationstates.net/cgi-bin/api.cgi"
DEFAULT_SEASON = "3"
API_RESULT_LIMIT = 1000  # Most trades the API returns per request

# Fair market value
FMV_WINDOW = 15  # Trades per estimation window

# User preferences (persisted)
TRADE_LIMIT_KEY = "tradeLimit"
OUTLIER_THRESHOLD_KEY = "outlierThreshold"
DEFAULT_TRADE_LIMIT = 1000
DEFAULT_OUTLIER_THRESHOLD = 2.0


@dataclass
class Settings:
    """Application settings."""

    user_agent: str = field(default_factory=lambda: os.getenv("NS_USER_AGENT", ""))
    current_season: str = field(
        default_factory=lambda: os.getenv("NS_CURRENT_SEASON", DEFAULT_SEASON)
    )
    api_url: str = NS_API_URL
    request_timeout: float = 30.0
    cache_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("CARD_TRACKER_CACHE_DIR")
            or Path(__file__).parent.parent.parent / "cache"
        )
    )
    db_path: Path = field(init=False)

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.cache_dir / "settings.db"

    def validate(self) -> None:
        """Validate required settings."""
        if not self.user_agent:
            raise ValueError(
                "NS_USER_AGENT not set. NationStates requires a User-Agent naming "
                "your nation, see: https://www.nationstates.net/pages/api.html"
            )


class SettingsPort(Protocol):
    """Key-value persistence for user preferences."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


def _to_number(raw: object) -> float | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_trade_limit(raw: object, default: int = DEFAULT_TRADE_LIMIT) -> int:
    """Parse a trade display limit, falling back to ``default`` when invalid."""
    value = _to_number(raw)
    if value is None or int(value) <= 0:
        return default
    return int(value)


def parse_outlier_threshold(
    raw: object, default: float = DEFAULT_OUTLIER_THRESHOLD
) -> float:
    """Parse an outlier threshold (std-dev multiplier). Zero is allowed."""
    value = _to_number(raw)
    if value is None or value < 0:
        return default
    return value


@dataclass(frozen=True)
class TrackerSettings:
    """User preferences that drive one fetch/compute/render cycle."""

    trade_limit: int = DEFAULT_TRADE_LIMIT
    outlier_threshold: float = DEFAULT_OUTLIER_THRESHOLD
    window: int = FMV_WINDOW

    @classmethod
    def load(cls, store: SettingsPort) -> "TrackerSettings":
        """Read preferences from ``store``; absent or unparsable values use defaults."""
        return cls(
            trade_limit=parse_trade_limit(store.get(TRADE_LIMIT_KEY)),
            outlier_threshold=parse_outlier_threshold(store.get(OUTLIER_THRESHOLD_KEY)),
        )

    def save(self, store: SettingsPort) -> None:
        store.set(TRADE_LIMIT_KEY, str(self.trade_limit))
        store.set(OUTLIER_THRESHOLD_KEY, repr(float(self.outlier_threshold)))
