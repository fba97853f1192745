from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _getenv(name: str, default: Optional[str] = None) -> str:
    val = os.getenv(name, default)
    if val is None:
        raise RuntimeError(f"Missing required env var: {name}")
    return val


DEFAULT_FEED_URL = "https://api.coincap.io/v2/assets"
DEFAULT_NARRATIVE_MODEL = "claude-sonnet-4-5"


@dataclass(frozen=True)
class AppConfig:
    app_env: str

    # Upstream quote feed
    feed_url: str
    feed_limit: int
    feed_timeout_sec: float

    # Cadence. The fetch timeout must stay independent of the refresh interval.
    refresh_interval_sec: float
    analysis_interval_sec: float

    # Which liquidation figure the dashboard surfaces: ALL | LONG | SHORT
    liquidation_filter: str

    # Narrative analysis (optional; empty key => fallback payload)
    anthropic_api_key: str
    narrative_model: str

    @staticmethod
    def load() -> "AppConfig":
        liq_filter = _getenv("LIQUIDATION_FILTER", "ALL").strip().upper()
        if liq_filter not in ("ALL", "LONG", "SHORT"):
            raise RuntimeError(f"Invalid LIQUIDATION_FILTER: {liq_filter}")

        return AppConfig(
            app_env=_getenv("APP_ENV", "dev"),
            feed_url=_getenv("FEED_URL", DEFAULT_FEED_URL),
            feed_limit=int(_getenv("FEED_LIMIT", "20")),
            feed_timeout_sec=float(_getenv("FEED_TIMEOUT_SEC", "2.0")),
            refresh_interval_sec=float(_getenv("REFRESH_INTERVAL_SEC", "1.0")),
            analysis_interval_sec=float(_getenv("ANALYSIS_INTERVAL_SEC", "300")),
            liquidation_filter=liq_filter,
            anthropic_api_key=_getenv("ANTHROPIC_API_KEY", ""),
            narrative_model=_getenv("NARRATIVE_MODEL", DEFAULT_NARRATIVE_MODEL),
        )
