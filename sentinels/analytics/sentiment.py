from __future__ import annotations

import math
from typing import Iterable, List

from sentinels.data.models import AssetTelemetry, MarketSentiment

BTC_SYMBOL = "BTC"
BTC_DOMINANCE_FALLBACK = 52.5

FEAR_GREED_BASE = 50.0
FEAR_GREED_MULT = 8.0
FEAR_GREED_MIN = 15
FEAR_GREED_MAX = 95


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def _finite_or_zero(x: float) -> float:
    return x if isinstance(x, (int, float)) and math.isfinite(x) else 0.0


def fear_greed_index(mean_change_24h: float) -> int:
    raw = FEAR_GREED_BASE + mean_change_24h * FEAR_GREED_MULT
    return int(round(_clamp(raw, FEAR_GREED_MIN, FEAR_GREED_MAX)))


def aggregate_sentiment(telemetry: Iterable[AssetTelemetry]) -> MarketSentiment:
    """
    Market-wide indices for one cycle.
    Empty input gives zero totals, a neutral 50 index and the fallback dominance.
    """
    coins: List[AssetTelemetry] = list(telemetry)

    total_cap = sum(_finite_or_zero(c.market_cap) for c in coins)
    total_vol = sum(_finite_or_zero(c.volume_24h) for c in coins)

    changes = [c.price_change_24h for c in coins if math.isfinite(c.price_change_24h)]
    mean_change = sum(changes) / len(changes) if changes else 0.0

    dominance = BTC_DOMINANCE_FALLBACK
    btc = next((c for c in coins if c.symbol.upper() == BTC_SYMBOL), None)
    if btc is not None and total_cap > 0:
        dominance = _finite_or_zero(btc.market_cap) / total_cap * 100.0

    return MarketSentiment(
        fear_greed_index=fear_greed_index(mean_change),
        btc_dominance=dominance,
        total_market_cap=total_cap,
        total_volume_24h=total_vol,
    )
