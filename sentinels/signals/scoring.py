from __future__ import annotations

from typing import Dict

from sentinels.data.models import BUY, NEUTRAL, SELL, STRONG_BUY, STRONG_SELL
from sentinels.utils.timeframes import SIGNAL_KEYS

# Classification bands on the composite score. Comparisons are strict.
STRONG_THRESHOLD = 0.04
WEAK_THRESHOLD = 0.01

DEVIATION_WEIGHT = 2.0

# Momentum weight per timeframe: longer horizons lean harder on the 24h trend.
TIMEFRAME_WEIGHTS: Dict[str, float] = {
    "5m": 0.5,
    "15m": 0.75,
    "1h": 1.0,
    "4h": 1.5,
}


def composite_score(price: float, vwap: float, change_24h: float, timeframe_weight: float) -> float:
    deviation = (price - vwap) / vwap if vwap > 0 else 0.0
    momentum = change_24h / 100.0
    return deviation * DEVIATION_WEIGHT + momentum * timeframe_weight


def classify(score: float) -> str:
    if score > STRONG_THRESHOLD:
        return STRONG_BUY
    if score > WEAK_THRESHOLD:
        return BUY
    if score < -STRONG_THRESHOLD:
        return STRONG_SELL
    if score < -WEAK_THRESHOLD:
        return SELL
    return NEUTRAL


def score(price: float, vwap: float, change_24h: float, timeframe_weight: float) -> str:
    """
    VWAP deviation plus weighted 24h momentum, bucketed into five levels.
    A non-positive vwap counts as zero deviation.
    """
    return classify(composite_score(price, vwap, change_24h, timeframe_weight))


def score_timeframes(price: float, vwap: float, change_24h: float) -> Dict[str, str]:
    return {tf: score(price, vwap, change_24h, TIMEFRAME_WEIGHTS[tf]) for tf in SIGNAL_KEYS}
