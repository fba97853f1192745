from __future__ import annotations

import logging
import math
import random
from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Optional, Tuple

from sentinels.data.models import AssetQuote, AssetTelemetry
from sentinels.signals.scoring import score_timeframes
from sentinels.utils.timeframes import LIQUIDATION_TIMEFRAMES, TF_24H

logger = logging.getLogger("sentinels")

# Modeled derivatives: plausible shapes from spot price/volume, not measurements.
FUNDING_K = 0.012
OI_K = 0.15
LONG_RATIO_K = 1.5

# Two-regime liquidation model keyed on |24h change| (percent).
VOLATILITY_THRESHOLD = 5.0
LIQ_FACTOR_HIGH = 0.02
LIQ_FACTOR_LOW = 0.005

HISTORY_POINTS = 24

# Half-widths of the symmetric noise terms.
NOISE_CHANGE_1H = 0.1
NOISE_CHANGE_4H = 0.25
NOISE_CHANGE_12H = 0.5
NOISE_FUNDING = 0.005
NOISE_OI = 0.05
NOISE_OI_CHANGE_1H = 1.5
NOISE_OI_CHANGE_4H = 4.0
NOISE_LIQ_BUCKET = 0.1
NOISE_HISTORY = 0.002

_default_rng = random.Random()


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def _noise(rng: Any, half_width: float) -> float:
    return rng.uniform(-half_width, half_width)


def _non_negative(x: float) -> float:
    # Non-finite or negative volume/cap counts as zero.
    return x if math.isfinite(x) and x > 0 else 0.0


def long_short_ratio(change_24h: float) -> Tuple[float, float]:
    long_pct = round(_clamp(50.0 + change_24h * LONG_RATIO_K, 0.0, 100.0), 2)
    # 100 - x re-added to x rounds back to exactly 100 for any x in [0, 100].
    return long_pct, 100.0 - long_pct


def liquidation_factor(change_24h: float) -> float:
    return LIQ_FACTOR_HIGH if abs(change_24h) > VOLATILITY_THRESHOLD else LIQ_FACTOR_LOW


def liquidation_buckets(volume_24h: float, change_24h: float, rng: Any) -> Dict[str, float]:
    base = volume_24h * liquidation_factor(change_24h)
    out: Dict[str, float] = {}
    for tf in LIQUIDATION_TIMEFRAMES:
        if tf.name == TF_24H.name:
            out[tf.name] = base
            continue
        share = tf.hours / TF_24H.hours
        out[tf.name] = max(0.0, base * share * (1.0 + _noise(rng, NOISE_LIQ_BUCKET)))
    return out


def price_history(price: float, change_24h: float, rng: Any, points: int = HISTORY_POINTS) -> Tuple[float, ...]:
    """
    Sparkline series ending at `price`, walked backward along the 24h trend.
    Reconstructed every cycle; it is not a tick history.
    """
    step = price * change_24h / 100.0 / points
    series: Deque[float] = deque(maxlen=points)
    cur = price
    series.appendleft(cur)
    while len(series) < points:
        cur = max(0.0, cur - step + _noise(rng, 1.0) * price * NOISE_HISTORY)
        series.appendleft(cur)
    return tuple(series)


def synthesize_one(q: AssetQuote, rng: Any) -> AssetTelemetry:
    change = q.change_24h
    volume = _non_negative(q.volume_24h)
    vwap = q.vwap_24h if math.isfinite(q.vwap_24h) and q.vwap_24h > 0 else q.price
    long_pct, short_pct = long_short_ratio(change)

    return AssetTelemetry(
        symbol=q.symbol,
        price=q.price,
        price_change_1h=change / 12.0 + _noise(rng, NOISE_CHANGE_1H),
        price_change_4h=change / 4.0 + _noise(rng, NOISE_CHANGE_4H),
        price_change_12h=change / 2.0 + _noise(rng, NOISE_CHANGE_12H),
        price_change_24h=change,
        funding_rate=change * FUNDING_K + _noise(rng, NOISE_FUNDING),
        open_interest=volume * OI_K * (1.0 + _noise(rng, NOISE_OI)),
        open_interest_change_1h=_noise(rng, NOISE_OI_CHANGE_1H),
        open_interest_change_4h=_noise(rng, NOISE_OI_CHANGE_4H),
        long_ratio=long_pct,
        short_ratio=short_pct,
        liquidations=liquidation_buckets(volume, change, rng),
        volatility_score=abs(change),
        price_history=price_history(q.price, change, rng),
        signals=score_timeframes(q.price, vwap, change),
        volume_24h=volume,
        market_cap=_non_negative(q.market_cap),
        vwap_24h=vwap,
    )


def synthesize(quotes: Iterable[AssetQuote], rng: Optional[Any] = None) -> List[AssetTelemetry]:
    """
    Derive one telemetry record per quote, in input order.
    `rng` needs only `uniform(a, b)`; pass a seeded random.Random (or a stub) to pin the noise.
    Quotes with a non-finite price or change are dropped.
    """
    rng = rng if rng is not None else _default_rng
    out: List[AssetTelemetry] = []
    for q in quotes:
        if not (math.isfinite(q.price) and q.price > 0 and math.isfinite(q.change_24h)):
            logger.warning("SYNTH_SKIP | %s | price=%s change=%s", q.symbol, q.price, q.change_24h)
            continue
        out.append(synthesize_one(q, rng))
    return out
