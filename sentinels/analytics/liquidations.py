from __future__ import annotations

from typing import Dict, Iterable

from sentinels.data.models import AssetTelemetry, LiquidationBucket, LiquidationSummary
from sentinels.utils.timeframes import LIQUIDATION_KEYS

LIQUIDATION_FILTERS = ("ALL", "LONG", "SHORT")


def normalize_filter(filter_: str) -> str:
    f = str(filter_ or "ALL").strip().upper()
    if f not in LIQUIDATION_FILTERS:
        raise ValueError(f"Unsupported liquidation filter: {filter_}")
    return f


def aggregate_liquidations(telemetry: Iterable[AssetTelemetry], filter_: str = "ALL") -> LiquidationSummary:
    """
    Sum modeled liquidations per timeframe, split by each asset's long/short ratio.
    The filter never changes the sums; it only selects LiquidationSummary.display_value().
    """
    f = normalize_filter(filter_)

    sums: Dict[str, Dict[str, float]] = {tf: {"total": 0.0, "long": 0.0, "short": 0.0} for tf in LIQUIDATION_KEYS}
    for coin in telemetry:
        for tf in LIQUIDATION_KEYS:
            total = float(coin.liquidations.get(tf, 0.0) or 0.0)
            acc = sums[tf]
            acc["total"] += total
            acc["long"] += total * (coin.long_ratio / 100.0)
            acc["short"] += total * (coin.short_ratio / 100.0)

    buckets = {tf: LiquidationBucket(total=s["total"], long=s["long"], short=s["short"]) for tf, s in sums.items()}
    return LiquidationSummary(buckets=buckets, filter=f)
