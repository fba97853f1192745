from __future__ import annotations

import time
from typing import Any, Optional

from sentinels.analytics.exports import aggregate_liquidations, aggregate_sentiment, detect_opportunities
from sentinels.data.models import MarketSnapshot
from sentinels.data.synthesizer import synthesize
from sentinels.feed.adapter import FeedAdapter


def run_cycle(
    adapter: FeedAdapter,
    rng: Optional[Any] = None,
    liquidation_filter: str = "ALL",
    now_ts: Optional[int] = None,
) -> MarketSnapshot:
    """
    One refresh: fetch (or fall back), synthesize with signals, then the three reductions.
    Feed and data problems degrade to substitute values; nothing here is fatal.
    """
    quotes, source = adapter.fetch_quotes()
    coins = synthesize(quotes, rng=rng)

    return MarketSnapshot(
        coins=coins,
        sentiment=aggregate_sentiment(coins),
        source=source,
        liquidations=aggregate_liquidations(coins, liquidation_filter),
        opportunities=detect_opportunities(coins),
        ts=int(now_ts if now_ts is not None else time.time()),
    )
