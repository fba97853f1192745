from __future__ import annotations

from sentinels.analytics.sentiment import aggregate_sentiment
from sentinels.analytics.liquidations import aggregate_liquidations
from sentinels.analytics.opportunities import detect_opportunities
from sentinels.analytics.rankings import (
    FundingRow,
    TimeframeMetric,
    best_setup,
    format_usd,
    funding_heatmap,
    signal_matrix,
    timeframe_metrics,
)
from sentinels.analytics.output import snapshot_payload, snapshot_summary, to_wire

__all__ = [
    "aggregate_sentiment",
    "aggregate_liquidations",
    "detect_opportunities",
    "FundingRow",
    "TimeframeMetric",
    "best_setup",
    "format_usd",
    "funding_heatmap",
    "signal_matrix",
    "timeframe_metrics",
    "snapshot_payload",
    "snapshot_summary",
    "to_wire",
]
