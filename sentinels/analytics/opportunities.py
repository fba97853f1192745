from __future__ import annotations

from typing import Iterable, List

from sentinels.data.models import BEARISH, BULLISH, AssetTelemetry, Opportunity

NEGATIVE_FUNDING_THRESHOLD = -0.02
HIGH_FUNDING_THRESHOLD = 0.05
OI_RISE_THRESHOLD = 2.0
PRICE_DROP_THRESHOLD = -1.0


def detect_opportunities(telemetry: Iterable[AssetTelemetry]) -> List[Opportunity]:
    """
    Flag funding extremes and OI/price divergence.
    Each rule scans the whole set in order, so one coin can appear under several rules.
    """
    coins = list(telemetry)
    out: List[Opportunity] = []

    # Crowded shorts: squeeze risk.
    for c in coins:
        if c.funding_rate < NEGATIVE_FUNDING_THRESHOLD:
            out.append(Opportunity(BULLISH, c.symbol, "Negative Funding Rate", "Funding", f"{c.funding_rate:.4f}%"))

    # Crowded longs.
    for c in coins:
        if c.funding_rate > HIGH_FUNDING_THRESHOLD:
            out.append(Opportunity(BEARISH, c.symbol, "High Funding Rate", "Funding", f"{c.funding_rate:.4f}%"))

    # New shorts opening into a falling price.
    for c in coins:
        if c.open_interest_change_1h > OI_RISE_THRESHOLD and c.price_change_1h < PRICE_DROP_THRESHOLD:
            out.append(
                Opportunity(
                    BEARISH,
                    c.symbol,
                    "OI Rising while Price Drops",
                    "OI Div",
                    f"OI +{c.open_interest_change_1h:.1f}%",
                )
            )

    return out
