from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from sentinels.data.models import STRONG_BUY, STRONG_SELL, AssetTelemetry
from sentinels.utils.timeframes import LIQUIDATION_KEYS

FUNDING_HOT = 0.02
MAJORS: Tuple[str, ...] = ("BTC", "ETH", "SOL")


@dataclass(frozen=True)
class FundingRow:
    symbol: str
    funding_rate: float
    flag: Optional[str]   # "HIGH_POS" | "HIGH_NEG" | None


@dataclass(frozen=True)
class TimeframeMetric:
    symbol: str
    liquidations: float
    price_change: float


def funding_heatmap(telemetry: Iterable[AssetTelemetry], limit: int = 8) -> List[FundingRow]:
    ranked = sorted(telemetry, key=lambda c: abs(c.funding_rate), reverse=True)[:limit]
    rows: List[FundingRow] = []
    for c in ranked:
        flag = None
        if c.funding_rate > FUNDING_HOT:
            flag = "HIGH_POS"
        elif c.funding_rate < -FUNDING_HOT:
            flag = "HIGH_NEG"
        rows.append(FundingRow(c.symbol, c.funding_rate, flag))
    return rows


def signal_matrix(
    telemetry: Iterable[AssetTelemetry],
    majors: Sequence[str] = MAJORS,
    alt_limit: int = 10,
) -> Tuple[List[AssetTelemetry], List[AssetTelemetry]]:
    coins = list(telemetry)
    major_set = {m.upper() for m in majors}
    top = [c for c in coins if c.symbol.upper() in major_set]
    alts = [c for c in coins if c.symbol.upper() not in major_set][:alt_limit]
    return top, alts


def best_setup(telemetry: Iterable[AssetTelemetry]) -> Optional[AssetTelemetry]:
    """
    Strongest 4h conviction with the largest 24h move; first asset when nothing is strong.
    """
    coins = list(telemetry)
    if not coins:
        return None
    strong = [c for c in coins if c.signals.get("4h") in (STRONG_BUY, STRONG_SELL)]
    if not strong:
        return coins[0]
    return max(strong, key=lambda c: abs(c.price_change_24h))


def timeframe_metrics(telemetry: Iterable[AssetTelemetry], timeframe: str) -> List[TimeframeMetric]:
    if timeframe not in LIQUIDATION_KEYS:
        raise ValueError(f"Unsupported timeframe: {timeframe}")
    change_attr = f"price_change_{timeframe}"
    return [
        TimeframeMetric(
            symbol=c.symbol,
            liquidations=float(c.liquidations.get(timeframe, 0.0) or 0.0),
            price_change=float(getattr(c, change_attr)),
        )
        for c in telemetry
    ]


def format_usd(value: float) -> str:
    if value >= 1_000_000:
        return f"${value / 1_000_000:.2f}M"
    if value >= 1_000:
        return f"${value / 1_000:.2f}K"
    return f"${value:.2f}"
