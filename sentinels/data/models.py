from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

# Directional signal levels, strongest bullish first.
STRONG_BUY = "STRONG_BUY"
BUY = "BUY"
NEUTRAL = "NEUTRAL"
SELL = "SELL"
STRONG_SELL = "STRONG_SELL"
SIGNAL_DIRECTIONS: Tuple[str, ...] = (STRONG_BUY, BUY, NEUTRAL, SELL, STRONG_SELL)

SOURCE_PRIMARY = "PRIMARY"
SOURCE_BACKUP = "BACKUP"

BULLISH = "BULLISH"
BEARISH = "BEARISH"


@dataclass(frozen=True)
class AssetQuote:
    symbol: str
    price: float
    change_24h: float      # percent, signed
    volume_24h: float      # quote currency
    market_cap: float
    vwap_24h: float        # equals price when the feed omits it


@dataclass(frozen=True)
class AssetTelemetry:
    symbol: str
    price: float
    price_change_1h: float
    price_change_4h: float
    price_change_12h: float
    price_change_24h: float
    funding_rate: float                 # percent per interval (modeled)
    open_interest: float                # quote currency (modeled)
    open_interest_change_1h: float      # percent
    open_interest_change_4h: float      # percent
    long_ratio: float                   # 0-100
    short_ratio: float                  # 100 - long_ratio
    liquidations: Dict[str, float]      # "1h"|"4h"|"12h"|"24h" -> quote currency
    volatility_score: float
    price_history: Tuple[float, ...]    # oldest first, sparkline only
    signals: Dict[str, str]             # "5m"|"15m"|"1h"|"4h" -> SIGNAL_DIRECTIONS
    volume_24h: float = 0.0
    market_cap: float = 0.0
    vwap_24h: float = 0.0


@dataclass(frozen=True)
class MarketSentiment:
    fear_greed_index: int
    btc_dominance: float
    total_market_cap: float
    total_volume_24h: float


@dataclass(frozen=True)
class Opportunity:
    type: str      # "BULLISH" | "BEARISH"
    coin: str
    reason: str
    metric: str
    value: str


@dataclass(frozen=True)
class LiquidationBucket:
    total: float
    long: float
    short: float

    def display(self, filter_: str) -> float:
        if filter_ == "LONG":
            return self.long
        if filter_ == "SHORT":
            return self.short
        return self.total


@dataclass(frozen=True)
class LiquidationSummary:
    """
    Per-timeframe liquidation roll-up.
    All three figures are always present; `filter` only picks the displayed one.
    """
    buckets: Dict[str, LiquidationBucket]
    filter: str = "ALL"

    def display_value(self, timeframe: str) -> float:
        return self.buckets[timeframe].display(self.filter)


@dataclass(frozen=True)
class TradeSetup:
    coin: str
    direction: str   # "LONG" | "SHORT"
    entry: str
    target: str
    stop_loss: str
    rationale: str


@dataclass(frozen=True)
class MarketAnalysis:
    summary: str
    key_risks: List[str]
    outlook: str     # "Bullish" | "Bearish" | "Neutral"
    top_trade_setups: List[TradeSetup] = field(default_factory=list)
    degraded: bool = False


@dataclass(frozen=True)
class MarketSnapshot:
    """
    Everything one refresh cycle publishes. Replaced as a whole, never patched.
    """
    coins: List[AssetTelemetry]
    sentiment: MarketSentiment
    source: str                          # "PRIMARY" | "BACKUP"
    liquidations: LiquidationSummary
    opportunities: List[Opportunity]
    ts: Optional[int] = None
