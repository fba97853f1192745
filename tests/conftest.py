import pytest

from sentinels.data.models import NEUTRAL, AssetQuote, AssetTelemetry
from sentinels.utils.timeframes import LIQUIDATION_KEYS, SIGNAL_KEYS


class ZeroNoise:
    """uniform(a, b) stub returning the midpoint: symmetric noise terms vanish."""

    def uniform(self, a, b):
        return (a + b) / 2.0


class EdgeNoise:
    """uniform(a, b) stub pinned to one end of the interval."""

    def __init__(self, high=True):
        self.high = high

    def uniform(self, a, b):
        return b if self.high else a


def make_quote(symbol="BTC", price=100.0, change=0.0, volume=1_000_000.0, mcap=10_000_000.0, vwap=None):
    return AssetQuote(
        symbol=symbol,
        price=price,
        change_24h=change,
        volume_24h=volume,
        market_cap=mcap,
        vwap_24h=price if vwap is None else vwap,
    )


def make_coin(symbol="XYZ", **overrides):
    base = dict(
        symbol=symbol,
        price=100.0,
        price_change_1h=0.0,
        price_change_4h=0.0,
        price_change_12h=0.0,
        price_change_24h=0.0,
        funding_rate=0.0,
        open_interest=1_000_000.0,
        open_interest_change_1h=0.0,
        open_interest_change_4h=0.0,
        long_ratio=50.0,
        short_ratio=50.0,
        liquidations={tf: 0.0 for tf in LIQUIDATION_KEYS},
        volatility_score=0.0,
        price_history=tuple([100.0] * 24),
        signals={tf: NEUTRAL for tf in SIGNAL_KEYS},
        volume_24h=0.0,
        market_cap=0.0,
        vwap_24h=100.0,
    )
    base.update(overrides)
    return AssetTelemetry(**base)


@pytest.fixture
def zero_noise():
    return ZeroNoise()
