from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class TF:
    name: str
    seconds: int

    @property
    def hours(self) -> float:
        return self.seconds / 3600.0


TF_5M = TF("5m", 5 * 60)
TF_15M = TF("15m", 15 * 60)
TF_1H = TF("1h", 60 * 60)
TF_4H = TF("4h", 4 * 60 * 60)
TF_12H = TF("12h", 12 * 60 * 60)
TF_24H = TF("24h", 24 * 60 * 60)

# Timeframes carrying a directional signal per asset.
SIGNAL_TIMEFRAMES: Tuple[TF, ...] = (TF_5M, TF_15M, TF_1H, TF_4H)

# Timeframes carrying modeled liquidation volume per asset.
LIQUIDATION_TIMEFRAMES: Tuple[TF, ...] = (TF_1H, TF_4H, TF_12H, TF_24H)

SIGNAL_KEYS: Tuple[str, ...] = tuple(tf.name for tf in SIGNAL_TIMEFRAMES)
LIQUIDATION_KEYS: Tuple[str, ...] = tuple(tf.name for tf in LIQUIDATION_TIMEFRAMES)
