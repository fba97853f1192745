from __future__ import annotations

import math
from dataclasses import fields, is_dataclass
from typing import Any, Dict

from sentinels.data.models import MarketSnapshot
from sentinels.analytics.rankings import best_setup, format_usd


def snapshot_summary(snap: MarketSnapshot) -> Dict[str, Any]:
    """
    Compact, log-friendly view of one cycle.
    """
    best = best_setup(snap.coins)
    liq = snap.liquidations
    return {
        "source": snap.source,
        "coins": len(snap.coins),
        "fear_greed": snap.sentiment.fear_greed_index,
        "btc_dom": round(snap.sentiment.btc_dominance, 2),
        "mcap": format_usd(snap.sentiment.total_market_cap),
        "liq_24h": format_usd(liq.display_value("24h")) if "24h" in liq.buckets else None,
        "liq_filter": liq.filter,
        "opportunities": len(snap.opportunities),
        "best": best.symbol if best else None,
        "best_4h": best.signals.get("4h") if best else None,
    }


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


def to_wire(obj: Any) -> Any:
    """
    Dataclasses -> camelCase dicts, tuples -> lists, NaN/inf -> None.
    Mapping keys (symbols, timeframe names) are kept verbatim.
    """
    if obj is None or isinstance(obj, (str, bool, int)):
        return obj
    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if is_dataclass(obj) and not isinstance(obj, type):
        return {_camel(f.name): to_wire(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, dict):
        return {str(k): to_wire(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_wire(x) for x in obj]
    raise TypeError(f"cannot serialize {type(obj).__name__}")


def snapshot_payload(snap: MarketSnapshot) -> Dict[str, Any]:
    """Full wire view of one published snapshot; strict-JSON serializable."""
    return to_wire(snap)
