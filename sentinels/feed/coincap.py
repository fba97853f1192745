from __future__ import annotations

import json
import logging
import math
import threading
import time
from typing import Any, Dict, List, Optional

import requests

from sentinels.data.models import AssetQuote
from sentinels.feed.base import FeedUnavailable, QuoteSource

logger = logging.getLogger("sentinels")

CHUNK_SIZE = 1024


def _to_float(raw: Any) -> Optional[float]:
    # CoinCap encodes every number as a string; null is common for vwap/market cap.
    if raw is None or isinstance(raw, bool):
        return None
    try:
        x = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(x):
        return None
    return x


def parse_asset_row(row: Any) -> Optional[AssetQuote]:
    """
    Convert one upstream asset object into an AssetQuote.
    Returns None for rows that cannot be priced (missing symbol, non-positive price).
    """
    if not isinstance(row, dict):
        return None
    symbol = str(row.get("symbol") or "").strip().upper()
    if not symbol:
        return None

    price = _to_float(row.get("priceUsd"))
    if price is None or price <= 0:
        return None

    change = _to_float(row.get("changePercent24Hr")) or 0.0
    volume = _to_float(row.get("volumeUsd24Hr"))
    mcap = _to_float(row.get("marketCapUsd"))
    vwap = _to_float(row.get("vwap24Hr"))

    return AssetQuote(
        symbol=symbol,
        price=price,
        change_24h=change,
        volume_24h=max(0.0, volume) if volume is not None else 0.0,
        market_cap=max(0.0, mcap) if mcap is not None else 0.0,
        vwap_24h=vwap if vwap is not None and vwap > 0 else price,
    )


def parse_assets_payload(payload: Any) -> List[AssetQuote]:
    if not isinstance(payload, dict):
        raise FeedUnavailable("payload is not an object")
    data = payload.get("data")
    if not isinstance(data, list) or not data:
        raise FeedUnavailable("missing or empty 'data' array")

    out: List[AssetQuote] = []
    seen = set()
    for row in data:
        q = parse_asset_row(row)
        if q is None or q.symbol in seen:
            continue
        seen.add(q.symbol)
        out.append(q)

    if not out:
        raise FeedUnavailable("no parseable asset rows")
    if len(out) < len(data):
        logger.debug("FEED_ROWS_SKIPPED | kept=%d of %d", len(out), len(data))
    return out


class CoinCapClient(QuoteSource):
    """
    GET the assets endpoint with a hard wall-clock budget.

    requests' timeout only bounds connect and each socket read, so a server
    that trickles bytes can hold a plain GET open indefinitely. The download
    runs on a daemon worker that the caller joins for at most timeout_sec.
    """

    name = "coincap"

    def __init__(self, url: str, limit: int = 20, timeout_sec: float = 2.0) -> None:
        self.url = url
        self.limit = limit
        self.timeout_sec = timeout_sec

    def _download(self, deadline: float) -> Any:
        params: Dict[str, Any] = {"limit": self.limit}
        r = requests.get(self.url, params=params, timeout=self.timeout_sec, stream=True)
        try:
            r.raise_for_status()
            body = bytearray()
            for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise FeedUnavailable(f"timeout after {self.timeout_sec}s")
                body.extend(chunk)
        finally:
            r.close()
        return json.loads(bytes(body))

    def fetch_quotes(self) -> List[AssetQuote]:
        deadline = time.monotonic() + self.timeout_sec
        result: Dict[str, Any] = {}

        def _work() -> None:
            try:
                result["payload"] = self._download(deadline)
            except Exception as e:
                result["error"] = e

        worker = threading.Thread(target=_work, name="coincap-fetch", daemon=True)
        worker.start()
        worker.join(self.timeout_sec)
        if worker.is_alive():
            # Abandoned; the worker exits on its own once the socket drains or times out.
            raise FeedUnavailable(f"timeout after {self.timeout_sec}s")

        err = result.get("error")
        if isinstance(err, FeedUnavailable):
            raise err
        if isinstance(err, requests.Timeout):
            raise FeedUnavailable(f"timeout after {self.timeout_sec}s") from err
        if isinstance(err, requests.RequestException):
            raise FeedUnavailable(f"request failed: {err}") from err
        if isinstance(err, ValueError):
            raise FeedUnavailable("response is not JSON") from err
        if err is not None:
            raise err

        return parse_assets_payload(result["payload"])
