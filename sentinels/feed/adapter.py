from __future__ import annotations

import logging
import random
from typing import Any, List, Optional, Tuple

from sentinels.config import AppConfig
from sentinels.data.models import SOURCE_BACKUP, SOURCE_PRIMARY, AssetQuote
from sentinels.feed.backup import backup_quotes
from sentinels.feed.base import FeedUnavailable, QuoteSource
from sentinels.feed.coincap import CoinCapClient

logger = logging.getLogger("sentinels")


class FeedAdapter:
    """
    Primary quote source with a bundled fallback.
    fetch_quotes() never raises: the returned source tag is the only failure signal.
    """

    def __init__(self, primary: QuoteSource, rng: Optional[Any] = None) -> None:
        self.primary = primary
        self.rng = rng if rng is not None else random.Random()
        self.last_error: Optional[str] = None

    @classmethod
    def from_config(cls, cfg: AppConfig, rng: Optional[Any] = None) -> "FeedAdapter":
        client = CoinCapClient(cfg.feed_url, limit=cfg.feed_limit, timeout_sec=cfg.feed_timeout_sec)
        return cls(client, rng=rng)

    def fetch_quotes(self) -> Tuple[List[AssetQuote], str]:
        try:
            quotes = self.primary.fetch_quotes()
            if not quotes:
                raise FeedUnavailable("empty quote list")
        except FeedUnavailable as e:
            return self._backup(str(e))
        except Exception as e:
            # Unknown client failure still degrades to backup; the pipeline has no fatal path.
            logger.exception("FEED_UNEXPECTED | src=%s", self.primary.name)
            return self._backup(f"unexpected: {e}")

        self.last_error = None
        return quotes, SOURCE_PRIMARY

    def _backup(self, reason: str) -> Tuple[List[AssetQuote], str]:
        if reason != self.last_error:
            logger.warning("FEED_BACKUP | src=%s | reason=%s", self.primary.name, reason)
        else:
            logger.debug("FEED_BACKUP | src=%s | reason=%s", self.primary.name, reason)
        self.last_error = reason
        return backup_quotes(self.rng), SOURCE_BACKUP
