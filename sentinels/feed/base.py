from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from sentinels.data.models import AssetQuote


class FeedUnavailable(Exception):
    """Primary feed could not deliver a usable quote list (network, status or payload)."""


class QuoteSource(ABC):
    name: str

    @abstractmethod
    def fetch_quotes(self) -> List[AssetQuote]:
        """Return a non-empty quote list or raise FeedUnavailable."""
        raise NotImplementedError
