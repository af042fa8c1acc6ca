"""
Bounded cache of extracted page text.

Keyed by document identity, content version, and page number so that a
rewritten file never serves stale text. Scans are correct with or without
a cache; it only saves repeated extraction across requests.
"""

import threading
from collections import OrderedDict
from typing import Optional, Tuple

from ..core import get_logger, InvalidArgument

logger = get_logger(__name__)

PageKey = Tuple[str, str, int]


class PageTextCache:
    """
    Thread-safe least-recently-used page text cache.

    Workers of one scan read and write concurrently, so every access goes
    through a single lock.
    """

    def __init__(self, max_entries: int = 2048):
        """
        Initialize an empty cache.

        Args:
            max_entries: Entries kept before the least recently used is evicted.
        """
        if max_entries < 1:
            raise InvalidArgument(f"max_entries must be positive, got {max_entries}")

        self.max_entries = max_entries
        self._entries: "OrderedDict[PageKey, str]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(identity: str, version: str, page_number: int) -> PageKey:
        return (identity, version, page_number)

    def get(self, key: PageKey) -> Optional[str]:
        with self._lock:
            text = self._entries.get(key)
            if text is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return text

    def put(self, key: PageKey, text: str) -> None:
        with self._lock:
            self._entries[key] = text
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted page text for {evicted}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
