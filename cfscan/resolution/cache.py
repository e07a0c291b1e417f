"""
Resolution Cache
Hostname -> resolved addresses, shared by every worker for the whole run.
"""

import threading
from typing import Dict, Iterable, Optional, Tuple


class ResolutionCache:
    """
    Thread-safe memoization of DNS answers.

    Every read and write goes through one lock, so no worker ever sees a
    partially written entry. The first insert for a hostname wins and entries
    are never replaced or evicted.

    There is no single-flight coalescing: two workers that miss the same
    hostname at the same time will both query the resolver, and the slower
    one's answer is dropped in favour of the stored entry.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[str, ...]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, hostname: str) -> Optional[Tuple[str, ...]]:
        """Cached addresses for hostname, or None if it was never resolved"""
        with self._lock:
            entry = self._entries.get(hostname)
            if entry is None:
                self.misses += 1
            else:
                self.hits += 1
            return entry

    def insert(self, hostname: str, addresses: Iterable[str]) -> Tuple[str, ...]:
        """
        Store addresses for hostname unless an entry already exists.

        Returns:
            The entry held by the cache after the call
        """
        value = tuple(addresses)
        with self._lock:
            return self._entries.setdefault(hostname, value)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                'entries': len(self._entries),
                'hits': self.hits,
                'misses': self.misses
            }

    def __contains__(self, hostname: str) -> bool:
        with self._lock:
            return hostname in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
