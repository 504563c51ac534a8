from __future__ import annotations

import asyncio
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from typing import Any

from issuer_governance.observability.logging import get_logger

Loader = Callable[[], Awaitable[Any]]

DEFAULT_MAX_ENTRIES = 256


def fingerprint(*parts: object) -> str:
    """Stable cache key, e.g. ``votes/7/osmo1.../10``; ``None`` parts render as ``-``."""
    return "/".join("-" if part is None else str(part) for part in parts)


class QueryCache:
    """Last-good-result cache keyed by request fingerprint.

    Reads return the cached value unless it was revalidated since, concurrent
    reads of the same fingerprint share one in-flight load, and failed loads
    are never cached. Revalidated entries are dropped, and once more than
    ``max_entries`` results are held the least recently read one is evicted.
    """

    def __init__(self, *, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, Any] = OrderedDict()
        self._inflight: dict[str, asyncio.Task[Any]] = {}
        self._logger = get_logger("query_cache")

    def __len__(self) -> int:
        return len(self._entries)

    def is_fresh(self, key: str) -> bool:
        return key in self._entries

    async def get(self, key: str, loader: Loader, *, force: bool = False) -> Any:
        if force:
            self.revalidate(key)

        if key in self._entries:
            self._entries.move_to_end(key)
            return self._entries[key]

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(loader())
            self._inflight[key] = task
            task.add_done_callback(lambda done, key=key: self._settle(key, done))

        # Shielded so one cancelled reader does not cancel the shared load.
        return await asyncio.shield(task)

    def _settle(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._inflight.get(key) is not task:
            # Superseded by a revalidation while loading.
            return
        del self._inflight[key]
        if task.cancelled() or task.exception() is not None:
            return
        self._entries[key] = task.result()
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self._logger.debug("cache_evicted", fingerprint=evicted)

    def revalidate(self, key: str) -> int:
        """Drop ``key`` and every fingerprint nested under it."""
        prefix = f"{key}/"
        matched = [k for k in self._entries if k == key or k.startswith(prefix)]
        for entry_key in matched:
            del self._entries[entry_key]
        for inflight_key in [k for k in self._inflight if k == key or k.startswith(prefix)]:
            del self._inflight[inflight_key]
        self._logger.debug("cache_revalidated", fingerprint=key, entries=len(matched))
        return len(matched)
