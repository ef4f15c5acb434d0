# path_scout/crawler/workqueue.py
"""
Deduplicating work queue shared by all workers.

Every accepted URL is one unit of outstanding work; workers report finished
units through :meth:`WorkQueue.done`. When nothing is outstanding the queue
closes and :meth:`WorkQueue.get` returns ``None`` to every consumer.
"""
from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional, Set
from urllib.parse import urlsplit

from path_scout.bruteforce.expander import Expander
from path_scout.logger import logger
from path_scout.utils import normalize_url

_CLOSED = None


class WorkQueue:
    """Work source and sink for the worker pool."""

    def __init__(self, scope: Iterable[str], expander: Optional[Expander] = None) -> None:
        self.scope: List[tuple[str, str]] = []
        for url in scope:
            parts = urlsplit(normalize_url(url))
            prefix = parts.path if parts.path.endswith("/") else parts.path.rsplit("/", 1)[0] + "/"
            self.scope.append((parts.netloc, prefix))
        self.expander = expander
        self.seen: Set[str] = set()
        self.pending = 0
        self.closed = False
        self._queue: asyncio.Queue[Optional[str]] = asyncio.Queue()

    def in_scope(self, url: str) -> bool:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https"):
            return False
        return any(parts.netloc == host and parts.path.startswith(prefix) for host, prefix in self.scope)

    def add(self, *urls: str) -> int:
        """Enqueue new URLs; returns how many were accepted."""
        if self.closed:
            logger.debug("Queue closed, ignoring %d URL(s)", len(urls))
            return 0
        accepted = 0
        for raw in urls:
            url = normalize_url(raw)
            if not self.in_scope(url):
                logger.debug("Out of scope: %s", url)
                continue
            candidates = self.expander.expand(url) if self.expander else [url]
            for candidate in candidates:
                if candidate in self.seen:
                    continue
                self.seen.add(candidate)
                self.pending += 1
                accepted += 1
                self._queue.put_nowait(candidate)
        return accepted

    def seed(self, *urls: str) -> int:
        """Add the initial URLs; closes at once if none was accepted."""
        accepted = self.add(*urls)
        if not self.pending:
            self.close()
        return accepted

    def done(self, n: int) -> None:
        """Mark *n* units of work complete."""
        self.pending -= n
        if self.pending <= 0:
            self.pending = 0
            self.close()

    def close(self) -> None:
        if self.closed:
            return
        logger.debug("Work queue closed after %d URL(s)", len(self.seen))
        self.closed = True
        self._queue.put_nowait(_CLOSED)

    async def get(self) -> Optional[str]:
        """Next URL to scan, or ``None`` once the queue is closed."""
        item = await self._queue.get()
        if item is _CLOSED:
            # leave the marker for the other consumers
            self._queue.put_nowait(_CLOSED)
        return item

    def qsize(self) -> int:
        return self._queue.qsize()
