# path_scout/crawler/models.py
"""
Data models and collaborator contracts for the PathScout workers.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol

from path_scout.logger import logger

AddFunc = Callable[..., None]
DoneFunc = Callable[[int], None]


@dataclass(frozen=True, slots=True)
class Result:
    """Outcome of one fetch attempt."""

    url: str
    code: Optional[int] = None
    error: Optional[BaseException] = None
    redir: Optional[str] = None
    length: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.error is None and self.code is not None and self.code != 404

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "code": self.code,
            "error": str(self.error) if self.error is not None else None,
            "redir": self.redir,
            "length": self.length,
        }

    def __str__(self) -> str:
        if self.error is not None:
            return f"{self.url} ERROR {self.error}"
        line = f"{self.code} {self.url}"
        if self.length is not None:
            line += f" ({self.length} bytes)"
        if self.redir:
            line += f" -> {self.redir}"
        return line


class BodyReader(Protocol):
    async def read(self) -> bytes: ...


class PageWorker(Protocol):
    """Optional per-response processing attached to a worker."""

    def eligible(self, response: Any) -> bool: ...

    async def handle(self, url: str, body: BodyReader) -> None: ...


class WorkSource(Protocol):
    async def get(self) -> Optional[str]: ...


class ResultCollector:
    """Single consumer of the results queue; stops on a ``None`` sentinel."""

    def __init__(self, rchan: "asyncio.Queue[Optional[Result]]") -> None:
        self.rchan = rchan
        self.results: List[Result] = []

    async def run(self) -> List[Result]:
        while True:
            result = await self.rchan.get()
            if result is None:
                break
            if result.found:
                logger.info("%s", result)
            else:
                logger.debug("%s", result)
            self.results.append(result)
        return self.results
