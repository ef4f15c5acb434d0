# === FILE: path_scout/crawler/worker.py ===
"""
Workers load URLs from the work queue, request them and report every attempt.

A pool of several workers is used because most of the time is spent waiting
on the network. Each worker owns its own HTTP client.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional

from path_scout.bruteforce.mangle import mangle
from path_scout.config import ScanSettings
from path_scout.crawler.client import ClientFactory, TransportError
from path_scout.crawler.html_worker import HTMLWorker
from path_scout.crawler.models import AddFunc, DoneFunc, PageWorker, Result, WorkSource
from path_scout.logger import logger
from path_scout.utils import replace_path, split_path, url_has_extension, url_is_dir, with_extension

__all__ = ("Worker", "start_workers")


class Worker:
    """Consumes URLs from *src* until it closes or :meth:`stop` is called."""

    def __init__(
        self,
        settings: ScanSettings,
        factory: ClientFactory,
        src: WorkSource,
        adder: AddFunc,
        done: DoneFunc,
        rchan: asyncio.Queue,
    ) -> None:
        self.client = factory.get()
        self.settings = settings
        self.src = src
        self.adder = adder
        self.done = done
        self.rchan = rchan
        self.page_worker: Optional[PageWorker] = None
        self._stop = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    def set_page_worker(self, page_worker: Optional[PageWorker]) -> None:
        self.page_worker = page_worker

    async def run(self) -> None:
        while not self._stop.is_set():
            getter = asyncio.ensure_future(self.src.get())
            stopper = asyncio.ensure_future(self._stop.wait())
            finished, _ = await asyncio.wait({getter, stopper}, return_when=asyncio.FIRST_COMPLETED)
            stopper.cancel()
            if getter not in finished:
                getter.cancel()
                return
            task = getter.result()
            if task is None:
                return
            await self.handle_url(task)

    def run_in_background(self) -> asyncio.Task:
        self._task = asyncio.create_task(self.run())
        return self._task

    def stop(self) -> None:
        """Ask the worker to exit before its next dequeue."""
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._task is not None and self._task.done()

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    async def handle_url(self, task: str) -> None:
        logger.debug("Trying Raw URL (unmangled): %s", task)
        try:
            with_mangle = await self.try_url(task)
            if not url_is_dir(task):
                if with_mangle:
                    await self.try_mangle_url(task)
                if not url_has_extension(task):
                    for ext in self.settings.extensions:
                        variant = with_extension(task, ext)
                        if await self.try_url(variant):
                            await self.try_mangle_url(variant)
        finally:
            self.done(1)

    async def try_mangle_url(self, task: str) -> None:
        if not self.settings.mangle:
            return
        parts = split_path(task)
        if parts is None:
            return
        dirname, basename = parts
        for newname in mangle(basename):
            await self.try_url(replace_path(task, f"{dirname}/{newname}"))

    async def try_url(self, task: str) -> bool:
        """Fetch *task* once and report it. Returns True if its status is spiderable."""
        logger.info("Trying: %s", task)
        keep_going = False
        try:
            resp = await self.client.request_url(task)
        except TransportError as exc:
            await self.rchan.put(Result(url=task, code=exc.status, error=exc))
        else:
            async with resp:
                if url_is_dir(task) and self.settings.keep_spidering(resp.status):
                    logger.debug("Referring %s back for spidering.", task)
                    self.adder(task)
                if resp.redirect is not None:
                    logger.debug("Referring redirect %s back.", resp.redirect)
                    self.adder(resp.redirect)
                if self.page_worker is not None and self.page_worker.eligible(resp):
                    await self.page_worker.handle(task, resp)
                await self.rchan.put(
                    Result(url=task, code=resp.status, redir=resp.redirect, length=resp.content_length)
                )
                keep_going = self.settings.keep_spidering(resp.status)
        if self.settings.sleep_time:
            await asyncio.sleep(self.settings.sleep_time)
        return keep_going


def start_workers(
    settings: ScanSettings,
    factory: ClientFactory,
    src: WorkSource,
    adder: AddFunc,
    done: DoneFunc,
    rchan: asyncio.Queue,
) -> List[Worker]:
    """Start ``settings.workers`` workers in the running event loop."""
    workers: List[Worker] = []
    for _ in range(settings.workers):
        worker = Worker(settings, factory, src, adder, done, rchan)
        if settings.parse_html:
            worker.set_page_worker(HTMLWorker(adder))
        worker.run_in_background()
        workers.append(worker)
    logger.debug("Started %d worker(s)", len(workers))
    return workers
