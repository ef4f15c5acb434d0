# File: path_scout/engine.py
"""path_scout.engine: Orchestration layer для запуска сканирования и агрегации результатов."""

from __future__ import annotations

import asyncio
import time
from typing import List, Optional

from path_scout.aggregator import ScanReport, aggregate_results
from path_scout.bruteforce.expander import Expander
from path_scout.config import ScanSettings, load_config
from path_scout.crawler.client import ClientFactory
from path_scout.crawler.models import Result, ResultCollector
from path_scout.crawler.worker import start_workers
from path_scout.crawler.workqueue import WorkQueue
from path_scout.logger import logger

__all__ = ["Engine", "start_scan"]


async def start_scan(cfg: ScanSettings) -> List[Result]:
    """
    Запускает пул воркеров от cfg.base_url и возвращает все Result в порядке получения.

    Parameters
    ----------
    cfg : ScanSettings
        Настройки сканирования.
    """
    base_url = str(cfg.base_url)
    logger.info("Старт сканирования: %s (%d воркеров)", base_url, cfg.workers)
    start = time.monotonic()

    expander = Expander.from_file(cfg.wordlist) if cfg.wordlist else None
    queue = WorkQueue([base_url], expander=expander)
    rchan: asyncio.Queue[Optional[Result]] = asyncio.Queue()
    collector = ResultCollector(rchan)
    collector_task = asyncio.create_task(collector.run())
    factory = ClientFactory(cfg)

    queue.seed(base_url)
    workers = start_workers(cfg, factory, queue, queue.add, queue.done, rchan)
    try:
        await asyncio.gather(*(w.wait() for w in workers))
    finally:
        for w in workers:
            w.stop()
        # уже взятые URL дорабатываются до закрытия сессий
        await asyncio.gather(*(w.wait() for w in workers), return_exceptions=True)
        await rchan.put(None)
        await collector_task
        await factory.close_all()

    duration = time.monotonic() - start
    logger.info(
        "Завершено: %d запросов, %d URL в очереди за %.2f с",
        len(collector.results),
        len(queue.seen),
        duration,
    )
    return collector.results


class Engine:
    """Фасад для CLI и тестов: загрузка конфига, запуск сканирования и агрегация результатов."""

    @staticmethod
    def load_config(path: Optional[str]) -> ScanSettings:
        """Загружает конфиг из YAML/JSON."""
        return load_config(path)

    def __init__(self, config: ScanSettings) -> None:
        self.config = config

    def start_scan(self, scan_timeout: Optional[float] = None) -> ScanReport:
        """Запускает сканирование (с необязательным общим таймаутом) и возвращает агрегированный отчёт."""
        logger.info("Starting scan…")
        try:
            if scan_timeout:
                results = asyncio.run(asyncio.wait_for(start_scan(self.config), timeout=scan_timeout))
            else:
                results = asyncio.run(start_scan(self.config))
        except asyncio.TimeoutError:
            logger.error("Scanning did not finish within %s seconds", scan_timeout)
            raise
        except Exception as exc:
            logger.error("Scanning failed: %s", exc)
            raise
        return aggregate_results(results)

    @staticmethod
    def aggregate_results(results: List[Result]) -> ScanReport:
        """Агрегирует Result в объект ScanReport через path_scout.aggregator."""
        return aggregate_results(results)
