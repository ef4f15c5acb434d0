# File: path_scout/crawler/__init__.py
"""path_scout.crawler: пул воркеров, HTTP-транспорт и очередь задач."""

from .client import Client, ClientFactory, FetchResponse, TransportError
from .html_worker import HTMLWorker
from .models import PageWorker, Result, ResultCollector
from .worker import Worker, start_workers
from .workqueue import WorkQueue

__all__ = [
    "Client",
    "ClientFactory",
    "FetchResponse",
    "HTMLWorker",
    "PageWorker",
    "Result",
    "ResultCollector",
    "TransportError",
    "WorkQueue",
    "Worker",
    "start_workers",
]
