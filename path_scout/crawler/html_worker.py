# path_scout/crawler/html_worker.py
"""
Page worker that feeds links found in HTML responses back into the work queue.
"""
from __future__ import annotations

from typing import Any

from path_scout.crawler.client import TransportError
from path_scout.crawler.models import AddFunc, BodyReader
from path_scout.logger import logger
from path_scout.parser.html_parser import extract_links

# bodies larger than this are not parsed
MAX_HTML_SIZE = 5 * 1024 * 1024


class HTMLWorker:
    """Extracts links from HTML bodies and passes them to *adder*."""

    def __init__(self, adder: AddFunc) -> None:
        self.adder = adder

    def eligible(self, response: Any) -> bool:
        if getattr(response, "content_type", "") != "text/html":
            return False
        length = getattr(response, "content_length", None)
        return length is None or length <= MAX_HTML_SIZE

    async def handle(self, url: str, body: BodyReader) -> None:
        try:
            data = await body.read()
        except TransportError as exc:
            # the attempt itself is still reported by the worker
            logger.debug("Could not read body of %s: %s", url, exc)
            return
        if len(data) > MAX_HTML_SIZE:
            logger.debug("Skipping oversized HTML body of %s", url)
            return
        links = extract_links(data, url)
        logger.debug("Found %d link(s) in %s", len(links), url)
        if links:
            self.adder(*links)
