# === FILE: path_scout/parser/html_parser.py ===
"""HTML parsing utilities for PathScout.

:func:`extract_links` pulls every URL-bearing attribute the scanner cares
about out of a page:

* ``href`` of ``<a>``, ``<link>`` and ``<area>``;
* ``src`` of ``<img>``, ``<script>``, ``<iframe>``, ``<frame>`` and ``<source>``;
* ``action`` of ``<form>``.

Links are resolved against the page URL, fragments are dropped and only
http(s) URLs are kept. Scope filtering is left to the work queue.
"""
from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("LINK_ATTRIBUTES", "extract_links")

LINK_ATTRIBUTES: dict[str, str] = {
    "a": "href",
    "link": "href",
    "area": "href",
    "img": "src",
    "script": "src",
    "iframe": "src",
    "frame": "src",
    "source": "src",
    "form": "action",
}


def extract_links(html: str | bytes, base_url: str) -> list[str]:
    """Return absolute, deduplicated links found in *html*, in document order."""
    soup = BeautifulSoup(html, "html.parser")

    base_tag = soup.find("base", href=True)
    if isinstance(base_tag, Tag) and isinstance(base_tag.get("href"), str):
        base_url = urljoin(base_url, base_tag["href"].strip())  # type: ignore[union-attr]

    seen: set[str] = set()
    links: list[str] = []
    for tag in soup.find_all(list(LINK_ATTRIBUTES)):
        if not isinstance(tag, Tag):
            continue
        value = tag.get(LINK_ATTRIBUTES[tag.name])
        if not isinstance(value, str):
            continue
        raw = value.strip()
        if not raw or raw.startswith(("mailto:", "javascript:", "data:", "tel:")):
            continue
        absolute, _ = urldefrag(urljoin(base_url, raw))
        if urlparse(absolute).scheme not in ("http", "https"):
            continue
        if absolute not in seen:
            seen.add(absolute)
            links.append(absolute)
    return links
