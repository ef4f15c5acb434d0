# File: path_scout/utils.py
"""path_scout.utils: URL helpers shared by the workers and the work queue, plus wordlist loading."""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import List, Sequence, Union
from urllib.parse import urldefrag, urlsplit, urlunsplit

from path_scout.logger import logger

__all__: Sequence[str] = (
    "url_is_dir",
    "url_has_extension",
    "with_extension",
    "split_path",
    "replace_path",
    "normalize_url",
    "read_wordlist",
)


def url_is_dir(url: str) -> bool:
    """True for directory-style URLs: path ends in ``/`` (an empty path is the root)."""
    path = urlsplit(url).path
    return path == "" or path.endswith("/")


def url_has_extension(url: str) -> bool:
    """True if the last path segment contains a dot (``.htaccess`` counts)."""
    return "." in posixpath.basename(urlsplit(url).path)


def replace_path(url: str, path: str) -> str:
    """Return a copy of *url* with its path replaced; query is kept, fragment dropped."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def with_extension(url: str, ext: str) -> str:
    """Append ``.ext`` to the path of *url*."""
    return replace_path(url, f"{urlsplit(url).path}.{ext}")


def split_path(url: str) -> tuple[str, str] | None:
    """Split the URL path at its last ``/`` into (dirname, basename), or None if there is none."""
    path = urlsplit(url).path
    pos = path.rfind("/")
    if pos == -1:
        return None
    return path[:pos], path[pos + 1:]


def normalize_url(url: str) -> str:
    """Drop the fragment, lowercase scheme and host, give an empty path a ``/``."""
    url, _ = urldefrag(url)
    parts = urlsplit(url)
    path = parts.path or "/"
    normalized = urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))
    logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def read_wordlist(path: Union[str, Path]) -> List[str]:
    """Читает wordlist, возвращает непустые строки без пробелов и комментариев."""
    p = Path(path)
    if not p.exists():
        logger.error("Wordlist not found: %s", p)
        raise FileNotFoundError(f"Wordlist file not found: {p}")
    words = [
        line.strip()
        for line in p.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]
    logger.debug("Loaded %d entries from wordlist %s", len(words), p)
    return words
