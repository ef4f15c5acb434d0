"""Wordlist expansion of directory URLs."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Union
from urllib.parse import urlsplit

from path_scout.logger import logger
from path_scout.utils import read_wordlist, replace_path, url_is_dir


class Expander:
    """Turns a directory URL into itself plus one candidate per wordlist entry."""

    def __init__(self, words: Sequence[str]) -> None:
        """Store the words without leading slashes; empty entries are dropped."""
        self.words: List[str] = [w.lstrip("/") for w in words if w.lstrip("/")]

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Expander":
        """Build an Expander from a wordlist file."""
        return cls(read_wordlist(path))

    def expand(self, url: str) -> List[str]:
        """Return ``[url]`` for files, ``[url, url+word, ...]`` for directories."""
        if not url_is_dir(url):
            return [url]
        base = urlsplit(url).path or "/"
        expanded = [url] + [replace_path(url, base + word) for word in self.words]
        logger.debug("Expanded %s into %d candidates", url, len(expanded) - 1)
        return expanded

    def __len__(self) -> int:
        return len(self.words)
