# File: path_scout/bruteforce/mangle.py
"""Filename mangling: candidate names for backup and swap copies of a file."""

from __future__ import annotations

from typing import List, Sequence

MANGLE_RULES: Sequence[str] = (
    ".{}.swp",  # vim swap file
    "{}~",  # editor backup
    "{}.bak",
    "{}.orig",
)


def mangle(basename: str) -> List[str]:
    """Return one candidate per rule in :data:`MANGLE_RULES`, in rule order."""
    return [rule.format(basename) for rule in MANGLE_RULES]
