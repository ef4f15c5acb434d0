# File: path_scout/bruteforce/__init__.py
"""path_scout.bruteforce: генерация кандидатов для перебора (словарь и mangle-варианты)."""

from .expander import Expander
from .mangle import MANGLE_RULES, mangle

__all__ = ["Expander", "MANGLE_RULES", "mangle"]
