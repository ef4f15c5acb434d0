"""path_scout.parser: разбор HTML-ответов."""

from .html_parser import extract_links

__all__ = ["extract_links"]
