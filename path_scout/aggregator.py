# File: path_scout/aggregator.py
"""path_scout.aggregator: Модуль агрегатора результатов сканирования."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, TypedDict, Union

from path_scout.crawler.models import Result


class ResultInfo(TypedDict, total=False):
    """Одна попытка запроса в сериализуемом виде."""

    url: str
    code: Union[int, None]
    error: Union[str, None]
    redir: Union[str, None]
    length: Union[int, None]


@dataclass(slots=True)
class ScanReport:
    """Результаты сканирования: найденные ресурсы, редиректы, ошибки и статистика по кодам."""

    found: List[ResultInfo] = field(default_factory=list)
    redirects: List[ResultInfo] = field(default_factory=list)
    errors: List[ResultInfo] = field(default_factory=list)
    status_counts: Dict[str, int] = field(default_factory=dict)
    total: int = 0

    raw_results: Union[List[Any], None] = None

    def to_dict(self) -> Dict[str, Any]:
        """Словарь без сырых данных."""
        return {
            "found": list(self.found),
            "redirects": list(self.redirects),
            "errors": list(self.errors),
            "status_counts": dict(self.status_counts),
            "total": self.total,
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление ScanReport без сырых данных."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(results: Iterable[Result]) -> ScanReport:
    """Раскладывает Result по разделам отчёта; порядок внутри раздела сохраняется."""
    results = list(results)
    report = ScanReport(raw_results=results)
    codes: Counter[str] = Counter()
    for result in results:
        info: ResultInfo = result.to_dict()  # type: ignore[assignment]
        if result.error is not None:
            report.errors.append(info)
            codes["error"] += 1
            continue
        codes[str(result.code)] += 1
        if result.redir:
            report.redirects.append(info)
        elif result.found:
            report.found.append(info)
    report.status_counts = dict(sorted(codes.items()))
    report.total = len(results)
    return report


__all__ = ["ResultInfo", "ScanReport", "aggregate_results"]
