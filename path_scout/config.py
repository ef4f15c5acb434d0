# === FILE: path_scout/config.py ===
"""
Модуль для загрузки и валидации настроек сканера PathScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)


class ScanSettings(BaseModel):
    """Настройки одного запуска сканирования. Не меняются после старта пула."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Корневой URL для сканирования.")
    workers: int = Field(8, ge=1, description="Число параллельных воркеров.")
    extensions: List[str] = Field(default_factory=list, description="Расширения для файлов без расширения.")
    mangle: bool = Field(True, description="Проверять backup/swap-варианты найденных файлов.")
    spider_codes: List[int] = Field(
        default_factory=lambda: [200, 401, 403],
        description="HTTP-коды, при которых продолжаем обход.",
    )
    sleep_time: float = Field(0.0, ge=0, description="Пауза после каждого запроса (секунд).")
    parse_html: bool = Field(True, description="Извлекать ссылки из HTML-ответов.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("PathScout/0.1", min_length=1, description="Заголовок User-Agent.")
    proxy: Optional[str] = Field(None, description="HTTP-прокси для всех запросов.")
    wordlist: Optional[str] = Field(None, description="Путь к словарю для перебора директорий.")

    @field_validator("extensions", mode="before")
    def _normalize_extensions(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            cleaned = [str(ext).strip().lstrip(".") for ext in v]
            return [ext for ext in cleaned if ext]
        return v

    @field_validator("spider_codes")
    def _check_codes(cls, v: List[int]) -> List[int]:
        bad = [code for code in v if not 100 <= code <= 599]
        if bad:
            raise ValueError(f"Неверные HTTP-коды: {bad}")
        return v

    @model_validator(mode="after")
    def _check_wordlist_exists(self) -> ScanSettings:
        if self.wordlist is not None and not Path(self.wordlist).is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), self.wordlist)
        return self

    def keep_spidering(self, code: int) -> bool:
        """Продолжать ли обход для данного HTTP-кода."""
        return code in self.spider_codes


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def _read_file(path_obj: Path) -> dict[str, Any]:
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(
    path: Union[str, Path, None],
    overrides: Optional[Mapping[str, Any]] = None,
) -> ScanSettings:
    """
    Читает YAML или JSON, накладывает overrides (значения None пропускаются)
    и возвращает проверенный объект ScanSettings.

    Без path используется configs/default.yaml, если он существует,
    иначе настройки собираются только из overrides.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    return ScanSettings(**data)


__all__ = ["ScanSettings", "load_config"]
