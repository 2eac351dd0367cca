# === FILE: agent_ready/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера AgentReady.
Используется Pydantic для описания схемы и проверки данных.

Ключи принимаются в snake_case (``max_depth``) и в camelCase (``maxDepth``, ``url`` вместо ``base_url``).
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from agent_ready.crawler.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from agent_ready.crawler.path_filter import compile_glob


class CrawlConfig(BaseModel):
    """Конфигурация одного запуска обхода сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    base_url: HttpUrl = Field(..., alias="url", description="Корневой URL для обхода.")
    max_depth: int = Field(3, ge=0, alias="maxDepth", description="Максимальная глубина обхода ссылок.")
    concurrency: int = Field(5, ge=1, description="Число одновременных запросов.")
    sitemap: bool = Field(True, description="Искать sitemap.xml перед обходом по ссылкам.")
    include: List[str] = Field(default_factory=list, description="Glob-шаблоны разрешённых путей.")
    exclude: List[str] = Field(default_factory=list, description="Glob-шаблоны запрещённых путей.")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(
        DEFAULT_USER_AGENT, min_length=1, alias="userAgent", description="Заголовок User-Agent."
    )

    @field_validator("base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("include", "exclude")
    @classmethod
    def _check_patterns(cls, patterns: List[str]) -> List[str]:
        # шаблоны проверяются при загрузке конфига
        for pattern in patterns:
            compile_glob(pattern)
        return patterns


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


def _resolve_path(path: Union[str, Path]) -> Path:
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
    return path_obj


def read_config_data(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Читает YAML или JSON и возвращает «сырой» mapping без валидации.
    Нужен CLI, чтобы наложить опции командной строки поверх файла.
    """
    path_obj = _resolve_path(path)
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path]) -> CrawlConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    return CrawlConfig.model_validate(read_config_data(path))


__all__ = ["CrawlConfig", "load_config", "read_config_data"]
