# === FILE: archive_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации ArchiveScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from re import Pattern
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from archive_scout.names import subdomain_regex

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/74.0.3729.169 Safari/537.36"
)


class SourceFilter(BaseModel):
    """Список источников и режим его применения (allow-list или deny-list)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    include: bool = Field(False, description="True – только перечисленные источники, False – все, кроме них.")
    sources: list[str] = Field(default_factory=list, description="Имена источников.")


class CrawlerConfig(BaseModel):
    """Конфигурация обхода архивов."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    domains: list[str] = Field(default_factory=list, description="Целевые домены.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    timeout: float = Field(30.0, gt=0, description="Лимит времени на одну сессию обхода (секунд).")
    max_crawl_sessions: int = Field(50, ge=1, description="Сколько сессий обхода могут идти одновременно.")
    concurrent_requests: int = Field(3, ge=1, description="Одновременных запросов в одной сессии.")
    concurrent_requests_per_domain: int = Field(3, ge=1, description="Одновременных запросов к одному хосту.")
    request_delay: float = Field(0.25, ge=0, description="Пауза перед каждым запросом (секунд).")
    request_delay_randomize: bool = Field(True, description="Умножать паузу на случайный коэффициент 0.5–1.5.")
    max_depth: int = Field(1, ge=0, description="Максимальная глубина обхода ссылок.")
    max_pages: int = Field(100, ge=1, description="Жесткий лимит по числу страниц в сессии.")
    source_filter: SourceFilter = Field(default_factory=SourceFilter)

    @field_validator("domains", mode="after")
    def _normalize_domains(cls, v: list[str]) -> list[str]:
        cleaned = [d.strip().strip(".").lower() for d in v]
        return list(dict.fromkeys(d for d in cleaned if d))

    def domain_regex(self, domain: str) -> Optional[Pattern[str]]:
        """Шаблон для домена из списка ``domains`` или None, если домен не настроен."""
        key = domain.strip().strip(".").lower()
        if key not in self.domains:
            return None
        return subdomain_regex(key)

    def with_domains(self, *domains: str) -> CrawlerConfig:
        """Копия конфигурации с добавленными доменами."""
        return CrawlerConfig.model_validate({**self.model_dump(), "domains": [*self.domains, *domains]})


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


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "SourceFilter", "load_config", "DEFAULT_USER_AGENT"]
