# === FILE: sitemap_check/config.py ===
"""
Модуль загрузки и валидации конфигурации SitemapCheck.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = "PromptingBot ChatGPT-User/1.0.0"
DEFAULT_CONTENT_TYPE = "text/markdown"


class CheckerConfig(BaseModel):
    """Конфигурация одного запуска проверки sitemap."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent для всех запросов.")
    batch_size: int = Field(10, ge=1, description="Число URL, проверяемых одновременно.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    expected_content_type: str = Field(
        DEFAULT_CONTENT_TYPE, min_length=1, description="Префикс Content-Type, считающийся успехом."
    )

    @field_validator("user_agent")
    def _strip_user_agent(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user_agent must not be blank")
        return v

    @field_validator("expected_content_type")
    def _normalize_content_type(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("expected_content_type must not be blank")
        return v


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


def load_config(path: Union[str, Path, None]) -> CheckerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CheckerConfig.
    Без пути возвращает конфигурацию по умолчанию.
    """
    if path is None:
        return CheckerConfig()

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

    return CheckerConfig(**data)
