# === FILE: sitemap_check/logger.py ===
"""Логирование SitemapCheck.

Все модули пишут в логгер ``SitemapCheck`` (или его потомков через
:func:`get_logger`). Консольный вывод идёт в stderr: stdout занят строкой
прогресса и итоговым отчётом. Файл логов подключается опционально, с ротацией.
"""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SitemapCheck"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3


def configure(
    *,
    level: Union[int, str] = "WARNING",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Переустанавливает обработчики логгера проекта.

    Старые обработчики закрываются, затем добавляется stderr-обработчик и,
    если задан *log_file*, ротируемый файл.
    """
    project_logger = logging.getLogger(LOGGER_NAME)
    project_logger.setLevel(level)
    project_logger.propagate = False

    for old in list(project_logger.handlers):
        project_logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        project_logger.addHandler(handler)
    return project_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Логгер проекта или его потомок ``SitemapCheck.<name>``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "get_logger", "DEFAULT_FORMAT", "LOGGER_NAME"]
