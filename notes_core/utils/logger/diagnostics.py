"""Диагностические утилиты.

Функции:
    dump_debug_info()
        Собирает информацию о системе для баг-репортов.

    check_config()
        Валидирует конфигурацию логирования.

    get_sqlite_info()
        Проверяет поддержку FTS5 и токенизатора trigram в сборке SQLite.
"""

from __future__ import annotations

import logging
import os
import platform
import sqlite3
import sys
from datetime import datetime
from importlib import metadata
from pathlib import Path
from typing import Any

from .config import LoggingConfig

# Токенизатор trigram появился в SQLite 3.34.0
TRIGRAM_MIN_VERSION: tuple[int, int, int] = (3, 34, 0)

_DISTRIBUTIONS: tuple[str, ...] = (
    "notes-core",
    "peewee",
    "pydantic",
    "pydantic-settings",
    "python-dotenv",
    "rich",
)


def get_package_versions() -> dict[str, str]:
    """Получает версии установленных пакетов.

    Returns:
        Словарь {distribution_name: version}.
    """
    versions: dict[str, str] = {}

    for name in _DISTRIBUTIONS:
        try:
            versions[name] = metadata.version(name)
        except metadata.PackageNotFoundError:
            versions[name] = "not installed"

    return versions


def _probe_virtual_table(ddl: str) -> bool:
    conn = sqlite3.connect(":memory:")
    try:
        conn.execute(ddl)
        return True
    except sqlite3.OperationalError:
        return False
    finally:
        conn.close()


def get_sqlite_info() -> dict[str, str]:
    """Получает информацию о SQLite.

    Returns:
        Словарь с версией SQLite и статусом fts5/trigram.
    """
    info: dict[str, str] = {
        "sqlite_version": sqlite3.sqlite_version,
    }

    fts5 = _probe_virtual_table("CREATE VIRTUAL TABLE probe USING fts5(content)")
    info["fts5"] = "available" if fts5 else "not available"

    if not fts5:
        info["trigram"] = "not available"
    elif _probe_virtual_table(
        "CREATE VIRTUAL TABLE probe USING fts5(content, tokenize='trigram')"
    ):
        info["trigram"] = "available"
    else:
        required = ".".join(map(str, TRIGRAM_MIN_VERSION))
        info["trigram"] = f"not available (requires SQLite >= {required})"

    return info


def get_handlers_info() -> list[dict[str, Any]]:
    """Получает информацию об активных хендлерах логирования.

    Returns:
        Список словарей с информацией о хендлерах.
    """
    root_logger = logging.getLogger("notes_core")
    handlers_info: list[dict[str, Any]] = []

    for handler in root_logger.handlers:
        handler_info: dict[str, Any] = {
            "type": type(handler).__name__,
            "level": logging.getLevelName(handler.level),
        }

        if isinstance(handler, logging.FileHandler):
            handler_info["file"] = handler.baseFilename

        if handler.formatter:
            handler_info["formatter"] = type(handler.formatter).__name__

        handlers_info.append(handler_info)

    return handlers_info


def get_environment_vars() -> dict[str, str]:
    """Получает значения NOTES_* переменных окружения."""
    return {
        key: value for key, value in os.environ.items() if key.startswith("NOTES_")
    }


def dump_debug_info(config: LoggingConfig | None = None) -> str:
    """Собирает полную диагностическую информацию.

    Формирует текстовый отчёт: система, версии пакетов, конфигурация
    логирования, переменные NOTES_*, поддержка FTS5/trigram, хендлеры.

    Args:
        config: Конфигурация логирования (если None, берётся текущая).

    Returns:
        Отформатированный текстовый отчёт.
    """
    if config is None:
        from . import get_current_config

        config = get_current_config()

    lines: list[str] = []

    lines.append("=" * 40)
    lines.append("Notes Core Debug Info")
    lines.append("=" * 40)
    lines.append(f"Generated: {datetime.now().isoformat()}")
    lines.append("")

    lines.append("[System]")
    lines.append(f"Python: {sys.version.split()[0]}")
    lines.append(f"Platform: {platform.platform()}")
    lines.append("")

    lines.append("[Packages]")
    for package, version in sorted(get_package_versions().items()):
        lines.append(f"{package}: {version}")
    lines.append("")

    lines.append("[Logging Config]")
    lines.append(f"level: {config.level}")
    lines.append(f"file_level: {config.file_level}")
    lines.append(f"log_file: {config.log_file or 'None (console only)'}")
    lines.append(f"json_format: {config.json_format}")
    lines.append("")

    lines.append("[Environment Variables]")
    env_vars = get_environment_vars()
    if env_vars:
        for key, value in sorted(env_vars.items()):
            lines.append(f"{key}: {value}")
    else:
        lines.append("No NOTES_* variables set")
    lines.append("")

    lines.append("[SQLite]")
    for key, value in get_sqlite_info().items():
        lines.append(f"{key}: {value}")
    lines.append("")

    lines.append("[Active Handlers]")
    handlers = get_handlers_info()
    if handlers:
        for i, h in enumerate(handlers, 1):
            handler_str = f"{i}. {h['type']} (level={h['level']})"
            if "file" in h:
                handler_str += f" → {h['file']}"
            lines.append(handler_str)
    else:
        lines.append("No handlers configured")

    lines.append("")
    lines.append("=" * 40)

    return "\n".join(lines)


def check_config(config: LoggingConfig | None = None) -> list[str]:
    """Валидирует конфигурацию логирования.

    Args:
        config: Конфигурация для проверки (если None, берётся текущая).

    Returns:
        Список предупреждений (пустой если всё OK).
    """
    if config is None:
        from . import get_current_config

        config = get_current_config()

    warnings: list[str] = []

    if config.log_file:
        log_path = Path(config.log_file)

        if not log_path.parent.exists():
            warnings.append(f"Log directory does not exist: {log_path.parent}")
        elif log_path.exists() and not os.access(log_path, os.W_OK):
            warnings.append(f"Log file is not writable: {log_path}")
        elif not log_path.exists() and not os.access(log_path.parent, os.W_OK):
            warnings.append(
                f"Cannot create log file, directory not writable: {log_path.parent}"
            )

    level_order = ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if level_order.index(config.file_level) > level_order.index(config.level):
        warnings.append(
            f"File level {config.file_level} is stricter than console level "
            f"{config.level}: file log will miss console messages"
        )

    return warnings
