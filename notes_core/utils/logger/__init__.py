"""Система логирования notes_core с эмодзи и контекстом.

Функции:
    get_logger(name: str) -> NotesLogger
        Получить настроенный логгер для модуля.

    setup_logging(config: LoggingConfig | None = None) -> None
        Инициализировать систему логирования.

    dump_debug_info(config: LoggingConfig | None = None) -> str
        Собрать диагностическую информацию (версии, поддержка FTS5/trigram).

    check_config(config: LoggingConfig | None = None) -> list[str]
        Валидировать конфигурацию логирования.

Классы:
    NotesLogger
        Адаптер с поддержкой контекста (bind) и error_with_context.

    LoggingConfig
        Pydantic-модель конфигурации с поддержкой environment variables.

Environment Variables:
    NOTES_LOG_LEVEL: Уровень консольного вывода (DEBUG/INFO/WARNING/ERROR).
    NOTES_LOG_FILE: Путь к файлу логов.
    NOTES_LOG_JSON: JSON-формат для файла (true/false).

Example:
    >>> from notes_core.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.bind(request_id="req-1").info("Search started")
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingConfig
from .formatters import FileFormatter, JSONFormatter
from .levels import TRACE, install_trace_level
from .logger import NotesLogger
from .diagnostics import dump_debug_info, check_config, get_handlers_info

install_trace_level()

_logging_configured: bool = False
_current_config: LoggingConfig | None = None

ROOT_LOGGER_NAME: str = "notes_core"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Инициализирует систему логирования.

    Настраивает RichHandler для консоли и, если задан log_file,
    FileHandler с текстовым или JSON-форматтером.

    Args:
        config: Конфигурация логирования. Если None, используются дефолты.

    Note:
        Безопасно вызывать повторно: старые хендлеры будут удалены.
    """
    global _logging_configured, _current_config

    config = config or LoggingConfig()
    _current_config = config

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    # TRACE, чтобы уровни решали хендлеры
    root_logger.setLevel(TRACE)

    console_level = getattr(logging, config.level, logging.INFO)

    # markup=False: иначе [req-1] интерпретируется как style tag
    console_handler = RichHandler(
        level=console_level,
        console=Console(width=config.console_width),
        show_time=True,
        show_level=False,
        show_path=config.show_path,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=False,
    )
    root_logger.addHandler(console_handler)

    if config.log_file:
        file_level = getattr(logging, config.file_level, TRACE)

        file_handler = logging.FileHandler(
            config.log_file,
            mode="a",
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)

        if config.json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(FileFormatter())

        root_logger.addHandler(file_handler)

    root_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> NotesLogger:
    """Получить настроенный логгер для модуля.

    Args:
        name: Имя модуля (обычно __name__).

    Returns:
        NotesLogger с поддержкой контекста и эмодзи.
    """
    if not _logging_configured:
        setup_logging()

    return NotesLogger(name)


def get_current_config() -> LoggingConfig:
    """Возвращает текущую конфигурацию логирования."""
    return _current_config or LoggingConfig()


__all__ = [
    "TRACE",
    "ROOT_LOGGER_NAME",
    "get_logger",
    "setup_logging",
    "get_current_config",
    "dump_debug_info",
    "check_config",
    "get_handlers_info",
    "NotesLogger",
    "LoggingConfig",
    "FileFormatter",
    "JSONFormatter",
]
