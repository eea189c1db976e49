"""Настройки хендлеров логирования notes_core.

LoggingConfig описывает только вывод: консоль Rich и файл.
Уровень и файл приложения задаются в NotesConfig (log_level, log_file,
секция [logging] в notes.toml) и передаются сюда через
NotesConfig.to_logging_config().

Классы:
    LoggingConfig
        Pydantic Settings с env-префиксом NOTES_LOG_.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """Вывод логов notes_core.

    Явные аргументы важнее переменных окружения NOTES_LOG_*.

    Attributes:
        level: Уровень консоли. INFO показывает итоги поиска и записи,
            DEBUG добавляет запросы и загрузку конфигурации.
        file_level: Уровень файла; по умолчанию TRACE, то есть вместе
            с выражениями MATCH и списками id.
        log_file: Файл логов (None = только консоль).
        json_format: Писать файл в JSON (поле extra содержит контекст
            вроде total_count, latency_ms).
        show_path: Показывать модуль и строку в консоли.
        console_width: Ширина консоли Rich.

    Environment Variables:
        NOTES_LOG_LEVEL, NOTES_LOG_FILE_LEVEL, NOTES_LOG_FILE,
        NOTES_LOG_JSON, NOTES_LOG_SHOW_PATH, NOTES_LOG_WIDTH.

    Example:
        >>> config = LoggingConfig(level="DEBUG", file="/tmp/notes.log", json=True)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Уровень консольного вывода",
    )

    file_level: LogLevel = Field(
        default="TRACE",
        description="Уровень файлового вывода",
    )

    # Короткие имена file/json/width совпадают с суффиксами NOTES_LOG_*
    log_file: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("file", "notes_log_file"),
        description="Файл логов (None = только консоль)",
    )

    json_format: bool = Field(
        default=False,
        validation_alias=AliasChoices("json", "notes_log_json"),
        description="JSON-формат для файла",
    )

    show_path: bool = Field(
        default=True,
        description="Модуль и строка в консоли",
    )

    console_width: int = Field(
        default=120,
        ge=80,
        le=300,
        validation_alias=AliasChoices("width", "notes_log_width"),
        description="Ширина консоли Rich",
    )

    model_config = SettingsConfigDict(
        env_prefix="NOTES_LOG_",
        env_file=None,
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )
