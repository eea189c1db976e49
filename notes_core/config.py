"""Единая конфигурация Notes Core.

Загружает настройки из (в порядке приоритета):
1. Явные аргументы (переданные как kwargs)
2. Environment variables (NOTES_*) и .env файл
3. notes.toml в текущей или родительской директории
4. Default values

Классы:
    NotesConfig
        Pydantic Settings с поддержкой TOML и env variables.

Функции:
    get_config
        Получить конфигурацию с возможными override'ами.
    find_config_file
        Найти notes.toml в текущей или родительских директориях.
    configure_logging
        Настроить логирование по секции [logging] конфигурации.

Example:
    >>> from notes_core.config import get_config
    >>> config = get_config(db_path="/tmp/notes.db")
    >>> config.default_page_limit
    10
"""

import tomllib
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from notes_core.utils.logger import LoggingConfig, get_logger, setup_logging

logger = get_logger(__name__)


LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
JournalMode = Literal["wal", "delete", "truncate", "memory"]

CONFIG_FILE_NAME = "notes.toml"

# (секция, ключ) в TOML -> поле конфига
_TOML_MAPPING: dict[tuple[str, str], str] = {
    ("database", "path"): "db_path",
    ("database", "journal_mode"): "journal_mode",
    ("database", "cache_size_mb"): "cache_size_mb",
    ("search", "default_limit"): "default_page_limit",
    ("logging", "level"): "log_level",
    ("logging", "file"): "log_file",
}


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Найти notes.toml в текущей или родительских директориях.

    Args:
        start_dir: Начальная директория поиска (по умолчанию cwd).

    Returns:
        Path к notes.toml или None если не найден.
    """
    current = start_dir or Path.cwd()

    for _ in range(10):
        config_path = current / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


class NotesConfig(BaseSettings):
    """Конфигурация Notes Core.

    Attributes:
        db_path: Путь к SQLite базе данных (":memory:" для in-memory).
        journal_mode: Режим журнала SQLite (wal даёт снапшот на транзакцию).
        cache_size_mb: Размер page cache SQLite в мегабайтах.
        default_page_limit: Размер страницы по умолчанию.
        log_level: Уровень логирования.
        log_file: Путь к файлу логов.

    Environment Variables:
        NOTES_DB_PATH, NOTES_JOURNAL_MODE, NOTES_CACHE_SIZE_MB,
        NOTES_DEFAULT_PAGE_LIMIT, NOTES_LOG_LEVEL, NOTES_LOG_FILE.
    """

    # === Database ===
    db_path: str = Field(
        default="notes.db",
        description="Путь к SQLite базе данных",
    )

    journal_mode: JournalMode = Field(
        default="wal",
        description="Режим журнала SQLite",
    )

    cache_size_mb: int = Field(
        default=64,
        ge=1,
        le=4096,
        description="Размер page cache в мегабайтах",
    )

    # === Search ===
    default_page_limit: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Размер страницы по умолчанию",
    )

    # === Logging ===
    log_level: LogLevel = Field(
        default="INFO",
        description="Уровень логирования",
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Путь к файлу логов (None = только консоль)",
    )

    @field_validator("db_path", mode="before")
    @classmethod
    def validate_db_path(cls, v: Any) -> str:
        """Разворачивает ~ в пути, ":memory:" оставляет как есть."""
        if v is None or v == "":
            return "notes.db"
        v = str(v)
        if v == ":memory:":
            return v
        return str(Path(v).expanduser())

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Optional[Path]:
        """Преобразует строку в Path."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @model_validator(mode="after")
    def log_config_source(self) -> "NotesConfig":
        """Логирует итоговую конфигурацию."""
        logger.debug(
            "Config loaded",
            db_path=self.db_path,
            journal_mode=self.journal_mode,
            log_level=self.log_level,
        )
        return self

    model_config = SettingsConfigDict(
        env_prefix="NOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **data: Any):
        """Инициализация с поддержкой TOML файла.

        Значения из notes.toml имеют низший приоритет: env variables
        и переданные аргументы переопределяют их.
        """
        toml_path = find_config_file()
        toml_data: dict = {}

        if toml_path:
            toml_data = self._load_toml(toml_path)
            logger.debug("Loaded config from TOML", path=str(toml_path))

        super().__init__(**{**toml_data, **data})

    @staticmethod
    def _load_toml(path: Path) -> dict:
        """Загружает TOML и выравнивает секции в плоские поля.

        [database]
        path = "notes.db"

        превращается в db_path = "notes.db".
        """
        try:
            with open(path, "rb") as f:
                raw = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Failed to load TOML", path=str(path), error=str(e))
            return {}

        flat: dict = {}
        for (section, key), field_name in _TOML_MAPPING.items():
            if section in raw and key in raw[section]:
                flat[field_name] = raw[section][key]

        for field_name in _TOML_MAPPING.values():
            if field_name in raw:
                flat[field_name] = raw[field_name]

        return flat

    @property
    def pragmas(self) -> tuple[tuple[str, Any], ...]:
        """Прагмы SQLite для init_peewee_database."""
        return (
            ("journal_mode", self.journal_mode),
            ("cache_size", -1024 * self.cache_size_mb),
            ("foreign_keys", 1),
            ("ignore_check_constraints", 0),
            ("synchronous", 1),
        )

    def to_logging_config(self) -> LoggingConfig:
        """LoggingConfig из полей log_level и log_file."""
        return LoggingConfig(level=self.log_level, log_file=self.log_file)


_config: Optional[NotesConfig] = None


def get_config(**overrides: Any) -> NotesConfig:
    """Получить конфигурацию с возможными override'ами.

    При первом вызове создаёт конфигурацию.
    Если переданы overrides, всегда создаёт новый экземпляр.

    Args:
        **overrides: Значения для переопределения.

    Returns:
        NotesConfig с учётом всех источников.
    """
    global _config

    if overrides or _config is None:
        _config = NotesConfig(**overrides)

    return _config


def reset_config() -> None:
    """Сбросить глобальный конфиг (для тестов)."""
    global _config
    _config = None


def configure_logging(config: Optional[NotesConfig] = None) -> NotesConfig:
    """Настроить логирование из NotesConfig.

    Вызывается один раз при старте приложения: уровень и файл берутся
    из env, notes.toml или overrides, как и остальные настройки.

    Args:
        config: Конфигурация (None = get_config()).

    Returns:
        Использованная конфигурация.

    Example:
        >>> from notes_core.config import configure_logging
        >>> configure_logging()
    """
    config = config or get_config()
    setup_logging(config.to_logging_config())
    logger.debug("Logging configured", level=config.log_level)
    return config


__all__ = [
    "NotesConfig",
    "get_config",
    "reset_config",
    "find_config_file",
    "configure_logging",
    "LogLevel",
    "JournalMode",
]
