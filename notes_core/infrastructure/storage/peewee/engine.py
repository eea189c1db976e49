"""Инициализация SQLite БД для заметок.

Функции:
    init_peewee_database
        Создаёт и настраивает БД с прагмами из конфигурации.
"""

from pathlib import Path
from typing import Optional

from playhouse.sqlite_ext import SqliteExtDatabase

from notes_core.config import NotesConfig, get_config
from notes_core.utils.logger import get_logger

logger = get_logger(__name__)


def init_peewee_database(
    db_path: Optional[str | Path] = None,
    config: Optional[NotesConfig] = None,
) -> SqliteExtDatabase:
    """Инициализирует SQLite БД.

    WAL-журнал даёт каждой транзакции чтения собственный снапшот, поэтому
    все запросы одного поиска видят одно и то же состояние.

    Args:
        db_path: Путь к файлу БД (None = config.db_path, ":memory:" для тестов).
        config: Конфигурация (None = глобальная из get_config()).

    Returns:
        Подключённый экземпляр SqliteExtDatabase.
    """
    config = config or get_config()
    path = str(db_path) if db_path is not None else config.db_path

    logger.info(
        "Initializing database",
        path=path,
        journal_mode=config.journal_mode,
    )

    database = SqliteExtDatabase(path, pragmas=config.pragmas)
    database.connect()

    logger.debug(
        "Database connected",
        path=path,
        cache_size_mb=config.cache_size_mb,
    )

    return database
