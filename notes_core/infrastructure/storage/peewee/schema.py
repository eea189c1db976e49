"""Создание схемы: таблицы, FTS5 индекс и триггеры синхронизации.

Функции:
    bind_models
        Привязывает ORM модели к БД.
    create_schema
        Создаёт таблицы, индекс note_fts5_index и триггеры.
    rebuild_index_if_needed
        Перестраивает индекс, если он разошёлся с notes.
"""

from peewee import OperationalError
from playhouse.sqlite_ext import SqliteExtDatabase

from notes_core.infrastructure.storage.peewee.models import (
    ALL_MODELS,
    SourceModel,
    LanguageModel,
    TagModel,
    NoteModel,
    NoteTagModel,
)
from notes_core.utils.logger import get_logger

logger = get_logger(__name__)

FTS_TABLE = "note_fts5_index"

_CREATE_FTS_TABLE = f"""
    CREATE VIRTUAL TABLE IF NOT EXISTS {FTS_TABLE}
    USING fts5(
        title,
        body,
        content='notes',
        content_rowid='note_id',
        tokenize='trigram'
    )
"""

# Для external content таблицы удаление выполняется вставкой команды 'delete'
# со старыми значениями колонок
_TRIGGERS = (
    f"""
    CREATE TRIGGER IF NOT EXISTS notes_fts_insert
    AFTER INSERT ON notes BEGIN
        INSERT INTO {FTS_TABLE}(rowid, title, body)
        VALUES (new.note_id, new.title, new.body);
    END
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS notes_fts_delete
    AFTER DELETE ON notes BEGIN
        INSERT INTO {FTS_TABLE}({FTS_TABLE}, rowid, title, body)
        VALUES ('delete', old.note_id, old.title, old.body);
    END
    """,
    f"""
    CREATE TRIGGER IF NOT EXISTS notes_fts_update
    AFTER UPDATE ON notes BEGIN
        INSERT INTO {FTS_TABLE}({FTS_TABLE}, rowid, title, body)
        VALUES ('delete', old.note_id, old.title, old.body);
        INSERT INTO {FTS_TABLE}(rowid, title, body)
        VALUES (new.note_id, new.title, new.body);
    END
    """,
)


def bind_models(database: SqliteExtDatabase) -> None:
    """Привязывает все модели к БД."""
    for model in ALL_MODELS:
        model._meta.database = database


def create_schema(database: SqliteExtDatabase) -> None:
    """Создаёт таблицы, FTS5 индекс и триггеры (идемпотентно).

    Args:
        database: Подключённая БД.

    Raises:
        RuntimeError: Если сборка SQLite не поддерживает FTS5 с trigram.
    """
    logger.debug("Creating tables and indexes")

    bind_models(database)
    database.create_tables(
        [SourceModel, LanguageModel, TagModel, NoteModel, NoteTagModel],
        safe=True,
    )

    try:
        database.execute_sql(_CREATE_FTS_TABLE)
    except OperationalError as e:
        logger.error_with_context(e, "FTS5 trigram index is not supported")
        raise RuntimeError(
            f"SQLite не поддерживает FTS5 с токенизатором trigram: {e}"
        ) from e

    for trigger in _TRIGGERS:
        database.execute_sql(trigger)

    rebuild_index_if_needed(database)


def rebuild_index_if_needed(database: SqliteExtDatabase) -> bool:
    """Перестраивает FTS5 индекс, если он разошёлся с таблицей notes.

    Для external content таблицы COUNT(*) читает саму notes, поэтому
    сравниваем с теневой таблицей _docsize (одна строка на документ).

    Returns:
        True, если индекс был перестроен.
    """
    notes_count = database.execute_sql("SELECT COUNT(*) FROM notes").fetchone()[0]
    indexed_count = database.execute_sql(
        f"SELECT COUNT(*) FROM {FTS_TABLE}_docsize"
    ).fetchone()[0]

    if notes_count == indexed_count:
        return False

    logger.warning(
        "FTS index count mismatch, rebuilding",
        notes_count=notes_count,
        indexed_count=indexed_count,
    )
    database.execute_sql(
        f"INSERT INTO {FTS_TABLE}({FTS_TABLE}) VALUES ('rebuild')"
    )
    logger.info("FTS index rebuilt", indexed_count=notes_count)
    return True
