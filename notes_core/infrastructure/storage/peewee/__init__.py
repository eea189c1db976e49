"""Реализация хранилища для Peewee + SQLite.

Модули:
    engine
        Инициализация SQLite с прагмами из конфигурации.
    models
        Внутренние ORM модели.
    schema
        Таблицы, FTS5 индекс и триггеры синхронизации.
    filters
        Предикат и сортировка поиска.
    text_match
        Сопоставление фразы через note_fts5_index.
    adapter
        Реализация BaseNoteStore.
"""

from notes_core.infrastructure.storage.peewee.adapter import PeeweeNoteStore
from notes_core.infrastructure.storage.peewee.engine import init_peewee_database

__all__ = [
    "PeeweeNoteStore",
    "init_peewee_database",
]
