"""Адаптеры для хранилища данных.

Модули:
    peewee
        Реализация BaseNoteStore для SQLite + Peewee.
"""

from notes_core.infrastructure.storage.peewee.adapter import PeeweeNoteStore
from notes_core.infrastructure.storage.peewee.engine import init_peewee_database

__all__ = [
    "PeeweeNoteStore",
    "init_peewee_database",
]
