"""Реализации инфраструктурных компонентов.

Модули:
    storage
        Адаптеры для хранилищ данных.
"""

from notes_core.infrastructure.storage import (
    PeeweeNoteStore,
    init_peewee_database,
)

__all__ = [
    "PeeweeNoteStore",
    "init_peewee_database",
]
