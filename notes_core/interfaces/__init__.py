"""Интерфейсы (контракты) для компонентов системы.

Классы:
    BaseNoteStore
        Абстрактный интерфейс хранилища заметок.
"""

from notes_core.interfaces.note_store import BaseNoteStore

__all__ = [
    "BaseNoteStore",
]
