"""Доменный слой: DTO заметок, входные модели и дерево проекции.

Классы:
    Note
        Заметка (все поля опциональны, заполняются по проекции).
    NoteTag
        Связь заметки с тегом.
    Source, Language, Tag
        Справочники.
    NotesPage
        Страница результатов поиска.
    SearchNotesRequest
        Фильтры поиска.
    PaginationRequest
        Лимит и смещение.
    NoteSort, SortInstruction, SortField, SortDirection
        Многоуровневая сортировка.
    NoteInput
        Данные для создания/обновления заметки.
    FieldSelection
        Дерево запрошенных полей.
    Projection
        Колонки и связи для выборки.
    NotesCoreError, NoteNotFoundError, TagNotFoundError
        Исключения.
"""

from notes_core.domain.note import (
    Lookup,
    Source,
    Language,
    Tag,
    NoteTag,
    Note,
    NotesPage,
)
from notes_core.domain.requests import (
    SearchNotesRequest,
    PaginationRequest,
    SortField,
    SortDirection,
    SortInstruction,
    NoteSort,
    NoteInput,
    MAX_FILTER_IDS,
    MAX_PAGE_LIMIT,
    to_naive_utc,
)
from notes_core.domain.projection import FieldSelection, Projection
from notes_core.domain.errors import (
    NotesCoreError,
    NoteNotFoundError,
    TagNotFoundError,
)

__all__ = [
    "Lookup",
    "Source",
    "Language",
    "Tag",
    "NoteTag",
    "Note",
    "NotesPage",
    "SearchNotesRequest",
    "PaginationRequest",
    "SortField",
    "SortDirection",
    "SortInstruction",
    "NoteSort",
    "NoteInput",
    "MAX_FILTER_IDS",
    "MAX_PAGE_LIMIT",
    "to_naive_utc",
    "FieldSelection",
    "Projection",
    "NotesCoreError",
    "NoteNotFoundError",
    "TagNotFoundError",
]
