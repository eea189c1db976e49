"""Notes Core - поиск заметок с фильтрами и полнотекстовым индексом SQLite.

Архитектура:
    Domain: Чистые DTO и входные модели (Note, SearchNotesRequest, FieldSelection).
    Interfaces: Контракты (BaseNoteStore).
    Core: Чистая логика (проекция, пагинация).
    Infrastructure: Реализации (PeeweeNoteStore на SQLite FTS5 trigram).
    Pipeline: Фасад (NotesCore).

Пример:
    >>> from datetime import datetime
    >>> from notes_core import NotesCore, PeeweeNoteStore, init_peewee_database
    >>> from notes_core import configure_logging
    >>> from notes_core.domain import SearchNotesRequest, PaginationRequest
    >>>
    >>> configure_logging()  # уровень и файл из NOTES_LOG_*, notes.toml
    >>> db = init_peewee_database("notes.db")
    >>> core = NotesCore(store=PeeweeNoteStore(db))
    >>> page = core.search(
    ...     SearchNotesRequest(
    ...         from_date=datetime(2003, 2, 14),
    ...         to_date=datetime(2003, 2, 18),
    ...         search_phrase="nan",
    ...     ),
    ...     PaginationRequest(limit=2, offset=0),
    ... )
    >>> page.total_count, page.has_next_page
"""

from notes_core.domain import (
    Note,
    NoteTag,
    Source,
    Language,
    Tag,
    NotesPage,
    SearchNotesRequest,
    PaginationRequest,
    SortField,
    SortDirection,
    SortInstruction,
    NoteSort,
    NoteInput,
    FieldSelection,
    Projection,
    NotesCoreError,
    NoteNotFoundError,
    TagNotFoundError,
)
from notes_core.interfaces import BaseNoteStore
from notes_core.core import derive_projection, has_next_page
from notes_core.infrastructure.storage import PeeweeNoteStore, init_peewee_database
from notes_core.config import NotesConfig, configure_logging, get_config
from notes_core.pipeline import NotesCore, DEFAULT_NOTE_SELECTION

__version__ = "0.1.0"

__all__ = [
    "Note",
    "NoteTag",
    "Source",
    "Language",
    "Tag",
    "NotesPage",
    "SearchNotesRequest",
    "PaginationRequest",
    "SortField",
    "SortDirection",
    "SortInstruction",
    "NoteSort",
    "NoteInput",
    "FieldSelection",
    "Projection",
    "NotesCoreError",
    "NoteNotFoundError",
    "TagNotFoundError",
    "BaseNoteStore",
    "derive_projection",
    "has_next_page",
    "PeeweeNoteStore",
    "init_peewee_database",
    "NotesCore",
    "DEFAULT_NOTE_SELECTION",
    "NotesConfig",
    "configure_logging",
    "get_config",
]
