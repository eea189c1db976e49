"""Модели заметки и справочников.

Классы:
    Lookup
        Базовый справочник (источник, язык, тег).
    Source, Language, Tag
        Конкретные справочники.
    NoteTag
        Связь заметки с тегом.
    Note
        DTO заметки.
    NotesPage
        Страница результатов поиска.

Все поля DTO опциональны: адаптер заполняет только то, что было
запрошено через FieldSelection.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Lookup:
    """Простой справочник.

    Attributes:
        id: Идентификатор записи.
        name: Название.
        description: Описание (может отсутствовать).
        display_order: Порядок отображения.
        created_at: Дата создания.
        updated_at: Дата последнего изменения.
    """

    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    display_order: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, name={self.name!r})"


@dataclass(repr=False)
class Source(Lookup):
    """Источник заметки."""


@dataclass(repr=False)
class Language(Lookup):
    """Язык заметки."""


@dataclass(repr=False)
class Tag(Lookup):
    """Тег заметки."""


@dataclass
class NoteTag:
    """Связь заметки с тегом.

    Attributes:
        id: Идентификатор связи (noteTagId).
        tag: Связанный тег (если запрошен).
        created_at: Дата создания связи.
        updated_at: Дата изменения связи.
    """

    id: Optional[int] = None
    tag: Optional[Tag] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Note:
    """Заметка.

    Attributes:
        id: Суррогатный ключ (noteId).
        internal_id: Внешний уникальный идентификатор.
        title: Заголовок (индексируется FTS5).
        body: Текст (индексируется FTS5).
        date: Логическая дата заметки, задаётся клиентом.
        source: Источник (если запрошен).
        language: Язык (если запрошен).
        tags: Связи с тегами (если запрошены).
        created_at: Дата создания записи.
        updated_at: Дата изменения записи.
    """

    id: Optional[int] = None
    internal_id: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    date: Optional[datetime] = None
    source: Optional[Source] = None
    language: Optional[Language] = None
    tags: Optional[list[NoteTag]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return f"Note(id={self.id}, internal_id={self.internal_id!r}, date={self.date})"


@dataclass
class NotesPage:
    """Страница результатов поиска.

    Attributes:
        items: Заметки в порядке выдачи.
        total_count: Общее количество совпадений без учёта пагинации.
        has_next_page: Есть ли следующая страница.
    """

    items: list[Note] = field(default_factory=list)
    total_count: int = 0
    has_next_page: bool = False

    def __repr__(self) -> str:
        return (
            f"NotesPage(items={len(self.items)}, total_count={self.total_count}, "
            f"has_next_page={self.has_next_page})"
        )
