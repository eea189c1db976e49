"""Входные модели операций с заметками.

Валидация выполняется при создании объекта: невалидный запрос
не может дойти до хранилища.

Классы:
    SearchNotesRequest
        Фильтры поиска (даты, id справочников, фраза).
    PaginationRequest
        Лимит и смещение.
    SortField, SortDirection
        Допустимые поля и направления сортировки.
    SortInstruction
        Пара (поле, направление).
    NoteSort
        Упорядоченный список инструкций сортировки.
    NoteInput
        Данные для создания/обновления заметки.

Функции:
    to_naive_utc
        Приводит дату с часовым поясом к naive UTC.

Все даты хранятся как naive UTC: SQLite сравнивает их как строки,
и смещение в строке ломает и BETWEEN, и ORDER BY.
"""

import unicodedata
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

MAX_FILTER_IDS = 10
MIN_SEARCH_PHRASE_LENGTH = 3
MAX_PAGE_LIMIT = 50
DEFAULT_PAGE_LIMIT = 10


def to_naive_utc(value: datetime) -> datetime:
    """Переводит aware-дату в UTC и снимает tzinfo; naive-дата не меняется."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class _RequestModel(BaseModel):
    """Общие настройки: неизменяемость и camelCase-алиасы (fromDate, sourceIds)."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SearchNotesRequest(_RequestModel):
    """Параметры поиска заметок.

    Attributes:
        from_date: Начало интервала (включительно).
        to_date: Конец интервала (включительно), строго позже from_date.
        source_ids: Фильтр по источникам (не более 10).
        language_ids: Фильтр по языкам (не более 10).
        tag_ids: Фильтр по тегам, достаточно любого совпадения (не более 10).
        search_phrase: Полнотекстовая фраза (не короче 3 символов).
    """

    from_date: datetime
    to_date: datetime
    source_ids: Optional[list[int]] = Field(default=None, max_length=MAX_FILTER_IDS)
    language_ids: Optional[list[int]] = Field(default=None, max_length=MAX_FILTER_IDS)
    tag_ids: Optional[list[int]] = Field(default=None, max_length=MAX_FILTER_IDS)
    search_phrase: Optional[str] = Field(
        default=None, min_length=MIN_SEARCH_PHRASE_LENGTH
    )

    @field_validator("from_date", "to_date")
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("search_phrase")
    @classmethod
    def check_phrase_characters(cls, v: Optional[str]) -> Optional[str]:
        # Пробельные символы (\t, \n) допустимы, остальные управляющие нет
        if v is not None and any(
            unicodedata.category(ch) == "Cc" and not ch.isspace() for ch in v
        ):
            raise ValueError('"searchPhrase" must not contain control characters')
        return v

    @model_validator(mode="after")
    def check_date_order(self) -> "SearchNotesRequest":
        if self.from_date >= self.to_date:
            raise ValueError('"fromDate" must be before "toDate"')
        return self


class PaginationRequest(_RequestModel):
    """Пагинация: limit в [1, 50], offset >= 0."""

    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    offset: int = Field(default=0, ge=0)


class SortField(str, Enum):
    """Поля, по которым разрешена сортировка.

    Attributes:
        DATE: Логическая дата заметки.
        LANGUAGE_ID: Идентификатор языка.
        SOURCE_ID: Идентификатор источника.
    """

    DATE = "date"
    LANGUAGE_ID = "languageId"
    SOURCE_ID = "sourceId"


class SortDirection(str, Enum):
    """Направление сортировки."""

    ASC = "asc"
    DESC = "desc"


class SortInstruction(_RequestModel):
    """Одна инструкция сортировки."""

    field: SortField
    # На проводе направление называется "sort": {"field": "date", "sort": "desc"}
    direction: SortDirection = Field(default=SortDirection.ASC, alias="sort")


class NoteSort(_RequestModel):
    """Многоуровневая сортировка.

    Порядок инструкций задаёт приоритет: следующая разрешает равенство
    предыдущей. Пустой список означает сортировку по умолчанию.
    """

    sorts: list[SortInstruction] = Field(default_factory=list)

    @classmethod
    def of(cls, *pairs: tuple[str, str]) -> "NoteSort":
        """Собирает сортировку из пар (поле, направление).

        Example:
            >>> NoteSort.of(("date", "desc"), ("languageId", "desc"))
        """
        return cls(
            sorts=[SortInstruction(field=f, direction=d) for f, d in pairs]
        )


class NoteInput(_RequestModel):
    """Данные заметки для save_note.

    Attributes:
        internal_id: Внешний уникальный идентификатор.
        title: Заголовок.
        body: Текст.
        source_id: Идентификатор источника.
        language_id: Идентификатор языка.
        date: Логическая дата заметки.
    """

    internal_id: str = Field(min_length=1)
    title: str
    body: str
    source_id: int
    language_id: int
    date: datetime = Field(default_factory=datetime.now)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)
