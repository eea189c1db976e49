"""Сборка предиката и сортировки поиска заметок.

Функции:
    compose_predicate
        WHERE-условие из SearchNotesRequest.
    compose_ordering
        ORDER BY для заметок и для вложенного списка тегов.

Классы:
    Ordering
        Термы сортировки заметок и тегов.
"""

from dataclasses import dataclass, field
from typing import Optional

from peewee import Expression, Ordering as OrderTerm

from notes_core.domain import NoteSort, SearchNotesRequest, SortDirection, SortField
from notes_core.infrastructure.storage.peewee.models import (
    NoteModel,
    NoteTagModel,
    TagModel,
)

# languageId/sourceId сортируются по FK-колонке, JOIN не нужен
_SORT_COLUMNS = {
    SortField.DATE: NoteModel.date,
    SortField.LANGUAGE_ID: NoteModel.language,
    SortField.SOURCE_ID: NoteModel.source,
}


@dataclass
class Ordering:
    """Термы ORDER BY.

    Attributes:
        notes: Порядок заметок (включая финальный тай-брейк по note_id).
        tags: Порядок тегов внутри каждой заметки.
    """

    notes: list[OrderTerm] = field(default_factory=list)
    tags: list[OrderTerm] = field(default_factory=list)


def compose_predicate(request: SearchNotesRequest) -> Expression:
    """Строит WHERE-условие поиска (без полнотекстовой фразы).

    Даты включительно с обеих сторон. Фильтр по тегам через полусоединение:
    достаточно, чтобы у заметки был любой из тегов.

    Args:
        request: Провалидированный запрос.

    Returns:
        Peewee-выражение над NoteModel.
    """
    predicate = NoteModel.date.between(request.from_date, request.to_date)

    if request.source_ids is not None:
        predicate &= NoteModel.source.in_(request.source_ids)

    if request.language_ids is not None:
        predicate &= NoteModel.language.in_(request.language_ids)

    if request.tag_ids is not None:
        tagged = NoteTagModel.select(NoteTagModel.note).where(
            NoteTagModel.tag.in_(request.tag_ids)
        )
        predicate &= NoteModel.id.in_(tagged)

    return predicate


def compose_ordering(sort: Optional[NoteSort], order_tags: bool) -> Ordering:
    """Строит сортировку заметок и вложенных тегов.

    Args:
        sort: Многоуровневая сортировка (None или пустая = date ASC).
        order_tags: Запрошены ли теги в ответе.

    Returns:
        Ordering; note_id ASC всегда замыкает сортировку заметок, чтобы
        равные по ключам заметки не переставлялись между страницами.
    """
    ordering = Ordering()

    if sort is not None and sort.sorts:
        for instruction in sort.sorts:
            column = _SORT_COLUMNS[instruction.field]
            if instruction.direction is SortDirection.DESC:
                ordering.notes.append(column.desc())
            else:
                ordering.notes.append(column.asc())
    else:
        ordering.notes.append(NoteModel.date.asc())
        if order_tags:
            ordering.tags.append(TagModel.display_order.asc())

    ordering.notes.append(NoteModel.id.asc())
    ordering.tags.append(NoteTagModel.id.asc())

    return ordering
