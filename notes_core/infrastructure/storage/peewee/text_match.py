"""Полнотекстовое сопоставление через FTS5 (trigram).

Функции:
    quote_phrase
        Экранирует фразу как строковый литерал FTS5.
    build_match_expression
        Выражение MATCH по title и body с префиксным поиском.
    resolve_text_match
        Количество и страница id заметок, совпавших с фразой.

Классы:
    TextMatch
        Результат сопоставления.
"""

from dataclasses import dataclass, field

from peewee import Expression

from notes_core.core.pagination import has_next_page
from notes_core.domain import PaginationRequest
from notes_core.infrastructure.storage.peewee.filters import Ordering
from notes_core.infrastructure.storage.peewee.models import NoteIndexModel, NoteModel
from notes_core.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class TextMatch:
    """Результат сопоставления фразы.

    Attributes:
        total_count: Все совпадения с учётом фильтров.
        ids: id заметок текущей страницы в порядке сортировки.
        has_next_page: Есть ли следующая страница.
    """

    total_count: int = 0
    ids: list[int] = field(default_factory=list)
    has_next_page: bool = False


def quote_phrase(phrase: str) -> str:
    """Оборачивает фразу в двойные кавычки, удваивая внутренние.

    Внутри строкового литерала FTS5 операторы (OR, NOT, *, :, -)
    теряют специальный смысл.
    """
    return '"' + phrase.replace('"', '""') + '"'


def build_match_expression(phrase: str) -> str:
    """Строит выражение title:"<фраза>" * OR body:"<фраза>" *.

    Результат передаётся в запрос только как параметр, не как часть SQL.
    """
    quoted = quote_phrase(phrase)
    return f"title:{quoted} * OR body:{quoted} *"


def resolve_text_match(
    phrase: str,
    predicate: Expression,
    ordering: Ordering,
    pagination: PaginationRequest,
) -> TextMatch:
    """Находит id заметок, совпавших с фразой и фильтрами.

    Два прохода по одному и тому же JOIN notes × note_fts5_index:
    COUNT без limit/offset и выборка id страницы с сортировкой.
    Вызывается внутри транзакции вызывающего.

    Args:
        phrase: Поисковая фраза (>= 3 символов).
        predicate: Условие из compose_predicate.
        ordering: Сортировка из compose_ordering.
        pagination: Лимит и смещение.

    Returns:
        TextMatch с общим количеством и id страницы.
    """
    expression = build_match_expression(phrase)
    logger.trace("FTS match expression", expression=expression)

    matched = (
        NoteModel.select(NoteModel.id)
        .join(NoteIndexModel, on=(NoteIndexModel.rowid == NoteModel.id))
        .where(predicate & NoteIndexModel.match(expression))
    )

    total_count = matched.count()
    if total_count == 0:
        return TextMatch()

    page = (
        matched.order_by(*ordering.notes)
        .limit(pagination.limit)
        .offset(pagination.offset)
    )
    ids = [note_id for (note_id,) in page.tuples()]

    logger.debug(
        "FTS match resolved",
        total_count=total_count,
        page_size=len(ids),
    )
    logger.trace("FTS matched ids", ids=ids)

    return TextMatch(
        total_count=total_count,
        ids=ids,
        has_next_page=has_next_page(total_count, pagination.limit, pagination.offset),
    )
