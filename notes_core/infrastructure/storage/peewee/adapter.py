"""Реализация BaseNoteStore для Peewee + SQLite.

Классы:
    PeeweeNoteStore
        Хранилище заметок с поиском по FTS5 trigram.
"""

import time
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from peewee import JOIN, DatabaseError, Field, Select
from playhouse.sqlite_ext import SqliteExtDatabase

from notes_core.core.pagination import has_next_page
from notes_core.domain import (
    Language,
    Note,
    NoteInput,
    NoteNotFoundError,
    NoteSort,
    NoteTag,
    NotesPage,
    PaginationRequest,
    Projection,
    SearchNotesRequest,
    Source,
    Tag,
    TagNotFoundError,
    to_naive_utc,
)
from notes_core.interfaces import BaseNoteStore
from notes_core.infrastructure.storage.peewee.filters import (
    Ordering,
    compose_ordering,
    compose_predicate,
)
from notes_core.infrastructure.storage.peewee.models import (
    LanguageModel,
    NoteModel,
    NoteTagModel,
    SourceModel,
    TagModel,
)
from notes_core.infrastructure.storage.peewee.schema import bind_models, create_schema
from notes_core.infrastructure.storage.peewee.text_match import resolve_text_match
from notes_core.utils.logger import get_logger

logger = get_logger(__name__)

# wire-имя -> атрибут модели и DTO (имена совпадают)
_NOTE_FIELDS = {
    "id": "id",
    "internalId": "internal_id",
    "title": "title",
    "body": "body",
    "date": "date",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
_LOOKUP_FIELDS = {
    "id": "id",
    "name": "name",
    "description": "description",
    "displayOrder": "display_order",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}
_NOTE_TAG_FIELDS = {
    "id": "id",
    "noteTagId": "id",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

# связь -> (ORM модель, словарь полей)
_RELATIONS: dict[str, tuple[Any, dict[str, str]]] = {
    "": (NoteModel, _NOTE_FIELDS),
    "source": (SourceModel, _LOOKUP_FIELDS),
    "language": (LanguageModel, _LOOKUP_FIELDS),
    "tags": (NoteTagModel, _NOTE_TAG_FIELDS),
    "tags.tag": (TagModel, _LOOKUP_FIELDS),
}

_LOOKUP_DTO = {"source": Source, "language": Language}


@dataclass
class _Column:
    """Выбираемая колонка: куда положить значение и как его привести."""

    relation: str
    attr: str
    field: Field


class _ColumnPlan:
    """Колонки по связям, собранные из Projection.

    Проверяет все поля и связи до первого SQL-запроса.
    """

    def __init__(self, projection: Projection):
        self.projection = projection
        self.attrs: dict[str, list[str]] = {relation: [] for relation in _RELATIONS}

        for relation in projection.populate:
            if relation not in _RELATIONS:
                raise ValueError(f"Unknown relation '{relation}'")

        for path in projection.fields:
            relation, _, name = path.rpartition(".")
            if relation not in _RELATIONS:
                raise ValueError(f"Unknown relation '{relation}' in field '{path}'")
            mapping = _RELATIONS[relation][1]
            if name not in mapping:
                raise ValueError(f"Unknown field '{path}'")
            attr = mapping[name]
            if attr not in self.attrs[relation]:
                self.attrs[relation].append(attr)

    def wants(self, relation: str) -> bool:
        return self.projection.wants(relation)

    def columns(self, *relations: str) -> list[_Column]:
        """Колонки перечисленных связей в порядке запроса."""
        columns: list[_Column] = []
        for relation in relations:
            if relation and not self.wants(relation):
                continue
            model = _RELATIONS[relation][0]
            columns.extend(
                _Column(relation, attr, getattr(model, attr))
                for attr in self.attrs[relation]
            )
        return columns


class PeeweeNoteStore(BaseNoteStore):
    """Хранилище заметок на SQLite + Peewee + FTS5 trigram.

    Поиск:
    - без фразы: одна выборка страницы и COUNT по тем же фильтрам;
    - с фразой: COUNT и страница id через JOIN с note_fts5_index,
      затем выборка строк по id и восстановление порядка id.

    Attributes:
        db: Экземпляр SqliteExtDatabase.
    """

    def __init__(self, database: SqliteExtDatabase, create_tables: bool = True):
        """Инициализация адаптера.

        Args:
            database: Настроенный экземпляр SqliteExtDatabase.
            create_tables: Создать схему и триггеры, если их нет.
        """
        self.db = database

        if create_tables:
            create_schema(self.db)
        else:
            bind_models(self.db)

        logger.debug("PeeweeNoteStore initialized")

    # === Поиск ===

    def search_notes(
        self,
        request: SearchNotesRequest,
        pagination: PaginationRequest,
        projection: Projection,
        sort: Optional[NoteSort] = None,
    ) -> NotesPage:
        """Ищет заметки по фильтрам и (опционально) фразе.

        Все запросы выполняются в одной транзакции: COUNT, страница id
        и выборка строк видят один снапшот.

        Args:
            request: Фильтры поиска.
            pagination: Лимит и смещение.
            projection: Какие колонки и связи загружать.
            sort: Сортировка (None или пустая = date ASC).

        Returns:
            NotesPage.

        Raises:
            ValueError: Если в проекции есть неизвестное поле.
            peewee.DatabaseError: При ошибке хранилища.
        """
        start_time = time.perf_counter()
        plan = _ColumnPlan(projection)
        predicate = compose_predicate(request)
        ordering = compose_ordering(sort, order_tags=plan.wants("tags"))
        text_search = request.search_phrase is not None

        logger.debug(
            "Searching notes",
            text_search=text_search,
            source_ids=request.source_ids,
            language_ids=request.language_ids,
            tag_ids=request.tag_ids,
            limit=pagination.limit,
            offset=pagination.offset,
        )
        logger.trace("Search projection", fields=projection.fields, populate=projection.populate)

        try:
            with self.db.atomic():
                if text_search:
                    match = resolve_text_match(
                        request.search_phrase, predicate, ordering, pagination
                    )
                    total_count = match.total_count
                    next_page = match.has_next_page
                    items = self._fetch_notes_by_ids(plan, match.ids, ordering)
                else:
                    total_count = NoteModel.select(NoteModel.id).where(predicate).count()
                    next_page = has_next_page(
                        total_count, pagination.limit, pagination.offset
                    )
                    items = []
                    if total_count:
                        query = (
                            self._notes_query(plan)
                            .where(predicate)
                            .order_by(*ordering.notes)
                            .limit(pagination.limit)
                            .offset(pagination.offset)
                        )
                        items = [note for _, note in self._load_notes(plan, query, ordering)]
        except DatabaseError as e:
            logger.error_with_context(e, "Search failed", text_search=text_search)
            raise

        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Search completed",
            text_search=text_search,
            total_count=total_count,
            returned=len(items),
            has_next_page=next_page,
            latency_ms=round(latency_ms, 2),
        )

        return NotesPage(items=items, total_count=total_count, has_next_page=next_page)

    def get_notes_by_internal_ids(
        self,
        internal_ids: list[str],
        projection: Projection,
    ) -> list[Note]:
        """Загружает заметки по внешним идентификаторам (порядок по note_id)."""
        plan = _ColumnPlan(projection)
        if not internal_ids:
            return []

        ordering = compose_ordering(None, order_tags=plan.wants("tags"))

        try:
            with self.db.atomic():
                query = (
                    self._notes_query(plan)
                    .where(NoteModel.internal_id.in_(internal_ids))
                    .order_by(NoteModel.id)
                )
                notes = [note for _, note in self._load_notes(plan, query, ordering)]
        except DatabaseError as e:
            logger.error_with_context(
                e, "Fetch by internal ids failed", requested=len(internal_ids)
            )
            raise

        logger.debug(
            "Notes fetched by internal ids",
            requested=len(internal_ids),
            found=len(notes),
        )
        return notes

    def _fetch_notes_by_ids(
        self,
        plan: _ColumnPlan,
        ids: list[int],
        ordering: Ordering,
    ) -> list[Note]:
        """Загружает строки по списку id и расставляет их в порядке ids.

        Выборка по IN не сохраняет порядок, поэтому строки раскладываются
        по словарю и проецируются через исходный список.
        """
        if not ids:
            return []

        query = self._notes_query(plan).where(NoteModel.id.in_(ids))
        by_id = dict(self._load_notes(plan, query, ordering))

        notes: list[Note] = []
        for note_id in ids:
            note = by_id.get(note_id)
            if note is None:
                logger.warning("Matched note disappeared before fetch", note_id=note_id)
                continue
            notes.append(note)
        return notes

    def _notes_query(self, plan: _ColumnPlan) -> Select:
        """SELECT note_id + запрошенные колонки заметки, источника и языка."""
        columns = plan.columns("", "source", "language")
        query = NoteModel.select(NoteModel.id, *[column.field for column in columns])

        if plan.wants("source"):
            query = query.join_from(NoteModel, SourceModel, JOIN.LEFT_OUTER)
        if plan.wants("language"):
            query = query.join_from(NoteModel, LanguageModel, JOIN.LEFT_OUTER)

        return query

    def _load_notes(
        self,
        plan: _ColumnPlan,
        query: Select,
        ordering: Ordering,
    ) -> list[tuple[int, Note]]:
        """Выполняет запрос заметок и собирает DTO (с тегами, если запрошены).

        Returns:
            Пары (note_id, Note) в порядке строк запроса. Note.id заполнен,
            только если noteId был запрошен.
        """
        columns = plan.columns("", "source", "language")
        loaded: list[tuple[int, Note]] = []

        for row in query.tuples():
            note = Note()
            related = {
                relation: dto()
                for relation, dto in _LOOKUP_DTO.items()
                if plan.wants(relation)
            }
            for column, value in zip(columns, row[1:]):
                target = related[column.relation] if column.relation else note
                setattr(target, column.attr, column.field.python_value(value))
            for relation, dto in related.items():
                setattr(note, relation, dto)
            loaded.append((row[0], note))

        if plan.wants("tags") and loaded:
            self._attach_tags(plan, loaded, ordering)

        return loaded

    def _attach_tags(
        self,
        plan: _ColumnPlan,
        loaded: list[tuple[int, Note]],
        ordering: Ordering,
    ) -> None:
        """Загружает связи с тегами одним запросом и раскладывает по заметкам."""
        columns = plan.columns("tags", "tags.tag")
        query = self._tag_links_query(
            plan, [note_id for note_id, _ in loaded], ordering
        )

        grouped: dict[int, list[NoteTag]] = defaultdict(list)
        for row in query.tuples():
            note_tag = NoteTag()
            tag = Tag() if plan.wants("tags.tag") else None
            for column, value in zip(columns, row[1:]):
                target = tag if column.relation == "tags.tag" else note_tag
                setattr(target, column.attr, column.field.python_value(value))
            note_tag.tag = tag
            grouped[row[0]].append(note_tag)

        for note_id, note in loaded:
            note.tags = grouped.get(note_id, [])

    @staticmethod
    def _tag_links_query(
        plan: _ColumnPlan,
        note_ids: list[int],
        ordering: Ordering,
    ) -> Select:
        """SELECT note_id + запрошенные колонки связей и тегов.

        Таблица tags присоединяется, только если запрошены поля тега
        или связи сортируются по display_order.
        """
        columns = plan.columns("tags", "tags.tag")
        query = NoteTagModel.select(
            NoteTagModel.note, *[column.field for column in columns]
        )

        sorts_by_tag = any(term.node.model is TagModel for term in ordering.tags)
        if plan.wants("tags.tag") or sorts_by_tag:
            query = query.join(TagModel, on=(NoteTagModel.tag == TagModel.id))

        return query.where(NoteTagModel.note.in_(note_ids)).order_by(*ordering.tags)

    # === Запись ===

    def save_note(self, data: NoteInput, note_id: Optional[int] = None) -> Note:
        """Создаёт заметку или обновляет существующую.

        Триггеры notes_fts_* синхронизируют индекс в той же транзакции.
        """
        with self.db.atomic():
            if note_id is None:
                model = NoteModel.create(
                    internal_id=data.internal_id,
                    title=data.title,
                    body=data.body,
                    source=data.source_id,
                    language=data.language_id,
                    date=data.date,
                )
                logger.info("Note created", note_id=model.id, internal_id=data.internal_id)
            else:
                model = NoteModel.get_or_none(NoteModel.id == note_id)
                if model is None:
                    raise NoteNotFoundError(note_id)

                model.internal_id = data.internal_id
                model.title = data.title
                model.body = data.body
                model.source = data.source_id
                model.language = data.language_id
                model.date = data.date
                model.updated_at = datetime.now()
                model.save()
                logger.info("Note updated", note_id=note_id, internal_id=data.internal_id)

        return self._model_to_note(model)

    def associate_tags(self, note_id: int, tag_ids: list[int]) -> None:
        """Заменяет набор тегов заметки атомарно."""
        unique_ids = list(dict.fromkeys(tag_ids))

        with self.db.atomic():
            if not NoteModel.select().where(NoteModel.id == note_id).exists():
                raise NoteNotFoundError(note_id)

            found = {
                tag_id
                for (tag_id,) in TagModel.select(TagModel.id)
                .where(TagModel.id.in_(unique_ids))
                .tuples()
            }
            missing = [tag_id for tag_id in unique_ids if tag_id not in found]
            if missing:
                raise TagNotFoundError(missing)

            NoteTagModel.delete().where(NoteTagModel.note == note_id).execute()
            if unique_ids:
                now = datetime.now()
                NoteTagModel.insert_many(
                    [
                        {
                            "note": note_id,
                            "tag": tag_id,
                            "created_at": now,
                            "updated_at": now,
                        }
                        for tag_id in unique_ids
                    ]
                ).execute()

        logger.info("Tags associated", note_id=note_id, tag_count=len(unique_ids))

    def delete_note(self, note_id: int) -> None:
        """Удаляет заметку (связи удаляются каскадно, индекс триггером)."""
        with self.db.atomic():
            deleted = NoteModel.delete().where(NoteModel.id == note_id).execute()

        if not deleted:
            raise NoteNotFoundError(note_id)

        logger.info("Note deleted", note_id=note_id)

    def delete_notes_in_interval(
        self,
        to_date: datetime,
        from_date: Optional[datetime] = None,
    ) -> int:
        """Удаляет заметки с датой в [from_date, to_date].

        Aware-даты приводятся к naive UTC, как при записи заметок.
        """
        to_date = to_naive_utc(to_date)
        condition = NoteModel.date <= to_date
        if from_date is not None:
            from_date = to_naive_utc(from_date)
            condition &= NoteModel.date >= from_date

        with self.db.atomic():
            deleted = NoteModel.delete().where(condition).execute()

        logger.info(
            "Notes deleted in interval",
            from_date=from_date,
            to_date=to_date,
            deleted=deleted,
        )
        return deleted

    def _model_to_note(self, model: NoteModel) -> Note:
        """Конвертирует ORM модель в DTO (справочники только с id)."""
        return Note(
            id=model.id,
            internal_id=model.internal_id,
            title=model.title,
            body=model.body,
            date=model.date,
            source=Source(id=model.source_id),
            language=Language(id=model.language_id),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
