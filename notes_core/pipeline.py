"""Фасад поиска заметок.

Классы:
    NotesCore
        Точка входа: проекция из формы ответа + делегирование хранилищу.

Константы:
    DEFAULT_NOTE_SELECTION
        Полная форма заметки (все поля, источник, язык, теги).
"""

from datetime import datetime
from typing import Optional

from notes_core.config import get_config
from notes_core.core.projection import derive_projection
from notes_core.domain import (
    FieldSelection,
    Note,
    NoteInput,
    NoteSort,
    NotesPage,
    PaginationRequest,
    SearchNotesRequest,
)
from notes_core.interfaces import BaseNoteStore
from notes_core.utils.logger import get_logger

logger = get_logger(__name__)

# Wire-имя идентификатора заметки
NOTE_ID_FIELD = "noteId"

_LOOKUP_SHAPE = {
    "name": True,
    "description": True,
    "displayOrder": True,
    "createdAt": True,
    "updatedAt": True,
}

DEFAULT_NOTE_SELECTION = FieldSelection.from_mapping(
    {
        "noteId": True,
        "internalId": True,
        "title": True,
        "body": True,
        "date": True,
        "createdAt": True,
        "updatedAt": True,
        "source": {"sourceId": True, **_LOOKUP_SHAPE},
        "language": {"languageId": True, **_LOOKUP_SHAPE},
        "tags": {
            "noteTagId": True,
            "createdAt": True,
            "updatedAt": True,
            "tag": {"tagId": True, **_LOOKUP_SHAPE},
        },
    }
)


class NotesCore:
    """Фасад поиска заметок.

    Принимает форму ответа в виде FieldSelection, выводит из неё
    проекцию и передаёт хранилищу вместе с фильтрами.

    Пример использования:
        >>> from notes_core import NotesCore, init_peewee_database, PeeweeNoteStore
        >>> from notes_core.domain import SearchNotesRequest, PaginationRequest
        >>>
        >>> store = PeeweeNoteStore(init_peewee_database("notes.db"))
        >>> core = NotesCore(store=store)
        >>> page = core.search(
        ...     SearchNotesRequest(from_date=start, to_date=end, search_phrase="banana"),
        ...     PaginationRequest(limit=2),
        ... )
    """

    def __init__(self, store: BaseNoteStore, default_page_limit: Optional[int] = None):
        """Инициализация фасада.

        Args:
            store: Хранилище заметок.
            default_page_limit: Лимит страницы, если пагинация не передана
                (None = из NotesConfig).
        """
        self.store = store
        if default_page_limit is None:
            default_page_limit = get_config().default_page_limit
        self.default_page_limit = default_page_limit

    def search(
        self,
        request: SearchNotesRequest,
        pagination: Optional[PaginationRequest] = None,
        sort: Optional[NoteSort] = None,
        selection: Optional[FieldSelection] = None,
    ) -> NotesPage:
        """Ищет заметки.

        Args:
            request: Фильтры поиска (уже провалидированы).
            pagination: Лимит и смещение (None = первая страница).
            sort: Сортировка (None = по дате, теги по displayOrder).
            selection: Форма ответа на уровне конверта
                ({items: {...}, totalCount, hasNextPage}); None = полная заметка.

        Returns:
            NotesPage.

        Raises:
            ValueError: Если запрошено неизвестное поле.
        """
        pagination = pagination or PaginationRequest(limit=self.default_page_limit)
        projection = derive_projection(
            self._items_selection(selection), root_id_field=NOTE_ID_FIELD
        )

        logger.debug(
            "Search requested",
            populate=projection.populate,
            sorts=len(sort.sorts) if sort else 0,
        )

        return self.store.search_notes(request, pagination, projection, sort)

    def get_notes_by_internal_ids(
        self,
        internal_ids: list[str],
        selection: Optional[FieldSelection] = None,
    ) -> list[Note]:
        """Загружает заметки по внешним идентификаторам.

        Args:
            internal_ids: Внешние идентификаторы.
            selection: Форма заметки (None = полная заметка).
        """
        projection = derive_projection(
            selection or DEFAULT_NOTE_SELECTION, root_id_field=NOTE_ID_FIELD
        )
        return self.store.get_notes_by_internal_ids(internal_ids, projection)

    def save_note(self, data: NoteInput, note_id: Optional[int] = None) -> Note:
        """Создаёт или обновляет заметку."""
        return self.store.save_note(data, note_id)

    def associate_tags(self, note_id: int, tag_ids: list[int]) -> None:
        """Заменяет набор тегов заметки."""
        self.store.associate_tags(note_id, tag_ids)

    def delete_note(self, note_id: int) -> None:
        """Удаляет заметку."""
        self.store.delete_note(note_id)

    def delete_notes_in_interval(
        self,
        to_date: datetime,
        from_date: Optional[datetime] = None,
    ) -> int:
        """Удаляет заметки с датой в интервале."""
        return self.store.delete_notes_in_interval(to_date, from_date)

    @staticmethod
    def _items_selection(selection: Optional[FieldSelection]) -> FieldSelection:
        if selection is None:
            return DEFAULT_NOTE_SELECTION
        return selection.nested_fields.get("items", FieldSelection())
