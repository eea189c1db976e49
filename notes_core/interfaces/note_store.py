"""Интерфейс хранилища заметок.

Классы:
    BaseNoteStore
        ABC для хранилищ с полнотекстовым поиском заметок.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from notes_core.domain import (
    Note,
    NoteInput,
    NoteSort,
    NotesPage,
    PaginationRequest,
    Projection,
    SearchNotesRequest,
)


class BaseNoteStore(ABC):
    """Абстрактный интерфейс хранилища заметок.

    Скрывает детали реализации (ORM, FTS-движок, триггеры синхронизации).
    """

    @abstractmethod
    def search_notes(
        self,
        request: SearchNotesRequest,
        pagination: PaginationRequest,
        projection: Projection,
        sort: Optional[NoteSort] = None,
    ) -> NotesPage:
        """Ищет заметки по фильтрам и (опционально) фразе.

        Все запросы одного вызова выполняются в одной транзакции.

        Args:
            request: Фильтры поиска.
            pagination: Лимит и смещение.
            projection: Какие колонки и связи загружать.
            sort: Сортировка (None или пустой список = по дате).

        Returns:
            NotesPage с заметками, общим количеством и флагом следующей страницы.

        Raises:
            ValueError: Если в проекции есть неизвестное поле.
            peewee.DatabaseError: При ошибке хранилища.
        """
        raise NotImplementedError

    @abstractmethod
    def get_notes_by_internal_ids(
        self,
        internal_ids: list[str],
        projection: Projection,
    ) -> list[Note]:
        """Загружает заметки по внешним идентификаторам.

        Args:
            internal_ids: Внешние идентификаторы.
            projection: Какие колонки и связи загружать.

        Returns:
            Найденные заметки (отсутствующие id пропускаются).
        """
        raise NotImplementedError

    @abstractmethod
    def save_note(self, data: NoteInput, note_id: Optional[int] = None) -> Note:
        """Создаёт заметку или обновляет существующую.

        Args:
            data: Данные заметки.
            note_id: Идентификатор для обновления (None = создание).

        Returns:
            Сохранённая заметка с id и датами.

        Raises:
            NoteNotFoundError: Если note_id указан, но заметки нет.
        """
        raise NotImplementedError

    @abstractmethod
    def associate_tags(self, note_id: int, tag_ids: list[int]) -> None:
        """Заменяет набор тегов заметки.

        Args:
            note_id: Идентификатор заметки.
            tag_ids: Новый набор тегов.

        Raises:
            NoteNotFoundError: Если заметки нет.
            TagNotFoundError: Если хотя бы одного тега нет.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_note(self, note_id: int) -> None:
        """Удаляет заметку вместе со связями и записью индекса.

        Raises:
            NoteNotFoundError: Если заметки нет.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_notes_in_interval(
        self,
        to_date: datetime,
        from_date: Optional[datetime] = None,
    ) -> int:
        """Удаляет заметки с датой в интервале [from_date, to_date].

        Args:
            to_date: Верхняя граница (включительно).
            from_date: Нижняя граница (None = без нижней границы).

        Returns:
            Количество удалённых заметок.
        """
        raise NotImplementedError
