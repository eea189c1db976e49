"""
Конфигурация pytest для тестов notes_core.

Определяет фикстуры для:
- Инициализации in-memory базы данных со схемой и FTS5 индексом
- Заполнения справочников (источники, языки, теги)
- Создания тестовых заметок
"""

from datetime import datetime

import pytest

from notes_core import NotesCore, PeeweeNoteStore, init_peewee_database
from notes_core.config import NotesConfig, reset_config
from notes_core.domain import NoteInput, SearchNotesRequest
from notes_core.infrastructure.storage.peewee.models import (
    LanguageModel,
    SourceModel,
    TagModel,
)

# Интервал, покрывающий все тестовые заметки
FROM_DATE = datetime(2003, 2, 14)
TO_DATE = datetime(2003, 2, 18)


@pytest.fixture(autouse=True)
def clean_config():
    """Сбрасывает глобальный конфиг между тестами."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def test_config():
    """Конфигурация для in-memory базы."""
    return NotesConfig(db_path=":memory:", journal_mode="memory")


@pytest.fixture(scope="function")
def notes_db(test_config):
    """
    In-memory база данных.

    Scope: function - каждый тест получает чистую базу.
    """
    database = init_peewee_database(":memory:", config=test_config)
    yield database
    if not database.is_closed():
        database.close()


@pytest.fixture
def store(notes_db):
    """PeeweeNoteStore со схемой, FTS5 индексом и триггерами."""
    return PeeweeNoteStore(notes_db)


@pytest.fixture
def lookups(store):
    """Справочники с id 1..4: name=<вид>_<id>, display_order=<id>."""
    for lookup_id in range(1, 5):
        SourceModel.create(id=lookup_id, name=f"source_{lookup_id}", display_order=lookup_id)
        LanguageModel.create(id=lookup_id, name=f"language_{lookup_id}", display_order=lookup_id)
        TagModel.create(id=lookup_id, name=f"tag_{lookup_id}", display_order=lookup_id)
    return store


@pytest.fixture
def make_note(lookups):
    """Фабрика заметок: сохраняет заметку через store.save_note."""

    def _make(
        internal_id: str,
        title: str = "title",
        body: str = "body",
        date: datetime = datetime(2003, 2, 14, 21, 0),
        source_id: int = 1,
        language_id: int = 1,
        tag_ids: list[int] | None = None,
    ):
        note = lookups.save_note(
            NoteInput(
                internal_id=internal_id,
                title=title,
                body=body,
                source_id=source_id,
                language_id=language_id,
                date=date,
            )
        )
        if tag_ids:
            lookups.associate_tags(note.id, tag_ids)
        return note

    return _make


@pytest.fixture
def core(store):
    """NotesCore поверх тестового хранилища."""
    return NotesCore(store=store, default_page_limit=10)


@pytest.fixture
def fruit_notes(make_note):
    """
    Семь заметок для полнотекстового поиска.

    Подстроку "nan" содержат заметки 1, 2, 3 и 6 (banana в title или body).
    Заметка 6 из источника 2, остальные из источника 1.
    """
    rows = [
        ("banana", "orange", datetime(2003, 2, 14, 21, 0), 1),
        ("apple", "strawberry banana", datetime(2003, 2, 15, 6, 0), 1),
        ("apple", "various words and a banana", datetime(2003, 2, 15, 11, 0), 1),
        ("strawberry", "orange strawberry", datetime(2003, 2, 15, 18, 30), 1),
        ("grape", "dragonfruit", datetime(2003, 2, 16, 1, 0), 1),
        ("banana", "peach", datetime(2003, 2, 16, 3, 15), 2),
        ("pear", "kiwi", datetime(2003, 2, 16, 3, 18), 1),
    ]
    return [
        make_note(f"int_id{index}", title, body, date, source_id=source_id)
        for index, (title, body, date, source_id) in enumerate(rows, start=1)
    ]


@pytest.fixture
def same_date_notes(make_note):
    """
    Четыре заметки с одной датой для многоуровневой сортировки.

    (source, language): 1:(1, 2), 2:(1, 1), 3:(2, 2), 4:(2, 1).
    """
    date = datetime(2003, 2, 14, 21, 0)
    pairs = [(1, 2), (1, 1), (2, 2), (2, 1)]
    return [
        make_note(f"int_id{index}", date=date, source_id=source_id, language_id=language_id)
        for index, (source_id, language_id) in enumerate(pairs, start=1)
    ]


@pytest.fixture
def tagged_notes(make_note):
    """
    Пять заметок с тегами.

    Теги: 1 -> [1, 3], 2 -> [1], 3 -> [1, 2], 4 -> [2], 5 -> [1].
    Источники: 1, 1, 2, 2, 2. Языки: 2, 1, 2, 1, 1.
    """
    rows = [
        (1, 2, datetime(2003, 2, 14, 21, 0), [1, 3]),
        (1, 1, datetime(2003, 2, 15, 6, 0), [1]),
        (2, 2, datetime(2003, 2, 15, 11, 0), [1, 2]),
        (2, 1, datetime(2003, 2, 16, 3, 15), [2]),
        (2, 1, datetime(2003, 2, 16, 3, 16), [1]),
    ]
    return [
        make_note(
            f"int_id{index}",
            date=date,
            source_id=source_id,
            language_id=language_id,
            tag_ids=tag_ids,
        )
        for index, (source_id, language_id, date, tag_ids) in enumerate(rows, start=1)
    ]


@pytest.fixture
def search_request():
    """Фабрика SearchNotesRequest с интервалом на все тестовые заметки."""

    def _build(**kwargs) -> SearchNotesRequest:
        kwargs.setdefault("from_date", FROM_DATE)
        kwargs.setdefault("to_date", TO_DATE)
        return SearchNotesRequest(**kwargs)

    return _build
