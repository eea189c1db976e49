"""Тесты фасада NotesCore с mock-хранилищем."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from notes_core import DEFAULT_NOTE_SELECTION, NotesCore
from notes_core.domain import (
    FieldSelection,
    NoteInput,
    NoteSort,
    NotesPage,
    PaginationRequest,
    SearchNotesRequest,
)
from notes_core.interfaces import BaseNoteStore


@pytest.fixture
def mock_store():
    store = MagicMock(spec=BaseNoteStore)
    store.search_notes.return_value = NotesPage()
    store.get_notes_by_internal_ids.return_value = []
    return store


@pytest.fixture
def request_():
    return SearchNotesRequest(
        from_date=datetime(2003, 2, 14),
        to_date=datetime(2003, 2, 18),
    )


class TestNotesCoreSearch:
    """Тесты NotesCore.search."""

    def test_items_subtree_used(self, mock_store, request_):
        """Проекция строится по поддереву items, totalCount игнорируется."""
        core = NotesCore(store=mock_store, default_page_limit=10)
        selection = FieldSelection.from_mapping(
            {
                "items": {"noteId": True, "source": {"sourceId": True}},
                "totalCount": True,
                "hasNextPage": True,
            }
        )

        core.search(request_, PaginationRequest(limit=2), selection=selection)

        _, pagination, projection, sort = mock_store.search_notes.call_args.args
        assert pagination.limit == 2
        assert projection.fields == ["id", "source.id"]
        assert projection.populate == ["source"]
        assert sort is None

    def test_default_selection(self, mock_store, request_):
        """Без selection загружается полная заметка."""
        core = NotesCore(store=mock_store, default_page_limit=10)

        core.search(request_)

        projection = mock_store.search_notes.call_args.args[2]
        assert projection.populate == ["tags.tag", "source", "language", "tags"]
        assert "id" in projection.fields
        assert "tags.tag.id" in projection.fields

    def test_envelope_without_items(self, mock_store, request_):
        """Запрошены только счётчики: заметки без колонок."""
        core = NotesCore(store=mock_store, default_page_limit=10)
        selection = FieldSelection(flat_fields=["totalCount"])

        core.search(request_, selection=selection)

        projection = mock_store.search_notes.call_args.args[2]
        assert projection.fields == []
        assert projection.populate == []

    def test_default_page_limit(self, mock_store, request_):
        """Без пагинации используется default_page_limit."""
        core = NotesCore(store=mock_store, default_page_limit=3)

        core.search(request_)

        pagination = mock_store.search_notes.call_args.args[1]
        assert pagination.limit == 3
        assert pagination.offset == 0

    def test_default_page_limit_from_config(self, mock_store, monkeypatch, tmp_path):
        """default_page_limit берётся из NotesConfig."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("NOTES_DEFAULT_PAGE_LIMIT", "7")

        core = NotesCore(store=mock_store)

        assert core.default_page_limit == 7

    def test_sort_passed_through(self, mock_store, request_):
        """Сортировка передаётся хранилищу без изменений."""
        core = NotesCore(store=mock_store, default_page_limit=10)
        sort = NoteSort.of(("date", "desc"))

        core.search(request_, sort=sort)

        assert mock_store.search_notes.call_args.args[3] is sort


class TestNotesCoreDelegation:
    """Тесты делегирования записи и выборки по internal_id."""

    def test_get_notes_by_internal_ids(self, mock_store):
        """Проекция строится по форме заметки без конверта."""
        core = NotesCore(store=mock_store, default_page_limit=10)
        selection = FieldSelection.from_mapping({"internalId": True})

        core.get_notes_by_internal_ids(["a", "b"], selection)

        internal_ids, projection = mock_store.get_notes_by_internal_ids.call_args.args
        assert internal_ids == ["a", "b"]
        assert projection.fields == ["internalId"]

    def test_writes_delegated(self, mock_store):
        """save/associate/delete уходят в хранилище."""
        core = NotesCore(store=mock_store, default_page_limit=10)
        data = NoteInput(internal_id="n1", title="t", body="b", source_id=1, language_id=1)

        core.save_note(data)
        core.associate_tags(1, [2, 3])
        core.delete_note(1)
        core.delete_notes_in_interval(datetime(2003, 2, 18))

        mock_store.save_note.assert_called_once_with(data, None)
        mock_store.associate_tags.assert_called_once_with(1, [2, 3])
        mock_store.delete_note.assert_called_once_with(1)
        mock_store.delete_notes_in_interval.assert_called_once_with(
            datetime(2003, 2, 18), None
        )

    def test_default_selection_shape(self):
        """Полная форма содержит все связи."""
        assert set(DEFAULT_NOTE_SELECTION.nested_fields) == {"source", "language", "tags"}
