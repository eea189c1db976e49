"""Тесты вывода проекции (flatten_fields, collect_populate, derive_projection)."""

from notes_core.core.projection import (
    collect_populate,
    derive_projection,
    flatten_fields,
)
from notes_core.domain import FieldSelection


def _contact_and_location() -> FieldSelection:
    return FieldSelection(
        nested_fields={
            "contact": FieldSelection(flat_fields=["email", "phone"]),
            "location": FieldSelection(flat_fields=["city", "country"]),
        }
    )


def _contact_with_address() -> FieldSelection:
    return FieldSelection(
        nested_fields={
            "contact": FieldSelection(
                flat_fields=["email", "phone"],
                nested_fields={
                    "address": FieldSelection(flat_fields=["street", "zip"]),
                },
            ),
        }
    )


class TestFlattenFields:
    """Тесты flatten_fields."""

    def test_empty_selection(self):
        """Пустое дерево даёт пустой список."""
        assert flatten_fields(FieldSelection()) == []

    def test_flat_fields(self):
        """Поля корня возвращаются как есть."""
        selection = FieldSelection(flat_fields=["name", "age", "address"])
        assert flatten_fields(selection) == ["name", "age", "address"]

    def test_flat_fields_with_prefix(self):
        """Префикс добавляется к каждому полю."""
        selection = FieldSelection(flat_fields=["name", "age", "address"])
        assert flatten_fields(selection, "user.") == [
            "user.name",
            "user.age",
            "user.address",
        ]

    def test_root_id_field_ignored_below_root(self):
        """root_id_field действует только на корне."""
        selection = FieldSelection(flat_fields=["name", "age", "address"])
        assert flatten_fields(selection, "user.", "userId") == [
            "user.name",
            "user.age",
            "user.address",
        ]

    def test_nested_fields(self):
        """Вложенные объекты разворачиваются через точку."""
        assert flatten_fields(_contact_and_location()) == [
            "contact.email",
            "contact.phone",
            "location.city",
            "location.country",
        ]

    def test_root_id_replaced(self):
        """noteId на корне превращается в id."""
        selection = FieldSelection(flat_fields=["noteId", "title"])
        assert flatten_fields(selection, root_id_field="noteId") == ["id", "title"]

    def test_nested_id_replaced(self):
        """sourceId внутри source превращается в source.id."""
        selection = FieldSelection.from_mapping(
            {"source": {"sourceId": True, "name": True}}
        )
        assert flatten_fields(selection) == ["source.id", "source.name"]

    def test_deeply_nested_id_replaced(self):
        """tagId внутри tags.tag превращается в tags.tag.id."""
        selection = FieldSelection.from_mapping(
            {"tags": {"noteTagId": True, "tag": {"tagId": True, "name": True}}}
        )
        assert flatten_fields(selection) == [
            "tags.noteTagId",
            "tags.tag.id",
            "tags.tag.name",
        ]

    def test_flat_fields_before_nested(self):
        """Поля уровня идут раньше полей вложенных объектов."""
        selection = FieldSelection.from_mapping(
            {"source": {"name": True}, "title": True}
        )
        assert flatten_fields(selection) == ["title", "source.name"]


class TestCollectPopulate:
    """Тесты collect_populate."""

    def test_empty_selection(self):
        """Без вложенных объектов связей нет."""
        assert collect_populate(FieldSelection()) == []

    def test_nested_keys(self):
        """Ключи первого уровня."""
        assert collect_populate(_contact_and_location()) == ["contact", "location"]

    def test_nested_keys_with_prefix(self):
        """Префикс добавляется к ключам."""
        assert collect_populate(_contact_and_location(), "user.") == [
            "user.contact",
            "user.location",
        ]

    def test_children_before_parent(self):
        """Дочерние пути идут раньше родительских."""
        assert collect_populate(_contact_with_address()) == [
            "contact.address",
            "contact",
        ]

    def test_children_before_parent_with_prefix(self):
        """Рекурсия с префиксом."""
        assert collect_populate(_contact_with_address(), "user.") == [
            "user.contact.address",
            "user.contact",
        ]

    def test_empty_nested_object_populated(self):
        """Объект без полей всё равно попадает в populate."""
        selection = FieldSelection.from_mapping({"source": {}})
        assert collect_populate(selection) == ["source"]


class TestDeriveProjection:
    """Тесты derive_projection."""

    def test_note_projection(self):
        """Полная форма заметки."""
        selection = FieldSelection.from_mapping(
            {
                "noteId": True,
                "title": True,
                "source": {"sourceId": True, "name": True},
                "tags": {"noteTagId": True, "tag": {"tagId": True}},
            }
        )

        projection = derive_projection(selection, root_id_field="noteId")

        assert projection.fields == [
            "id",
            "title",
            "source.id",
            "source.name",
            "tags.noteTagId",
            "tags.tag.id",
        ]
        assert projection.flat_fields == ["id", "title"]
        assert list(projection.nested_fields) == ["source", "tags"]
        assert projection.populate == ["tags.tag", "source", "tags"]

    def test_wants_and_fields_of(self):
        """wants и fields_of смотрят на populate и fields."""
        selection = FieldSelection.from_mapping(
            {"noteId": True, "language": {"languageId": True, "name": True}}
        )

        projection = derive_projection(selection, root_id_field="noteId")

        assert projection.wants("language")
        assert not projection.wants("source")
        assert projection.fields_of("language") == ["id", "name"]

    def test_without_root_id_field(self):
        """Без root_id_field noteId остаётся как есть."""
        selection = FieldSelection(flat_fields=["noteId"])
        assert derive_projection(selection).fields == ["noteId"]
