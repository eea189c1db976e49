"""Дерево запрошенных полей и производная проекция.

Классы:
    FieldSelection
        Какие скалярные поля и вложенные объекты запросил клиент.
    Projection
        Плоские колонки и пути связей для выборки.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass
class FieldSelection:
    """Дерево запрошенных полей, повторяющее форму ответа.

    Attributes:
        flat_fields: Скалярные поля текущего уровня (в wire-именах: noteId, createdAt).
        nested_fields: Вложенные объекты по имени поля.
    """

    flat_fields: list[str] = field(default_factory=list)
    nested_fields: dict[str, "FieldSelection"] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, shape: Mapping[str, Any]) -> "FieldSelection":
        """Строит дерево из словаря.

        Значение-словарь (в том числе пустой) означает вложенный объект,
        любое другое значение означает скалярное поле.

        Example:
            >>> FieldSelection.from_mapping(
            ...     {"noteId": True, "source": {"sourceId": True, "name": True}}
            ... )
        """
        selection = cls()
        for key, value in shape.items():
            if isinstance(value, Mapping):
                selection.nested_fields[key] = cls.from_mapping(value)
            else:
                selection.flat_fields.append(key)
        return selection

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> "FieldSelection":
        """Строит дерево из путей через точку.

        Example:
            >>> FieldSelection.from_paths(["noteId", "source.name", "tags.tag.tagId"])
        """
        root = cls()
        for path in paths:
            *branches, leaf = path.split(".")
            node = root
            for branch in branches:
                node = node.nested_fields.setdefault(branch, cls())
            if leaf not in node.flat_fields:
                node.flat_fields.append(leaf)
        return root


@dataclass
class Projection:
    """Результат разбора FieldSelection.

    Attributes:
        fields: Все скалярные колонки через точку (source.id, tags.tag.name).
        flat_fields: Колонки корневой сущности.
        nested_fields: Поддеревья вложенных объектов.
        populate: Пути связей для загрузки, дочерние раньше родительских.
    """

    fields: list[str] = field(default_factory=list)
    flat_fields: list[str] = field(default_factory=list)
    nested_fields: dict[str, FieldSelection] = field(default_factory=dict)
    populate: list[str] = field(default_factory=list)

    def wants(self, relation: str) -> bool:
        """Запрошена ли связь (source, tags, tags.tag)."""
        return relation in self.populate

    def fields_of(self, relation: str) -> list[str]:
        """Колонки указанной связи без префикса."""
        prefix = f"{relation}."
        return [
            name[len(prefix):]
            for name in self.fields
            if name.startswith(prefix) and "." not in name[len(prefix):]
        ]
