"""Вывод проекции из дерева запрошенных полей.

Функции:
    flatten_fields
        Плоский список колонок с заменой идентификаторов на "id".
    collect_populate
        Пути связей, дочерние раньше родительских.
    derive_projection
        Полная Projection для адаптера хранилища.
"""

from typing import Optional

from notes_core.domain.projection import FieldSelection, Projection


def flatten_fields(
    selection: FieldSelection,
    prefix: str = "",
    root_id_field: str = "",
) -> list[str]:
    """Разворачивает дерево в список колонок через точку.

    Внутри вложенного объекта `source` поле, которое начинается с
    `source` и заканчивается на `Id`, превращается в `source.id`.
    На корне поле `root_id_field` (например, `noteId`) превращается в `id`.

    Args:
        selection: Дерево запрошенных полей.
        prefix: Префикс текущего уровня ("" для корня, "source." и т.д.).
        root_id_field: Wire-имя идентификатора корневой сущности.

    Returns:
        Список колонок в порядке обхода: сначала поля уровня, потом вложенные.
    """
    parts = prefix.split(".")
    current_key = parts[-2] if len(parts) > 1 else None

    fields: list[str] = []
    for name in selection.flat_fields:
        if current_key is not None:
            if name.startswith(current_key) and name.endswith("Id"):
                fields.append(f"{prefix}id")
            else:
                fields.append(f"{prefix}{name}")
        elif root_id_field and name == root_id_field:
            fields.append("id")
        else:
            fields.append(f"{prefix}{name}")

    for key, nested in selection.nested_fields.items():
        fields.extend(flatten_fields(nested, f"{prefix}{key}."))

    return fields


def collect_populate(selection: FieldSelection, prefix: str = "") -> list[str]:
    """Собирает пути связей для загрузки.

    На каждом уровне сначала идут все потомки каждой связи, затем
    ключи самого уровня: {contact: {address: {}}} -> ["contact.address", "contact"].

    Args:
        selection: Дерево запрошенных полей.
        prefix: Префикс текущего уровня.

    Returns:
        Список путей через точку.
    """
    keys: list[str] = []
    for key, nested in selection.nested_fields.items():
        keys.extend(collect_populate(nested, f"{prefix}{key}."))
    keys.extend(f"{prefix}{key}" for key in selection.nested_fields)
    return keys


def derive_projection(
    selection: FieldSelection,
    root_id_field: Optional[str] = None,
) -> Projection:
    """Строит проекцию для адаптера хранилища.

    Args:
        selection: Дерево полей корневой сущности (уровень items для поиска).
        root_id_field: Wire-имя идентификатора корня (noteId).

    Returns:
        Projection с колонками, поддеревьями и путями связей.
    """
    fields = flatten_fields(selection, "", root_id_field or "")
    return Projection(
        fields=fields,
        flat_fields=[name for name in fields if "." not in name],
        nested_fields=dict(selection.nested_fields),
        populate=collect_populate(selection),
    )
