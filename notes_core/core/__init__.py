"""Чистая логика поиска без зависимости от хранилища.

Функции:
    derive_projection
        FieldSelection -> Projection.
    has_next_page
        Политика пагинации.
"""

from notes_core.core.projection import (
    flatten_fields,
    collect_populate,
    derive_projection,
)
from notes_core.core.pagination import has_next_page

__all__ = [
    "flatten_fields",
    "collect_populate",
    "derive_projection",
    "has_next_page",
]
