"""Исключения notes_core.

Классы:
    NotesCoreError
        Базовое исключение библиотеки.
    NoteNotFoundError
        Заметка с указанным id не существует.
    TagNotFoundError
        Один или несколько тегов не существуют.
"""


class NotesCoreError(LookupError):
    """Базовое исключение notes_core."""


class NoteNotFoundError(NotesCoreError):
    """Заметка не найдена."""

    def __init__(self, note_id: int):
        self.note_id = note_id
        super().__init__(f"Note with id {note_id} does not exist")


class TagNotFoundError(NotesCoreError):
    """Теги не найдены."""

    def __init__(self, tag_ids: list[int]):
        self.tag_ids = tag_ids
        ids = ", ".join(str(tag_id) for tag_id in tag_ids)
        super().__init__(f"Tags with ids {ids} do not exist")
