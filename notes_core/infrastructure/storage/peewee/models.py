"""Внутренние ORM модели для Peewee (скрыты от внешнего API).

Классы:
    BaseModel
        Базовая модель с общими настройками.
    LookupModel
        Общие поля справочников.
    SourceModel, LanguageModel, TagModel
        Справочники.
    NoteModel
        Заметка.
    NoteTagModel
        Связь заметки с тегом.
    NoteIndexModel
        FTS5 индекс (external content) над notes.title и notes.body.
"""

from datetime import datetime

from peewee import (
    Model,
    AutoField,
    TextField,
    IntegerField,
    ForeignKeyField,
    DateTimeField,
)
from playhouse.sqlite_ext import FTS5Model, RowIDField, SearchField


class BaseModel(Model):
    """Базовая модель (без привязки к конкретной БД).

    База данных устанавливается в адаптере через _meta.database.
    """

    class Meta:
        database = None  # Будет установлена в адаптере


class LookupModel(BaseModel):
    """Общие поля справочников.

    Attributes:
        name: Название.
        description: Описание (nullable).
        display_order: Порядок отображения.
        created_at: Дата создания.
        updated_at: Дата изменения.
    """

    name = TextField()
    description = TextField(null=True)
    display_order = IntegerField(default=0)
    created_at = DateTimeField(default=datetime.now)
    updated_at = DateTimeField(default=datetime.now)


class SourceModel(LookupModel):
    id = AutoField(column_name="source_id")

    class Meta:
        table_name = "sources"


class LanguageModel(LookupModel):
    id = AutoField(column_name="language_id")

    class Meta:
        table_name = "languages"


class TagModel(LookupModel):
    id = AutoField(column_name="tag_id")

    class Meta:
        table_name = "tags"


class NoteModel(BaseModel):
    """Внутренняя ORM модель заметки.

    Attributes:
        id: Суррогатный ключ (колонка note_id, rowid для FTS5).
        internal_id: Внешний уникальный идентификатор.
        title: Заголовок.
        body: Текст.
        source: Источник.
        language: Язык.
        date: Логическая дата заметки.
        created_at: Дата создания.
        updated_at: Дата изменения.
    """

    id = AutoField(column_name="note_id")
    internal_id = TextField(unique=True)
    title = TextField()
    body = TextField()
    source = ForeignKeyField(
        SourceModel,
        column_name="source_id",
        backref="notes",
        on_delete="RESTRICT",
    )
    language = ForeignKeyField(
        LanguageModel,
        column_name="language_id",
        backref="notes",
        on_delete="RESTRICT",
    )
    date = DateTimeField(index=True)
    created_at = DateTimeField(default=datetime.now, index=True)
    updated_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = "notes"
        indexes = (
            (("source", "internal_id"), False),
            (("language", "source", "internal_id"), False),
        )


class NoteTagModel(BaseModel):
    """Связь заметки с тегом (без собственных атрибутов, кроме дат)."""

    id = AutoField(column_name="note_tag_id")
    note = ForeignKeyField(
        NoteModel,
        column_name="note_id",
        backref="note_tags",
        on_delete="CASCADE",
    )
    tag = ForeignKeyField(
        TagModel,
        column_name="tag_id",
        backref="note_tags",
        on_delete="RESTRICT",
    )
    created_at = DateTimeField(default=datetime.now)
    updated_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = "note_tags"
        indexes = ((("note", "tag"), True),)


class NoteIndexModel(FTS5Model):
    """FTS5 индекс заметок.

    Таблица создаётся вручную в schema.create_schema (content='notes',
    tokenize='trigram') и заполняется только триггерами. Модель нужна
    лишь для JOIN и MATCH в запросах.
    """

    rowid = RowIDField()
    title = SearchField()
    body = SearchField()

    class Meta:
        database = None
        table_name = "note_fts5_index"


ALL_MODELS = (
    SourceModel,
    LanguageModel,
    TagModel,
    NoteModel,
    NoteTagModel,
    NoteIndexModel,
)
