"""Тесты NotesConfig: дефолты, env variables, notes.toml, прагмы."""

from pathlib import Path

import logging

import pytest
from pydantic import ValidationError

from rich.logging import RichHandler

from notes_core.config import (
    NotesConfig,
    configure_logging,
    find_config_file,
    get_config,
)
from notes_core.utils.logger import ROOT_LOGGER_NAME, LoggingConfig, setup_logging


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Рабочая директория без notes.toml и .env."""
    monkeypatch.chdir(tmp_path)
    for name in [
        "NOTES_DB_PATH",
        "NOTES_JOURNAL_MODE",
        "NOTES_CACHE_SIZE_MB",
        "NOTES_DEFAULT_PAGE_LIMIT",
        "NOTES_LOG_LEVEL",
        "NOTES_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


class TestNotesConfig:
    """Тесты NotesConfig."""

    def test_defaults(self, isolated_cwd):
        """Дефолтные значения."""
        config = NotesConfig()

        assert config.db_path == "notes.db"
        assert config.journal_mode == "wal"
        assert config.cache_size_mb == 64
        assert config.default_page_limit == 10
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_memory_path_kept(self, isolated_cwd):
        """:memory: не превращается в путь."""
        assert NotesConfig(db_path=":memory:").db_path == ":memory:"

    def test_home_expanded(self, isolated_cwd):
        """~ в пути разворачивается."""
        config = NotesConfig(db_path="~/notes.db")
        assert config.db_path == str(Path("~/notes.db").expanduser())

    def test_env_variables(self, isolated_cwd, monkeypatch):
        """NOTES_* переопределяют дефолты."""
        monkeypatch.setenv("NOTES_JOURNAL_MODE", "delete")
        monkeypatch.setenv("NOTES_DEFAULT_PAGE_LIMIT", "25")

        config = NotesConfig()

        assert config.journal_mode == "delete"
        assert config.default_page_limit == 25

    def test_page_limit_bounds(self, isolated_cwd):
        """default_page_limit в [1, 50]."""
        with pytest.raises(ValidationError):
            NotesConfig(default_page_limit=51)

    def test_invalid_journal_mode(self, isolated_cwd):
        """Неизвестный режим журнала отклоняется."""
        with pytest.raises(ValidationError):
            NotesConfig(journal_mode="off")

    def test_toml_file(self, isolated_cwd):
        """Секции notes.toml раскладываются в поля."""
        (isolated_cwd / "notes.toml").write_text(
            '[database]\npath = "/tmp/from-toml.db"\ncache_size_mb = 16\n'
            "[search]\ndefault_limit = 20\n"
            '[logging]\nlevel = "DEBUG"\n',
            encoding="utf-8",
        )

        config = NotesConfig()

        assert config.db_path == "/tmp/from-toml.db"
        assert config.cache_size_mb == 16
        assert config.default_page_limit == 20
        assert config.log_level == "DEBUG"

    def test_kwargs_override_toml(self, isolated_cwd):
        """Явные аргументы важнее notes.toml."""
        (isolated_cwd / "notes.toml").write_text(
            "[search]\ndefault_limit = 20\n", encoding="utf-8"
        )
        assert NotesConfig(default_page_limit=5).default_page_limit == 5

    def test_broken_toml_ignored(self, isolated_cwd):
        """Битый notes.toml не ломает конфигурацию."""
        (isolated_cwd / "notes.toml").write_text("[database\n", encoding="utf-8")
        assert NotesConfig().db_path == "notes.db"

    def test_pragmas(self, isolated_cwd):
        """Прагмы включают WAL, внешние ключи и размер кэша."""
        pragmas = dict(NotesConfig(cache_size_mb=8).pragmas)

        assert pragmas["journal_mode"] == "wal"
        assert pragmas["foreign_keys"] == 1
        assert pragmas["cache_size"] == -8192


class TestConfigHelpers:
    """Тесты find_config_file и get_config."""

    def test_find_config_in_parent(self, tmp_path):
        """notes.toml ищется вверх по дереву."""
        (tmp_path / "notes.toml").write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == tmp_path / "notes.toml"

    def test_get_config_cached(self, isolated_cwd):
        """Без overrides возвращается один и тот же объект."""
        assert get_config() is get_config()

    def test_get_config_overrides(self, isolated_cwd):
        """Overrides создают новый объект."""
        config = get_config(default_page_limit=7)
        assert config.default_page_limit == 7
        assert get_config() is config


class TestLoggingFromConfig:
    """Секция [logging] доходит до хендлеров."""

    def test_to_logging_config(self, isolated_cwd, tmp_path):
        """log_level и log_file переносятся в LoggingConfig."""
        config = NotesConfig(log_level="DEBUG", log_file=tmp_path / "notes.log")

        logging_config = config.to_logging_config()

        assert isinstance(logging_config, LoggingConfig)
        assert logging_config.level == "DEBUG"
        assert logging_config.log_file == tmp_path / "notes.log"

    def test_configure_logging_from_toml(self, isolated_cwd):
        """Уровень и файл из notes.toml применяются к логгеру notes_core."""
        log_file = isolated_cwd / "notes.log"
        (isolated_cwd / "notes.toml").write_text(
            f'[logging]\nlevel = "DEBUG"\nfile = "{log_file.as_posix()}"\n',
            encoding="utf-8",
        )

        try:
            config = configure_logging()

            handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
            console = [h for h in handlers if isinstance(h, RichHandler)]
            files = [h for h in handlers if isinstance(h, logging.FileHandler)]

            assert config.log_level == "DEBUG"
            assert console[0].level == logging.DEBUG
            assert len(files) == 1
            assert files[0].baseFilename == str(log_file)
        finally:
            setup_logging(LoggingConfig())
