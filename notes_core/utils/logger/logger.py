"""Контекстный логгер для notes_core.

Классы:
    NotesLogger
        Адаптер над logging.Logger с поддержкой контекста.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from .levels import TRACE
from .formatters import CONTEXT_ID_KEYS, get_module_emoji, LEVEL_EMOJI


class NotesLogger:
    """Адаптер для структурированного логирования с контекстом.

    Attributes:
        name: Имя логгера.
        _logger: Обёрнутый logging.Logger.
        _context: Привязанный контекст для всех сообщений.

    Example:
        >>> logger = NotesLogger("notes_core.pipeline")
        >>> log = logger.bind(request_id="req-1")
        >>> log.info("Search started")  # -> 📥 [req-1] Search started
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self.name = name
        self._logger = logging.getLogger(name)
        self._context: dict[str, Any] = context or {}

    def bind(self, **context: Any) -> NotesLogger:
        """Создаёт новый логгер с дополнительным контекстом.

        Args:
            **context: Ключи контекста (request_id, note_id, internal_id).

        Returns:
            Новый NotesLogger с объединённым контекстом.
        """
        merged_context = {**self._context, **context}
        return NotesLogger(self.name, merged_context)

    def _log(self, level: int, msg: str, **context: Any) -> None:
        extra = {**self._context, **context}

        # RichHandler не использует наш форматтер, поэтому префикс собираем здесь
        context_ids = [str(extra[key]) for key in CONTEXT_ID_KEYS if extra.get(key)]
        context_prefix = f"[{'/'.join(context_ids)}] " if context_ids else ""

        emoji = LEVEL_EMOJI.get(level, "") or get_module_emoji(self.name)

        self._logger.log(level, f"{emoji} {context_prefix}{msg}", extra=extra)

    def trace(self, msg: str, **context: Any) -> None:
        """Логирование на уровне TRACE (5).

        Используется для дампов фильтров, MATCH-выражений и списков id.
        """
        self._log(TRACE, msg, **context)

    def debug(self, msg: str, **context: Any) -> None:
        """Логирование на уровне DEBUG (10)."""
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        """Логирование на уровне INFO (20)."""
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        """Логирование на уровне WARNING (30)."""
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, **context: Any) -> None:
        """Логирование на уровне ERROR (40)."""
        self._log(logging.ERROR, msg, **context)

    def critical(self, msg: str, **context: Any) -> None:
        """Логирование на уровне CRITICAL (50)."""
        self._log(logging.CRITICAL, msg, **context)

    def error_with_context(
        self,
        exc: Exception,
        msg: str | None = None,
        *,
        include_traceback: bool = True,
        **context: Any,
    ) -> None:
        """Логирование исключения с расширенным контекстом.

        Args:
            exc: Исключение.
            msg: Дополнительное сообщение (по умолчанию str(exc)).
            include_traceback: Включить traceback в контекст.
            **context: Дополнительный контекст.
        """
        error_context = {
            "exception_type": type(exc).__name__,
            "exception_msg": str(exc),
            **context,
        }

        if include_traceback:
            error_context["traceback"] = traceback.format_exc()

        self.error(msg or str(exc), **error_context)

    def is_enabled_for(self, level: int) -> bool:
        """Проверяет, включён ли данный уровень логирования."""
        return self._logger.isEnabledFor(level)

    @property
    def level(self) -> int:
        """Возвращает эффективный уровень логгера."""
        return self._logger.getEffectiveLevel()
