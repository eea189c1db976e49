"""Уровень TRACE для логов поиска заметок.

На TRACE пишутся самые объёмные подробности поиска: выражение MATCH,
списки id из FTS5 и проекция запроса. В консоль (INFO по умолчанию)
они не попадают, в файл логов пишутся (file_level=TRACE).

Функции:
    install_trace_level()
        Регистрирует TRACE (5) и добавляет Logger.trace().

Константы:
    TRACE: int
        Значение уровня, ниже DEBUG (10).
"""

import logging
from typing import Any

TRACE: int = 5

_trace_installed: bool = False


def _trace_method(
    self: logging.Logger, message: str, *args: Any, **kwargs: Any
) -> None:
    """logger.trace("FTS matched ids", ...) для стандартного Logger."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


def install_trace_level() -> None:
    """Регистрирует имя TRACE, logging.TRACE и Logger.trace.

    Идемпотентна: вызывается при импорте этого модуля и ещё раз
    из notes_core.utils.logger.
    """
    global _trace_installed

    if _trace_installed:
        return

    logging.addLevelName(TRACE, "TRACE")
    # setup_logging ищет уровни через getattr(logging, "TRACE")
    logging.TRACE = TRACE  # type: ignore[attr-defined]
    logging.Logger.trace = _trace_method  # type: ignore[attr-defined]

    _trace_installed = True


install_trace_level()
