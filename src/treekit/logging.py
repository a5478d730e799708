"""Opt-in loguru output for predicate evaluation.

treekit logs through loguru but stays silent until `enable_logging` is
called. Records emitted by `Predicate.apply` carry the predicate's field,
operator and term as bound extras, and the stderr format shows them next to
the message so that a trace of many evaluations stays readable:

    12:00:01.250 | EVALUATION | apply [000001 >=] - Predicate applied: 000001 >= 30 -> True
"""

from __future__ import annotations

import contextlib
import sys
import threading
from typing import TYPE_CHECKING, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

EVALUATION_LEVEL: Final[str] = "EVALUATION"
EVALUATION_LEVEL_NUMBER: Final[int] = 15

type LogLevel = Literal["TRACE", "DEBUG", "EVALUATION", "INFO", "WARNING", "ERROR", "CRITICAL"]
type LogFormat = Literal["short", "full"]

_LOCATIONS: Final[dict[str, str]] = {
    "short": "<cyan>{function}</cyan>",
    "full": "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>",
}

# Handler ids added by enable_logging and not yet removed.
_active_handlers: set[int] = set()
_handlers_lock = threading.Lock()

# Drop loguru's default stderr handler so enabled records are not printed twice.
with contextlib.suppress(ValueError):
    logger.remove(0)


def _register_evaluation_level() -> None:
    """Register the EVALUATION level (between DEBUG and INFO) unless it already exists."""
    try:
        logger.level(EVALUATION_LEVEL)
    except ValueError:
        logger.level(EVALUATION_LEVEL, no=EVALUATION_LEVEL_NUMBER, icon="🌳")


_register_evaluation_level()


def _record_formatter(log_format: LogFormat) -> Callable[[Record], str]:
    location = _LOCATIONS[log_format]

    def format_record(record: Record) -> str:
        extra = record["extra"]
        context = ""
        if "field" in extra and "operator" in extra:
            context = " [{extra[field]} {extra[operator]}]"
            if extra.get("term") is not None:
                context = " [{extra[field]} {extra[operator]} term={extra[term]}]"
        return (
            "<green>{time:HH:mm:ss.SSS}</green> | "
            "<level>{level: <10}</level> | "  # noqa: RUF027 - loguru format string
            f"{location}{context} - <level>{{message}}</level>\n{{exception}}"
        )

    return format_record


def _is_treekit_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)


class LoggingHandle:
    """An stderr handler added by `enable_logging`.

    Disabling the handle removes its handler; once no handle is left,
    treekit logging is switched off again. Usable as a context manager.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     predicate.apply(record, fields)
    """

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id
        with _handlers_lock:
            _active_handlers.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's handler. Safe to call more than once."""
        with _handlers_lock:
            if self.handler_id is None:
                return
            _active_handlers.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not _active_handlers:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()


def enable_logging(*, level: LogLevel = EVALUATION_LEVEL, log_format: LogFormat = "short") -> LoggingHandle:
    """Print treekit records to stderr.

    At the default EVALUATION level every `Predicate.apply` call produces one
    line with its result. DEBUG adds term match counts, and WARNING shows
    records that were missing the predicate's field.

    Args:
        level (LogLevel): Minimum level to print. Defaults to "EVALUATION".
        log_format (LogFormat): "short" shows the calling function; "full"
            shows module:function:line.

    Returns:
        LoggingHandle: Handle that removes the handler when disabled.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_treekit_record,
        format=_record_formatter(log_format),
    )
    return LoggingHandle(handler_id)
