"""Parse context for structured logging.

Tracks the input currently being parsed using contextvars, so that log
records emitted deep inside the cascade can say which filename they belong
to.
"""

from __future__ import annotations

import contextvars
import logging
import os
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

# Longest source shown in the compact text-format tag.
_TAG_WIDTH = 40

_parse_source: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "parse_source", default=None
)


def get_parse_source() -> str | None:
    """Get the input currently being parsed, or None."""
    return _parse_source.get()


@contextmanager
def parse_context(source: str | os.PathLike[str]) -> Generator[None, None, None]:
    """Context manager marking ``source`` as the input being parsed.

    The previous value is restored on exit, so nested parses are safe.

    Example:
        with parse_context("Show.S01E02.mkv"):
            logger.debug("claimed")  # record carries parse_source
    """
    token = _parse_source.set(os.fspath(source))
    try:
        yield
    finally:
        _parse_source.reset(token)


def _format_tag(source: str | None) -> str:
    if not source:
        return ""
    if len(source) > _TAG_WIDTH:
        source = source[: _TAG_WIDTH - 3] + "..."
    return f"[{source}] "


class ParseContextFilter(logging.Filter):
    """Logging filter that injects the parse context into log records.

    Adds ``parse_source`` (raw value, for JSON output) and ``parse_tag``
    (compact ``[source] `` prefix or empty string, for text output).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        source = get_parse_source()
        record.parse_source = source
        record.parse_tag = _format_tag(source)
        return True
