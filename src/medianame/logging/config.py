"""Apply a LoggingConfig to the root logger.

Every handler gets the same formatter and a ParseContextFilter, so each
record says which filename was being parsed when it was emitted: text lines
carry a ``[source] `` tag and JSON objects a ``source`` key.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from medianame.logging.context import ParseContextFilter
from medianame.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from medianame.config.models import LoggingConfig

# parse_tag is "[filename] " while parsing and empty otherwise.
TEXT_FORMAT = "%(asctime)s - %(parse_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def build_formatter(log_format: str) -> logging.Formatter:
    """Return the formatter for ``"json"`` or ``"text"`` output."""
    if log_format.lower() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or warn on stderr and return None."""
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> list[logging.Handler]:
    """Replace the root logger's handlers according to ``config``.

    Records go to the log file when one is set and can be opened, and to
    stderr when ``include_stderr`` is set or there is no usable file.

    Args:
        config: Validated logging configuration.

    Returns:
        The handlers now installed on the root logger.
    """
    level = logging.getLevelName(config.level.upper())

    handlers: list[logging.Handler] = []
    file_handler = _open_log_file(config) if config.file else None
    if file_handler is not None:
        handlers.append(file_handler)
    if config.include_stderr or file_handler is None:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = build_formatter(config.format)
    context_filter = ParseContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers[:] = handlers
    return handlers
