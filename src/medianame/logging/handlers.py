"""JSON log formatting keyed around the parse being run."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attribute names every LogRecord has, plus what formatting and
# ParseContextFilter add. Anything else arrived through ``extra=``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "parse_source", "parse_tag"}


class JSONFormatter(logging.Formatter):
    """Format each record as one JSON object per line.

    Keys, in order:

    - ``timestamp``: ISO-8601 UTC with milliseconds
    - ``level``, ``logger``, ``message``
    - ``source``: the filename or path being parsed, or null outside a parse
    - ``fields``: values passed through ``extra=``, only when there are any
    - ``exception``: formatted traceback, only when there is one
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": getattr(record, "parse_source", None),
        }

        fields = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if fields:
            entry["fields"] = fields

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
