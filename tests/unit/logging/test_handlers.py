"""Unit tests for JSONFormatter output."""

import json
import logging
import sys
from datetime import datetime, timezone

from medianame.logging.context import ParseContextFilter, parse_context
from medianame.logging.handlers import JSONFormatter


def _record(
    name: str = "medianame.cascade",
    level: int = logging.DEBUG,
    msg: str = "Pattern resolution matched",
    args: tuple = (),
    exc_info=None,
) -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="cascade.py",
        lineno=42,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


def _format(record: logging.LogRecord) -> dict:
    return json.loads(JSONFormatter().format(record))


class TestJSONFormatter:
    """Tests for JSONFormatter output."""

    def test_top_level_keys(self) -> None:
        """Should emit a fixed set of keys, in order, with source null."""
        data = _format(_record())

        assert list(data) == ["timestamp", "level", "logger", "message", "source"]
        assert data["level"] == "DEBUG"
        assert data["logger"] == "medianame.cascade"
        assert data["message"] == "Pattern resolution matched"
        assert data["source"] is None

    def test_timestamp_is_utc_milliseconds(self) -> None:
        """Should render record.created as UTC with millisecond precision."""
        record = _record()
        record.created = 1577836800.25  # 2020-01-01 00:00:00.250 UTC

        data = _format(record)

        assert data["timestamp"] == "2020-01-01T00:00:00.250+00:00"
        assert datetime.fromisoformat(data["timestamp"]) == datetime(
            2020, 1, 1, 0, 0, 0, 250000, tzinfo=timezone.utc
        )

    def test_message_formatting_with_args(self) -> None:
        record = _record(msg="Matched %s at %d", args=("year", 4))
        assert _format(record)["message"] == "Matched year at 4"

    def test_parse_source_is_top_level(self) -> None:
        """Should report the input being parsed as ``source``."""
        record = _record()
        with parse_context("[Grp] Show - 01.mkv"):
            ParseContextFilter().filter(record)

        data = _format(record)

        assert data["source"] == "[Grp] Show - 01.mkv"
        assert "fields" not in data
        assert "parse_tag" not in json.dumps(data)

    def test_extra_values_go_to_fields(self) -> None:
        """Should collect extra= attributes under ``fields``."""
        logger = logging.getLogger("medianame.test.json")
        record = logger.makeRecord(
            logger.name,
            logging.INFO,
            "x.py",
            1,
            "claimed",
            (),
            None,
            extra={"pattern": "season", "fragment": 2},
        )

        assert _format(record)["fields"] == {"pattern": "season", "fragment": 2}

    def test_exception_info_included(self) -> None:
        try:
            raise ValueError("Test error")
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        data = _format(record)

        assert "ValueError" in data["exception"]
        assert "Test error" in data["exception"]

    def test_non_serializable_field_stringified(self) -> None:
        """Should fall back to str() for values json cannot encode."""
        record = _record()
        record.span = {1, 2}
        assert _format(record)["fields"]["span"] == str({1, 2})
