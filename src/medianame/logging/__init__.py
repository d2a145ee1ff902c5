"""Structured logging module for medianame.

Provides configurable logging with JSON format support and file rotation.
Log records carry the input being parsed via the parse context.
"""

from medianame.logging.config import configure_logging
from medianame.logging.context import (
    ParseContextFilter,
    get_parse_source,
    parse_context,
)
from medianame.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "ParseContextFilter",
    "configure_logging",
    "get_parse_source",
    "parse_context",
]
