"""Filename parsing for metadata extraction.

Parsing builds a fresh segment store from the input, runs the extraction
cascade over it and picks the title from the text no pattern claimed.
"""

from __future__ import annotations

import logging
import os

from medianame.assembler import filename_slices, path_slices
from medianame.cascade import extract
from medianame.logging.context import parse_context
from medianame.models import MediaInfo
from medianame.patterns import DEFAULT_PATTERN_TABLE, PatternTable
from medianame.segments import SegmentStore
from medianame.title import resolve_title

logger = logging.getLogger(__name__)


class FilenameParser:
    """Parses filenames and paths with one pattern table.

    The table is read-only, so a parser can be shared freely.
    """

    def __init__(self, table: PatternTable | None = None) -> None:
        self._table = table if table is not None else DEFAULT_PATTERN_TABLE

    @property
    def table(self) -> PatternTable:
        return self._table

    def parse_slices(self, slices: list[str]) -> MediaInfo:
        """Run the cascade over pre-assembled slices."""
        store = SegmentStore.create(slices)
        values = extract(store, self._table)
        title = resolve_title(store)
        logger.debug(
            "Parsed %d fragment(s): %d field(s), title=%r",
            len(store),
            len(values),
            title,
        )
        return MediaInfo.from_values(values, title=title)

    def parse_filename(self, text: str) -> MediaInfo:
        """Parse a filename, treating the whole string as one fragment.

        Args:
            text: Filename (or any text) to parse.

        Returns:
            MediaInfo with every recognised field. Empty input gives a
            MediaInfo with no fields set.
        """
        with parse_context(text):
            return self.parse_slices(filename_slices(text))

    def parse_path(self, path: str | os.PathLike[str]) -> MediaInfo:
        """Parse a path, one initial fragment per path component.

        Args:
            path: Filesystem path. It is not accessed on disk.

        Returns:
            MediaInfo for the combined components.
        """
        with parse_context(path):
            return self.parse_slices(path_slices(path))


_default_parser = FilenameParser()


def parse_filename(text: str) -> MediaInfo:
    """Parse a filename with the default pattern table."""
    return _default_parser.parse_filename(text)


def parse_path(path: str | os.PathLike[str]) -> MediaInfo:
    """Parse a filesystem path with the default pattern table."""
    return _default_parser.parse_path(path)
