"""medianame: extract structured metadata from media filenames and paths.

Public API:
- parse_filename / parse_path: parse with the built-in pattern table
- FilenameParser: parse with a custom PatternTable
- MediaInfo: the result record
"""

from medianame.models import MediaInfo
from medianame.parser import FilenameParser, parse_filename, parse_path
from medianame.patterns import (
    DEFAULT_PATTERN_TABLE,
    FieldPattern,
    PatternTable,
    PatternTableError,
)
from medianame.segments import InvalidRangeError, SegmentStore

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PATTERN_TABLE",
    "FieldPattern",
    "FilenameParser",
    "InvalidRangeError",
    "MediaInfo",
    "PatternTable",
    "PatternTableError",
    "SegmentStore",
    "__version__",
    "parse_filename",
    "parse_path",
]
