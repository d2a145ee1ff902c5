"""Pattern table for the extraction cascade.

A pattern table is an ordered sequence of named regular expressions. The
cascade applies them in table order, so the order is the priority policy:
earlier patterns claim text first and narrow what later ones can leave
behind for the title.

Every pattern must define at least one capture group; the value recorded
for a match is the first non-empty group. Tables are validated and compiled
once, when they are built, and are immutable afterwards.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from re import Pattern
from typing import NamedTuple

# Characters around a token that are not letters or digits. Underscores and
# dots count as separators in filenames, which rules out plain \b.
_B = r"(?<![A-Za-z0-9])"
_E = r"(?![A-Za-z0-9])"


class PatternTableError(Exception):
    """Error building or validating a pattern table."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class PatternMatch(NamedTuple):
    """A match span relative to the searched text, and its value."""

    start: int
    end: int
    value: str


@dataclass(frozen=True)
class FieldPattern:
    """A named, compiled extraction pattern."""

    name: str
    regex: Pattern[str]

    @classmethod
    def compile(
        cls, name: str, pattern: str, *, ignore_case: bool = False
    ) -> FieldPattern:
        """Compile and validate a single table entry.

        Args:
            name: Field name the value is recorded under.
            pattern: Regular expression with at least one capture group.
            ignore_case: Match case-insensitively.

        Returns:
            Compiled FieldPattern.

        Raises:
            PatternTableError: If the name is empty, the regex is invalid,
                or it has no capture group.
        """
        if not isinstance(name, str) or not name.strip():
            raise PatternTableError("Pattern name must be a non-empty string")

        flags = re.IGNORECASE if ignore_case else 0
        try:
            regex = re.compile(pattern, flags)
        except re.error as e:
            raise PatternTableError(
                f"Invalid regex pattern for '{name}': {e}", field=name
            ) from e

        if regex.groups < 1:
            raise PatternTableError(
                f"Pattern '{name}' must define a capture group", field=name
            )
        return cls(name=name, regex=regex)

    @property
    def pattern(self) -> str:
        return self.regex.pattern

    @property
    def ignore_case(self) -> bool:
        return bool(self.regex.flags & re.IGNORECASE)

    def search(self, text: str) -> PatternMatch | None:
        """Search ``text`` and return the first match, if any.

        The value is the first non-empty captured group. When every group
        is empty or did not participate, the whole matched text is used.
        """
        match = self.regex.search(text)
        if match is None:
            return None

        value = next((group for group in match.groups() if group), match.group(0))
        return PatternMatch(match.start(), match.end(), value)


class PatternTable:
    """Immutable, ordered collection of FieldPatterns with unique names."""

    def __init__(self, patterns: Iterable[FieldPattern]) -> None:
        patterns = tuple(patterns)
        seen: set[str] = set()
        for entry in patterns:
            if entry.name in seen:
                raise PatternTableError(
                    f"Duplicate pattern name '{entry.name}'", field=entry.name
                )
            seen.add(entry.name)
        self._patterns = patterns

    @classmethod
    def from_entries(
        cls, entries: Iterable[tuple[str, str] | tuple[str, str, bool]]
    ) -> PatternTable:
        """Build a table from ``(name, pattern[, ignore_case])`` tuples.

        Raises:
            PatternTableError: If any entry is invalid.
        """
        patterns = []
        for entry in entries:
            name, pattern, *rest = entry
            ignore_case = bool(rest[0]) if rest else False
            patterns.append(
                FieldPattern.compile(name, pattern, ignore_case=ignore_case)
            )
        return cls(patterns)

    def __iter__(self) -> Iterator[FieldPattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self._patterns)

    def __repr__(self) -> str:
        return f"PatternTable({list(self.names)!r})"

    @property
    def names(self) -> tuple[str, ...]:
        """Pattern names in cascade order."""
        return tuple(entry.name for entry in self._patterns)

    def get(self, name: str) -> FieldPattern | None:
        for entry in self._patterns:
            if entry.name == name:
                return entry
        return None

    def reordered(self, names: Sequence[str]) -> PatternTable:
        """Return a table with the named patterns in the given order.

        Patterns not listed keep their relative order after the listed ones.

        Raises:
            PatternTableError: If a name is not in this table.
        """
        unknown = [name for name in names if name not in self]
        if unknown:
            raise PatternTableError(
                f"Unknown pattern names: {', '.join(unknown)}", field=unknown[0]
            )
        listed = [self.get(name) for name in dict.fromkeys(names)]
        rest = [entry for entry in self._patterns if entry.name not in names]
        return PatternTable([*listed, *rest])

    def without(self, *names: str) -> PatternTable:
        """Return a table without the named patterns."""
        return PatternTable(
            entry for entry in self._patterns if entry.name not in names
        )


# Default cascade, in priority order: (name, pattern, ignore_case).
# Structural tokens that are easy to recognise come first, so that numbers
# they contain are claimed before the year and episode patterns run.
DEFAULT_PATTERNS: list[tuple[str, str, bool]] = [
    ("extension", r"\.([A-Za-z0-9]{2,4})$", False),
    ("checksum", r"[\[(]([0-9A-Fa-f]{8})[\])]", False),
    (
        "source",
        _B + r"((?:PPV[ .]?)?[HP]DTV|(?:HD)?CAM|B[DR]Rip|BD|TS|HDTS"
        r"|(?:PPV )?WEB[ .-]?DL(?: DVDRip)?|HDRip|DVDRip|CamRip"
        r"|W[EB]BRip|WEB[ .-]Rip|Blu-?Ray|DvDScr|DVD)" + _E,
        True,
    ),
    ("codec", _B + r"(xvid|divx|[xh]\.?26[45]|hevc|avc|av1)" + _E, True),
    (
        "audio",
        _B + r"(MP3|DD\+?5[ .]?1|DDP[ .]?[257][ .][01]|Dual[- ]Audio|(?-i:LiNE)"
        r"|DTS(?:-HD(?:[ .]MA)?)?|TrueHD|FLAC|Opus"
        r"|AAC(?:[ .]?2[ .]0)?|AC3(?:[ .]5[ .]1)?|E-?AC-?3)" + _E,
        True,
    ),
    (
        "resolution",
        _B + r"([0-9]{3,4}[pi]|[0-9]{3,4}x[0-9]{3,4}|4K|8K|UHD)" + _E,
        True,
    ),
    ("group", r"(?:^\[([^\]]+)\]|- ?([^-]+)$)", False),
    ("season", _B + r"(?:s|season[ ._]?)([0-9]{1,2})(?![0-9])", True),
    ("year", r"(?<![0-9])((?:19|20)[0-9]{2})(?![0-9])", False),
    (
        "episode",
        r"(?:(?<![A-Za-z])(?:ep(?:isode)?[ ._]?|e)([0-9]{1,3})(?![0-9])"
        r"|[^0-9A-Za-z]([0-9]{2,3})(?:v[0-9])?(?:[^0-9A-Za-z]|$))",
        True,
    ),
    (
        "scene",
        _B + r"(PROPER|REPACK|INTERNAL|LIMITED|RERIP|DIRFIX|NFOFIX|READNFO"
        r"|UNRATED|EXTENDED|UNCUT|REMUX)" + _E,
        False,
    ),
    (
        "subs",
        _B + r"((?:hard|soft|multi)?subs?(?:bed|titled)?|dubbed|vostfr|(?-i:RAW))"
        + _E,
        True,
    ),
    ("region", _B + r"(R[0-9]|PAL|NTSC|SECAM)" + _E, False),
]

DEFAULT_PATTERN_TABLE = PatternTable.from_entries(DEFAULT_PATTERNS)
