"""Result model for filename parsing."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

# Fields parsed from captured text into integers.
NUMERIC_FIELDS = frozenset({"season", "episode", "year"})

# Unsigned decimal only; int() would also take signs, spaces and "_".
_DIGITS = re.compile(r"[0-9]+")


def _to_int(value: str) -> int | None:
    if not _DIGITS.fullmatch(value):
        return None
    return int(value)


@dataclass(frozen=True)
class MediaInfo:
    """Metadata extracted from a filename or path.

    Every field is independently present or None. ``extras`` holds values
    recorded by patterns that have no dedicated field.
    """

    title: str | None = None
    group: str | None = None
    resolution: str | None = None
    season: int | None = None
    episode: int | None = None
    source: str | None = None
    year: int | None = None
    codec: str | None = None
    audio: str | None = None
    extension: str | None = None
    checksum: str | None = None
    scene: str | None = None
    subs: str | None = None
    region: str | None = None
    extras: Mapping[str, str] = field(default_factory=dict, hash=False)

    @classmethod
    def from_values(
        cls, values: Mapping[str, str], title: str | None = None
    ) -> MediaInfo:
        """Build a MediaInfo from cascade output.

        Numeric fields that do not parse as integers are left out.

        Args:
            values: Pattern name to captured value.
            title: Resolved title, if any.

        Returns:
            New MediaInfo.
        """
        known = {f.name for f in fields(cls)} - {"title", "extras"}
        kwargs: dict[str, Any] = {}
        extras: dict[str, str] = {}
        for name, value in values.items():
            if name not in known:
                extras[name] = value
            elif name in NUMERIC_FIELDS:
                kwargs[name] = _to_int(value)
            else:
                kwargs[name] = value
        return cls(title=title, extras=extras, **kwargs)

    @property
    def is_tv_show(self) -> bool:
        """True if parsed as a TV show (has season/episode)."""
        return self.season is not None or self.episode is not None

    @property
    def is_movie(self) -> bool:
        """True if parsed as a movie (has year, no season/episode)."""
        return self.year is not None and not self.is_tv_show

    def as_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary.

        Returns:
            Dictionary with the present fields only. An empty title is
            kept, since it differs from no title.
        """
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "extras":
                if value:
                    result["extras"] = dict(value)
            elif value is not None:
                result[f.name] = value
        return result
