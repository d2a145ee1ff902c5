"""Segment store for claim tracking over parsed text.

The store partitions the assembled input into an ordered list of fragments.
Each fragment is either free or claimed. A successful pattern match claims
its range, which removes it from the pool the title is picked from.

Fragments never copy text: each one keeps a reference to its source string
plus ``[start, end)`` offsets into it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace


class InvalidRangeError(ValueError):
    """A claim range is inverted or falls outside its fragment.

    Match spans from the cascade always fit their fragment; this is raised
    only for direct misuse of ``claim_range`` and is not caught internally.
    """

    def __init__(self, index: int, start: int, end: int, length: int) -> None:
        self.index = index
        self.start = start
        self.end = end
        self.length = length
        super().__init__(
            f"Invalid claim range [{start}, {end}) for fragment {index} "
            f"of length {length}"
        )


@dataclass(frozen=True)
class Fragment:
    """A free or claimed view over ``source[start:end]``."""

    source: str = field(repr=False)
    start: int
    end: int
    claimed: bool = False

    @property
    def text(self) -> str:
        return self.source[self.start : self.end]

    def __len__(self) -> int:
        return self.end - self.start

    def split(self, start: int, end: int) -> list[Fragment]:
        """Split into ``[0,start)``, ``[start,end)`` and ``[end,len)``.

        Offsets are relative to this fragment. Empty pieces are dropped,
        the middle piece is claimed and the outer pieces keep this
        fragment's claimed flag.
        """
        lo = self.start + start
        hi = self.start + end
        pieces = [
            replace(self, end=lo),
            replace(self, start=lo, end=hi, claimed=True),
            replace(self, start=hi),
        ]
        return [piece for piece in pieces if len(piece)]


class SegmentStore:
    """Ordered fragments covering the input without gaps or overlaps."""

    def __init__(self, fragments: Iterable[Fragment] = ()) -> None:
        self._fragments: list[Fragment] = list(fragments)

    @classmethod
    def create(cls, slices: Iterable[str]) -> SegmentStore:
        """Build a store with one free fragment per non-empty slice.

        Args:
            slices: Initial text slices, in order. Slices are never merged,
                so a later claim cannot cross a slice boundary.

        Returns:
            A new store whose concatenated text equals ``"".join(slices)``.
        """
        return cls(Fragment(text, 0, len(text)) for text in slices if text)

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[Fragment]:
        return iter(list(self._fragments))

    def __getitem__(self, index: int) -> Fragment:
        return self._fragments[index]

    def __repr__(self) -> str:
        return f"SegmentStore({self._fragments!r})"

    @property
    def text(self) -> str:
        """The concatenation of every fragment's text."""
        return "".join(fragment.text for fragment in self._fragments)

    def each_fragment(self) -> Iterator[tuple[int, Fragment]]:
        """Yield ``(index, fragment)`` pairs in left-to-right order.

        Indices are only valid until the next ``claim_range`` call, so
        callers finish scanning before they mutate.
        """
        yield from enumerate(self._fragments)

    def free_fragments(self) -> Iterator[Fragment]:
        """Yield unclaimed fragments in left-to-right order."""
        return (fragment for fragment in self._fragments if not fragment.claimed)

    def claimed_fragments(self) -> Iterator[Fragment]:
        """Yield claimed fragments in left-to-right order."""
        return (fragment for fragment in self._fragments if fragment.claimed)

    def claim_range(self, index: int, start: int, end: int) -> None:
        """Claim ``[start, end)`` of the fragment at ``index``.

        The fragment is replaced in place by up to three pieces; see
        ``Fragment.split``.

        Args:
            index: Current index of the fragment in the store.
            start: Start offset relative to the fragment's text.
            end: End offset (exclusive) relative to the fragment's text.

        Raises:
            IndexError: If ``index`` does not name a fragment.
            InvalidRangeError: If ``start > end`` or the range exceeds
                the fragment.
        """
        if not 0 <= index < len(self._fragments):
            raise IndexError(f"Fragment index {index} out of range")

        fragment = self._fragments[index]
        if start < 0 or start > end or end > len(fragment):
            raise InvalidRangeError(index, start, end, len(fragment))

        self._fragments[index : index + 1] = fragment.split(start, end)
