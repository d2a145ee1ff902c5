"""Cascade extraction over a segment store.

Patterns run one at a time, in table order. Each pattern scans every
fragment, claimed or free, and the first fragment it matches has the match
span claimed. Claims only decide what is left for the title; they do not
hide text from later patterns.
"""

from __future__ import annotations

import logging

from medianame.patterns import FieldPattern, PatternMatch, PatternTable
from medianame.segments import SegmentStore

logger = logging.getLogger(__name__)


def find_first(
    store: SegmentStore, pattern: FieldPattern
) -> tuple[int, PatternMatch] | None:
    """Find the first fragment matched by ``pattern``.

    Returns:
        ``(fragment_index, match)`` or None if no fragment matches.
    """
    for index, fragment in store.each_fragment():
        match = pattern.search(fragment.text)
        if match is not None:
            return index, match
    return None


def apply_pattern(store: SegmentStore, pattern: FieldPattern) -> str | None:
    """Run one cascade step: find, claim, and return the value."""
    found = find_first(store, pattern)
    if found is None:
        return None

    index, match = found
    logger.debug(
        "Pattern %s matched fragment %d at [%d, %d): %r",
        pattern.name,
        index,
        match.start,
        match.end,
        match.value,
    )
    store.claim_range(index, match.start, match.end)
    return match.value


def extract(store: SegmentStore, table: PatternTable) -> dict[str, str]:
    """Apply every pattern in ``table`` to ``store``, in order.

    Args:
        store: Segment store to claim matches in. Mutated.
        table: Patterns in priority order.

    Returns:
        Mapping of pattern name to extracted value, in cascade order, for
        the patterns that matched.
    """
    values: dict[str, str] = {}
    for pattern in table:
        value = apply_pattern(store, pattern)
        if value is not None:
            values[pattern.name] = value
    return values
