"""Title selection from residual (unclaimed) text."""

from __future__ import annotations

from medianame.segments import SegmentStore

# Stripped from both ends of the chosen fragment.
TITLE_TRIM_CHARS = "()[] -_."


def pick_title(candidates: list[str]) -> str | None:
    """Pick the longest candidate; ties go to the later one.

    ``sorted`` is stable, so among equal lengths the original order is kept
    and the last element is the latest of the longest.
    """
    if not candidates:
        return None
    return sorted(candidates, key=len)[-1].strip(TITLE_TRIM_CHARS)


def resolve_title(store: SegmentStore) -> str | None:
    """Choose the title from the store's free fragments.

    Returns:
        The trimmed title, which may be an empty string. A store whose
        fragments are all claimed gives ``""``; None is returned only for
        a store with no fragments, i.e. empty input.
    """
    if not len(store):
        return None
    return pick_title([fragment.text for fragment in store.free_fragments()]) or ""
