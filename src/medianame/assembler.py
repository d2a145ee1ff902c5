"""Turn filenames and paths into the initial text slices of a parse."""

from __future__ import annotations

import os
from pathlib import PurePath

_SKIPPED_PARTS = frozenset({"", ".", ".."})


def filename_slices(text: str) -> list[str]:
    """A filename is parsed as a single slice."""
    return [text]


def path_slices(path: str | os.PathLike[str]) -> list[str]:
    """Split a path into its normal components, in order.

    The root or drive anchor and ``.``/``..`` components are left out.

    Args:
        path: Filesystem path as a string or path-like object.

    Returns:
        List of component strings.
    """
    # Keep the flavour of an existing pure path (e.g. a PureWindowsPath)
    pure = path if isinstance(path, PurePath) else PurePath(path)
    parts = pure.parts
    if pure.anchor and parts and parts[0] == pure.anchor:
        parts = parts[1:]
    return [part for part in parts if part not in _SKIPPED_PARTS]
