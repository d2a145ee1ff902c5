"""Typed access to ``MEDIANAME_*`` environment overrides.

Getters take the key without the prefix, so ``reader.string("LOG_LEVEL")``
reads ``MEDIANAME_LOG_LEVEL``. An unset or blank variable reads as None,
which lets ``get_config`` fall through to the config file. A value that is
set but malformed raises ValueError naming the variable.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

ENV_PREFIX = "MEDIANAME_"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


class EnvReader:
    """Reader for ``MEDIANAME_*`` variables over an injectable mapping.

    Example:
        reader = EnvReader(env={"MEDIANAME_LOG_LEVEL": "debug"})
        reader.string("LOG_LEVEL")  # "debug"
    """

    def __init__(
        self, env: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX
    ) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ
        self.prefix = prefix

    def variable(self, key: str) -> str:
        """Full variable name for ``key``."""
        return f"{self.prefix}{key}"

    def _raw(self, key: str) -> str | None:
        value = self._env.get(self.variable(key), "").strip()
        return value or None

    def string(self, key: str) -> str | None:
        return self._raw(key)

    def integer(self, key: str) -> int | None:
        """Read a non-negative integer such as a byte count."""
        value = self._raw(key)
        if value is None:
            return None
        if not (value.isascii() and value.isdigit()):
            raise ValueError(
                f"{self.variable(key)} must be a non-negative integer, "
                f"got {value!r}"
            )
        return int(value)

    def flag(self, key: str) -> bool | None:
        """Read an on/off switch (``1/0``, ``true/false``, ``yes/no``, ``on/off``)."""
        value = self._raw(key)
        if value is None:
            return None
        lowered = value.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"{self.variable(key)} must be a boolean, got {value!r}")

    def path(self, key: str) -> Path | None:
        """Read a path with ``~`` expanded. Existence is not checked."""
        value = self._raw(key)
        return Path(value).expanduser() if value is not None else None

    def names(self, key: str) -> tuple[str, ...]:
        """Read a comma-separated list of pattern names; unset gives ``()``."""
        value = self._raw(key)
        if value is None:
            return ()
        return tuple(name.strip() for name in value.split(",") if name.strip())
