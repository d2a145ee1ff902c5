"""Shared test fixtures for medianame."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from medianame.config import clear_config_cache


@pytest.fixture(autouse=True)
def medianame_data_dir(tmp_path: Path):
    """Point the data directory at an empty temporary directory.

    Keeps tests independent of any ~/.medianame/config.toml on the machine
    and of MEDIANAME_* variables in the calling environment.
    """
    data_dir = tmp_path / ".medianame"
    data_dir.mkdir()

    env = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith("MEDIANAME_")
    }
    env["MEDIANAME_DATA_DIR"] = str(data_dir)

    clear_config_cache()
    with patch.dict(os.environ, env, clear=True):
        yield data_dir
    clear_config_cache()


@pytest.fixture
def reset_root_logger():
    """Save and restore root logger state around a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield root
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


@pytest.fixture
def write_pattern_file(tmp_path: Path):
    """Return a helper writing a YAML pattern table into tmp_path."""

    def _write(content: str, name: str = "patterns.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
