"""Tests for configuration loading and precedence."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from medianame.config.env import EnvReader
from medianame.config.loader import (
    ConfigError,
    clear_config_cache,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
    load_toml_file,
)


@pytest.fixture
def config_file(medianame_data_dir: Path):
    """Return a helper writing config.toml into the data directory."""

    def _write(content: str) -> Path:
        path = medianame_data_dir / "config.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class TestPaths:
    """Tests for data dir and config path resolution."""

    def test_data_dir_from_env(self, medianame_data_dir: Path) -> None:
        """Should honour MEDIANAME_DATA_DIR."""
        assert get_data_dir() == medianame_data_dir

    def test_default_config_path_in_data_dir(self, medianame_data_dir: Path) -> None:
        """Should place config.toml in the data directory."""
        assert get_default_config_path() == medianame_data_dir / "config.toml"

    def test_config_path_env_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should honour MEDIANAME_CONFIG_PATH."""
        custom = tmp_path / "custom.toml"
        monkeypatch.setenv("MEDIANAME_CONFIG_PATH", str(custom))
        assert get_default_config_path() == custom


class TestLoadTomlFile:
    """Tests for load_toml_file."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should return an empty dict for a missing file."""
        assert load_toml_file(tmp_path / "missing.toml") == {}

    def test_valid_file(self, tmp_path: Path) -> None:
        """Should parse TOML."""
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlevel = "debug"\n')
        assert load_toml_file(path) == {"logging": {"level": "debug"}}

    def test_invalid_file_lenient(self, tmp_path: Path) -> None:
        """Should ignore an unparseable file unless strict."""
        path = tmp_path / "config.toml"
        path.write_text("[logging\n")
        assert load_toml_file(path) == {}

    def test_invalid_file_strict(self, tmp_path: Path) -> None:
        """Should raise ConfigError for an unparseable file in strict mode."""
        path = tmp_path / "config.toml"
        path.write_text("[logging\n")
        with pytest.raises(ConfigError, match="Could not load config file"):
            load_toml_file(path, strict=True)


class TestLoadConfigFileCache:
    """Tests for the mtime-based config cache."""

    def test_cached_until_modified(self, config_file) -> None:
        """Should return the cached dict while mtime is unchanged."""
        path = config_file('[logging]\nlevel = "info"\n')
        first = load_config_file(path)
        assert load_config_file(path) is first

        path.write_text('[logging]\nlevel = "error"\n')
        os.utime(path, (path.stat().st_atime, path.stat().st_mtime + 10))
        assert load_config_file(path)["logging"]["level"] == "error"

    def test_clear_cache(self, config_file) -> None:
        """Should reload after clear_config_cache."""
        path = config_file('[logging]\nlevel = "info"\n')
        first = load_config_file(path)
        clear_config_cache()
        assert load_config_file(path) is not first


class TestGetConfig:
    """Tests for get_config precedence."""

    def test_defaults_without_file(self) -> None:
        """Should return defaults when nothing is configured."""
        config = get_config(env_reader=EnvReader(env={}))
        assert config.logging.level == "warning"
        assert config.patterns.file is None
        assert config.patterns.order == ()

    def test_file_values(self, config_file, medianame_data_dir: Path) -> None:
        """Should read [logging] and [patterns] sections."""
        config_file(
            "[logging]\n"
            'level = "info"\n'
            'format = "json"\n'
            'file = "logs/medianame.log"\n'
            "backup_count = 2\n"
            "[patterns]\n"
            'file = "patterns.yaml"\n'
            'order = ["year"]\n'
            'disabled = ["region"]\n'
        )
        config = get_config(env_reader=EnvReader(env={}))
        assert config.logging.level == "info"
        assert config.logging.format == "json"
        assert config.logging.backup_count == 2
        # Relative paths resolve against the config file's directory
        assert config.logging.file == medianame_data_dir / "logs" / "medianame.log"
        assert config.patterns.file == medianame_data_dir / "patterns.yaml"
        assert config.patterns.order == ("year",)
        assert config.patterns.disabled == ("region",)

    def test_env_overrides_file(self, config_file, tmp_path: Path) -> None:
        """Should prefer environment variables over the file."""
        config_file(
            '[logging]\nlevel = "info"\nmax_bytes = 100\n'
            '[patterns]\ndisabled = ["region"]\n'
        )
        env = EnvReader(
            env={
                "MEDIANAME_LOG_LEVEL": "debug",
                "MEDIANAME_LOG_STDERR": "yes",
                "MEDIANAME_LOG_MAX_BYTES": "2048",
                "MEDIANAME_PATTERNS_FILE": str(tmp_path / "env.yaml"),
                "MEDIANAME_PATTERNS_DISABLED": "subs,scene",
            }
        )
        config = get_config(env_reader=env)
        assert config.logging.level == "debug"
        assert config.logging.include_stderr is True
        assert config.logging.max_bytes == 2048
        assert config.patterns.file == tmp_path / "env.yaml"
        assert config.patterns.disabled == ("subs", "scene")

    def test_cli_overrides_env(self, tmp_path: Path) -> None:
        """Should prefer the CLI patterns file over the environment."""
        env = EnvReader(env={"MEDIANAME_PATTERNS_FILE": str(tmp_path / "env.yaml")})
        config = get_config(patterns_file=tmp_path / "cli.yaml", env_reader=env)
        assert config.patterns.file == tmp_path / "cli.yaml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        """Should load the given config file instead of the default."""
        path = tmp_path / "other.toml"
        path.write_text('[logging]\nlevel = "error"\n')
        config = get_config(config_path=path, env_reader=EnvReader(env={}))
        assert config.logging.level == "error"

    @pytest.mark.parametrize(
        "content",
        [
            '[logging]\nlevel = "chatty"\n',
            'logging = "debug"\n',
            '[patterns]\norder = "year"\n',
            '[patterns]\norder = ["year"]\ndisabled = ["year"]\n',
            '[logging]\nmax_bytes = "big"\n',
        ],
    )
    def test_invalid_values_raise_config_error(self, config_file, content) -> None:
        """Should wrap invalid values in ConfigError."""
        config_file(content)
        with pytest.raises(ConfigError):
            get_config(env_reader=EnvReader(env={}))

    @pytest.mark.parametrize(
        ("name", "value"),
        [("MEDIANAME_LOG_MAX_BYTES", "big"), ("MEDIANAME_LOG_STDERR", "maybe")],
    )
    def test_invalid_env_value_raises_config_error(self, name, value) -> None:
        """Should name the offending variable in the ConfigError."""
        with pytest.raises(ConfigError, match=name):
            get_config(env_reader=EnvReader(env={name: value}))

    def test_blank_env_value_falls_through_to_file(self, config_file) -> None:
        """Should ignore an empty variable and use the file value."""
        config_file('[logging]\nlevel = "info"\n')
        config = get_config(env_reader=EnvReader(env={"MEDIANAME_LOG_LEVEL": ""}))
        assert config.logging.level == "info"

    def test_strict_parse_error(self, config_file) -> None:
        """Should raise ConfigError for broken TOML in strict mode."""
        config_file("[logging\n")
        with pytest.raises(ConfigError):
            get_config(env_reader=EnvReader(env={}), strict=True)
