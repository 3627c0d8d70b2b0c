"""Unit tests for fskit configuration loading and saving."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from fskit.core.config import (
    ConfigError,
    ConfigParseError,
    FskitConfig,
    load_config,
    save_config,
)
from fskit.filesystem.models import SortOrder
from pydantic import ValidationError


class TestFskitConfig:
    """Tests for the FskitConfig model."""

    def test_defaults(self) -> None:
        """Defaults are ascending order, force on, WARNING logs."""
        config = FskitConfig()

        assert config.sort_order == "ascending"
        assert config.sort is SortOrder.ASCENDING
        assert config.force is True
        assert config.log_level == "WARNING"

    def test_sort_property(self) -> None:
        """sort maps the configured name onto SortOrder."""
        assert FskitConfig(sort_order="descending").sort is SortOrder.DESCENDING
        assert FskitConfig(sort_order="none").sort is SortOrder.NONE

    def test_rejects_unknown_keys(self) -> None:
        """Unknown settings are a validation error."""
        with pytest.raises(ValidationError):
            FskitConfig.model_validate({"colour": "blue"})

    def test_rejects_unknown_sort_order(self) -> None:
        """Only the three sort orders are accepted."""
        with pytest.raises(ValidationError):
            FskitConfig.model_validate({"sort_order": "random"})


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """A missing file is not an error."""
        assert load_config(tmp_path / "missing.toml") == FskitConfig()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values in the file override defaults."""
        path = tmp_path / "config.toml"
        path.write_text('sort_order = "descending"\nforce = false\nlog_level = "DEBUG"\n')

        config = load_config(path)

        assert config.sort is SortOrder.DESCENDING
        assert config.force is False
        assert config.log_level == "DEBUG"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("sort_order = \n")

        with pytest.raises(ConfigParseError, match="Invalid TOML syntax"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Valid TOML with bad values raises ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("force = 3\nextra = 1\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_default_path(self, isolated_config_home: Path) -> None:
        """Without a path the XDG location is used."""
        path = isolated_config_home / "fskit" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text('sort_order = "none"\n')

        assert load_config().sort is SortOrder.NONE


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trips_through_load(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        path = tmp_path / "nested" / "config.toml"
        config = FskitConfig(sort_order="descending", force=False, log_level="INFO")

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_writes_toml(self, tmp_path: Path) -> None:
        """The file is plain TOML with every setting."""
        path = tmp_path / "config.toml"

        save_config(FskitConfig(), path)

        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data == {"sort_order": "ascending", "force": True, "log_level": "WARNING"}

    def test_no_temp_file_left_on_failure(self, tmp_path: Path) -> None:
        """A failed replace cleans up and raises ConfigError."""
        path = tmp_path / "config.toml"

        with (
            patch("fskit.core.config.os.replace", side_effect=OSError("disk full")),
            pytest.raises(ConfigError, match="Failed to write config"),
        ):
            save_config(FskitConfig(), path)

        assert list(tmp_path.iterdir()) == []
