"""User configuration for fskit.

Configuration is stored in ~/.config/fskit/config.toml and validated
with Pydantic. A missing file is not an error: defaults apply.

Example config.toml::

    sort_order = "descending"
    force = false
    log_level = "INFO"
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fskit.core.paths import get_config_path
from fskit.filesystem.models import SortOrder

logger = logging.getLogger(__name__)

SortOrderName = Literal["ascending", "descending", "none"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

_SORT_ORDERS: dict[SortOrderName, SortOrder] = {
    "ascending": SortOrder.ASCENDING,
    "descending": SortOrder.DESCENDING,
    "none": SortOrder.NONE,
}


class FskitConfig(BaseModel):
    """Settings applied by the fskit CLI.

    Attributes:
        sort_order: Listing order used by scans.
        force: Make unwritable targets writable before deleting them.
        log_level: Level of the fskit logger when not running verbose.
    """

    model_config = ConfigDict(extra="forbid")

    sort_order: Annotated[
        SortOrderName,
        Field(description="Listing order used by scans"),
    ] = "ascending"
    force: Annotated[
        bool,
        Field(description="chmod unwritable targets before deleting them"),
    ] = True
    log_level: Annotated[
        LogLevelName,
        Field(description="Logging level for the fskit logger"),
    ] = "WARNING"

    @property
    def sort(self) -> SortOrder:
        """The configured sort order as a SortOrder."""
        return _SORT_ORDERS[self.sort_order]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file is not valid TOML."""


def load_config(path: Path | None = None) -> FskitConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated FskitConfig; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return FskitConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return FskitConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: FskitConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary sibling first and moved into
    place with os.replace().

    Args:
        config: Configuration to save.
        path: Destination. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
