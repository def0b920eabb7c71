"""Teardown configuration and settings.

This module provides the configuration model and I/O functions for the
directories that node teardown removes.

Configuration is stored in /etc/teardownctl/config.toml, or wherever
$TEARDOWNCTL_CONFIG points.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from teardownctl.cleanup.models import TeardownTarget
from teardownctl.core.paths import (
    DEFAULT_DATA_DIR,
    DEFAULT_MOUNTS_FILE,
    DEFAULT_RUN_DIR,
    ensure_dir,
    get_config_path,
)

logger = logging.getLogger(__name__)


class TeardownConfig(BaseModel):
    """Configuration for node teardown.

    Attributes:
        data_dir: Runtime data directory, possibly a separately mounted volume.
        run_dir: Runtime run directory holding sockets and pid files.
        kubelet_dir: Kubelet directory. If None, <data_dir>/kubelet is used.
        mounts_file: Mount table to read.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    data_dir: Annotated[
        Path,
        Field(description="Runtime data directory"),
    ] = DEFAULT_DATA_DIR
    run_dir: Annotated[
        Path,
        Field(description="Runtime run directory"),
    ] = DEFAULT_RUN_DIR
    kubelet_dir: Annotated[
        Path | None,
        Field(description="Kubelet directory (None = <data_dir>/kubelet)"),
    ] = None
    mounts_file: Annotated[
        Path,
        Field(description="Mount table in /proc/mounts format"),
    ] = DEFAULT_MOUNTS_FILE

    @field_validator("data_dir", "run_dir", "kubelet_dir", "mounts_file")
    @classmethod
    def validate_absolute(cls, v: Path | None, info: ValidationInfo) -> Path | None:
        """Require absolute paths and normalise them."""
        if v is None:
            return v
        if not v.is_absolute():
            msg = f"{info.field_name}: must be an absolute path, got '{v}'"
            raise ValueError(msg)
        return Path(os.path.normpath(v))

    @property
    def effective_kubelet_dir(self) -> Path:
        """Get the kubelet directory, defaulting to <data_dir>/kubelet."""
        if self.kubelet_dir is not None:
            return self.kubelet_dir
        return self.data_dir / "kubelet"

    def to_target(self) -> TeardownTarget:
        """Build the teardown target for this configuration."""
        return TeardownTarget(
            data_dir=str(self.data_dir),
            run_dir=str(self.run_dir),
            kubelet_dir=str(self.effective_kubelet_dir),
        )


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> TeardownConfig:
    """Load teardown configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated TeardownConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return TeardownConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> TeardownConfig:
    """Load the configuration, falling back to defaults.

    Defaults are used only when no path was given and the default config
    file does not exist. An explicitly requested file must exist.

    Args:
        path: Explicit config file path, or None for the default location.

    Returns:
        Loaded or default TeardownConfig.

    Raises:
        ConfigError: If the file exists but is invalid, or an explicit
            path does not exist.
    """
    if path is not None:
        return load_config(path)

    try:
        return load_config()
    except ConfigNotFoundError:
        logger.debug("No config file at %s, using defaults", get_config_path())
        return TeardownConfig()


def save_config(config: TeardownConfig, path: Path | None = None) -> Path:
    """Save teardown configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The TeardownConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    try:
        ensure_dir(config_path.parent, "config")
    except RuntimeError as e:
        raise ConfigError(str(e)) from e

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: TeardownConfig) -> dict[str, object]:
    """Convert TeardownConfig to a dictionary for TOML serialization.

    Only includes non-None values, TOML has no null.

    Args:
        config: The TeardownConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "data_dir": str(config.data_dir),
        "run_dir": str(config.run_dir),
    }

    if config.kubelet_dir is not None:
        result["kubelet_dir"] = str(config.kubelet_dir)

    if config.mounts_file != DEFAULT_MOUNTS_FILE:
        result["mounts_file"] = str(config.mounts_file)

    return result
