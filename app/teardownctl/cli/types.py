"""Shared CLI option types and helpers."""

from pathlib import Path
from typing import Annotated

import typer

from teardownctl.core.config import ConfigError, TeardownConfig, load_config_or_default
from teardownctl.utils.formatting import print_error

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Config file (default: /etc/teardownctl/config.toml or $TEARDOWNCTL_CONFIG).",
    ),
]


def require_config(path: Path | None) -> TeardownConfig:
    """Load the configuration or exit with an error.

    Args:
        path: Explicit config file path, or None for the default location.

    Returns:
        The loaded (or default) configuration.

    Raises:
        typer.Exit: If the configuration is missing or invalid.
    """
    try:
        return load_config_or_default(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
