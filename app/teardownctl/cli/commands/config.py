"""Configuration commands.

Provides commands to show the effective teardown configuration and to
write a default config file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from teardownctl.cli.types import ConfigOption, require_config
from teardownctl.core.config import ConfigError, TeardownConfig, save_config
from teardownctl.core.paths import get_config_path
from teardownctl.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show or initialize the teardown configuration.",
    no_args_is_help=True,
)


@app.command()
def show(config_path: ConfigOption = None) -> None:
    """Show the effective configuration."""
    config = require_config(config_path)

    table = Table(title="Teardown Configuration", show_lines=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    table.add_row("data_dir", str(config.data_dir))
    table.add_row("run_dir", str(config.run_dir))
    kubelet = str(config.effective_kubelet_dir)
    if config.kubelet_dir is None:
        kubelet += " (default)"
    table.add_row("kubelet_dir", kubelet)
    table.add_row("mounts_file", str(config.mounts_file))

    console.print(table)


@app.command()
def init(
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Where to write the config file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default configuration file."""
    config_path = path or get_config_path()

    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        written = save_config(TeardownConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {written}")
