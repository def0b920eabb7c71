"""Node reset command.

Unmounts everything the runtime left under its kubelet and data
directories, then deletes the data and run directories.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from teardownctl.cleanup.directories import DirectoriesStep
from teardownctl.cleanup.errors import TeardownError
from teardownctl.cleanup.models import TeardownTarget
from teardownctl.cleanup.mounter import SystemMounter
from teardownctl.cli.types import ConfigOption, require_config
from teardownctl.core.config import TeardownConfig
from teardownctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

logger = logging.getLogger(__name__)


def reset(
    config_path: ConfigOption = None,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", help="Override the runtime data directory."),
    ] = None,
    run_dir: Annotated[
        Path | None,
        typer.Option("--run-dir", help="Override the runtime run directory."),
    ] = None,
    kubelet_dir: Annotated[
        Path | None,
        typer.Option("--kubelet-dir", help="Override the kubelet directory."),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Unmount runtime mounts and delete the data and run directories."""
    config = require_config(config_path)

    overrides = {
        key: value
        for key, value in (
            ("data_dir", data_dir),
            ("run_dir", run_dir),
            ("kubelet_dir", kubelet_dir),
        )
        if value is not None
    }
    if overrides:
        try:
            config = TeardownConfig.model_validate({**config.model_dump(), **overrides})
        except ValidationError as e:
            print_error(f"Invalid option: {e}")
            raise typer.Exit(code=1) from e

    target = config.to_target()
    _print_plan(target)

    if not yes:
        confirmed = typer.confirm(
            "\nThis permanently deletes the directories above. Proceed?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    mounter = SystemMounter(str(config.mounts_file))
    if not mounter.is_available():
        print_warning("umount not found in PATH, unmounting will fail if mounts remain.")

    step = DirectoriesStep(target, mounter=mounter)
    try:
        step.run()
    except TeardownError as e:
        logger.debug("%s failed", step.name, exc_info=True)
        print_error(f"{step.name} failed: {e}")
        print_info("Teardown is incomplete; remaining files are left for inspection.")
        raise typer.Exit(code=1) from e

    print_success(f"{step.name} completed.")


# === Private helper functions ===


def _print_plan(target: TeardownTarget) -> None:
    """Display the directories the reset will tear down."""
    table = Table(title="Teardown Plan", show_lines=False)
    table.add_column("Directory", style="bold")
    table.add_column("Path")
    table.add_column("Action", style="dim")

    table.add_row("kubelet", target.kubelet_dir, "unmount everything below")
    table.add_row("data", target.data_dir, "unmount everything below, delete")
    table.add_row("run", target.run_dir, "delete")

    console.print(table)
