"""Mount inspection command.

Shows which mount points a reset would release, in the order it would
release them. Nothing is unmounted.
"""

from typing import Annotated

import typer

from teardownctl.cleanup.errors import EnumerationError
from teardownctl.cleanup.models import OwnershipDecision
from teardownctl.cleanup.mounter import SystemMounter
from teardownctl.cleanup.ownership import classify
from teardownctl.cli.types import ConfigOption, require_config
from teardownctl.utils.formatting import (
    console,
    create_mount_table,
    format_mount_row,
    print_error,
    print_success,
)


def mounts(
    config_path: ConfigOption = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Also list mounts unrelated to the runtime."),
    ] = False,
) -> None:
    """List mount points in unmount order with their ownership decision."""
    config = require_config(config_path)
    target = config.to_target()
    mounter = SystemMounter(str(config.mounts_file))

    try:
        records = mounter.list()
    except EnumerationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = create_mount_table(title="Mount Points (unmount order)")
    owned = 0
    shown = 0
    for record in reversed(records):
        decision = classify(record, target)
        if decision == OwnershipDecision.OWNED:
            owned += 1
        if decision == OwnershipDecision.UNRELATED and not show_all:
            continue
        shown += 1
        table.add_row(*format_mount_row(shown, record, decision))

    if shown == 0:
        print_success(f"No mounts under {target.data_dir} or {target.kubelet_dir}.")
        return

    console.print(table)
    console.print(f"\n[dim]{owned} mount(s) would be unmounted ({len(records)} total)[/dim]")
