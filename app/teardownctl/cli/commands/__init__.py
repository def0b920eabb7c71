"""CLI commands for teardownctl.

This package contains all subcommand implementations.
"""

from teardownctl.cli.commands import config, mounts, reset

__all__ = ["config", "mounts", "reset"]
