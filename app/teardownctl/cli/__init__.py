"""CLI package for teardownctl.

This package contains the Typer application and all subcommands.
"""

from teardownctl.cli.main import app

__all__ = ["app"]
