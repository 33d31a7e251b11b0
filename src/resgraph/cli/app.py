# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .config_cmd import config_app
from .snapshot_cmd import snapshot

app = typer.Typer(
    name="resgraph",
    help="Compile evaluated object graphs into dependency-ordered resource snapshots.",
    add_completion=False,
    no_args_is_help=True,
)
app.command(name="snapshot")(snapshot)
app.add_typer(config_app, name="config")


def main() -> None:
    """Run the CLI application."""

    app()


__all__ = ["app", "main"]
