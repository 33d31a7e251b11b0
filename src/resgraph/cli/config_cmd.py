# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI commands for inspecting resolved configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from ..config import ConfigError
from ..config_loader import load_config
from ..logging import fail

config_app = typer.Typer(help="Inspect resgraph configuration.", no_args_is_help=True)


@config_app.command("show")
def show_config(
    root: Annotated[
        Path,
        typer.Option("--root", help="Project root used to discover configuration."),
    ] = Path("."),
) -> None:
    """Print the merged configuration as JSON."""

    try:
        config = load_config(root)
    except ConfigError as exc:
        fail(str(exc), use_emoji=False)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(config.to_dict(), indent=2, sort_keys=True))


__all__ = ["config_app", "show_config"]
