# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI command compiling a graph document into a snapshot."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ..config import ConfigError
from ..config_loader import load_config
from ..console import detect_tty, get_console_manager
from ..context import Context
from ..document import load_graph_document
from ..errors import GraphCycleError, GraphDefinitionError, TraversalBudgetExceededError
from ..logging import configure_logging, fail, info, ok, section, warn
from ..snapshot import Snapshot


def _parse_args(raw: list[str]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--arg")
        parsed[key] = value
    return parsed


def snapshot(
    graph_path: Annotated[
        Path,
        typer.Argument(metavar="GRAPH", help="Graph document (JSON, or TOML when the suffix is .toml)."),
    ],
    pkg: Annotated[str, typer.Option("--pkg", help="Package name recorded on the snapshot.")] = "main",
    arg: Annotated[
        list[str] | None,
        typer.Option("--arg", help="Compile argument as KEY=VALUE; may be repeated."),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit the snapshot report as JSON.")] = False,
    root: Annotated[
        Path,
        typer.Option("--root", help="Project root used to discover configuration."),
    ] = Path("."),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log traversal details.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")] = False,
) -> None:
    """Compile GRAPH and print its resources in dependency order.

    Raises:
        typer.Exit: With status 1 when the graph cannot be compiled.
    """

    use_emoji = not no_emoji
    configure_logging(verbose=verbose)
    compile_args = _parse_args(arg or [])
    try:
        config = load_config(root)
        graph = load_graph_document(graph_path).build()
        result = Snapshot.from_graph(Context(), pkg, compile_args, graph, config)
    except (ConfigError, GraphDefinitionError, GraphCycleError, TraversalBudgetExceededError) as exc:
        fail(str(exc), use_emoji=use_emoji)
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(result.to_report().model_dump_json(indent=2))
        return
    if not len(result):
        warn("No resources are reachable from the graph roots", use_emoji=use_emoji)
        return

    use_color = detect_tty()
    section(f"Snapshot {result.pkg}", use_color=use_color)
    table = Table(title=f"{result.pkg} ({len(result)} resources)")
    table.add_column("#", justify="right")
    table.add_column("Moniker", overflow="fold")
    table.add_column("Type", overflow="fold")
    table.add_column("Dependencies", overflow="fold")
    for index, resource in enumerate(result, start=1):
        dependencies = result.order.dependencies.get(resource.moniker, ())
        table.add_row(str(index), resource.moniker, resource.type_token or "-", ", ".join(dependencies))
    console = get_console_manager().get(color=use_color, emoji=use_emoji)
    console.print(table)
    info(f"{len(result.order.batches())} dependency levels", use_emoji=use_emoji, use_color=use_color)
    ok(f"Compiled {len(result)} resources", use_emoji=use_emoji)
