# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resource snapshot compilation for evaluated deployment object graphs."""

from __future__ import annotations

from importlib import metadata

from .context import Context
from .errors import (
    GraphCycleError,
    GraphDefinitionError,
    InvariantViolationError,
    ResourceGraphError,
    TraversalBudgetExceededError,
    UnimplementedLookupError,
)
from .graph import ObjectEdge, ObjectGraph, ObjectVertex, RootBinding
from .moniker import Moniker, MonikerMap, assign_monikers, new_moniker
from .resource import Resource
from .snapshot import CompileArgs, PackageName, Snapshot, new_graph_snapshot, new_snapshot
from .topsort import ResourceOrder, topsort

__all__ = [
    "CompileArgs",
    "Context",
    "GraphCycleError",
    "GraphDefinitionError",
    "InvariantViolationError",
    "Moniker",
    "MonikerMap",
    "ObjectEdge",
    "ObjectGraph",
    "ObjectVertex",
    "PackageName",
    "Resource",
    "ResourceGraphError",
    "ResourceOrder",
    "RootBinding",
    "Snapshot",
    "TraversalBudgetExceededError",
    "UnimplementedLookupError",
    "__version__",
    "assign_monikers",
    "new_graph_snapshot",
    "new_moniker",
    "new_snapshot",
    "topsort",
]

try:
    __version__ = metadata.version("resgraph")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
