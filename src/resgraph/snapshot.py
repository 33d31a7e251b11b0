# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Snapshots: immutable, dependency-ordered views of the resources in a pass.

A snapshot is the input to plan computation: two snapshots are paired by
moniker to work out which resources to create, update or delete. Snapshots are
built either from an already ordered resource sequence or directly from an
object graph, in which case monikers are assigned, resources materialised and
the graph topologically sorted before the snapshot is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, NewType, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from .config import SnapshotConfig
from .context import Context
from .errors import UnimplementedLookupError
from .interfaces.graph import ObjectGraph
from .moniker import Moniker, assign_monikers
from .resource import Resource
from .topsort import ResourceOrder, topsort

PackageName = NewType("PackageName", str)
CompileArgs: TypeAlias = Mapping[str, Any]

LOGGER = logging.getLogger(__name__)


class ResourceEntry(BaseModel):
    """Serialisable summary of one resource in a snapshot."""

    model_config = ConfigDict(frozen=True)

    moniker: str
    type: str | None = None
    dependencies: list[str] = Field(default_factory=list)


class SnapshotReport(BaseModel):
    """Serialisable summary of a snapshot in resource order."""

    model_config = ConfigDict(frozen=True)

    pkg: str
    args: dict[str, Any] = Field(default_factory=dict)
    resources: list[ResourceEntry] = Field(default_factory=list)


class Snapshot:
    """Immutable, topologically sorted collection of resources."""

    __slots__ = ("_args", "_ctx", "_order", "_pkg")

    def __init__(self, ctx: Context, pkg: PackageName, args: CompileArgs, order: ResourceOrder) -> None:
        """Create a snapshot; callers should prefer :meth:`from_resources` or :meth:`from_graph`.

        Args:
            ctx: Context indexing the snapshot's resources.
            pkg: Package the snapshot was compiled from.
            args: Arguments used to compile the package.
            order: Resources in topological order.
        """

        self._ctx = ctx
        self._pkg = pkg
        self._args: CompileArgs = MappingProxyType(dict(args))
        self._order = order

    @classmethod
    def from_resources(
        cls,
        ctx: Context,
        pkg: PackageName | str,
        args: CompileArgs,
        resources: Iterable[Resource],
    ) -> Snapshot:
        """Create a snapshot from resources already in topological order.

        The order is trusted as given; a sequence that is not topologically
        sorted yields a snapshot with undefined plan semantics.

        Args:
            ctx: Context indexing ``resources``.
            pkg: Package the snapshot was compiled from.
            args: Arguments used to compile the package.
            resources: Resources in dependency order.

        Returns:
            Snapshot: Snapshot wrapping the supplied resources.
        """

        ordered = tuple(resources)
        dependencies = {resource.moniker: resource.dependencies() for resource in ordered}
        order = ResourceOrder(resources=ordered, dependencies=MappingProxyType(dependencies))
        return cls(ctx, PackageName(pkg), args, order)

    @classmethod
    def from_graph(
        cls,
        ctx: Context,
        pkg: PackageName | str,
        args: CompileArgs,
        graph: ObjectGraph,
        config: SnapshotConfig | None = None,
    ) -> Snapshot:
        """Compile ``graph`` into a snapshot.

        Args:
            ctx: Fresh context receiving the materialised resources; it is
                frozen once the snapshot is assembled.
            pkg: Package the snapshot was compiled from.
            args: Arguments used to compile the package.
            graph: Object graph produced by evaluating the package.
            config: Optional traversal configuration.

        Returns:
            Snapshot: Snapshot over every resource reachable from the roots.

        Raises:
            GraphCycleError: If the graph is not a DAG.
            TraversalBudgetExceededError: If moniker assignment exceeds its budget.
            InvariantViolationError: If materialisation and sorting disagree.
        """

        monikers = assign_monikers(graph, config)
        ctx.materialize(monikers)
        order = topsort(graph, ctx)
        ctx.freeze()
        LOGGER.debug("compiled snapshot for %s with %d resources", pkg, len(order))
        return cls(ctx, PackageName(pkg), args, order)

    @property
    def ctx(self) -> Context:
        """Return the context shared by all operations on this snapshot."""

        return self._ctx

    @property
    def pkg(self) -> PackageName:
        """Return the package from which this snapshot came."""

        return self._pkg

    @property
    def args(self) -> CompileArgs:
        """Return the arguments used to compile the package."""

        return self._args

    @property
    def resources(self) -> tuple[Resource, ...]:
        """Return resources in topological order."""

        return self._order.resources

    @property
    def order(self) -> ResourceOrder:
        """Return the ordering together with its resolved dependency edges."""

        return self._order

    def monikers(self) -> tuple[Moniker, ...]:
        """Return resource monikers in topological order."""

        return tuple(resource.moniker for resource in self._order.resources)

    def resource_by_id(self, resource_id: str, type_token: str) -> Resource | None:
        """Look up a resource by provider ID and type.

        Raises:
            UnimplementedLookupError: Always; snapshots carry no provider IDs.
        """

        raise UnimplementedLookupError(
            f"lookup by id is not implemented (id={resource_id!r}, type={type_token!r})",
        )

    def resource_by_moniker(self, moniker: str) -> Resource | None:
        """Return the resource named ``moniker`` or ``None`` when absent."""

        return self._ctx.resource_for_moniker(moniker)

    def resource_by_object(self, obj: object) -> Resource | None:
        """Return the resource wrapping ``obj`` or ``None`` when absent."""

        return self._ctx.resource_for_object(obj)

    def to_report(self) -> SnapshotReport:
        """Return a serialisable summary of the snapshot."""

        entries = [
            ResourceEntry(
                moniker=resource.moniker,
                type=resource.type_token,
                dependencies=list(self._order.dependencies.get(resource.moniker, ())),
            )
            for resource in self._order.resources
        ]
        return SnapshotReport(pkg=self._pkg, args=dict(self._args), resources=entries)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._order.resources)

    def __len__(self) -> int:
        return len(self._order.resources)

    def __contains__(self, moniker: object) -> bool:
        return isinstance(moniker, str) and self.resource_by_moniker(moniker) is not None

    def __repr__(self) -> str:
        return f"Snapshot(pkg={self._pkg!r}, resources={len(self)})"


def new_snapshot(ctx: Context, pkg: PackageName | str, args: CompileArgs, resources: Iterable[Resource]) -> Snapshot:
    """Alias for :meth:`Snapshot.from_resources`."""
    return Snapshot.from_resources(ctx, pkg, args, resources)


def new_graph_snapshot(
    ctx: Context,
    pkg: PackageName | str,
    args: CompileArgs,
    graph: ObjectGraph,
    config: SnapshotConfig | None = None,
) -> Snapshot:
    """Alias for :meth:`Snapshot.from_graph`."""
    return Snapshot.from_graph(ctx, pkg, args, graph, config)


__all__ = [
    "CompileArgs",
    "PackageName",
    "ResourceEntry",
    "Snapshot",
    "SnapshotReport",
    "new_graph_snapshot",
    "new_snapshot",
]
