# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Topological ordering of the resources in an object graph."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from graphlib import CycleError, TopologicalSorter
from types import MappingProxyType

from .context import Context
from .errors import GraphCycleError, InvariantViolationError
from .interfaces.graph import GraphVertex, ObjectGraph, vertex_key
from .moniker import Moniker
from .resource import Resource

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceOrder:
    """Resources in topological order plus the edges between them.

    Edges point from earlier resources to later ones: every moniker listed in
    ``dependencies[m]`` appears after ``m`` in :attr:`resources`.
    """

    resources: tuple[Resource, ...]
    dependencies: Mapping[Moniker, tuple[Moniker, ...]] = field(default_factory=lambda: MappingProxyType({}))

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def batches(self) -> tuple[tuple[Resource, ...], ...]:
        """Group resources into levels with no edges inside a level.

        Every edge leads from a resource in one batch to a resource in a later
        batch, so the members of a batch are independent of each other.

        Returns:
            tuple[tuple[Resource, ...], ...]: Batches in execution order, each
            preserving the relative order of :attr:`resources`.
        """

        level: dict[Moniker, int] = {resource.moniker: 0 for resource in self.resources}
        for resource in self.resources:
            for target in self.dependencies.get(resource.moniker, ()):
                if target in level:
                    level[target] = max(level[target], level[resource.moniker] + 1)
        grouped: dict[int, list[Resource]] = {}
        for resource in self.resources:
            grouped.setdefault(level[resource.moniker], []).append(resource)
        return tuple(tuple(grouped[index]) for index in sorted(grouped))


def _reachable(graph: ObjectGraph) -> dict[int, GraphVertex]:
    """Return every vertex reachable from the roots keyed by identity, in visit order."""

    found: dict[int, GraphVertex] = {}
    for root in graph.roots():
        stack = [root.vertex]
        while stack:
            vertex = stack.pop()
            key = vertex_key(vertex)
            if key in found:
                continue
            found[key] = vertex
            stack.extend(edge.target for edge in reversed(tuple(vertex.out_edges())))
    return found


def _describe(vertex: GraphVertex, ctx: Context) -> str:
    resource = ctx.resource_for_object(vertex.obj)
    if resource is not None:
        return resource.moniker
    return repr(vertex.obj)


def topsort(graph: ObjectGraph, ctx: Context) -> ResourceOrder:
    """Order the resources registered in ``ctx`` consistently with ``graph``.

    The full graph, resource and non-resource vertices alike, is sorted so that
    ordering constraints carried through non-resource vertices are respected.
    The result is then projected down to resources.

    Args:
        graph: Object graph whose edges define the ordering.
        ctx: Context populated with a resource for every resource vertex.

    Returns:
        ResourceOrder: Ordered resources and their resolved dependency edges.

    Raises:
        GraphCycleError: If the reachable graph contains a cycle.
        InvariantViolationError: If the sort and the context disagree about
            which resources exist.
    """

    vertices = _reachable(graph)
    sorter: TopologicalSorter[int] = TopologicalSorter()
    for key, vertex in vertices.items():
        sorter.add(key)
        for edge in vertex.out_edges():
            sorter.add(vertex_key(edge.target), key)

    try:
        order = list(sorter.static_order())
    except CycleError as exc:
        keys = exc.args[1]
        cycle = [vertices[key] for key in keys]
        names = [_describe(vertex, ctx) for vertex in cycle]
        LOGGER.warning("object graph contains a cycle: %s", " -> ".join(names))
        raise GraphCycleError(names, cycle) from exc

    linear: list[Resource] = []
    for key in order:
        vertex = vertices[key]
        if not graph.is_resource(vertex):
            continue
        resource = ctx.by_object.get(key)
        if resource is None:
            raise InvariantViolationError(f"resource vertex {vertex.obj!r} was never materialised")
        linear.append(resource)

    if len(linear) != len(ctx) or len({id(resource) for resource in linear}) != len(linear):
        raise InvariantViolationError(
            f"sorted {len(linear)} resources but the context registered {len(ctx)}",
        )

    dependencies = {resource.moniker: resource.dependencies() for resource in linear}
    LOGGER.debug("sorted %d vertices into %d resources", len(order), len(linear))
    return ResourceOrder(resources=tuple(linear), dependencies=MappingProxyType(dependencies))


__all__ = ["ResourceOrder", "topsort"]
