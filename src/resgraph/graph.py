# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory object graph implementing :mod:`resgraph.interfaces.graph`."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .errors import GraphDefinitionError
from .interfaces.graph import vertex_key


@dataclass(eq=False, slots=True)
class ObjectVertex:
    """Vertex wrapping ``obj``; equality and hashing use reference identity."""

    obj: object
    resource: bool = False
    type_token: str | None = None
    _edges: list[ObjectEdge] = field(default_factory=list, repr=False)

    def out_edges(self) -> Sequence[ObjectEdge]:
        """Return outgoing edges in insertion order.

        Returns:
            Sequence[ObjectEdge]: Edges leaving this vertex.
        """

        return tuple(self._edges)


@dataclass(frozen=True, slots=True)
class ObjectEdge:
    """Labelled edge between two :class:`ObjectVertex` instances."""

    label: str
    source: ObjectVertex
    target: ObjectVertex


@dataclass(frozen=True, slots=True)
class RootBinding:
    """Named root pointing at a vertex."""

    name: str
    vertex: ObjectVertex


class ObjectGraph:
    """Mutable object graph used by tests, tooling and the CLI.

    Vertices are owned by the graph that created them; edges and roots may only
    reference owned vertices.
    """

    def __init__(self) -> None:
        """Initialise an empty graph."""

        self._vertices: dict[int, ObjectVertex] = {}
        self._roots: dict[str, RootBinding] = {}

    def add_vertex(self, obj: object, *, resource: bool = False, type_token: str | None = None) -> ObjectVertex:
        """Wrap ``obj`` in a vertex owned by this graph.

        Args:
            obj: Runtime value represented by the vertex.
            resource: ``True`` when the value is a managed resource.
            type_token: Optional resource type name carried for reporting.

        Returns:
            ObjectVertex: Newly created vertex.

        Raises:
            GraphDefinitionError: If ``obj`` is already wrapped by a vertex.
        """

        key = id(obj)
        if key in self._vertices:
            raise GraphDefinitionError(f"object {obj!r} already has a vertex")
        vertex = ObjectVertex(obj=obj, resource=resource, type_token=type_token)
        self._vertices[key] = vertex
        return vertex

    def add_edge(self, source: ObjectVertex, target: ObjectVertex, label: str) -> ObjectEdge:
        """Connect ``source`` to ``target`` with a labelled edge.

        Args:
            source: Vertex the edge leaves.
            target: Vertex the edge points to.
            label: Edge name contributing to derived monikers.

        Returns:
            ObjectEdge: The created edge.

        Raises:
            GraphDefinitionError: If either vertex is foreign, ``label`` is empty,
                or ``source`` already has an edge called ``label``.
        """

        self._require_owned(source)
        self._require_owned(target)
        if not label:
            raise GraphDefinitionError("edge labels must be non-empty")
        if any(existing.label == label for existing in source._edges):  # pylint: disable=protected-access
            raise GraphDefinitionError(f"vertex {source.obj!r} already has an edge labelled '{label}'")
        edge = ObjectEdge(label=label, source=source, target=target)
        source._edges.append(edge)  # pylint: disable=protected-access
        return edge

    def add_root(self, name: str, vertex: ObjectVertex) -> RootBinding:
        """Designate ``vertex`` as a root called ``name``.

        Raises:
            GraphDefinitionError: If the name is empty or already bound.
        """

        self._require_owned(vertex)
        if not name:
            raise GraphDefinitionError("root names must be non-empty")
        if name in self._roots:
            raise GraphDefinitionError(f"root '{name}' already defined")
        binding = RootBinding(name=name, vertex=vertex)
        self._roots[name] = binding
        return binding

    def roots(self) -> Sequence[RootBinding]:
        """Return root bindings in insertion order."""

        return tuple(self._roots.values())

    def is_resource(self, vertex: ObjectVertex) -> bool:
        """Return the resource flag recorded on ``vertex``."""

        return vertex.resource

    def vertices(self) -> Iterator[ObjectVertex]:
        """Iterate over every owned vertex in insertion order."""

        return iter(tuple(self._vertices.values()))

    def __len__(self) -> int:
        return len(self._vertices)

    def _require_owned(self, vertex: ObjectVertex) -> None:
        if self._vertices.get(vertex_key(vertex)) is not vertex:
            raise GraphDefinitionError(f"vertex {vertex.obj!r} does not belong to this graph")


__all__ = ["ObjectEdge", "ObjectGraph", "ObjectVertex", "RootBinding"]
