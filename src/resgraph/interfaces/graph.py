# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Interfaces describing the evaluator's object graph."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class GraphVertex(Protocol):
    """Vertex wrapping an opaque runtime value."""

    @property
    def obj(self) -> object:
        """Return the wrapped value whose identity identifies the vertex."""

        raise NotImplementedError

    def out_edges(self) -> Sequence[GraphEdge]:
        """Return outgoing edges in a stable order."""

        raise NotImplementedError


@runtime_checkable
class GraphEdge(Protocol):
    """Directed, labelled points-to relationship between two vertices."""

    @property
    def label(self) -> str:
        """Return the edge name used when deriving monikers."""

        raise NotImplementedError

    @property
    def source(self) -> GraphVertex:
        """Return the vertex the edge leaves."""

        raise NotImplementedError

    @property
    def target(self) -> GraphVertex:
        """Return the vertex the edge points to."""

        raise NotImplementedError


@runtime_checkable
class GraphRoot(Protocol):
    """Named entry point into the object graph."""

    @property
    def name(self) -> str:
        """Return the root name used as the first moniker segment."""

        raise NotImplementedError

    @property
    def vertex(self) -> GraphVertex:
        """Return the vertex bound to the root."""

        raise NotImplementedError


@runtime_checkable
class ObjectGraph(Protocol):
    """Read-only view of an evaluated object graph."""

    def roots(self) -> Sequence[GraphRoot]:
        """Return root bindings in a stable order."""

        raise NotImplementedError

    def is_resource(self, vertex: GraphVertex) -> bool:
        """Return ``True`` when ``vertex`` represents a managed resource."""

        raise NotImplementedError


def vertex_key(vertex: GraphVertex) -> int:
    """Return the identity key used to index ``vertex``.

    Args:
        vertex: Vertex whose wrapped value identifies it.

    Returns:
        int: Reference identity of the wrapped value.
    """

    return id(vertex.obj)


__all__ = ["GraphEdge", "GraphRoot", "GraphVertex", "ObjectGraph", "vertex_key"]
