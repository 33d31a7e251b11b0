# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resource entities materialised from moniker assignments."""

from __future__ import annotations

from dataclasses import dataclass

from .interfaces.graph import GraphVertex, vertex_key
from .moniker import Moniker, MonikerMap


@dataclass(frozen=True, slots=True, eq=False)
class Resource:
    """Immutable wrapper around a resource vertex and its moniker.

    The resource keeps a reference to the moniker map of its compilation pass
    so it can resolve its own dependency edges to the monikers of other
    resources.
    """

    moniker: Moniker
    vertex: GraphVertex
    monikers: MonikerMap

    @property
    def obj(self) -> object:
        """Return the runtime value wrapped by the resource vertex."""

        return self.vertex.obj

    @property
    def type_token(self) -> str | None:
        """Return the resource type name when the vertex carries one."""

        token = getattr(self.vertex, "type_token", None)
        return token if isinstance(token, str) else None

    def dependencies(self) -> tuple[Moniker, ...]:
        """Return monikers of the resources this resource points to.

        Non-resource vertices are walked through transparently; each branch
        stops at the first resource it reaches. Results keep first-seen order
        and contain no duplicates.

        Returns:
            tuple[Moniker, ...]: Dependency monikers in edge order.
        """

        found: dict[Moniker, None] = {}
        seen: set[int] = {vertex_key(self.vertex)}
        stack = [edge.target for edge in reversed(tuple(self.vertex.out_edges()))]
        while stack:
            vertex = stack.pop()
            key = vertex_key(vertex)
            if key in self.monikers:
                found.setdefault(self.monikers[key], None)
                continue
            if key in seen:
                continue
            seen.add(key)
            stack.extend(edge.target for edge in reversed(tuple(vertex.out_edges())))
        return tuple(found)

    def __repr__(self) -> str:
        return f"Resource({self.moniker!r})"


def new_object_resource(vertex: GraphVertex, monikers: MonikerMap) -> Resource:
    """Return the :class:`Resource` for ``vertex`` using its assigned moniker.

    Raises:
        KeyError: If ``vertex`` has no moniker in ``monikers``.
    """

    return Resource(moniker=monikers[vertex_key(vertex)], vertex=vertex, monikers=monikers)


__all__ = ["Resource", "new_object_resource"]
