# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Moniker assignment for resource vertices.

A moniker is a deterministic, human-readable name derived from the shortest
path by which a resource is reachable from one of the graph roots. The name is
the root name followed by every edge label on the path, joined with the
configured delimiter (``app::web::server``). When two paths of equal length
reach the same resource, the lexicographically smaller moniker wins. Root names
and edge labels are checked before they are joined: sibling edges must carry
distinct labels and no segment may blur the delimiter, so every path from a
root yields a moniker no other path can produce.

The traversal runs on an explicit work-list rather than recursion. Frames are
pushed in reverse edge order so the visit order matches a recursive
depth-first walk exactly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import NewType

from .config import DEFAULT_MONIKER_DELIMITER, SnapshotConfig
from .errors import GraphCycleError, GraphDefinitionError, TraversalBudgetExceededError
from .interfaces.graph import GraphEdge, GraphRoot, GraphVertex, ObjectGraph, vertex_key

Moniker = NewType("Moniker", str)

LOGGER = logging.getLogger(__name__)


def new_moniker(
    root_name: str,
    path: Sequence[GraphEdge],
    delimiter: str = DEFAULT_MONIKER_DELIMITER,
) -> Moniker:
    """Return the moniker for a vertex reached from ``root_name`` via ``path``.

    Args:
        root_name: Name of the root the walk started from.
        path: Edges followed from the root vertex to the named vertex.
        delimiter: Separator placed between segments.

    Returns:
        Moniker: Joined root name and edge labels.
    """

    return Moniker(delimiter.join([root_name, *(edge.label for edge in path)]))


def is_unambiguous_segment(segment: str, delimiter: str) -> bool:
    """Return ``True`` when ``segment`` can be joined with ``delimiter`` losslessly.

    A segment qualifies when the only occurrences of ``delimiter`` in
    ``delimiter + segment + delimiter`` are the two framing ones. This rejects
    segments containing the delimiter as well as segments whose edges overlap
    it (``"a:"`` next to ``"::"``), so distinct segment sequences always join
    to distinct monikers.

    Args:
        segment: Root name or edge label.
        delimiter: Moniker delimiter in effect.

    Returns:
        bool: ``True`` when the segment cannot blur a segment boundary.
    """

    framed = f"{delimiter}{segment}{delimiter}"
    return framed.find(delimiter, 1) == len(delimiter) + len(segment)


@dataclass(frozen=True, slots=True)
class MonikerAssignment:
    """Winning moniker for a vertex together with the length of its path."""

    moniker: Moniker
    depth: int
    vertex: GraphVertex


class MonikerMap(Mapping[int, Moniker]):
    """Read-only mapping from object identity to assigned moniker.

    Keys are ``id()`` values of the wrapped objects; the map retains each
    vertex so the identities stay valid for the lifetime of the map. Iteration
    follows the order in which vertices first received a moniker.
    """

    __slots__ = ("_assignments",)

    def __init__(self, assignments: Mapping[int, MonikerAssignment]) -> None:
        self._assignments: dict[int, MonikerAssignment] = dict(assignments)

    def __getitem__(self, key: int) -> Moniker:
        return self._assignments[key].moniker

    def __iter__(self) -> Iterator[int]:
        return iter(self._assignments)

    def __len__(self) -> int:
        return len(self._assignments)

    def __repr__(self) -> str:
        monikers = ", ".join(entry.moniker for entry in self._assignments.values())
        return f"MonikerMap([{monikers}])"

    def assignment(self, key: int) -> MonikerAssignment:
        """Return the full assignment record stored for ``key``."""

        return self._assignments[key]

    def assignments(self) -> tuple[MonikerAssignment, ...]:
        """Return every assignment in insertion order."""

        return tuple(self._assignments.values())

    def vertex_for(self, key: int) -> GraphVertex:
        """Return the vertex whose wrapped object has identity ``key``."""

        return self._assignments[key].vertex

    def depth_for(self, key: int) -> int:
        """Return the length of the path that produced the moniker for ``key``."""

        return self._assignments[key].depth

    def moniker_for(self, obj: object) -> Moniker | None:
        """Return the moniker assigned to ``obj`` or ``None`` when it has none."""

        entry = self._assignments.get(id(obj))
        return None if entry is None else entry.moniker

    def contains_vertex(self, vertex: GraphVertex) -> bool:
        """Return ``True`` when ``vertex`` received a moniker."""

        return vertex_key(vertex) in self._assignments


@dataclass(frozen=True, slots=True)
class _Frame:
    """Pending visit of ``vertex`` reached through ``path``."""

    vertex: GraphVertex
    path: tuple[GraphEdge, ...]
    on_path: frozenset[int]


class _MonikerAssignor:
    """Single-use walker producing a :class:`MonikerMap`."""

    def __init__(self, graph: ObjectGraph, config: SnapshotConfig) -> None:
        self._graph = graph
        self._config = config
        self._assigned: dict[int, MonikerAssignment] = {}
        self._labels_checked: set[int] = set()
        self._steps = 0

    def run(self) -> MonikerMap:
        for root in self._graph.roots():
            self._require_segment(root.name, f"root name '{root.name}'")
            self._walk(root)
        LOGGER.debug(
            "assigned %d monikers in %d traversal steps",
            len(self._assigned),
            self._steps,
        )
        return MonikerMap(self._assigned)

    def _walk(self, root: GraphRoot) -> None:
        stack = [_Frame(vertex=root.vertex, path=(), on_path=frozenset())]
        while stack:
            frame = stack.pop()
            self._charge(root, frame)
            if not self._visit(root, frame):
                continue
            edges = tuple(frame.vertex.out_edges())
            self._check_labels(root, frame, edges)
            on_path = frame.on_path | {vertex_key(frame.vertex)}
            for edge in reversed(edges):
                stack.append(_Frame(vertex=edge.target, path=(*frame.path, edge), on_path=on_path))

    def _check_labels(self, root: GraphRoot, frame: _Frame, edges: Sequence[GraphEdge]) -> None:
        """Reject out-edge labels that would make two monikers collide."""

        key = vertex_key(frame.vertex)
        if key in self._labels_checked:
            return
        seen: set[str] = set()
        for edge in edges:
            where = f"edge label '{edge.label}' leaving {self._describe(root, frame.path)}"
            if edge.label in seen:
                raise GraphDefinitionError(f"duplicate {where}")
            seen.add(edge.label)
            self._require_segment(edge.label, where)
        self._labels_checked.add(key)

    def _require_segment(self, segment: str, where: str) -> None:
        delimiter = self._config.moniker_delimiter
        if not is_unambiguous_segment(segment, delimiter):
            raise GraphDefinitionError(f"{where} is ambiguous with moniker delimiter '{delimiter}'")

    def _visit(self, root: GraphRoot, frame: _Frame) -> bool:
        """Process ``frame`` and return ``True`` when its out-edges should be followed."""

        vertex = frame.vertex
        key = vertex_key(vertex)
        if not self._graph.is_resource(vertex):
            if key in frame.on_path:
                raise self._cycle_error(root, frame)
            return True

        depth = len(frame.path)
        current = self._assigned.get(key)
        if current is not None and current.depth < depth:
            return False
        candidate = new_moniker(root.name, frame.path, self._config.moniker_delimiter)
        if current is not None and current.depth == depth:
            if candidate >= current.moniker:
                return False
            LOGGER.debug("moniker %s replaces %s at depth %d", candidate, current.moniker, depth)
        self._assigned[key] = MonikerAssignment(moniker=candidate, depth=depth, vertex=vertex)
        return True

    def _charge(self, root: GraphRoot, frame: _Frame) -> None:
        self._steps += 1
        if self._steps > self._config.max_traversal_steps:
            raise TraversalBudgetExceededError(
                f"moniker assignment exceeded {self._config.max_traversal_steps} traversal steps "
                f"(last path: {self._describe(root, frame.path)})",
            )
        if len(frame.path) > self._config.max_path_length:
            raise TraversalBudgetExceededError(
                f"path from root '{root.name}' exceeds {self._config.max_path_length} edges",
            )

    def _cycle_error(self, root: GraphRoot, frame: _Frame) -> GraphCycleError:
        key = vertex_key(frame.vertex)
        chain: list[GraphVertex] = [root.vertex, *(edge.target for edge in frame.path)]
        start = next(index for index, vertex in enumerate(chain) if vertex_key(vertex) == key)
        names = [self._describe(root, frame.path[:index]) for index in range(start, len(chain))]
        LOGGER.warning("non-resource cycle reached from root '%s': %s", root.name, " -> ".join(names))
        return GraphCycleError(names, chain[start:])

    def _describe(self, root: GraphRoot, path: Sequence[GraphEdge]) -> str:
        return new_moniker(root.name, path, self._config.moniker_delimiter)


def assign_monikers(graph: ObjectGraph, config: SnapshotConfig | None = None) -> MonikerMap:
    """Assign a moniker to every resource vertex reachable from the graph roots.

    Args:
        graph: Object graph exposing roots, edges and the resource predicate.
        config: Optional configuration; defaults to :class:`SnapshotConfig`.

    Returns:
        MonikerMap: Mapping from object identity to the winning moniker.

    Raises:
        GraphCycleError: If a cycle made only of non-resource vertices is reached.
        GraphDefinitionError: If a root name or edge label would make two
            monikers collide.
        TraversalBudgetExceededError: If the walk exceeds the configured budget.
    """

    return _MonikerAssignor(graph, config or SnapshotConfig()).run()


__all__ = [
    "Moniker",
    "MonikerAssignment",
    "MonikerMap",
    "assign_monikers",
    "is_unambiguous_segment",
    "new_moniker",
]
