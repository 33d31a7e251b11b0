# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

import pytest

from resgraph.graph import ObjectGraph, ObjectVertex


class Value:
    """Distinct runtime value wrapped by test vertices."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Value({self.name})"


@dataclass
class BuiltGraph:
    """Graph under test plus its vertices keyed by name."""

    graph: ObjectGraph
    vertices: dict[str, ObjectVertex]

    def __getitem__(self, name: str) -> ObjectVertex:
        return self.vertices[name]

    def obj(self, name: str) -> object:
        return self.vertices[name].obj


GraphBuilder = Callable[..., BuiltGraph]


def _build(
    *,
    roots: Mapping[str, str],
    edges: Iterable[tuple[str, str] | tuple[str, str, str]] = (),
    resources: Iterable[str] = (),
    others: Iterable[str] = (),
) -> BuiltGraph:
    """Build a graph from compact edge tuples ``(source, target[, label])``.

    Vertex names are collected from roots, edges and the explicit lists in
    first-seen order. Edge labels default to the target name.
    """

    resource_list = list(resources)
    resource_names = set(resource_list)
    edge_list = [tuple(edge) for edge in edges]
    names: dict[str, None] = {}
    for name in [*roots.values(), *others, *resource_list]:
        names.setdefault(name, None)
    for edge in edge_list:
        names.setdefault(edge[0], None)
        names.setdefault(edge[1], None)

    graph = ObjectGraph()
    vertices = {
        name: graph.add_vertex(Value(name), resource=name in resource_names, type_token=f"test:{name}")
        for name in names
    }
    for edge in edge_list:
        label = edge[2] if len(edge) == 3 else edge[1]
        graph.add_edge(vertices[edge[0]], vertices[edge[1]], label)
    for root_name, vertex_name in roots.items():
        graph.add_root(root_name, vertices[vertex_name])
    return BuiltGraph(graph=graph, vertices=vertices)


@pytest.fixture
def build_graph() -> GraphBuilder:
    """Return a factory producing fresh graphs from compact descriptions."""

    return _build


@pytest.fixture
def diamond(build_graph: GraphBuilder) -> BuiltGraph:
    """Root ``R`` with ``R->A``, ``R->B->C`` and ``A->C``; ``A`` and ``C`` are resources."""

    return build_graph(
        roots={"R": "r"},
        edges=[("r", "a"), ("r", "b"), ("b", "c"), ("a", "c")],
        resources=["a", "c"],
    )
