# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Behavioural tests for :mod:`resgraph.moniker`."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from resgraph.config import SnapshotConfig
from resgraph.errors import GraphCycleError, GraphDefinitionError, TraversalBudgetExceededError
from resgraph.moniker import assign_monikers, is_unambiguous_segment, new_moniker


def test_new_moniker_joins_root_and_labels(diamond) -> None:
    path = [diamond["r"].out_edges()[0], diamond["a"].out_edges()[0]]

    assert new_moniker("R", path) == "R::a::c"
    assert new_moniker("R", path, delimiter="/") == "R/a/c"
    assert new_moniker("R", []) == "R"


def test_diamond_assigns_resources_only(diamond) -> None:
    monikers = assign_monikers(diamond.graph)

    assert monikers.moniker_for(diamond.obj("a")) == "R::a"
    assert monikers.moniker_for(diamond.obj("c")) == "R::a::c"
    assert monikers.moniker_for(diamond.obj("r")) is None
    assert monikers.moniker_for(diamond.obj("b")) is None
    assert len(monikers) == 2


def test_depth_and_vertex_are_recorded(diamond) -> None:
    monikers = assign_monikers(diamond.graph)
    key = id(diamond.obj("c"))

    assert monikers.depth_for(key) == 2
    assert monikers.vertex_for(key) is diamond["c"]
    assert monikers.contains_vertex(diamond["a"])
    assert not monikers.contains_vertex(diamond["b"])


@pytest.mark.parametrize("root_order", [("far", "near"), ("near", "far")])
def test_shortest_path_wins_regardless_of_root_order(build_graph, root_order) -> None:
    roots = {"far": "x", "near": "y"}
    built = build_graph(
        roots={name: roots[name] for name in root_order},
        edges=[("x", "p"), ("p", "q"), ("q", "t"), ("y", "u"), ("u", "t")],
        resources=["t"],
    )

    monikers = assign_monikers(built.graph)

    assert monikers.moniker_for(built.obj("t")) == "near::u::t"
    assert monikers.depth_for(id(built.obj("t"))) == 2


@pytest.mark.parametrize("root_order", [("zeta", "alpha"), ("alpha", "zeta")])
def test_equal_length_paths_pick_smallest_moniker(build_graph, root_order) -> None:
    roots = {"zeta": "z", "alpha": "a"}
    built = build_graph(
        roots={name: roots[name] for name in root_order},
        edges=[("z", "t"), ("a", "t"), ("t", "d")],
        resources=["t", "d"],
    )

    monikers = assign_monikers(built.graph)

    assert monikers.moniker_for(built.obj("t")) == "alpha::t"
    assert monikers.moniker_for(built.obj("d")) == "alpha::t::d"


def test_same_structure_under_different_roots_is_distinguished(build_graph) -> None:
    built = build_graph(
        roots={"left": "l", "right": "r"},
        edges=[("l", "x", "db"), ("r", "y", "db")],
        resources=["x", "y"],
    )

    monikers = assign_monikers(built.graph)

    assert monikers.moniker_for(built.obj("x")) == "left::db"
    assert monikers.moniker_for(built.obj("y")) == "right::db"


def test_resource_root_is_named_after_root(build_graph) -> None:
    built = build_graph(roots={"app": "a"}, edges=[("a", "b")], resources=["a", "b"])

    monikers = assign_monikers(built.graph)

    assert monikers.moniker_for(built.obj("a")) == "app"
    assert monikers.moniker_for(built.obj("b")) == "app::b"


def test_non_resources_are_traversed_to_reach_resources(build_graph) -> None:
    built = build_graph(
        roots={"R": "r"},
        edges=[("r", "n1"), ("n1", "n2"), ("n2", "n3"), ("n3", "leaf")],
        resources=["leaf"],
    )

    monikers = assign_monikers(built.graph)

    assert list(monikers.values()) == ["R::n1::n2::n3::leaf"]


def test_unreachable_resources_receive_no_moniker(build_graph) -> None:
    built = build_graph(roots={"R": "r"}, edges=[("r", "a")], resources=["a", "orphan"])

    monikers = assign_monikers(built.graph)

    assert monikers.moniker_for(built.obj("orphan")) is None
    assert len(monikers) == 1


def test_configured_delimiter_is_used(diamond) -> None:
    monikers = assign_monikers(diamond.graph, SnapshotConfig(moniker_delimiter="/"))

    assert sorted(monikers.values()) == ["R/a", "R/a/c"]


def test_assignment_is_deterministic(build_graph) -> None:
    def run() -> list[str]:
        built = build_graph(
            roots={"one": "r1", "two": "r2"},
            edges=[
                ("r1", "a"),
                ("r1", "n"),
                ("n", "b"),
                ("r2", "b"),
                ("a", "c"),
                ("b", "c"),
                ("c", "d"),
            ],
            resources=["a", "b", "c", "d"],
        )
        monikers = assign_monikers(built.graph)
        return [monikers[id(built.obj(name))] for name in ("a", "b", "c", "d")]

    first = run()

    assert first == run()
    assert first == ["one::a", "two::b", "one::a::c", "one::a::c::d"]


def test_resource_cycle_does_not_loop(build_graph) -> None:
    built = build_graph(
        roots={"R": "r"},
        edges=[("r", "a"), ("a", "b"), ("b", "a", "back")],
        resources=["a", "b"],
    )

    monikers = assign_monikers(built.graph)

    assert sorted(monikers.values()) == ["R::a", "R::a::b"]


def test_non_resource_cycle_is_rejected(build_graph) -> None:
    built = build_graph(
        roots={"R": "r"},
        edges=[("r", "n1"), ("n1", "n2"), ("n2", "n1", "back")],
    )

    with pytest.raises(GraphCycleError) as excinfo:
        assign_monikers(built.graph)

    assert excinfo.value.cycle == ("R::n1", "R::n1::n2", "R::n1::n2::back")
    assert excinfo.value.vertices[0] is built["n1"]
    assert excinfo.value.vertices[-1] is built["n1"]


def test_step_budget_is_enforced(build_graph) -> None:
    built = build_graph(
        roots={"R": "r"},
        edges=[("r", "a"), ("a", "b"), ("b", "c")],
        resources=["a", "b", "c"],
    )

    with pytest.raises(TraversalBudgetExceededError):
        assign_monikers(built.graph, SnapshotConfig(max_traversal_steps=3))


def test_path_length_budget_is_enforced(build_graph) -> None:
    built = build_graph(roots={"R": "r"}, edges=[("r", "a"), ("a", "b")], resources=["b"])

    with pytest.raises(TraversalBudgetExceededError, match="exceeds 1 edges"):
        assign_monikers(built.graph, SnapshotConfig(max_path_length=1))


def test_deep_chain_does_not_hit_recursion_limit(build_graph) -> None:
    names = [f"n{index}" for index in range(3000)]
    edges = [("r", names[0])] + [(names[index], names[index + 1], "next") for index in range(len(names) - 1)]
    built = build_graph(roots={"R": "r"}, edges=edges, resources=[names[-1]])

    monikers = assign_monikers(built.graph, SnapshotConfig(max_path_length=10_000))

    assert monikers.depth_for(id(built.obj(names[-1]))) == 3000


@pytest.mark.parametrize(
    ("segment", "delimiter", "expected"),
    [
        ("web", "::", True),
        ("a:b", "::", True),
        ("a::b", "::", False),
        ("a:", "::", False),
        (":a", "::", False),
        ("", "::", False),
        ("", "/", True),
        ("a::b", "/", True),
        ("a/b", "/", False),
    ],
)
def test_is_unambiguous_segment(segment: str, delimiter: str, expected: bool) -> None:
    assert is_unambiguous_segment(segment, delimiter) is expected


def test_label_containing_delimiter_is_rejected(build_graph) -> None:
    built = build_graph(
        roots={"R": "r"},
        edges=[("r", "x", "a::b"), ("r", "n", "a"), ("n", "y", "b")],
        resources=["x", "y"],
    )

    with pytest.raises(GraphDefinitionError, match="edge label 'a::b' leaving R is ambiguous"):
        assign_monikers(built.graph)


def test_label_overlapping_delimiter_is_rejected(build_graph) -> None:
    built = build_graph(
        roots={"R": "r"},
        edges=[("r", "m", "a:"), ("m", "x", "b"), ("r", "n", "a"), ("n", "y", ":b")],
        resources=["x", "y"],
    )

    with pytest.raises(GraphDefinitionError, match="ambiguous with moniker delimiter"):
        assign_monikers(built.graph)


def test_root_name_containing_delimiter_is_rejected(build_graph) -> None:
    built = build_graph(roots={"app::web": "r"}, edges=[("r", "a")], resources=["a"])

    with pytest.raises(GraphDefinitionError, match="root name 'app::web'"):
        assign_monikers(built.graph)


def test_segments_are_checked_against_configured_delimiter(build_graph) -> None:
    built = build_graph(roots={"R": "r"}, edges=[("r", "a", "a::b")], resources=["a"])

    monikers = assign_monikers(built.graph, SnapshotConfig(moniker_delimiter="/"))

    assert monikers.moniker_for(built.obj("a")) == "R/a::b"
    with pytest.raises(GraphDefinitionError, match="'a::b'"):
        assign_monikers(built.graph)


@dataclass(eq=False)
class _LooseVertex:
    obj: object
    resource: bool = False
    edges: list[_LooseEdge] = field(default_factory=list)

    def out_edges(self) -> tuple[_LooseEdge, ...]:
        return tuple(self.edges)


@dataclass(frozen=True)
class _LooseEdge:
    label: str
    source: _LooseVertex
    target: _LooseVertex


@dataclass(frozen=True)
class _LooseRoot:
    name: str
    vertex: _LooseVertex


class _LooseGraph:
    """Protocol-only graph that performs no validation of its own."""

    def __init__(self, roots: list[_LooseRoot]) -> None:
        self._roots = tuple(roots)

    def roots(self) -> tuple[_LooseRoot, ...]:
        return self._roots

    def is_resource(self, vertex: _LooseVertex) -> bool:
        return vertex.resource


def test_duplicate_sibling_labels_are_rejected() -> None:
    root = _LooseVertex(obj=object())
    first = _LooseVertex(obj=object(), resource=True)
    second = _LooseVertex(obj=object(), resource=True)
    root.edges.extend([_LooseEdge("db", root, first), _LooseEdge("db", root, second)])

    with pytest.raises(GraphDefinitionError, match="duplicate edge label 'db' leaving R"):
        assign_monikers(_LooseGraph([_LooseRoot("R", root)]))


def test_assigned_monikers_are_unique(build_graph) -> None:
    built = build_graph(
        roots={"R": "r", "S": "s"},
        edges=[("r", "n", "a"), ("n", "x", "b"), ("r", "y", "a:b"), ("s", "z", "a"), ("z", "w", "b")],
        resources=["x", "y", "z", "w"],
    )

    monikers = assign_monikers(built.graph)

    assert len(set(monikers.values())) == len(monikers) == 4
