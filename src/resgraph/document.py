# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Declarative graph documents loaded from JSON or TOML."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import GraphDefinitionError
from .graph import ObjectGraph, ObjectVertex


class VertexDocument(BaseModel):
    """Vertex entry: a runtime value and whether it is a managed resource."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    resource: bool = False
    type: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)


class EdgeDocument(BaseModel):
    """Edge entry between two vertex keys."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    label: str | None = None


class GraphDocument(BaseModel):
    """Serialisable description of an object graph.

    Example::

        {
          "roots": {"app": "stack"},
          "vertices": {"stack": {}, "web": {"resource": true, "type": "aws:ec2/instance"}},
          "edges": [{"from": "stack", "to": "web"}]
        }
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    roots: dict[str, str] = Field(default_factory=dict)
    vertices: dict[str, VertexDocument] = Field(default_factory=dict)
    edges: list[EdgeDocument] = Field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, source: str = "<mapping>") -> GraphDocument:
        """Validate ``data`` as a graph document.

        Raises:
            GraphDefinitionError: If ``data`` does not match the document schema.
        """

        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise GraphDefinitionError(f"invalid graph document {source}: {exc}") from exc

    def build(self) -> ObjectGraph:
        """Return an :class:`ObjectGraph` reflecting the document.

        Each vertex wraps its :class:`VertexDocument`; edges without a label
        are named after their target key.

        Returns:
            ObjectGraph: Newly constructed graph.

        Raises:
            GraphDefinitionError: If an edge or root names an unknown vertex.
        """

        graph = ObjectGraph()
        by_key: dict[str, ObjectVertex] = {}
        for key, entry in self.vertices.items():
            # Each key gets its own wrapped object even when entries compare equal.
            record = _VertexRecord(key, entry)
            by_key[key] = graph.add_vertex(record, resource=entry.resource, type_token=entry.type)
        for edge in self.edges:
            graph.add_edge(
                _lookup(by_key, edge.source, "edge source"),
                _lookup(by_key, edge.target, "edge target"),
                edge.label or edge.target,
            )
        for name, key in self.roots.items():
            graph.add_root(name, _lookup(by_key, key, f"root '{name}'"))
        return graph


class _VertexRecord:
    """Runtime value wrapped by vertices built from a document."""

    __slots__ = ("entry", "key")

    def __init__(self, key: str, entry: VertexDocument) -> None:
        self.key = key
        self.entry = entry

    def __repr__(self) -> str:
        return f"<vertex {self.key}>"


def _lookup(by_key: Mapping[str, ObjectVertex], key: str, role: str) -> ObjectVertex:
    try:
        return by_key[key]
    except KeyError as exc:
        raise GraphDefinitionError(f"{role} refers to unknown vertex '{key}'") from exc


def load_graph_document(path: Path) -> GraphDocument:
    """Read a graph document from ``path``.

    Files ending in ``.toml`` are parsed as TOML; anything else as JSON.

    Raises:
        GraphDefinitionError: If the file cannot be read or parsed.
    """

    try:
        if path.suffix == ".toml":
            with path.open("rb") as handle:
                data: Any = tomllib.load(handle)
        else:
            data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise GraphDefinitionError(f"unable to read graph document {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise GraphDefinitionError(f"graph document {path} must be an object")
    return GraphDocument.from_mapping(data, source=str(path))


__all__ = ["EdgeDocument", "GraphDocument", "VertexDocument", "load_graph_document"]
