# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while compiling resource snapshots."""

from __future__ import annotations

from collections.abc import Sequence


class ResourceGraphError(RuntimeError):
    """Base class for failures raised by snapshot compilation."""


class GraphDefinitionError(ResourceGraphError):
    """Raised when an object graph or graph document is malformed."""


class GraphCycleError(ResourceGraphError):
    """Raised when the object graph is not a DAG.

    Attributes:
        cycle: Human-readable descriptions of the vertices forming the cycle,
            starting and ending with the same vertex.
        vertices: The offending vertices in cycle order.
    """

    def __init__(self, cycle: Sequence[str], vertices: Sequence[object] = ()) -> None:
        """Create the error from the vertex descriptions forming the cycle.

        Args:
            cycle: Vertex descriptions in traversal order.
            vertices: Optional vertex objects matching ``cycle``.
        """

        self.cycle: tuple[str, ...] = tuple(cycle)
        self.vertices: tuple[object, ...] = tuple(vertices)
        super().__init__(f"cycle detected in object graph: {' -> '.join(self.cycle)}")


class TraversalBudgetExceededError(ResourceGraphError):
    """Raised when moniker assignment exceeds its configured traversal budget."""


class InvariantViolationError(ResourceGraphError):
    """Raised when an internal consistency check fails.

    These failures indicate a logic defect rather than bad input and must abort
    the compilation pass.
    """


class UnimplementedLookupError(InvariantViolationError, NotImplementedError):
    """Raised by lookups the snapshot deliberately does not support."""


__all__ = (
    "GraphCycleError",
    "GraphDefinitionError",
    "InvariantViolationError",
    "ResourceGraphError",
    "TraversalBudgetExceededError",
    "UnimplementedLookupError",
)
