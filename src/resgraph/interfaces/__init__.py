# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocol definitions shared across resgraph modules."""

from __future__ import annotations

from .graph import GraphEdge, GraphRoot, GraphVertex, ObjectGraph, vertex_key

__all__ = ["GraphEdge", "GraphRoot", "GraphVertex", "ObjectGraph", "vertex_key"]
