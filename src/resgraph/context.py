# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-pass resource indices shared by snapshot construction."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .errors import InvariantViolationError
from .interfaces.graph import vertex_key
from .moniker import Moniker, MonikerMap
from .resource import Resource, new_object_resource

LOGGER = logging.getLogger(__name__)


class Context:
    """Index resources by object identity and by moniker.

    A context is populated once per compilation pass by :meth:`materialize`
    (or :meth:`register`) and frozen when the snapshot is assembled. After
    freezing it is read-only and safe to share between readers.
    """

    def __init__(self) -> None:
        """Initialise empty, mutable indices."""

        self._by_object: dict[int, Resource] = {}
        self._by_moniker: dict[Moniker, Resource] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        """Return ``True`` once the context no longer accepts registrations."""

        return self._frozen

    @property
    def by_object(self) -> Mapping[int, Resource]:
        """Return a read-only view of the object-identity index."""

        return MappingProxyType(self._by_object)

    @property
    def by_moniker(self) -> Mapping[Moniker, Resource]:
        """Return a read-only view of the moniker index."""

        return MappingProxyType(self._by_moniker)

    def register(self, resource: Resource) -> None:
        """Add ``resource`` to both indices.

        Args:
            resource: Resource to index.

        Raises:
            InvariantViolationError: If the context is frozen or the vertex or
                moniker is already registered.
        """

        if self._frozen:
            raise InvariantViolationError(f"cannot register {resource.moniker}: context is frozen")
        key = vertex_key(resource.vertex)
        if key in self._by_object:
            raise InvariantViolationError(
                f"object for {resource.moniker} already materialised as {self._by_object[key].moniker}",
            )
        if resource.moniker in self._by_moniker:
            raise InvariantViolationError(f"moniker {resource.moniker} is already registered")
        self._by_object[key] = resource
        self._by_moniker[resource.moniker] = resource

    def materialize(self, monikers: MonikerMap) -> tuple[Resource, ...]:
        """Create and register one :class:`Resource` per moniker assignment.

        Args:
            monikers: Assignments produced by :func:`resgraph.moniker.assign_monikers`.

        Returns:
            tuple[Resource, ...]: Created resources in assignment order.
        """

        created: list[Resource] = []
        for entry in monikers.assignments():
            resource = new_object_resource(entry.vertex, monikers)
            self.register(resource)
            created.append(resource)
        LOGGER.debug("materialised %d resources", len(created))
        return tuple(created)

    def freeze(self) -> None:
        """Reject further registrations."""

        self._frozen = True

    def resource_for_object(self, obj: object) -> Resource | None:
        """Return the resource wrapping ``obj`` or ``None`` when absent."""

        return self._by_object.get(id(obj))

    def resource_for_moniker(self, moniker: str) -> Resource | None:
        """Return the resource named ``moniker`` or ``None`` when absent."""

        return self._by_moniker.get(Moniker(moniker))

    def __len__(self) -> int:
        return len(self._by_object)


__all__ = ["Context"]
