# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading with layered precedence (defaults, pyproject, project file)."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

from .config import ConfigError, SnapshotConfig

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "resgraph"
PROJECT_CONFIG_NAME: Final[str] = ".resgraph.toml"

LOGGER = logging.getLogger(__name__)


@runtime_checkable
class ConfigSource(Protocol):
    """Source producing a configuration fragment."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the configuration fragment supplied by the source."""

        raise NotImplementedError


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return SnapshotConfig().to_dict()


class TomlConfigSource:
    """Load configuration data from a standalone TOML document."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self._path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        return self._read()

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Configuration at {self._path} is not valid TOML: {exc}") from exc
        return dict(data)


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.resgraph]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = self._read()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, *, sources: Sequence[ConfigSource]) -> None:
        """Initialise a loader that merges the supplied configuration sources.

        Args:
            sources: Ordered collection of configuration sources; later
                sources override earlier ones key by key.
        """

        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(cls, project_root: Path, *, project_config: Path | None = None) -> ConfigLoader:
        """Build a loader that respects defaults, ``pyproject.toml`` and the project file.

        Args:
            project_root: Directory used to discover configuration files.
            project_config: Optional explicit project configuration path.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.
        """

        root = project_root.resolve()
        project_file = project_config if project_config is not None else root / PROJECT_CONFIG_NAME
        return cls(
            sources=[
                DefaultConfigSource(),
                PyProjectConfigSource(root / "pyproject.toml"),
                TomlConfigSource(project_file),
            ],
        )

    def load(self) -> SnapshotConfig:
        """Return the merged configuration.

        Returns:
            SnapshotConfig: Validated configuration model.

        Raises:
            ConfigError: If any source supplies invalid or unknown settings.
        """

        merged: dict[str, Any] = {}
        config = SnapshotConfig()
        for source in self._sources:
            if not (fragment := source.load()):
                continue
            LOGGER.debug("applying configuration from %s: %s", source.name, sorted(fragment))
            merged.update(fragment)
            config = SnapshotConfig.from_mapping(merged, source=source.name)
        return config


def load_config(project_root: Path) -> SnapshotConfig:
    """Load configuration for ``project_root`` using the default tiered sources."""
    return ConfigLoader.for_root(project_root).load()


__all__ = [
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "load_config",
]
