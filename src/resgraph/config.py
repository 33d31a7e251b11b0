# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models controlling snapshot compilation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_MONIKER_DELIMITER: Final[str] = "::"
DEFAULT_MAX_TRAVERSAL_STEPS: Final[int] = 1_000_000
DEFAULT_MAX_PATH_LENGTH: Final[int] = 4096


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class SnapshotConfig(BaseModel):
    """Tunables for moniker assignment and traversal guards."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid", frozen=True)

    moniker_delimiter: str = Field(default=DEFAULT_MONIKER_DELIMITER, min_length=1)
    max_traversal_steps: int = Field(default=DEFAULT_MAX_TRAVERSAL_STEPS, ge=1)
    max_path_length: int = Field(default=DEFAULT_MAX_PATH_LENGTH, ge=1)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, source: str = "<mapping>") -> SnapshotConfig:
        """Validate ``data`` and return a configuration model.

        Args:
            data: Raw key/value pairs, typically a TOML table.
            source: Description of where ``data`` came from, used in errors.

        Returns:
            SnapshotConfig: Validated configuration.

        Raises:
            ConfigError: If ``data`` contains unknown keys or invalid values.
        """

        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration in {source}: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible representation of the configuration."""

        return self.model_dump(mode="json")


__all__ = [
    "DEFAULT_MAX_PATH_LENGTH",
    "DEFAULT_MAX_TRAVERSAL_STEPS",
    "DEFAULT_MONIKER_DELIMITER",
    "ConfigError",
    "SnapshotConfig",
]
