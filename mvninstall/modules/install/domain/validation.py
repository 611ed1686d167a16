"""Coordinate character-set checks."""

from __future__ import annotations

import string
from typing import Optional

from mvninstall.modules.install.errors import ConfigurationError

_ID_CHARS = frozenset(string.ascii_letters + string.digits + "-_.")
ILLEGAL_VERSION_CHARS = '\\/:"<>|?*[](){},'


def is_valid_id(value: Optional[str]) -> bool:
    """Return True when ``value`` is a non-empty groupId/artifactId."""
    if not value:
        return False
    return all(char in _ID_CHARS for char in value)


def is_valid_version(value: Optional[str]) -> bool:
    if value is None:
        return False
    return not any(char in ILLEGAL_VERSION_CHARS for char in value)


def validate_coordinates(
    group_id: Optional[str],
    artifact_id: Optional[str],
    version: Optional[str],
    packaging: Optional[str],
) -> None:
    """Raise ``ConfigurationError`` unless all four coordinates are present and legal."""
    if group_id is None or artifact_id is None or version is None or packaging is None:
        raise ConfigurationError(
            "The artifact information is incomplete: 'groupId', 'artifactId', "
            "'version' and 'packaging' are required."
        )
    if not is_valid_id(group_id) or not is_valid_id(artifact_id) or not is_valid_version(version):
        raise ConfigurationError("The artifact information is not valid: uses invalid characters.")
