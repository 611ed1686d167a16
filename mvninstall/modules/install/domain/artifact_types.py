"""Packaging to extension/classifier mapping used when finalising coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class ArtifactType:
    packaging: str
    extension: str
    classifier: str = ""


_DEFAULT_TYPES = (
    ArtifactType("pom", "pom"),
    ArtifactType("jar", "jar"),
    ArtifactType("maven-plugin", "jar"),
    ArtifactType("ejb", "jar"),
    ArtifactType("war", "war"),
    ArtifactType("ear", "ear"),
    ArtifactType("rar", "rar"),
    ArtifactType("test-jar", "jar", "tests"),
    ArtifactType("ejb-client", "jar", "client"),
    ArtifactType("java-source", "jar", "sources"),
    ArtifactType("javadoc", "jar", "javadoc"),
)


class ArtifactTypeRegistry:
    """Lookup of known packaging types, seeded with Maven's standard handlers."""

    def __init__(self, extra: Optional[Mapping[str, str]] = None) -> None:
        self._types: Dict[str, ArtifactType] = {t.packaging: t for t in _DEFAULT_TYPES}
        for packaging, definition in (extra or {}).items():
            self.register(self.parse(packaging, definition))

    @staticmethod
    def parse(packaging: str, definition: str) -> ArtifactType:
        """Build a type from ``extension[:classifier]``."""
        extension, _, classifier = definition.strip().partition(":")
        if not extension:
            raise ValueError(f"artifact type {packaging!r} needs an extension")
        return ArtifactType(packaging, extension, classifier)

    def register(self, artifact_type: ArtifactType) -> None:
        self._types[artifact_type.packaging] = artifact_type

    def get(self, packaging: Optional[str]) -> Optional[ArtifactType]:
        if not packaging:
            return None
        return self._types.get(packaging)

    def extension_for(self, packaging: str) -> str:
        artifact_type = self.get(packaging)
        return artifact_type.extension if artifact_type else packaging

    def default_classifier(self, packaging: Optional[str], classifier: Optional[str]) -> str:
        """Apply the packaging's fixed classifier when none was given explicitly."""
        if classifier:
            return classifier
        artifact_type = self.get(packaging)
        if artifact_type and artifact_type.classifier:
            return artifact_type.classifier
        return ""
