"""Artifact coordinates and the records handed to a repository store."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

ModuleId = Tuple[str, str, str]


def get_extension(path: Path | str) -> str:
    """Return the artifact extension implied by a file name.

    ``foo-1.0.tar.gz`` gives ``tar.gz``, ``foo-1.0.jar`` gives ``jar`` and a name
    without any dot gives an empty string.
    """
    filename = Path(path).name
    if "." not in filename:
        return ""
    last = filename.rsplit(".", 1)[1]
    if ".tar." in filename:
        return f"tar.{last}"
    return last


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Represents a Maven artifact coordinate (G:A:V plus classifier and extension)."""

    group_id: str
    artifact_id: str
    version: str
    classifier: str = ""
    extension: str = "jar"

    def __post_init__(self) -> None:
        if self.classifier is None:
            object.__setattr__(self, "classifier", "")

    @property
    def module_id(self) -> ModuleId:
        return (self.group_id, self.artifact_id, self.version)

    @property
    def is_pom(self) -> bool:
        return not self.classifier and self.extension == "pom"

    def sub_artifact(self, classifier: str, extension: str) -> "ArtifactCoordinate":
        """Coordinate sharing G:A:V with this one, e.g. its POM or sources jar."""
        return ArtifactCoordinate(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            classifier=classifier,
            extension=extension,
        )

    def pom_coordinate(self) -> "ArtifactCoordinate":
        return self.sub_artifact("", "pom")

    @property
    def path_segments(self) -> List[str]:
        group_path = self.group_id.replace(".", "/")
        classifier = f"-{self.classifier}" if self.classifier else ""
        extension = f".{self.extension}" if self.extension else ""
        filename = f"{self.artifact_id}-{self.version}{classifier}{extension}"
        return [group_path, self.artifact_id, self.version, filename]

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.extension]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)


@dataclass(frozen=True)
class ArtifactRecord:
    """A coordinate paired with the file that should be installed under it."""

    coordinate: ArtifactCoordinate
    source_path: Path
    is_temporary: bool = field(default=False, compare=False)

    @classmethod
    def of(
        cls,
        coordinate: ArtifactCoordinate,
        source_path: Path | str,
        *,
        is_temporary: bool = False,
    ) -> "ArtifactRecord":
        return cls(coordinate=coordinate, source_path=Path(source_path), is_temporary=is_temporary)


def format_module_id(module_id: ModuleId | Optional[ArtifactCoordinate]) -> str:
    if isinstance(module_id, ArtifactCoordinate):
        module_id = module_id.module_id
    if not module_id:
        return "-"
    return ":".join(module_id)
