"""Repository store contract consumed by the install handlers."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from mvninstall.modules.install.domain import ArtifactCoordinate, ArtifactRecord


class RepositoryStore:
    """A local artifact cache.

    ``install`` is all-or-nothing per call: either every record of the batch is in
    place afterwards or ``StoreError`` is raised.
    """

    def path_for_local_artifact(self, coordinate: ArtifactCoordinate) -> Path:
        raise NotImplementedError

    def install(self, records: Sequence[ArtifactRecord]) -> None:
        raise NotImplementedError

    def has_artifact(self, coordinate: ArtifactCoordinate) -> bool:
        return self.path_for_local_artifact(coordinate).is_file()

    def with_base(self, basedir: Path) -> "RepositoryStore":
        raise NotImplementedError
