"""In-memory repository store implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Set

from mvninstall.modules.install.domain import ArtifactCoordinate, ArtifactRecord
from mvninstall.modules.install.errors import StoreError

from .base import RepositoryStore


class InMemoryRepositoryStore(RepositoryStore):
    """Records install calls instead of copying files.

    The content of each installed file is read at call time so callers can inspect
    temporary files that are deleted once the install returns.
    """

    def __init__(self, basedir: Path | str = "/repository", existing: Iterable[ArtifactCoordinate] = ()) -> None:
        self.basedir = Path(basedir)
        self.calls: List[List[ArtifactRecord]] = []
        self.contents: Dict[ArtifactCoordinate, bytes] = {}
        self.failing: Set[ArtifactCoordinate] = set()
        self._present: Set[ArtifactCoordinate] = set(existing)

    def path_for_local_artifact(self, coordinate: ArtifactCoordinate) -> Path:
        return self.basedir.joinpath(*coordinate.path_segments)

    def has_artifact(self, coordinate: ArtifactCoordinate) -> bool:
        return coordinate in self._present

    def with_base(self, basedir: Path) -> "InMemoryRepositoryStore":
        return InMemoryRepositoryStore(basedir)

    def fail_on(self, coordinate: ArtifactCoordinate) -> None:
        self.failing.add(coordinate)

    def install(self, records: Sequence[ArtifactRecord]) -> None:
        batch = list(records)
        self.calls.append(batch)
        for record in batch:
            if record.coordinate in self.failing:
                raise StoreError(f"Failed to install artifact {record.coordinate}")
        staged: Dict[ArtifactCoordinate, bytes] = {}
        for record in batch:
            try:
                staged[record.coordinate] = record.source_path.read_bytes()
            except OSError as exc:
                raise StoreError(f"Failed to install artifact {record.coordinate}: {exc}") from exc
        self.contents.update(staged)
        self._present.update(staged)

