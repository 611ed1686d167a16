"""Filesystem repository store using the default Maven layout."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from mvninstall.modules.install.domain import ArtifactCoordinate, ArtifactRecord
from mvninstall.modules.install.errors import StoreError

from .base import RepositoryStore

# read once; os.umask can only be queried by setting it
_UMASK = os.umask(0)
os.umask(_UMASK)
FILE_MODE = 0o666 & ~_UMASK


class LocalRepositoryStore(RepositoryStore):
    """Copy artifacts into ``basedir/<group path>/<artifactId>/<version>/``.

    Every file of a batch is first copied next to its target under a temporary name.
    Targets are only replaced once the whole batch has been staged; a replaced file is
    kept aside until every target is in place, so a failure while moving restores the
    repository to its previous content.
    """

    def __init__(self, basedir: Path | str) -> None:
        self.basedir = Path(basedir).expanduser()
        self.log = logging.getLogger(self.__class__.__name__)

    def path_for_local_artifact(self, coordinate: ArtifactCoordinate) -> Path:
        return self.basedir.joinpath(*coordinate.path_segments)

    def with_base(self, basedir: Path) -> "LocalRepositoryStore":
        store = LocalRepositoryStore(basedir)
        self.log.debug("localRepoPath: %s", store.basedir)
        return store

    def install(self, records: Sequence[ArtifactRecord]) -> None:
        staged: List[Tuple[ArtifactRecord, Path, Path]] = []
        try:
            for record in records:
                target = self.path_for_local_artifact(record.coordinate)
                staged.append((record, self._stage(record, target), target))
        except StoreError:
            self._discard(staged)
            raise

        moved: List[Tuple[Path, Optional[Path]]] = []
        for index, (record, tmp, target) in enumerate(staged):
            backup: Optional[Path] = None
            try:
                backup = self._set_aside(target)
                os.replace(tmp, target)
            except OSError as exc:
                if backup is not None:
                    self._restore(backup, target)
                self._discard(staged[index:])
                self._rollback(moved)
                raise StoreError(f"Failed to install artifact {record.coordinate}: {exc}") from exc
            moved.append((target, backup))
            self.log.info("Installing %s to %s", record.source_path, target)

        for _, backup in moved:
            if backup is not None:
                backup.unlink(missing_ok=True)

    def _stage(self, record: ArtifactRecord, target: Path) -> Path:
        source = record.source_path
        if not source.is_file():
            raise StoreError(f"Failed to install artifact {record.coordinate}: {source} is not a file")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f"{target.name}.", suffix=".part", dir=target.parent)
        except OSError as exc:
            raise StoreError(f"Failed to install artifact {record.coordinate}: {exc}") from exc
        tmp = Path(tmp_name)
        try:
            with open(fd, "wb") as dest, open(source, "rb") as src:
                shutil.copyfileobj(src, dest)
            os.chmod(tmp, FILE_MODE)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise StoreError(f"Failed to install artifact {record.coordinate}: {exc}") from exc
        return tmp

    def _set_aside(self, target: Path) -> Optional[Path]:
        """Move an existing file out of the way; None when there is nothing to keep."""
        if not target.is_file():
            return None
        fd, backup_name = tempfile.mkstemp(prefix=f"{target.name}.", suffix=".bak", dir=target.parent)
        os.close(fd)
        backup = Path(backup_name)
        try:
            os.replace(target, backup)
        except OSError:
            backup.unlink(missing_ok=True)
            raise
        return backup

    def _restore(self, backup: Path, target: Path) -> None:
        try:
            os.replace(backup, target)
        except OSError as exc:
            self.log.error("Could not restore %s from %s: %s", target, backup, exc)

    def _rollback(self, moved: Sequence[Tuple[Path, Optional[Path]]]) -> None:
        for target, backup in reversed(moved):
            if backup is not None:
                self._restore(backup, target)
                continue
            try:
                target.unlink(missing_ok=True)
            except OSError as exc:
                self.log.error("Could not remove %s after failed install: %s", target, exc)

    def _discard(self, staged: Sequence[Tuple[ArtifactRecord, Path, Path]]) -> None:
        for _, tmp, _ in staged:
            tmp.unlink(missing_ok=True)
