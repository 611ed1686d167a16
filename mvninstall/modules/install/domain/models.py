"""Dataclasses describing POM documents, install batches and module state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from mvninstall.modules.install.errors import SealedBatchError

from .artifact import ArtifactCoordinate, ArtifactRecord, ModuleId

log = logging.getLogger(__name__)


@dataclass
class ParentReference:
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None


@dataclass
class ModelDocument:
    """The handful of POM fields needed to extract or synthesise coordinates."""

    model_version: Optional[str] = None
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    packaging: Optional[str] = None
    parent: Optional[ParentReference] = None
    description: Optional[str] = None


class InstallBatch:
    """Ordered set of artifact records keyed by coordinate; the first record wins."""

    def __init__(self, records: Sequence[ArtifactRecord] = ()) -> None:
        self._records: Dict[ArtifactCoordinate, ArtifactRecord] = {}
        self._sealed = False
        for record in records:
            self.add(record)

    def add(self, record: ArtifactRecord) -> bool:
        if self._sealed:
            raise SealedBatchError(f"batch already submitted, cannot add {record.coordinate}")
        if record.coordinate in self._records:
            log.debug("Skipping duplicate artifact %s (%s)", record.coordinate, record.source_path)
            return False
        self._records[record.coordinate] = record
        return True

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def records(self) -> List[ArtifactRecord]:
        return list(self._records.values())

    @property
    def coordinates(self) -> List[ArtifactCoordinate]:
        return list(self._records.keys())

    def get(self, coordinate: ArtifactCoordinate) -> Optional[ArtifactRecord]:
        return self._records.get(coordinate)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._records

    def __iter__(self) -> Iterator[ArtifactRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"InstallBatch({[str(c) for c in self._records]})"


class ModulePhase(str, Enum):
    SKIPPED = "SKIPPED"
    INSTALLED = "INSTALLED"
    DEFERRED = "DEFERRED"


@dataclass
class ModuleInstallState:
    module_id: ModuleId
    phase: ModulePhase
    pending_batch: Optional[InstallBatch] = None


@dataclass
class PluginExecution:
    goals: List[str] = field(default_factory=list)
    phase: Optional[str] = None

    @property
    def active(self) -> bool:
        return bool(self.goals) and (self.phase or "").lower() != "none"


@dataclass
class BuildModule:
    """A completed module of a build, as seen by its install step."""

    group_id: str
    artifact_id: str
    version: str
    packaging: str = "jar"
    descriptor_path: Optional[Path] = None
    main_artifact_path: Optional[Path] = None
    main_classifier: str = ""
    attached: List[ArtifactRecord] = field(default_factory=list)
    install_executions: List[PluginExecution] = field(
        default_factory=lambda: [PluginExecution(goals=["install"], phase="install")]
    )

    @property
    def module_id(self) -> ModuleId:
        return (self.group_id, self.artifact_id, self.version)

    @property
    def has_install_step(self) -> bool:
        return any(execution.active for execution in self.install_executions)


@dataclass
class InstallOptions:
    skip: bool = False
    install_at_end: bool = False
    allow_incomplete_projects: bool = False


@dataclass
class InstallFileRequest:
    """Input of the install-file operation."""

    file: Path
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    packaging: Optional[str] = None
    classifier: Optional[str] = None
    pom_file: Optional[Path] = None
    sources: Optional[Path] = None
    javadoc: Optional[Path] = None
    generate_pom: Optional[bool] = None
    local_repository_path: Optional[Path] = None


@dataclass
class InstallResult:
    module_id: ModuleId
    phase: ModulePhase
    installed: List[ArtifactCoordinate] = field(default_factory=list)
    flushed: bool = False
    generated_model: Optional[ModelDocument] = None
