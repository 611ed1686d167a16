"""Wiring of the store, the install service and the build registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from mvninstall.modules.install.domain import ArtifactTypeRegistry
from mvninstall.modules.install.repositories import LocalRepositoryStore, RepositoryStore
from mvninstall.modules.install.service import BuildRegistry, InstallService

from .settings import Settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires plain-Python services with shared settings."""

    settings: Settings
    store: RepositoryStore = field(init=False)
    artifact_types: ArtifactTypeRegistry = field(init=False)
    install_service: InstallService = field(init=False)
    build_registry: BuildRegistry = field(init=False)

    def __post_init__(self) -> None:
        self.store = LocalRepositoryStore(Path(self.settings.local_repository_path))
        self.artifact_types = ArtifactTypeRegistry(self.settings.extra_artifact_types)
        self.install_service = InstallService(self.settings, self.store, self.artifact_types)
        self.build_registry = BuildRegistry(self.install_service)
        log.info(
            "Local repository %s (skip=%s installAtEnd=%s allowIncompleteProjects=%s generatePom=%s)",
            self.store.basedir,
            self.settings.skip_install,
            self.settings.install_at_end,
            self.settings.allow_incomplete_projects,
            self.settings.generate_pom,
        )
