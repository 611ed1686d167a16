"""Command handlers for the install and install-file operations."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence, Union

from mvninstall.modules.install.domain import (
    ArtifactTypeRegistry,
    BuildModule,
    InstallBatch,
    InstallFileRequest,
    InstallOptions,
    InstallResult,
    ModuleId,
    ModulePhase,
    format_module_id,
)
from mvninstall.modules.install.repositories import RepositoryStore
from mvninstall.settings import Settings

from .batch_builder import build_file_batch, build_project_batch
from .coordinator import BuildInstallCoordinator


class InstallService:
    """Installs build modules and standalone files into the local repository."""

    def __init__(
        self,
        settings: Settings,
        store: RepositoryStore,
        registry: Optional[ArtifactTypeRegistry] = None,
    ) -> None:
        self.settings = settings
        self.log = logging.getLogger(self.__class__.__name__)
        self.store = store
        self.registry = registry or ArtifactTypeRegistry(settings.extra_artifact_types)
        self.temp_dir = Path(settings.temp_dir) if settings.temp_dir else None

    def default_options(self) -> InstallOptions:
        return InstallOptions(
            skip=self.settings.skip_install,
            install_at_end=self.settings.install_at_end,
            allow_incomplete_projects=self.settings.allow_incomplete_projects,
        )

    def new_build(
        self,
        modules: Sequence[Union[BuildModule, ModuleId]],
        *,
        build_id: Optional[str] = None,
    ) -> BuildInstallCoordinator:
        coordinator = BuildInstallCoordinator(modules, self.store, build_id=build_id)
        self.log.info(
            "Build %s registered with %d module(s) carrying an install step",
            coordinator.build_id,
            len(coordinator.participants),
        )
        return coordinator

    def install_project(
        self,
        module: BuildModule,
        coordinator: BuildInstallCoordinator,
        options: Optional[InstallOptions] = None,
    ) -> InstallResult:
        options = options or self.default_options()
        module_id = module.module_id
        coordinator.check_can_report(module_id)

        if options.skip:
            self.log.info("Skipping artifact installation")
            flushed = coordinator.report(module_id, ModulePhase.SKIPPED)
            return InstallResult(module_id=module_id, phase=ModulePhase.SKIPPED, flushed=flushed)

        batch = build_project_batch(
            module,
            registry=self.registry,
            allow_incomplete_projects=options.allow_incomplete_projects,
        )
        if not options.install_at_end:
            self._install(self.store, batch)
            flushed = coordinator.report(module_id, ModulePhase.INSTALLED)
            return InstallResult(
                module_id=module_id,
                phase=ModulePhase.INSTALLED,
                installed=batch.coordinates,
                flushed=flushed,
            )

        self.log.info("Deferring install for %s at end", format_module_id(module_id))
        flushed = coordinator.report(module_id, ModulePhase.DEFERRED, batch)
        return InstallResult(
            module_id=module_id,
            phase=ModulePhase.DEFERRED,
            installed=batch.coordinates if flushed else [],
            flushed=flushed,
        )

    def install_file(self, request: InstallFileRequest) -> InstallResult:
        if request.generate_pom is None and self.settings.generate_pom is not None:
            request = replace(request, generate_pom=self.settings.generate_pom)
        store = self.store
        if request.local_repository_path is not None:
            store = self.store.with_base(Path(request.local_repository_path))

        prepared = build_file_batch(request, store=store, registry=self.registry, temp_dir=self.temp_dir)
        try:
            self._install(store, prepared.batch)
        finally:
            prepared.cleanup()
        return InstallResult(
            module_id=prepared.main.module_id,
            phase=ModulePhase.INSTALLED,
            installed=prepared.batch.coordinates,
            generated_model=prepared.generated_model,
        )

    def _install(self, store: RepositoryStore, batch: InstallBatch) -> None:
        batch.seal()
        self.log.debug("Installing %d artifact(s): %s", len(batch), batch)
        store.install(batch.records)
