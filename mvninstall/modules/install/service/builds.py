"""Registry of in-flight builds served over HTTP."""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Sequence

from mvninstall.modules.install.domain import BuildModule

from .coordinator import BuildInstallCoordinator
from .installer import InstallService

log = logging.getLogger(__name__)


class UnknownBuildError(KeyError):
    pass


class BuildRegistry:
    """Keeps one coordinator per registered build.

    Builds stay until they are discarded. Flushed builds are also dropped, oldest
    first, once more than ``retain_finished`` of them are held.
    """

    def __init__(self, install_service: InstallService, retain_finished: Optional[int] = None) -> None:
        self.install_service = install_service
        if retain_finished is None:
            retain_finished = install_service.settings.retained_finished_builds
        self.retain_finished = max(retain_finished, 0)
        self._builds: Dict[str, BuildInstallCoordinator] = {}
        self._lock = threading.Lock()

    def register(self, modules: Sequence[BuildModule], build_id: Optional[str] = None) -> BuildInstallCoordinator:
        coordinator = self.install_service.new_build(modules, build_id=build_id)
        with self._lock:
            if coordinator.build_id in self._builds:
                raise ValueError(f"build {coordinator.build_id} already registered")
            self._prune_finished()
            self._builds[coordinator.build_id] = coordinator
        return coordinator

    def get(self, build_id: str) -> BuildInstallCoordinator:
        with self._lock:
            coordinator = self._builds.get(build_id)
        if coordinator is None:
            raise UnknownBuildError(build_id)
        return coordinator

    def discard(self, build_id: str) -> None:
        with self._lock:
            removed = self._builds.pop(build_id, None)
        if removed is None:
            raise UnknownBuildError(build_id)
        log.info("Build %s discarded", build_id)

    def build_ids(self) -> List[str]:
        with self._lock:
            return list(self._builds)

    def _prune_finished(self) -> None:
        finished = [build_id for build_id, coordinator in self._builds.items() if coordinator.flushed]
        for build_id in finished[: max(len(finished) - self.retain_finished, 0)]:
            del self._builds[build_id]
            log.info("Dropping finished build %s", build_id)
