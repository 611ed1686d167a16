"""End-of-build aggregation of deferred module installs."""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, Iterable, List, Optional, Sequence, Union

from mvninstall.modules.install.domain import (
    BuildModule,
    InstallBatch,
    ModuleId,
    ModuleInstallState,
    ModulePhase,
    format_module_id,
)
from mvninstall.modules.install.errors import BuildGraphInconsistency, DeferredInstallError, StoreError
from mvninstall.modules.install.repositories import RepositoryStore

log = logging.getLogger(__name__)


class BuildInstallCoordinator:
    """Tracks the install step of every module of one build.

    Created once per build and shared by all module install steps, possibly from
    several worker threads. Once every participating module has reported a terminal
    phase, the retained batches of ``DEFERRED`` modules are sent to the store, one call
    per module, in declaration order. This happens at most once.
    """

    def __init__(
        self,
        modules: Sequence[Union[BuildModule, ModuleId]],
        store: RepositoryStore,
        *,
        build_id: Optional[str] = None,
    ) -> None:
        self.build_id = build_id or uuid.uuid4().hex
        self.store = store
        self.participants: List[ModuleId] = []
        for module in modules:
            if isinstance(module, BuildModule):
                if not module.has_install_step:
                    continue
                module_id = module.module_id
            else:
                module_id = tuple(module)
            if module_id in self.participants:
                raise BuildGraphInconsistency(f"module {format_module_id(module_id)} declared twice")
            self.participants.append(module_id)
        self._states: Dict[ModuleId, ModuleInstallState] = {}
        self._flushed = False
        self._lock = threading.Lock()
        self.log = logging.getLogger(self.__class__.__name__)

    @property
    def flushed(self) -> bool:
        with self._lock:
            return self._flushed

    def state_of(self, module_id: ModuleId) -> Optional[ModuleInstallState]:
        with self._lock:
            return self._states.get(module_id)

    def phases(self) -> Dict[str, Optional[str]]:
        with self._lock:
            return {
                format_module_id(module_id): (
                    self._states[module_id].phase.value if module_id in self._states else None
                )
                for module_id in self.participants
            }

    def check_can_report(self, module_id: ModuleId) -> None:
        with self._lock:
            self._check_can_report(module_id)

    def report(
        self,
        module_id: ModuleId,
        phase: ModulePhase,
        batch: Optional[InstallBatch] = None,
    ) -> bool:
        """Record the terminal phase of a module; return True if this call flushed."""
        if phase is ModulePhase.DEFERRED and batch is None:
            raise ValueError("a deferred module must hand over its batch")
        with self._lock:
            self._check_can_report(module_id)
            self._states[module_id] = ModuleInstallState(
                module_id=module_id,
                phase=phase,
                pending_batch=batch if phase is ModulePhase.DEFERRED else None,
            )
            self.log.debug(
                "Module %s reported %s (%d/%d)",
                format_module_id(module_id),
                phase.value,
                len(self._states),
                len(self.participants),
            )
            if len(self._states) < len(self.participants):
                return False
            self._flush()
            return True

    def _check_can_report(self, module_id: ModuleId) -> None:
        name = format_module_id(module_id)
        if module_id not in self.participants:
            raise BuildGraphInconsistency(f"module {name} has no install step in build {self.build_id}")
        if self._flushed:
            raise BuildGraphInconsistency(f"module {name} reported after build {self.build_id} was flushed")
        if module_id in self._states:
            raise BuildGraphInconsistency(f"module {name} reported twice in build {self.build_id}")

    def _flush(self) -> None:
        self._flushed = True
        failures: Dict[str, StoreError] = {}
        for module_id in self._deferred_in_order():
            state = self._states[module_id]
            batch = state.pending_batch
            state.pending_batch = None
            if batch is None:
                continue
            name = format_module_id(module_id)
            self.log.info("Installing deferred module %s (%d artifacts)", name, len(batch))
            batch.seal()
            try:
                self.store.install(batch.records)
            except StoreError as exc:
                self.log.error("Deferred install of %s failed: %s", name, exc)
                failures[name] = exc
        if failures:
            raise DeferredInstallError(failures)

    def _deferred_in_order(self) -> Iterable[ModuleId]:
        return [
            module_id
            for module_id in self.participants
            if self._states[module_id].phase is ModulePhase.DEFERRED
        ]
