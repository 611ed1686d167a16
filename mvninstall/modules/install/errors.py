"""Typed failures raised by the install module."""

from __future__ import annotations

from typing import Dict


class InstallError(RuntimeError):
    """Base class for every failure surfaced to the calling build tool."""


class ConfigurationError(InstallError):
    """Invalid or incomplete coordinates, a missing file or a refused install."""


class InstallIOError(InstallError):
    """A POM document or temporary file could not be read or written."""


class PomReadError(InstallIOError):
    pass


class PomWriteError(InstallIOError):
    pass


class StoreError(InstallError):
    """The repository store rejected a batch."""


class DeferredInstallError(StoreError):
    """One or more deferred batches failed while flushing at the end of the build."""

    def __init__(self, failures: Dict[str, StoreError]) -> None:
        self.failures = dict(failures)
        details = "; ".join(f"{module}: {exc}" for module, exc in self.failures.items())
        super().__init__(f"Deferred install failed for {len(self.failures)} module(s): {details}")


class BuildGraphInconsistency(InstallError):
    """A module reported in a way the build graph does not allow."""


class SealedBatchError(InstallError):
    """An install batch was modified after it was handed to the store."""
