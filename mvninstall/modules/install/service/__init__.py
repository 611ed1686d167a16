from .batch_builder import PreparedFileInstall, build_file_batch, build_project_batch
from .builds import BuildRegistry, UnknownBuildError
from .coordinator import BuildInstallCoordinator
from .installer import InstallService

__all__ = [
    "BuildInstallCoordinator",
    "BuildRegistry",
    "InstallService",
    "PreparedFileInstall",
    "UnknownBuildError",
    "build_file_batch",
    "build_project_batch",
]
