from .artifact import ArtifactCoordinate, ArtifactRecord, ModuleId, format_module_id, get_extension
from .artifact_types import ArtifactType, ArtifactTypeRegistry
from .models import (
    BuildModule,
    InstallBatch,
    InstallFileRequest,
    InstallOptions,
    InstallResult,
    ModelDocument,
    ModuleInstallState,
    ModulePhase,
    ParentReference,
    PluginExecution,
)
from .validation import is_valid_id, is_valid_version, validate_coordinates

__all__ = [
    "ArtifactCoordinate",
    "ArtifactRecord",
    "ArtifactType",
    "ArtifactTypeRegistry",
    "BuildModule",
    "InstallBatch",
    "InstallFileRequest",
    "InstallOptions",
    "InstallResult",
    "ModelDocument",
    "ModuleId",
    "ModuleInstallState",
    "ModulePhase",
    "ParentReference",
    "PluginExecution",
    "format_module_id",
    "get_extension",
    "is_valid_id",
    "is_valid_version",
    "validate_coordinates",
]
