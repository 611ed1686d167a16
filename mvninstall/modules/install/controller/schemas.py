"""Request bodies accepted by the install routes."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from mvninstall.modules.install.domain import (
    ArtifactCoordinate,
    ArtifactRecord,
    BuildModule,
    InstallFileRequest,
    InstallOptions,
    InstallResult,
    PluginExecution,
    format_module_id,
)


class ArtifactBody(BaseModel):
    group_id: str
    artifact_id: str
    version: str
    classifier: str = ""
    extension: str = "jar"
    file: str

    def to_record(self) -> ArtifactRecord:
        coordinate = ArtifactCoordinate(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            classifier=self.classifier,
            extension=self.extension,
        )
        return ArtifactRecord.of(coordinate, self.file)


class ExecutionBody(BaseModel):
    goals: List[str] = Field(default_factory=lambda: ["install"])
    phase: Optional[str] = "install"


class ModuleBody(BaseModel):
    group_id: str
    artifact_id: str
    version: str
    packaging: str = "jar"
    descriptor_path: Optional[str] = None
    main_artifact_path: Optional[str] = None
    main_classifier: str = ""
    attached: List[ArtifactBody] = Field(default_factory=list)
    install_executions: Optional[List[ExecutionBody]] = None

    def to_module(self) -> BuildModule:
        module = BuildModule(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            packaging=self.packaging,
            descriptor_path=Path(self.descriptor_path) if self.descriptor_path else None,
            main_artifact_path=Path(self.main_artifact_path) if self.main_artifact_path else None,
            main_classifier=self.main_classifier,
            attached=[item.to_record() for item in self.attached],
        )
        if self.install_executions is not None:
            module.install_executions = [
                PluginExecution(goals=list(item.goals), phase=item.phase) for item in self.install_executions
            ]
        return module


class BuildBody(BaseModel):
    build_id: Optional[str] = None
    modules: List[ModuleBody]


class ModuleReportBody(BaseModel):
    module: ModuleBody
    skip: Optional[bool] = None
    install_at_end: Optional[bool] = None
    allow_incomplete_projects: Optional[bool] = None

    def to_options(self, defaults: InstallOptions) -> InstallOptions:
        return InstallOptions(
            skip=defaults.skip if self.skip is None else self.skip,
            install_at_end=defaults.install_at_end if self.install_at_end is None else self.install_at_end,
            allow_incomplete_projects=(
                defaults.allow_incomplete_projects
                if self.allow_incomplete_projects is None
                else self.allow_incomplete_projects
            ),
        )


class InstallFileBody(BaseModel):
    file: str
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    packaging: Optional[str] = None
    classifier: Optional[str] = None
    pom_file: Optional[str] = None
    sources: Optional[str] = None
    javadoc: Optional[str] = None
    generate_pom: Optional[bool] = None
    local_repository_path: Optional[str] = None

    def to_request(self) -> InstallFileRequest:
        def _path(value: Optional[str]) -> Optional[Path]:
            return Path(value) if value else None

        return InstallFileRequest(
            file=Path(self.file),
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            packaging=self.packaging,
            classifier=self.classifier,
            pom_file=_path(self.pom_file),
            sources=_path(self.sources),
            javadoc=_path(self.javadoc),
            generate_pom=self.generate_pom,
            local_repository_path=_path(self.local_repository_path),
        )


def serialize_result(result: InstallResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "module": format_module_id(result.module_id),
        "phase": result.phase.value,
        "installed": [str(coordinate) for coordinate in result.installed],
        "flushed": result.flushed,
    }
    if result.generated_model is not None:
        payload["generated_pom"] = {
            "modelVersion": result.generated_model.model_version,
            "packaging": result.generated_model.packaging,
            "description": result.generated_model.description,
        }
    return payload
