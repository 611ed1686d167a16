"""Build the set of artifacts a module or a standalone file installs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from mvninstall.modules.install.domain import (
    ArtifactCoordinate,
    ArtifactRecord,
    ArtifactTypeRegistry,
    BuildModule,
    InstallBatch,
    InstallFileRequest,
    ModelDocument,
    get_extension,
    validate_coordinates,
)
from mvninstall.modules.install.errors import ConfigurationError
from mvninstall.modules.install.pom import (
    CoordinateFields,
    EmbeddedPom,
    ExplicitPom,
    complete_coordinates,
    generate_model,
    generate_pom_file,
    resolve_pom_source,
)
from mvninstall.modules.install.repositories import RepositoryStore

log = logging.getLogger(__name__)


def _is_file(path: Optional[Path]) -> bool:
    return path is not None and Path(path).is_file()


def build_project_batch(
    module: BuildModule,
    *,
    registry: ArtifactTypeRegistry,
    allow_incomplete_projects: bool = False,
) -> InstallBatch:
    """Collect the module POM, its main artifact and its attachments."""
    batch = InstallBatch()
    pom_coordinate = ArtifactCoordinate(module.group_id, module.artifact_id, module.version, "", "pom")
    if not _is_file(module.descriptor_path):
        raise ConfigurationError("The project POM could not be attached")
    batch.add(ArtifactRecord.of(pom_coordinate, module.descriptor_path))

    if module.packaging != "pom":
        if _is_file(module.main_artifact_path):
            main = ArtifactCoordinate(
                group_id=module.group_id,
                artifact_id=module.artifact_id,
                version=module.version,
                classifier=registry.default_classifier(module.packaging, module.main_classifier),
                extension=registry.extension_for(module.packaging),
            )
            batch.add(ArtifactRecord.of(main, module.main_artifact_path))
        elif module.attached:
            message = (
                "The packaging plugin for this project did not assign "
                "a main file to the project but it has attachments. Change packaging to 'pom'."
            )
            if not allow_incomplete_projects:
                raise ConfigurationError(message)
            log.warning("%s", message)
            log.warning("Incomplete projects like this will fail in future Maven versions!")
        else:
            raise ConfigurationError("The packaging for this project did not assign a file to the build artifact")

    for attached in module.attached:
        log.debug("Attaching for install: %s", attached.coordinate)
        batch.add(attached)
    return batch


@dataclass
class PreparedFileInstall:
    """Batch for an install-file call plus the temporary files it owns."""

    batch: InstallBatch
    main: ArtifactCoordinate
    temporary_files: List[Path] = field(default_factory=list)
    generated_model: Optional[ModelDocument] = None

    def cleanup(self) -> None:
        """Delete temporary POM files; later calls are no-ops."""
        files, self.temporary_files = self.temporary_files, []
        for path in files:
            path.unlink(missing_ok=True)
            log.debug("Deleted temporary file %s", path)


def build_file_batch(
    request: InstallFileRequest,
    *,
    store: RepositoryStore,
    registry: ArtifactTypeRegistry,
    temp_dir: Optional[Path] = None,
) -> PreparedFileInstall:
    file = Path(request.file)
    if not file.exists():
        raise ConfigurationError(f"The specified file '{file}' does not exist")

    temporaries: List[Path] = []
    try:
        return _build_file_batch(request, file, store, registry, temp_dir, temporaries)
    except Exception:
        for path in temporaries:
            path.unlink(missing_ok=True)
        raise


def _build_file_batch(
    request: InstallFileRequest,
    file: Path,
    store: RepositoryStore,
    registry: ArtifactTypeRegistry,
    temp_dir: Optional[Path],
    temporaries: List[Path],
) -> PreparedFileInstall:
    fields = CoordinateFields(
        group_id=request.group_id,
        artifact_id=request.artifact_id,
        version=request.version,
        packaging=request.packaging,
    )
    pom_path: Optional[Path] = None
    pom_is_temporary = False
    source = resolve_pom_source(file, request.pom_file, temp_dir=temp_dir)
    if isinstance(source, ExplicitPom):
        fields = complete_coordinates(fields, source.model)
        pom_path = source.path
    elif isinstance(source, EmbeddedPom):
        temporaries.append(source.path)
        fields = complete_coordinates(fields, source.model)
        if request.generate_pom is not True:
            pom_path = source.path
            pom_is_temporary = True
            log.debug("Using JAR embedded POM as pomFile")

    validate_coordinates(fields.group_id, fields.artifact_id, fields.version, fields.packaging)
    group_id, artifact_id, version, packaging = (
        fields.group_id,
        fields.artifact_id,
        fields.version,
        fields.packaging,
    )

    classifier = request.classifier or ""
    is_file_pom = not classifier and packaging == "pom"
    if not is_file_pom:
        classifier = registry.default_classifier(packaging, classifier)
    main = ArtifactCoordinate(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        classifier=classifier,
        extension="pom" if is_file_pom else get_extension(file),
    )

    local_file = store.path_for_local_artifact(main)
    if file.resolve() == Path(local_file).resolve():
        raise ConfigurationError(
            "Cannot install artifact. Artifact is already in the local repository.\n\n"
            f"File in question is: {file}\n"
        )

    batch = InstallBatch()
    batch.add(ArtifactRecord.of(main, file))
    prepared = PreparedFileInstall(batch=batch, main=main, temporary_files=temporaries)

    if packaging != "pom":
        pom_coordinate = main.pom_coordinate()
        if pom_path is not None:
            batch.add(ArtifactRecord.of(pom_coordinate, pom_path, is_temporary=pom_is_temporary))
        else:
            model = generate_model(group_id, artifact_id, version, packaging)
            generated = generate_pom_file(model, temp_dir=temp_dir)
            temporaries.append(generated)
            prepared.generated_model = model
            if request.generate_pom is True or (
                request.generate_pom is None and not store.has_artifact(pom_coordinate)
            ):
                log.debug("Installing generated POM")
                batch.add(ArtifactRecord.of(pom_coordinate, generated, is_temporary=True))
            elif request.generate_pom is None:
                log.debug("Skipping installation of generated POM, already present in local repository")

    if request.sources is not None:
        batch.add(ArtifactRecord.of(main.sub_artifact("sources", "jar"), request.sources))
    if request.javadoc is not None:
        batch.add(ArtifactRecord.of(main.sub_artifact("javadoc", "jar"), request.javadoc))
    return prepared
