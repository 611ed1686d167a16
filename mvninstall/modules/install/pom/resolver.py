"""Locate, complete and synthesise the POM that accompanies an artifact.

A POM source is looked up once per install operation, in this order:

1. an explicit POM file supplied by the caller, used as-is;
2. a ``META-INF/maven/**/pom.xml`` entry embedded in the main file when it is a
   zip/jar container (first match in archive order);
3. nothing, in which case the caller supplies coordinates and may generate a POM.

Only an unreadable explicit or embedded POM is an error. A main file that is not an
archive, or an archive without a POM entry, simply yields ``NoPom``.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
import zipfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Union

from mvninstall.modules.install.domain import ModelDocument
from mvninstall.modules.install.errors import PomReadError, PomWriteError

from .reader import read_model
from .writer import write_model

log = logging.getLogger(__name__)

POM_ENTRY = re.compile(r"META-INF/maven/.*/pom\.xml")
MODEL_VERSION = "4.0.0"
GENERATED_DESCRIPTION = "POM was created from install:install-file"


@dataclass(frozen=True)
class ExplicitPom:
    path: Path
    model: ModelDocument
    is_temporary: bool = False


@dataclass(frozen=True)
class EmbeddedPom:
    path: Path
    model: ModelDocument
    entry: str
    is_temporary: bool = True


@dataclass(frozen=True)
class NoPom:
    is_temporary: bool = False


PomSource = Union[ExplicitPom, EmbeddedPom, NoPom]


@dataclass
class CoordinateFields:
    """Coordinates as supplied by the caller; ``None`` means not given."""

    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    packaging: Optional[str] = None


def resolve_pom_source(
    main_file: Path,
    pom_file: Optional[Path] = None,
    *,
    temp_dir: Optional[Path] = None,
) -> PomSource:
    if pom_file is not None:
        return ExplicitPom(path=Path(pom_file), model=read_model(Path(pom_file)))
    return read_embedded_pom(main_file, temp_dir=temp_dir)


def read_embedded_pom(main_file: Path, *, temp_dir: Optional[Path] = None) -> PomSource:
    """Probe ``main_file`` for an embedded POM and extract the first match."""
    main_file = Path(main_file)
    try:
        archive = zipfile.ZipFile(main_file)
    except (zipfile.BadZipFile, OSError):
        # not packaged by Maven
        log.info("pom.xml not found in %s", main_file.name)
        return NoPom()

    with archive:
        entry = next((name for name in archive.namelist() if POM_ENTRY.fullmatch(name)), None)
        if entry is None:
            log.info("pom.xml not found in %s", main_file.name)
            return NoPom()

        log.debug("Loading %s", entry)
        base = main_file.name
        if base.find(".") > 0:
            base = base[: base.rfind(".")]
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=base, suffix=".pom", dir=temp_dir)
        except OSError as exc:
            raise PomReadError(f"Cannot create temporary POM for {main_file}: {exc}") from exc
        tmp_path = Path(tmp_name)
        try:
            with open(fd, "wb") as target, archive.open(entry) as source:
                shutil.copyfileobj(source, target)
        except (OSError, zipfile.BadZipFile) as exc:
            tmp_path.unlink(missing_ok=True)
            raise PomReadError(f"Error extracting {entry} from {main_file}: {exc}") from exc

    try:
        model = read_model(tmp_path)
    except PomReadError:
        tmp_path.unlink(missing_ok=True)
        raise
    return EmbeddedPom(path=tmp_path, model=model, entry=entry)


def complete_coordinates(fields: CoordinateFields, model: ModelDocument) -> CoordinateFields:
    """Fill coordinates the caller left unset from ``model``.

    groupId and version fall back to the ``<parent>`` block; artifactId and packaging
    must come from the document itself.
    """
    parent = model.parent
    group_id = fields.group_id
    if group_id is None:
        group_id = model.group_id
        if group_id is None and parent is not None:
            group_id = parent.group_id
    version = fields.version
    if version is None:
        version = model.version
        if version is None and parent is not None:
            version = parent.version
    return replace(
        fields,
        group_id=group_id,
        artifact_id=fields.artifact_id if fields.artifact_id is not None else model.artifact_id,
        version=version,
        packaging=fields.packaging if fields.packaging is not None else model.packaging,
    )


def generate_model(group_id: str, artifact_id: str, version: str, packaging: str) -> ModelDocument:
    return ModelDocument(
        model_version=MODEL_VERSION,
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        packaging=packaging,
        description=GENERATED_DESCRIPTION,
    )


def generate_pom_file(model: ModelDocument, *, temp_dir: Optional[Path] = None) -> Path:
    try:
        fd, tmp_name = tempfile.mkstemp(prefix="mvninstall", suffix=".pom", dir=temp_dir)
    except OSError as exc:
        raise PomWriteError(f"Error writing temporary POM file: {exc}") from exc
    tmp_path = Path(tmp_name)
    try:
        os.close(fd)
        write_model(model, tmp_path)
    except PomWriteError:
        tmp_path.unlink(missing_ok=True)
        raise
    return tmp_path
