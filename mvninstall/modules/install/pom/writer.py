"""Serialise a minimal POM document."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from mvninstall.modules.install.domain import ModelDocument
from mvninstall.modules.install.errors import PomWriteError

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = f"{POM_NAMESPACE} https://maven.apache.org/xsd/maven-4.0.0.xsd"

ET.register_namespace("", POM_NAMESPACE)
ET.register_namespace("xsi", XSI_NAMESPACE)


def to_element(model: ModelDocument) -> ET.Element:
    root = ET.Element(f"{{{POM_NAMESPACE}}}project")
    root.set(f"{{{XSI_NAMESPACE}}}schemaLocation", SCHEMA_LOCATION)
    _append(root, "modelVersion", model.model_version)
    if model.parent is not None:
        parent = ET.SubElement(root, f"{{{POM_NAMESPACE}}}parent")
        _append(parent, "groupId", model.parent.group_id)
        _append(parent, "artifactId", model.parent.artifact_id)
        _append(parent, "version", model.parent.version)
    _append(root, "groupId", model.group_id)
    _append(root, "artifactId", model.artifact_id)
    _append(root, "version", model.version)
    _append(root, "packaging", model.packaging)
    _append(root, "description", model.description)
    return root


def write_model(model: ModelDocument, path: Path) -> None:
    tree = ET.ElementTree(to_element(model))
    ET.indent(tree, space="  ")
    try:
        with open(path, "wb") as fh:
            tree.write(fh, encoding="UTF-8", xml_declaration=True)
            fh.write(b"\n")
    except OSError as exc:
        raise PomWriteError(f"Error writing temporary POM file: {exc}") from exc


def _append(parent: ET.Element, tag: str, value: str | None) -> None:
    if value is None:
        return
    ET.SubElement(parent, f"{{{POM_NAMESPACE}}}{tag}").text = value
