"""Read the coordinate subset of a POM document."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from mvninstall.modules.install.domain import ModelDocument, ParentReference
from mvninstall.modules.install.errors import PomReadError

_ROOT_TAG = re.compile(r"^(\{.*\})?project$")


def read_model(path: Path) -> ModelDocument:
    try:
        content = Path(path).read_bytes()
    except FileNotFoundError as exc:
        raise PomReadError(f"File not found {path}") from exc
    except OSError as exc:
        raise PomReadError(f"Error reading POM {path}") from exc
    try:
        return parse_model(content)
    except (ET.ParseError, ValueError) as exc:
        raise PomReadError(f"Error parsing POM {path}: {exc}") from exc


def parse_model(content: bytes) -> ModelDocument:
    root = ET.fromstring(content)
    match = _ROOT_TAG.match(root.tag)
    if not match:
        raise ValueError(f"Unexpected root tag `{root.tag}`, expected project")
    namespace = match.group(1) or ""

    parent: Optional[ParentReference] = None
    parent_elem = root.find(f"{namespace}parent")
    if parent_elem is not None:
        parent = ParentReference(
            group_id=_child_text(parent_elem, f"{namespace}groupId"),
            artifact_id=_child_text(parent_elem, f"{namespace}artifactId"),
            version=_child_text(parent_elem, f"{namespace}version"),
        )

    return ModelDocument(
        model_version=_child_text(root, f"{namespace}modelVersion"),
        group_id=_child_text(root, f"{namespace}groupId"),
        artifact_id=_child_text(root, f"{namespace}artifactId"),
        version=_child_text(root, f"{namespace}version"),
        packaging=_child_text(root, f"{namespace}packaging"),
        parent=parent,
        description=_child_text(root, f"{namespace}description"),
    )


def _child_text(parent: ET.Element, child: str) -> Optional[str]:
    tag = parent.find(child)
    if tag is None or tag.text is None:
        return None
    text = tag.text.strip()
    return text or None
