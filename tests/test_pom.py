import zipfile
from pathlib import Path

import pytest

from mvninstall.modules.install.domain import ModelDocument, ParentReference
from mvninstall.modules.install.errors import PomReadError
from mvninstall.modules.install.pom import (
    CoordinateFields,
    EmbeddedPom,
    ExplicitPom,
    NoPom,
    complete_coordinates,
    generate_model,
    generate_pom_file,
    parse_model,
    read_embedded_pom,
    read_model,
    resolve_pom_source,
    write_model,
)

POM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <parent>
    <groupId>org.parent</groupId>
    <artifactId>parent</artifactId>
    <version>3.1</version>
  </parent>
  <artifactId>child</artifactId>
  <packaging>jar</packaging>
</project>
"""


def build_jar(path: Path, entries: dict) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
        for name, content in entries.items():
            zf.writestr(name, content)
    return path


def test_generated_model_round_trips(tmp_path):
    model = generate_model("com.x", "a", "1.0", "war")
    pom = generate_pom_file(model, temp_dir=tmp_path)

    parsed = read_model(pom)

    assert parsed.model_version == "4.0.0"
    assert parsed.group_id == "com.x"
    assert parsed.artifact_id == "a"
    assert parsed.version == "1.0"
    assert parsed.packaging == "war"
    assert parsed.description == "POM was created from install:install-file"


def test_write_model_keeps_parent(tmp_path):
    model = ModelDocument(
        model_version="4.0.0",
        artifact_id="child",
        parent=ParentReference("org.parent", "parent", "3.1"),
    )
    target = tmp_path / "pom.xml"
    write_model(model, target)

    parsed = read_model(target)
    assert parsed.group_id is None
    assert parsed.parent == ParentReference("org.parent", "parent", "3.1")


def test_parse_model_without_namespace():
    model = parse_model(b"<project><groupId>g</groupId><artifactId>a</artifactId><version>1</version></project>")
    assert (model.group_id, model.artifact_id, model.version) == ("g", "a", "1")
    assert model.packaging is None


def test_read_model_errors(tmp_path):
    with pytest.raises(PomReadError, match="File not found"):
        read_model(tmp_path / "missing.xml")

    broken = tmp_path / "broken.xml"
    broken.write_text("<project><groupId>", encoding="utf-8")
    with pytest.raises(PomReadError, match="Error parsing POM"):
        read_model(broken)

    wrong_root = tmp_path / "settings.xml"
    wrong_root.write_text("<settings/>", encoding="utf-8")
    with pytest.raises(PomReadError):
        read_model(wrong_root)


def test_complete_coordinates_falls_back_to_parent_for_group_and_version():
    model = parse_model(POM_XML.encode("utf-8"))

    fields = complete_coordinates(CoordinateFields(), model)

    assert fields == CoordinateFields("org.parent", "child", "3.1", "jar")


def test_complete_coordinates_never_takes_artifact_id_from_parent():
    model = ModelDocument(parent=ParentReference("org.parent", "parent", "3.1"))

    fields = complete_coordinates(CoordinateFields(), model)

    assert fields.artifact_id is None
    assert fields.group_id == "org.parent"


def test_complete_coordinates_keeps_caller_values():
    model = parse_model(POM_XML.encode("utf-8"))

    fields = complete_coordinates(CoordinateFields(group_id="com.mine", packaging="war"), model)

    assert fields.group_id == "com.mine"
    assert fields.packaging == "war"
    assert fields.version == "3.1"


def test_explicit_pom_wins_over_embedded(tmp_path):
    jar = build_jar(tmp_path / "lib.jar", {"META-INF/maven/g/a/pom.xml": POM_XML})
    explicit = tmp_path / "explicit.pom"
    explicit.write_text(POM_XML.replace("child", "explicit"), encoding="utf-8")

    source = resolve_pom_source(jar, explicit, temp_dir=tmp_path)

    assert isinstance(source, ExplicitPom)
    assert source.model.artifact_id == "explicit"
    assert not source.is_temporary


def test_embedded_pom_is_extracted_to_temp_file(tmp_path):
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    jar = build_jar(tmp_path / "lib-1.0.jar", {"META-INF/maven/org.parent/child/pom.xml": POM_XML})

    source = read_embedded_pom(jar, temp_dir=temp_dir)

    assert isinstance(source, EmbeddedPom)
    assert source.entry == "META-INF/maven/org.parent/child/pom.xml"
    assert source.path.parent == temp_dir
    assert source.path.name.startswith("lib-1.0")
    assert source.path.suffix == ".pom"
    assert source.model.artifact_id == "child"


def test_embedded_pom_regex_accepts_nested_paths(tmp_path):
    jar = build_jar(tmp_path / "lib.jar", {"META-INF/maven/a/b/c/pom.xml": POM_XML})

    source = read_embedded_pom(jar, temp_dir=tmp_path)

    assert isinstance(source, EmbeddedPom)
    assert source.entry == "META-INF/maven/a/b/c/pom.xml"


def test_first_matching_entry_wins(tmp_path):
    jar = build_jar(
        tmp_path / "lib.jar",
        {
            "META-INF/maven/g/first/pom.xml": POM_XML.replace("child", "first"),
            "META-INF/maven/g/second/pom.xml": POM_XML.replace("child", "second"),
        },
    )

    source = read_embedded_pom(jar, temp_dir=tmp_path)

    assert source.model.artifact_id == "first"


def test_plain_file_has_no_embedded_pom(tmp_path, caplog):
    plain = tmp_path / "plain.jar"
    plain.write_bytes(b"definitely not a zip")

    with caplog.at_level("INFO"):
        source = read_embedded_pom(plain, temp_dir=tmp_path)

    assert isinstance(source, NoPom)
    assert "pom.xml not found in plain.jar" in caplog.text
    assert not [r for r in caplog.records if r.levelname in ("WARNING", "ERROR")]


def test_jar_without_pom_entry_has_no_embedded_pom(tmp_path):
    jar = build_jar(tmp_path / "lib.jar", {"META-INF/maven/pom.xml": POM_XML, "pom.xml": POM_XML})

    assert isinstance(read_embedded_pom(jar, temp_dir=tmp_path), NoPom)


def test_broken_embedded_pom_is_an_error_and_leaves_no_temp_file(tmp_path):
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    jar = build_jar(tmp_path / "lib.jar", {"META-INF/maven/g/a/pom.xml": "<project><oops>"})

    with pytest.raises(PomReadError):
        read_embedded_pom(jar, temp_dir=temp_dir)

    assert list(temp_dir.iterdir()) == []
