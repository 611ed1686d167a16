import logging
import os
import stat

import pytest

from mvninstall.modules.install.domain import ArtifactCoordinate, ArtifactRecord
from mvninstall.modules.install.errors import StoreError
from mvninstall.modules.install.repositories import LocalRepositoryStore


def record(tmp_path, coordinate: ArtifactCoordinate, content: bytes = b"data") -> ArtifactRecord:
    source = tmp_path / f"src-{coordinate.artifact_id}-{coordinate.classifier or 'main'}.{coordinate.extension}"
    source.write_bytes(content)
    return ArtifactRecord.of(coordinate, source)


def test_install_uses_default_layout(tmp_path, caplog):
    store = LocalRepositoryStore(tmp_path / "repo")
    jar = ArtifactCoordinate("org.example", "core", "2.1")
    sources = jar.sub_artifact("sources", "jar")

    with caplog.at_level(logging.INFO):
        store.install([record(tmp_path, jar, b"jar"), record(tmp_path, sources, b"src")])

    version_dir = tmp_path / "repo" / "org" / "example" / "core" / "2.1"
    assert (version_dir / "core-2.1.jar").read_bytes() == b"jar"
    assert (version_dir / "core-2.1-sources.jar").read_bytes() == b"src"
    assert sorted(p.name for p in version_dir.iterdir()) == ["core-2.1-sources.jar", "core-2.1.jar"]
    assert "Installing" in caplog.text


def test_install_overwrites_existing_artifact(tmp_path):
    store = LocalRepositoryStore(tmp_path / "repo")
    jar = ArtifactCoordinate("org.example", "core", "2.1")
    store.install([record(tmp_path, jar, b"old")])

    store.install([record(tmp_path, jar, b"new")])

    assert store.path_for_local_artifact(jar).read_bytes() == b"new"
    assert store.has_artifact(jar)


def test_failed_batch_installs_nothing(tmp_path):
    store = LocalRepositoryStore(tmp_path / "repo")
    jar = ArtifactCoordinate("org.example", "core", "2.1")
    good = record(tmp_path, jar)
    missing = ArtifactRecord.of(jar.pom_coordinate(), tmp_path / "missing.pom")

    with pytest.raises(StoreError, match="Failed to install artifact"):
        store.install([good, missing])

    version_dir = tmp_path / "repo" / "org" / "example" / "core" / "2.1"
    assert not store.has_artifact(jar)
    assert list(version_dir.iterdir()) == []


def test_with_base_points_to_new_directory(tmp_path):
    store = LocalRepositoryStore(tmp_path / "repo")
    other = store.with_base(tmp_path / "other")
    coordinate = ArtifactCoordinate("g", "a", "1")

    assert other.path_for_local_artifact(coordinate) == tmp_path / "other" / "g" / "a" / "1" / "a-1.jar"
    assert store.path_for_local_artifact(coordinate).is_relative_to(tmp_path / "repo")


def test_failed_move_removes_files_already_placed(tmp_path):
    store = LocalRepositoryStore(tmp_path / "repo")
    jar = ArtifactCoordinate("org.example", "core", "2.1")
    pom = jar.pom_coordinate()
    blocker = store.path_for_local_artifact(pom)
    blocker.mkdir(parents=True)
    (blocker / "occupied").write_bytes(b"x")

    with pytest.raises(StoreError, match="Failed to install artifact"):
        store.install([record(tmp_path, jar), record(tmp_path, pom)])

    assert not store.has_artifact(jar)
    assert sorted(p.name for p in blocker.parent.iterdir()) == [blocker.name]


def test_failed_move_restores_previous_content(tmp_path):
    store = LocalRepositoryStore(tmp_path / "repo")
    jar = ArtifactCoordinate("org.example", "core", "2.1")
    pom = jar.pom_coordinate()
    store.install([record(tmp_path, jar, b"old")])
    blocker = store.path_for_local_artifact(pom)
    blocker.mkdir()
    (blocker / "occupied").write_bytes(b"x")

    with pytest.raises(StoreError):
        store.install([record(tmp_path, jar, b"new"), record(tmp_path, pom)])

    assert store.path_for_local_artifact(jar).read_bytes() == b"old"
    assert sorted(p.name for p in blocker.parent.iterdir()) == sorted([blocker.name, "core-2.1.jar"])


def test_successful_overwrite_leaves_no_backup(tmp_path):
    store = LocalRepositoryStore(tmp_path / "repo")
    jar = ArtifactCoordinate("org.example", "core", "2.1")
    store.install([record(tmp_path, jar, b"old")])

    store.install([record(tmp_path, jar, b"new")])

    assert [p.name for p in store.path_for_local_artifact(jar).parent.iterdir()] == ["core-2.1.jar"]


@pytest.mark.parametrize("source_mode", [0o600, 0o644])
def test_installed_files_follow_umask(tmp_path, source_mode):
    store = LocalRepositoryStore(tmp_path / "repo")
    jar = ArtifactCoordinate("org.example", "core", "2.1")
    rec = record(tmp_path, jar)
    os.chmod(rec.source_path, source_mode)
    umask = os.umask(0)
    os.umask(umask)

    store.install([rec])

    assert stat.S_IMODE(store.path_for_local_artifact(jar).stat().st_mode) == 0o666 & ~umask
