import pytest

from mvninstall.modules.install.domain import is_valid_id, is_valid_version, validate_coordinates
from mvninstall.modules.install.errors import ConfigurationError


@pytest.mark.parametrize("value", ["com.example", "my-artifact_1.0", "A", "0", "a.b-c_d"])
def test_valid_ids(value):
    assert is_valid_id(value)


@pytest.mark.parametrize("value", [None, "", "com example", "a/b", "a:b", "café", "a+b", "a\tb"])
def test_invalid_ids(value):
    assert not is_valid_id(value)


@pytest.mark.parametrize("value", ["1.0", "1.0-SNAPSHOT", "2.0.0+build.5", "", "RELEASE"])
def test_valid_versions(value):
    assert is_valid_version(value)


@pytest.mark.parametrize("char", list('\\/:"<>|?*[](){},'))
def test_each_illegal_version_char_is_rejected(char):
    assert not is_valid_version(f"1.0{char}beta")


def test_none_version_is_invalid():
    assert not is_valid_version(None)


def test_validate_coordinates_requires_all_fields():
    with pytest.raises(ConfigurationError, match="incomplete"):
        validate_coordinates("com.x", "a", "1.0", None)


def test_validate_coordinates_rejects_illegal_characters():
    with pytest.raises(ConfigurationError, match="invalid characters"):
        validate_coordinates("com.x", "a", "1.0/evil", "jar")
    with pytest.raises(ConfigurationError, match="invalid characters"):
        validate_coordinates("com x", "a", "1.0", "jar")


def test_validate_coordinates_accepts_legal_input():
    validate_coordinates("com.x", "a", "1.0", "jar")
