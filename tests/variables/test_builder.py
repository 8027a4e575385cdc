# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for building the variable table from a descriptor."""

import copy
import os
from pathlib import Path

import pytest

from umcloader.artifact import ArtifactRef, LocalArtifact, locate
from umcloader.descriptor import DependencyRef, parse_descriptor
from umcloader.errors import InvalidVersionError, MissingFieldError
from umcloader.variables import (
    Brand,
    OutputDialect,
    Unsupported,
    Variant,
    api_versions,
    build_variables,
    render_toml_dependencies,
    schema_keys,
)

# ###############
# Helpers
# ###############

_FORGE = Variant(platform_version="1.20", brand=Brand.FORGE)
_FABRIC = Variant(platform_version="1.20", brand=Brand.FABRIC)

_DOCUMENT = {
    "mod": {
        "pkg": "com.x",
        "cls": "Mod",
        "name": "X",
        "id": "x",
        "version": "1.0",
        "dependencies": {},
    },
    "umc": {"version": "2.5"},
}

_LIBRARIES = [
    {
        "artifact": "org.a:a:1.0",
        "type": "shade",
        "repositoryType": "URL",
        "repository": "https://a.example.org/maven",
        "relocate": "org.a | com.x.shaded.a",
    },
    {
        "artifact": "org.b:b:1.0",
        "type": "implementation",
        "repositoryType": "Dir",
        "repository": "libs",
    },
    {
        "artifact": "org.c:c:1.0",
        "type": "shade",
        "repositoryType": "URL",
        "repository": "https://c.example.org/maven",
        "onlyIn": ["1.20-fabric"],
        "relocate": "org.c|com.x.shaded.c",
    },
    {
        "artifact": "org.d:d:1.0",
        "type": "compileOnly",
        "path": "extra/d.jar",
    },
    {
        "artifact": "org.e:e:1.0",
        "type": "shade",
        "repositoryType": "Dir",
        "repository": "vendor",
        "onlyIn": ["1.20-forge"],
    },
]


def _descriptor(**mod_overrides: object):
    document = copy.deepcopy(_DOCUMENT)
    document["mod"].update(mod_overrides)
    return parse_descriptor(document)


def _build(descriptor, variant: Variant, version: str, artifact: ArtifactRef | None = None, **kwargs):
    if artifact is None:
        artifact = locate(descriptor.umc, variant.key, version)
    return build_variables(descriptor, variant, version, artifact, **kwargs)


# ###############
# Required entries
# ###############


def test_end_to_end_scenario() -> None:
    """The minimal document for 1.20 forge resolves the documented values."""
    table = _build(_descriptor(), _FORGE, "2.5")

    assert table["LOADER_VERSION"] == "1.20-forge"
    assert table["PACKAGE"] == "com.x"
    assert table["UMC_API"] == "2.5"
    assert table["UMC_API_NEXT"] == "2.6"
    assert table["FORGE_STRING_DEPENDENCIES"] == "required-after:universalmodcore@[2.5, 2.6)"


def test_identity_entries() -> None:
    table = _build(_descriptor(), _FORGE, "2.5")

    assert table["PACKAGEPATH"] == f"com{os.sep}x"
    assert table["CLASS"] == "Mod"
    assert table["NAME"] == "X"
    assert table["ID"] == "x"
    assert table["VERSION"] == "1.0"
    assert table["MINECRAFT"] == "1.20"
    assert table["LOADER"] == "forge"
    assert table["UMC_VERSION"] == "2.5"


def test_contains_exactly_the_schema() -> None:
    """The table holds every documented variable and nothing else."""
    table = _build(_descriptor(libraries=_LIBRARIES), _FORGE, "2.5")

    assert tuple(table) == schema_keys(OutputDialect.SHADOW, local_artifact=False)
    empty = [name for name, value in table.items() if not value]
    assert empty == []


@pytest.mark.parametrize(
    "field,name",
    [("pkg", "mod.package"), ("cls", "mod.class"), ("name", "mod.name"), ("id", "mod.id"), ("version", "mod.version")],
)
def test_empty_fields_are_missing(field: str, name: str) -> None:
    with pytest.raises(MissingFieldError, match=name):
        _build(_descriptor(**{field: "  "}), _FORGE, "2.5")


def test_empty_resolved_version_is_missing() -> None:
    with pytest.raises(MissingFieldError, match="umc.version"):
        _build(_descriptor(), _FORGE, "")


# ###############
# API versions
# ###############


@pytest.mark.parametrize(
    "version,expected",
    [
        ("4.12-abcdef1", ("4.12", "4.13")),
        ("2.5", ("2.5", "2.6")),
        ("1.2.3-a1b2c3d", ("1.2", "1.3")),
        ("10.0+build.7", ("10.0", "10.1")),
    ],
)
def test_api_versions(version: str, expected: tuple[str, str]) -> None:
    assert api_versions(version) == expected


@pytest.mark.parametrize("version", ["4.x", "4", "x.1", "4.12abc", "latest", ""])
def test_api_versions_rejects_non_numeric(version: str) -> None:
    with pytest.raises(InvalidVersionError):
        api_versions(version)


def test_invalid_resolved_version_fails_the_build() -> None:
    with pytest.raises(InvalidVersionError, match="4.x"):
        _build(_descriptor(), _FORGE, "4.x")


# ###############
# Libraries
# ###############


def test_library_repositories_put_flat_dirs_first() -> None:
    """Directory repositories are grouped in one flatDir block ahead of Maven URLs."""
    table = _build(_descriptor(libraries=_LIBRARIES), _FORGE, "2.5")

    assert table["LIB_REPOS"] == (
        "\tflatDir {\n"
        "\t\tdirs libs, vendor\n"
        "\t}\n"
        '\tmaven { url = "https://a.example.org/maven" }'
    )


def test_library_dependencies() -> None:
    """File libraries are declared by file, everything else by coordinate."""
    table = _build(_descriptor(libraries=_LIBRARIES), _FORGE, "2.5")

    assert table["SHADOW"] == (
        "\tshade 'org.a:a:1.0'\n"
        "\timplementation 'org.b:b:1.0'\n"
        "\tcompileOnly files('extra/d.jar')\n"
        "\tshade 'org.e:e:1.0'"
    )


def test_library_relocations() -> None:
    table = _build(_descriptor(libraries=_LIBRARIES), _FORGE, "2.5")
    assert table["RELOCATE"] == "\trelocate 'org.a', 'com.x.shaded.a'"


def test_only_in_filters_every_library_list() -> None:
    """A library restricted to another variant is left out of all three lists."""
    forge = _build(_descriptor(libraries=_LIBRARIES), _FORGE, "2.5")
    fabric = _build(_descriptor(libraries=_LIBRARIES), _FABRIC, "2.5")

    for key in ("LIB_REPOS", "SHADOW", "RELOCATE"):
        assert "org.c" not in forge[key] and "c.example.org" not in forge[key]
    assert "c.example.org" in fabric["LIB_REPOS"]
    assert "\tshade 'org.c:c:1.0'" in fabric["SHADOW"]
    assert "\trelocate 'org.c', 'com.x.shaded.c'" in fabric["RELOCATE"]
    assert "vendor" not in fabric["LIB_REPOS"]


def test_no_libraries() -> None:
    table = _build(_descriptor(), _FORGE, "2.5")

    assert table["LIB_REPOS"] == ""
    assert table["SHADOW"] == ""
    assert table["RELOCATE"] == ""


def test_legacy_dialect_names() -> None:
    table = _build(_descriptor(libraries=_LIBRARIES), _FORGE, "2.5", dialect=OutputDialect.LEGACY)

    assert "SHADOW" not in table and "RELOCATE" not in table
    assert table["MOD_DEPENDENCIES"].startswith("\tshade 'org.a:a:1.0'")
    assert table["RELOCATION"] == "\trelocate 'org.a', 'com.x.shaded.a'"


# ###############
# Core library artifact
# ###############


def test_remote_core_library() -> None:
    table = _build(_descriptor(), _FORGE, "2.5")

    assert table["UMC_REPO"] == 'maven { url = "https://teamopenindustry.cc/maven" }'
    assert table["UMC_DEPENDENCY"] == "'cam72cam.universalmodcore:UniversalModCore:1.20-forge-2.5'"
    assert table["UMC_DOWNLOAD"].endswith("/1.20-forge-2.5/UniversalModCore-1.20-forge-2.5.jar")
    assert "UMC_FILE" not in table


def test_local_core_library(tmp_path: Path) -> None:
    jar = tmp_path / "UniversalModCore-1.20-forge-2.5.jar"
    table = _build(_descriptor(), _FORGE, "2.5", artifact=LocalArtifact(path=jar))

    assert table["UMC_FILE"] == str(jar)
    assert table["UMC_REPO"] == f"flatDir {{ dirs '{tmp_path}' }}"
    assert table["UMC_DEPENDENCY"] == "name: 'UniversalModCore-1.20-forge-2.5'"
    assert "UMC_DOWNLOAD" not in table


def test_build_does_not_touch_the_filesystem(tmp_path: Path) -> None:
    """The builder trusts the located artifact and never checks that it exists."""
    missing = tmp_path / "gone" / "UniversalModCore-1.20-forge-2.5.jar"

    table = build_variables(_descriptor(), _FORGE, "2.5", LocalArtifact(path=missing))

    assert table["UMC_FILE"] == str(missing)


# ###############
# Dependency declarations
# ###############


def test_string_dependencies_include_mod_dependencies() -> None:
    descriptor = _descriptor(dependencies={"othermod": "[2.0,)", "third": {"versions": "[1,2)"}})
    table = _build(descriptor, _FORGE, "2.5")

    assert table["FORGE_STRING_DEPENDENCIES"] == (
        "required-after:othermod@[2.0,); required-after:third@[1,2); required-after:universalmodcore@[2.5, 2.6)"
    )


def test_forge_toml_dependencies() -> None:
    table = _build(_descriptor(), _FORGE, "2.5")

    assert table["FORGE_TOML_DEPENDENCIES"] == (
        "[[dependencies.x]]\n"
        '    modId="universalmodcore"\n'
        "    mandatory=true\n"
        '    versionRange="[2.5, 2.6)"\n'
        '    ordering="BEFORE"\n'
        '    side="BOTH"'
    )


def test_neoforge_toml_dependencies() -> None:
    variant = Variant(platform_version="1.21", brand=Brand.NEOFORGE)
    table = _build(_descriptor(), variant, "2.5")

    assert "    type='required'\n" in table["FORGE_TOML_DEPENDENCIES"]
    assert "mandatory" not in table["FORGE_TOML_DEPENDENCIES"]


def test_toml_blocks_are_separated_by_a_blank_line() -> None:
    table = _build(_descriptor(dependencies={"othermod": "[2.0,)"}), _FORGE, "2.5")

    blocks = table["FORGE_TOML_DEPENDENCIES"].split("\n\n")
    assert len(blocks) == 2
    assert 'modId="othermod"' in blocks[0]
    assert 'modId="universalmodcore"' in blocks[1]


@pytest.mark.parametrize("brand", [Brand.FABRIC, Brand.QUILT])
def test_toml_dependencies_unsupported_brands(brand: Brand) -> None:
    """Brands without TOML metadata get an explicit Unsupported result and an empty variable."""
    dependencies = [DependencyRef(id="universalmodcore", versions="[2.5, 2.6)")]
    assert render_toml_dependencies("x", dependencies, brand) == Unsupported(brand)

    table = _build(_descriptor(), Variant(platform_version="1.20", brand=brand), "2.5")
    assert table["FORGE_TOML_DEPENDENCIES"] == ""
