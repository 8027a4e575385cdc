# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for a full resolution pass."""

import io
import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from umcloader import Brand, OutputDialect, UpstreamSettings, resolve
from umcloader.artifact import LocalArtifact, RemoteArtifact
from umcloader.descriptor import parse_descriptor
from umcloader.errors import ArtifactNotFoundError, MalformedDescriptorError, SourceUnavailableError
from umcloader.source import GitError

# ###############
# Helpers
# ###############


def _document(**umc: str) -> dict:
    return {
        "mod": {
            "pkg": "com.x",
            "cls": "Mod",
            "name": "X",
            "id": "x",
            "version": "1.0",
            "dependencies": {},
        },
        "umc": {"version": "2.5", **umc},
    }


class FakeSourceControl:
    def __init__(self, clone_error: Exception | None = None) -> None:
        self.clone_error = clone_error
        self.branches: list[str] = []

    def clone(self, url: str, branch: str, dest_dir: Path, shallow: bool) -> None:
        self.branches.append(branch)
        if self.clone_error is not None:
            raise self.clone_error
        (dest_dir / "build.gradle").write_text('String umcVersion = "4.12"\n', encoding="utf-8")

    def revision(self, repo_dir: Path) -> str:
        return "abcdef1"


# ###############
# Resolution
# ###############


def test_pinned_version_end_to_end() -> None:
    resolution = resolve(_document(), "1.20", Brand.FORGE)

    assert resolution.variant.key == "1.20-forge"
    assert resolution.version == "2.5"
    assert isinstance(resolution.artifact, RemoteArtifact)
    assert resolution.variables["PACKAGE"] == "com.x"
    assert resolution.variables["PACKAGEPATH"] == f"com{os.sep}x"
    assert resolution.variables["UMC_API"] == "2.5"
    assert resolution.variables["UMC_API_NEXT"] == "2.6"
    assert resolution.variables["FORGE_STRING_DEPENDENCIES"] == "required-after:universalmodcore@[2.5, 2.6)"


def test_accepts_parsed_descriptor() -> None:
    descriptor = parse_descriptor(_document())
    resolution = resolve(descriptor, "1.12.2", Brand.FORGE)

    assert resolution.descriptor is descriptor
    assert resolution.variables["LOADER_VERSION"] == "1.12.2-forge"


def test_malformed_document() -> None:
    with pytest.raises(MalformedDescriptorError):
        resolve({"mod": {}}, "1.20", Brand.FORGE)


def test_latest_version_from_upstream(tmp_path: Path) -> None:
    """A latest core version is read from a clone of the variant branch."""
    fake = FakeSourceControl()

    resolution = resolve(
        _document(version="latest"),
        "1.20",
        Brand.NEOFORGE,
        source_control=fake,
        temp_root=tmp_path,
    )

    assert fake.branches == ["1.20-neoforge"]
    assert resolution.version == "4.12-abcdef1"
    assert resolution.variables["UMC_API"] == "4.12"
    assert resolution.variables["UMC_API_NEXT"] == "4.13"
    assert resolution.variables["UMC_DEPENDENCY"] == (
        "'cam72cam.universalmodcore:UniversalModCore:1.20-neoforge-4.12-abcdef1'"
    )


def test_latest_version_clone_failure(tmp_path: Path) -> None:
    fake = FakeSourceControl(clone_error=GitError("no such branch"))

    with pytest.raises(SourceUnavailableError):
        resolve(_document(version="latest"), "1.99", Brand.FORGE, source_control=fake, temp_root=tmp_path)


def test_local_core_library(tmp_path: Path) -> None:
    libs = tmp_path / "umc" / "build" / "libs"
    libs.mkdir(parents=True)
    jar = libs / "UniversalModCore-1.20-forge-2.5.jar"
    jar.write_bytes(b"jar")

    resolution = resolve(_document(path="umc"), "1.20", Brand.FORGE, working_dir=tmp_path)

    assert resolution.artifact == LocalArtifact(path=jar)
    assert resolution.variables["UMC_FILE"] == str(jar)


def test_local_core_library_missing(tmp_path: Path) -> None:
    with pytest.raises(ArtifactNotFoundError):
        resolve(_document(path="umc"), "1.20", Brand.FORGE, working_dir=tmp_path)


def test_legacy_dialect() -> None:
    resolution = resolve(_document(), "1.20", Brand.FORGE, dialect=OutputDialect.LEGACY)

    assert "MOD_DEPENDENCIES" in resolution.variables
    assert "SHADOW" not in resolution.variables


# ###############
# Resolution helpers
# ###############


def test_render() -> None:
    resolution = resolve(_document(), "1.20", Brand.FORGE)

    assert resolution.render("package #PACKAGE#;") == "package com.x;"
    assert resolution.render("PACKAGE-ID", delimited=False) == "com.x-x"


def test_open_artifact_uses_download_timeout() -> None:
    settings = UpstreamSettings(download_timeout=7)
    resolution = resolve(_document(), "1.20", Brand.FORGE, settings=settings)
    response = MagicMock()
    response.raw.read.side_effect = io.BytesIO(b"jar").read

    with patch("umcloader.artifact.locator.requests.get", return_value=response) as mock_get:
        with resolution.open_artifact() as stream:
            assert stream.read() == b"jar"

    mock_get.assert_called_once_with(resolution.artifact.url, stream=True, timeout=7)
