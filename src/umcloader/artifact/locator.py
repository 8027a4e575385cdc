# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Location of the core library binary.

A core library built from a local checkout is expected under
``<path>/build/libs``; otherwise the binary is downloaded from the Maven
repository configured in :class:`~umcloader.settings.UpstreamSettings`.  Both
cases use the file name ``UniversalModCore-<variant>-<version>.jar``.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

import requests
import urllib3

from umcloader.descriptor.model import CoreLibraryRef
from umcloader.errors import ArtifactIOError, ArtifactNotFoundError, NetworkError
from umcloader.settings import UpstreamSettings

# ###############
# Public Interface
# ###############

logger = logging.getLogger(__name__)

ARTIFACT_GROUP = "cam72cam.universalmodcore"
ARTIFACT_NAME = "UniversalModCore"
LOCAL_BUILD_DIR = Path("build") / "libs"


@dataclass(frozen=True)
class LocalArtifact:
    """A core library binary found on disk."""

    path: Path

    @property
    def repository_line(self) -> str:
        return f"flatDir {{ dirs '{self.path.parent}' }}"

    @property
    def dependency_line(self) -> str:
        return f"name: '{self.path.stem}'"


@dataclass(frozen=True)
class RemoteArtifact:
    """A core library binary published to a Maven repository.

    Attributes:
        url: Download URL of the binary.
        repository_url: Base URL of the Maven repository.
        coordinate: ``group:name:version`` coordinate of the binary.
    """

    url: str
    repository_url: str
    coordinate: str

    @property
    def repository_line(self) -> str:
        return f'maven {{ url = "{self.repository_url}" }}'

    @property
    def dependency_line(self) -> str:
        return f"'{self.coordinate}'"


ArtifactRef = LocalArtifact | RemoteArtifact


def artifact_file_name(variant_key: str, resolved_version: str) -> str:
    """Return the binary file name for a variant and core version."""
    return f"{ARTIFACT_NAME}-{variant_key}-{resolved_version}.jar"


def locate(
    core: CoreLibraryRef,
    variant_key: str,
    resolved_version: str,
    *,
    settings: UpstreamSettings | None = None,
    working_dir: Path | None = None,
) -> ArtifactRef:
    """Find the core library binary for *variant_key* at *resolved_version*.

    Args:
        core: The descriptor's core library reference.
        variant_key: Platform version and brand, e.g. ``1.20-forge``.
        resolved_version: Output of the version resolver.
        settings: Maven repository location; defaults to :class:`UpstreamSettings`.
        working_dir: Base directory for a relative local core path.

    Returns:
        A :class:`LocalArtifact` when the core library has a local path,
        otherwise a :class:`RemoteArtifact`.

    Raises:
        ArtifactNotFoundError: If the core library has a local path but the
            expected binary does not exist.
    """
    file_name = artifact_file_name(variant_key, resolved_version)

    if core.is_local:
        base = working_dir or Path.cwd()
        jar = base / core.path / LOCAL_BUILD_DIR / file_name
        if not jar.is_file():
            raise ArtifactNotFoundError(f"Unable to find UMC jar: {jar}")
        logger.debug("Located local core library %s", jar)
        return LocalArtifact(path=jar)

    settings = settings or UpstreamSettings()
    version = f"{variant_key}-{resolved_version}"
    group_path = ARTIFACT_GROUP.replace(".", "/")
    url = f"{settings.maven_url}/{group_path}/{ARTIFACT_NAME}/{version}/{file_name}"
    return RemoteArtifact(
        url=url,
        repository_url=settings.maven_url,
        coordinate=f"{ARTIFACT_GROUP}:{ARTIFACT_NAME}:{version}",
    )


def open_artifact_stream(artifact: ArtifactRef, *, timeout: int = 60) -> BinaryIO:
    """Open the binary for reading; the caller closes the returned stream.

    A remote binary is streamed.  Connection failures while reading the body
    surface from the stream's ``read`` as :class:`NetworkError`.

    Raises:
        ArtifactIOError: If a local binary cannot be opened.
        NetworkError: If the download cannot be started or the server
            answers with an error status.
    """
    if isinstance(artifact, LocalArtifact):
        try:
            return artifact.path.open("rb")
        except OSError as exc:
            raise ArtifactIOError(f"Cannot open '{artifact.path}': {exc}") from exc

    logger.info("Downloading %s", artifact.url)
    try:
        response = requests.get(artifact.url, stream=True, timeout=timeout)
    except requests.Timeout as exc:
        raise NetworkError(f"Download of {artifact.url} timed out after {timeout} seconds") from exc
    except requests.RequestException as exc:  # includes ConnectionError
        raise NetworkError(f"Download of {artifact.url} failed: {exc}") from exc

    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        response.close()
        raise NetworkError(f"Download of {artifact.url} failed: {exc}") from exc

    response.raw.decode_content = True
    return io.BufferedReader(_DownloadStream(response, artifact.url))


# ################
# Implementation
# ################


class _DownloadStream(io.RawIOBase):
    """Raw stream over a streamed response body that reports read failures as NetworkError."""

    def __init__(self, response: requests.Response, url: str) -> None:
        super().__init__()
        self._response = response
        self._url = url

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        try:
            data = self._response.raw.read(len(buffer))
        except (urllib3.exceptions.HTTPError, requests.RequestException, OSError) as exc:
            raise NetworkError(f"Download of {self._url} was interrupted: {exc}") from exc
        size = len(data)
        buffer[:size] = data
        return size

    def close(self) -> None:
        if not self.closed:
            self._response.close()
        super().close()
