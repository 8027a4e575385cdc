# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Location and retrieval of the core library binary."""

from umcloader.artifact.locator import (
    ArtifactRef,
    LocalArtifact,
    RemoteArtifact,
    artifact_file_name,
    locate,
    open_artifact_stream,
)

__all__ = [
    "ArtifactRef",
    "LocalArtifact",
    "RemoteArtifact",
    "artifact_file_name",
    "locate",
    "open_artifact_stream",
]
