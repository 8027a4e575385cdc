# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for descriptor resolution.

Every error is terminal for the current resolution attempt: nothing is
retried and no partial variable table is produced.
"""

# ###############
# Public Interface
# ###############


class UmcLoaderError(Exception):
    """Base class for all errors raised while resolving a descriptor."""


class MalformedDescriptorError(UmcLoaderError):
    """Raised when the input document is structurally invalid."""


class MissingFieldError(UmcLoaderError):
    """Raised when a required string field is empty or blank."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing variable {name} in config")
        self.name = name


class InvalidVersionError(UmcLoaderError):
    """Raised when a version does not start with a numeric ``major.minor``."""


class VersionNotFoundError(UmcLoaderError):
    """Raised when a source tree lacks the version assignment line."""


class SourceUnavailableError(UmcLoaderError):
    """Raised when a source tree cannot be cloned or read."""


class TempDirError(UmcLoaderError):
    """Raised when a temporary clone directory cannot be created or removed."""


class ArtifactNotFoundError(UmcLoaderError):
    """Raised when the expected local core library binary does not exist."""


class NetworkError(UmcLoaderError):
    """Raised when downloading the core library binary fails."""


class ArtifactIOError(UmcLoaderError):
    """Raised when the local core library binary cannot be opened."""
