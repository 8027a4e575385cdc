# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Core library version resolution."""

from umcloader.resolver.version import TEMP_DIR_PREFIX, VersionResolver, read_version_line

__all__ = [
    "TEMP_DIR_PREFIX",
    "VersionResolver",
    "read_version_line",
]
