# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source-control access used to resolve the latest core library version."""

from umcloader.source.control import GitSourceControl, SourceControl
from umcloader.source.git_ops import GitError, clone, get_revision

__all__ = [
    "GitError",
    "GitSourceControl",
    "SourceControl",
    "clone",
    "get_revision",
]
