# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source-control capability handed to the version resolver."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from umcloader.source import git_ops

# ###############
# Public Interface
# ###############


class SourceControl(Protocol):
    """What the version resolver needs from a source-control client.

    Implementations raise :class:`~umcloader.source.git_ops.GitError` (or any
    ``OSError``) when an operation fails.
    """

    def clone(self, url: str, branch: str, dest_dir: Path, shallow: bool) -> None:
        """Check out *branch* of *url* into the existing, empty *dest_dir*."""
        ...

    def revision(self, repo_dir: Path) -> str:
        """Return the short revision identifier of the tree at *repo_dir*."""
        ...


class GitSourceControl:
    """:class:`SourceControl` implemented with the ``git`` executable."""

    def __init__(self, timeout: int = 300) -> None:
        self.timeout = timeout

    def clone(self, url: str, branch: str, dest_dir: Path, shallow: bool) -> None:
        git_ops.clone(url, branch, dest_dir, shallow=shallow, timeout=self.timeout)

    def revision(self, repo_dir: Path) -> str:
        return git_ops.get_revision(repo_dir)
