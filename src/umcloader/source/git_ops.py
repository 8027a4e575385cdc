# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Git operations backing the source-control collaborator."""

import logging
import shutil
import subprocess
from pathlib import Path

# ###############
# Public Interface
# ###############

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when a git operation fails."""


def clone(url: str, branch: str, target_dir: Path, *, shallow: bool = True, timeout: int = 300) -> None:
    """Clone *branch* of a remote git repository into *target_dir*.

    *target_dir* may exist but must be empty.  On failure, anything git left
    inside *target_dir* is removed so the caller only has to remove the
    directory it created itself.

    Args:
        url: URL of the remote git repository.
        branch: Branch (or tag) to check out.
        target_dir: Local directory to clone into.
        shallow: Fetch only the tip commit when True.
        timeout: Seconds allowed for the clone.

    Raises:
        GitError: If git is unavailable, times out, or the clone fails.
    """
    args = ["clone", "--branch", branch, "--single-branch"]
    if shallow:
        args.append("--depth=1")
    args += [url, str(target_dir)]

    logger.info("Cloning %s (branch %s) into %s", url, branch, target_dir)
    try:
        _run_git(args, timeout=timeout)
    except GitError:
        if target_dir.exists():
            for child in target_dir.iterdir():
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
        raise


def get_revision(repo_dir: Path, *, timeout: int = 10) -> str:
    """Return the abbreviated HEAD commit hash of a local repository.

    Raises:
        GitError: If git is unavailable or *repo_dir* is not a git repository.
    """
    revision = _run_git(["-C", str(repo_dir), "rev-parse", "--short", "HEAD"], timeout=timeout).strip()
    if not revision:
        raise GitError(f"git rev-parse returned no revision for '{repo_dir}'")
    return revision


# ################
# Implementation
# ################


def _run_git_raw(args: list[str], *, timeout: int = 120) -> subprocess.CompletedProcess[str]:
    """Run a git command and return the raw CompletedProcess result.

    Raises:
        GitError: If git is not found on PATH or the command times out.
    """
    logger.debug("Running git %s", " ".join(args))
    try:
        return subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not found on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise GitError(f"Git command timed out: git {' '.join(args)}") from exc


def _run_git(args: list[str], *, timeout: int = 120) -> str:
    """Run a git command and return stdout, raising GitError on non-zero exit.

    Raises:
        GitError: If git is not found, times out, or exits with a non-zero code.
    """
    result = _run_git_raw(args, timeout=timeout)
    if result.returncode != 0:
        raise GitError(f"git {' '.join(args)}: {result.stderr.strip()}")
    return result.stdout
