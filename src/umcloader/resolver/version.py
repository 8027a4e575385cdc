# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of the core library version.

A pinned version is returned as-is.  The ``latest`` sentinel is resolved by
reading the version line from the core library's build file and appending
the revision of the tree it was read from, e.g. ``1.2.3-a1b2c3d``.  The tree
is either a local checkout named by the descriptor or a shallow clone of the
upstream repository made in a temporary directory that is always removed
again.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from umcloader.descriptor.model import CoreLibraryRef
from umcloader.errors import SourceUnavailableError, TempDirError, VersionNotFoundError
from umcloader.settings import UpstreamSettings
from umcloader.source.control import GitSourceControl, SourceControl
from umcloader.source.git_ops import GitError

# ###############
# Public Interface
# ###############

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "umc-loader"


class VersionResolver:
    """Determines the concrete version of the core library.

    Args:
        source_control: Client used to clone the upstream repository and to
            query tree revisions.  Defaults to :class:`GitSourceControl`.
        settings: Upstream locations and the build file layout.
        working_dir: Base directory for relative local core paths.  Defaults
            to the current working directory at resolution time.
        temp_root: Parent directory for temporary clones.  Defaults to the
            system temporary directory.
    """

    def __init__(
        self,
        source_control: SourceControl | None = None,
        settings: UpstreamSettings | None = None,
        working_dir: Path | None = None,
        temp_root: Path | None = None,
    ) -> None:
        self.settings = settings or UpstreamSettings()
        self.source_control = source_control or GitSourceControl(timeout=self.settings.git_timeout)
        self.working_dir = working_dir
        self.temp_root = temp_root

    def resolve(self, core: CoreLibraryRef, variant_key: str) -> str:
        """Return the version string of the core library for *variant_key*.

        Raises:
            VersionNotFoundError: If the build file has no version line.
            SourceUnavailableError: If the tree cannot be cloned or read.
            TempDirError: If the temporary clone directory cannot be created
                or removed.
        """
        if not core.is_latest:
            return core.version

        if core.is_local:
            base = self.working_dir or Path.cwd()
            tree = base / core.path
            logger.debug("Resolving latest core version from local tree %s", tree)
            return self._version_of(tree)

        with _temporary_directory(self.temp_root) as tree:
            url = self.settings.upstream_repository
            logger.debug("Resolving latest core version from %s at %s", url, variant_key)
            try:
                self.source_control.clone(url, variant_key, tree, True)
            except (GitError, OSError) as exc:
                raise SourceUnavailableError(f"Unable to clone {url} at '{variant_key}': {exc}") from exc
            return self._version_of(tree)

    def _version_of(self, tree: Path) -> str:
        file_version = read_version_line(tree / self.settings.build_file, self.settings.version_prefix)
        try:
            revision = self.source_control.revision(tree)
        except (GitError, OSError) as exc:
            raise SourceUnavailableError(f"Unable to determine the revision of '{tree}': {exc}") from exc
        version = f"{file_version}-{revision}"
        logger.debug("Resolved core version %s", version)
        return version


def read_version_line(build_file: Path, prefix: str) -> str:
    """Extract the version assigned on the first line of *build_file* starting with *prefix*.

    Quotes are removed and surrounding whitespace stripped, so
    ``String umcVersion = "1.2.3"`` yields ``1.2.3``.

    Raises:
        SourceUnavailableError: If *build_file* cannot be read.
        VersionNotFoundError: If no line starts with *prefix*.
    """
    try:
        lines = build_file.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise SourceUnavailableError(f"Cannot read '{build_file}': {exc}") from exc

    for line in lines:
        if line.startswith(prefix):
            return line[len(prefix) :].replace('"', "").strip()
    raise VersionNotFoundError(f"No line starting with {prefix!r} in '{build_file}'")


# ################
# Implementation
# ################


@contextmanager
def _temporary_directory(temp_root: Path | None) -> Iterator[Path]:
    """Create a temporary directory and remove it when the block exits, however it exits.

    A failed removal raises :class:`TempDirError` only when the block itself
    succeeded; otherwise it is logged and the block's exception propagates.
    """
    try:
        path = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX, dir=temp_root))
    except OSError as exc:
        raise TempDirError(f"Cannot create a temporary directory: {exc}") from exc
    try:
        yield path
    except BaseException:
        try:
            shutil.rmtree(path)
        except OSError as exc:
            logger.warning("Cannot remove temporary directory '%s': %s", path, exc)
        raise
    try:
        shutil.rmtree(path)
    except OSError as exc:
        raise TempDirError(f"Cannot remove temporary directory '{path}': {exc}") from exc
