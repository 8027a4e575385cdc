# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""One resolution pass: descriptor in, variable table out.

The pass parses the descriptor (unless given an already parsed one),
resolves the core library version, locates its binary and builds the
variable table.  It either succeeds completely or raises the first
:class:`~umcloader.errors.UmcLoaderError` it encounters.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from umcloader.artifact.locator import ArtifactRef, locate, open_artifact_stream
from umcloader.descriptor.model import Descriptor
from umcloader.descriptor.parser import parse_descriptor
from umcloader.resolver.version import VersionResolver
from umcloader.settings import UpstreamSettings
from umcloader.source.control import SourceControl
from umcloader.variables.builder import build_variables
from umcloader.variables.substitution import substitute
from umcloader.variables.table import Brand, OutputDialect, VariableTable, Variant

# ###############
# Public Interface
# ###############

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Everything resolved for one variant.

    Attributes:
        descriptor: The parsed descriptor.
        variant: Platform version and brand the pass ran for.
        version: Resolved core library version.
        artifact: Location of the core library binary.
        variables: The variable table to substitute into templates.
        settings: Upstream settings used for the pass.
    """

    descriptor: Descriptor
    variant: Variant
    version: str
    artifact: ArtifactRef
    variables: VariableTable
    settings: UpstreamSettings

    def render(self, text: str, delimited: bool = True) -> str:
        """Substitute this resolution's variables into *text*."""
        return substitute(text, self.variables, delimited)

    def open_artifact(self) -> BinaryIO:
        """Open the core library binary, downloading it if it is remote."""
        return open_artifact_stream(self.artifact, timeout=self.settings.download_timeout)


def resolve(
    document: Descriptor | Mapping[str, object],
    platform_version: str,
    brand: Brand,
    *,
    dialect: OutputDialect = OutputDialect.SHADOW,
    settings: UpstreamSettings | None = None,
    source_control: SourceControl | None = None,
    working_dir: Path | None = None,
    temp_root: Path | None = None,
) -> Resolution:
    """Run a full resolution pass for *platform_version* and *brand*.

    Args:
        document: A parsed :class:`Descriptor` or the raw document mapping.
        platform_version: Minecraft version, e.g. ``1.20``.
        brand: Loader brand.
        dialect: Naming scheme for library dependency variables.
        settings: Upstream locations; defaults to :class:`UpstreamSettings`.
        source_control: Client used for ``latest`` core versions.
        working_dir: Base directory for relative local paths.
        temp_root: Parent directory for temporary clones.

    Raises:
        UmcLoaderError: Any error from parsing, version resolution, artifact
            location, or table construction.
    """
    settings = settings or UpstreamSettings()
    descriptor = document if isinstance(document, Descriptor) else parse_descriptor(document)
    variant = Variant(platform_version=platform_version, brand=brand)
    logger.debug("Resolving %s for %s", descriptor.mod.id, variant.key)

    resolver = VersionResolver(
        source_control=source_control,
        settings=settings,
        working_dir=working_dir,
        temp_root=temp_root,
    )
    version = resolver.resolve(descriptor.umc, variant.key)
    artifact = locate(descriptor.umc, variant.key, version, settings=settings, working_dir=working_dir)
    variables = build_variables(descriptor, variant, version, artifact=artifact, dialect=dialect)

    logger.debug("Resolved %d variables for %s", len(variables), variant.key)
    return Resolution(
        descriptor=descriptor,
        variant=variant,
        version=version,
        artifact=artifact,
        variables=variables,
        settings=settings,
    )
