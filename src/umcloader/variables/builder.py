# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of the variable table from a descriptor and a resolved core version.

Library declarations are rendered for Gradle build scripts:

* ``LIB_REPOS`` holds one ``flatDir`` block listing every directory-backed
  library repository, followed by one ``maven`` block per URL repository.
* The dependency list (``SHADOW`` or ``MOD_DEPENDENCIES``) declares every
  library, by file for file libraries and by coordinate otherwise.
* The relocation list (``RELOCATE`` or ``RELOCATION``) holds a ``relocate``
  line for each library that declares a relocation rule.

All three lists are built from the same filtered library sequence, in
declaration order.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from umcloader.artifact.locator import ArtifactRef, LocalArtifact
from umcloader.descriptor.model import (
    DependencyRef,
    Descriptor,
    FileLibrary,
    FlatDirLibrary,
    LibraryRef,
    MavenLibrary,
)
from umcloader.errors import InvalidVersionError, MissingFieldError
from umcloader.variables.table import Brand, OutputDialect, VariableTable, Variant

# ###############
# Public Interface
# ###############

CORE_LIBRARY_ID = "universalmodcore"

_API_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?=$|[.\-+])")


@dataclass(frozen=True)
class Unsupported:
    """Marks output that has no implementation for a brand yet."""

    brand: Brand


def build_variables(
    descriptor: Descriptor,
    variant: Variant,
    resolved_version: str,
    artifact: ArtifactRef,
    *,
    dialect: OutputDialect = OutputDialect.SHADOW,
) -> VariableTable:
    """Build the full variable table for one variant without further I/O.

    Args:
        descriptor: The parsed descriptor.
        variant: Platform version and loader brand to build for.
        resolved_version: Core library version from the version resolver.
        artifact: Core library binary from
            :func:`~umcloader.artifact.locator.locate`.
        dialect: Naming scheme for the library dependency variables.

    Returns:
        The complete, immutable variable table.

    Raises:
        MissingFieldError: If a required descriptor string is empty.
        InvalidVersionError: If *resolved_version* has no numeric major.minor.
    """
    mod = descriptor.mod
    pkg = _require("mod.package", mod.pkg)
    resolved_version = _require("umc.version", resolved_version)
    api, api_next = api_versions(resolved_version)

    libraries = [lib for lib in mod.libraries if lib.applies_to(variant.key)]

    dependencies = [*mod.dependencies, DependencyRef(id=CORE_LIBRARY_ID, versions=f"[{api}, {api_next})")]
    toml = render_toml_dependencies(mod.id, dependencies, variant.brand)

    entries = [
        ("PACKAGE", pkg),
        ("PACKAGEPATH", pkg.replace(".", os.sep)),
        ("CLASS", _require("mod.class", mod.cls)),
        ("NAME", _require("mod.name", mod.name)),
        ("ID", _require("mod.id", mod.id)),
        ("VERSION", _require("mod.version", mod.version)),
        ("LOADER_VERSION", variant.key),
        ("MINECRAFT", variant.platform_version),
        ("LOADER", variant.brand.value),
        ("LIB_REPOS", render_repositories(libraries)),
        (dialect.dependencies_key, render_library_dependencies(libraries)),
        (dialect.relocation_key, render_relocations(libraries)),
        ("UMC_API", api),
        ("UMC_API_NEXT", api_next),
        ("UMC_VERSION", resolved_version),
        ("UMC_REPO", artifact.repository_line),
        ("UMC_DEPENDENCY", artifact.dependency_line),
    ]
    if isinstance(artifact, LocalArtifact):
        entries.append(("UMC_FILE", str(artifact.path)))
    else:
        entries.append(("UMC_DOWNLOAD", artifact.url))
    entries += [
        ("FORGE_STRING_DEPENDENCIES", render_string_dependencies(dependencies)),
        ("FORGE_TOML_DEPENDENCIES", "" if isinstance(toml, Unsupported) else toml),
    ]
    return VariableTable(entries, dialect)


def api_versions(version: str) -> tuple[str, str]:
    """Return the ``major.minor`` API version and the next minor one.

    ``4.12-abcdef1`` gives ``("4.12", "4.13")``.

    Raises:
        InvalidVersionError: If *version* does not start with two numeric,
            dot-separated components.
    """
    match = _API_VERSION_RE.match(version)
    if match is None:
        raise InvalidVersionError(f"Cannot parse major.minor from version {version!r}")
    major, minor = int(match.group(1)), int(match.group(2))
    return f"{major}.{minor}", f"{major}.{minor + 1}"


def render_repositories(libraries: Sequence[LibraryRef]) -> str:
    dirs = [lib.repository for lib in libraries if isinstance(lib, FlatDirLibrary)]
    lines = [f'\tmaven {{ url = "{lib.repository}" }}' for lib in libraries if isinstance(lib, MavenLibrary)]
    if dirs:
        lines.insert(0, f"\tflatDir {{\n\t\tdirs {', '.join(dirs)}\n\t}}")
    return "\n".join(lines)


def render_library_dependencies(libraries: Sequence[LibraryRef]) -> str:
    lines = []
    for lib in libraries:
        if isinstance(lib, FileLibrary):
            lines.append(f"\t{lib.type} files('{lib.path}')")
        else:
            lines.append(f"\t{lib.type} '{lib.artifact}'")
    return "\n".join(lines)


def render_relocations(libraries: Sequence[LibraryRef]) -> str:
    return "\n".join(
        f"\trelocate '{lib.relocation.source}', '{lib.relocation.target}'"
        for lib in libraries
        if lib.relocation is not None
    )


def render_string_dependencies(dependencies: Sequence[DependencyRef]) -> str:
    """Render dependencies in the legacy ``mcmod.info``/annotation string form."""
    return "; ".join(f"required-after:{dep.id}@{dep.versions}" for dep in dependencies)


def render_toml_dependencies(mod_id: str, dependencies: Sequence[DependencyRef], brand: Brand) -> str | Unsupported:
    """Render ``mods.toml`` dependency blocks, separated by a blank line.

    Returns:
        The rendered blocks, or :class:`Unsupported` for brands whose
        metadata format is not TOML based.
    """
    renderer = _TOML_RENDERERS.get(brand)
    if renderer is None:
        return Unsupported(brand)
    return "\n\n".join(renderer(mod_id, dep) for dep in dependencies)


# ################
# Implementation
# ################


def _require(name: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise MissingFieldError(name)
    return value


def _forge_toml(mod_id: str, dep: DependencyRef) -> str:
    return (
        f"[[dependencies.{mod_id}]]\n"
        f'    modId="{dep.id}"\n'
        f"    mandatory=true\n"
        f'    versionRange="{dep.versions}"\n'
        f'    ordering="BEFORE"\n'
        f'    side="BOTH"'
    )


def _neoforge_toml(mod_id: str, dep: DependencyRef) -> str:
    return (
        f"[[dependencies.{mod_id}]]\n"
        f'    modId="{dep.id}"\n'
        f"    type='required'\n"
        f'    versionRange="{dep.versions}"\n'
        f'    ordering="BEFORE"\n'
        f'    side="BOTH"'
    )


_TOML_RENDERERS: dict[Brand, Callable[[str, DependencyRef], str]] = {
    Brand.FORGE: _forge_toml,
    Brand.NEOFORGE: _neoforge_toml,
}
