# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Typed in-memory representation of a parsed build descriptor."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

LATEST_VERSION = "latest"


class DependencyRef(BaseModel):
    """A mod dependency and the version range it must satisfy."""

    model_config = ConfigDict(frozen=True)

    id: str
    versions: str


class RelocationRule(BaseModel):
    """Moves classes of a shaded library from one package prefix to another."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str


class _LibraryBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    artifact: str
    type: str
    relocation: RelocationRule | None = None
    only_in: tuple[str, ...] = ()

    def applies_to(self, variant_key: str) -> bool:
        """Return True if the library is declared for *variant_key*.

        A library without an ``onlyIn`` restriction applies to every variant.
        """
        return not self.only_in or variant_key in self.only_in


class MavenLibrary(_LibraryBase):
    """A library fetched from a remote Maven repository by coordinate."""

    kind: Literal["url"] = "url"
    repository: str


class FlatDirLibrary(_LibraryBase):
    """A library resolved by coordinate from a local flat directory."""

    kind: Literal["dir"] = "dir"
    repository: str


class FileLibrary(_LibraryBase):
    """A library referenced directly by its file path. Carries no repository."""

    kind: Literal["file"] = "file"
    path: str


# One of the three library variants, told apart by `kind`.
LibraryRef = Annotated[MavenLibrary | FlatDirLibrary | FileLibrary, _Field(discriminator="kind")]


class ModuleDescriptor(BaseModel):
    """The ``mod`` section: identity of the generated mod and what it depends on.

    Attributes:
        pkg: Java package of the generated mod class.
        cls: Name of the generated mod class.
        name: Human-readable display name.
        id: Mod identifier.
        version: Mod version.
        dependencies: Mod dependencies in declaration order.
        libraries: Extra libraries in declaration order.
    """

    model_config = ConfigDict(frozen=True)

    pkg: str
    cls: str
    name: str
    id: str
    version: str
    dependencies: tuple[DependencyRef, ...] = ()
    libraries: tuple[LibraryRef, ...] = ()


class IntegrationRef(BaseModel):
    """Where a companion integration source tree lives."""

    model_config = ConfigDict(frozen=True)

    repo: str
    branch: str
    path: str


class CoreLibraryRef(BaseModel):
    """The ``umc`` section: which core library build to depend on."""

    model_config = ConfigDict(frozen=True)

    version: str
    path: str | None = None

    @property
    def is_latest(self) -> bool:
        """Return True if the version must be derived from a source tree."""
        return self.version == LATEST_VERSION

    @property
    def is_local(self) -> bool:
        """Return True if the core library is built from a local checkout."""
        return bool(self.path)


class Descriptor(BaseModel):
    """Top-level model of a parsed descriptor document."""

    model_config = ConfigDict(frozen=True)

    mod: ModuleDescriptor
    umc: CoreLibraryRef
    integration: IntegrationRef | None = None
