# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptor model and parser."""

from umcloader.descriptor.model import (
    LATEST_VERSION,
    CoreLibraryRef,
    DependencyRef,
    Descriptor,
    FileLibrary,
    FlatDirLibrary,
    IntegrationRef,
    LibraryRef,
    MavenLibrary,
    ModuleDescriptor,
    RelocationRule,
)
from umcloader.descriptor.parser import load_descriptor, parse_descriptor, parse_relocation

__all__ = [
    "LATEST_VERSION",
    "CoreLibraryRef",
    "DependencyRef",
    "Descriptor",
    "FileLibrary",
    "FlatDirLibrary",
    "IntegrationRef",
    "LibraryRef",
    "MavenLibrary",
    "ModuleDescriptor",
    "RelocationRule",
    "load_descriptor",
    "parse_descriptor",
    "parse_relocation",
]
