# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser turning a raw descriptor document into a :class:`Descriptor`.

The document is a JSON-like mapping with the top-level keys ``mod``
(required), ``umc`` (required) and ``integration`` (optional). Files are read
with PyYAML, which accepts both JSON and YAML syntax.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import yaml

from umcloader.descriptor.model import (
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
from umcloader.errors import MalformedDescriptorError

# ###############
# Public Interface
# ###############

REPOSITORY_TYPES = ("URL", "Dir", "File")
RELOCATION_SEPARATOR = "|"


def load_descriptor(path: Path) -> Descriptor:
    """Load and parse a descriptor file.

    Args:
        path: Path to a JSON or YAML descriptor.

    Returns:
        The parsed Descriptor.

    Raises:
        MalformedDescriptorError: If the file cannot be read, is not valid
            JSON/YAML, or does not describe a valid descriptor.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise MalformedDescriptorError(f"Descriptor file not found: {path}") from None
    except OSError as exc:
        raise MalformedDescriptorError(f"Cannot read descriptor file: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MalformedDescriptorError(f"Invalid document in {path}: {exc}") from exc

    return parse_descriptor(data, source_label=str(path))


def parse_descriptor(document: object, source_label: str = "<document>") -> Descriptor:
    """Parse an already decoded descriptor document.

    Args:
        document: The decoded key/value document.
        source_label: Human-readable label used in error messages.

    Returns:
        The parsed Descriptor.

    Raises:
        MalformedDescriptorError: If a required field is absent, an entry has
            the wrong shape, a library repository type is unknown, or a
            relocation rule is not made of exactly two paths.
    """
    data = _require_mapping(document, source_label)

    mod_location = f"{source_label}: mod"
    mod = _parse_mod(_require_mapping(_require(data, "mod", source_label), mod_location), mod_location)

    umc_location = f"{source_label}: umc"
    umc = _parse_umc(_require_mapping(_require(data, "umc", source_label), umc_location), umc_location)

    integration = None
    if "integration" in data:
        location = f"{source_label}: integration"
        integration = _parse_integration(_require_mapping(data["integration"], location), location)
    return Descriptor(mod=mod, umc=umc, integration=integration)


def parse_relocation(rule: str, location: str = "relocate") -> RelocationRule:
    """Parse a ``"from | to"`` relocation rule.

    Raises:
        MalformedDescriptorError: Unless the rule splits into exactly two
            non-empty package prefixes.
    """
    parts = [part.strip() for part in rule.split(RELOCATION_SEPARATOR)]
    if len(parts) != 2 or not all(parts):
        raise MalformedDescriptorError(
            f"{location}: relocation needs two paths separated by a '{RELOCATION_SEPARATOR}', got {rule!r}"
        )
    return RelocationRule(source=parts[0], target=parts[1])


# ################
# Implementation
# ################


def _require(mapping: Mapping[str, object], key: str, location: str) -> object:
    if key not in mapping:
        raise MalformedDescriptorError(f"{location}: missing required field '{key}'")
    return mapping[key]


def _require_mapping(value: object, location: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise MalformedDescriptorError(f"{location} must be a mapping")
    return value


def _require_string(mapping: Mapping[str, object], key: str, location: str) -> str:
    """Extract a required string field, raising MalformedDescriptorError if absent."""
    value = _require(mapping, key, location)
    if not isinstance(value, str):
        raise MalformedDescriptorError(f"{location}: '{key}' must be a string")
    return value


def _optional_string(mapping: Mapping[str, object], key: str, location: str) -> str | None:
    if key not in mapping or mapping[key] is None:
        return None
    return _require_string(mapping, key, location)


def _parse_mod(data: Mapping[str, object], location: str) -> ModuleDescriptor:
    raw_dependencies = _require_mapping(
        _require(data, "dependencies", location), f"{location}: dependencies"
    )
    dependencies = [
        _parse_dependency(dep_id, value, f"{location}: dependencies.{dep_id}")
        for dep_id, value in raw_dependencies.items()
    ]

    libraries: list[LibraryRef] = []
    if "libraries" in data:
        raw_libraries = data["libraries"]
        if not isinstance(raw_libraries, list):
            raise MalformedDescriptorError(f"{location}: 'libraries' must be a list")
        for index, entry in enumerate(raw_libraries):
            libraries.append(_parse_library(entry, f"{location}: libraries[{index}]"))

    return ModuleDescriptor(
        pkg=_require_string(data, "pkg", location),
        cls=_require_string(data, "cls", location),
        name=_require_string(data, "name", location),
        id=_require_string(data, "id", location),
        version=_require_string(data, "version", location),
        dependencies=tuple(dependencies),
        libraries=tuple(libraries),
    )


def _parse_dependency(dep_id: object, value: object, location: str) -> DependencyRef:
    """Parse one dependency, given either as a range string or as ``{versions: ...}``."""
    if not isinstance(dep_id, str):
        raise MalformedDescriptorError(f"{location}: dependency id must be a string")
    if isinstance(value, str):
        return DependencyRef(id=dep_id, versions=value)
    versions = _require_string(_require_mapping(value, location), "versions", location)
    return DependencyRef(id=dep_id, versions=versions)


def _parse_library(entry: object, location: str) -> LibraryRef:
    """Parse a single library entry from the ``libraries`` list."""
    data = _require_mapping(entry, location)

    artifact = _require_string(data, "artifact", location)
    declaration = _require_string(data, "type", location)

    relocation = None
    rule = _optional_string(data, "relocate", location)
    if rule is not None:
        relocation = parse_relocation(rule, location)

    only_in: tuple[str, ...] = ()
    if "onlyIn" in data:
        raw_only_in = data["onlyIn"]
        if not isinstance(raw_only_in, list) or not all(isinstance(v, str) for v in raw_only_in):
            raise MalformedDescriptorError(f"{location}: 'onlyIn' must be a list of strings")
        only_in = tuple(raw_only_in)

    repository_type = _optional_string(data, "repositoryType", location)
    if repository_type is None:
        repository_type = "File" if "path" in data else "URL"
    if repository_type not in REPOSITORY_TYPES:
        raise MalformedDescriptorError(
            f"{location}: 'repositoryType' must be one of {', '.join(REPOSITORY_TYPES)}, got {repository_type!r}"
        )

    common = {"artifact": artifact, "type": declaration, "relocation": relocation, "only_in": only_in}

    if repository_type == "File":
        if "repository" in data:
            raise MalformedDescriptorError(f"{location}: a file library cannot declare a 'repository'")
        return FileLibrary(path=_require_string(data, "path", location), **common)

    if "path" in data:
        raise MalformedDescriptorError(
            f"{location}: must specify either 'path' or 'repository', not both"
        )
    repository = _require_string(data, "repository", location)
    if repository_type == "Dir":
        return FlatDirLibrary(repository=repository, **common)
    return MavenLibrary(repository=repository, **common)


def _parse_integration(data: Mapping[str, object], location: str) -> IntegrationRef:
    return IntegrationRef(
        repo=_require_string(data, "repo", location),
        branch=_require_string(data, "branch", location),
        path=_require_string(data, "path", location),
    )


def _parse_umc(data: Mapping[str, object], location: str) -> CoreLibraryRef:
    return CoreLibraryRef(
        version=_require_string(data, "version", location),
        path=_optional_string(data, "path", location),
    )
