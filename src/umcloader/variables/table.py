# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""The resolved variable table and the types that select its shape."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

# ###############
# Public Interface
# ###############


class Brand(Enum):
    """Mod loader flavour targeted by a build."""

    FORGE = "forge"
    NEOFORGE = "neoforge"
    FABRIC = "fabric"
    QUILT = "quilt"

    @classmethod
    def parse(cls, value: str) -> Brand:
        """Look up a brand by name, ignoring case.

        Raises:
            ValueError: If *value* names no brand.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            names = ", ".join(b.value for b in cls)
            raise ValueError(f"Unknown loader {value!r}, expected one of: {names}") from None


class OutputDialect(Enum):
    """Naming scheme for the per-library dependency and relocation variables."""

    SHADOW = "shadow"
    LEGACY = "legacy"

    @property
    def dependencies_key(self) -> str:
        return "SHADOW" if self is OutputDialect.SHADOW else "MOD_DEPENDENCIES"

    @property
    def relocation_key(self) -> str:
        return "RELOCATE" if self is OutputDialect.SHADOW else "RELOCATION"


@dataclass(frozen=True)
class Variant:
    """A platform version paired with a loader brand."""

    platform_version: str
    brand: Brand

    @property
    def key(self) -> str:
        """The variant key, e.g. ``1.20-forge``."""
        return f"{self.platform_version}-{self.brand.value}"

    def __str__(self) -> str:
        return self.key


def schema_keys(dialect: OutputDialect, *, local_artifact: bool) -> tuple[str, ...]:
    """Return the exact, ordered set of variable names a table must hold.

    Args:
        dialect: Selects the library dependency and relocation names.
        local_artifact: ``UMC_FILE`` is required when True, ``UMC_DOWNLOAD``
            otherwise.
    """
    return (
        "PACKAGE",
        "PACKAGEPATH",
        "CLASS",
        "NAME",
        "ID",
        "VERSION",
        "LOADER_VERSION",
        "MINECRAFT",
        "LOADER",
        "LIB_REPOS",
        dialect.dependencies_key,
        dialect.relocation_key,
        "UMC_API",
        "UMC_API_NEXT",
        "UMC_VERSION",
        "UMC_REPO",
        "UMC_DEPENDENCY",
        "UMC_FILE" if local_artifact else "UMC_DOWNLOAD",
        "FORGE_STRING_DEPENDENCIES",
        "FORGE_TOML_DEPENDENCIES",
    )


class VariableTable(Mapping[str, str]):
    """Immutable, ordered mapping from variable name to replacement value.

    The names are checked against :func:`schema_keys` on construction, so a
    table always holds exactly the documented variables.

    Raises:
        ValueError: If a name is repeated, missing, or not part of the schema.
    """

    def __init__(self, entries: Iterable[tuple[str, str]], dialect: OutputDialect = OutputDialect.SHADOW) -> None:
        values: dict[str, str] = {}
        for name, value in entries:
            if name in values:
                raise ValueError(f"Duplicate variable '{name}'")
            values[name] = value

        expected = schema_keys(dialect, local_artifact="UMC_FILE" in values)
        missing = [name for name in expected if name not in values]
        unexpected = [name for name in values if name not in expected]
        if missing or unexpected:
            raise ValueError(
                f"Variable table does not match the {dialect.value} schema "
                f"(missing: {missing or 'none'}, unexpected: {unexpected or 'none'})"
            )

        self._values = values
        self.dialect = dialect

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"VariableTable({self._values!r})"
