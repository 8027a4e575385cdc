# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Variable table construction and template substitution."""

from umcloader.variables.builder import (
    CORE_LIBRARY_ID,
    Unsupported,
    api_versions,
    build_variables,
    render_toml_dependencies,
)
from umcloader.variables.substitution import DELIMITER, substitute, substitute_stream
from umcloader.variables.table import Brand, OutputDialect, VariableTable, Variant, schema_keys

__all__ = [
    "CORE_LIBRARY_ID",
    "DELIMITER",
    "Brand",
    "OutputDialect",
    "Unsupported",
    "VariableTable",
    "Variant",
    "api_versions",
    "build_variables",
    "render_toml_dependencies",
    "schema_keys",
    "substitute",
    "substitute_stream",
]
