# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Descriptor resolution and template substitution for UniversalModCore mods."""

from umcloader.descriptor import Descriptor, load_descriptor, parse_descriptor
from umcloader.errors import UmcLoaderError
from umcloader.resolution import Resolution, resolve
from umcloader.settings import UpstreamSettings
from umcloader.variables import Brand, OutputDialect, VariableTable, Variant, substitute, substitute_stream

__all__ = [
    "Brand",
    "Descriptor",
    "OutputDialect",
    "Resolution",
    "UmcLoaderError",
    "UpstreamSettings",
    "VariableTable",
    "Variant",
    "load_descriptor",
    "parse_descriptor",
    "resolve",
    "substitute",
    "substitute_stream",
]
