# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token substitution of a variable table into template text.

Tokens are the variable names, either bare (``PACKAGE``) or wrapped in
:data:`DELIMITER` (``#PACKAGE#``).  Longer names are tried first, so ``#ABC#``
is never consumed by a shorter ``AB`` variable.  The text is scanned once:
inserted values are taken literally and are not scanned again.
"""

from __future__ import annotations

import io
import re
from collections.abc import Mapping
from typing import BinaryIO

# ###############
# Public Interface
# ###############

DELIMITER = "#"


def substitute(text: str, table: Mapping[str, str], delimited: bool = True) -> str:
    """Replace every token of *table* in *text* with its value.

    Args:
        text: Template text.
        table: Variable names and their values, in priority order for names
            of equal length.
        delimited: Match ``#NAME#`` tokens when True, bare ``NAME`` otherwise.

    Returns:
        *text* with tokens replaced.  Tokens that are not in *table* are
        left untouched.
    """
    if not table:
        return text
    replacements = {_token(name, delimited): value for name, value in table.items()}
    return _token_pattern(list(replacements)).sub(lambda m: replacements[m.group(0)], text)


def substitute_stream(
    stream: BinaryIO,
    table: Mapping[str, str],
    delimited: bool = True,
    encoding: str = "utf-8",
) -> BinaryIO:
    """Read *stream* to the end and return a new stream of substituted bytes."""
    text = stream.read().decode(encoding)
    return io.BytesIO(substitute(text, table, delimited).encode(encoding))


# ################
# Implementation
# ################


def _token(name: str, delimited: bool) -> str:
    return f"{DELIMITER}{name}{DELIMITER}" if delimited else name


def _token_pattern(tokens: list[str]) -> re.Pattern[str]:
    # sorted() is stable, so equal-length tokens keep table order.
    ordered = sorted(tokens, key=len, reverse=True)
    return re.compile("|".join(re.escape(token) for token in ordered))
