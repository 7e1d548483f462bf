"""SQL placeholder handling.

Finds ``:name`` placeholders and rewrites positional ``?`` markers into
numbered named placeholders (``:1``, ``:2``, ...). Single-quoted string
literals and PostgreSQL ``::typecast`` syntax are left alone.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache
from typing import Any

from dataapi_client.core.exceptions import ArgumentError

ERROR_NUMBER_OF_PARAMS_MISMATCH = "Number of placeholders does not match number of parameters"

# Matches :name but not ::typecast and not inside words
_PARAM_PATTERN = re.compile(r"(?<![:\w]):(\w+)")

# Matches single-quoted string literals ('' escapes included)
_STRING_LITERAL_PATTERN = re.compile(r"'(?:[^']|'')*'")


def _code_segments(sql: str) -> list[tuple[bool, str]]:
    """Split *sql* into ``(is_code, text)`` chunks around string literals."""
    segments: list[tuple[bool, str]] = []
    last_end = 0
    for match in _STRING_LITERAL_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            segments.append((True, sql[last_end:start]))
        segments.append((False, match.group()))
        last_end = end
    if last_end < len(sql):
        segments.append((True, sql[last_end:]))
    return segments


@lru_cache(maxsize=256)
def find_placeholders(sql: str) -> frozenset[str]:
    """Return the distinct ``:name`` placeholders used in *sql*."""
    names: set[str] = set()
    for is_code, text in _code_segments(sql):
        if is_code:
            names.update(_PARAM_PATTERN.findall(text))
    return frozenset(names)


def convert_positional(sql: str, params: Sequence[Any]) -> tuple[str, dict[str, Any]]:
    """Rewrite ``?`` markers as ``:1 .. :n`` and number *params* to match.

    Raises:
        ArgumentError: If the marker count differs from ``len(params)``.
    """
    parts: list[str] = []
    named: dict[str, Any] = {}
    index = 0
    for is_code, text in _code_segments(sql):
        if not is_code:
            parts.append(text)
            continue
        pieces = text.split("?")
        parts.append(pieces[0])
        for piece in pieces[1:]:
            index += 1
            if index > len(params):
                raise ArgumentError(ERROR_NUMBER_OF_PARAMS_MISMATCH)
            parts.append(f":{index}")
            parts.append(piece)
            named[str(index)] = params[index - 1]

    if index != len(params):
        raise ArgumentError(ERROR_NUMBER_OF_PARAMS_MISMATCH)
    return "".join(parts), named
