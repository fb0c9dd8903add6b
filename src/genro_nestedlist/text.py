# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Text helpers for paths and entry data.

Presentation layers take paths as comma-separated text ('docs,manuals')
and entry data as JSON. These helpers turn that text into the values a
NestedList expects, and back.

Example:
    >>> parse_path('docs,manuals')
    ('docs', 'manuals')
    >>> parse_path('')
    ()
    >>> parse_data('{"lines": 10}')
    {'lines': 10}
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

from .exceptions import InvalidDataError


def parse_path(text: str | None, separator: str = ',') -> tuple[str, ...]:
    """Split path text into names, dropping empty segments."""
    if not text:
        return ()
    return tuple(part for part in text.split(separator) if part != '')


def format_path(path: Sequence[str], separator: str = ',') -> str:
    """Join path names into text."""
    return separator.join(path)


def parse_data(text: str) -> dict[str, Any]:
    """Parse JSON object text into entry data.

    Raises:
        InvalidDataError: If text is not valid JSON or not a JSON object.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidDataError(f"Invalid JSON data: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidDataError(
            f"Entry data must be a JSON object, not {type(data).__name__}"
        )
    return data


def format_data(data: Mapping[str, Any]) -> str:
    """Format entry data as indented JSON."""
    return json.dumps(dict(data), indent=2)
