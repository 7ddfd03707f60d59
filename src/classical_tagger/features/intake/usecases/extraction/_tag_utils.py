"""Tag utility helpers.

Where: src/classical_tagger/features/intake/usecases/extraction/_tag_utils.py
What: Provide pure helper routines for parsing mutagen tag values.
Why: Keep the directory reader focused on assembling albums.
"""

from __future__ import annotations

import re
from typing import Final

__all__ = [
    "leading_number",
    "parse_slash_separated",
    "parse_year",
    "tag_values",
]

_LEADING_DIGITS: Final[re.Pattern[str]] = re.compile(r"^(\d+)")


def tag_values(raw: object) -> list[str]:
    """Normalize a mutagen tag value (list, scalar or ``None``) into non-empty strings."""
    if raw is None:
        return []
    items = raw if isinstance(raw, list) else [raw]
    values: list[str] = []
    for item in items:
        text = str(item).strip()
        if text:
            values.append(text)
    return values


def parse_slash_separated(value: str) -> tuple[int | None, int | None]:
    """Parse a string in 'number/total' format.

    Returns a tuple (number, total) or (None, None) if conversion fails.
    """
    parts: list[str] = value.strip().split(sep="/") if value else []
    num: int | None = int(parts[0]) if parts and parts[0].isdigit() else None
    total: int | None = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else None
    return num, total


def parse_year(date_str: str) -> int | None:
    """Parse a year from a string (expects the first 4 characters to be digits)."""
    return int(date_str[:4]) if date_str and len(date_str) >= 4 and date_str[:4].isdigit() else None


def leading_number(filename: str) -> int | None:
    """Track number taken from the leading digits of a filename."""
    match = _LEADING_DIGITS.match(filename)
    return int(match.group(1)) if match else None
