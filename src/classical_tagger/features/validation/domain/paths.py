"""Release-relative path predicates (archive files, disc folders, segments)."""

from __future__ import annotations

import re
from typing import Final

# Compound suffixes first so ".tar.gz" is reported rather than ".gz".
ARCHIVE_EXTENSIONS: Final[tuple[str, ...]] = (
    ".tar.gz",
    ".tar.bz2",
    ".tar.xz",
    ".zip",
    ".rar",
    ".7z",
    ".tar",
    ".gz",
    ".bz2",
    ".xz",
    ".tgz",
    ".tbz2",
    ".txz",
    ".cab",
    ".ace",
    ".arj",
    ".lzh",
    ".sitx",
    ".sit",
)

DISC_FOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(cd|disc|disk|dvd)(\d*)", re.IGNORECASE
)


def archive_extension(path: str) -> str | None:
    """Return the forbidden archive suffix of ``path`` (lowercase), if any."""

    lowered = path.lower()
    for extension in ARCHIVE_EXTENSIONS:
        if lowered.endswith(extension):
            return extension
    return None


def is_disc_folder(name: str) -> bool:
    """True for ``CD1``, ``disc2`` or a bare ``DVD``; matching ignores case."""

    return DISC_FOLDER_PATTERN.fullmatch(name) is not None


def disc_folder_digits(name: str) -> str | None:
    """Digits following the disc keyword, or ``None`` when not a disc folder."""

    match = DISC_FOLDER_PATTERN.fullmatch(name)
    if match is None:
        return None
    return match.group(2)


def path_segments(path: str) -> list[str]:
    """Split a ``/``-separated relative path, ignoring empty segments."""

    return [segment for segment in path.split("/") if segment]


__all__ = [
    "ARCHIVE_EXTENSIONS",
    "DISC_FOLDER_PATTERN",
    "archive_extension",
    "disc_folder_digits",
    "is_disc_folder",
    "path_segments",
]
