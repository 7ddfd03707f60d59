"""
Summary: Composer-name rules for track titles, the album title and the composer tag.
Why: Classical releases are catalogued by composer, so the name must sit in the right field.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Final

from ..models import Album, Issue, Severity, Track
from ..names import (
    base_surname,
    contains_phrase,
    contains_word,
    display_name,
    fold,
    is_acceptable_abbreviation,
    last_name,
)
from ..rule import album_rule, track_rule

# Phrases that legitimately put another composer's name into a work title.
WORK_REFERENCE_PREFIXES: Final[tuple[str, ...]] = (
    "on a theme by",
    "on a theme of",
    "after",
    "hommage to",
    "hommage a",
    "homage to",
    "in memory of",
)

# Surnames unambiguous enough to stand alone in an album title.
SURNAME_ONLY_EXEMPT: Final[frozenset[str]] = frozenset({"vivaldi", "beethoven"})


def _is_work_reference(title: str, surname: str) -> bool:
    prefixes = "|".join(re.escape(prefix) for prefix in WORK_REFERENCE_PREFIXES)
    pattern = rf"\b(?:{prefixes})\s+(?:[\w.'-]+\s+){{0,3}}?{re.escape(fold(surname))}(?!\w)"
    return re.search(pattern, fold(title)) is not None


def dominant_composers(album: Album) -> list[str]:
    """Composer names credited on the most tracks; ties are all returned."""

    counts = album.composer_counts()
    if not counts:
        return []
    top = max(counts.values())
    return [name for name, count in counts.items() if count == top]


def _mentions_full_name(title: str, composer: str) -> bool:
    return contains_phrase(title, display_name(composer)) or is_acceptable_abbreviation(
        title, composer
    )


def _mentions_surname(title: str, composer: str) -> bool:
    return contains_word(title, base_surname(composer)) or contains_phrase(
        title, last_name(composer)
    )


@track_rule("classical.track_title", "Composer not in title", Severity.ERROR, 1.0)
def composer_not_in_title(
    track: Track, reference_track: Track | None, actual: Album, reference: Album | None
) -> Iterator[Issue]:
    meta = composer_not_in_title.meta
    for composer in track.composers:
        surname = base_surname(composer.name)
        if not surname or not contains_word(track.title, surname):
            continue
        if _is_work_reference(track.title, surname):
            continue
        yield meta.issue(
            f"Track {actual.track_label(track)}: composer surname '{surname}' found in "
            f"title '{track.title}'; keep composer names in the composer tag",
            track.track,
        )


@album_rule("classical.folder_name", "Composer in folder name", Severity.WARNING, 0.5)
def composer_in_folder_name(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """The album title names its primary composer; surname alone is only advisory."""

    meta = composer_in_folder_name.meta
    title = actual.title
    if not title.strip() or actual.is_various_artists or contains_phrase(title, "various artists"):
        return

    for composer in dominant_composers(actual):
        if _mentions_full_name(title, composer):
            continue
        full = display_name(composer)
        if _mentions_surname(title, composer):
            yield meta.issue(
                f"Album title names composer '{base_surname(composer)}' by surname only; "
                f"'{full}' or an abbreviated form is preferred",
                severity=Severity.INFO,
            )
        else:
            yield meta.issue(f"Album title '{title}' should include primary composer '{full}'")


@album_rule("2.3.17", "Torrent artist uses full composer name", Severity.WARNING, 0.5)
def full_composer_name(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = full_composer_name.meta
    title = actual.title
    if not title.strip():
        return

    for composer in dominant_composers(actual):
        full = display_name(composer)
        surname = base_surname(composer)
        if not _mentions_surname(title, composer):
            yield meta.issue(
                f"Album title does not mention dominant composer '{full}'",
                severity=Severity.INFO,
            )
            continue
        if _mentions_full_name(title, composer) or fold(surname) in SURNAME_ONLY_EXEMPT:
            continue
        yield meta.issue(
            f"Album title contains composer surname '{surname}' but not full name '{full}'"
        )


@album_rule("classical.composer", "Composer tag", Severity.WARNING, 0.5)
def composer_tag(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Every track credits a composer by a name that identifies them."""

    meta = composer_tag.meta
    for track in actual.tracks:
        label = actual.track_label(track)
        composers = track.composers
        if not composers:
            yield meta.issue(f"Track {label}: composer tag is missing", track.track)
            continue
        for composer in composers:
            name = composer.name.strip()
            if name and " " not in name and "." not in name:
                yield meta.issue(
                    f"Track {label}: composer '{name}' is ambiguous; use the full name",
                    track.track,
                )


RULES = (composer_not_in_title, composer_in_folder_name, full_composer_name)
SUPPLEMENTARY_RULES = (composer_tag,)

__all__ = [
    "RULES",
    "SUPPLEMENTARY_RULES",
    "SURNAME_ONLY_EXEMPT",
    "WORK_REFERENCE_PREFIXES",
    "composer_in_folder_name",
    "composer_not_in_title",
    "composer_tag",
    "dominant_composers",
    "full_composer_name",
]
