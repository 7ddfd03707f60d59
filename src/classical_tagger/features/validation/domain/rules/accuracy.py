"""
Summary: Accuracy rules comparing titles, composers, years and editions with a reference.
Why: A trusted reference release is the strongest evidence that a tag is wrong.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Final

from ..models import Album, Issue, Severity, Track
from ..names import inclusion_key
from ..rule import album_rule, track_rule
from ..text import (
    MATCH_DISTANCE,
    WARNING_DISTANCE,
    is_casual_title_case,
    is_title_case,
    levenshtein,
    normalize_title,
    titles_equivalent,
    titles_match,
    work_numbers,
)

FILENAME_TITLE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d+[\s\-_.]+(.+?)\.\w+$")


def title_difference(actual: str, reference: str) -> tuple[Severity, int] | None:
    """Grade how far ``actual`` is from ``reference``.

    Returns:
        tuple[Severity, int] | None: ``None`` when the normalized titles are
        equal or one contains the other; otherwise the severity for the edit
        distance (<=3 Info, <=10 Warning, else Error) and the distance itself.
    """
    a, r = normalize_title(actual), normalize_title(reference)
    if titles_equivalent(a, r):
        return None
    distance = levenshtein(a, r)
    if distance <= MATCH_DISTANCE:
        return Severity.INFO, distance
    if distance <= WARNING_DISTANCE:
        return Severity.WARNING, distance
    return Severity.ERROR, distance


def filename_title(filename: str) -> str | None:
    """Title portion of ``NN - Title.ext``, or ``None`` when not in that shape."""

    match = FILENAME_TITLE_PATTERN.match(filename)
    return match.group(1) if match else None


@album_rule("2.3.6", "Album-title accuracy", Severity.ERROR, 1.0)
def album_title_accuracy(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = album_title_accuracy.meta
    if reference is None or not actual.title.strip() or not reference.title.strip():
        return
    graded = title_difference(actual.title, reference.title)
    if graded is None:
        return
    severity, distance = graded
    yield meta.issue(
        f"Album title '{actual.title}' differs from reference '{reference.title}' "
        f"(distance {distance})",
        severity=severity,
    )


@track_rule("2.3.11", "Filenames match titles", Severity.ERROR, 1.0)
def filenames_match_titles(
    track: Track, reference_track: Track | None, actual: Album, reference: Album | None
) -> Iterator[Issue]:
    """The ``NN - Title.ext`` filename carries the track's own title."""

    meta = filenames_match_titles.meta
    if not track.filename or not track.title.strip():
        return
    parsed = filename_title(track.filename)
    if parsed is None or titles_match(parsed, track.title):
        return
    yield meta.issue(
        f"Track {actual.track_label(track)}: filename '{track.filename}' does not match "
        f"title '{track.title}'",
        track.track,
    )


@album_rule("2.3.11.1", "Filename capitalization", Severity.ERROR, 1.0)
def filename_capitalization(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """The title part of each filename is in Title Case or casual Title Case."""

    meta = filename_capitalization.meta
    for track in actual.tracks:
        parsed = filename_title(track.filename) if track.filename else None
        if parsed is None or is_title_case(parsed) or is_casual_title_case(parsed):
            continue
        yield meta.issue(
            f"Track {actual.track_label(track)}: filename '{track.filename}' is not in "
            "Title Case or casual Title Case",
            track.track,
        )


def _first_composer(track: Track) -> str | None:
    composers = track.composers
    return composers[0].name.strip() if composers else None


@album_rule("2.3.18.4", "Tag accuracy vs reference", Severity.ERROR, 1.0)
def tag_accuracy(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Year, then per paired track the title and the first composer."""

    meta = tag_accuracy.meta
    if reference is None:
        return

    if actual.original_year and reference.original_year and (
        actual.original_year != reference.original_year
    ):
        yield meta.issue(
            f"Year {actual.original_year} differs from reference year {reference.original_year}",
            severity=Severity.WARNING,
        )

    reference_tracks = reference.track_map()
    for track in actual.tracks:
        reference_track = reference_tracks.get(track.key)
        if reference_track is None:
            continue
        label = actual.track_label(track)

        graded = None
        if track.title.strip() and reference_track.title.strip():
            graded = title_difference(track.title, reference_track.title)
        if graded is not None:
            if work_numbers(track.title) != work_numbers(reference_track.title):
                yield meta.issue(
                    f"Track {label}: title '{track.title}' has different work numbers than "
                    f"reference '{reference_track.title}'",
                    track.track,
                )
            else:
                severity, distance = graded
                yield meta.issue(
                    f"Track {label}: title '{track.title}' differs from reference "
                    f"'{reference_track.title}' (distance {distance})",
                    track.track,
                    severity,
                )

        expected = _first_composer(reference_track)
        found = _first_composer(track)
        if expected and found != expected:
            yield meta.issue(
                f"Track {label}: composer '{found or ''}' differs from reference '{expected}'",
                track.track,
            )


@album_rule("classical.record_label.accuracy", "Record label accuracy", Severity.ERROR, 1.0)
def record_label_accuracy(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Label and catalog number agree with the reference where it has them."""

    meta = record_label_accuracy.meta
    if reference is None or reference.edition is None or actual.edition is None:
        return
    expected, found = reference.edition, actual.edition

    if expected.label.strip() and found.label.strip().casefold() != expected.label.strip().casefold():
        yield meta.issue(
            f"Record label '{found.label}' does not match reference '{expected.label}'"
        )
    if expected.catalog_number.strip() and inclusion_key(found.catalog_number) != inclusion_key(
        expected.catalog_number
    ):
        yield meta.issue(
            f"Catalog number '{found.catalog_number}' does not match reference "
            f"'{expected.catalog_number}'"
        )


@album_rule("classical.record_label", "Record label present", Severity.WARNING, 0.5)
def record_label_present(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = record_label_present.meta
    edition = actual.edition
    if edition is None:
        yield meta.issue(
            "Edition information (record label and catalog number) is recommended",
            severity=Severity.INFO,
        )
        return
    if not edition.label.strip():
        yield meta.issue("Edition has no record label")
    if not edition.catalog_number.strip():
        yield meta.issue("Edition has no catalog number")


RULES = (
    album_title_accuracy,
    filenames_match_titles,
    tag_accuracy,
    record_label_accuracy,
    record_label_present,
)
SUPPLEMENTARY_RULES = (filename_capitalization,)

__all__ = [
    "FILENAME_TITLE_PATTERN",
    "RULES",
    "SUPPLEMENTARY_RULES",
    "album_title_accuracy",
    "filename_capitalization",
    "filename_title",
    "filenames_match_titles",
    "record_label_accuracy",
    "record_label_present",
    "tag_accuracy",
    "title_difference",
]
