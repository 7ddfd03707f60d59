"""
Summary: Track/disc numbering rules and the required-tag rule.
Why: Gaps and missing tags are the most common defects in ripped classical releases.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from typing import Final

from ..models import Album, Issue, Severity
from ..rule import album_rule

FILENAME_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d+[\s\-_.]+")


def _format_numbers(numbers: Sequence[int]) -> str:
    return ", ".join(str(number) for number in numbers)


def _missing_between(numbers: Sequence[int], start: int) -> list[int]:
    """Numbers absent from ``start..max(numbers)``."""

    present = set(numbers)
    return [n for n in range(start, max(numbers) + 1) if n not in present]


@album_rule("2.3.10", "Track-number format", Severity.INFO, 0.1)
def track_number_format(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Per disc, track numbers run 1..N without holes."""

    meta = track_number_format.meta
    multi_disc = actual.is_multi_disc
    for disc, tracks in actual.tracks_by_disc().items():
        prefix = f"Disc {disc}: " if multi_disc else ""
        numbers = [track.track for track in tracks]
        lowest = min(numbers)
        if lowest != 1:
            yield meta.issue(f"{prefix}track numbering should start at 1 (first track is {lowest})")
        gaps = _missing_between(numbers, lowest)
        if gaps:
            yield meta.issue(f"{prefix}track numbering has gaps; missing {_format_numbers(gaps)}")


@album_rule("2.3.15", "Multi-disc numbering", Severity.ERROR, 1.0)
def multi_disc_numbering(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Every disc up to the highest is present and restarts its numbering at 1."""

    meta = multi_disc_numbering.meta
    if not actual.is_multi_disc:
        return

    by_disc = actual.tracks_by_disc()
    for disc in range(1, actual.max_disc + 1):
        tracks = by_disc.get(disc)
        if not tracks:
            yield meta.issue(
                f"Disc {disc} of {actual.max_disc} is missing", severity=Severity.WARNING
            )
            continue
        numbers = [track.track for track in tracks]
        lowest = min(numbers)
        if lowest != 1:
            yield meta.issue(
                f"Disc {disc}: track numbering must start at 1 on every disc "
                f"(lowest track is {lowest})"
            )
        gaps = _missing_between(numbers, lowest)
        if gaps:
            yield meta.issue(
                f"Disc {disc}: track numbering is not consecutive; missing {_format_numbers(gaps)}",
                severity=Severity.INFO,
            )


@album_rule("2.3.16.4", "Required tags", Severity.ERROR, 1.0)
def required_tags(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Album title and year, and per track a title, artists and a performer."""

    meta = required_tags.meta
    if not actual.title.strip():
        yield meta.issue("Album title tag is missing")
    if not actual.tracks:
        yield meta.issue("Album must have at least one track")
    if actual.original_year <= 0:
        yield meta.issue("Year tag is missing (strongly recommended)", severity=Severity.WARNING)

    for track in actual.tracks:
        label = actual.track_label(track)
        if not track.title.strip():
            yield meta.issue(f"Track {label}: title tag is missing", track.track)
        if not track.artists:
            yield meta.issue(f"Track {label}: artist tag is missing", track.track)
        elif not track.performers:
            yield meta.issue(
                f"Track {label}: artist tag lists only composers/arrangers; add the performers",
                track.track,
            )


@album_rule("2.3.13", "Track numbers in filenames", Severity.ERROR, 1.0)
def track_numbers_in_filenames(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = track_numbers_in_filenames.meta
    if len(actual.tracks) <= 1:
        return
    for track in actual.tracks:
        filename = track.filename
        if filename and not FILENAME_NUMBER_PATTERN.match(filename):
            yield meta.issue(
                f"Track {actual.track_label(track)}: filename '{filename}' "
                "must start with the track number",
                track.track,
            )


RULES = (track_number_format, multi_disc_numbering, required_tags)
SUPPLEMENTARY_RULES = (track_numbers_in_filenames,)

__all__ = [
    "FILENAME_NUMBER_PATTERN",
    "RULES",
    "SUPPLEMENTARY_RULES",
    "multi_disc_numbering",
    "required_tags",
    "track_number_format",
    "track_numbers_in_filenames",
]
