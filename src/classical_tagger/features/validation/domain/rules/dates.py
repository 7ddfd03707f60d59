"""
Summary: Year rules for recording date, edition year and plausibility.
Why: The year tag mixes recording and release dates, which classical catalogues keep apart.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable, Iterator
from typing import Final

from ..models import Album, Issue, Severity
from ..rule import AlbumRule, RuleMetadata, album_rule

YearClock = Callable[[], int]

EARLIEST_PLAUSIBLE_YEAR: Final[int] = 1900
LARGE_EDITION_GAP: Final[int] = 10
MODERATE_EDITION_GAP: Final[int] = 3

YEAR_FIELD_USAGE: Final[RuleMetadata] = RuleMetadata(
    "2.3.8", "Year field usage", Severity.WARNING, 0.5
)


def system_year() -> int:
    """Current calendar year from the local clock."""

    return datetime.date.today().year


def effective_year(album: Album) -> int:
    """Album year, falling back to the edition year."""

    if album.original_year > 0:
        return album.original_year
    if album.edition is not None and album.edition.year > 0:
        return album.edition.year
    return 0


@album_rule("2.3.4", "Recording date vs edition year", Severity.INFO, 0.1)
def recording_date_vs_edition(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = recording_date_vs_edition.meta
    edition_year = actual.edition.year if actual.edition is not None else 0
    album_year = actual.original_year

    if album_year > 0 and edition_year > 0:
        gap = edition_year - album_year
        if gap > LARGE_EDITION_GAP:
            yield meta.issue(
                f"Edition year {edition_year} is {gap} years after recording year {album_year}; "
                "likely a reissue, keep the original recording year"
            )
        elif gap < 0:
            yield meta.issue(
                f"Edition year {edition_year} is earlier than recording year {album_year}"
            )
        elif gap >= MODERATE_EDITION_GAP:
            yield meta.issue(
                f"Edition year {edition_year} is {gap} years after recording year {album_year}"
            )

    if reference is not None and album_year > 0:
        reference_year = reference.original_year
        if reference_year > 0 and reference_year != album_year:
            yield meta.issue(
                f"Recording year {album_year} differs from reference year {reference_year}"
            )


def year_field_usage(current_year: YearClock = system_year) -> AlbumRule:
    """Build the year plausibility rule bound to ``current_year``.

    Args:
        current_year: Clock returning the current calendar year.

    Returns:
        AlbumRule: Rule ``2.3.8``.
    """

    def check(actual: Album, reference: Album | None) -> Iterator[Issue]:
        meta = YEAR_FIELD_USAGE
        year = effective_year(actual)
        if year > 0:
            latest = current_year() + 1
            if year < EARLIEST_PLAUSIBLE_YEAR:
                yield meta.issue(f"Year {year} is implausibly early (before {EARLIEST_PLAUSIBLE_YEAR})")
            elif year > latest:
                yield meta.issue(
                    f"Year {year} is in the future (latest allowed is {latest})",
                    severity=Severity.ERROR,
                )

        if reference is not None and year > 0:
            expected = effective_year(reference)
            if expected > 0 and expected != year:
                yield meta.issue(
                    f"Year {year} does not match reference year {expected}",
                    severity=Severity.ERROR,
                )

        edition_year = actual.edition.year if actual.edition is not None else 0
        if edition_year > 0 and 0 < actual.original_year and edition_year < actual.original_year:
            yield meta.issue(
                f"Edition year {edition_year} is earlier than album year {actual.original_year}"
            )

    return AlbumRule(YEAR_FIELD_USAGE, check)


__all__ = [
    "EARLIEST_PLAUSIBLE_YEAR",
    "YEAR_FIELD_USAGE",
    "YearClock",
    "effective_year",
    "recording_date_vs_edition",
    "system_year",
    "year_field_usage",
]
