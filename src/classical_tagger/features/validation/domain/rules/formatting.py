"""
Summary: Text-formatting rules for encoding, capitalization, combined credits and title markers.
Why: Formatting defects are mechanical to detect and common in scraped or re-tagged releases.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Final

from ..models import ALBUM_SCOPE, Album, Issue, Severity, iter_artist_names
from ..names import fold
from ..rule import album_rule
from ..text import encoding_problem, letters_case_kind, normalize_title

CREDIT_SEPARATORS: Final[tuple[str, ...]] = (";", " / ", " & ", ", ", " and ")
TITLE_SEPARATORS: Final[tuple[str, ...]] = (" / ", "; ", " & ", ", ", " and ")
MULTI_WORK_MIN_LENGTH: Final[int] = 10
INITIALS_MAX_LETTERS: Final[int] = 3

ENSEMBLE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\b(?:orchestr\w*|choir\w*|chorus|chorale?|ensemble\w*|quartet\w*|trio\w*|of|the|de|la)\b"
)
FIRST_LAST_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Z][\w'-]*\s+[A-Z][\w'-]*")
LEADING_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(\d{1,3})[\s\-._:]+|^\s*track\s*(\d{1,3})[\s\-._:]+", re.IGNORECASE
)
DISC_SUFFIX_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\s*[(\[]?\s*disc\s*(\d+)\s*[)\]]?\s*$", re.IGNORECASE
)
DISC_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\b(disc|cd|disk|volume|vol\.?)\s*\d+", re.IGNORECASE
)
VOLUME_SERIES_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"complete works|collected|recordings|anthology|collection|edition|series",
    re.IGNORECASE,
)
VOLUME_RANGE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\b(?:volume|vol\.?)\s*\d+\s*-\s*\d+", re.IGNORECASE
)
REQUEST_MARKER: Final[str] = "[REQ]"
REQUEST_VARIANTS: Final[tuple[str, ...]] = ("[REQUEST]", "[REQUESTED]", "(REQ)", "(REQUEST)")
FOLDER_YEAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\[(](\d{4})[\])]")
FORMAT_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\[(FLAC|MP3|AAC|ALAC|WAV|APE|WV)(?:[\s\d/-][^\]]*)?\]", re.IGNORECASE
)


def _is_initials(part: str) -> bool:
    letters = [ch for ch in part if ch.isalpha()]
    return 0 < len(letters) <= INITIALS_MAX_LETTERS


def combined_credit_separator(name: str) -> str | None:
    """Return the separator that makes ``name`` look like several artists.

    Ensemble-looking names ("London Symphony Orchestra and Chorus"), reversed
    names with initials ("Bach, J.S.") and comma lists of "Firstname Lastname"
    entries are not treated as combined credits.
    """
    if ENSEMBLE_PATTERN.search(fold(name)):
        return None

    for separator in CREDIT_SEPARATORS:
        if separator not in name:
            continue
        parts = [part.strip() for part in name.split(separator)]
        if any(_is_initials(part) for part in parts):
            return None
        if separator == ", " and all(FIRST_LAST_PATTERN.fullmatch(part) for part in parts):
            return None
        return separator
    return None


def _case_label(kind: str) -> str:
    return "upper-case" if kind == "upper" else "lower-case"


@album_rule("2.3.18.1", "Character encoding", Severity.ERROR, 1.0)
def character_encoding(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = character_encoding.meta

    album_fields = [("Album title", actual.title), ("Folder name", actual.folder_name or "")]
    album_fields.extend(("Album artist", artist.name) for artist in actual.album_artists)
    for label, text in album_fields:
        problem = encoding_problem(text)
        if problem:
            yield meta.issue(f"{label} contains {problem}")

    for track in actual.tracks:
        location = f"Track {actual.track_label(track)}"
        track_fields = [("title", track.title), ("filename", track.filename)]
        track_fields.extend(("artist name", artist.name) for artist in track.artists)
        for label, text in track_fields:
            problem = encoding_problem(text)
            if problem:
                yield meta.issue(f"{location}: {label} contains {problem}", track.track)

    for path in actual.files:
        problem = encoding_problem(path)
        if problem:
            yield meta.issue(f"File path contains {problem}")


@album_rule("2.3.18.2", "Tag capitalization", Severity.ERROR, 1.0)
def tag_capitalization(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Titles and names must not be written entirely in one case."""

    meta = tag_capitalization.meta
    kind = letters_case_kind(actual.title)
    if kind:
        yield meta.issue(f"Album title '{actual.title}' is entirely {_case_label(kind)}")

    for track in actual.tracks:
        kind = letters_case_kind(track.title)
        if kind:
            yield meta.issue(
                f"Track {actual.track_label(track)}: title '{track.title}' is entirely "
                f"{_case_label(kind)}",
                track.track,
            )

    for track_number, artist in iter_artist_names(actual):
        kind = letters_case_kind(artist.name)
        if kind:
            scope = "Album artist" if track_number == ALBUM_SCOPE else "Artist"
            yield meta.issue(
                f"{scope} '{artist.name}' is entirely {_case_label(kind)}", track_number
            )


def _only_case_differs(actual: str, reference: str) -> bool:
    if actual == reference or normalize_title(actual) != normalize_title(reference):
        return False
    return [ch for ch in actual if ch.isalpha()] != [ch for ch in reference if ch.isalpha()]


@album_rule("2.3.18.2.ref", "Capitalization vs reference", Severity.WARNING, 0.5)
def capitalization_vs_reference(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = capitalization_vs_reference.meta
    if reference is None:
        return

    if _only_case_differs(actual.title, reference.title):
        yield meta.issue(
            f"Album title '{actual.title}' capitalization differs from reference "
            f"'{reference.title}'"
        )

    reference_tracks = reference.track_map()
    for track in actual.tracks:
        reference_track = reference_tracks.get(track.key)
        if reference_track is None:
            continue
        if _only_case_differs(track.title, reference_track.title):
            yield meta.issue(
                f"Track {actual.track_label(track)}: title '{track.title}' capitalization "
                f"differs from reference '{reference_track.title}'",
                track.track,
            )


def _multi_work_separator(title: str) -> str | None:
    for separator in TITLE_SEPARATORS:
        if separator not in title:
            continue
        left, right = title.split(separator, 1)
        if len(left.strip()) > MULTI_WORK_MIN_LENGTH and len(right.strip()) > MULTI_WORK_MIN_LENGTH:
            return separator
    return None


@album_rule("2.3.18.3", "No combined tags", Severity.WARNING, 0.5)
def no_combined_tags(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """One artist per credit, one work per title, no numbering inside titles."""

    meta = no_combined_tags.meta

    suffix = DISC_SUFFIX_PATTERN.search(actual.title)
    if suffix is not None:
        before = actual.title[: suffix.start()].strip()
        meaningful = " - " in before or ": " in before or len(before) > MULTI_WORK_MIN_LENGTH
        if not meaningful:
            yield meta.issue(
                f"Album title '{actual.title}' ends with a disc number without a subtitle"
            )

    for artist in actual.album_artists:
        separator = combined_credit_separator(artist.name)
        if separator:
            yield meta.issue(
                f"Album artist '{artist.name}' combines several names with '{separator.strip()}'"
            )

    for track in actual.tracks:
        label = actual.track_label(track)
        for artist in track.artists:
            separator = combined_credit_separator(artist.name)
            if separator:
                yield meta.issue(
                    f"Track {label}: artist '{artist.name}' combines several names with "
                    f"'{separator.strip()}'; use one artist entry per name",
                    track.track,
                )

        if LEADING_NUMBER_PATTERN.match(track.title):
            yield meta.issue(
                f"Track {label}: title '{track.title}' starts with a track number",
                track.track,
            )

        separator = _multi_work_separator(track.title)
        if separator:
            yield meta.issue(
                f"Track {label}: title '{track.title}' may combine multiple works "
                f"(separator '{separator.strip()}')",
                track.track,
                Severity.INFO,
            )


@album_rule("2.3.18.3.3", "No disc numbers in album tag", Severity.WARNING, 0.5)
def no_disc_numbers_in_album(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = no_disc_numbers_in_album.meta
    match = DISC_NUMBER_PATTERN.search(actual.title)
    if match is None:
        return
    keyword = match.group(1).lower()
    if VOLUME_RANGE_PATTERN.search(actual.title):
        return
    if keyword.startswith("vol") and VOLUME_SERIES_PATTERN.search(actual.title):
        return
    yield meta.issue(
        f"Album title '{actual.title}' contains '{match.group(0)}'; "
        "disc numbers belong in the disc number tag"
    )


@album_rule("2.3.5", "No request markers", Severity.ERROR, 1.0)
def no_request_markers(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = no_request_markers.meta
    for label, text in (("Album title", actual.title), ("Folder name", actual.folder_name or "")):
        upper = text.upper()
        if REQUEST_MARKER in upper:
            yield meta.issue(f"{label} '{text}' contains the {REQUEST_MARKER} marker")
        for variant in REQUEST_VARIANTS:
            if variant in upper:
                yield meta.issue(
                    f"{label} '{text}' contains request marker '{variant}'",
                    severity=Severity.WARNING,
                )


@album_rule("2.3.2", "Folder name format", Severity.WARNING, 0.5)
def folder_name_format(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """``Artist - Album [Year] [Format]`` for the release folder."""

    meta = folder_name_format.meta
    folder = actual.folder_name
    if not folder:
        return

    if " - " not in folder:
        yield meta.issue(f"Folder name '{folder}' should separate artist and album with ' - '")

    year = FOLDER_YEAR_PATTERN.search(folder)
    if year is None:
        yield meta.issue(f"Folder name '{folder}' should include the year as [YYYY]")
    elif actual.original_year and int(year.group(1)) != actual.original_year:
        yield meta.issue(
            f"Year {year.group(1)} in folder name does not match album year {actual.original_year}"
        )

    if FORMAT_TAG_PATTERN.search(folder) is None:
        yield meta.issue(
            f"Folder name '{folder}' could include a format tag such as [FLAC]",
            severity=Severity.INFO,
        )


@album_rule("improvement.capitalization", "Capitalization improvement", Severity.INFO, 0.1)
def capitalization_improvement(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Flag releases whose titles are worse cased than the reference."""

    meta = capitalization_improvement.meta
    if reference is None:
        return

    def _count(album: Album) -> int:
        titles = [album.title, *(track.title for track in album.tracks)]
        return sum(1 for title in titles if letters_case_kind(title))

    found, expected = _count(actual), _count(reference)
    if found > expected:
        yield meta.issue(
            f"{found} titles are entirely upper- or lower-case against {expected} in the reference"
        )


RULES = (
    character_encoding,
    tag_capitalization,
    capitalization_vs_reference,
    no_combined_tags,
    no_disc_numbers_in_album,
)
SUPPLEMENTARY_RULES = (folder_name_format, no_request_markers, capitalization_improvement)

__all__ = [
    "CREDIT_SEPARATORS",
    "RULES",
    "SUPPLEMENTARY_RULES",
    "capitalization_improvement",
    "capitalization_vs_reference",
    "character_encoding",
    "combined_credit_separator",
    "folder_name_format",
    "no_combined_tags",
    "no_disc_numbers_in_album",
    "no_request_markers",
    "tag_capitalization",
]
