"""
Summary: Filesystem-shape rules over track and auxiliary file paths.
Why: Archive files, stray folders and unsortable disc folders break downstream players and trackers.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Final

from ..models import ALBUM_SCOPE, Album, Issue, Severity, Track
from ..names import base_surname
from ..paths import archive_extension, disc_folder_digits, is_disc_folder, path_segments
from ..rule import album_rule, track_rule
from ..text import starts_with_whitespace

MAX_PATH_LENGTH: Final[int] = 180
# "Beethoven - 01 - Allegro.flac"
NAME_BEFORE_NUMBER: Final[re.Pattern[str]] = re.compile(r"^([^0-9]+?)\s*-\s*\d+")


def _release_paths(album: Album) -> Iterator[tuple[int, str]]:
    """Yield ``(track_number, path)`` for tracks then auxiliary files (track 0)."""

    for track in album.tracks:
        if track.file_path:
            yield track.track, track.file_path
    for path in album.files:
        yield ALBUM_SCOPE, path


@album_rule("2.3.1", "No archive files", Severity.ERROR, 1.0)
def no_archive_files(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = no_archive_files.meta
    for track_number, path in _release_paths(actual):
        extension = archive_extension(path)
        if extension is not None:
            yield meta.issue(
                f"Archive file '{path}' ({extension}) is not allowed; extract its contents",
                track_number,
            )


@album_rule("2.3.3", "No unnecessary nested folders", Severity.ERROR, 1.0)
def no_nested_folders(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Single-disc releases are flat; multi-disc releases allow one disc folder."""

    meta = no_nested_folders.meta
    multi_disc = actual.is_multi_disc
    for track in actual.tracks:
        folders = track.folders
        if not folders:
            continue
        label = actual.track_label(track)
        if not multi_disc:
            yield meta.issue(
                f"Track {label}: '{track.file_path}' sits in a sub-folder; "
                "single-disc releases must keep files at the top level",
                track.track,
            )
        elif len(folders) > 1:
            yield meta.issue(
                f"Track {label}: '{track.file_path}' is nested {len(folders)} folders deep; "
                "only one disc folder is allowed",
                track.track,
            )
        elif not is_disc_folder(folders[0]):
            yield meta.issue(
                f"Track {label}: folder '{folders[0]}' is not a disc folder "
                "(expected CD1, Disc1, Disk1 or DVD1)",
                track.track,
            )


@album_rule("2.3.19", "Multi-disc folder sorting", Severity.INFO, 0.1)
def disc_folder_sorting(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = disc_folder_sorting.meta
    if actual.max_disc < 10:
        return

    reported: set[str] = set()
    for track in actual.tracks:
        if track.disc >= 10 or not track.folders:
            continue
        folder = track.folders[0]
        digits = disc_folder_digits(folder)
        if not digits or len(digits) > 1 or folder in reported:
            continue
        reported.add(folder)
        padded = folder[: len(folder) - len(digits)] + digits.zfill(2)
        yield meta.issue(
            f"Disc folder '{folder}' should be zero-padded as '{padded}' "
            f"so it sorts before disc {actual.max_disc}",
        )


@album_rule("2.3.20", "No leading spaces", Severity.ERROR, 1.0)
def no_leading_spaces(actual: Album, reference: Album | None) -> Iterator[Issue]:
    meta = no_leading_spaces.meta

    if starts_with_whitespace(actual.title):
        yield meta.issue(f"Album title '{actual.title}' starts with whitespace")
    if starts_with_whitespace(actual.folder_name):
        yield meta.issue(f"Folder name '{actual.folder_name}' starts with whitespace")
    for artist in actual.album_artists:
        if starts_with_whitespace(artist.name):
            yield meta.issue(f"Album artist '{artist.name}' starts with whitespace")

    for track in actual.tracks:
        label = actual.track_label(track)
        if track.file_path:
            segments = track.file_path.split("/")
            for index, segment in enumerate(segments):
                if starts_with_whitespace(segment):
                    kind = "filename" if index == len(segments) - 1 else "folder name"
                    yield meta.issue(
                        f"Track {label}: {kind} '{segment}' starts with whitespace",
                        track.track,
                    )
        if starts_with_whitespace(track.title):
            yield meta.issue(f"Track {label}: title '{track.title}' starts with whitespace", track.track)
        for artist in track.artists:
            if starts_with_whitespace(artist.name):
                yield meta.issue(
                    f"Track {label}: artist '{artist.name}' starts with whitespace", track.track
                )

    for path in actual.files:
        for segment in path_segments(path):
            if starts_with_whitespace(segment):
                yield meta.issue(f"File '{path}': '{segment}' starts with whitespace")


@album_rule("2.3.12", "Path length", Severity.ERROR, 1.0)
def path_length(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """The release folder plus the relative path must fit in 180 characters."""

    meta = path_length.meta
    root = actual.root_name
    for track_number, path in _release_paths(actual):
        full_path = f"{root}/{path}"
        if len(full_path) > MAX_PATH_LENGTH:
            yield meta.issue(
                f"Path '{full_path}' is {len(full_path)} characters long "
                f"(maximum {MAX_PATH_LENGTH})",
                track_number,
            )


@album_rule("2.3.14", "Filenames sort into playback order", Severity.ERROR, 1.0)
def filename_sort_order(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Per disc, sorting the paths must give track order. Only the first mismatch is reported."""

    meta = filename_sort_order.meta
    for disc, tracks in actual.tracks_by_disc().items():
        named = [track for track in tracks if track.file_path]
        if len(named) <= 1:
            continue
        by_name = sorted(named, key=lambda track: track.file_path or "")
        for position, (found, expected) in enumerate(zip(by_name, named), start=1):
            if found is expected:
                continue
            yield meta.issue(
                f"Disc {disc}: filename sorting differs at position {position}: got "
                f"'{found.file_path}' (track {found.track}), expected '{expected.file_path}' "
                f"(track {expected.track})",
                expected.track,
            )
            return


@track_rule("2.3.14.1", "Artist name after track number in filename", Severity.ERROR, 1.0)
def artist_position_in_filename(
    track: Track, reference_track: Track | None, actual: Album, reference: Album | None
) -> Iterator[Issue]:
    """On multi-composer releases a credited name may only follow the track number."""

    meta = artist_position_in_filename.meta
    filename = track.filename
    if not filename or len(actual.composer_counts()) <= 1:
        return
    match = NAME_BEFORE_NUMBER.match(filename)
    if match is None:
        return
    prefix = match.group(1).lower()
    for artist in track.artists:
        name = artist.name.strip().lower()
        surname = base_surname(artist.name).lower()
        if (name and name in prefix) or (surname and surname in prefix):
            yield meta.issue(
                f"Track {actual.track_label(track)}: artist name appears before the track number "
                f"in filename '{filename}' (expected '01 - Artist - Title.flac')",
                track.track,
            )
            return


RULES = (no_archive_files, no_nested_folders, disc_folder_sorting, no_leading_spaces)
SUPPLEMENTARY_RULES = (path_length, filename_sort_order, artist_position_in_filename)

__all__ = [
    "MAX_PATH_LENGTH",
    "NAME_BEFORE_NUMBER",
    "RULES",
    "SUPPLEMENTARY_RULES",
    "artist_position_in_filename",
    "disc_folder_sorting",
    "filename_sort_order",
    "no_archive_files",
    "no_leading_spaces",
    "no_nested_folders",
    "path_length",
]
