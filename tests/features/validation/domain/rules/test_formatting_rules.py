"""Tests for encoding, capitalization, combined-credit and folder-name rules."""

from __future__ import annotations

import pytest

from classical_tagger.features.validation.domain.models import Album, Artist, Role, Severity, Track
from classical_tagger.features.validation.domain.rules.formatting import (
    capitalization_improvement,
    capitalization_vs_reference,
    character_encoding,
    combined_credit_separator,
    folder_name_format,
    no_combined_tags,
    no_disc_numbers_in_album,
    no_request_markers,
    tag_capitalization,
)


def _with_artist(name: str, role: Role = Role.SOLOIST) -> Album:
    return Album("Album", tracks=(Track(1, 1, "Sonata", (Artist(name, role),)),))


def test_character_encoding_flags_mojibake_and_control_chars() -> None:
    album = Album(
        "DvorÃ¡k",
        tracks=(Track(1, 1, "Largo\x00", (Artist("Dvořák", Role.COMPOSER),)),),
        files=("scans/�.jpg",),
    )

    result = character_encoding.evaluate(album)

    assert [issue.track for issue in result.issues] == [0, 1, 0]
    assert all(issue.severity is Severity.ERROR for issue in result.issues)


def test_all_caps_album_title_is_error() -> None:
    album = Album("BEETHOVEN: SYMPHONY NO. 5", tracks=(Track(1, 1, "Symphony No. 5"),))

    result = tag_capitalization.evaluate(album)

    assert len(result.issues) == 1
    assert "upper-case" in result.issues[0].message


def test_lower_case_artist_is_reported_on_its_track() -> None:
    result = tag_capitalization.evaluate(_with_artist("glenn gould"))

    assert [(issue.track, issue.severity) for issue in result.issues] == [(1, Severity.ERROR)]


def test_capitalization_vs_reference_only_on_case_difference() -> None:
    actual = Album("Symphony no. 5", tracks=(Track(1, 1, "allegro con brio"),))
    reference = Album("Symphony No. 5", tracks=(Track(1, 1, "Allegro con brio"),))

    result = capitalization_vs_reference.evaluate(actual, reference)

    assert [issue.track for issue in result.issues] == [0, 1]
    assert all(issue.severity is Severity.WARNING for issue in result.issues)


def test_capitalization_vs_reference_ignores_punctuation_only_changes() -> None:
    actual = Album("Symphony No 5")
    reference = Album("Symphony No. 5")

    assert capitalization_vs_reference.evaluate(actual, reference).passed


@pytest.mark.parametrize(
    ("name", "separator"),
    [
        ("Pollini; Arrau", ";"),
        ("Argerich & Kremer", " & "),
        ("Oistrakh / Richter", " / "),
        ("Pollini, Arrau", ", "),
    ],
)
def test_combined_credit_separator_detects_lists(name: str, separator: str) -> None:
    assert combined_credit_separator(name) == separator


@pytest.mark.parametrize(
    "name",
    [
        "London Symphony Orchestra and Chorus",
        "Bach, J.S.",
        "Martha Argerich, Gidon Kremer",
        "Emerson String Quartet",
        "Glenn Gould",
    ],
)
def test_combined_credit_separator_allows_single_credits(name: str) -> None:
    assert combined_credit_separator(name) is None


def test_no_combined_tags_flags_credits_and_numbered_titles() -> None:
    album = Album(
        "Album",
        album_artists=(Artist("Pollini; Arrau"),),
        tracks=(
            Track(1, 1, "01 - Prelude", (Artist("Pollini; Arrau", Role.SOLOIST),)),
            Track(1, 2, "Piano Sonata No. 2 / Piano Sonata No. 3"),
        ),
    )

    result = no_combined_tags.evaluate(album)

    assert [(issue.track, issue.severity) for issue in result.issues] == [
        (0, Severity.WARNING),
        (1, Severity.WARNING),
        (1, Severity.WARNING),
        (2, Severity.INFO),
    ]


def test_disc_suffix_without_subtitle_is_warning() -> None:
    assert not no_combined_tags.evaluate(Album("Requiem (Disc 2)")).passed
    assert no_combined_tags.evaluate(Album("Mahler - Symphony No. 2 (Disc 2)")).passed


@pytest.mark.parametrize(
    ("title", "passed"),
    [
        ("Goldberg Variations CD 2", False),
        ("Brahms Symphonies Vol. 2", False),
        ("Complete Works Vol. 2", True),
        ("Bach Cantatas Vol. 1-3", True),
        ("Goldberg Variations", True),
    ],
)
def test_disc_numbers_in_album_title(title: str, passed: bool) -> None:
    assert no_disc_numbers_in_album.evaluate(Album(title)).passed is passed


def test_request_markers() -> None:
    result = no_request_markers.evaluate(
        Album("[REQ] Mahler 9", folder_name="Mahler 9 (request)")
    )

    assert [issue.severity for issue in result.issues] == [Severity.ERROR, Severity.WARNING]


def test_folder_name_format() -> None:
    good = Album("Album", original_year=1963, folder_name="Karajan - Beethoven 5 [1963] [FLAC]")
    assert folder_name_format.evaluate(good).passed

    result = folder_name_format.evaluate(
        Album("Album", original_year=1963, folder_name="Beethoven 5 (1962)")
    )
    assert [issue.severity for issue in result.issues] == [
        Severity.WARNING,
        Severity.WARNING,
        Severity.INFO,
    ]


def test_folder_name_format_skips_missing_folder() -> None:
    assert folder_name_format.evaluate(Album("Album")).passed


def test_capitalization_improvement_compares_with_reference() -> None:
    actual = Album("ALBUM", tracks=(Track(1, 1, "PRELUDE"),))
    reference = Album("Album", tracks=(Track(1, 1, "Prelude"),))

    result = capitalization_improvement.evaluate(actual, reference)

    assert [issue.severity for issue in result.issues] == [Severity.INFO]
    assert capitalization_improvement.evaluate(reference, actual).passed
    assert capitalization_improvement.evaluate(actual).passed
