"""
Summary: Tests for building albums from mutagen tags in a release directory.
Why: Directory intake must map easy-tag keys onto roles without touching real audio.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from mutagen import MutagenError
from pytest_mock import MockerFixture

from classical_tagger.exceptions import AlbumLoadError
from classical_tagger.features.intake import DirectoryTagReader
from classical_tagger.features.intake.usecases.extraction.tag_reader import infer_performer_role
from classical_tagger.features.validation.domain.models import Artist, Role

READER_MODULE = "classical_tagger.features.intake.usecases.extraction.tag_reader"


class _FakeAudio:
    def __init__(self, tags: dict[str, list[str]] | None) -> None:
        self.tags = tags


def _release(tmp_path: Path, *names: str) -> Path:
    root = tmp_path / "Kleiber - Beethoven 5 & 7 [1975] [FLAC]"
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
    return root


def _patch_tags(mocker: MockerFixture, by_name: dict[str, Any]) -> None:
    def fake_file(path: Path, easy: bool = False) -> object:
        value = by_name.get(Path(path).name)
        if isinstance(value, Exception):
            raise value
        return value

    _ = mocker.patch(f"{READER_MODULE}.MutagenFile", side_effect=fake_file)


def test_infer_performer_role() -> None:
    assert infer_performer_role("Carlos Kleiber", {"Carlos Kleiber"}) is Role.CONDUCTOR
    assert infer_performer_role("Wiener Philharmoniker", set()) is Role.ENSEMBLE
    assert infer_performer_role("Alban Berg Quartett", set()) is Role.ENSEMBLE
    assert infer_performer_role("Martha Argerich", set()) is Role.SOLOIST


def test_read_builds_album_from_tags(tmp_path: Path, mocker: MockerFixture) -> None:
    root = _release(tmp_path, "01 - Allegro con brio.flac", "02 - Andante.flac", "Scans/cover.jpg")
    common = {
        "album": ["Beethoven - Symphony No. 5"],
        "albumartist": ["Wiener Philharmoniker"],
        "composer": ["Ludwig van Beethoven"],
        "artist": ["Wiener Philharmoniker", "Carlos Kleiber"],
        "conductor": ["Carlos Kleiber"],
        "originaldate": ["1975-03-01"],
        "date": ["1995"],
        "label": ["Deutsche Grammophon"],
        "catalognumber": ["447 400-2"],
    }
    _patch_tags(
        mocker,
        {
            "01 - Allegro con brio.flac": _FakeAudio({**common, "title": ["Allegro con brio"], "tracknumber": ["1/2"], "discnumber": ["1/1"]}),
            "02 - Andante.flac": _FakeAudio({**common, "title": ["Andante con moto"]}),
        },
    )

    album = DirectoryTagReader().read(root)

    assert album.title == "Beethoven - Symphony No. 5"
    assert album.folder_name == root.name
    assert album.original_year == 1975
    assert album.edition is not None
    assert (album.edition.label, album.edition.catalog_number, album.edition.year) == (
        "Deutsche Grammophon",
        "447 400-2",
        1995,
    )
    assert album.files == ("Scans/cover.jpg",)
    assert [t.key for t in album.tracks] == [(1, 1), (1, 2)]
    assert album.tracks[0].artists == (
        Artist("Ludwig van Beethoven", Role.COMPOSER),
        Artist("Wiener Philharmoniker", Role.ENSEMBLE),
        Artist("Carlos Kleiber", Role.CONDUCTOR),
    )
    assert album.album_artists == (Artist("Wiener Philharmoniker", Role.ENSEMBLE),)


def test_unreadable_files_become_untagged_tracks(tmp_path: Path, mocker: MockerFixture) -> None:
    root = _release(tmp_path, "01 - a.mp3", "02 - b.flac")
    _patch_tags(mocker, {"01 - a.mp3": MutagenError("corrupt"), "02 - b.flac": _FakeAudio(None)})

    album = DirectoryTagReader().read(root)

    assert [(t.track, t.title, t.artists) for t in album.tracks] == [(1, "", ()), (2, "", ())]
    assert album.title == ""
    assert album.edition is None


def test_nested_disc_folders_keep_relative_paths(tmp_path: Path, mocker: MockerFixture) -> None:
    root = _release(tmp_path, "CD1/01 - a.flac", "CD2/01 - b.flac")
    _patch_tags(
        mocker,
        {
            "01 - a.flac": _FakeAudio({"discnumber": ["1"], "tracknumber": ["1"]}),
            "01 - b.flac": _FakeAudio({"discnumber": ["2"], "tracknumber": ["1"]}),
        },
    )

    album = DirectoryTagReader().read(root)

    assert [(t.key, t.file_path) for t in album.tracks] == [
        ((1, 1), "CD1/01 - a.flac"),
        ((2, 1), "CD2/01 - b.flac"),
    ]


def test_directory_without_audio_is_rejected(tmp_path: Path) -> None:
    root = _release(tmp_path, "cover.jpg")

    with pytest.raises(AlbumLoadError, match="No audio files"):
        _ = DirectoryTagReader().read(root)
    with pytest.raises(AlbumLoadError, match="Not a directory"):
        _ = DirectoryTagReader().read(root / "cover.jpg")
