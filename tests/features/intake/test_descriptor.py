"""Tests for the JSON album descriptor loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from classical_tagger.exceptions import AlbumLoadError
from classical_tagger.features.intake import DescriptorLoader
from classical_tagger.features.validation.domain.models import Edition, Role


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "album.json"
    _ = path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_full_descriptor(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {
            "title": "Beethoven - Symphony No. 5 [1963]",
            "original_year": "1963",
            "folder_name": "Karajan - Beethoven 5 [1963] [FLAC]",
            "edition": {"label": "Deutsche Grammophon", "catalog_number": "447 400-2", "year": 1995},
            "album_artist": [{"name": "Berliner Philharmoniker", "role": "Ensemble"}],
            "files": ["booklet.pdf"],
            "tracks": [
                {
                    "disc": 1,
                    "track": 1,
                    "title": "Symphony No. 5, Op. 67",
                    "file_path": "01 - Symphony No. 5.flac",
                    "artists": [
                        {"name": "Ludwig van Beethoven", "role": "composer"},
                        {"name": "Herbert von Karajan", "role": "conductor"},
                    ],
                }
            ],
        },
    )

    album = DescriptorLoader().load(path)

    assert album.original_year == 1963
    assert album.edition == Edition("Deutsche Grammophon", "447 400-2", 1995)
    assert album.album_artists[0].role is Role.ENSEMBLE
    assert album.files == ("booklet.pdf",)
    track = album.tracks[0]
    assert track.key == (1, 1)
    assert [a.role for a in track.artists] == [Role.COMPOSER, Role.CONDUCTOR]
    assert track.file_path == "01 - Symphony No. 5.flac"


def test_defaults_for_sparse_tracks() -> None:
    album = DescriptorLoader().parse(
        {"title": "Album", "tracks": [{"title": "a", "name": "x.flac"}, {"title": "b"}]}
    )

    assert album.edition is None
    assert album.folder_name is None
    assert [t.key for t in album.tracks] == [(1, 1), (1, 2)]
    assert album.tracks[0].file_path == "x.flac"
    assert album.tracks[1].file_path is None


def test_unknown_role_is_kept_as_unknown() -> None:
    album = DescriptorLoader().parse(
        {"title": "A", "tracks": [{"title": "t", "artists": [{"name": "X", "role": "producer"}]}]}
    )

    assert album.tracks[0].artists[0].role is Role.UNKNOWN


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ([], "album must be a JSON object"),
        ({"tracks": "01.flac"}, "album.tracks must be a JSON array"),
        ({"tracks": [{"track": "two"}]}, "album.tracks[0].track must be an integer"),
        ({"edition": "DG"}, "album.edition must be a JSON object"),
    ],
)
def test_malformed_descriptors(data: object, message: str) -> None:
    with pytest.raises(AlbumLoadError) as excinfo:
        _ = DescriptorLoader().parse(data)

    assert message in str(excinfo.value)


def test_invalid_json_and_missing_file(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    _ = broken.write_text("{not json", encoding="utf-8")

    with pytest.raises(AlbumLoadError, match="Invalid JSON"):
        _ = DescriptorLoader().load(broken)
    with pytest.raises(AlbumLoadError, match="Cannot read"):
        _ = DescriptorLoader().load(tmp_path / "missing.json")
