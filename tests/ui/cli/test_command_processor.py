"""Tests for CLI command dispatch and exit codes."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from classical_tagger.exceptions import AlbumLoadError
from classical_tagger.ui.cli.cli import CommandProcessor, main


@pytest.fixture(autouse=True)
def quiet_logger(mocker: MockerFixture) -> None:
    _ = mocker.patch("classical_tagger.ui.cli.args.parser.setup_logger")


def _descriptor(tmp_path: Path, album_title: str) -> Path:
    path = tmp_path / "album.json"
    data = {
        "title": album_title,
        "original_year": 1963,
        "edition": {"label": "Deutsche Grammophon", "catalog_number": "447 400-2"},
        "tracks": [
            {
                "title": "Symphony No. 5, Op. 67",
                "file_path": "01 - Symphony No. 5.flac",
                "artists": [
                    {"name": "Ludwig van Beethoven", "role": "composer"},
                    {"name": "Berlin Philharmonic", "role": "ensemble"},
                ],
            }
        ],
    }
    _ = path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_clean_album_returns_normally(tmp_path: Path) -> None:
    album = _descriptor(tmp_path, "Beethoven - Symphony No. 5 [1963]")

    CommandProcessor.process_command(["validate", str(album), "--quiet"])


def test_issue_at_fail_on_exits_one(tmp_path: Path) -> None:
    album = _descriptor(tmp_path, "BEETHOVEN - SYMPHONY NO. 5")

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["validate", str(album), "--quiet"])

    assert excinfo.value.code == 1


def test_fail_on_info_is_stricter(tmp_path: Path) -> None:
    album = _descriptor(tmp_path, "Beethoven - Symphony No. 5 [1963]")

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["validate", str(album), "--quiet", "--fail-on", "info"])

    assert excinfo.value.code == 1


def test_load_errors_exit_two(tmp_path: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch(
        "classical_tagger.ui.cli.commands.validate.load_album",
        side_effect=AlbumLoadError("Invalid JSON"),
    )
    album = _descriptor(tmp_path, "Album")

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["validate", str(album)])

    assert excinfo.value.code == 2


def test_keyboard_interrupt_exits_130(mocker: MockerFixture) -> None:
    _ = mocker.patch(
        "classical_tagger.ui.cli.cli.ArgumentParser.process_args", side_effect=KeyboardInterrupt
    )

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["rules"])

    assert excinfo.value.code == 130


def test_rules_command_dispatch(mocker: MockerFixture) -> None:
    execute = mocker.patch("classical_tagger.ui.cli.cli.RulesCommand.execute", return_value=[])

    CommandProcessor.process_command(["rules"])

    execute.assert_called_once()


def test_main_returns_zero(mocker: MockerFixture) -> None:
    process = mocker.patch("classical_tagger.ui.cli.cli.CommandProcessor.process_command")

    assert main() == 0
    process.assert_called_once_with()
