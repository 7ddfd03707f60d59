"""Tests for the validate and rules commands."""

from __future__ import annotations

import json
from pathlib import Path

from pytest_mock import MockerFixture

from classical_tagger.features.validation.domain.models import Severity
from classical_tagger.ui.cli.args.options import RulesArgs, ValidateArgs
from classical_tagger.ui.cli.commands import RulesCommand, ValidateCommand


def _pinned() -> int:
    return 2024


def _descriptor(tmp_path: Path, name: str, track_title: str) -> Path:
    path = tmp_path / name
    data = {
        "title": "Beethoven - Symphony No. 5 [1963]",
        "original_year": 1963,
        "tracks": [
            {
                "title": track_title,
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


def _args(album: Path, reference: Path | None = None, disabled: tuple[str, ...] = ()) -> ValidateArgs:
    return ValidateArgs(
        command="validate",
        album_path=album,
        reference_path=reference,
        min_severity=Severity.INFO,
        fail_on=Severity.ERROR,
        disabled_rules=disabled,
    )


def test_validate_command_runs_engine_and_displays(tmp_path: Path, mocker: MockerFixture) -> None:
    display = mocker.Mock()
    album = _descriptor(tmp_path, "album.json", "Symphony No. 5, Op. 67")

    result = ValidateCommand(_args(album), display=display, current_year=_pinned).execute()

    assert result.entity == "Beethoven - Symphony No. 5 [1963]"
    assert result.errors == 0
    display.show_report.assert_called_once_with(result, Severity.INFO, quiet=False)


def test_validate_command_compares_with_reference(tmp_path: Path, mocker: MockerFixture) -> None:
    album = _descriptor(tmp_path, "album.json", "Symphony No. 6, Op. 67")
    reference = _descriptor(tmp_path, "reference.json", "Symphony No. 5, Op. 67")

    result = ValidateCommand(_args(album, reference), display=mocker.Mock()).execute()

    assert "2.3.18.4" in [issue.rule_id for issue in result.issues]


def test_validate_command_skips_disabled_rules(tmp_path: Path, mocker: MockerFixture) -> None:
    warning = mocker.patch("classical_tagger.ui.cli.commands.validate.logger.warning")
    album = _descriptor(tmp_path, "album.json", "Symphony No. 5, Op. 67")

    command = ValidateCommand(_args(album, disabled=("2.3.1", "no.such.rule")), display=mocker.Mock())
    result = command.execute()

    assert result.result_for("2.3.1") is None
    assert result.result_for("2.3.3") is not None
    warning.assert_called_once_with("Cannot disable unknown rule '%s'", "no.such.rule")


def test_rules_command_lists_selected_rules(mocker: MockerFixture) -> None:
    display = mocker.Mock()

    rules = RulesCommand(RulesArgs(command="rules", disabled_rules=("classical.guest",)), display).execute()

    assert "classical.guest" not in [rule.meta.id for rule in rules]
    display.show_rules.assert_called_once_with(rules)
