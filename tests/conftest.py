"""Shared pytest fixtures for album builders and configuration isolation."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from classical_tagger.config.config import Config
from classical_tagger.config.paths import ENV_CONFIG_PATH
from classical_tagger.features.validation.domain.models import Album, Artist, Role, Track


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the config file at a temporary location and reset the singleton."""

    config_file = tmp_path / "config" / "config.toml"
    monkeypatch.setenv(ENV_CONFIG_PATH, str(config_file))
    Config.reset()
    yield config_file
    Config.reset()


@pytest.fixture
def beethoven_album() -> Album:
    """A clean single-track release used as the baseline for most rule tests."""

    return Album(
        title="Beethoven - Symphony No. 5 [1963]",
        original_year=1963,
        tracks=(
            Track(
                disc=1,
                track=1,
                title="Symphony No. 5, Op. 67",
                artists=(
                    Artist("Ludwig van Beethoven", Role.COMPOSER),
                    Artist("Berlin Philharmonic", Role.ENSEMBLE),
                ),
                file_path="01 - Symphony No. 5.flac",
            ),
        ),
    )
