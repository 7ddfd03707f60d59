"""
Summary: Build an Album from the audio tags of a release directory using mutagen.
Why: Validate releases exactly as they sit on disk, auxiliary files included.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Final, final

from mutagen import File as MutagenFile
from mutagen import MutagenError

from classical_tagger.exceptions import AlbumLoadError
from classical_tagger.features.validation.domain.models import Album, Artist, Edition, Role, Track
from classical_tagger.platform.logging import logger

from ._tag_utils import leading_number, parse_slash_separated, parse_year, tag_values

AUDIO_EXTENSIONS: Final[frozenset[str]] = frozenset({".flac", ".mp3", ".m4a", ".ogg", ".opus"})

ENSEMBLE_HINTS: Final[re.Pattern[str]] = re.compile(
    r"\b(?:orchestr\w*|philharmoni\w*|symphon\w*|ensemble\w*|quartet\w*|quintet\w*|trio|"
    r"choir\w*|chor\w*|consort|sinfonia|camerata|kammer\w*|academy|players|singers)\b",
    re.IGNORECASE,
)


def infer_performer_role(name: str, conductors: set[str]) -> Role:
    """Classify a performer credit from an ``artist``/``performer`` tag."""

    if name in conductors:
        return Role.CONDUCTOR
    if ENSEMBLE_HINTS.search(name):
        return Role.ENSEMBLE
    return Role.SOLOIST


@dataclass(slots=True)
class FileTags:
    """Tag values read from one audio file, keyed by easy-tag name."""

    path: str
    values: dict[str, list[str]] = field(default_factory=dict)

    def first(self, *keys: str) -> str:
        for key in keys:
            found = self.values.get(key)
            if found:
                return found[0]
        return ""

    def all(self, key: str) -> list[str]:
        return list(self.values.get(key, []))


@final
class DirectoryTagReader:
    """Read every audio file below a release directory into an :class:`Album`."""

    TAG_KEYS: ClassVar[tuple[str, ...]] = (
        "title",
        "album",
        "albumartist",
        "artist",
        "performer",
        "composer",
        "conductor",
        "arranger",
        "tracknumber",
        "discnumber",
        "date",
        "originaldate",
        "label",
        "organization",
        "catalognumber",
    )

    def read(self, root: Path) -> Album:
        """Build an album from ``root``.

        Args:
            root: Release directory.

        Returns:
            Album: Tracks from audio files, other files as auxiliary paths.

        Raises:
            AlbumLoadError: If ``root`` is not a directory or holds no audio files.
        """
        if not root.is_dir():
            raise AlbumLoadError(f"Not a directory: {root}")

        tagged: list[FileTags] = []
        auxiliary: list[str] = []
        for path in sorted(p for p in root.rglob("*") if p.is_file()):
            relative = path.relative_to(root).as_posix()
            if path.suffix.lower() not in AUDIO_EXTENSIONS:
                logger.debug("Auxiliary file: %s", relative)
                auxiliary.append(relative)
                continue
            tagged.append(FileTags(relative, self._read_tags(path)))

        if not tagged:
            raise AlbumLoadError(f"No audio files found in {root}")

        tracks = [self._build_track(tags, index) for index, tags in enumerate(tagged, start=1)]
        first = tagged[0]
        logger.info("Read %d tracks and %d other files from %s", len(tracks), len(auxiliary), root)
        return Album(
            title=next((t.first("album") for t in tagged if t.first("album")), ""),
            original_year=self._original_year(first),
            edition=self._edition(first),
            folder_name=root.name,
            tracks=tuple(tracks),
            album_artists=tuple(self._album_artists(first)),
            files=tuple(auxiliary),
        )

    def _read_tags(self, path: Path) -> dict[str, list[str]]:
        try:
            audio = MutagenFile(path, easy=True)
        except MutagenError as exc:
            logger.warning("Unable to read tags from %s: %s", path, exc)
            return {}
        if audio is None or audio.tags is None:
            logger.warning("No readable tags in %s", path)
            return {}

        values: dict[str, list[str]] = {}
        for key in self.TAG_KEYS:
            found = tag_values(audio.tags.get(key))
            if found:
                values[key] = found
        logger.debug("Read %d tag keys from %s", len(values), path.name)
        return values

    def _build_track(self, tags: FileTags, index: int) -> Track:
        filename = tags.path.rsplit("/", 1)[-1]
        track_number, _ = parse_slash_separated(tags.first("tracknumber"))
        if track_number is None:
            track_number = leading_number(filename) or index
        disc_number, _ = parse_slash_separated(tags.first("discnumber"))

        return Track(
            disc=disc_number or 1,
            track=track_number,
            title=tags.first("title"),
            artists=tuple(self._track_artists(tags)),
            file_path=tags.path,
        )

    @staticmethod
    def _track_artists(tags: FileTags) -> list[Artist]:
        composers = tags.all("composer")
        conductors = set(tags.all("conductor"))
        credits: list[Artist] = [Artist(name, Role.COMPOSER) for name in composers]

        for name in [*tags.all("artist"), *tags.all("performer")]:
            if name in composers or name in conductors:
                continue
            credits.append(Artist(name, infer_performer_role(name, conductors)))
        credits.extend(Artist(name, Role.CONDUCTOR) for name in tags.all("conductor"))
        credits.extend(Artist(name, Role.ARRANGER) for name in tags.all("arranger"))
        return list(dict.fromkeys(credits))

    @staticmethod
    def _album_artists(tags: FileTags) -> list[Artist]:
        conductors = set(tags.all("conductor"))
        return [Artist(name, infer_performer_role(name, conductors)) for name in tags.all("albumartist")]

    @staticmethod
    def _original_year(tags: FileTags) -> int:
        return parse_year(tags.first("originaldate", "date")) or 0

    @staticmethod
    def _edition(tags: FileTags) -> Edition | None:
        label = tags.first("label", "organization")
        catalog_number = tags.first("catalognumber")
        release_year = parse_year(tags.first("date")) if tags.first("originaldate") else None
        if not (label or catalog_number or release_year):
            return None
        return Edition(label=label, catalog_number=catalog_number, year=release_year or 0)


__all__ = ["AUDIO_EXTENSIONS", "DirectoryTagReader", "FileTags", "infer_performer_role"]
