"""
Summary: Load albums from JSON descriptors (reference releases, fixtures, scraper output).
Why: Any source that produces the album shape can be checked, so the format stays small.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, final

from classical_tagger.exceptions import AlbumLoadError
from classical_tagger.features.validation.domain.models import Album, Artist, Edition, Role, Track
from classical_tagger.platform.logging import logger


def _require_mapping(value: object, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise AlbumLoadError(f"{where} must be a JSON object")
    return value


def _optional_list(data: Mapping[str, Any], key: str, where: str) -> Sequence[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise AlbumLoadError(f"{where}.{key} must be a JSON array")
    return value


def _int(value: object, where: str, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)  # pyright: ignore[reportArgumentType]
    except (TypeError, ValueError) as e:
        raise AlbumLoadError(f"{where} must be an integer, got {value!r}") from e


@final
class DescriptorLoader:
    """Parse the JSON album descriptor format.

    Layout::

        {
          "title": "...", "original_year": 1963, "folder_name": "...",
          "edition": {"label": "...", "catalog_number": "...", "year": 2002},
          "album_artist": [{"name": "...", "role": "ensemble"}],
          "files": ["booklet.pdf"],
          "tracks": [{"disc": 1, "track": 1, "title": "...", "file_path": "01 - x.flac",
                      "artists": [{"name": "...", "role": "composer"}]}]
        }
    """

    def load(self, path: Path) -> Album:
        """Read and parse a descriptor file.

        Raises:
            AlbumLoadError: On unreadable files, invalid JSON or a malformed shape.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            logger.error("Failed to read descriptor %s: %s", path, e)
            raise AlbumLoadError(f"Cannot read {path}: {e}") from e
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in %s: %s", path, e)
            raise AlbumLoadError(f"Invalid JSON in {path}: {e}") from e

        album = self.parse(data)
        logger.debug("Loaded descriptor %s with %d tracks", path, len(album.tracks))
        return album

    def parse(self, data: object) -> Album:
        """Convert decoded JSON into an :class:`Album`."""

        root = _require_mapping(data, "album")
        edition_data = root.get("edition")
        edition = None
        if edition_data is not None:
            fields = _require_mapping(edition_data, "album.edition")
            edition = Edition(
                label=str(fields.get("label") or ""),
                catalog_number=str(fields.get("catalog_number") or ""),
                year=_int(fields.get("year"), "album.edition.year"),
            )

        tracks = [
            self._parse_track(item, index)
            for index, item in enumerate(_optional_list(root, "tracks", "album"))
        ]
        folder_name = root.get("folder_name")
        return Album(
            title=str(root.get("title") or ""),
            original_year=_int(root.get("original_year"), "album.original_year"),
            edition=edition,
            folder_name=str(folder_name) if folder_name else None,
            tracks=tuple(tracks),
            album_artists=tuple(
                self._parse_artist(item, f"album.album_artist[{i}]")
                for i, item in enumerate(_optional_list(root, "album_artist", "album"))
            ),
            files=tuple(str(item) for item in _optional_list(root, "files", "album")),
        )

    def _parse_track(self, item: object, index: int) -> Track:
        where = f"album.tracks[{index}]"
        data = _require_mapping(item, where)
        file_path = data.get("file_path") or data.get("name")
        return Track(
            disc=_int(data.get("disc"), f"{where}.disc", default=1),
            track=_int(data.get("track"), f"{where}.track", default=index + 1),
            title=str(data.get("title") or ""),
            artists=tuple(
                self._parse_artist(artist, f"{where}.artists[{i}]")
                for i, artist in enumerate(_optional_list(data, "artists", where))
            ),
            file_path=str(file_path) if file_path else None,
        )

    @staticmethod
    def _parse_artist(item: object, where: str) -> Artist:
        data = _require_mapping(item, where)
        raw_role = data.get("role")
        role = Role.parse(str(raw_role) if raw_role is not None else None)
        if raw_role and role is Role.UNKNOWN and str(raw_role).strip().lower() != Role.UNKNOWN.value:
            logger.warning("Unknown role '%s' at %s; treating as unknown", raw_role, where)
        return Artist(name=str(data.get("name") or ""), role=role)


__all__ = ["DescriptorLoader"]
