"""
Summary: Immutable value types describing a release, its tracks and the issues found in it.
Why: Give every rule the same read-only view of an album regardless of where it was loaded from.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

TrackKey = tuple[int, int]

ALBUM_SCOPE: Final[int] = 0
VARIOUS_ARTISTS: Final[str] = "various artists"


class Severity(str, Enum):
    """Issue severity, ordered from most to least serious."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Numeric weight where a larger value is more serious."""

        return _SEVERITY_RANK[self]

    def at_least(self, other: Severity) -> bool:
        """Return ``True`` when this severity is as serious as ``other`` or more."""

        return self.rank >= other.rank

    @staticmethod
    def from_user_input(value: str) -> Severity:
        """Translate raw CLI or config input into the matching severity."""

        normalized = value.strip().lower()
        for severity in Severity:
            if severity.value == normalized:
                return severity
        valid: Final[str] = ", ".join(s.value for s in Severity)
        msg = f"Unsupported severity '{value}'. Valid options: {valid}"
        raise ValueError(msg)


_SEVERITY_RANK: Final[Mapping[Severity, int]] = {
    Severity.ERROR: 3,
    Severity.WARNING: 2,
    Severity.INFO: 1,
}


class Role(str, Enum):
    """Credit role of an artist on a track."""

    COMPOSER = "composer"
    SOLOIST = "soloist"
    ENSEMBLE = "ensemble"
    CONDUCTOR = "conductor"
    ARRANGER = "arranger"
    UNKNOWN = "unknown"

    @property
    def is_performer(self) -> bool:
        """Composers and arrangers write the music; everyone else performs it."""

        return self not in (Role.COMPOSER, Role.ARRANGER)

    @staticmethod
    def parse(value: str | None) -> Role:
        """Parse a role name case-insensitively, falling back to ``UNKNOWN``."""

        if not value:
            return Role.UNKNOWN
        normalized = value.strip().lower()
        for role in Role:
            if role.value == normalized:
                return role
        return Role.UNKNOWN


@dataclass(frozen=True, slots=True)
class Artist:
    """A credited name with its role."""

    name: str
    role: Role = Role.UNKNOWN


@dataclass(frozen=True, slots=True)
class Edition:
    """Release-specific metadata. Each field is independently optional."""

    label: str = ""
    catalog_number: str = ""
    year: int = 0


@dataclass(frozen=True, slots=True)
class Track:
    """A single audio track keyed by ``(disc, track)`` within its album."""

    disc: int
    track: int
    title: str
    artists: tuple[Artist, ...] = ()
    file_path: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.artists, tuple):
            object.__setattr__(self, "artists", tuple(self.artists))

    @property
    def key(self) -> TrackKey:
        return (self.disc, self.track)

    @property
    def filename(self) -> str:
        """Final path segment of ``file_path`` or an empty string."""

        if not self.file_path:
            return ""
        return self.file_path.rsplit("/", 1)[-1]

    @property
    def folders(self) -> tuple[str, ...]:
        """Directory segments of ``file_path``, outermost first."""

        if not self.file_path:
            return ()
        return tuple(self.file_path.split("/")[:-1])

    def artists_with(self, *roles: Role) -> list[Artist]:
        """Artists whose role is one of ``roles``, in credit order."""

        return [artist for artist in self.artists if artist.role in roles]

    @property
    def composers(self) -> list[Artist]:
        return self.artists_with(Role.COMPOSER)

    @property
    def performers(self) -> list[Artist]:
        """Every non-composer, non-arranger credit (unknown roles included)."""

        return [artist for artist in self.artists if artist.role.is_performer]


@dataclass(frozen=True, slots=True)
class Album:
    """A titled release made of ordered tracks plus auxiliary files.

    ``tracks`` is coerced to a tuple and ``None`` entries are dropped so rules
    never have to guard against holes in the list.
    """

    title: str
    original_year: int = 0
    edition: Edition | None = None
    folder_name: str | None = None
    tracks: tuple[Track, ...] = ()
    album_artists: tuple[Artist, ...] = ()
    files: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "tracks", tuple(track for track in self.tracks if track is not None)
        )
        object.__setattr__(self, "album_artists", tuple(self.album_artists))
        object.__setattr__(self, "files", tuple(self.files))

    @property
    def max_disc(self) -> int:
        return max((track.disc for track in self.tracks), default=0)

    @property
    def is_multi_disc(self) -> bool:
        return self.max_disc > 1

    @property
    def root_name(self) -> str:
        """Name of the release folder, falling back to the album title."""

        return self.folder_name or self.title

    def track_map(self) -> dict[TrackKey, Track]:
        """Map ``(disc, track)`` to its track. The first occurrence wins."""

        mapping: dict[TrackKey, Track] = {}
        for track in self.tracks:
            _ = mapping.setdefault(track.key, track)
        return mapping

    def tracks_by_disc(self) -> dict[int, list[Track]]:
        """Group tracks per disc number, discs in ascending order."""

        grouped: dict[int, list[Track]] = {}
        for track in sorted(self.tracks, key=lambda t: t.key):
            grouped.setdefault(track.disc, []).append(track)
        return grouped

    def composer_counts(self) -> Counter[str]:
        """Count on how many tracks each composer name is credited."""

        counts: Counter[str] = Counter()
        for track in self.tracks:
            counts.update({artist.name for artist in track.composers})
        return counts

    def track_label(self, track: Track) -> str:
        """Human-readable location, ``disc-track`` on multi-disc releases."""

        if self.is_multi_disc:
            return f"{track.disc}-{track.track}"
        return str(track.track)

    @property
    def is_various_artists(self) -> bool:
        return any(
            artist.name.strip().lower() == VARIOUS_ARTISTS for artist in self.album_artists
        )


@dataclass(frozen=True, slots=True)
class Issue:
    """One finding. ``track`` is 0 for album-scoped issues."""

    severity: Severity
    track: int
    rule_id: str
    message: str

    @property
    def is_album_scope(self) -> bool:
        return self.track == ALBUM_SCOPE

    def __str__(self) -> str:
        location = "Album" if self.is_album_scope else f"Track {self.track}"
        return f"[{self.severity.value.upper()}] {location}: {self.rule_id} - {self.message}"


def iter_artist_names(album: Album) -> Iterable[tuple[int, Artist]]:
    """Yield ``(track_number, artist)`` for album artists then every track credit."""

    for artist in album.album_artists:
        yield ALBUM_SCOPE, artist
    for track in album.tracks:
        for artist in track.artists:
            yield track.track, artist


__all__ = [
    "ALBUM_SCOPE",
    "Album",
    "Artist",
    "Edition",
    "Issue",
    "Role",
    "Severity",
    "Track",
    "TrackKey",
    "VARIOUS_ARTISTS",
    "iter_artist_names",
]
