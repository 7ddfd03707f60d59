"""
Summary: Artist-credit rules covering album artist, performer order, arrangers, guests and catalogue numbers.
Why: Classical credits distinguish composer, performers and arrangers in ways generic taggers ignore.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from collections.abc import Iterator
from typing import Final

from ..models import Album, Issue, Role, Severity, Track
from ..names import base_surname, contains_phrase, contains_word, names_overlap
from ..rule import album_rule, track_rule
from ..text import catalogue_token

PERFORMER_ORDER: Final[dict[Role, int]] = {
    Role.SOLOIST: 0,
    Role.ENSEMBLE: 1,
    Role.CONDUCTOR: 2,
}
ARRANGEMENT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\barr\.|\barranged\b|\btranscription\b|\btranscribed\b", re.IGNORECASE
)
GUEST_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\bfeat\.|\bfeaturing\b|\bwith\b|\bguest\b", re.IGNORECASE
)
GUEST_MIN_TRACKS: Final[int] = 3
KNOWN_CATALOGUE_COMPOSERS: Final[tuple[str, ...]] = (
    "beethoven",
    "mozart",
    "bach",
    "schubert",
    "haydn",
    "vivaldi",
    "handel",
    "telemann",
    "brahms",
    "chopin",
    "liszt",
    "schumann",
    "mendelssohn",
    "dvorak",
)


@album_rule("2.3.7-present", "Album artist tag", Severity.INFO, 0.1)
def album_artist_tag(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Check a set album artist against the tracks, or suggest one when unset."""

    meta = album_artist_tag.meta
    tracks = actual.tracks
    if not tracks:
        return

    if actual.album_artists:
        if actual.is_various_artists:
            return
        for artist in actual.album_artists:
            credited = any(
                names_overlap(artist.name, credit.name)
                for track in tracks
                for credit in track.artists
            )
            if not credited:
                yield meta.issue(
                    f"Album artist '{artist.name}' does not appear in any track's artists",
                    severity=Severity.ERROR,
                )
        return

    if contains_phrase(actual.title, "various artists"):
        yield meta.issue("Album title mentions Various Artists; set the album artist tag to match")
        return

    if len(tracks) == 1:
        track = tracks[0]
        leaders = track.artists_with(Role.ENSEMBLE, Role.CONDUCTOR)
        if leaders and not track.artists_with(Role.SOLOIST):
            names = ", ".join(artist.name for artist in leaders)
            yield meta.issue(f"Album artist tag is not set; consider '{names}'")
        return

    appearances: Counter[str] = Counter()
    for track in tracks:
        appearances.update({artist.name for artist in track.performers})
    if appearances:
        name, count = max(appearances.items(), key=lambda item: item[1])
        if count * 2 > len(tracks):
            yield meta.issue(
                f"Album artist tag is not set; '{name}' performs on {count} of {len(tracks)} tracks"
            )
            return

    composers = len(actual.composer_counts())
    if composers > 1:
        yield meta.issue(
            f"Album artist tag is not set on a release with {composers} composers and no "
            "dominant performer; consider 'Various Artists'"
        )


@track_rule("2.3.7-format", "Artist field format", Severity.WARNING, 0.5)
def artist_field_format(
    track: Track, reference_track: Track | None, actual: Album, reference: Album | None
) -> Iterator[Issue]:
    meta = artist_field_format.meta
    if not track.artists:
        return
    label = actual.track_label(track)
    performers = track.performers
    if not performers:
        names = ", ".join(artist.name for artist in track.artists)
        yield meta.issue(
            f"Track {label}: artist field lists only '{names}'; credit the performers",
            track.track,
        )

    if reference_track is not None and reference_track.artists:
        expected = len(reference_track.performers)
        if expected != len(performers):
            yield meta.issue(
                f"Track {label}: {len(performers)} performers credited, reference credits {expected}",
                track.track,
                Severity.INFO,
            )


@album_rule("classical.artist_name", "Performer order", Severity.WARNING, 0.5)
def performer_order(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Performers are credited as soloist(s), ensemble(s), conductor."""

    meta = performer_order.meta
    for track in actual.tracks:
        if not track.artists:
            continue
        label = actual.track_label(track)
        if not track.performers:
            yield meta.issue(
                f"Track {label}: no performers credited (soloist, ensemble or conductor)",
                track.track,
                Severity.ERROR,
            )
            continue
        ordered = [a for a in track.artists if a.role in PERFORMER_ORDER]
        recommended = sorted(ordered, key=lambda a: PERFORMER_ORDER[a.role])
        if ordered != recommended:
            names = ", ".join(artist.name for artist in recommended)
            yield meta.issue(
                f"Track {label}: recommended artist format is: {names}",
                track.track,
                Severity.INFO,
            )


@track_rule("classical.arrangement", "Arranger credit", Severity.INFO, 0.1)
def arranger_credit(
    track: Track, reference_track: Track | None, actual: Album, reference: Album | None
) -> Iterator[Issue]:
    meta = arranger_credit.meta
    arrangers = track.artists_with(Role.ARRANGER)
    if not arrangers:
        return
    surname = base_surname(arrangers[0].name)
    label = actual.track_label(track)
    if ARRANGEMENT_PATTERN.search(track.title) is None:
        yield meta.issue(
            f"Track {label}: title should credit the arrangement, e.g. '(arr. {surname})'",
            track.track,
        )
    elif surname and not contains_word(track.title, surname):
        yield meta.issue(
            f"Track {label}: arrangement credit should name the arranger '{surname}'",
            track.track,
        )


@album_rule("classical.guest", "Guest artist identification", Severity.INFO, 0.1)
def guest_artists(actual: Album, reference: Album | None) -> Iterator[Issue]:
    """Soloists or conductors on few tracks should be marked as guests."""

    meta = guest_artists.meta
    total = len(actual.tracks)
    if total <= GUEST_MIN_TRACKS:
        return
    threshold = math.ceil(total / 3)

    appearances: dict[str, list[Track]] = {}
    for track in actual.tracks:
        names = dict.fromkeys(
            artist.name for artist in track.artists_with(Role.SOLOIST, Role.CONDUCTOR)
        )
        for name in names:
            appearances.setdefault(name, []).append(track)

    for name, tracks in appearances.items():
        if len(tracks) >= threshold:
            continue
        if any(GUEST_PATTERN.search(track.title) for track in tracks):
            continue
        yield meta.issue(
            f"'{name}' appears on {len(tracks)} of {total} tracks; consider marking as a guest "
            f"(e.g. 'feat. {name}')"
        )


def _has_known_catalogue(track: Track) -> str | None:
    for composer in track.composers:
        for known in KNOWN_CATALOGUE_COMPOSERS:
            if contains_word(composer.name, known):
                return composer.name
    return None


@track_rule("classical.opus", "Opus/catalogue numbers", Severity.INFO, 0.1)
def catalogue_numbers(
    track: Track, reference_track: Track | None, actual: Album, reference: Album | None
) -> Iterator[Issue]:
    meta = catalogue_numbers.meta
    label = actual.track_label(track)
    token = catalogue_token(track.title)
    expected = catalogue_token(reference_track.title) if reference_track is not None else None

    if expected is not None:
        if token is None:
            yield meta.issue(
                f"Track {label}: title has no catalogue number; reference has '{expected}'",
                track.track,
            )
        elif token != expected:
            yield meta.issue(
                f"Track {label}: catalogue number '{token}' differs from reference '{expected}'",
                track.track,
            )
        return

    if token is None:
        composer = _has_known_catalogue(track)
        if composer:
            yield meta.issue(
                f"Track {label}: title should include a catalogue number "
                f"(Op., BWV, K., ...) for works by {composer}",
                track.track,
            )


RULES = (
    album_artist_tag,
    artist_field_format,
    performer_order,
    arranger_credit,
    guest_artists,
    catalogue_numbers,
)

__all__ = [
    "KNOWN_CATALOGUE_COMPOSERS",
    "RULES",
    "album_artist_tag",
    "arranger_credit",
    "artist_field_format",
    "catalogue_numbers",
    "guest_artists",
    "performer_order",
]
