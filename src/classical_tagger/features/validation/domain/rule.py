"""
Summary: Rule metadata, results and the album/track rule records the registry installs.
Why: Every rule exposes the same shape so the dispatcher can run them without inspection.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import final

from .models import ALBUM_SCOPE, Album, Issue, Severity, Track

AlbumCheck = Callable[[Album, Album | None], Iterable[Issue]]
TrackCheck = Callable[[Track, Track | None, Album, Album | None], Iterable[Issue]]


@final
@dataclass(frozen=True, slots=True)
class RuleMetadata:
    """Stable identity of a rule.

    Attributes:
        id: Stable rule identifier such as ``2.3.1`` or ``classical.opus``.
        name: Human-readable rule name.
        severity: Default severity of the issues the rule emits.
        weight: Contribution to the score, in ``(0, 1]``.
    """

    id: str
    name: str
    severity: Severity
    weight: float

    def issue(
        self,
        message: str,
        track: int = ALBUM_SCOPE,
        severity: Severity | None = None,
    ) -> Issue:
        """Build an issue attributed to this rule.

        Args:
            message: Single-line human-readable message.
            track: Track number, or 0 for the album.
            severity: Computed severity; defaults to the metadata severity.

        Returns:
            Issue: The new issue.
        """
        return Issue(
            severity=severity or self.severity,
            track=track,
            rule_id=self.id,
            message=message,
        )


@final
@dataclass(frozen=True, slots=True)
class RuleResult:
    """Issues produced by one rule over one check."""

    meta: RuleMetadata
    issues: tuple[Issue, ...] = ()

    @property
    def passed(self) -> bool:
        return not self.issues


@final
@dataclass(frozen=True, slots=True)
class AlbumRule:
    """Rule invoked once per check with the actual and optional reference album."""

    meta: RuleMetadata
    check: AlbumCheck

    def evaluate(self, actual: Album | None, reference: Album | None = None) -> RuleResult:
        if actual is None:
            return RuleResult(self.meta)
        return RuleResult(self.meta, tuple(self.check(actual, reference)))


@final
@dataclass(frozen=True, slots=True)
class TrackRule:
    """Rule invoked once per actual track, paired with its reference track."""

    meta: RuleMetadata
    check: TrackCheck

    def evaluate(
        self,
        track: Track | None,
        reference_track: Track | None,
        actual: Album,
        reference: Album | None = None,
    ) -> RuleResult:
        if track is None:
            return RuleResult(self.meta)
        return RuleResult(
            self.meta, tuple(self.check(track, reference_track, actual, reference))
        )


Rule = AlbumRule | TrackRule


def album_rule(
    rule_id: str, name: str, severity: Severity, weight: float
) -> Callable[[AlbumCheck], AlbumRule]:
    """Decorate a check function into an :class:`AlbumRule`."""

    def decorator(func: AlbumCheck) -> AlbumRule:
        return AlbumRule(RuleMetadata(rule_id, name, severity, weight), func)

    return decorator


def track_rule(
    rule_id: str, name: str, severity: Severity, weight: float
) -> Callable[[TrackCheck], TrackRule]:
    """Decorate a check function into a :class:`TrackRule`."""

    def decorator(func: TrackCheck) -> TrackRule:
        return TrackRule(RuleMetadata(rule_id, name, severity, weight), func)

    return decorator


__all__ = [
    "AlbumCheck",
    "AlbumRule",
    "Rule",
    "RuleMetadata",
    "RuleResult",
    "TrackCheck",
    "TrackRule",
    "album_rule",
    "track_rule",
]
