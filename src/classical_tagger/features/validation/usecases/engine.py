"""
Summary: Dispatcher that runs album rules, then track rules per paired track.
Why: Centralize ordering and (disc, track) pairing so every rule stays a pure function.
"""

from __future__ import annotations

import time
from typing import final

from classical_tagger.features.validation.domain.models import Album, Issue
from classical_tagger.features.validation.domain.result import ValidationResult
from classical_tagger.features.validation.domain.rule import AlbumRule, RuleResult, TrackRule
from classical_tagger.features.validation.domain.rules import default_rules
from classical_tagger.platform.logging import logger

from .registry import RuleRegistry


@final
class ValidationEngine:
    """Apply a rule registry to an actual album and an optional reference."""

    registry: RuleRegistry

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        """Initialize the engine.

        Args:
            registry: Installed rules; defaults to every library rule on the system clock.
        """
        self.registry = registry if registry is not None else RuleRegistry(default_rules())

    def check(self, actual: Album | None, reference: Album | None = None) -> ValidationResult:
        """Run every installed rule.

        Album rules run once each in registration order. Then, for each actual
        track in order, every track rule runs against the reference track with
        the same ``(disc, track)`` key.

        Args:
            actual: Album under validation.
            reference: Trusted album to compare against, if any.

        Returns:
            ValidationResult: Issues in dispatch order plus one result per rule.
        """
        if actual is None:
            return ValidationResult.from_rule_results(
                "", (RuleResult(rule.meta) for rule in self.registry)
            )

        started = time.perf_counter()
        issues: list[Issue] = []
        collected: dict[str, list[Issue]] = {rule.meta.id: [] for rule in self.registry}

        for rule in self.registry.album_rules:
            self._record(rule, rule.evaluate(actual, reference), issues, collected)

        track_rules = self.registry.track_rules
        reference_tracks = reference.track_map() if reference is not None else {}
        for track in actual.tracks:
            reference_track = reference_tracks.get(track.key)
            for rule in track_rules:
                result = rule.evaluate(track, reference_track, actual, reference)
                self._record(rule, result, issues, collected)

        rule_results = [
            RuleResult(rule.meta, tuple(collected[rule.meta.id])) for rule in self.registry
        ]
        outcome = ValidationResult.from_rule_results(actual.title, rule_results, issues)
        logger.debug(
            "Checked '%s' (%d tracks, reference=%s): %d issues, score %.3f in %.1f ms",
            actual.title,
            len(actual.tracks),
            reference is not None,
            len(outcome.issues),
            outcome.score,
            (time.perf_counter() - started) * 1000,
        )
        return outcome

    @staticmethod
    def _record(
        rule: AlbumRule | TrackRule,
        result: RuleResult,
        issues: list[Issue],
        collected: dict[str, list[Issue]],
    ) -> None:
        if not result.issues:
            return
        logger.debug(
            "Rule %s produced %d issue(s)",
            rule.meta.id,
            len(result.issues),
            extra={"rule_id": rule.meta.id},
        )
        issues.extend(result.issues)
        collected[rule.meta.id].extend(result.issues)


def check(
    actual: Album | None,
    reference: Album | None = None,
    *,
    registry: RuleRegistry | None = None,
) -> ValidationResult:
    """Validate ``actual`` with a one-off engine."""

    return ValidationEngine(registry).check(actual, reference)


__all__ = ["ValidationEngine", "check"]
