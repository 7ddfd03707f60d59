"""
Summary: Rule registry that validates and splits the installed rules by arity.
Why: Catch programmer errors in the rule set once, at engine construction.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import final

from classical_tagger.exceptions import RuleRegistrationError
from classical_tagger.features.validation.domain.rule import AlbumRule, Rule, TrackRule
from classical_tagger.platform.logging import logger


@final
class RuleRegistry:
    """Immutable, ordered collection of album and track rules."""

    _rules: tuple[Rule, ...]
    _by_id: dict[str, Rule]

    def __init__(self, rules: Iterable[Rule]) -> None:
        """Validate and install ``rules`` in the given order.

        Args:
            rules: Album and track rules in registration order.

        Raises:
            RuleRegistrationError: On an empty or duplicate id, a weight outside
                ``(0, 1]``, or an entry that is not a rule.
        """
        installed: list[Rule] = []
        by_id: dict[str, Rule] = {}
        for rule in rules:
            self._validate(rule, by_id)
            installed.append(rule)
            by_id[rule.meta.id] = rule

        self._rules = tuple(installed)
        self._by_id = by_id
        logger.debug(
            "Registered %d rules (%d album, %d track)",
            len(self._rules),
            len(self.album_rules),
            len(self.track_rules),
        )

    @staticmethod
    def _validate(rule: object, by_id: dict[str, Rule]) -> None:
        if not isinstance(rule, (AlbumRule, TrackRule)):
            logger.error("Refusing to register non-rule object: %r", rule)
            raise RuleRegistrationError(repr(rule), "not an AlbumRule or TrackRule")

        meta = rule.meta
        if not meta.id.strip():
            logger.error("Refusing to register rule with empty id: %r", meta)
            raise RuleRegistrationError(meta.id, "id must not be empty")
        if meta.id in by_id:
            logger.error("Duplicate rule id: %s", meta.id)
            raise RuleRegistrationError(meta.id, "id is already registered")
        if not 0 < meta.weight <= 1:
            logger.error("Rule %s has weight %s outside (0, 1]", meta.id, meta.weight)
            raise RuleRegistrationError(meta.id, f"weight {meta.weight} is outside (0, 1]")

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def album_rules(self) -> tuple[AlbumRule, ...]:
        return tuple(rule for rule in self._rules if isinstance(rule, AlbumRule))

    @property
    def track_rules(self) -> tuple[TrackRule, ...]:
        return tuple(rule for rule in self._rules if isinstance(rule, TrackRule))

    def get(self, rule_id: str) -> Rule | None:
        return self._by_id.get(rule_id)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._by_id

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


__all__ = ["RuleRegistry"]
