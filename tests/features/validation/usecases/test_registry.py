"""Tests for rule registration checks."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from classical_tagger.exceptions import RuleRegistrationError
from classical_tagger.features.validation.domain.models import Album, Issue, Severity
from classical_tagger.features.validation.domain.rule import AlbumRule, RuleMetadata, album_rule
from classical_tagger.features.validation.domain.rules import default_rules
from classical_tagger.features.validation.usecases.registry import RuleRegistry


def _noop(actual: Album, reference: Album | None) -> Iterator[Issue]:
    yield from ()


def _rule(rule_id: str, weight: float = 1.0) -> AlbumRule:
    return AlbumRule(RuleMetadata(rule_id, "Rule", Severity.ERROR, weight), _noop)


def test_registry_splits_rules_by_arity() -> None:
    registry = RuleRegistry(default_rules())

    assert len(registry) == len(default_rules())
    assert len(registry.album_rules) + len(registry.track_rules) == len(registry)
    assert "2.3.1" in registry
    assert registry.get("classical.opus") is not None
    assert registry.get("missing") is None


def test_registry_preserves_registration_order() -> None:
    registry = RuleRegistry([_rule("b"), _rule("a")])

    assert [rule.meta.id for rule in registry] == ["b", "a"]


def test_duplicate_id_is_rejected() -> None:
    with pytest.raises(RuleRegistrationError, match="already registered") as excinfo:
        _ = RuleRegistry([_rule("x"), _rule("x")])

    assert excinfo.value.rule_id == "x"


@pytest.mark.parametrize("weight", [0.0, -0.5, 1.5])
def test_weight_outside_unit_interval_is_rejected(weight: float) -> None:
    with pytest.raises(RuleRegistrationError, match="outside"):
        _ = RuleRegistry([_rule("x", weight)])


def test_empty_id_is_rejected() -> None:
    with pytest.raises(RuleRegistrationError, match="must not be empty"):
        _ = RuleRegistry([_rule("  ")])


def test_non_rule_is_rejected() -> None:
    with pytest.raises(RuleRegistrationError, match="not an AlbumRule or TrackRule"):
        _ = RuleRegistry([object()])  # pyright: ignore[reportArgumentType]


def test_registration_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        _ = RuleRegistry([_rule("x"), _rule("x")])


def test_decorated_rule_registers() -> None:
    @album_rule("custom.rule", "Custom", Severity.INFO, 0.1)
    def custom(actual: Album, reference: Album | None) -> Iterator[Issue]:
        yield custom.meta.issue("hello")

    registry = RuleRegistry([custom])

    assert registry.album_rules == (custom,)
