"""Tests for result aggregation and scoring."""

from __future__ import annotations

import pytest

from classical_tagger.features.validation.domain.models import Issue, Severity
from classical_tagger.features.validation.domain.result import ValidationResult
from classical_tagger.features.validation.domain.rule import RuleMetadata, RuleResult

HEAVY = RuleMetadata("heavy", "Heavy", Severity.ERROR, 1.0)
LIGHT = RuleMetadata("light", "Light", Severity.INFO, 0.1)


def test_score_is_weighted_by_failed_rules() -> None:
    result = ValidationResult.from_rule_results(
        "Album",
        [RuleResult(HEAVY), RuleResult(LIGHT, (LIGHT.issue("minor"),))],
    )

    assert result.total_rules == 2
    assert result.passed_rules == 1
    assert result.failed_rules == 1
    assert result.score == pytest.approx(1 - 0.1 / 1.1)


def test_score_is_zero_without_rules() -> None:
    assert ValidationResult.from_rule_results("Album", []).score == 0.0


def test_score_is_one_when_everything_passes() -> None:
    result = ValidationResult.from_rule_results("Album", [RuleResult(HEAVY), RuleResult(LIGHT)])

    assert result.score == 1.0
    assert result.issues == ()


def test_issue_counts_follow_computed_severity() -> None:
    issues = (
        HEAVY.issue("a"),
        HEAVY.issue("b", severity=Severity.WARNING),
        LIGHT.issue("c", track=2),
    )
    result = ValidationResult.from_rule_results(
        "Album", [RuleResult(HEAVY, issues[:2]), RuleResult(LIGHT, issues[2:])]
    )

    assert (result.errors, result.warnings, result.infos) == (1, 1, 1)
    assert result.issues == issues


def test_filters_by_minimum_severity() -> None:
    warning = Issue(Severity.WARNING, 0, "heavy", "w")
    info = Issue(Severity.INFO, 1, "light", "i")
    result = ValidationResult("Album", issues=(warning, info))

    assert result.issues_at_least(Severity.WARNING) == [warning]
    assert result.has_issues_at_least(Severity.INFO)
    assert not result.has_issues_at_least(Severity.ERROR)


def test_result_for_looks_up_by_id() -> None:
    result = ValidationResult.from_rule_results("Album", [RuleResult(HEAVY)])

    assert result.result_for("heavy") is not None
    assert result.result_for("missing") is None
