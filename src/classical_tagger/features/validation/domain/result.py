"""
Summary: Aggregate per-rule results into counts and a weighted score.
Why: Callers rank candidate releases by one number while still seeing every issue.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import final

from .models import Issue, Severity
from .rule import RuleResult


@final
@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of one check.

    Attributes:
        entity: Album title the check ran against.
        rule_results: One result per installed rule, in registration order.
        issues: Every issue in dispatch order.
    """

    entity: str
    rule_results: tuple[RuleResult, ...] = ()
    issues: tuple[Issue, ...] = field(default=())

    @classmethod
    def from_rule_results(
        cls,
        entity: str,
        rule_results: Iterable[RuleResult],
        issues: Iterable[Issue] | None = None,
    ) -> ValidationResult:
        """Build a result; issues default to the rule results concatenated."""

        results = tuple(rule_results)
        if issues is None:
            issues = [issue for result in results for issue in result.issues]
        return cls(entity=entity, rule_results=results, issues=tuple(issues))

    @property
    def total_rules(self) -> int:
        return len(self.rule_results)

    @property
    def passed_rules(self) -> int:
        return sum(1 for result in self.rule_results if result.passed)

    @property
    def failed_rules(self) -> int:
        return self.total_rules - self.passed_rules

    @property
    def issue_counts(self) -> Mapping[Severity, int]:
        counts = dict.fromkeys(Severity, 0)
        for issue in self.issues:
            counts[issue.severity] += 1
        return counts

    @property
    def errors(self) -> int:
        return self.issue_counts[Severity.ERROR]

    @property
    def warnings(self) -> int:
        return self.issue_counts[Severity.WARNING]

    @property
    def infos(self) -> int:
        return self.issue_counts[Severity.INFO]

    @property
    def score(self) -> float:
        """``1 - failed weight / total weight``; 0 when no rules are installed."""

        total = sum(result.meta.weight for result in self.rule_results)
        if total <= 0:
            return 0.0
        failed = sum(result.meta.weight for result in self.rule_results if not result.passed)
        return min(1.0, max(0.0, 1.0 - failed / total))

    def result_for(self, rule_id: str) -> RuleResult | None:
        """First result recorded for ``rule_id``, if any."""

        return next((r for r in self.rule_results if r.meta.id == rule_id), None)

    def issues_at_least(self, severity: Severity) -> list[Issue]:
        """Issues as serious as ``severity`` or more, in dispatch order."""

        return [issue for issue in self.issues if issue.severity.at_least(severity)]

    def has_issues_at_least(self, severity: Severity) -> bool:
        return any(issue.severity.at_least(severity) for issue in self.issues)


__all__ = ["ValidationResult"]
