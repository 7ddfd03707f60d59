"""Validate command implementation for the CLI."""

from __future__ import annotations

from typing import final

from classical_tagger.features.intake import load_album
from classical_tagger.features.validation.domain.result import ValidationResult
from classical_tagger.features.validation.domain.rules import (
    YearClock,
    default_rules,
    select_rules,
    system_year,
)
from classical_tagger.features.validation.usecases import RuleRegistry, ValidationEngine
from classical_tagger.platform.logging import logger
from classical_tagger.ui.cli.args.options import ValidateArgs
from classical_tagger.ui.cli.display.report import ReportDisplay


@final
class ValidateCommand:
    """Load an album (and optional reference), run the engine and report."""

    def __init__(
        self,
        args: ValidateArgs,
        display: ReportDisplay | None = None,
        current_year: YearClock = system_year,
    ) -> None:
        self.args = args
        self.display = display or ReportDisplay()
        self.current_year = current_year

    def build_registry(self) -> RuleRegistry:
        """Install the library rules minus the disabled ids."""

        rules = default_rules(self.current_year)
        known = {rule.meta.id for rule in rules}
        for rule_id in self.args.disabled_rules:
            if rule_id not in known:
                logger.warning("Cannot disable unknown rule '%s'", rule_id)
        return RuleRegistry(select_rules(rules, self.args.disabled_rules))

    def execute(self) -> ValidationResult:
        """Execute the validate command.

        Raises:
            AlbumLoadError: If the album or reference cannot be read.
        """
        actual = load_album(self.args.album_path)
        reference = (
            load_album(self.args.reference_path) if self.args.reference_path is not None else None
        )

        registry = self.build_registry()
        logger.debug("Running %d rules on '%s'", len(registry), actual.title)
        result = ValidationEngine(registry).check(actual, reference)

        self.display.show_report(result, self.args.min_severity, quiet=self.args.quiet)
        return result
