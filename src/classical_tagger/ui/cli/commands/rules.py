"""Rules listing command."""

from __future__ import annotations

from typing import final

from classical_tagger.features.validation.domain.rule import Rule
from classical_tagger.features.validation.domain.rules import default_rules, select_rules
from classical_tagger.ui.cli.args.options import RulesArgs
from classical_tagger.ui.cli.display.report import ReportDisplay


@final
class RulesCommand:
    """Print the installed rules in dispatch order."""

    def __init__(self, args: RulesArgs, display: ReportDisplay | None = None) -> None:
        self.args = args
        self.display = display or ReportDisplay()

    def execute(self) -> list[Rule]:
        rules = select_rules(default_rules(), self.args.disabled_rules)
        self.display.show_rules(rules)
        return rules
