"""Command execution package for CLI."""

from classical_tagger.ui.cli.commands.rules import RulesCommand
from classical_tagger.ui.cli.commands.validate import ValidateCommand

__all__ = ["RulesCommand", "ValidateCommand"]
