"""Command line argument handling package."""

from classical_tagger.ui.cli.args.options import CLIArgs, RulesArgs, ValidateArgs
from classical_tagger.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "CLIArgs", "RulesArgs", "ValidateArgs"]
