"""Command line interface for classical-tagger."""

import sys
from collections.abc import Sequence
from typing import final

from classical_tagger.exceptions import ClassicalTaggerError
from classical_tagger.platform.logging import logger
from classical_tagger.ui.cli.args import ArgumentParser
from classical_tagger.ui.cli.args.options import CLIArgs, ValidateArgs
from classical_tagger.ui.cli.commands import RulesCommand, ValidateCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: Sequence[str] | None = None) -> None:
        """Process command line arguments.

        Exits with status 1 when ``validate`` finds an issue at or above the
        ``fail_on`` severity, 2 when the album or configuration cannot be read,
        and 130 when interrupted.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, ValidateArgs):
                result = ValidateCommand(args).execute()
                if result.has_issues_at_least(args.fail_on):
                    sys.exit(1)
                return

            _ = RulesCommand(args).execute()
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except ClassicalTaggerError as e:
            logger.error("%s", e)
            sys.exit(2)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Underlying command processing
        calls ``sys.exit(...)`` for failures, so this return is only reached
        when validation passes.
    """
    CommandProcessor.process_command()
    return 0
