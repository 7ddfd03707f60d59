"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from classical_tagger.config.config import Config
from classical_tagger.features.validation.domain.models import Severity
from classical_tagger.platform.logging import logger, setup_logger
from classical_tagger.ui.cli.args.options import CLIArgs, RulesArgs, ValidateArgs

SEVERITY_CHOICES: tuple[str, ...] = tuple(severity.value for severity in Severity)


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="classical-tagger",
            description="Validate classical-music release metadata against cataloguing rules.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument(
            "--config",
            type=str,
            metavar="CONFIG_FILE",
            help="Configuration file (defaults to $CLASSICAL_TAGGER_CONFIG or the XDG location)",
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        validate_parser = subparsers.add_parser(
            "validate",
            help="Validate a release directory or JSON descriptor",
        )
        _ = validate_parser.add_argument(
            "album_path",
            type=str,
            help="Release directory or album descriptor (.json)",
            metavar="ALBUM_PATH",
        )
        _ = validate_parser.add_argument(
            "--reference",
            type=str,
            help="Reference album descriptor (.json) or directory to compare against",
            metavar="REFERENCE_PATH",
        )
        _ = validate_parser.add_argument(
            "--min-severity",
            choices=SEVERITY_CHOICES,
            help="Lowest severity to display (overrides the config file)",
        )
        _ = validate_parser.add_argument(
            "--fail-on",
            choices=SEVERITY_CHOICES,
            help="Lowest severity that makes the command exit with status 1",
        )
        ArgumentParser._add_disable_argument(validate_parser)
        _ = validate_parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Show debug logging, including per-rule issue counts",
        )
        _ = validate_parser.add_argument(
            "-q",
            "--quiet",
            action="store_true",
            help="Suppress the report; only the exit status and errors remain",
        )

        rules_parser = subparsers.add_parser("rules", help="List installed rules")
        ArgumentParser._add_disable_argument(rules_parser)

        return parser

    @staticmethod
    def _add_disable_argument(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--disable",
            action="append",
            default=[],
            metavar="RULE_ID",
            help="Skip a rule by id (repeatable; adds to the config file's list)",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If required paths don't exist.
            ConfigError: If the configuration file is invalid.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))
        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load(parsed_args.config)
        _ = setup_logger(log_file=configuration.log_file, console_level=log_level)

        disabled = tuple(dict.fromkeys([*configuration.disabled_rules, *parsed_args.disable]))
        command: str = parsed_args.command

        if command == "validate":
            return ArgumentParser._process_validate(parsed_args, configuration, disabled)

        if command == "rules":
            return RulesArgs(command="rules", disabled_rules=disabled)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _process_validate(
        parsed_args: argparse.Namespace,
        configuration: Config,
        disabled: tuple[str, ...],
    ) -> ValidateArgs:
        album_path = Path(parsed_args.album_path)
        if not album_path.exists():
            logger.error("Album path does not exist: %s", album_path)
            sys.exit(2)

        reference_path = Path(parsed_args.reference) if parsed_args.reference else None
        if reference_path is not None and not reference_path.exists():
            logger.error("Reference path does not exist: %s", reference_path)
            sys.exit(2)

        min_severity = (
            Severity.from_user_input(parsed_args.min_severity)
            if parsed_args.min_severity
            else configuration.min_severity
        )
        fail_on = (
            Severity.from_user_input(parsed_args.fail_on)
            if parsed_args.fail_on
            else configuration.fail_on
        )

        return ValidateArgs(
            command="validate",
            album_path=album_path,
            reference_path=reference_path,
            min_severity=min_severity,
            fail_on=fail_on,
            disabled_rules=disabled,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )


__all__ = ["ArgumentParser"]
