"""Command line argument options."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, final

from classical_tagger.features.validation.domain.models import Severity


@final
@dataclass(slots=True)
class ValidateArgs:
    """Command line arguments for the ``validate`` subcommand."""

    command: Literal["validate"]
    album_path: Path
    reference_path: Path | None
    min_severity: Severity
    fail_on: Severity
    disabled_rules: tuple[str, ...] = field(default=())
    verbose: bool = False
    quiet: bool = False


@final
@dataclass(slots=True)
class RulesArgs:
    """Command line arguments for the ``rules`` subcommand."""

    command: Literal["rules"]
    disabled_rules: tuple[str, ...] = field(default=())


CLIArgs = ValidateArgs | RulesArgs

__all__ = ["CLIArgs", "RulesArgs", "ValidateArgs"]
