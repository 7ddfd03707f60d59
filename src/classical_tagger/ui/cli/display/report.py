"""src/classical_tagger/ui/cli/display/report.py
What: Render validation reports and the installed rule list.
Why: Keep console output formatting consistent across commands.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar, final

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from classical_tagger.features.validation.domain.models import Issue, Severity
from classical_tagger.features.validation.domain.result import ValidationResult
from classical_tagger.features.validation.domain.rule import Rule, TrackRule


@final
class ReportDisplay:
    """Handles report display in CLI."""

    SEVERITY_STYLES: ClassVar[dict[Severity, str]] = {
        Severity.ERROR: "bold red",
        Severity.WARNING: "yellow",
        Severity.INFO: "cyan",
    }

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        """Initialize report display."""
        self.console = console or Console()

    def show_report(
        self,
        result: ValidationResult,
        min_severity: Severity = Severity.INFO,
        quiet: bool = False,
    ) -> None:
        """Display issues at or above ``min_severity`` followed by the summary.

        Args:
            result: Outcome of one validation run.
            min_severity: Lowest severity to list.
            quiet: Whether to suppress all output.
        """
        if quiet:
            return

        shown = result.issues_at_least(min_severity)
        self.console.print(f"\n[bold]{escape(result.entity) or '(untitled album)'}[/bold]")
        if shown:
            self.console.print(self._issue_table(shown))
        else:
            self.console.print("[green]No issues to report.[/green]")

        hidden = len(result.issues) - len(shown)
        if hidden:
            self.console.print(f"[dim]{hidden} issue(s) below '{min_severity.value}' hidden[/dim]")
        self._render_summary(result)

    def _issue_table(self, issues: Iterable[Issue]) -> Table:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Severity")
        table.add_column("Location")
        table.add_column("Rule")
        table.add_column("Message", overflow="fold")
        for issue in issues:
            style = self.SEVERITY_STYLES[issue.severity]
            location = "Album" if issue.is_album_scope else f"Track {issue.track}"
            table.add_row(
                f"[{style}]{issue.severity.value.upper()}[/{style}]",
                location,
                issue.rule_id,
                Text(issue.message),
            )
        return table

    def _render_summary(self, result: ValidationResult) -> None:
        self.console.print("\n[bold]Summary:[/bold]")
        self.console.print(
            f"Rules: {result.total_rules} total, "
            f"[green]{result.passed_rules} passed[/green], "
            f"[red]{result.failed_rules} failed[/red]"
        )
        self.console.print(
            f"Issues: [bold red]{result.errors} errors[/bold red], "
            f"[yellow]{result.warnings} warnings[/yellow], "
            f"[cyan]{result.infos} info[/cyan]"
        )
        self.console.print(f"Score: {result.score:.3f}")

    def show_rules(self, rules: Iterable[Rule]) -> None:
        """List rules with their scope, default severity and weight."""

        table = Table(show_header=True, header_style="bold")
        table.add_column("Id")
        table.add_column("Name")
        table.add_column("Scope")
        table.add_column("Severity")
        table.add_column("Weight", justify="right")
        for rule in rules:
            meta = rule.meta
            style = self.SEVERITY_STYLES[meta.severity]
            table.add_row(
                meta.id,
                Text(meta.name),
                "track" if isinstance(rule, TrackRule) else "album",
                f"[{style}]{meta.severity.value}[/{style}]",
                f"{meta.weight:.1f}",
            )
        self.console.print(table)


__all__ = ["ReportDisplay"]
