"""Display management for CLI interface."""

from classical_tagger.ui.cli.display.report import ReportDisplay

__all__ = ["ReportDisplay"]
