"""Rich logging handlers.

Where: platform/logging/handlers.py
What: Render log records with rule identifiers as a styled prefix.
Why: Keep engine debug output scannable when many rules fire on one album.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.text import Text
from typing_extensions import override


class IssueRichHandler(RichHandler):
    """Rich handler that prefixes messages with ``[rule_id]`` when present."""

    RULE_STYLE: ClassVar[str] = "bold cyan"
    MESSAGE_STYLE: ClassVar[str] = "white"

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        rule_id = getattr(record, "rule_id", None)
        if not rule_id:
            return super().render_message(record, message)

        text = Text()
        _ = text.append(f"[{rule_id}] ", style=self.RULE_STYLE)
        _ = text.append(message, style=self.MESSAGE_STYLE)
        return text


__all__ = ["IssueRichHandler"]
