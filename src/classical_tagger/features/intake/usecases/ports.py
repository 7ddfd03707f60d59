"""Ports for album intake.

Where: features/intake/usecases.
What: Protocol every album source satisfies.
Why: Let the CLI pick a source per path without depending on concrete readers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from classical_tagger.features.validation.domain.models import Album


@runtime_checkable
class AlbumSource(Protocol):
    """Anything that turns a filesystem path into an :class:`Album`."""

    def load(self, path: Path) -> Album:
        """Return the album stored at ``path``."""
        ...
