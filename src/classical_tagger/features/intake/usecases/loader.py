"""
Summary: Choose the album source for a path and load it.
Why: The CLI accepts release directories and JSON descriptors interchangeably.
"""

from __future__ import annotations

from pathlib import Path
from typing import final

from typing_extensions import override

from classical_tagger.exceptions import AlbumLoadError
from classical_tagger.features.validation.domain.models import Album

from .descriptor import DescriptorLoader
from .extraction import DirectoryTagReader
from .ports import AlbumSource


@final
class DirectorySource(AlbumSource):
    """Adapter exposing :class:`DirectoryTagReader` as an album source."""

    def __init__(self, reader: DirectoryTagReader | None = None) -> None:
        self.reader = reader or DirectoryTagReader()

    @override
    def load(self, path: Path) -> Album:
        return self.reader.read(path)


def source_for(path: Path) -> AlbumSource:
    """Return the source able to read ``path``.

    Raises:
        AlbumLoadError: If the path is missing or of an unsupported kind.
    """
    if path.is_dir():
        return DirectorySource()
    if path.is_file() and path.suffix.lower() == ".json":
        return DescriptorLoader()
    if not path.exists():
        raise AlbumLoadError(f"Path does not exist: {path}")
    raise AlbumLoadError(f"Unsupported album source: {path} (expected a directory or .json file)")


def load_album(path: Path) -> Album:
    """Load an album from a release directory or a JSON descriptor."""

    return source_for(path).load(path)


__all__ = ["DirectorySource", "load_album", "source_for"]
