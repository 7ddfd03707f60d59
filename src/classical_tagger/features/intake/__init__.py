# Path: `src/classical_tagger/features/intake/__init__.py`
# Summary: Export album sources for descriptors and release directories.
# Why: Provide a stable import surface for the CLI and tests.

from .usecases import AlbumSource, DescriptorLoader, DirectorySource, load_album, source_for
from .usecases.extraction import DirectoryTagReader

__all__ = [
    "AlbumSource",
    "DescriptorLoader",
    "DirectorySource",
    "DirectoryTagReader",
    "load_album",
    "source_for",
]
