"""Album intake use cases."""

from .descriptor import DescriptorLoader
from .loader import DirectorySource, load_album, source_for
from .ports import AlbumSource

__all__ = ["AlbumSource", "DescriptorLoader", "DirectorySource", "load_album", "source_for"]
