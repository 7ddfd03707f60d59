"""Audio tag extraction for release directories."""

from .tag_reader import AUDIO_EXTENSIONS, DirectoryTagReader, FileTags, infer_performer_role

__all__ = ["AUDIO_EXTENSIONS", "DirectoryTagReader", "FileTags", "infer_performer_role"]
