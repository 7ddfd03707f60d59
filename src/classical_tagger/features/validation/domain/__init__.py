"""
Summary: Export the validation domain types and shared predicates.
Why: Provide a stable import surface for rules, use cases and tests.
"""

from .models import (
    ALBUM_SCOPE,
    Album,
    Artist,
    Edition,
    Issue,
    Role,
    Severity,
    Track,
    TrackKey,
)
from .result import ValidationResult
from .rule import (
    AlbumRule,
    Rule,
    RuleMetadata,
    RuleResult,
    TrackRule,
    album_rule,
    track_rule,
)

__all__ = [
    "ALBUM_SCOPE",
    "Album",
    "AlbumRule",
    "Artist",
    "Edition",
    "Issue",
    "Role",
    "Rule",
    "RuleMetadata",
    "RuleResult",
    "Severity",
    "Track",
    "TrackKey",
    "TrackRule",
    "ValidationResult",
    "album_rule",
    "track_rule",
]
