# Path: `src/classical_tagger/features/validation/__init__.py`
# Summary: Export the rule engine's public API.
# Why: Embedders import models, rules and the dispatcher from one place.

from .domain import (
    ALBUM_SCOPE,
    Album,
    AlbumRule,
    Artist,
    Edition,
    Issue,
    Role,
    Rule,
    RuleMetadata,
    RuleResult,
    Severity,
    Track,
    TrackRule,
    ValidationResult,
    album_rule,
    track_rule,
)
from .domain.rules import default_rules, select_rules, system_year
from .usecases import RuleRegistry, ValidationEngine, check

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
    "RuleRegistry",
    "RuleResult",
    "Severity",
    "Track",
    "TrackRule",
    "ValidationEngine",
    "ValidationResult",
    "album_rule",
    "check",
    "default_rules",
    "select_rules",
    "system_year",
    "track_rule",
]
