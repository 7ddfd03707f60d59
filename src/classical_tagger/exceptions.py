"""
Summary: Exception hierarchy shared by the engine, intake, config and CLI layers.
Why: Let callers catch project failures without swallowing unrelated errors.
"""

from __future__ import annotations


class ClassicalTaggerError(Exception):
    """Base class for all project-specific failures."""


class RuleRegistrationError(ClassicalTaggerError, ValueError):
    """Raised when a rule set cannot be installed into a registry."""

    def __init__(self, rule_id: str, reason: str) -> None:
        self.rule_id: str = rule_id
        self.reason: str = reason
        super().__init__(f"Cannot register rule '{rule_id}': {reason}")


class AlbumLoadError(ClassicalTaggerError):
    """Raised when an album cannot be built from a descriptor or directory."""


class ConfigError(ClassicalTaggerError):
    """Raised when the configuration file is unreadable or invalid."""


__all__ = [
    "AlbumLoadError",
    "ClassicalTaggerError",
    "ConfigError",
    "RuleRegistrationError",
]
