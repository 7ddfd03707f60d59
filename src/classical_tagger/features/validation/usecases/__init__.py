"""Validation use cases: rule registry and dispatcher."""

from .engine import ValidationEngine, check
from .registry import RuleRegistry

__all__ = ["RuleRegistry", "ValidationEngine", "check"]
