"""Shared path utilities for configuration locations.

Policy:
- Config: ``$CLASSICAL_TAGGER_CONFIG`` when set, else
  ``$XDG_CONFIG_HOME/classical-tagger/config.toml`` (``~/.config`` fallback).
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Final

ENV_CONFIG_PATH: Final[str] = "CLASSICAL_TAGGER_CONFIG"
ENV_XDG_CONFIG_HOME: Final[str] = "XDG_CONFIG_HOME"
APP_DIR_NAME: Final[str] = "classical-tagger"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a path honoring explicit and environment overrides, in that order."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = (mapping.get(env_var) or "").strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    return default_factory().expanduser().resolve()


def config_home(env: Mapping[str, str] | None = None) -> Path:
    """Base directory for per-user configuration."""

    mapping = env if env is not None else os.environ
    xdg = (mapping.get(ENV_XDG_CONFIG_HOME) or "").strip()
    return Path(xdg) if xdg else Path.home() / ".config"


def default_config_path(
    explicit_path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> Path:
    """Get the path of the TOML config file."""

    return resolve_overridable_path(
        explicit_path=explicit_path,
        env=env,
        env_var=ENV_CONFIG_PATH,
        default_factory=lambda: config_home(env) / APP_DIR_NAME / "config.toml",
    )


__all__ = [
    "APP_DIR_NAME",
    "ENV_CONFIG_PATH",
    "config_home",
    "default_config_path",
    "resolve_overridable_path",
]
