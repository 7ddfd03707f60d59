"""Configuration management for classical-tagger."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from classical_tagger.exceptions import ConfigError
from classical_tagger.features.validation.domain.models import Severity
from classical_tagger.platform.logging import logger

from .paths import default_config_path


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects converted in ``__post_init__``."""
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Rotating log file (optional)
    log_file: Path | None = _path_field()

    # Rule ids the CLI leaves out of the registry
    disabled_rules: list[str] = field(default_factory=list)

    # Lowest severity shown in reports
    min_severity: Severity = Severity.INFO

    # Lowest severity that makes ``validate`` exit non-zero
    fail_on: Severity = Severity.ERROR

    _instance: ClassVar[Config | None] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Coerce TOML scalars into ``Path`` and ``Severity`` values."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

        try:
            self.min_severity = _coerce_severity(self.min_severity)
            self.fail_on = _coerce_severity(self.fail_on)
        except ValueError as e:
            raise ConfigError(str(e)) from e

        if not isinstance(self.disabled_rules, list) or not all(
            isinstance(rule_id, str) for rule_id in self.disabled_rules
        ):
            raise ConfigError("disabled_rules must be a list of rule id strings")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Config:
        """Build a config from parsed TOML, ignoring unknown keys."""

        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning("Ignoring unknown configuration key: %s", key)
        return cls(**{key: value for key, value in data.items() if key in known})

    def save(self, path: Path | str | None = None) -> Path:
        """Write this configuration as commented TOML.

        Args:
            path: Target file; defaults to the resolved config location.

        Returns:
            Path: The file written.
        """
        target = default_config_path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            _ = target.write_text(self._render_toml(), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise ConfigError(f"Cannot write configuration {target}: {e}") from e
        logger.info("Configuration saved to %s", target)
        return target

    def _render_toml(self) -> str:
        lines: list[str] = ["# classical-tagger configuration", ""]

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "~/.local/state/classical-tagger/validate.log"')
        if self.log_file is not None:
            lines.append(f"log_file = {_format_toml_value(str(self.log_file))}")
        lines.append("")

        lines.append("# Rule ids to skip, e.g. [\"2.3.2\", \"classical.guest\"]")
        rendered = ", ".join(_format_toml_value(rule_id) for rule_id in self.disabled_rules)
        lines.append(f"disabled_rules = [{rendered}]")
        lines.append("")

        lines.append("# Lowest severity shown in reports: error, warning or info")
        lines.append(f"min_severity = {_format_toml_value(self.min_severity.value)}")
        lines.append("")

        lines.append("# Lowest severity that makes 'validate' exit with status 1")
        lines.append(f"fail_on = {_format_toml_value(self.fail_on.value)}")
        lines.append("")
        return "\n".join(lines)

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration, creating a default file when none exists.

        Args:
            path: Explicit config file; otherwise env var or XDG default.

        Returns:
            Config: Cached instance for the resolved path.

        Raises:
            ConfigError: If the file cannot be parsed or holds invalid values.
        """
        config_file = default_config_path(path)
        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        if config_file.exists():
            try:
                with open(config_file, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.error("Failed to load configuration from %s: %s", config_file, e)
                raise ConfigError(f"Cannot read configuration {config_file}: {e}") from e
            instance = cls.from_mapping(data)
            logger.debug("Configuration loaded from %s", config_file)
        else:
            instance = cls()
            _ = instance.save(config_file)
            logger.info("Created default configuration at %s", config_file)

        cls._instance = instance
        cls._loaded_from = config_file
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance."""

        cls._instance = None
        cls._loaded_from = None


def _coerce_severity(value: object) -> Severity:
    if isinstance(value, Severity):
        return value
    return Severity.from_user_input(str(value))


def _format_toml_value(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


__all__ = ["Config"]
