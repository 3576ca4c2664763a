"""
Configuration — Centralized parse settings

Config hierarchy (highest to lowest priority):
  1. Environment variables (ARBOR_*)
  2. Project config (.arbor/config.yaml)
  3. User config (~/.arbor/config.yaml)
  4. Defaults

Example config.yaml:

    parse:
      default_language: json
      max_source_bytes: 10000000
      strict_version: true
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .core.parser import ENGINE_MAX_SOURCE_BYTES

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "json"

TRUE_VALUES = ('true', '1', 'yes', 'on')


@dataclass
class ParseConfig:
    """Parser construction settings."""
    default_language: str = DEFAULT_LANGUAGE
    max_source_bytes: int = ENGINE_MAX_SOURCE_BYTES
    strict_version: bool = True  # Raise on grammar/engine ABI skew

    def validate(self) -> Optional[str]:
        """Validate config. Returns error message or None if valid."""
        errors = self.field_errors()
        return next(iter(errors.values()), None)

    def field_errors(self) -> Dict[str, str]:
        """Map each invalid setting to its error message."""
        errors = {}
        if not self.default_language:
            errors["default_language"] = "default_language must not be empty"
        if not isinstance(self.max_source_bytes, int) or isinstance(self.max_source_bytes, bool):
            errors["max_source_bytes"] = f"max_source_bytes must be an integer, got {self.max_source_bytes!r}"
        elif not 0 < self.max_source_bytes <= ENGINE_MAX_SOURCE_BYTES:
            errors["max_source_bytes"] = f"max_source_bytes must be between 1 and {ENGINE_MAX_SOURCE_BYTES}"
        return errors


@dataclass
class Config:
    """Library configuration."""
    parse: ParseConfig = field(default_factory=ParseConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "parse": {
                "default_language": self.parse.default_language,
                "max_source_bytes": self.parse.max_source_bytes,
                "strict_version": self.parse.strict_version,
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary."""
        parse_data = data.get("parse") or {}

        return cls(
            parse=ParseConfig(
                default_language=parse_data.get("default_language", DEFAULT_LANGUAGE),
                max_source_bytes=parse_data.get("max_source_bytes", ENGINE_MAX_SOURCE_BYTES),
                strict_version=parse_data.get("strict_version", True),
            )
        )


class ConfigManager:
    """
    Manages configuration loading and persistence.

    Hierarchy:
      1. Environment variables
      2. Project config (.arbor/config.yaml)
      3. User config (~/.arbor/config.yaml)
      4. Defaults
    """

    CONFIG_DIR = ".arbor"
    CONFIG_FILE = "config.yaml"

    def __init__(self, project_dir: Optional[Path] = None, user_dir: Optional[Path] = None):
        """
        Args:
            project_dir: Project root (defaults to the working directory)
            user_dir: Home directory holding .arbor/ (defaults to ~)
        """
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.user_dir = Path(user_dir) if user_dir else Path.home()
        self._config: Optional[Config] = None

    @property
    def project_config_path(self) -> Path:
        return self.project_dir / self.CONFIG_DIR / self.CONFIG_FILE

    @property
    def user_config_path(self) -> Path:
        return self.user_dir / self.CONFIG_DIR / self.CONFIG_FILE

    def load(self) -> Config:
        """Load configuration from all sources."""
        if self._config is not None:
            return self._config

        config_data: Dict[str, Any] = {}

        # Layer 1: User config
        config_data = self._merge(config_data, self._read(self.user_config_path))

        # Layer 2: Project config (higher priority)
        config_data = self._merge(config_data, self._read(self.project_config_path))

        # Layer 3: Environment overrides
        parse_env = config_data.get("parse")
        if not isinstance(parse_env, dict):
            parse_env = config_data["parse"] = {}
        if os.environ.get("ARBOR_DEFAULT_LANGUAGE"):
            parse_env["default_language"] = os.environ["ARBOR_DEFAULT_LANGUAGE"]
        if os.environ.get("ARBOR_MAX_SOURCE_BYTES"):
            raw = os.environ["ARBOR_MAX_SOURCE_BYTES"]
            try:
                parse_env["max_source_bytes"] = int(raw)
            except ValueError:
                logger.warning("Ignoring ARBOR_MAX_SOURCE_BYTES=%r: not an integer", raw)
        if os.environ.get("ARBOR_STRICT_VERSION"):
            parse_env["strict_version"] = os.environ["ARBOR_STRICT_VERSION"].lower() in TRUE_VALUES

        config = Config.from_dict(config_data)
        defaults = ParseConfig()
        for name, error in config.parse.field_errors().items():
            logger.warning("Invalid parse config (%s); using default for %s", error, name)
            setattr(config.parse, name, getattr(defaults, name))

        self._config = config
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        """Read one YAML layer; unreadable or malformed files are skipped."""
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Skipping config file %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Skipping config file %s: expected a mapping", path)
            return {}
        return data

    def save_project(self, config: Config):
        """Save configuration to project config file."""
        self._write(self.project_config_path, config)

    def save_user(self, config: Config):
        """Save configuration to user config file."""
        self._write(self.user_config_path, config)

    def _write(self, path: Path, config: Config):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False)
        self._config = config

    def set(self, key: str, value: str, scope: str = "project") -> Optional[str]:
        """
        Set a configuration value.

        Args:
            key: Dot-separated key (e.g., "parse.default_language")
            value: Value to set
            scope: "project" or "user"

        Returns:
            Error message or None if successful
        """
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2:
            return f"Invalid key format: {key}. Use 'section.setting' (e.g., 'parse.default_language')"

        section, setting = parts
        if section != "parse":
            return f"Unknown section: {section}. Valid: parse"

        updated = ParseConfig(
            default_language=config.parse.default_language,
            max_source_bytes=config.parse.max_source_bytes,
            strict_version=config.parse.strict_version,
        )
        if setting == "default_language":
            updated.default_language = value
        elif setting == "max_source_bytes":
            try:
                updated.max_source_bytes = int(value)
            except ValueError:
                return f"max_source_bytes must be an integer, got '{value}'"
        elif setting == "strict_version":
            updated.strict_version = value.lower() in TRUE_VALUES
        else:
            return f"Unknown parse setting: {setting}. Valid: default_language, max_source_bytes, strict_version"

        error = updated.validate()
        if error:
            return error

        new_config = Config(parse=updated)
        if scope == "project":
            self.save_project(new_config)
        else:
            self.save_user(new_config)

        return None

    def get(self, key: str) -> Optional[str]:
        """Get a configuration value as text."""
        config = self.load()

        parts = key.split(".")
        if len(parts) != 2 or parts[0] != "parse":
            return None

        setting = parts[1]
        if setting == "default_language":
            return config.parse.default_language
        elif setting == "max_source_bytes":
            return str(config.parse.max_source_bytes)
        elif setting == "strict_version":
            return str(config.parse.strict_version).lower()

        return None

    def _merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts, override wins."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value
        return result


# Convenience function
def get_config(project_dir: Optional[Path] = None) -> Config:
    """Load configuration for a project."""
    return ConfigManager(project_dir).load()
