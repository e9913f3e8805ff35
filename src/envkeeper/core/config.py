"""
Configuration module for envkeeper.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None

_FALLBACK_IGNORED_DIRS = [
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    "target",
    ".turbo",
    ".cache",
]


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section, {})
    return section_defaults.get(key, fallback)


@dataclass
class ScannerConfig:
    """Configuration for .env discovery."""

    ignored_dirs: list[str] = field(
        default_factory=lambda: list(
            _get_default("scanner", "ignored_dirs", _FALLBACK_IGNORED_DIRS)
        )
    )


@dataclass
class WriterConfig:
    """Configuration for atomic writes."""

    create_backup: bool = field(
        default_factory=lambda: _get_default("writer", "create_backup", False)
    )
    preserve_mode: bool = field(
        default_factory=lambda: _get_default("writer", "preserve_mode", True)
    )


@dataclass
class DisplayConfig:
    """Configuration for CLI rendering."""

    mask_values: bool = field(default_factory=lambda: _get_default("display", "mask_values", True))


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default("logging", "format", "%(message)s")
    )


@dataclass
class EnvKeeperConfig:
    """Main configuration class for envkeeper."""

    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    writer: WriterConfig = field(default_factory=WriterConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "EnvKeeperConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            EnvKeeperConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "EnvKeeperConfig":
        """Create EnvKeeperConfig from a dictionary."""
        config = cls()

        if "scanner" in data:
            config.scanner = ScannerConfig(**data["scanner"])
        if "writer" in data:
            config.writer = WriterConfig(**data["writer"])
        if "display" in data:
            config.display = DisplayConfig(**data["display"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "EnvKeeperConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: ENVKEEPER_<SECTION>_<KEY>
        Examples:
            - ENVKEEPER_SCANNER_IGNORED_DIRS (comma-separated)
            - ENVKEEPER_WRITER_CREATE_BACKUP
            - ENVKEEPER_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Scanner config
            "ENVKEEPER_SCANNER_IGNORED_DIRS": ("scanner", "ignored_dirs", _parse_list),
            # Writer config
            "ENVKEEPER_WRITER_CREATE_BACKUP": ("writer", "create_backup", _parse_bool),
            "ENVKEEPER_WRITER_PRESERVE_MODE": ("writer", "preserve_mode", _parse_bool),
            # Display config
            "ENVKEEPER_DISPLAY_MASK_VALUES": ("display", "mask_values", _parse_bool),
            # Logging config
            "ENVKEEPER_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to a list of non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(
    config_path: Optional[Path | str] = None, apply_env: bool = True
) -> EnvKeeperConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        EnvKeeperConfig instance
    """
    if config_path:
        config = EnvKeeperConfig.from_file(config_path)
    else:
        config = EnvKeeperConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
