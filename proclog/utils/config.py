"""
Configuration management for proclog.

Handles loading and merging configuration from:
- Default configuration file
- User configuration file
- Environment variables

Only the values this library consumes are interpreted here (log destinations,
size limits, backup counts, syslog properties and its own diagnostics). The
supervisor's configuration language itself lives elsewhere.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

SIZE_SUFFIXES = {
    "KB": 1024,
    "MB": 1024 * 1024,
    "GB": 1024 * 1024 * 1024,
}


def parse_bytes(value: Any, default: int) -> int:
    """
    Convert a size such as ``1024``, ``"64KB"`` or ``"50MB"`` to bytes.

    Args:
        value: Integer or string with an optional KB/MB/GB suffix
        default: Value returned when ``value`` is missing or malformed

    Returns:
        Size in bytes
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value

    text = str(value).strip()
    factor = 1
    if len(text) > 2 and text[-2:].upper() in SIZE_SUFFIXES:
        factor = SIZE_SUFFIXES[text[-2:].upper()]
        text = text[:-2].strip()

    try:
        return int(text) * factor
    except ValueError:
        return default


class Config:
    """Configuration manager for proclog."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file. If None, uses defaults only.
        """
        self._config: Dict[str, Any] = {}
        self._load_default_config()

        if config_file:
            self._load_config_file(config_file)

        self._apply_env_overrides()

    def _load_default_config(self) -> None:
        """Load default configuration."""
        default_config_path = Path(__file__).parent.parent.parent / "config" / "default.yaml"
        if default_config_path.exists():
            self._load_config_file(str(default_config_path))

    def _load_config_file(self, config_file: str) -> None:
        """
        Load configuration from YAML file.

        Args:
            config_file: Path to YAML configuration file
        """
        with open(config_file, "r") as f:
            file_config = yaml.safe_load(f)
        if file_config:
            self._merge_config(file_config)

    def _merge_config(self, new_config: Dict[str, Any]) -> None:
        """Deep merge new configuration into existing configuration."""
        self._config = self._deep_merge(self._config, new_config)

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        if log_level := os.getenv("PROCLOG_LOG_LEVEL"):
            self.set("logging.level", log_level)

        if log_format := os.getenv("PROCLOG_LOG_FORMAT"):
            self.set("logging.format", log_format)

        if max_bytes := os.getenv("PROCLOG_MAXBYTES"):
            self.set("logfile.maxbytes", max_bytes)

        if backups := os.getenv("PROCLOG_BACKUPS"):
            self.set("logfile.backups", int(backups))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., "logfile.backups")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def get_bytes(self, key: str, default: int) -> int:
        """
        Get a byte-size value, accepting KB/MB/GB suffixes.

        Args:
            key: Configuration key in dot notation
            default: Default value if key is missing or malformed

        Returns:
            Size in bytes
        """
        return parse_bytes(self.get(key), default)

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key in dot notation
            value: Value to set
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        """Get entire configuration as dictionary."""
        return self._config.copy()


_config: Optional[Config] = None


def get_config(config_file: Optional[str] = None) -> Config:
    """
    Get global configuration instance.

    Args:
        config_file: Optional configuration file path

    Returns:
        Configuration instance
    """
    global _config
    if _config is None:
        _config = Config(config_file)
    return _config


def reset_config() -> None:
    """Reset global configuration (mainly for testing)."""
    global _config
    _config = None
