"""Configuration utilities for azopsman."""

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from rich.console import Console

console = Console()

CONFIG_DIR = Path.home() / ".azopsman"
CONFIG_FILE_YAML = CONFIG_DIR / "config.yaml"

# Default logging configuration
DEFAULT_LOGGING_CONFIG = {
    "level": "WARNING",
    "format": "simple",  # Options: "simple", "json"
    "log_file": None,  # Path of an optional rotating log file
    "max_file_size_mb": 10,
    "backup_count": 5,
}


class Config:
    """Manages azopsman configuration stored as YAML."""

    def __init__(self):
        """Initialize the configuration manager."""
        self.config_data = {}
        self._config_loaded = False
        self._config_dir_ensured = False

    def _ensure_config_dir(self):
        """Ensure the configuration directory exists."""
        if not self._config_dir_ensured:
            config_dir = getattr(self, "_config_dir", CONFIG_DIR)
            if not config_dir.exists():
                config_dir.mkdir(parents=True)
                console.print(f"Created configuration directory: {config_dir}")
            self._config_dir_ensured = True

    def _ensure_config_loaded(self):
        """Ensure configuration is loaded from file."""
        if not self._config_loaded:
            self._load_config()
            self._config_loaded = True

    def reload_config(self):
        """Force reload configuration from file."""
        self._config_loaded = False
        self._ensure_config_loaded()

    def _load_config(self):
        """Load the configuration from file."""
        config_file_yaml = getattr(self, "_config_file_yaml", CONFIG_FILE_YAML)

        if not config_file_yaml.exists():
            self.config_data = {}
            return

        try:
            with open(config_file_yaml, "r", encoding="utf-8") as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            console.print(
                f"[red]Error: Configuration file {config_file_yaml} is not valid YAML: {e}[/red]"
            )
            self.config_data = {}
        except OSError as e:
            console.print(f"[red]Error reading configuration file {config_file_yaml}: {e}[/red]")
            self.config_data = {}

    def save_config(self):
        """Save the configuration to YAML file."""
        self._ensure_config_dir()
        config_file_yaml = getattr(self, "_config_file_yaml", CONFIG_FILE_YAML)
        try:
            with open(config_file_yaml, "w", encoding="utf-8") as f:
                yaml.dump(self.config_data, f, default_flow_style=False, indent=2, sort_keys=False)
        except OSError as e:
            console.print(f"[red]Error saving configuration: {e}[/red]")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value with dot notation support.

        Args:
            key: Configuration key (supports dot notation like "logging.level")
            default: Default value if key is not found

        Returns:
            Configuration value or default
        """
        self._ensure_config_loaded()

        value: Any = self.config_data
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def set(self, key: str, value: Any):
        """
        Set a configuration value with dot notation support.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        self._ensure_config_loaded()

        parts = key.split(".")
        section = self.config_data
        for part in parts[:-1]:
            if not isinstance(section.get(part), dict):
                section[part] = {}
            section = section[part]
        section[parts[-1]] = value

        self.save_config()

    def delete(self, key: str):
        """Delete a configuration key."""
        self._ensure_config_loaded()

        parts = key.split(".")
        section = self.config_data
        for part in parts[:-1]:
            section = section.get(part)
            if not isinstance(section, dict):
                return
        if parts[-1] in section:
            del section[parts[-1]]
            self.save_config()

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration data."""
        self._ensure_config_loaded()
        return self.config_data.copy()

    def get_logging_config(self) -> Dict[str, Any]:
        """
        Get logging configuration with environment variable overrides.

        Environment variables:
            AZOPSMAN_LOG_LEVEL: Log level name
            AZOPSMAN_LOG_FILE: Path of the log file
            AZOPSMAN_LOG_FORMAT: simple or json

        Returns:
            Logging configuration dictionary
        """
        logging_config = DEFAULT_LOGGING_CONFIG.copy()
        logging_config.update(self.get("logging", {}) or {})

        if "AZOPSMAN_LOG_LEVEL" in os.environ:
            logging_config["level"] = os.environ["AZOPSMAN_LOG_LEVEL"].upper()
        if "AZOPSMAN_LOG_FILE" in os.environ:
            logging_config["log_file"] = os.environ["AZOPSMAN_LOG_FILE"]
        if "AZOPSMAN_LOG_FORMAT" in os.environ:
            logging_config["format"] = os.environ["AZOPSMAN_LOG_FORMAT"].lower()

        logging_config["max_file_size_mb"] = self._get_env_int(
            "AZOPSMAN_LOG_MAX_FILE_SIZE_MB", logging_config["max_file_size_mb"]
        )

        if logging_config.get("log_file"):
            logging_config["log_file"] = str(Path(logging_config["log_file"]).expanduser())

        return logging_config

    def _get_env_int(self, env_var: str, default: int) -> int:
        """
        Get integer value from environment variable.

        Args:
            env_var: Environment variable name
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.environ.get(env_var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            console.print(
                f"[yellow]Warning: Invalid value for {env_var}: {value}. Using default: {default}[/yellow]"
            )
            return default

    def get_config_file_path(self) -> Path:
        """Get the path of the configuration file."""
        return getattr(self, "_config_file_yaml", CONFIG_FILE_YAML)
