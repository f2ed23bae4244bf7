"""Core utility modules for azopsman."""

# Configuration utilities
from .config import CONFIG_DIR, CONFIG_FILE_YAML, DEFAULT_LOGGING_CONFIG, Config

# Error handling utilities
from .error_handler import get_error_handler, handle_command_error

# Logging utilities
from .logging_config import LoggingConfig, setup_logging

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE_YAML",
    "DEFAULT_LOGGING_CONFIG",
    "Config",
    "get_error_handler",
    "handle_command_error",
    "LoggingConfig",
    "setup_logging",
]
