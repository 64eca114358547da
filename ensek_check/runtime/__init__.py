"""Runtime infrastructure for ensek-check.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Environment configuration via get_settings(), EnsekSettings

Usage:
    from ensek_check.runtime import get_logger, get_settings

    logger = get_logger(__name__)
    settings = get_settings()
    print(settings.base_url)
"""

from ensek_check.runtime.config import (
    ConfigurationError,
    EnsekSettings,
    describe_settings,
    find_env_file,
    get_settings,
    load_env_file,
    reset_settings,
)
from ensek_check.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    parse_log_level,
    set_log_level,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "parse_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Configuration
    "ConfigurationError",
    "EnsekSettings",
    "describe_settings",
    "find_env_file",
    "get_settings",
    "load_env_file",
    "reset_settings",
]
