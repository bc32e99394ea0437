"""Shared modules for swarmcity-installer.

This module provides functionality used by every command:
- Installation directory layout
- Logging to the installer log file
"""

from .logging import configure_logging, get_logger
from .paths import (
    COMPOSE_FILE_NAME,
    DEFAULT_WORKSPACE,
    DEPLOY_CONFIG_NAME,
    INSTALL_DIR,
    LOG_FILE_NAME,
    PLATFORM_CONFIG_NAME,
    SETTINGS_FILE_NAME,
    ensure_dirs,
    get_log_file,
)

__all__ = [
    # Paths
    "INSTALL_DIR",
    "DEPLOY_CONFIG_NAME",
    "PLATFORM_CONFIG_NAME",
    "COMPOSE_FILE_NAME",
    "LOG_FILE_NAME",
    "SETTINGS_FILE_NAME",
    "DEFAULT_WORKSPACE",
    "ensure_dirs",
    "get_log_file",
    # Logging
    "configure_logging",
    "get_logger",
]
