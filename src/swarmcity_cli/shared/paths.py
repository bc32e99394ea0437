"""Path management for swarmcity-installer.

Manages ~/.swarmcity_installer/ directory structure for all commands.
"""

from pathlib import Path

# Base directory for all installer data
INSTALL_DIR = Path.home() / ".swarmcity_installer"

# Deployment config, read by docker-compose as its project .env
DEPLOY_CONFIG_NAME = ".env"

PLATFORM_CONFIG_NAME = "platform.env"

COMPOSE_FILE_NAME = "docker-compose.yaml"

LOG_FILE_NAME = "swarmCity.log"

# Installer settings (strict mode, compose command, ...)
SETTINGS_FILE_NAME = "config.yaml"

# Default workspace offered on first init
DEFAULT_WORKSPACE = Path.home() / "Swarmdev"


def ensure_dirs(base_dir: Path | None = None) -> Path:
    """Create the installation directory if missing.

    Called once on CLI startup so the log file can be opened.
    No wizard, no prompts - silent creation.

    Returns:
        The installation directory.
    """
    base = base_dir or INSTALL_DIR
    base.mkdir(mode=0o700, parents=True, exist_ok=True)
    return base


def get_log_file(base_dir: Path | None = None) -> Path:
    """Get path to the append-only installer log."""
    return (base_dir or INSTALL_DIR) / LOG_FILE_NAME
