"""Installer settings management.

Handles persistent installer settings stored in ~/.swarmcity_installer/config.yaml.
Supports environment variable overrides; CLI flags take precedence over both.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .shared.paths import INSTALL_DIR, SETTINGS_FILE_NAME

# Default values
DEFAULT_COMPOSE_COMMAND = "docker-compose"
DEFAULT_LOG_LEVEL = "info"

# Environment variable mappings
ENV_VARS = {
    "home": "SWARMCITY_HOME",
    "strict": "SWARMCITY_STRICT",
    "log_level": "SWARMCITY_LOG_LEVEL",
    "compose_command": "SWARMCITY_COMPOSE_COMMAND",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class InstallerConfig:
    """Installer settings."""

    home: Path = INSTALL_DIR
    strict: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    compose_command: str = DEFAULT_COMPOSE_COMMAND

    # Track where each value came from
    _sources: dict[str, str] = field(default_factory=dict)

    def get_source(self, key: str) -> str:
        """Get the source of a config value."""
        return self._sources.get(key, "default")

    @property
    def compose_args(self) -> list[str]:
        """Compose command as an argument list (``docker compose`` -> 2 args)."""
        return self.compose_command.split()


def get_config_path() -> Path:
    """Get the installer settings file path.

    Returns:
        Path to config.yaml in $SWARMCITY_HOME or ~/.swarmcity_installer/
    """
    home = os.environ.get(ENV_VARS["home"])
    base = Path(home).expanduser() if home else INSTALL_DIR
    return base / SETTINGS_FILE_NAME


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def load_config() -> InstallerConfig:
    """Load installer settings.

    Precedence (highest to lowest):
    1. Environment variables
    2. Config file (~/.swarmcity_installer/config.yaml)
    3. Defaults

    Returns:
        InstallerConfig with values and sources
    """
    config = InstallerConfig()
    sources: dict[str, str] = {key: "default" for key in ENV_VARS}

    config_path = get_config_path()
    if config_path.exists():
        try:
            with open(config_path) as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            file_config = {}  # Unreadable settings, keep defaults
        if not isinstance(file_config, dict):
            file_config = {}

        if "home" in file_config:
            config.home = Path(str(file_config["home"])).expanduser()
            sources["home"] = "config file"
        if "strict" in file_config:
            config.strict = _as_bool(file_config["strict"])
            sources["strict"] = "config file"
        if "log_level" in file_config:
            config.log_level = str(file_config["log_level"])
            sources["log_level"] = "config file"
        if "compose_command" in file_config:
            config.compose_command = str(file_config["compose_command"])
            sources["compose_command"] = "config file"

    if os.environ.get(ENV_VARS["home"]):
        config.home = Path(os.environ[ENV_VARS["home"]]).expanduser()
        sources["home"] = "environment"
    if os.environ.get(ENV_VARS["strict"]):
        config.strict = _as_bool(os.environ[ENV_VARS["strict"]])
        sources["strict"] = "environment"
    if os.environ.get(ENV_VARS["log_level"]):
        config.log_level = os.environ[ENV_VARS["log_level"]]
        sources["log_level"] = "environment"
    if os.environ.get(ENV_VARS["compose_command"]):
        config.compose_command = os.environ[ENV_VARS["compose_command"]]
        sources["compose_command"] = "environment"

    config._sources = sources
    return config
