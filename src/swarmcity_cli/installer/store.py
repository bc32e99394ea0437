"""Configuration store for the installer.

Reads and writes the flat key=value files kept in the installation
directory:

- ``.env``: deployment config (workspace, repository URLs). docker-compose
  reads it as the project env file, so ``${WORKSPACE}`` resolves in the
  compose templates.
- ``platform.env``: platform config (debug flag, site hostname).
- ``docker-compose.yaml``: copy of the template for the installation type.
"""

from __future__ import annotations

import re
import shutil
from dataclasses import dataclass
from enum import Enum
from importlib.resources import files
from pathlib import Path

from ..errors import ConfigParseError, MissingConfigError
from ..shared.logging import get_logger
from ..shared.paths import (
    COMPOSE_FILE_NAME,
    DEPLOY_CONFIG_NAME,
    INSTALL_DIR,
    PLATFORM_CONFIG_NAME,
)
from .validators import validate_hostname

logger = get_logger(__name__)

DEPLOY_TEMPLATE = "deployment.env.dist"
PLATFORM_TEMPLATE = "platform.env.example"

DEBUG_ENABLE = "Enable"
DEBUG_DISABLE = "Disable"

_SEPARATOR = re.compile(r"\s*[=:]\s*")


class InstallationType(Enum):
    """Kind of installation, selects compose template and debug default."""

    DEVELOPMENT = "Development"
    PRODUCTION = "Production"

    @property
    def compose_template(self) -> str:
        if self is InstallationType.DEVELOPMENT:
            return "docker-compose.dev.yaml"
        return "docker-compose.prod.yaml"

    @property
    def debug(self) -> str:
        return DEBUG_ENABLE if self is InstallationType.DEVELOPMENT else DEBUG_DISABLE


@dataclass(frozen=True)
class DeploymentConfig:
    """Workspace location and source repositories."""

    workspace: Path
    site_repo: str
    api_repo: str


@dataclass(frozen=True)
class PlatformConfig:
    """Runtime settings passed to the containers."""

    debug: str
    site_hostname: str

    @property
    def debug_enabled(self) -> bool:
        return self.debug.strip().lower() in ("enable", "enabled", "true", "1", "yes")


def parse_properties(text: str, path: Path | None = None) -> dict[str, str]:
    """Parse key=value (or key: value) lines.

    Blank lines and lines starting with ``#`` or ``!`` are skipped. Matching
    surrounding quotes are removed from values.

    Raises:
        ConfigParseError: on a line with no separator or an empty key.
    """
    data: dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        parts = _SEPARATOR.split(line, maxsplit=1)
        if len(parts) != 2 or not parts[0]:
            raise ConfigParseError(
                message=f"{path or '<config>'}:{lineno}: expected KEY=VALUE, got {raw!r}",
                path=path,
                line=lineno,
            )
        key, value = parts
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        data[key] = value
    return data


def set_property(text: str, key: str, value: str) -> str:
    """Rewrite the first ``KEY=...`` line, leaving every other line untouched.

    The key is appended when absent.
    """
    lines = text.splitlines(keepends=True)
    pattern = re.compile(rf"^\s*{re.escape(key)}\s*[=:]")
    for i, line in enumerate(lines):
        if pattern.match(line):
            newline = "\n" if line.endswith("\n") else ""
            lines[i] = f"{key}={value}{newline}"
            return "".join(lines)

    if lines and not lines[-1].endswith("\n"):
        lines[-1] += "\n"
    lines.append(f"{key}={value}\n")
    return "".join(lines)


def template_path(name: str):
    """Locate a bundled template file."""
    return files("swarmcity_cli") / "templates" / name


def _require(data: dict[str, str], key: str, path: Path) -> str:
    value = data.get(key, "").strip()
    if not value:
        raise ConfigParseError(message=f"{path}: missing value for {key}", path=path)
    return value


class ConfigStore:
    """Load and write the installer's configuration files."""

    def __init__(self, base_dir: Path | None = None):
        """Initialize the store.

        Args:
            base_dir: Installation directory. Defaults to ~/.swarmcity_installer/
        """
        self.base_dir = base_dir or INSTALL_DIR
        self.deploy_file = self.base_dir / DEPLOY_CONFIG_NAME
        self.platform_file = self.base_dir / PLATFORM_CONFIG_NAME
        self.compose_file = self.base_dir / COMPOSE_FILE_NAME

    def has_deployment_config(self) -> bool:
        return self.deploy_file.is_file()

    def _read(self, path: Path) -> dict[str, str]:
        if not path.is_file():
            raise MissingConfigError(message=f"{path} file not found!", path=path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(message=f"{path}: {e}", path=path) from e
        return parse_properties(text, path)

    def load_deployment_config(self) -> DeploymentConfig:
        """Read the deployment config.

        Raises:
            MissingConfigError: file absent.
            ConfigParseError: malformed file or relative WORKSPACE.
        """
        data = self._read(self.deploy_file)
        workspace = Path(_require(data, "WORKSPACE", self.deploy_file)).expanduser()
        if not workspace.is_absolute():
            raise ConfigParseError(
                message=f"{self.deploy_file}: WORKSPACE must be an absolute path",
                path=self.deploy_file,
            )
        return DeploymentConfig(
            workspace=workspace,
            site_repo=_require(data, "SITE_REPO", self.deploy_file),
            api_repo=_require(data, "API_REPO", self.deploy_file),
        )

    def load_platform_config(self) -> PlatformConfig:
        """Read the platform config.

        Raises:
            MissingConfigError: file absent.
            ConfigParseError: malformed file or invalid SITE_HOSTNAME.
        """
        data = self._read(self.platform_file)
        hostname = _require(data, "SITE_HOSTNAME", self.platform_file)
        if validate_hostname(hostname) is not True:
            raise ConfigParseError(
                message=f"{self.platform_file}: SITE_HOSTNAME {hostname!r} is not a valid hostname",
                path=self.platform_file,
            )
        return PlatformConfig(
            debug=data.get("DEBUG", DEBUG_ENABLE).strip() or DEBUG_ENABLE,
            site_hostname=hostname,
        )

    def write_initial_config(
        self,
        installation_type: InstallationType,
        debug: str,
        hostname: str,
        workspace: Path | str,
    ) -> None:
        """Write all config files from templates, then set the collected values.

        Always overwrites existing files.

        Raises:
            OSError: the installation directory or a file in it is not writable.
        """
        self.base_dir.mkdir(parents=True, exist_ok=True)
        logger.info(
            "updating configurations",
            installation_type=installation_type.value,
            hostname=hostname,
            workspace=str(workspace),
        )

        platform_text = template_path(PLATFORM_TEMPLATE).read_text(encoding="utf-8")
        platform_text = set_property(platform_text, "DEBUG", debug)
        platform_text = set_property(platform_text, "SITE_HOSTNAME", hostname)
        self.platform_file.write_text(platform_text, encoding="utf-8")

        deploy_text = template_path(DEPLOY_TEMPLATE).read_text(encoding="utf-8")
        deploy_text = set_property(deploy_text, "WORKSPACE", str(workspace))
        self.deploy_file.write_text(deploy_text, encoding="utf-8")

        with template_path(installation_type.compose_template).open("rb") as src:
            with open(self.compose_file, "wb") as dst:
                shutil.copyfileobj(src, dst)
