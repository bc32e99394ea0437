"""Error taxonomy for the installer.

Each error says whether it ends the process (`fatal`) and may carry a
remediation hint for the operator.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class InstallerError(Exception):
    """Base error class for installer errors."""

    message: str
    fatal: bool = False
    hint: str = ""

    def __str__(self) -> str:
        return self.message


@dataclass
class MissingPrerequisiteError(InstallerError):
    """A required external tool is absent or not responding."""

    message: str = "Required tool not found"
    fatal: bool = True
    tool: str = ""
    returncode: int | None = None
    stderr: str = ""


@dataclass
class MissingConfigError(InstallerError):
    """A configuration file does not exist yet (run init)."""

    message: str = "Configuration file not found"
    path: Path | None = None


@dataclass
class ConfigParseError(InstallerError):
    """A configuration file exists but cannot be understood."""

    message: str = "Malformed configuration file"
    path: Path | None = None
    line: int | None = None


@dataclass
class ExternalProcessError(InstallerError):
    """An external command exited non-zero."""

    message: str = "External command failed"
    command: list[str] = field(default_factory=list)
    returncode: int | None = None
    stderr: str = ""
