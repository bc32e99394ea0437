"""Shared test fixtures for swarmcity-installer tests.

This module provides fixtures for testing the installer without running
docker, git or npm:
- FakeRunner: records every command and returns scripted exit codes
- FakeCollector: answers the init prompts
- install_dir: installation directory holding valid config files
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from swarmcity_cli.installer import CommandResult, CommandRunner, InstallSettings
from swarmcity_cli.shared.logging import configure_logging

SITE_REPO = "https://github.com/swarmcity/SwarmCitySite.git"
API_REPO = "https://github.com/swarmcity/SwarmCityAPI.git"

# =============================================================================
# Fake external commands
# =============================================================================


@dataclass
class RecordedCall:
    """One command the code under test asked to run."""

    args: list[str]
    cwd: Path | None = None
    env: dict[str, str] | None = None
    capture: bool = True


@dataclass
class FakeRunner(CommandRunner):
    """CommandRunner that never spawns a process.

    ``failures`` maps an argument prefix to the exit code returned for any
    command starting with it.
    """

    failures: dict[tuple[str, ...], int] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)

    def run(self, args: Sequence[str], cwd=None, env=None, capture=True) -> CommandResult:
        argv = [str(a) for a in args]
        self.calls.append(RecordedCall(argv, cwd, dict(env) if env else None, capture))
        for prefix, code in self.failures.items():
            if tuple(argv[: len(prefix)]) == prefix:
                return CommandResult(argv, code, stdout="", stderr="simulated failure", cwd=cwd)
        return CommandResult(argv, 0, stdout=f"ran {' '.join(argv)}", stderr="", cwd=cwd)

    @property
    def commands(self) -> list[list[str]]:
        return [call.args for call in self.calls]


@dataclass
class FakeCollector:
    """Answers init prompts without a terminal."""

    answers: InstallSettings | None = None
    accept: bool = True
    seen_defaults: InstallSettings | None = None
    confirm_calls: int = 0

    def collect(self, defaults: InstallSettings) -> InstallSettings:
        self.seen_defaults = defaults
        return self.answers or defaults

    def confirm(self) -> bool:
        self.confirm_calls += 1
        return self.accept


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _logging():
    """Send structlog output to stderr for every test."""
    configure_logging("debug")


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def workspace(tmp_path) -> Path:
    return tmp_path / "Swarmdev"


def write_config(base: Path, workspace: Path, hostname: str = "swarm.example.com") -> None:
    """Write deployment, platform and compose files into base."""
    base.mkdir(parents=True, exist_ok=True)
    (base / ".env").write_text(
        f"WORKSPACE={workspace}\nSITE_REPO={SITE_REPO}\nAPI_REPO={API_REPO}\n"
    )
    (base / "platform.env").write_text(f"DEBUG=Enable\nSITE_HOSTNAME={hostname}\n")
    (base / "docker-compose.yaml").write_text(
        "version: '2'\nservices:\n  site:\n    image: test\n  api:\n    image: test\n"
    )


@pytest.fixture
def install_dir(tmp_path, workspace) -> Path:
    """Installation directory with a complete, valid configuration."""
    base = tmp_path / ".swarmcity_installer"
    write_config(base, workspace)
    return base


@pytest.fixture
def empty_install_dir(tmp_path) -> Path:
    """Installation directory before init has run."""
    base = tmp_path / ".swarmcity_installer"
    base.mkdir()
    return base
