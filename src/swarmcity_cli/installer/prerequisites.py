"""Prerequisite detection for the init command.

This module checks that docker, the compose tool and git are installed
and answer a version query.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass

from ..errors import MissingPrerequisiteError
from ..shared.logging import get_logger
from .commands import COMMAND_NOT_FOUND, CommandRunner

logger = get_logger(__name__)

DOCKER_INSTALL_URL = "https://docs.docker.com/engine/installation/"
COMPOSE_INSTALL_URL = "https://docs.docker.com/compose/install/"
GIT_INSTALL_URL = "https://git-scm.com/book/en/v2/Getting-Started-Installing-Git"


@dataclass
class ToolCheck:
    """Result of checking one external tool."""

    name: str
    available: bool
    version: str | None = None
    returncode: int | None = None
    error: str | None = None
    hint: str = ""


@dataclass(frozen=True)
class ToolSpec:
    """How to query a tool and where to send the operator if it is missing."""

    name: str
    args: tuple[str, ...]
    hint: str


def default_tools(compose_args: list[str] | None = None) -> list[ToolSpec]:
    """Tools the installer needs, in the order they are checked."""
    compose = tuple(compose_args or ["docker-compose"])
    compose_name = " ".join(compose)
    return [
        ToolSpec(
            "docker",
            ("docker", "-v"),
            f"Use this guide to install docker in the system:\n\t{DOCKER_INSTALL_URL}\n"
            f"And this guide to install docker-compose in the system:\n\t{COMPOSE_INSTALL_URL}",
        ),
        ToolSpec(
            compose_name,
            compose + (("version",) if len(compose) > 1 else ("-v",)),
            f"Use this guide to install docker-compose in the system:\n\t{COMPOSE_INSTALL_URL}",
        ),
        ToolSpec(
            "git",
            ("git", "--version"),
            f"Use this guide to install git in the system:\n\t{GIT_INSTALL_URL}",
        ),
    ]


class PrerequisiteValidator:
    """Check docker, docker-compose and git availability."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        compose_args: list[str] | None = None,
    ):
        self.runner = runner or CommandRunner()
        self.tools = default_tools(compose_args)

    def check(self, tool: ToolSpec) -> ToolCheck:
        """Query a single tool."""
        if not shutil.which(tool.args[0]):
            return ToolCheck(
                tool.name,
                available=False,
                returncode=COMMAND_NOT_FOUND,
                error=f"{tool.name} command not found",
                hint=tool.hint,
            )

        result = self.runner.run(tool.args)
        if not result.ok:
            return ToolCheck(
                tool.name,
                available=False,
                returncode=result.returncode,
                error=result.stderr.strip() or f"{tool.name} command failed",
                hint=tool.hint,
            )
        return ToolCheck(tool.name, available=True, version=result.stdout.strip(), returncode=0)

    def validate_environment(self) -> list[ToolCheck]:
        """Check tools in order, stopping at the first missing one.

        Returns:
            ToolCheck for each tool when all are available.

        Raises:
            MissingPrerequisiteError: naming the first unavailable tool.
        """
        checks = []
        for tool in self.tools:
            check = self.check(tool)
            if not check.available:
                logger.error(
                    "prerequisite missing",
                    tool=check.name,
                    returncode=check.returncode,
                    stderr=check.error,
                )
                raise MissingPrerequisiteError(
                    message=f"{check.name} command not found,\nmsg: {check.returncode}, {check.error}",
                    tool=check.name,
                    returncode=check.returncode,
                    stderr=check.error or "",
                    hint=check.hint,
                )
            logger.info("prerequisite found", tool=check.name, version=check.version)
            checks.append(check)
        return checks
