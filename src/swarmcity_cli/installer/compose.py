"""docker-compose stack management.

Thin wrappers around the compose tool, run from the installation directory
so it picks up ``docker-compose.yaml`` and ``.env``.
"""

from __future__ import annotations

from pathlib import Path

from ..shared.paths import COMPOSE_FILE_NAME, INSTALL_DIR
from .commands import CommandResult, CommandRunner

# Lines of history shown before following logs
LOG_TAIL = 500

# Services that can be passed to `logs`
LOG_TARGETS = ("site", "api", "store", "proxy", "certs", "chain")


class ComposeStack:
    """Manage the docker-compose stack."""

    def __init__(
        self,
        compose_dir: Path | None = None,
        compose_command: list[str] | None = None,
        runner: CommandRunner | None = None,
    ):
        """Initialize stack manager.

        Args:
            compose_dir: Directory containing docker-compose.yaml.
                        Defaults to ~/.swarmcity_installer/
            compose_command: Compose program as an argument list.
                        Defaults to ["docker-compose"].
            runner: Command runner.
        """
        self.compose_dir = compose_dir or INSTALL_DIR
        self.compose_file = self.compose_dir / COMPOSE_FILE_NAME
        self.compose_command = list(compose_command or ["docker-compose"])
        self.runner = runner or CommandRunner()

    def _run(self, *args: str, capture: bool = True) -> CommandResult:
        return self.runner.run([*self.compose_command, *args], cwd=self.compose_dir, capture=capture)

    def ps(self) -> CommandResult:
        return self._run("ps")

    def up(self) -> CommandResult:
        """Start all services detached."""
        return self._run("up", "-d")

    def stop(self) -> CommandResult:
        return self._run("stop")

    def kill(self) -> CommandResult:
        return self._run("kill")

    def rm(self) -> list[CommandResult]:
        """Kill the stack, then remove stopped containers.

        Returns:
            Results in execution order; removal only runs if kill succeeded.
        """
        killed = self.kill()
        if not killed.ok:
            return [killed]
        return [killed, self._run("rm", "-f")]

    def pull(self) -> CommandResult:
        return self._run("pull")

    def build(self) -> CommandResult:
        return self._run("build")

    def logs(self, target: str | None = None) -> CommandResult:
        """Follow logs, all services or one target. Output goes to the terminal."""
        args = ["logs", "-f", f"--tail={LOG_TAIL}"]
        if target:
            args.append(target.lower())
        return self._run(*args, capture=False)
