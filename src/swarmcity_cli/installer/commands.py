"""External command invocation.

Every external program (docker, compose tool, git, npm) is run through
CommandRunner with an argument list, never a shell string.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import ExternalProcessError

# Exit status a shell reports for an unknown command
COMMAND_NOT_FOUND = 127


@dataclass
class CommandResult:
    """Outcome of one external command."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    cwd: Path | None = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def combined_output(self) -> str:
        """stdout followed by stderr, as a terminal would show them."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)

    def raise_for_status(self) -> None:
        """Raise ExternalProcessError if the command failed."""
        if not self.ok:
            raise ExternalProcessError(
                message=f"{' '.join(self.args)} exited with code {self.returncode}",
                command=list(self.args),
                returncode=self.returncode,
                stderr=self.stderr.strip(),
            )


class CommandRunner:
    """Run external commands and collect their output."""

    def run(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        """Run a command to completion.

        Args:
            args: Program and arguments.
            cwd: Working directory for the child.
            env: Extra environment variables merged over os.environ.
            capture: If False the child writes straight to the terminal
                (used for following logs).

        Returns:
            CommandResult. A missing program is reported as exit code 127
            rather than raised.
        """
        argv = [str(a) for a in args]
        child_env = None
        if env:
            child_env = {**os.environ, **env}

        try:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                env=child_env,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError as e:
            return CommandResult(argv, COMMAND_NOT_FOUND, stderr=str(e), cwd=cwd)
        except PermissionError as e:
            return CommandResult(argv, 126, stderr=str(e), cwd=cwd)

        return CommandResult(
            argv,
            completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            cwd=cwd,
        )
