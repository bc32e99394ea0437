"""Source Fetcher - clone the site and API repositories."""

from __future__ import annotations

from pathlib import Path

import click

from ..shared.logging import get_logger
from .commands import CommandResult, CommandRunner

logger = get_logger(__name__)


def repo_dir_name(url: str) -> str:
    """Directory ``git clone`` creates for a repository URL."""
    name = url.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


def report_failure(result: CommandResult, stage: str) -> None:
    """Log and echo a failed command with its exit code and stderr."""
    logger.error(
        "command failed",
        stage=stage,
        command=result.args,
        returncode=result.returncode,
        stderr=result.stderr.strip(),
    )
    click.secho(f"Error Code: {result.returncode}, msg: {result.stderr.strip()}", fg="red", err=True)


class SourceFetcher:
    """Clone the two source repositories into the workspace."""

    def __init__(self, runner: CommandRunner | None = None):
        self.runner = runner or CommandRunner()

    def clone(self, url: str, workspace: Path, label: str) -> bool:
        click.echo(f"Cloning {label} repo...")
        result = self.runner.run(["git", "clone", url], cwd=workspace)
        if not result.ok:
            report_failure(result, f"clone {label}")
            return False
        logger.info("repository cloned", repo=url, workspace=str(workspace))
        return True

    def fetch(self, workspace: Path, site_repo: str, api_repo: str) -> bool:
        """Clone the site repository, then the API repository.

        Stops at the first failed clone. A site checkout is left in place if
        the API clone fails.

        Returns:
            True if both repositories were cloned.
        """
        try:
            workspace.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("workspace not usable", workspace=str(workspace), error=str(e))
            click.secho(f"ERROR: cannot create workspace {workspace}: {e.strerror or e}", fg="red", err=True)
            return False
        if not self.clone(site_repo, workspace, "Site"):
            return False
        return self.clone(api_repo, workspace, "API")
