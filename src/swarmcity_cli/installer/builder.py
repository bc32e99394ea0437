"""Builder - build the cloned projects and the container images.

Stages run in order and the first failure stops the rest:

1. site: npm install, bower install, webpack bundle
2. api: npm install
3. images: compose build
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import click

from ..shared.logging import get_logger
from .commands import CommandResult, CommandRunner
from .compose import ComposeStack
from .sources import repo_dir_name, report_failure
from .store import DeploymentConfig

logger = get_logger(__name__)

SITE_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("npm", "install", "--verbose"),
    ("node_modules/bower/bin/bower", "install"),
    ("node", "node_modules/webpack/bin/webpack.js"),
)
SITE_ENV = {"NODE_ENV": "dev"}

API_COMMANDS: tuple[tuple[str, ...], ...] = (("npm", "install", "--verbose"),)


@dataclass
class BuildStage:
    """One named build stage."""

    name: str
    run: Callable[[], list[CommandResult]]
    results: list[CommandResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.results) and all(r.ok for r in self.results)


class Builder:
    """Build site, API and images for a deployment."""

    def __init__(self, runner: CommandRunner | None = None, stack: ComposeStack | None = None):
        self.runner = runner or CommandRunner()
        self.stack = stack or ComposeStack(runner=self.runner)

    def _run_all(
        self,
        commands: Sequence[Sequence[str]],
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> list[CommandResult]:
        results = []
        for args in commands:
            result = self.runner.run(args, cwd=cwd, env=env)
            results.append(result)
            if not result.ok:
                break
        return results

    def stages(self, deployment: DeploymentConfig) -> list[BuildStage]:
        site_dir = deployment.workspace / repo_dir_name(deployment.site_repo)
        api_dir = deployment.workspace / repo_dir_name(deployment.api_repo)
        return [
            BuildStage(
                f"Building {site_dir.name} code base",
                lambda: self._run_all(SITE_COMMANDS, site_dir, SITE_ENV),
            ),
            BuildStage(
                f"Building {api_dir.name} code base",
                lambda: self._run_all(API_COMMANDS, api_dir),
            ),
            BuildStage("Building docker-compose images", lambda: [self.stack.build()]),
        ]

    def build(self, deployment: DeploymentConfig) -> bool:
        """Run every stage in order, stopping at the first failure.

        Returns:
            True if all stages succeeded. Failures are logged, never raised.
        """
        for stage in self.stages(deployment):
            click.echo(stage.name)
            stage.results = stage.run()
            for result in stage.results:
                if result.stdout:
                    click.echo(result.stdout)
                logger.info(stage.name, command=result.args, output=result.combined_output)
            if not stage.ok:
                report_failure(stage.results[-1], stage.name)
                return False
        return True
