"""Process Dispatcher - run exactly one installer operation.

Sequencing for every invocation:

    Idle -> (init only) PrerequisitesChecked -> ConfigLoaded
         -> OperationRunning -> Done

Any step may end in Aborted instead. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import click

from .. import __version__
from ..errors import ConfigParseError, ExternalProcessError, MissingConfigError
from ..shared.logging import get_logger
from .builder import Builder
from .commands import CommandResult, CommandRunner
from .compose import ComposeStack
from .prerequisites import PrerequisiteValidator
from .prompts import InstallSettings, InteractiveCollector
from .sources import SourceFetcher, report_failure
from .store import ConfigStore, DeploymentConfig, PlatformConfig

logger = get_logger(__name__)

SITE_URL = "http://localhost:8081"

BANNER = r"""
  ___                            ___ _ _
 / __|_ __ ____ _ _ _ _ __      / __(_) |_ _  _
 \__ \ V  V / _` | '_| '  \  _ | (__| |  _| || |
 |___/\_/\_/\__,_|_| |_|_|_|(_) \___|_|\__|\_, |
                                           |__/
"""


class Operation(Enum):
    """Operations the installer can run; one per invocation."""

    PS = "ps"
    INIT = "init"
    START = "start"
    BUILD = "build"
    LOGS = "logs"
    STOP = "stop"
    KILL = "kill"
    RM = "rm"
    PULL = "pull"


class DispatchState(Enum):
    """Where the dispatcher is in its sequence."""

    IDLE = "idle"
    PREREQUISITES_CHECKED = "prerequisites_checked"
    CONFIG_LOADED = "config_loaded"
    OPERATION_RUNNING = "operation_running"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class LoadedConfig:
    """Both config files, as read at the start of an operation."""

    deployment: DeploymentConfig
    platform: PlatformConfig


def show_banner() -> None:
    click.secho(BANNER, fg="yellow", bold=True)
    click.secho(f"{__version__:>48}", fg="yellow")


def show_usage() -> None:
    click.echo("Usage: " + click.style("swarmcity [command]", fg="red"))
    click.echo("       " + click.style("swarmcity --help", fg="red") + "\t to view available commands\n")


class Dispatcher:
    """Map an Operation to its pipeline of installer components."""

    def __init__(
        self,
        base_dir: Path | None = None,
        compose_command: list[str] | None = None,
        strict: bool = False,
        runner: CommandRunner | None = None,
        collector: InteractiveCollector | None = None,
    ):
        """Initialize the dispatcher.

        Args:
            base_dir: Installation directory (default: ~/.swarmcity_installer)
            compose_command: Compose program as an argument list.
            strict: If True, failed external commands give exit code 1.
                Otherwise they are only logged and the exit code stays 0.
            runner: Command runner shared by every component.
            collector: Prompt implementation for init.
        """
        self.runner = runner or CommandRunner()
        self.store = ConfigStore(base_dir)
        self.stack = ComposeStack(self.store.base_dir, compose_command, self.runner)
        self.validator = PrerequisiteValidator(self.runner, self.stack.compose_command)
        self.fetcher = SourceFetcher(self.runner)
        self.builder = Builder(self.runner, self.stack)
        self.collector = collector or InteractiveCollector()
        self.strict = strict
        self.state = DispatchState.IDLE

    def _exit_code(self, success: bool) -> int:
        if success or not self.strict:
            return 0
        return 1

    def _abort(self, success: bool = True) -> int:
        self.state = DispatchState.ABORTED
        return self._exit_code(success)

    def run(self, operation: Operation | None, target: str | None = None) -> int:
        """Run one operation.

        Returns:
            Process exit code.

        Raises:
            MissingPrerequisiteError: init found a required tool missing.
        """
        self.state = DispatchState.IDLE
        if operation is None:
            show_banner()
            show_usage()
            return self._abort()

        logger.info("operation selected", operation=operation.value, target=target)

        if operation is Operation.INIT:
            return self.init()

        if not self.store.has_deployment_config():
            click.echo("Run " + click.style("swarmcity init", fg="red") + " to initialize the system")
            return self._abort()

        try:
            config = self.load_config()
        except (MissingConfigError, ConfigParseError) as e:
            logger.error("configuration load failed", error=e.message)
            click.secho(f"ERROR: {e.message}", fg="red", err=True)
            return self._abort(success=False)
        self.state = DispatchState.CONFIG_LOADED

        self.state = DispatchState.OPERATION_RUNNING
        if operation is Operation.BUILD:
            success = self.builder.build(config.deployment)
        else:
            success = self._orchestrate(operation, target)
        self.state = DispatchState.DONE
        return self._exit_code(success)

    def load_config(self) -> LoadedConfig:
        return LoadedConfig(
            deployment=self.store.load_deployment_config(),
            platform=self.store.load_platform_config(),
        )

    def _orchestrate(self, operation: Operation, target: str | None) -> bool:
        """Run the compose subcommand(s) for an operation."""
        if operation is Operation.START:
            click.echo("Starting up docker containers... ")
            results = [self.stack.up()]
        elif operation is Operation.PS:
            results = [self.stack.ps()]
        elif operation is Operation.STOP:
            results = [self.stack.stop()]
        elif operation is Operation.KILL:
            results = [self.stack.kill()]
        elif operation is Operation.RM:
            results = self.stack.rm()
        elif operation is Operation.PULL:
            click.echo("Pulling docker images... ")
            results = [self.stack.pull()]
        elif operation is Operation.LOGS:
            results = [self.stack.logs(target)]
        else:
            raise ValueError(f"Unknown operation: {operation}")

        try:
            for result in results:
                self._log_result(result)
                result.raise_for_status()
        except ExternalProcessError as e:
            report_failure(results[-1], operation.value)
            logger.debug("operation failed", error=e.message)
            return False

        if operation is Operation.START:
            click.secho("Now you can access to the web on this address:", fg="blue")
            click.secho(SITE_URL, fg="white", bg="blue", underline=True)
        return True

    def _log_result(self, result: CommandResult) -> None:
        if result.stdout:
            click.echo(result.stdout)
        logger.info(" ".join(result.args), output=result.combined_output, returncode=result.returncode)

    def _load_existing(self, loader):
        """Previous answers to seed the prompts, or None on first run."""
        try:
            return loader()
        except MissingConfigError:
            return None
        except ConfigParseError as e:
            logger.error("ignoring existing configuration", error=e.message)
            click.secho(f"ERROR: {e.message}", fg="red", err=True)
            return None

    def init(self) -> int:
        """Check prerequisites, collect answers, write config, clone sources.

        Declining the confirmation leaves every config file as it was.
        """
        self.validator.validate_environment()
        self.state = DispatchState.PREREQUISITES_CHECKED

        deployment = self._load_existing(self.store.load_deployment_config)
        platform = self._load_existing(self.store.load_platform_config)
        self.state = DispatchState.CONFIG_LOADED

        show_banner()
        settings = self.collector.collect(InstallSettings.defaults(deployment, platform))
        if not self.collector.confirm():
            logger.info("installation declined")
            return self._abort()

        self.state = DispatchState.OPERATION_RUNNING
        click.echo("Starting installation...")
        logger.info("starting installation")

        click.echo("Updating configurations... ")
        try:
            self.store.write_initial_config(
                settings.installation_type,
                settings.debug,
                settings.site_hostname,
                settings.workspace,
            )
        except OSError as e:
            logger.error("configuration write failed", base_dir=str(self.store.base_dir), error=str(e))
            click.secho(f"ERROR: cannot write configuration: {e}", fg="red", err=True)
            return self._abort(success=False)
        deployment = self.store.load_deployment_config()
        success = self.fetcher.fetch(deployment.workspace, deployment.site_repo, deployment.api_repo)
        self.state = DispatchState.DONE
        return self._exit_code(success)
