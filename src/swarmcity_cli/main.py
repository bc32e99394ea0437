"""CLI main entry point."""

import sys

import click

from . import __version__
from .config import ENV_VARS, load_config
from .errors import InstallerError
from .installer import LOG_TARGETS, Dispatcher, Operation
from .shared.logging import configure_logging, get_logger
from .shared.paths import ensure_dirs, get_log_file

logger = get_logger(__name__)


@click.group(invoke_without_command=True)
@click.version_option(__version__, "-v", "--version", prog_name="swarmcity")
@click.option(
    "--strict/--best-effort",
    default=None,
    help="Exit non-zero when a docker/git/npm command fails (default: best-effort)",
)
@click.option("--verbose", is_flag=True, help="Write debug entries to the log file")
@click.pass_context
def cli(ctx: click.Context, strict: bool | None, verbose: bool) -> None:
    """Install and manage the Swarm City stack."""
    ctx.ensure_object(dict)
    config = load_config()
    if strict is not None:
        config.strict = strict

    home = ensure_dirs(config.home)
    configure_logging("debug" if verbose else config.log_level, log_file=get_log_file(home))
    logger.debug("settings loaded", sources={key: config.get_source(key) for key in ENV_VARS})
    ctx.obj["config"] = config
    if "dispatcher" not in ctx.obj:
        ctx.obj["dispatcher"] = Dispatcher(
            base_dir=home,
            compose_command=config.compose_args,
            strict=config.strict,
        )

    if ctx.invoked_subcommand is None:
        _dispatch(ctx, None)


def _dispatch(ctx: click.Context, operation: Operation | None, target: str | None = None) -> None:
    dispatcher: Dispatcher = ctx.obj["dispatcher"]
    try:
        code = dispatcher.run(operation, target)
    except InstallerError as e:
        logger.error("operation failed", error=e.message, fatal=e.fatal)
        click.secho(f"Error {e.message}", fg="red", err=True)
        if e.hint:
            click.echo(e.hint)
        if e.fatal or dispatcher.strict:
            sys.exit(1)
        code = 0
    except KeyboardInterrupt:
        logger.info("cancelled by user", operation=operation.value if operation else None)
        click.echo("\nCancelled.")
        sys.exit(130)
    ctx.exit(code)


@cli.command()
@click.pass_context
def ps(ctx: click.Context) -> None:
    """Show running status."""
    _dispatch(ctx, Operation.PS)


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Initialize configurations and clone the sources."""
    _dispatch(ctx, Operation.INIT)


@cli.command()
@click.pass_context
def start(ctx: click.Context) -> None:
    """Start the Swarm City system."""
    _dispatch(ctx, Operation.START)


@cli.command()
@click.pass_context
def build(ctx: click.Context) -> None:
    """Build repos and docker images."""
    _dispatch(ctx, Operation.BUILD)


@cli.command()
@click.argument("name", required=False, type=click.Choice(LOG_TARGETS, case_sensitive=False))
@click.pass_context
def logs(ctx: click.Context, name: str | None) -> None:
    """Follow docker logs, for all services or NAME."""
    _dispatch(ctx, Operation.LOGS, name.lower() if name else None)


@cli.command()
@click.pass_context
def stop(ctx: click.Context) -> None:
    """Stop all running dockers."""
    _dispatch(ctx, Operation.STOP)


@cli.command()
@click.pass_context
def kill(ctx: click.Context) -> None:
    """Forcefully stop all running dockers."""
    _dispatch(ctx, Operation.KILL)


@cli.command()
@click.pass_context
def rm(ctx: click.Context) -> None:
    """Clear all stopped docker containers."""
    _dispatch(ctx, Operation.RM)


@cli.command()
@click.pass_context
def pull(ctx: click.Context) -> None:
    """Pull all docker images from a docker registry."""
    _dispatch(ctx, Operation.PULL)


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
