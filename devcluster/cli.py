"""Main CLI entry point for the development cluster."""

from collections.abc import Callable
from pathlib import Path

import click
import typer
from rich.markup import escape
from typer.core import TyperCommand, TyperGroup

from devcluster.exceptions import DevClusterError
from devcluster.lifecycle import ClusterLifecycle
from devcluster.logging_config import get_logger, setup_logging
from devcluster.models.cluster import ClusterConfig
from devcluster.output import console, print_error

logger = get_logger(__name__)

CLUSTER_CONFIG = ClusterConfig()

SERVICE_LABELS = {80: "HTTP", 443: "HTTPS"}


def render_usage(prog: str, config: ClusterConfig) -> str:
    """Build the usage text shown by help, -h/--help and unknown commands."""
    port_mappings = ", ".join(str(m) for m in config.port_mappings)
    endpoints = " or ".join(
        f"localhost:{m.host_port} ({SERVICE_LABELS.get(m.container_port, m.protocol)})"
        for m in config.port_mappings
    )
    return f"""Usage: {prog} [OPTIONS] <command>

Commands:
    create      Create a new kind cluster
    delete      Delete the kind cluster
    restart     Restart the kind cluster (delete + create)
    status      Show cluster status
    help        Show this help message

Options:
    -v, --verbose     Enable verbose logging
    --log-file PATH   Path to log file
    --version         Show version information
    -h, --help        Show this help message

Examples:
    {prog} create       # Create the cluster
    {prog} status       # Check if cluster is running
    {prog} delete       # Remove the cluster

The cluster is configured with:
  - Single control-plane node (resource-efficient)
  - Port mappings: {port_mappings}
  - Resource constraints for limited environments
  - Kind config: {config.config_path}

After creating the cluster:
  - kubectl is automatically configured
  - Context: {config.kube_context}
  - Access services at {endpoints}
"""


def _reject_usage(ctx: click.Context, message: str) -> None:
    print_error(escape(message))
    console.print()
    typer.echo(ctx.find_root().get_help())
    raise typer.Exit(code=1)


def _reject_command(ctx: click.Context, command: str) -> None:
    _reject_usage(ctx, f"Unknown command: {command}")


class DevClusterGroup(TyperGroup):
    """Command group that prints the plain usage text and exits 1 on unknown input."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        formatter.write(render_usage(ctx.command_path, CLUSTER_CONFIG))

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.NoSuchOption as e:
            _reject_command(ctx, e.option_name)

    def resolve_command(self, ctx: click.Context, args: list[str]):
        cmd_name = args[0]
        if self.get_command(ctx, cmd_name) is None and not ctx.resilient_parsing:
            _reject_command(ctx, cmd_name)
        return super().resolve_command(ctx, args)


class DevClusterCommand(TyperCommand):
    """Subcommand that reports bad arguments with the usage text and exit code 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            _reject_usage(ctx, e.format_message())


app = typer.Typer(
    name="devcluster",
    cls=DevClusterGroup,
    help="Manage the local kind development cluster",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        from devcluster import __version__

        typer.echo(f"devcluster version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: str | None = typer.Option(None, "--log-file", help="Path to log file"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information",
    ),
):
    """Global options for all commands."""
    log_path = Path(log_file) if log_file else None
    setup_logging(verbose=verbose, log_file=log_path)
    logger.debug("Logging initialized")

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    ctx.obj = ClusterLifecycle(CLUSTER_CONFIG)


def _run_operation(ctx: typer.Context, operation: Callable[[ClusterLifecycle], None]) -> None:
    """Check Docker, then run one lifecycle operation and map errors to exit codes."""
    lifecycle: ClusterLifecycle = ctx.obj
    try:
        lifecycle.check_docker()
        operation(lifecycle)
    except DevClusterError as e:
        logger.error(f"{operation.__name__} failed: {e.message}")
        print_error(e.message)
        if e.details:
            console.print(f"\n{e.details}")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(code=130)
    except Exception as e:
        logger.error(f"Unexpected error during {operation.__name__}: {e}", exc_info=True)
        print_error(f"Unexpected error: {e}")
        console.print("\nRun with --verbose --log-file debug.log for more details")
        raise typer.Exit(code=1)


@app.command(cls=DevClusterCommand)
def create(ctx: typer.Context) -> None:
    """Create a new kind cluster."""
    _run_operation(ctx, ClusterLifecycle.create)


@app.command(cls=DevClusterCommand)
def delete(ctx: typer.Context) -> None:
    """Delete the kind cluster."""
    _run_operation(ctx, ClusterLifecycle.delete)


@app.command(cls=DevClusterCommand)
def restart(ctx: typer.Context) -> None:
    """Restart the kind cluster (delete + create)."""
    _run_operation(ctx, ClusterLifecycle.restart)


@app.command(cls=DevClusterCommand)
def status(ctx: typer.Context) -> None:
    """Show cluster status."""
    _run_operation(ctx, ClusterLifecycle.status)


@app.command("help", cls=DevClusterCommand)
def show_help(ctx: typer.Context) -> None:
    """Show this help message."""
    typer.echo(ctx.find_root().get_help())


if __name__ == "__main__":
    app()
