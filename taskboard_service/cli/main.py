"""Main CLI entry point for taskboard-service management commands."""

import click

from taskboard_service import __version__
from taskboard_service.cli.commands import notifications
from taskboard_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="taskboard-service")
@click.option("--log-level", default=None, help="Override LOG_LEVEL for this run")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Taskboard Service CLI.

    \b
    Command Groups:
      notifications  Due-date notification digests

    \b
    Quick Start:
      taskboard-service notifications digest --user u1 --data boards.json
      taskboard-service notifications parse-date '{"from": 1700000000000}'
      taskboard-service serve
    """
    ctx.ensure_object(dict)
    # CLI output goes to stdout; keep logs on stderr and quiet by default
    overrides = {"log_level": log_level.upper()} if log_level else {"log_level": "WARNING"}
    setup_logging(json_logs=False, file_path=None, **overrides)


@cli.command(name="serve")
def serve() -> None:
    """Run the HTTP API with uvicorn (APP_HOST/APP_PORT)."""
    from taskboard_service.app.main import run

    run()


cli.add_command(notifications.notifications)


if __name__ == "__main__":
    cli()
