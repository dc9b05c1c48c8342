"""Command-line entry point: run named queries against the local history."""

import logging
import sys

import click
from PySide6.QtCore import QCoreApplication

from claude_history.services.config_manager import ConfigManager, IndexConfig
from claude_history.services.query_service import QueryService
from claude_history.services.usage_aggregator import UsageStatisticsService

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _application() -> QCoreApplication:
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv[:1])
        app.setApplicationName("Claude History")
        app.setOrganizationName("claude-history")
        app.setOrganizationDomain("claude.local")
    return app


def _parse_params(pairs: tuple[str, ...]) -> dict[str, str]:
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}")
        params[key] = value
    return params


@click.group()
@click.option("--home", type=click.Path(file_okay=False), default=None,
              help="Home directory containing .claude (defaults to the configured path).")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, home: str | None, verbose: bool):
    """Query local Claude conversation history."""
    _application()
    settings = ConfigManager()
    debug = verbose or settings.get_bool("advanced/debugLogging")
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING, format=LOG_FORMAT)

    config = settings.index_config()
    if home:
        config = IndexConfig.from_home(
            home,
            history_limit=config.history_limit,
            search_limit=config.search_limit,
            monthly_token_limit=config.monthly_token_limit,
        )
    ctx.obj = config


@cli.command()
@click.argument("endpoint")
@click.argument("params", nargs=-1)
@click.pass_obj
def query(config: IndexConfig, endpoint: str, params: tuple[str, ...]):
    """Run ENDPOINT (history, stats, search, project, details, usage) with KEY=VALUE params."""
    click.echo(QueryService(config).handle(endpoint, _parse_params(params)))


@cli.command()
@click.argument("raw")
@click.pass_obj
def request(config: IndexConfig, raw: str):
    """Run a bridge-encoded request such as '/search|q=foo%20bar'."""
    click.echo(QueryService(config).handle_request(raw))


@cli.command()
@click.option("--scope", default="all", show_default=True,
              help="'all' or a project path.")
@click.pass_obj
def usage(config: IndexConfig, scope: str):
    """Aggregate token usage in the background and print the result."""
    app = _application()
    service = UsageStatisticsService(config.projects_dir, monthly_limit=config.monthly_token_limit)
    exit_code = []

    def on_ready(statistics_json: str):
        click.echo(statistics_json)
        exit_code.append(0)

    def on_error(message: str):
        click.echo(message, err=True)
        exit_code.append(1)

    service.statistics_ready.connect(on_ready)
    service.error_occurred.connect(on_error)
    service.busy_changed.connect(lambda busy: busy or app.quit())
    service.request_statistics(scope)
    app.exec()
    return exit_code[0] if exit_code else 1


def run() -> int:
    """Launch the CLI."""
    try:
        return cli.main(prog_name="claude-history", standalone_mode=False) or 0
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        return 1
