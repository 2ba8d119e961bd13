# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands to serve the API, inspect each endpoint's data and manage the cache

import json as jsonlib

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from crewbase.aggregator import AggregationError, Aggregator
from crewbase.config import get_config
from crewbase.utils.logging import LoggingMode, configure_logging, get_logger, get_logging_status
from crewbase.utils.rich_tables import (
    create_cache_status_table,
    create_logging_status_table,
    create_role_catalog_table,
    create_sheet_summary_table,
    create_videos_table,
    print_rich_table,
)

console = Console()
logger = get_logger(__name__)


def _build_aggregator() -> Aggregator:
    return Aggregator.from_config(get_config())


def _print_json(payload) -> None:
    click.echo(jsonlib.dumps(payload, indent=2, ensure_ascii=False))


async def _load(loader, failure_message: str):
    """Run one aggregator call, reporting total failure instead of raising."""
    try:
        return await loader()
    except AggregationError as e:
        logger.error(failure_message, error=str(e))
        console.print(f"[red]❌ {failure_message}: {e}[/red]")
        return None


@click.command()
@click.option("--host", default=None, help="Bind address (defaults to config)")
@click.option("--port", type=int, default=None, help="Port (defaults to config)")
async def serve(host: str | None, port: int | None):
    """
    🌐 Serve the aggregated endpoints over HTTP.
    """
    from crewbase.api import run_server

    config = get_config()
    final_host = host or config.host
    final_port = port or config.port

    console.print(
        Panel.fit(f"🚀 [bold cyan]crewbase[/bold cyan] on {final_host}:{final_port}", border_style="magenta")
    )
    await run_server(_build_aggregator(), host=final_host, port=final_port)


@click.command()
@click.pass_context
async def videos(ctx):
    """
    🎬 Show playlist videos with their players, roles and maps.
    """
    aggregator = _build_aggregator()
    try:
        result = await _load(aggregator.get_videos, "Failed to fetch video data")
    finally:
        await aggregator.close()
    if result is None:
        ctx.exit(1)

    if ctx.obj["json_output"]:
        _print_json([video.model_dump(by_alias=True) for video in result])
    else:
        print_rich_table(console, create_videos_table(result))


@click.command()
@click.pass_context
async def sheet(ctx):
    """
    📊 Show the spreadsheet tabs.
    """
    aggregator = _build_aggregator()
    try:
        result = await _load(aggregator.get_sheet_data, "Failed to fetch sheet data")
    finally:
        await aggregator.close()
    if result is None:
        ctx.exit(1)

    if ctx.obj["json_output"]:
        _print_json([tab.model_dump() for tab in result])
    else:
        print_rich_table(console, create_sheet_summary_table(result))


@click.command()
@click.pass_context
async def roles(ctx):
    """
    🎭 Show the role catalog merged from every role document.
    """
    aggregator = _build_aggregator()
    try:
        result = await _load(aggregator.get_roles, "Failed to fetch role data")
    finally:
        await aggregator.close()
    if result is None:
        ctx.exit(1)

    if ctx.obj["json_output"]:
        _print_json(result.model_dump())
    else:
        print_rich_table(console, create_role_catalog_table(result))


@click.command()
async def reset():
    """
    🧹 Delete every cached source, in memory and on disk.
    """
    aggregator = _build_aggregator()
    try:
        aggregator.reset()
    finally:
        await aggregator.close()
    console.print("[green]✅ Cache cleared[/green]")


@click.command(name="cache-status")
@click.pass_context
async def cache_status(ctx):
    """
    💾 Show age and staleness of each cached source.
    """
    aggregator = _build_aggregator()
    try:
        status = aggregator.cache_status()
    finally:
        await aggregator.close()

    if ctx.obj["json_output"]:
        _print_json(status)
    else:
        print_rich_table(console, create_cache_status_table(status))


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    print_rich_table(console, create_logging_status_table(status))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else config.log_mode

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output JSON instead of rich tables")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🛰️ crewbase - cached Among Us mod videos, match sheets and role catalogs

    Aggregates a YouTube playlist, a match spreadsheet and three role
    documents, caching each source on disk.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(serve)
app.add_command(videos)
app.add_command(sheet)
app.add_command(roles)
app.add_command(reset)
app.add_command(cache_status)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
