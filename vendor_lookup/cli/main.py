"""
Core CLI implementation for the vendor lookup package.
"""

import click
from pathlib import Path

from .config import Config
from .logging import setup_logging, get_logger
from ..commands import LookupCommand, TableCommand, WatchCommand
from ..render import OUTPUT_FORMATS


@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.option('--source', type=str, default=None, help='CSV path or http(s) URL (overrides VENDOR_LOOKUP_SOURCE)')
@click.option('--format', 'output_format', type=click.Choice(OUTPUT_FORMATS), default=None, help='Output format')
@click.option('--env-file', type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help='Load settings from this .env file')
@click.pass_context
def cli(ctx, debug: bool, source: str | None, output_format: str | None, env_file: Path | None):
    """Customer to vendor lookup tool"""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    # Initialize config and store in context
    try:
        config = Config.from_env(env_file)
    except Exception as e:
        click.echo(f"Error initializing configuration: {str(e)}", err=True)
        ctx.exit(1)

    if source:
        config.source = source
    if output_format:
        config.output_format = output_format
    ctx.obj['config'] = config

    setup_logging(debug=debug, level=config.log_level)
    logger = get_logger('cli')
    if debug:
        logger.debug(f"Using source: {config.source}")


@cli.command()
@click.argument('query')
@click.option('--output', type=click.Path(file_okay=True, dir_okay=False, path_type=Path), help='Save the result to file')
@click.pass_context
def lookup(ctx, query: str, output: Path | None):
    """Look up the vendor for a customer name."""
    command = LookupCommand(ctx.obj['config'], query, output)
    command.execute()


@cli.command()
@click.option('--filter', 'filter_text', type=str, default=None, help='Only rows whose customer or vendor contains this text')
@click.option('--output', type=click.Path(file_okay=True, dir_okay=False, path_type=Path), help='Save the table to file')
@click.pass_context
def table(ctx, filter_text: str | None, output: Path | None):
    """Show the customer/vendor table."""
    command = TableCommand(ctx.obj['config'], filter_text, output)
    command.execute()


@cli.command()
@click.option('--interval', type=float, default=None, help='Seconds between refreshes (overrides REFRESH_INTERVAL)')
@click.pass_context
def watch(ctx, interval: float | None):
    """Interactive lookups while the table is refreshed in the background."""
    config = ctx.obj['config']
    if interval is not None:
        config.refresh_interval = interval
    command = WatchCommand(config)
    command.execute()
