"""
Interactive lookup session backed by a polling refresh orchestrator.
"""

import asyncio
from typing import Optional

import click

from ..cli.base import SourceCommand, command_error_handler
from ..cli.config import Config
from ..processors.query_resolver import QueryKind, resolve_query
from ..processors.refresh import RefreshOrchestrator, RefreshOutcome, RefreshTrigger
from ..render import filter_records, render_records, render_result
from ..store.models import DatasetSnapshot

HELP_TEXT = """Type a customer name to look up its vendor.
  :filter TEXT   show rows whose customer or vendor contains TEXT
  :refresh       check the source for changes now
  :pause         stop polling (as when the view is hidden)
  :resume        refresh now and resume polling
  :status        show load and error status
  :quit          exit"""


class WatchCommand(SourceCommand):
    """Keep the table fresh while answering queries typed on stdin."""

    def __init__(self, config: Config):
        super().__init__(config)
        self.current_query = ''

    @command_error_handler
    def execute(self) -> None:
        """Run the interactive session until :quit or end of input."""
        if not self.validate():
            raise ValueError("Invalid configuration")
        asyncio.run(self.run())

    async def run(self) -> None:
        orchestrator = self.create_orchestrator()
        orchestrator.add_listener(self.on_update)
        await orchestrator.start()
        click.echo(HELP_TEXT)

        try:
            while True:
                line = await asyncio.to_thread(self._read_line)
                if line is None or not await self.handle_line(orchestrator, line):
                    break
        finally:
            await orchestrator.stop()
            self.error_tracker.log_summary(self.logger)

    @staticmethod
    def _read_line() -> Optional[str]:
        try:
            return input('query> ')
        except EOFError:
            return None

    async def handle_line(self, orchestrator: RefreshOrchestrator, line: str) -> bool:
        """Handle one line of input. Returns False when the session should end."""
        command, _, argument = line.strip().partition(' ')

        if command in (':quit', ':q'):
            return False
        if command == ':pause':
            await orchestrator.set_active(False)
            click.echo("Polling paused")
        elif command == ':resume':
            self._echo_outcome(await orchestrator.set_active(True))
        elif command == ':refresh':
            self._echo_outcome(await orchestrator.refresh(RefreshTrigger.MANUAL))
        elif command == ':filter':
            records = filter_records(self.store.get_snapshot().records, argument)
            click.echo(render_records(records, self.config.output_format))
        elif command == ':status':
            self._echo_status(orchestrator)
        elif command == ':help':
            click.echo(HELP_TEXT)
        else:
            self.current_query = line
            self.show_result()
        return True

    def on_update(self, snapshot: DatasetSnapshot) -> None:
        """Called after each publish; keeps the displayed result current."""
        click.echo(f"Data updated: {len(snapshot)} records (last update {snapshot.loaded_at:%Y-%m-%d %H:%M:%S})")
        if self.current_query.strip():
            self.show_result()

    def show_result(self) -> None:
        result = resolve_query(self.current_query, self.store.get_snapshot())
        if result.kind is not QueryKind.NO_QUERY:
            click.echo(render_result(result, self.config.output_format))

    def _echo_outcome(self, outcome: RefreshOutcome) -> None:
        if outcome.error:
            click.secho(f"Refresh failed: {outcome.error}", fg='yellow', err=True)
        else:
            click.echo(f"Refresh {outcome.status.value}")

    def _echo_status(self, orchestrator: RefreshOrchestrator) -> None:
        snapshot = self.store.get_snapshot()
        loaded_at = f"{snapshot.loaded_at:%Y-%m-%d %H:%M:%S}" if snapshot.is_loaded else 'never'
        click.echo(f"Records: {len(snapshot)}")
        click.echo(f"Last update: {loaded_at}")
        click.echo(f"Polling: {'on' if orchestrator.polling else 'paused'} every {orchestrator.interval}s")
        click.echo(f"Rebuilds: {orchestrator.rebuild_count}")
        outcome = orchestrator.last_outcome
        if outcome is not None:
            click.echo(f"Last refresh: {outcome.status.value} ({outcome.trigger.value})")
        click.echo(f"Failed refreshes: {self.error_tracker.total_errors}")
        summary = self.error_tracker.get_summary()
        if summary['last_error']:
            click.echo(f"Last error: {summary['last_error']} ({summary['consecutive_failures']} in a row)")
