"""
Lookup and table commands for the vendor lookup CLI.
Both load the table once and exit.
"""

from pathlib import Path
from typing import Optional

from ..cli.base import SourceCommand, command_error_handler, write_output
from ..cli.config import Config
from ..processors.query_resolver import QueryKind, resolve_query
from ..render import filter_records, render_records, render_result


class LookupCommand(SourceCommand):
    """Resolve one customer name to its vendor(s)."""

    def __init__(self, config: Config, query: str, output: Optional[Path] = None):
        super().__init__(config)
        self.query = query
        self.output = output
        self.result = None

    @command_error_handler
    def execute(self) -> None:
        """Load the table and print the query result."""
        if not self.validate():
            raise ValueError("Invalid configuration")

        snapshot = self.load_snapshot()
        self.result = resolve_query(self.query, snapshot)
        self.logger.debug(f"Query {self.query!r} resolved as {self.result.kind.value}")

        if self.result.kind is QueryKind.NO_QUERY:
            self.logger.info("Empty query, nothing to look up")
            return

        write_output(render_result(self.result, self.config.output_format), self.output)


class TableCommand(SourceCommand):
    """Print the full table, optionally narrowed by the live filter."""

    def __init__(self, config: Config, filter_text: Optional[str] = None, output: Optional[Path] = None):
        super().__init__(config)
        self.filter_text = filter_text
        self.output = output

    @command_error_handler
    def execute(self) -> None:
        """Load the table and render it."""
        if not self.validate():
            raise ValueError("Invalid configuration")

        snapshot = self.load_snapshot()
        records = filter_records(snapshot.records, self.filter_text)
        self.logger.debug(f"Rendering {len(records)} of {len(snapshot)} records")
        write_output(render_records(records, self.config.output_format), self.output)
