"""
Base command infrastructure for the vendor lookup CLI.
Provides common functionality and utilities for all commands.
"""

import asyncio
import click
import functools
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .config import Config

from ..errors import InitialLoadError
from ..processors.error_tracker import RefreshErrorTracker
from ..processors.refresh import RefreshOrchestrator
from ..sources import create_fetcher, is_url
from ..store import DatasetSnapshot, SnapshotStore


class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, config: Config):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self.error_tracker = RefreshErrorTracker()

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.debug = bool(ctx and ctx.obj and ctx.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @abstractmethod
    def execute(self) -> None:
        """Execute the command. Must be implemented by subclasses."""
        pass

    def validate(self) -> bool:
        """Validate command configuration and requirements.

        Returns:
            bool: True if validation passes, False otherwise
        """
        if self.debug:
            self.logger.debug("Validating command configuration")
        try:
            return self.config.validate()
        except ValueError as e:
            self.logger.error(f"Invalid configuration: {e}")
            return False


class SourceCommand(BaseCommand):
    """Base class for commands that read the customer/vendor table."""

    def __init__(self, config: Config):
        super().__init__(config)
        self.store = SnapshotStore()

    def validate(self) -> bool:
        """Validate the source is reachable in principle (file exists or URL)."""
        if not super().validate():
            return False

        if is_url(self.config.source):
            return True

        path = Path(self.config.source)
        if path.exists() and not path.is_file():
            self.logger.error(f"Source path is not a file: {path}")
            return False

        # A missing file is reported by the first load
        return True

    def create_orchestrator(self) -> RefreshOrchestrator:
        """Wire a fetcher and this command's store into an orchestrator."""
        fetcher = create_fetcher(self.config.source, timeout=self.config.fetch_timeout)
        if self.debug:
            self.logger.debug(f"Using {fetcher!r} every {self.config.refresh_interval}s")
        return RefreshOrchestrator(
            fetcher,
            self.store,
            interval=self.config.refresh_interval,
            error_tracker=self.error_tracker
        )

    def load_snapshot(self) -> DatasetSnapshot:
        """Load the table once, without polling.

        Raises:
            InitialLoadError: If the source cannot be read
        """
        orchestrator = self.create_orchestrator()
        asyncio.run(orchestrator.load())
        return self.store.get_snapshot()


def command_error_handler(f):
    """Decorator to handle command execution errors consistently."""
    @functools.wraps(f)
    def wrapper(self, *args, **kwargs):
        try:
            if self.debug:
                self.logger.debug(f"Starting command execution: {f.__name__}")
                start = time.time()

            result = f(self, *args, **kwargs)

            if self.debug:
                self.logger.debug(f"Command completed in {time.time() - start:.3f}s")

            return result

        except InitialLoadError as e:
            self.error_tracker.add_error('INITIAL_LOAD_ERROR', str(e), {'source': self.config.source})
            click.secho(f"Initial load failed: {e}", fg='red', err=True)
            raise click.Abort()
        except (click.Abort, click.exceptions.Exit):
            raise
        except Exception as e:
            self.error_tracker.add_error(
                'COMMAND_EXECUTION_ERROR',
                f"Command failed: {str(e)}",
                {
                    'command': f.__name__,
                    'error': str(e)
                }
            )
            if self.debug:
                self.logger.debug(f"Command failed with error: {str(e)}", exc_info=True)
            click.secho(f"Error: {str(e)}", fg='red', err=True)
            raise click.Abort()
    return wrapper


def write_output(text: str, output: Optional[Path]) -> None:
    """Echo text, or save it to a file when an output path is given."""
    if output:
        output.write_text(text if text.endswith('\n') else text + '\n', encoding='utf-8')
        click.echo(f"Saved to {output}")
    else:
        click.echo(text)
