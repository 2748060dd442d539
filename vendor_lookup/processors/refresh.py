"""Refresh orchestration: fetch, detect changes, rebuild and publish.

A single state machine serves every trigger (startup, polling timer,
activation and manual refreshes). Only one cycle runs at a time; a trigger
that arrives while a cycle is in flight is skipped rather than queued.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence, Set

from ..errors import FetchError, InitialLoadError, ParseError, SourceError
from ..store.models import DatasetSnapshot, Record
from ..store.session import SnapshotStore
from ..utils.table_parser import parse_table
from .change_detector import detect_change
from .error_tracker import RefreshErrorTracker
from .index_builder import build_indexes

DEFAULT_REFRESH_INTERVAL = 30.0


class SourceFetcher(Protocol):
    async def fetch(self) -> str:
        ...


class RefreshState(Enum):
    IDLE = 'idle'
    FETCHING = 'fetching'
    REBUILDING = 'rebuilding'
    UNCHANGED = 'unchanged'
    FAILED = 'failed'


class RefreshStatus(Enum):
    UPDATED = 'updated'
    UNCHANGED = 'unchanged'
    FAILED = 'failed'
    SKIPPED = 'skipped'


class RefreshTrigger(Enum):
    STARTUP = 'startup'
    TIMER = 'timer'
    ACTIVATED = 'activated'
    MANUAL = 'manual'


@dataclass(frozen=True)
class RefreshOutcome:
    status: RefreshStatus
    trigger: RefreshTrigger
    error: Optional[SourceError] = None
    snapshot: Optional[DatasetSnapshot] = None


UpdateListener = Callable[[DatasetSnapshot], None]


class RefreshOrchestrator:
    """Keeps the snapshot store in sync with the source.

    Args:
        fetcher: Object with an async fetch() returning the raw table text
        store: Snapshot store to publish into; nothing else should publish
        interval: Seconds between timer-triggered refreshes
        parser: Callable turning raw text into records
        error_tracker: Tracker receiving failed cycles
    """

    def __init__(
        self,
        fetcher: SourceFetcher,
        store: SnapshotStore,
        interval: float = DEFAULT_REFRESH_INTERVAL,
        parser: Callable[[str], Sequence[Record]] = parse_table,
        error_tracker: Optional[RefreshErrorTracker] = None
    ):
        self.fetcher = fetcher
        self.store = store
        self.interval = interval
        self.parser = parser
        self.error_tracker = error_tracker or RefreshErrorTracker()
        self.logger = logging.getLogger(self.__class__.__name__)

        self.state = RefreshState.IDLE
        self.rebuild_count = 0
        self.last_outcome: Optional[RefreshOutcome] = None

        self._in_flight = False
        self._timer_task: Optional[asyncio.Task] = None
        self._cycle_tasks: Set[asyncio.Task] = set()
        self._listeners: List[UpdateListener] = []

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def polling(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    def add_listener(self, listener: UpdateListener) -> None:
        """Register a callback invoked with each newly published snapshot."""
        self._listeners.append(listener)

    async def refresh(self, trigger: RefreshTrigger = RefreshTrigger.MANUAL) -> RefreshOutcome:
        """Run one refresh cycle unless another one is already in flight."""
        if self._in_flight:
            self.logger.debug(f"Skipping {trigger.value} refresh: a cycle is already in flight")
            return RefreshOutcome(status=RefreshStatus.SKIPPED, trigger=trigger)

        self._in_flight = True
        try:
            outcome = await self._run_cycle(trigger)
        finally:
            self._in_flight = False
            self.state = RefreshState.IDLE

        self.last_outcome = outcome
        return outcome

    async def _run_cycle(self, trigger: RefreshTrigger) -> RefreshOutcome:
        self.state = RefreshState.FETCHING
        self.logger.debug(f"Starting {trigger.value} refresh from {self.fetcher!r}")

        try:
            text = await self.fetcher.fetch()
        except FetchError as e:
            return self._fail(trigger, 'FETCH_ERROR', e)

        # Everything below runs without yielding to the event loop
        current = self.store.get_snapshot()
        change = detect_change(current.fingerprint, text)

        if not change.changed:
            self.state = RefreshState.UNCHANGED
            self.error_tracker.record_success()
            self.logger.debug("Source unchanged, keeping current snapshot")
            return RefreshOutcome(status=RefreshStatus.UNCHANGED, trigger=trigger, snapshot=current)

        self.state = RefreshState.REBUILDING
        try:
            records = self.parser(text)
            indexes = build_indexes(records)
        except Exception as e:
            error = ParseError(f"Could not parse source: {e}")
            error.__cause__ = e
            return self._fail(trigger, 'PARSE_ERROR', error)

        snapshot = DatasetSnapshot.build(
            records,
            strict_index=indexes.strict,
            canonical_index=indexes.canonical,
            fingerprint=change.fingerprint
        )
        self.store.publish(snapshot)
        self.rebuild_count += 1
        self.error_tracker.record_success()
        self.logger.log(
            logging.DEBUG if trigger is RefreshTrigger.STARTUP else logging.INFO,
            f"Loaded {len(snapshot)} records at {snapshot.loaded_at:%Y-%m-%d %H:%M:%S}"
        )

        self._notify(snapshot)
        return RefreshOutcome(status=RefreshStatus.UPDATED, trigger=trigger, snapshot=snapshot)

    def _fail(self, trigger: RefreshTrigger, error_type: str, error: SourceError) -> RefreshOutcome:
        self.state = RefreshState.FAILED
        self.error_tracker.add_error(
            error_type,
            str(error),
            {'trigger': trigger.value, 'status': error.status}
        )
        self.logger.warning(f"Refresh failed: {error}")
        return RefreshOutcome(status=RefreshStatus.FAILED, trigger=trigger, error=error)

    def _notify(self, snapshot: DatasetSnapshot) -> None:
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception:
                self.logger.exception("Update listener failed")

    async def load(self) -> RefreshOutcome:
        """Load the table for the first time without starting the timer.

        Raises:
            InitialLoadError: If the load fails; the store keeps its empty snapshot.
        """
        outcome = await self.refresh(RefreshTrigger.STARTUP)
        if outcome.status is RefreshStatus.FAILED:
            raise InitialLoadError(outcome.error.reason, status=outcome.error.status) from outcome.error
        return outcome

    async def start(self) -> RefreshOutcome:
        """Load the table for the first time, then start polling.

        Raises:
            InitialLoadError: If the first load fails; polling is not started.
        """
        outcome = await self.load()
        self.start_polling()
        return outcome

    async def set_active(self, active: bool) -> Optional[RefreshOutcome]:
        """Pause polling while inactive; refresh once and resume when active again."""
        if not active:
            self.logger.debug("View inactive, pausing refresh timer")
            self.stop_polling()
            return None

        self.logger.debug("View active, refreshing and resuming timer")
        outcome = await self.refresh(RefreshTrigger.ACTIVATED)
        self.start_polling()
        return outcome

    def start_polling(self) -> None:
        self.stop_polling()
        self._timer_task = asyncio.create_task(self._poll())

    def stop_polling(self) -> None:
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None

    async def stop(self) -> None:
        """Stop polling and cancel any timer-launched cycles."""
        self.stop_polling()
        tasks = list(self._cycle_tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            if self._in_flight:
                self.logger.debug("Timer tick skipped: a cycle is already in flight")
                continue
            task = asyncio.create_task(self._timed_refresh())
            self._cycle_tasks.add(task)
            task.add_done_callback(self._cycle_tasks.discard)

    async def _timed_refresh(self) -> None:
        try:
            await self.refresh(RefreshTrigger.TIMER)
        except Exception:
            # A broken cycle must not stop the timer
            self.logger.exception("Unexpected error during timer refresh")
