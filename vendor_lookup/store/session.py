"""Snapshot store management."""
import logging
from typing import Optional

from .models import DatasetSnapshot


class SnapshotStore:
    """Holds the currently published dataset snapshot.

    Readers call get_snapshot() and keep the returned object for the duration
    of an operation. Only the refresh orchestrator calls publish(), which
    swaps the whole snapshot in a single assignment.
    """

    def __init__(self, initial: Optional[DatasetSnapshot] = None):
        """Initialize store with an optional starting snapshot."""
        self._snapshot = initial or DatasetSnapshot.empty()
        self.logger = logging.getLogger(__name__)

    def get_snapshot(self) -> DatasetSnapshot:
        """Get the current snapshot."""
        return self._snapshot

    def publish(self, snapshot: DatasetSnapshot) -> DatasetSnapshot:
        """Replace the current snapshot, returning the previous one."""
        previous = self._snapshot
        self._snapshot = snapshot
        self.logger.debug(
            f"Published snapshot {snapshot.fingerprint} with {len(snapshot)} records "
            f"(replacing {previous.fingerprint})"
        )
        return previous
