"""Customer to vendor lookup package."""

from .processors import QueryKind, RefreshOrchestrator, resolve_query
from .store import DatasetSnapshot, Record, SnapshotStore

__all__ = ['QueryKind', 'RefreshOrchestrator', 'resolve_query', 'DatasetSnapshot', 'Record', 'SnapshotStore']
