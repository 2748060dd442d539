"""
Processors that build, refresh and query the lookup table.
"""

from .change_detector import ChangeResult, detect_change, fingerprint
from .error_tracker import RefreshErrorTracker
from .index_builder import IndexPair, build_indexes
from .query_resolver import Match, QueryKind, QueryResult, resolve_query
from .refresh import (
    RefreshOrchestrator,
    RefreshOutcome,
    RefreshState,
    RefreshStatus,
    RefreshTrigger,
)

__all__ = [
    'ChangeResult', 'detect_change', 'fingerprint',
    'RefreshErrorTracker',
    'IndexPair', 'build_indexes',
    'Match', 'QueryKind', 'QueryResult', 'resolve_query',
    'RefreshOrchestrator', 'RefreshOutcome', 'RefreshState', 'RefreshStatus', 'RefreshTrigger',
]
