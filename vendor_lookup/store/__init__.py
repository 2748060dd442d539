"""In-memory dataset state."""

from .models import DatasetSnapshot, Record
from .session import SnapshotStore

__all__ = ['DatasetSnapshot', 'Record', 'SnapshotStore']
