"""
Command implementations for the vendor lookup CLI.
"""

from .lookup import LookupCommand, TableCommand
from .watch import WatchCommand

__all__ = ['LookupCommand', 'TableCommand', 'WatchCommand']
