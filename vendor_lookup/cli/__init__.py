"""
CLI module for the vendor lookup package.
Provides command-line interface functionality and utilities.

The click entry point lives in ``vendor_lookup.cli.main``.
"""

from .base import BaseCommand, SourceCommand
from .config import Config
from .logging import setup_logging, get_logger

__all__ = ['BaseCommand', 'SourceCommand', 'Config', 'setup_logging', 'get_logger']
