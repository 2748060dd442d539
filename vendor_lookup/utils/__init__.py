"""Utility functions and helpers."""

from .normalization import normalize_canonical, normalize_strict
from .table_parser import parse_table

__all__ = [
    'normalize_canonical',
    'normalize_strict',
    'parse_table'
]
