"""Readers for the raw lookup table."""

from .fetcher import FileSourceFetcher, HttpSourceFetcher, create_fetcher, is_url

__all__ = ['FileSourceFetcher', 'HttpSourceFetcher', 'create_fetcher', 'is_url']
