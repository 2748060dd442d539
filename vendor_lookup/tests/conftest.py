"""Shared test fixtures and utilities."""

import asyncio
from pathlib import Path
from typing import List, Optional, Union

import pytest

from ..errors import FetchError
from ..store import SnapshotStore

HEADER_CSV = (
    "customer,vendor\n"
    "Acme Corp,Northwind\n"
    "Globex Inc.,Initech\n"
    "台灣積體電路,供應商甲\n"
)

HEADERLESS_CSV = (
    "Acme Corp,Northwind\n"
    "Globex Inc.,Initech\n"
)


class StubFetcher:
    """Fetcher returning (or raising) queued responses in order.

    The last response is repeated once the queue runs out. When a gate is
    set, fetch() waits on it, which keeps a cycle in flight.
    """

    def __init__(self, *responses: Union[str, Exception]):
        self.responses: List[Union[str, Exception]] = list(responses)
        self.calls = 0
        self.gate: Optional[asyncio.Event] = None

    def __repr__(self) -> str:
        return 'StubFetcher()'

    async def fetch(self) -> str:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def store():
    """Fresh snapshot store holding the empty snapshot."""
    return SnapshotStore()


@pytest.fixture
def fetch_error():
    return FetchError('Not Found', status=404)


@pytest.fixture
def csv_file(tmp_path) -> Path:
    """Write the header sample to a temporary CSV file."""
    path = tmp_path / 'customers.csv'
    path.write_text(HEADER_CSV, encoding='utf-8')
    return path
