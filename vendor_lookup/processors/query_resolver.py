"""Resolve free-text customer queries against the loaded snapshot."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..store.models import DatasetSnapshot
from ..utils.normalization import normalize_canonical, normalize_strict

logger = logging.getLogger(__name__)


class QueryKind(Enum):
    NO_QUERY = 'no_query'
    EXACT = 'exact'
    FUZZY = 'fuzzy'
    EMPTY = 'empty'


@dataclass(frozen=True)
class Match:
    customer: str
    vendor: str
    exact: bool


@dataclass(frozen=True)
class QueryResult:
    """Classified outcome of a lookup."""

    query: str
    kind: QueryKind
    matches: Tuple[Match, ...] = ()

    @property
    def exact(self) -> Optional[Match]:
        return self.matches[0] if self.kind is QueryKind.EXACT else None

    def __len__(self) -> int:
        return len(self.matches)


def resolve_query(query: Optional[str], snapshot: DatasetSnapshot) -> QueryResult:
    """Find the vendor(s) for a customer name.

    Tries, in order:
    1. Strict key lookup
    2. Canonical key lookup
    3. Substring scan over all records (lowercase or canonical form)

    Args:
        query: Customer name as typed by the user
        snapshot: Snapshot to search; it is only read

    Returns:
        QueryResult; NO_QUERY for blank input, EMPTY when nothing matched
    """
    text = str(query or '').strip()
    if not text:
        return QueryResult(query=text, kind=QueryKind.NO_QUERY)

    strict_key = normalize_strict(text)
    if strict_key in snapshot.strict_index:
        logger.debug(f"Strict match for {text!r}")
        return _exact(text, snapshot.strict_index[strict_key])

    canonical_key = normalize_canonical(text)
    if canonical_key in snapshot.canonical_index:
        logger.debug(f"Canonical match for {text!r}")
        return _exact(text, snapshot.canonical_index[canonical_key])

    lowered = text.lower()
    matches = tuple(
        Match(customer=record.customer, vendor=record.vendor, exact=False)
        for record in snapshot.records
        if lowered in record.customer.lower()
        or canonical_key in normalize_canonical(record.customer)
    )

    if not matches:
        logger.debug(f"No match for {text!r}")
        return QueryResult(query=text, kind=QueryKind.EMPTY)

    logger.debug(f"{len(matches)} fuzzy matches for {text!r}")
    return QueryResult(query=text, kind=QueryKind.FUZZY, matches=matches)


def _exact(text: str, vendor: str) -> QueryResult:
    return QueryResult(
        query=text,
        kind=QueryKind.EXACT,
        matches=(Match(customer=text, vendor=vendor, exact=True),)
    )
