"""Build the strict and canonical lookup indexes from records."""
import logging
from typing import Dict, Iterable, NamedTuple

from ..store.models import Record
from ..utils.normalization import normalize_canonical, normalize_strict

logger = logging.getLogger(__name__)


class IndexPair(NamedTuple):
    strict: Dict[str, str]
    canonical: Dict[str, str]


def build_indexes(records: Iterable[Record]) -> IndexPair:
    """Index vendors by the strict and canonical keys of each customer name.

    Records are visited in input order. Duplicate strict keys keep the last
    vendor seen, duplicate canonical keys keep the first. Empty keys are
    never indexed.

    Args:
        records: Records in source order

    Returns:
        IndexPair of (strict, canonical) key to vendor mappings
    """
    strict: Dict[str, str] = {}
    canonical: Dict[str, str] = {}

    for record in records:
        strict_key = normalize_strict(record.customer)
        canonical_key = normalize_canonical(record.customer)

        if strict_key:
            strict[strict_key] = record.vendor
        if canonical_key and canonical_key not in canonical:
            canonical[canonical_key] = record.vendor

    logger.debug(f"Built indexes: {len(strict)} strict keys, {len(canonical)} canonical keys")
    return IndexPair(strict=strict, canonical=canonical)
