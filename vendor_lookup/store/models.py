"""In-memory data models for the customer to vendor lookup table."""
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Record:
    """A single customer to vendor mapping row."""

    customer: str
    vendor: str

    @classmethod
    def from_values(cls, customer: object, vendor: object) -> 'Record':
        """Build a record from raw cell values, trimming both fields."""
        return cls(
            customer=str(customer if customer is not None else '').strip(),
            vendor=str(vendor if vendor is not None else '').strip(),
        )

    def is_blank(self) -> bool:
        return not self.customer and not self.vendor


@dataclass(frozen=True)
class DatasetSnapshot:
    """Immutable unit of published state.

    Holds the retained records together with both lookup indexes and the
    fingerprint of the text they were built from. A snapshot is never
    modified after construction; a refresh replaces it as a whole.
    """

    records: Tuple[Record, ...] = ()
    strict_index: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    canonical_index: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    fingerprint: Optional[str] = None
    loaded_at: Optional[datetime] = None

    @classmethod
    def empty(cls) -> 'DatasetSnapshot':
        """Snapshot used before the first successful load."""
        return cls()

    @classmethod
    def build(
        cls,
        records: Sequence[Record],
        strict_index: Mapping[str, str],
        canonical_index: Mapping[str, str],
        fingerprint: str,
        loaded_at: Optional[datetime] = None
    ) -> 'DatasetSnapshot':
        """Freeze freshly built components into a snapshot.

        The indexes are copied into read-only proxies so later changes to the
        builder's dicts cannot leak into a published snapshot.
        """
        return cls(
            records=tuple(records),
            strict_index=MappingProxyType(dict(strict_index)),
            canonical_index=MappingProxyType(dict(canonical_index)),
            fingerprint=fingerprint,
            loaded_at=loaded_at or datetime.now()
        )

    @property
    def is_loaded(self) -> bool:
        return self.fingerprint is not None

    def __len__(self) -> int:
        return len(self.records)
