"""Customer/vendor table parsing utilities.

Turns raw CSV text into an ordered list of Records. Two layouts are
supported:

- A header row naming the columns with one of the recognized aliases.
- No header: customer in the first column, vendor in the second.
"""

import csv
import io
import logging
from enum import Enum
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from ..store.models import Record

logger = logging.getLogger(__name__)


class Column(Enum):
    """Semantic columns of the lookup table."""
    CUSTOMER = 'customer'
    VENDOR = 'vendor'


# Header names recognized in header mode, in priority order (case-sensitive)
HEADER_ALIASES: Dict[Column, Tuple[str, ...]] = {
    Column.CUSTOMER: ('customer', '客戶', '客戶名稱', '名稱'),
    Column.VENDOR: ('vendor', '廠商', '廠商名稱', '供應商'),
}

# First-row values that mark a header in a headerless file (compared lowercased)
HEADERLESS_ALIASES: Dict[Column, Tuple[str, ...]] = {
    Column.CUSTOMER: ('customer', '客戶', '客戶名稱'),
    Column.VENDOR: HEADER_ALIASES[Column.VENDOR],
}


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    Normalizes by:
    - Replacing multiple spaces with single space
    - Stripping leading/trailing whitespace
    - Preserving special characters and case

    Examples:
        >>> normalize_column_name(" customer ")
        'customer'
        >>> normalize_column_name("廠商  名稱")
        '廠商 名稱'
    """
    return ' '.join(name.split())


def parse_table(text: str) -> List[Record]:
    """Parse raw CSV text into records.

    Rows whose customer and vendor are both empty after trimming are dropped.
    Rows with an unexpected number of cells are tolerated: missing cells are
    treated as empty and extra cells are ignored. Rows the CSV reader rejects
    (for example a field over the reader's size limit) are skipped.

    Args:
        text: Raw CSV text

    Returns:
        Records in input order
    """
    rows, unreadable = _read_rows(text)
    if unreadable:
        logger.debug(f"Skipped {unreadable} rows the CSV reader could not tokenize")
    if not rows:
        logger.debug("No rows found in table")
        return []

    frame = pd.DataFrame(rows).fillna('')
    header = [normalize_column_name(cell) for cell in rows[0]]

    if _has_known_header(header):
        customers, vendors = _parse_with_header(frame, header)
        anomalies = sum(1 for row in rows[1:] if len(row) != len(header))
    else:
        customers, vendors = _parse_positional(frame)
        anomalies = sum(1 for row in rows if len(row) != 2)

    records = [Record.from_values(customer, vendor) for customer, vendor in zip(customers, vendors)]
    kept = [record for record in records if not record.is_blank()]

    if anomalies:
        logger.debug(f"Tolerated {anomalies} rows with an unexpected number of cells")
    if len(kept) != len(records):
        logger.debug(f"Dropped {len(records) - len(kept)} blank rows")
    logger.debug(f"Parsed {len(kept)} records from {len(rows)} rows")
    return kept


def _read_rows(text: str) -> Tuple[List[List[str]], int]:
    """Tokenize CSV text, skipping empty rows and rows the reader rejects.

    The reader consumes the offending line before raising, so iteration
    resumes on the next line.
    """
    reader = csv.reader(io.StringIO(text, newline=''))
    rows = []
    unreadable = 0
    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            logger.debug(f"Unreadable row near line {reader.line_num}: {e}")
            unreadable += 1
            continue
        if row:
            rows.append(row)
    return rows, unreadable


def _has_known_header(header: Sequence[str]) -> bool:
    return any(
        alias in header
        for aliases in HEADER_ALIASES.values()
        for alias in aliases
    )


def _parse_with_header(frame: pd.DataFrame, header: List[str]) -> Tuple[List[str], List[str]]:
    """Pick customer/vendor values by header alias."""
    body = frame.iloc[1:]
    logger.debug(f"Parsing table with header: {header}")
    return (
        _pick_first_filled(body, _alias_positions(header, HEADER_ALIASES[Column.CUSTOMER])),
        _pick_first_filled(body, _alias_positions(header, HEADER_ALIASES[Column.VENDOR])),
    )


def _parse_positional(frame: pd.DataFrame) -> Tuple[List[str], List[str]]:
    """Take customer from column 0 and vendor from column 1."""
    customers = [str(value).strip() for value in frame[0]]
    if 1 in frame.columns:
        vendors = [str(value).strip() for value in frame[1]]
    else:
        vendors = [''] * len(customers)

    if customers and _looks_like_header(customers[0], vendors[0]):
        logger.debug("Dropping header row found in headerless table")
        customers, vendors = customers[1:], vendors[1:]
    return customers, vendors


def _looks_like_header(customer: str, vendor: str) -> bool:
    return (
        customer.lower() in HEADERLESS_ALIASES[Column.CUSTOMER]
        and vendor.lower() in HEADERLESS_ALIASES[Column.VENDOR]
    )


def _alias_positions(header: List[str], aliases: Sequence[str]) -> List[int]:
    """Column positions for the aliases present in the header, in alias order."""
    return [header.index(alias) for alias in aliases if alias in header]


def _pick_first_filled(body: pd.DataFrame, positions: List[int]) -> List[str]:
    """For each row, the value of the first listed column that is not empty."""
    picked = pd.Series('', index=body.index, dtype=object)
    for position in reversed(positions):
        values = body[position].astype(str)
        picked = values.where(values != '', picked)
    return picked.tolist()
