"""Rendering of the lookup table and of query results.

Supports text, json, csv and html output. HTML output always escapes record
fields and the query so data from the source cannot inject markup.
"""

import html
import json
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from .processors.query_resolver import QueryKind, QueryResult
from .store.models import Record

OUTPUT_FORMATS = ['text', 'json', 'csv', 'html']
COLUMNS = ['customer', 'vendor']


def filter_records(records: Iterable[Record], text: Optional[str]) -> List[Record]:
    """Live filter: keep records whose customer or vendor contains the text.

    Matching is a case-insensitive substring test, independent of the
    exact/fuzzy query resolver. A blank filter keeps every record.
    """
    needle = str(text or '').strip().lower()
    if not needle:
        return list(records)
    return [
        record for record in records
        if needle in record.customer.lower() or needle in record.vendor.lower()
    ]


def records_frame(records: Sequence[Record]) -> pd.DataFrame:
    """Build a DataFrame with one row per record."""
    return pd.DataFrame(
        [(record.customer, record.vendor) for record in records],
        columns=COLUMNS
    )


def render_records(records: Sequence[Record], output_format: str = 'text') -> str:
    """Render records as a table in the requested format."""
    frame = records_frame(records)
    if output_format == 'json':
        return frame.to_json(orient='records', force_ascii=False, indent=2)
    if output_format == 'csv':
        return frame.to_csv(index=False)
    if output_format == 'html':
        return frame.to_html(index=False, escape=True, border=0)
    if output_format == 'text':
        if frame.empty:
            return '(no records)'
        return frame.to_string(index=False)
    raise ValueError(f"output_format must be one of: {', '.join(OUTPUT_FORMATS)}")


def render_result(result: QueryResult, output_format: str = 'text') -> str:
    """Render a query result; NO_QUERY renders as an empty string."""
    if result.kind is QueryKind.NO_QUERY:
        return ''

    if output_format == 'json':
        return json.dumps({
            'query': result.query,
            'kind': result.kind.value,
            'matches': [
                {'customer': m.customer, 'vendor': m.vendor, 'exact': m.exact}
                for m in result.matches
            ]
        }, ensure_ascii=False, indent=2)
    if output_format == 'csv':
        return render_records([Record(m.customer, m.vendor) for m in result.matches], 'csv')
    if output_format == 'html':
        return _result_html(result)
    if output_format == 'text':
        return _result_text(result)
    raise ValueError(f"output_format must be one of: {', '.join(OUTPUT_FORMATS)}")


def _result_text(result: QueryResult) -> str:
    if result.kind is QueryKind.EMPTY:
        return f"No vendor found for '{result.query}'"
    if result.kind is QueryKind.EXACT:
        return f"Exact: {result.query} -> {result.exact.vendor}"
    lines = [f"{len(result)} fuzzy matches:"]
    lines.extend(f"  {m.customer} -> {m.vendor}" for m in result.matches)
    return '\n'.join(lines)


def _result_html(result: QueryResult) -> str:
    query = html.escape(result.query)
    if result.kind is QueryKind.EMPTY:
        return f"No vendor found for <code>{query}</code>"
    if result.kind is QueryKind.EXACT:
        return f"<strong>Exact</strong>: <code>{query}</code> &rarr; <b>{html.escape(result.exact.vendor)}</b>"
    items = ''.join(
        f"<li><code>{html.escape(m.customer)}</code> &rarr; <b>{html.escape(m.vendor)}</b></li>"
        for m in result.matches
    )
    return f"{len(result)} fuzzy matches:<ul>{items}</ul>"
